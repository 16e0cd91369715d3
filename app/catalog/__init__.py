# app/catalog/__init__.py
"""
Gateway model catalog: ORM table, service functions and the sync store adapter.
"""
