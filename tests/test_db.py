# FILE: tests/test_db.py
"""
Tests for app/db.py
Database core functionality - session dependency and table registration.
"""

from unittest.mock import Mock, patch

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import sessionmaker


class TestDatabaseTables:
    """Test that the catalog table is registered and creatable."""

    def test_catalog_table_registered(self):
        from app.db import Base
        from app.catalog import models  # noqa: F401

        assert "models" in Base.metadata.tables

    def test_capability_columns_nullable(self):
        from app.db import Base
        from app.catalog import models  # noqa: F401

        table = Base.metadata.tables["models"]
        assert table.c.pricing_image_gen.nullable
        assert table.c.pricing_web_search.nullable

    def test_init_db_creates_tables(self):
        import app.db as db_module

        engine = create_engine("sqlite:///:memory:", echo=False)
        with patch.object(db_module, "engine", engine):
            db_module.init_db()

        assert "models" in inspect(engine).get_table_names()


class TestGetDb:
    """Test the FastAPI session dependency."""

    def test_yields_working_session(self):
        import app.db as db_module

        engine = create_engine("sqlite:///:memory:", echo=False)
        with patch.object(db_module, "SessionLocal", sessionmaker(bind=engine)):
            gen = db_module.get_db()
            session = next(gen)
            assert session.execute(text("SELECT 1")).scalar() == 1
            gen.close()

    def test_session_closed_after_request(self):
        import app.db as db_module

        session = Mock()
        with patch.object(db_module, "SessionLocal", Mock(return_value=session)):
            gen = db_module.get_db()
            assert next(gen) is session
            gen.close()

        session.close.assert_called_once()
