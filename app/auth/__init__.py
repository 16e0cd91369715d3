# app/auth/__init__.py
"""
Authentication module.
Sync endpoints are protected by a shared secret presented in x-api-key.
"""

from .middleware import require_sync_key, check_sync_key, AuthResult

__all__ = [
    "require_sync_key",
    "check_sync_key",
    "AuthResult",
]
