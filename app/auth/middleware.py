# app/auth/middleware.py
"""
FastAPI authentication dependency for the shared-secret sync key.
"""

import secrets
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader

from app.capabilities.config import SYNC_API_KEY_ENV, SYNC_API_KEY_HEADER, get_sync_api_key

api_key_header = APIKeyHeader(name=SYNC_API_KEY_HEADER, auto_error=False)


@dataclass
class AuthResult:
    """Result of authentication check."""
    authenticated: bool
    error: Optional[str] = None


def check_sync_key(provided: Optional[str], expected: Optional[str]) -> AuthResult:
    """Constant-time comparison of the presented key against the configured one."""
    if not provided:
        return AuthResult(authenticated=False, error="Missing API key")
    if not expected or not secrets.compare_digest(provided.encode(), expected.encode()):
        return AuthResult(authenticated=False, error="Invalid API key")
    return AuthResult(authenticated=True)


async def require_sync_key(api_key: Optional[str] = Depends(api_key_header)) -> AuthResult:
    """
    Dependency that requires the shared sync key in the x-api-key header.

    Raises:
        HTTPException 503: If the key is not configured server-side
        HTTPException 401: If the key is missing or does not match
    """
    expected = get_sync_api_key()
    if not expected:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{SYNC_API_KEY_ENV} not configured",
            headers={"X-Auth-Status": "not_configured"},
        )

    result = check_sync_key(api_key, expected)
    if not result.authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result.error,
        )
    return result
