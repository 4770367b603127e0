"""
Authentication and authorization dependencies for FastAPI.

This module provides FastAPI dependency functions for authentication
and role checks. Ownership checks go through core.policy.enforce
inside the route handlers.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_session
from core.security import (
    SecurityError,
    TokenExpiredError,
    TokenInvalidError,
    decode_token,
    get_user_id_from_token,
)
from crud import user_crud
from db import User, UserRole

# HTTP Bearer security scheme
security = HTTPBearer(auto_error=False)


class AuthenticationError(HTTPException):
    """Custom authentication error."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(HTTPException):
    """Custom authorization error."""

    def __init__(self, detail: str = "Insufficient permissions"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_session),
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer credentials containing the JWT token
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        AuthenticationError: If token is missing, invalid or user not found
    """
    if credentials is None:
        raise AuthenticationError()

    try:
        payload = decode_token(credentials.credentials)
        user_id = get_user_id_from_token(payload)
    except (TokenExpiredError, TokenInvalidError, SecurityError) as e:
        raise AuthenticationError(str(e))

    user = await user_crud.find_by_id(db, user_id)
    if not user:
        raise AuthenticationError("User not found")

    return user


async def require_admin(
    user: User = Depends(get_current_user),
) -> User:
    """Require the admin_kelurahan role.

    Raises:
        AuthorizationError: If user is not an admin
    """
    if user.role != UserRole.ADMIN_KELURAHAN:
        raise AuthorizationError("Admin role required")
    return user


async def require_warga(
    user: User = Depends(get_current_user),
) -> User:
    """Require the warga (citizen) role.

    Raises:
        AuthorizationError: If user is not a citizen
    """
    if user.role != UserRole.WARGA:
        raise AuthorizationError("Citizen role required")
    return user

