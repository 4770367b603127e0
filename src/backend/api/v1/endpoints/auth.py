"""
Authentication endpoints for username/password login.
"""

from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.login import LoginRequest, LoginResponse
from api.schemas.user import UserRead
from api.services.auth_service import AuthenticationService
from core.config import settings
from core.database import get_session
from core.dependencies import AuthenticationError, get_current_user
from db import User

router = APIRouter()

# Rate limiter for login attempts
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit.enabled)


@router.post("/login", response_model=LoginResponse)
@limiter.limit(settings.rate_limit.login_limit)
async def login(
    request: Request,  # Must be present for rate limiter
    login_data: LoginRequest,
    db: AsyncSession = Depends(get_session),
) -> LoginResponse:
    """Username/password login endpoint.

    Unknown usernames and wrong passwords get the same response.

    Returns:
        LoginResponse with the access token and user info

    Raises:
        AuthenticationError 401: If the credentials do not match
    """
    service = AuthenticationService(db)
    result = await service.login(login_data)
    if result is None:
        raise AuthenticationError("Invalid username or password")
    return result


@router.get("/me", response_model=UserRead)
async def get_me(current_user: User = Depends(get_current_user)):
    """Return the authenticated user."""
    return current_user
