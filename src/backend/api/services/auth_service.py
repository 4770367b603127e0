"""
Authentication service for username/password login.

This service handles password hashing, credential verification and
access token issuance.
"""

import logging
from typing import Optional

import bcrypt
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.login import LoginRequest, LoginResponse
from api.schemas.user import UserRead
from core.config import settings
from core.metrics import track_auth_attempt
from core.security import create_access_token
from crud import user_crud
from db import User

logger = logging.getLogger(__name__)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash using bcrypt.

    bcrypt.checkpw compares in constant time.

    Args:
        plain_password: Plain text password to verify
        hashed_password: Bcrypt hash to compare against

    Returns:
        True if password matches, False otherwise
    """
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        # Malformed stored hash
        return False


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        Bcrypt hash string
    """
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


# Checked against when the username is unknown so both failure paths
# spend the same bcrypt work.
_DUMMY_HASH = hash_password("iuran-sampah-dummy-password")


class AuthenticationService:
    """Service for handling authentication operations."""

    def __init__(self, session: AsyncSession):
        self.db = session

    async def authenticate(self, username: str, password: str) -> Optional[User]:
        """
        Return the user whose username and password both match, else None.

        Unknown usernames and wrong passwords are indistinguishable to the
        caller. Empty credentials never match. The username match is
        case-sensitive.
        """
        if not username or not password:
            return None

        user = await user_crud.find_by_username(self.db, username)
        if user is None:
            verify_password(password, _DUMMY_HASH)
            logger.info(f"Login failed: unknown username '{username}'")
            return None

        if not verify_password(password, user.password_hash):
            logger.info(f"Login failed: wrong password for user {user.id}")
            return None

        return user

    async def login(self, login_data: LoginRequest) -> Optional[LoginResponse]:
        """
        Authenticate and issue an access token.

        Returns:
            LoginResponse, or None when the credentials do not match
        """
        user = await self.authenticate(login_data.username, login_data.password)
        track_auth_attempt(success=user is not None)
        if user is None:
            return None

        access_token = create_access_token(user)
        logger.info(f"User {user.username} logged in ({user.role.value})")

        return LoginResponse(
            access_token=access_token,
            token_type="bearer",
            expires_in=settings.security.access_token_expire_minutes * 60,
            user=UserRead.model_validate(user),
        )
