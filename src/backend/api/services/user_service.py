"""
User service for citizen and admin account management.
"""
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.user import UserCreate, UserUpdate
from api.services.auth_service import hash_password
from core.decorators import handle_database_exceptions
from core.exceptions import NotFoundError
from crud import user_crud
from db import User, UserRole, utc_now

logger = logging.getLogger(__name__)

DUPLICATE_USER_DETAIL = "User with this username or NIK already exists"


class UserService:
    """Service for managing user accounts."""

    def __init__(self, session: AsyncSession):
        """
        Initialize service with database session.

        Args:
            session: Database session
        """
        self.db = session

    async def get_user(self, user_id: int) -> User:
        """
        Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await user_crud.find_by_id(self.db, user_id)
        if user is None:
            raise NotFoundError("user")
        return user

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return await user_crud.find_by_username(self.db, username)

    async def list_users(self, role: Optional[UserRole] = None) -> List[User]:
        return await user_crud.list_users(self.db, role)

    @handle_database_exceptions(conflict_detail=DUPLICATE_USER_DETAIL)
    async def create_user(self, user_data: UserCreate) -> User:
        """
        Register a new account.

        The password is hashed before storage. Username and NIK uniqueness
        is left to the database constraints.

        Args:
            user_data: Registration data

        Returns:
            Created user

        Raises:
            ConflictError: If the username or NIK is already taken
        """
        data = user_data.model_dump(exclude={"password"})
        user = User(**data, password_hash=hash_password(user_data.password))

        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"Created user: {user.username} ({user.role.value}, RT {user.neighborhood_unit_code})")
        return user

    @handle_database_exceptions(conflict_detail=DUPLICATE_USER_DETAIL)
    async def update_user(self, user_id: int, update_data: UserUpdate) -> User:
        """
        Update citizen profile fields.

        Only fields present in the request are written. updated_at is
        always refreshed.

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the new NIK belongs to another user
        """
        user = await self.get_user(user_id)

        for field, value in update_data.model_dump(exclude_unset=True).items():
            setattr(user, field, value)
        user.updated_at = utc_now()

        await self.db.commit()
        await self.db.refresh(user)

        logger.info(f"Updated user: {user.username}")
        return user
