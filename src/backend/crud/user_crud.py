"""CRUD operations for user accounts."""
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from crud import base_crud
from db.enums import UserRole
from db.models import User


async def find_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
    """Find a user by ID."""
    return await base_crud.find_by_id(db, User, user_id)


async def find_by_username(db: AsyncSession, username: str) -> Optional[User]:
    """
    Find a user by username.

    The comparison is exact; "Budi" and "budi" are different accounts.
    """
    return await base_crud.find_one(db, User, filters={"username": username})


async def find_by_national_id(db: AsyncSession, national_id: str) -> Optional[User]:
    """Find a user by NIK."""
    return await base_crud.find_one(db, User, filters={"national_id": national_id})


async def list_users(db: AsyncSession, role: Optional[UserRole] = None) -> List[User]:
    """List users ordered by ID, optionally narrowed to one role."""
    return await base_crud.find_all(db, User, filters={"role": role})
