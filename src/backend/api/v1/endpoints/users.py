"""
User management endpoints.

Admins register and correct citizen records; citizens may read their own.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.user import UserCreate, UserListItem, UserRead, UserUpdate
from api.services.user_service import UserService
from core.database import get_session
from core.dependencies import get_current_user, require_admin
from core.policy import Action, enforce
from db import User, UserRole

router = APIRouter()


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_admin),
):
    """
    Register a citizen or admin account.

    Raises:
        409: Username or NIK already taken

    **Permissions:** Admin only
    """
    service = UserService(db)
    return await service.create_user(user_data)


@router.get("", response_model=List[UserListItem])
async def list_users(
    role: Optional[UserRole] = Query(None, description="Filter by role"),
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_admin),
):
    """
    List users ordered by ID.

    **Permissions:** Admin only
    """
    service = UserService(db)
    return await service.list_users(role=role)


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """
    Get a user by ID.

    **Permissions:** Admin, or the user themselves
    """
    enforce(current_user, Action.VIEW_USER, user_id)
    service = UserService(db)
    return await service.get_user(user_id)


@router.put("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    update_data: UserUpdate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """
    Update a citizen record. Omitted fields are left unchanged.

    Raises:
        404: User not found
        409: New NIK already belongs to another user

    **Permissions:** Admin only
    """
    enforce(current_user, Action.MANAGE_USERS)
    service = UserService(db)
    return await service.update_user(user_id, update_data)
