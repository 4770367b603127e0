"""
Dispute endpoints.

Citizens file disputes against their own payments; admins approve or
reject them.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.dispute import (
    DisputeCreate,
    DisputeDetail,
    DisputeFileRequest,
    DisputeRead,
    DisputeResolve,
    DisputeResolveRequest,
)
from api.services.dispute_service import DisputeService
from core.database import get_session
from core.dependencies import get_current_user, require_admin, require_warga
from core.policy import Action, enforce
from db import DisputeStatus, User

router = APIRouter()


@router.post("", response_model=DisputeRead, status_code=status.HTTP_201_CREATED)
async def file_dispute(
    dispute_data: DisputeFileRequest,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_warga),
):
    """
    File a dispute against one of the caller's payments.

    Raises:
        404: Payment not found
        403: Payment belongs to another citizen

    **Permissions:** Citizen only
    """
    service = DisputeService(db)
    return await service.create_dispute(
        DisputeCreate(**dispute_data.model_dump(), citizen_id=current_user.id)
    )


@router.get("", response_model=List[DisputeRead])
async def list_disputes(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_admin),
):
    """
    List every dispute.

    **Permissions:** Admin only
    """
    service = DisputeService(db)
    return await service.list_all_disputes()


@router.get("/details", response_model=List[DisputeDetail])
async def list_dispute_details(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_admin),
):
    """
    List every dispute with citizen, payment and resolver fields.

    **Permissions:** Admin only
    """
    service = DisputeService(db)
    return await service.list_dispute_details()


@router.get("/user/{user_id}", response_model=List[DisputeRead])
async def list_user_disputes(
    user_id: int,
    dispute_status: Optional[DisputeStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """
    List disputes filed by a citizen, optionally with one status.

    **Permissions:** Admin, or the citizen themselves
    """
    enforce(current_user, Action.VIEW_USER_DISPUTES, user_id)
    service = DisputeService(db)
    return await service.list_disputes_for_user(user_id, status=dispute_status)


@router.put("/{dispute_id}/resolve", response_model=DisputeRead)
async def resolve_dispute(
    dispute_id: int,
    resolve_data: DisputeResolveRequest,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """
    Approve or reject a dispute. Re-resolving overwrites the prior decision.

    Raises:
        403: Caller is not an admin
        404: Dispute not found

    **Permissions:** Admin only
    """
    service = DisputeService(db)
    return await service.resolve_dispute(
        dispute_id,
        DisputeResolve(**resolve_data.model_dump(), resolved_by_admin_id=current_user.id),
    )
