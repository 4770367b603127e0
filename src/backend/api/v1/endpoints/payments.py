"""
Payment ledger endpoints.

**Key Features:**
- Admins record payments on behalf of citizens (the caller is the recording admin)
- Partial corrections; receiptPhotoUrl may be cleared with null
- Per-citizen history filtered by period
- Joined admin view with citizen and admin names
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.payment import (
    PaymentCreate,
    PaymentDetail,
    PaymentRead,
    PaymentRecordRequest,
    PaymentUpdate,
)
from api.services.payment_service import PaymentService
from core.database import get_session
from core.dependencies import get_current_user, require_admin
from core.policy import Action, enforce
from db import User

router = APIRouter()


@router.post("", response_model=PaymentRead, status_code=status.HTTP_201_CREATED)
async def record_payment(
    payment_data: PaymentRecordRequest,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """
    Record a payment for a citizen.

    Raises:
        404: Citizen not found
        403: Caller is not an admin

    **Permissions:** Admin only
    """
    service = PaymentService(db)
    return await service.create_payment(
        PaymentCreate(**payment_data.model_dump(), admin_id=current_user.id)
    )


@router.get("", response_model=List[PaymentRead])
async def list_payments(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_admin),
):
    """
    List every payment.

    **Permissions:** Admin only
    """
    service = PaymentService(db)
    return await service.list_all_payments()


@router.get("/details", response_model=List[PaymentDetail])
async def list_payment_details(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(require_admin),
):
    """
    List every payment with citizen name, NIK, RT and recording admin name.

    **Permissions:** Admin only
    """
    service = PaymentService(db)
    return await service.list_payment_details()


@router.get("/user/{user_id}", response_model=List[PaymentRead])
async def list_user_payments(
    user_id: int,
    year: Optional[int] = Query(None, ge=2000),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """
    List a citizen's payments, optionally for one period.

    **Permissions:** Admin, or the citizen themselves
    """
    enforce(current_user, Action.VIEW_USER_PAYMENTS, user_id)
    service = PaymentService(db)
    return await service.list_payments_for_user(user_id, year=year, month=month)


@router.put("/{payment_id}", response_model=PaymentRead)
async def update_payment(
    payment_id: int,
    update_data: PaymentUpdate,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """
    Correct a payment. Omitted fields are left unchanged.

    Raises:
        404: Payment not found
        403: Caller is not an admin

    **Permissions:** Admin only
    """
    enforce(current_user, Action.UPDATE_PAYMENT)
    service = PaymentService(db)
    return await service.update_payment(payment_id, update_data)
