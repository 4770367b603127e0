"""CRUD operations for payments."""
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from crud import base_crud
from db.models import Payment, User


async def find_by_id(db: AsyncSession, payment_id: int) -> Optional[Payment]:
    """Find a payment by ID."""
    return await base_crud.find_by_id(db, Payment, payment_id)


async def list_for_user(
    db: AsyncSession,
    user_id: int,
    *,
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> List[Payment]:
    """
    List a citizen's payments, optionally narrowed to a period year and month.

    Args:
        db: Database session
        user_id: Citizen ID
        year: Period year filter
        month: Period month filter

    Returns:
        Payments ordered by ID
    """
    return await base_crud.find_all(
        db,
        Payment,
        filters={
            "citizen_id": user_id,
            "period_year": year,
            "period_month": month,
        },
    )


async def list_all(db: AsyncSession) -> List[Payment]:
    """List every payment ordered by ID."""
    return await base_crud.find_all(db, Payment)


async def list_details(db: AsyncSession) -> List[Dict[str, Any]]:
    """
    List every payment joined with its citizen and recording admin.

    Returns plain dicts shaped for PaymentDetail.
    """
    citizen = aliased(User, name="citizen")
    admin = aliased(User, name="admin")

    stmt = (
        select(
            Payment,
            citizen.full_name,
            citizen.national_id,
            citizen.neighborhood_unit_code,
            admin.full_name,
        )
        .join(citizen, Payment.citizen_id == citizen.id)
        .join(admin, Payment.recorded_by_admin_id == admin.id)
        .order_by(Payment.id)
    )
    result = await db.execute(stmt)

    details = []
    for payment, full_name, national_id, unit_code, admin_name in result.all():
        row = payment.model_dump()
        row.update(
            citizen_full_name=full_name,
            citizen_national_id=national_id,
            citizen_neighborhood_unit_code=unit_code,
            recorded_by_admin_name=admin_name,
        )
        details.append(row)
    return details
