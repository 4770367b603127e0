"""CRUD operations for payment disputes."""
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from crud import base_crud
from db.enums import DisputeStatus
from db.models import Dispute, Payment, User


async def find_by_id(db: AsyncSession, dispute_id: int) -> Optional[Dispute]:
    """Find a dispute by ID."""
    return await base_crud.find_by_id(db, Dispute, dispute_id)


async def list_for_user(
    db: AsyncSession,
    user_id: int,
    *,
    status: Optional[DisputeStatus] = None,
) -> List[Dispute]:
    """List disputes filed by a citizen, optionally narrowed to one status."""
    return await base_crud.find_all(
        db,
        Dispute,
        filters={"citizen_id": user_id, "status": status},
    )


async def list_all(db: AsyncSession) -> List[Dispute]:
    """List every dispute ordered by ID."""
    return await base_crud.find_all(db, Dispute)


async def list_details(db: AsyncSession) -> List[Dict[str, Any]]:
    """
    List every dispute joined with its citizen, payment and resolver.

    Pending disputes have no resolver, so the resolver join is an outer join.
    """
    citizen = aliased(User, name="citizen")
    resolver = aliased(User, name="resolver")

    stmt = (
        select(
            Dispute,
            citizen.full_name,
            citizen.neighborhood_unit_code,
            Payment.amount,
            Payment.period_month,
            Payment.period_year,
            resolver.full_name,
        )
        .join(citizen, Dispute.citizen_id == citizen.id)
        .join(Payment, Dispute.payment_id == Payment.id)
        .outerjoin(resolver, Dispute.resolved_by_admin_id == resolver.id)
        .order_by(Dispute.id)
    )
    result = await db.execute(stmt)

    details = []
    for dispute, full_name, unit_code, amount, month, year, resolver_name in result.all():
        row = dispute.model_dump()
        row.update(
            citizen_full_name=full_name,
            citizen_neighborhood_unit_code=unit_code,
            payment_amount=amount,
            payment_period_month=month,
            payment_period_year=year,
            resolved_by_admin_name=resolver_name,
        )
        details.append(row)
    return details
