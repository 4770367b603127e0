"""
Dispute service: citizens challenge recorded payments, admins resolve them.

State machine:
    pending -> approved | rejected
    approved | rejected -> approved | rejected   (re-resolution, last write wins)
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.dispute import DisputeCreate, DisputeResolve
from core.decorators import handle_database_exceptions
from core.exceptions import ForbiddenError, NotFoundError
from core.metrics import track_dispute_filed, track_dispute_resolved
from core.policy import Action, enforce
from crud import dispute_crud, payment_crud, user_crud
from db import Dispute, DisputeStatus, utc_now

logger = logging.getLogger(__name__)


class DisputeService:
    """Service for the dispute workflow."""

    def __init__(self, session: AsyncSession):
        self.db = session

    async def get_dispute(self, dispute_id: int) -> Dispute:
        dispute = await dispute_crud.find_by_id(self.db, dispute_id)
        if dispute is None:
            raise NotFoundError("dispute")
        return dispute

    @handle_database_exceptions()
    async def create_dispute(self, dispute_data: DisputeCreate) -> Dispute:
        """
        File a dispute against a payment.

        The new dispute is always pending with no response and no resolver.
        Several disputes may be filed against the same payment.

        Args:
            dispute_data: Payment reference, reason, evidence and filing citizen

        Returns:
            Created dispute

        Raises:
            NotFoundError: If the payment does not exist
            ForbiddenError: If the payment belongs to another citizen
        """
        payment = await payment_crud.find_by_id(self.db, dispute_data.payment_id)
        if payment is None:
            raise NotFoundError("payment")

        if payment.citizen_id != dispute_data.citizen_id:
            logger.warning(
                f"Dispute rejected: citizen {dispute_data.citizen_id} "
                f"does not own payment {payment.id}"
            )
            raise ForbiddenError("payment does not belong to this user")

        dispute = Dispute(
            payment_id=payment.id,
            citizen_id=dispute_data.citizen_id,
            reason=dispute_data.reason,
            evidence_photo_url=dispute_data.evidence_photo_url,
            status=DisputeStatus.PENDING,
            admin_response=None,
            resolved_by_admin_id=None,
        )

        self.db.add(dispute)
        await self.db.commit()
        await self.db.refresh(dispute)

        logger.info(f"Filed dispute {dispute.id} on payment {payment.id} by citizen {dispute.citizen_id}")
        track_dispute_filed()
        return dispute

    @handle_database_exceptions()
    async def resolve_dispute(self, dispute_id: int, resolve_data: DisputeResolve) -> Dispute:
        """
        Approve or reject a dispute.

        Checks run in order: resolver exists, resolver is an admin, dispute
        exists. An already resolved dispute is overwritten.

        Raises:
            NotFoundError: If the resolver or the dispute does not exist
            ForbiddenError: If the resolver is not an admin
        """
        resolver = await user_crud.find_by_id(self.db, resolve_data.resolved_by_admin_id)
        if resolver is None:
            raise NotFoundError("admin user")
        enforce(resolver, Action.RESOLVE_DISPUTE, detail="not authorized to resolve disputes")

        dispute = await self.get_dispute(dispute_id)
        previous_status = dispute.status

        dispute.status = resolve_data.status
        dispute.admin_response = resolve_data.admin_response
        dispute.resolved_by_admin_id = resolver.id
        dispute.updated_at = utc_now()

        await self.db.commit()
        await self.db.refresh(dispute)

        logger.info(
            f"Resolved dispute {dispute.id}: {previous_status.value} -> "
            f"{dispute.status.value} by admin {resolver.id}"
        )
        track_dispute_resolved(previous_status.value, dispute.status.value)
        return dispute

    async def list_disputes_for_user(
        self,
        user_id: int,
        status: Optional[DisputeStatus] = None,
    ) -> List[Dispute]:
        return await dispute_crud.list_for_user(self.db, user_id, status=status)

    async def list_all_disputes(self) -> List[Dispute]:
        return await dispute_crud.list_all(self.db)

    async def list_dispute_details(self) -> List[Dict[str, Any]]:
        """List disputes with citizen, payment and resolver fields resolved server-side."""
        return await dispute_crud.list_details(self.db)
