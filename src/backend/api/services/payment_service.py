"""
Payment service for the waste-fee ledger.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.payment import PaymentCreate, PaymentUpdate
from core.decorators import handle_database_exceptions
from core.exceptions import NotFoundError
from core.metrics import track_payment_recorded, track_payment_updated
from core.policy import Action, enforce
from crud import payment_crud, user_crud
from db import Payment, utc_now

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def _to_storage(field: str, value: Any) -> Any:
    """Convert validated request values to their column representation."""
    if value is None:
        return None
    if field == "amount":
        return Decimal(value).quantize(CENT)
    return value


class PaymentService:
    """Service for recording and correcting payments."""

    def __init__(self, session: AsyncSession):
        """
        Initialize service with database session.

        Args:
            session: Database session
        """
        self.db = session

    async def get_payment(self, payment_id: int) -> Payment:
        """
        Get a payment by ID.

        Raises:
            NotFoundError: If the payment does not exist
        """
        payment = await payment_crud.find_by_id(self.db, payment_id)
        if payment is None:
            raise NotFoundError("payment")
        return payment

    @handle_database_exceptions()
    async def create_payment(self, payment_data: PaymentCreate) -> Payment:
        """
        Record a payment on behalf of a citizen.

        Args:
            payment_data: Payment fields plus the citizen and recording admin

        Returns:
            Created payment

        Raises:
            NotFoundError: If the citizen or the admin does not exist
            ForbiddenError: If admin_id refers to a non-admin user
        """
        citizen = await user_crud.find_by_id(self.db, payment_data.citizen_id)
        if citizen is None:
            raise NotFoundError("user")

        admin = await user_crud.find_by_id(self.db, payment_data.admin_id)
        if admin is None:
            raise NotFoundError("admin")
        enforce(admin, Action.RECORD_PAYMENT, detail="not an admin")

        data = dict(payment_data)
        data.pop("admin_id")
        payment = Payment(
            **{field: _to_storage(field, value) for field, value in data.items()},
            recorded_by_admin_id=admin.id,
        )

        self.db.add(payment)
        await self.db.commit()
        await self.db.refresh(payment)

        logger.info(
            f"Recorded payment {payment.id}: citizen={citizen.id} "
            f"period={payment.period_month}/{payment.period_year} "
            f"amount={payment.amount} by admin={admin.id}"
        )
        track_payment_recorded(payment.period_year, float(payment.amount))
        return payment

    @handle_database_exceptions()
    async def update_payment(self, payment_id: int, update_data: PaymentUpdate) -> Payment:
        """
        Correct a recorded payment.

        Fields omitted from update_data keep their value; receipt_photo_url
        may be cleared with an explicit null. citizen_id,
        recorded_by_admin_id and created_at never change. updated_at is
        always refreshed, even for an empty update.

        Callers are expected to have checked Action.UPDATE_PAYMENT.

        Raises:
            NotFoundError: If the payment does not exist
        """
        payment = await self.get_payment(payment_id)

        changes = {field: getattr(update_data, field) for field in update_data.model_fields_set}
        for field, value in changes.items():
            setattr(payment, field, _to_storage(field, value))
        payment.updated_at = utc_now()

        await self.db.commit()
        await self.db.refresh(payment)

        logger.info(f"Updated payment {payment.id}: fields={sorted(changes)}")
        track_payment_updated()
        return payment

    async def list_payments_for_user(
        self,
        user_id: int,
        year: Optional[int] = None,
        month: Optional[int] = None,
    ) -> List[Payment]:
        """
        List a citizen's payments.

        Args:
            user_id: Citizen ID
            year: Optional period year filter
            month: Optional period month filter

        Returns:
            Matching payments ordered by ID
        """
        return await payment_crud.list_for_user(self.db, user_id, year=year, month=month)

    async def list_all_payments(self) -> List[Payment]:
        return await payment_crud.list_all(self.db)

    async def list_payment_details(self) -> List[Dict[str, Any]]:
        """List payments with citizen and admin names resolved server-side."""
        return await payment_crud.list_details(self.db)
