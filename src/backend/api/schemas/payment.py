"""
Payment schemas for API validation and serialization.
"""
from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional

from pydantic import Field, field_validator

from core.schema_base import HTTPSchemaModel, PartialUpdateModel, to_naive_utc, validate_http_url


class PaymentBase(HTTPSchemaModel):
    """Base payment schema with the mutable ledger fields."""
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Amount in Rupiah")
    payment_date: datetime
    period_month: int = Field(..., ge=1, le=12)
    period_year: int = Field(..., ge=2000)
    receipt_photo_url: Optional[str] = None

    @field_validator("payment_date")
    @classmethod
    def payment_date_to_utc(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @field_validator("receipt_photo_url")
    @classmethod
    def receipt_is_http_url(cls, v: Optional[str]) -> Optional[str]:
        return validate_http_url(v)


class PaymentRecordRequest(PaymentBase):
    """Request body for recording a payment. The recording admin is the caller."""
    citizen_id: int


class PaymentCreate(PaymentRecordRequest):
    """Schema for creating a payment on behalf of a citizen."""
    admin_id: int = Field(..., description="Admin kelurahan recording the payment")


class PaymentUpdate(PartialUpdateModel):
    """
    Schema for updating a payment.

    Omitted fields are preserved. receipt_photo_url may be set to null to
    remove the receipt.
    """
    nullable_fields: ClassVar[frozenset[str]] = frozenset({"receipt_photo_url"})

    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    payment_date: Optional[datetime] = None
    period_month: Optional[int] = Field(None, ge=1, le=12)
    period_year: Optional[int] = Field(None, ge=2000)
    receipt_photo_url: Optional[str] = None

    @field_validator("payment_date")
    @classmethod
    def payment_date_to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)

    @field_validator("receipt_photo_url")
    @classmethod
    def receipt_is_http_url(cls, v: Optional[str]) -> Optional[str]:
        return validate_http_url(v)


class PaymentRead(HTTPSchemaModel):
    """Schema for reading payment data."""
    id: int
    citizen_id: int
    amount: Decimal
    payment_date: datetime
    period_month: int
    period_year: int
    receipt_photo_url: Optional[str] = None
    recorded_by_admin_id: int
    created_at: datetime
    updated_at: datetime


class PaymentDetail(PaymentRead):
    """Payment joined with the citizen and the recording admin."""
    citizen_full_name: str
    citizen_national_id: str
    citizen_neighborhood_unit_code: str
    recorded_by_admin_name: str
