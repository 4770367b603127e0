"""
Dispute schemas for API validation and serialization.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from core.schema_base import HTTPSchemaModel, validate_http_url
from db.enums import RESOLVED_DISPUTE_STATUSES, DisputeStatus


class DisputeFileRequest(HTTPSchemaModel):
    """Request body for filing a dispute. The filing citizen is the caller."""
    payment_id: int
    reason: str = Field(..., min_length=1, description="Why the recorded payment is wrong")
    evidence_photo_url: Optional[str] = None

    @field_validator("evidence_photo_url")
    @classmethod
    def evidence_is_http_url(cls, v: Optional[str]) -> Optional[str]:
        return validate_http_url(v)


class DisputeCreate(DisputeFileRequest):
    """
    Schema for creating a dispute.

    Unknown fields (status, admin_response, ...) are ignored; new disputes
    always start pending.
    """
    citizen_id: int


class DisputeResolveRequest(HTTPSchemaModel):
    """Request body for resolving a dispute. The resolving admin is the caller."""
    status: DisputeStatus
    admin_response: Optional[str] = None

    @field_validator("status")
    @classmethod
    def status_must_be_final(cls, v: DisputeStatus) -> DisputeStatus:
        if v not in RESOLVED_DISPUTE_STATUSES:
            raise ValueError("status must be approved or rejected")
        return v


class DisputeResolve(DisputeResolveRequest):
    """Schema for resolving a dispute."""
    resolved_by_admin_id: int


class DisputeRead(HTTPSchemaModel):
    """Schema for reading dispute data."""
    id: int
    payment_id: int
    citizen_id: int
    reason: str
    evidence_photo_url: Optional[str] = None
    status: DisputeStatus
    admin_response: Optional[str] = None
    resolved_by_admin_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class DisputeDetail(DisputeRead):
    """Dispute joined with the citizen, the disputed payment and the resolver."""
    citizen_full_name: str
    citizen_neighborhood_unit_code: str
    payment_amount: Decimal
    payment_period_month: int
    payment_period_year: int
    resolved_by_admin_name: Optional[str] = None
