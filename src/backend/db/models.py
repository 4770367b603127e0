"""
Database models using SQLModel.

Three tables back the application:
- users: citizens (warga) and neighborhood administrators (admin_kelurahan)
- payments: waste-fee payments recorded by an admin on behalf of a citizen
- disputes: citizen challenges against a recorded payment
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import Column, Enum as SAEnum, ForeignKey, Index, Integer, Numeric, String, Text, text
from sqlmodel import Field, SQLModel

from .enums import DisputeStatus, UserRole


def utc_now():
    """
    Get current time in UTC (timezone-naive) for database storage.

    The API layer serializes these values with a 'Z' suffix.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class TableModel(SQLModel):
    """Base table model with common functionality."""

    pass


class User(TableModel, table=True):
    """Citizen or admin kelurahan account."""

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(
        min_length=3,
        max_length=50,
        sa_column=Column(String(50), unique=True, nullable=False),
        description="Unique, case-sensitive login name",
    )
    password_hash: str = Field(
        max_length=255,
        sa_column=Column(String(255), nullable=False),
        description="bcrypt hash of the password",
    )
    role: UserRole = Field(
        sa_column=Column(
            SAEnum(UserRole, name="user_role", values_callable=_enum_values),
            nullable=False,
        ),
        description="warga or admin_kelurahan",
    )
    full_name: str = Field(
        max_length=255,
        sa_column=Column(String(255), nullable=False),
    )
    national_id: str = Field(
        min_length=16,
        max_length=16,
        sa_column=Column(String(16), unique=True, nullable=False),
        description="NIK, 16-digit national identity number",
    )
    family_card_number: str = Field(
        min_length=16,
        max_length=16,
        sa_column=Column(String(16), nullable=False),
        description="No. KK, 16-digit family card number",
    )
    home_address: str = Field(sa_column=Column(Text, nullable=False))
    neighborhood_unit_code: str = Field(
        max_length=4,
        sa_column=Column(String(4), nullable=False, index=True),
        description="RT code such as 001 or 0012",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
        description="Account creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
        description="Last update timestamp",
    )

    def __repr__(self):
        return f"<User {self.username} ({self.role})>"


class Payment(TableModel, table=True):
    """Waste-fee payment for one billing period."""

    __tablename__ = "payments"
    __table_args__ = (
        Index("ix_payments_citizen_period", "citizen_id", "period_year", "period_month"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    citizen_id: int = Field(
        sa_column=Column(Integer, ForeignKey("users.id"), nullable=False, index=True),
        description="Citizen who paid",
    )
    amount: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Amount in Rupiah, fixed-point with two decimals",
    )
    payment_date: datetime = Field(nullable=False)
    period_month: int = Field(ge=1, le=12, nullable=False)
    period_year: int = Field(ge=2000, nullable=False)
    receipt_photo_url: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="URL of the uploaded receipt photo",
    )
    recorded_by_admin_id: int = Field(
        sa_column=Column(Integer, ForeignKey("users.id"), nullable=False),
        description="Admin kelurahan who recorded this payment",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )

    def __repr__(self):
        return f"<Payment {self.id} citizen={self.citizen_id} {self.period_month}/{self.period_year} Rp{self.amount}>"


class Dispute(TableModel, table=True):
    """Citizen challenge against a recorded payment."""

    __tablename__ = "disputes"

    id: Optional[int] = Field(default=None, primary_key=True)
    payment_id: int = Field(
        sa_column=Column(Integer, ForeignKey("payments.id"), nullable=False, index=True),
    )
    citizen_id: int = Field(
        sa_column=Column(Integer, ForeignKey("users.id"), nullable=False, index=True),
        description="Citizen who filed the dispute, owner of the payment",
    )
    reason: str = Field(sa_column=Column(Text, nullable=False))
    evidence_photo_url: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )
    status: DisputeStatus = Field(
        default=DisputeStatus.PENDING,
        sa_column=Column(
            SAEnum(DisputeStatus, name="dispute_status", values_callable=_enum_values),
            nullable=False,
            index=True,
        ),
    )
    admin_response: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )
    resolved_by_admin_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("users.id"), nullable=True),
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )

    def __repr__(self):
        return f"<Dispute {self.id} payment={self.payment_id} ({self.status})>"
