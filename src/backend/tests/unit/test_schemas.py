"""
Unit tests for request validation and response serialization.

Tests:
- Citizen field formats (NIK, No. KK, RT)
- Payment ranges and partial-update null handling
- Dispute resolution status
- camelCase output with UTC datetimes and numeric amounts
"""

from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from api.schemas.dispute import DisputeCreate, DisputeResolveRequest
from api.schemas.payment import PaymentCreate, PaymentRead, PaymentUpdate
from api.schemas.user import UserCreate, UserUpdate
from db import DisputeStatus, UserRole


def _user_payload(**overrides):
    payload = {
        "username": "budi",
        "password": "rahasia123",
        "fullName": "Budi Santoso",
        "nationalId": "3201010000000001",
        "familyCardNumber": "3201010000000002",
        "homeAddress": "Jl. Melati No. 7",
        "neighborhoodUnitCode": "003",
    }
    payload.update(overrides)
    return payload


def _payment_payload(**overrides):
    payload = {
        "citizen_id": 1,
        "admin_id": 2,
        "amount": "15000.50",
        "payment_date": "2024-01-05T09:30:00",
        "period_month": 1,
        "period_year": 2024,
    }
    payload.update(overrides)
    return payload


class TestUserSchemas:
    """Citizen registration and update validation."""

    def test_camel_case_input_and_default_role(self):
        user = UserCreate.model_validate(_user_payload())
        assert user.full_name == "Budi Santoso"
        assert user.role == UserRole.WARGA

    @pytest.mark.parametrize("code", ["001", "0012", "009"])
    def test_valid_neighborhood_unit(self, code):
        UserCreate.model_validate(_user_payload(neighborhoodUnitCode=code))

    @pytest.mark.parametrize("code", ["1", "01", "101", "00123", "00a"])
    def test_invalid_neighborhood_unit(self, code):
        with pytest.raises(ValidationError):
            UserCreate.model_validate(_user_payload(neighborhoodUnitCode=code))

    @pytest.mark.parametrize("nik", ["123", "12345678901234567", "320101000000000A"])
    def test_invalid_national_id(self, nik):
        with pytest.raises(ValidationError):
            UserCreate.model_validate(_user_payload(nationalId=nik))

    def test_short_username_and_password(self):
        with pytest.raises(ValidationError):
            UserCreate.model_validate(_user_payload(username="ab"))
        with pytest.raises(ValidationError):
            UserCreate.model_validate(_user_payload(password="12345"))

    def test_update_tracks_only_sent_fields(self):
        update = UserUpdate.model_validate({"homeAddress": "Jl. Kenanga 3"})
        assert update.model_dump(exclude_unset=True) == {"home_address": "Jl. Kenanga 3"}

    def test_update_rejects_null(self):
        with pytest.raises(ValidationError, match="full_name cannot be null"):
            UserUpdate.model_validate({"fullName": None})


class TestPaymentSchemas:
    """Payment validation."""

    def test_amount_is_decimal(self):
        payment = PaymentCreate.model_validate(_payment_payload())
        assert payment.amount == Decimal("15000.50")

    @pytest.mark.parametrize("amount", ["0", "-5000", "100.123"])
    def test_invalid_amount(self, amount):
        with pytest.raises(ValidationError):
            PaymentCreate.model_validate(_payment_payload(amount=amount))

    @pytest.mark.parametrize(("month", "year"), [(0, 2024), (13, 2024), (6, 1999)])
    def test_invalid_period(self, month, year):
        with pytest.raises(ValidationError):
            PaymentCreate.model_validate(_payment_payload(period_month=month, period_year=year))

    @pytest.mark.parametrize("url", ["not a url", "ftp://example.com/r.jpg", "/receipts/r.jpg"])
    def test_invalid_receipt_url(self, url):
        with pytest.raises(ValidationError):
            PaymentCreate.model_validate(_payment_payload(receipt_photo_url=url))

    def test_receipt_url_kept_as_sent(self):
        payment = PaymentCreate.model_validate(_payment_payload(receipt_photo_url="https://cdn.example.com"))
        assert payment.receipt_photo_url == "https://cdn.example.com"

    def test_python_dump_keeps_native_types(self):
        data = PaymentCreate.model_validate(_payment_payload()).model_dump()

        assert isinstance(data["amount"], Decimal)
        assert data["amount"] == Decimal("15000.50")
        assert isinstance(data["payment_date"], datetime)

    def test_update_three_way_receipt(self):
        omitted = PaymentUpdate.model_validate({"amount": "20000"})
        cleared = PaymentUpdate.model_validate({"receiptPhotoUrl": None})

        assert "receipt_photo_url" not in omitted.model_dump(exclude_unset=True)
        assert cleared.model_dump(exclude_unset=True) == {"receipt_photo_url": None}

    def test_update_rejects_null_amount(self):
        with pytest.raises(ValidationError, match="amount cannot be null"):
            PaymentUpdate.model_validate({"amount": None})

    def test_read_serializes_camel_case(self):
        payment = PaymentRead(
            id=1,
            citizen_id=2,
            amount=Decimal("15000.50"),
            payment_date=datetime(2024, 1, 5, 9, 30),
            period_month=1,
            period_year=2024,
            receipt_photo_url=None,
            recorded_by_admin_id=3,
            created_at=datetime(2024, 1, 5, 10, 0),
            updated_at=datetime(2024, 1, 5, 10, 0),
        )

        data = payment.model_dump(mode="json", by_alias=True)

        assert data["amount"] == 15000.5
        assert data["paymentDate"] == "2024-01-05T09:30:00Z"
        assert data["recordedByAdminId"] == 3
        assert data["receiptPhotoUrl"] is None


class TestDisputeSchemas:
    """Dispute validation."""

    def test_extraneous_fields_ignored(self):
        dispute = DisputeCreate.model_validate(
            {
                "paymentId": 1,
                "citizenId": 2,
                "reason": "Jumlah salah",
                "status": "approved",
                "adminResponse": "ok",
            }
        )
        assert "status" not in dispute.model_dump()
        assert "admin_response" not in dispute.model_dump()

    def test_empty_reason_rejected(self):
        with pytest.raises(ValidationError):
            DisputeCreate.model_validate({"paymentId": 1, "citizenId": 2, "reason": ""})

    @pytest.mark.parametrize("status", [DisputeStatus.APPROVED, DisputeStatus.REJECTED])
    def test_resolve_accepts_final_status(self, status):
        assert DisputeResolveRequest(status=status).status == status

    def test_resolve_rejects_pending(self):
        with pytest.raises(ValidationError, match="approved or rejected"):
            DisputeResolveRequest(status=DisputeStatus.PENDING)
