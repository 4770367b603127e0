"""
Unit tests for the role and ownership policy.

Tests:
- Admin-only actions
- Admin-or-self read access
- Dispute filing requires a citizen who owns the payment
- enforce() raises ForbiddenError with the caller's message
"""

import pytest

from core.exceptions import ForbiddenError
from core.policy import Action, authorize, enforce
from db import Payment, User, UserRole
from tests.factories import PaymentFactory, UserFactory


def _user(user_id: int, role: UserRole = UserRole.WARGA) -> User:
    user = UserFactory.create(role=role)
    user.id = user_id
    return user


@pytest.fixture
def admin() -> User:
    return _user(1, UserRole.ADMIN_KELURAHAN)


@pytest.fixture
def warga() -> User:
    return _user(2)


@pytest.fixture
def other_warga() -> User:
    return _user(3)


@pytest.fixture
def warga_payment(warga, admin) -> Payment:
    payment = PaymentFactory.create(citizen=warga, admin=admin)
    payment.id = 10
    return payment


class TestAdminOnlyActions:
    """Actions only an admin kelurahan may perform."""

    @pytest.mark.parametrize(
        "action",
        [
            Action.MANAGE_USERS,
            Action.RECORD_PAYMENT,
            Action.UPDATE_PAYMENT,
            Action.VIEW_ALL_PAYMENTS,
            Action.RESOLVE_DISPUTE,
            Action.VIEW_ALL_DISPUTES,
        ],
    )
    def test_admin_allowed_citizen_denied(self, admin, warga, action):
        assert authorize(admin, action) is True
        assert authorize(warga, action) is False

    def test_missing_actor_is_denied(self):
        assert authorize(None, Action.VIEW_ALL_PAYMENTS) is False


class TestAdminOrSelf:
    """Per-user views are open to admins and to the user themselves."""

    @pytest.mark.parametrize(
        "action",
        [Action.VIEW_USER, Action.VIEW_USER_PAYMENTS, Action.VIEW_USER_DISPUTES],
    )
    def test_self_and_admin_allowed(self, admin, warga, other_warga, action):
        assert authorize(warga, action, warga.id) is True
        assert authorize(admin, action, warga.id) is True
        assert authorize(other_warga, action, warga.id) is False

    def test_user_resource_is_matched_by_id(self, warga, other_warga):
        assert authorize(warga, Action.VIEW_USER, warga) is True
        assert authorize(other_warga, Action.VIEW_USER, warga) is False


class TestFileDispute:
    """Filing a dispute needs a citizen who owns the payment."""

    def test_owner_may_file(self, warga, warga_payment):
        assert authorize(warga, Action.FILE_DISPUTE, warga_payment) is True

    def test_other_citizen_may_not_file(self, other_warga, warga_payment):
        assert authorize(other_warga, Action.FILE_DISPUTE, warga_payment) is False

    def test_admin_may_not_file(self, admin, warga_payment):
        assert authorize(admin, Action.FILE_DISPUTE, warga_payment) is False

    def test_role_only_check_without_resource(self, admin, warga):
        assert authorize(warga, Action.FILE_DISPUTE) is True
        assert authorize(admin, Action.FILE_DISPUTE) is False


class TestEnforce:
    """enforce() raises on denial and passes silently otherwise."""

    def test_allowed_does_not_raise(self, admin):
        enforce(admin, Action.RESOLVE_DISPUTE)

    def test_denied_raises_with_detail(self, warga):
        with pytest.raises(ForbiddenError) as exc_info:
            enforce(warga, Action.RESOLVE_DISPUTE, detail="not authorized to resolve disputes")

        assert exc_info.value.detail == "not authorized to resolve disputes"
        assert exc_info.value.status_code == 403

    def test_default_detail(self, warga):
        with pytest.raises(ForbiddenError, match="Insufficient permissions"):
            enforce(warga, Action.MANAGE_USERS)
