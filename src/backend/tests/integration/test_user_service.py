"""
Integration tests for identity: registration, updates and authentication.

Tests:
- Create user hashes the password
- Duplicate username / NIK conflict
- Partial update and NIK uniqueness on update
- authenticate() failure cases and case sensitivity
"""

import pytest

from api.schemas.login import LoginRequest
from api.schemas.user import UserCreate, UserUpdate
from api.services.auth_service import AuthenticationService, verify_password
from api.services.user_service import DUPLICATE_USER_DETAIL, UserService
from core.exceptions import ConflictError, NotFoundError
from core.security import decode_token
from db import UserRole
from tests.factories import DEFAULT_PASSWORD, UserFactory


def _registration(**overrides) -> UserCreate:
    data = {
        "username": "agus",
        "password": "rahasia123",
        "full_name": "Agus Pratama",
        "national_id": "1111222233334444",
        "family_card_number": "5555666677778888",
        "home_address": "Jl. Mawar No. 1",
        "neighborhood_unit_code": "002",
    }
    data.update(overrides)
    return UserCreate(**data)


class TestCreateUser:
    """Registration."""

    @pytest.mark.asyncio
    async def test_create_hashes_password(self, db_session):
        user = await UserService(db_session).create_user(_registration())

        assert user.id is not None
        assert user.role == UserRole.WARGA
        assert user.password_hash != "rahasia123"
        assert verify_password("rahasia123", user.password_hash)

    @pytest.mark.asyncio
    async def test_duplicate_national_id_conflicts(self, db_session):
        service = UserService(db_session)
        await service.create_user(_registration(national_id="1111222233334444"))

        with pytest.raises(ConflictError) as exc_info:
            await service.create_user(
                _registration(username="agus2", national_id="1111222233334444")
            )

        assert exc_info.value.detail == DUPLICATE_USER_DETAIL

    @pytest.mark.asyncio
    async def test_duplicate_username_conflicts_with_same_message(self, db_session):
        service = UserService(db_session)
        await service.create_user(_registration())

        with pytest.raises(ConflictError) as exc_info:
            await service.create_user(_registration(national_id="9999888877776666"))

        assert exc_info.value.detail == DUPLICATE_USER_DETAIL

    @pytest.mark.asyncio
    async def test_session_usable_after_conflict(self, db_session):
        service = UserService(db_session)
        await service.create_user(_registration())

        with pytest.raises(ConflictError):
            await service.create_user(_registration(national_id="9999888877776666"))

        user = await service.create_user(
            _registration(username="dewi", national_id="9999888877776666")
        )
        assert user.username == "dewi"


class TestUpdateUser:
    """Admin updates of citizen records."""

    @pytest.mark.asyncio
    async def test_partial_update(self, db_session, citizen):
        citizen_id = citizen.id
        original_nik = citizen.national_id

        user = await UserService(db_session).update_user(
            citizen_id, UserUpdate(home_address="Jl. Kenanga 3")
        )

        assert user.home_address == "Jl. Kenanga 3"
        assert user.national_id == original_nik
        assert user.full_name == "Budi Santoso"

    @pytest.mark.asyncio
    async def test_update_to_taken_national_id_conflicts(self, db_session, citizen, other_citizen):
        citizen_id = citizen.id
        taken_nik = other_citizen.national_id

        with pytest.raises(ConflictError):
            await UserService(db_session).update_user(citizen_id, UserUpdate(national_id=taken_nik))

    @pytest.mark.asyncio
    async def test_update_missing_user(self, db_session):
        with pytest.raises(NotFoundError, match="User not found"):
            await UserService(db_session).update_user(999, UserUpdate(full_name="X"))


class TestListUsers:
    """User listing."""

    @pytest.mark.asyncio
    async def test_role_filter(self, db_session, citizen, other_citizen, admin_user):
        service = UserService(db_session)

        citizens = await service.list_users(role=UserRole.WARGA)
        everyone = await service.list_users()

        assert [u.username for u in citizens] == ["budi", "siti"]
        assert len(everyone) == 3

    @pytest.mark.asyncio
    async def test_get_by_username(self, db_session, citizen):
        service = UserService(db_session)

        assert (await service.get_user_by_username("budi")).id == citizen.id
        assert await service.get_user_by_username("Budi") is None


class TestAuthenticate:
    """Credential checks."""

    @pytest.mark.asyncio
    async def test_correct_credentials(self, db_session, citizen):
        user = await AuthenticationService(db_session).authenticate("budi", DEFAULT_PASSWORD)
        assert user is not None
        assert user.id == citizen.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("username", "password"),
        [
            ("nobody", DEFAULT_PASSWORD),
            ("budi", "wrong-password"),
            ("", DEFAULT_PASSWORD),
            ("budi", ""),
        ],
    )
    async def test_failures_return_none(self, db_session, citizen, username, password):
        assert await AuthenticationService(db_session).authenticate(username, password) is None

    @pytest.mark.asyncio
    async def test_username_is_case_sensitive(self, db_session):
        db_session.add(UserFactory.create(username="alice"))
        await db_session.commit()

        service = AuthenticationService(db_session)

        assert await service.authenticate("Alice", DEFAULT_PASSWORD) is None
        assert await service.authenticate("alice", DEFAULT_PASSWORD) is not None

    @pytest.mark.asyncio
    async def test_login_issues_token(self, db_session, admin_user):
        response = await AuthenticationService(db_session).login(
            LoginRequest(username="admin.rt", password=DEFAULT_PASSWORD)
        )

        assert response is not None
        assert response.user.role == UserRole.ADMIN_KELURAHAN
        assert decode_token(response.access_token)["sub"] == str(admin_user.id)
