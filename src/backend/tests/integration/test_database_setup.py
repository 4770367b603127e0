"""
Integration tests for bootstrap admin seeding.
"""

import pytest

from api.services.auth_service import verify_password
from core.config import BootstrapSettings
from crud import user_crud
from db import UserRole
from db.setup import DatabaseSetup


def _bootstrap(**overrides) -> BootstrapSettings:
    data = {
        "enabled": True,
        "admin_username": "lurah",
        "admin_password": "lurah-secret",
        "admin_national_id": "9000000000000001",
    }
    data.update(overrides)
    return BootstrapSettings(**data)


class TestDatabaseSetup:
    """Seeding the first admin kelurahan."""

    @pytest.mark.asyncio
    async def test_creates_admin_on_empty_database(self, db_session):
        assert await DatabaseSetup(_bootstrap()).run_setup(db_session) is True

        admin = await user_crud.find_by_username(db_session, "lurah")
        assert admin is not None
        assert admin.role == UserRole.ADMIN_KELURAHAN
        assert verify_password("lurah-secret", admin.password_hash)

    @pytest.mark.asyncio
    async def test_skips_when_admin_exists(self, db_session, admin_user):
        setup = DatabaseSetup(_bootstrap())

        assert await setup.admin_exists(db_session) is True
        assert await setup.run_setup(db_session) is True
        assert await user_crud.find_by_username(db_session, "lurah") is None

    @pytest.mark.asyncio
    async def test_citizens_do_not_count_as_admin(self, db_session, citizen):
        assert await DatabaseSetup(_bootstrap()).admin_exists(db_session) is False

    @pytest.mark.asyncio
    async def test_disabled_does_nothing(self, db_session):
        assert await DatabaseSetup(_bootstrap(enabled=False)).run_setup(db_session) is True
        assert await user_crud.list_users(db_session) == []

    @pytest.mark.asyncio
    async def test_username_and_nik_taken_by_different_users(self, db_session, citizen, other_citizen):
        setup = DatabaseSetup(
            _bootstrap(admin_username=citizen.username, admin_national_id=other_citizen.national_id)
        )

        assert await setup.create_admin_user(db_session) is None
        assert await setup.run_setup(db_session) is False
        assert await setup.admin_exists(db_session) is False
