"""
Database setup module for initializing default values.

Seeds the first admin kelurahan account so the system can be used
after a fresh install. Citizens are registered by that admin.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from api.services.auth_service import hash_password
from core.config import BootstrapSettings, settings
from crud import base_crud, user_crud
from db import User, UserRole

# Setup logging
logger = logging.getLogger(__name__)


class DatabaseSetup:
    """Handles default data setup."""

    def __init__(self, config: BootstrapSettings):
        self.config = config
        self.admin_username = config.admin_username

    async def admin_exists(self, db: AsyncSession) -> bool:
        """Check whether any admin kelurahan account exists."""
        return await base_crud.exists(db, User, filters={"role": UserRole.ADMIN_KELURAHAN})

    async def create_admin_user(self, db: AsyncSession) -> Optional[User]:
        """
        Create the bootstrap admin user.

        An existing account is never modified, so a changed password
        survives restarts.
        """
        existing_user = (
            await user_crud.find_by_username(db, self.config.admin_username)
            or await user_crud.find_by_national_id(db, self.config.admin_national_id)
        )

        if existing_user:
            logger.warning(
                f"Bootstrap admin '{self.admin_username}' not created: username or NIK "
                f"already used by user {existing_user.id} ({existing_user.role.value})"
            )
            return None

        logger.info(f"Creating admin user '{self.admin_username}'...")

        admin_user = User(
            username=self.config.admin_username,
            password_hash=hash_password(self.config.admin_password),
            role=UserRole.ADMIN_KELURAHAN,
            full_name=self.config.admin_full_name,
            national_id=self.config.admin_national_id,
            family_card_number=self.config.admin_family_card_number,
            home_address=self.config.admin_home_address,
            neighborhood_unit_code=self.config.admin_neighborhood_unit_code,
        )

        db.add(admin_user)
        await db.commit()
        await db.refresh(admin_user)

        logger.info(f"✅ Admin user '{self.admin_username}' created successfully")
        return admin_user

    async def run_setup(self, db: AsyncSession) -> bool:
        """Seed default data if needed. Returns False when seeding failed."""
        if not self.config.enabled:
            logger.info("Bootstrap admin disabled, skipping setup")
            return True

        if await self.admin_exists(db):
            logger.info("✅ Admin account present, skipping setup")
            return True

        return await self.create_admin_user(db) is not None


# Global database setup instance
database_setup = DatabaseSetup(settings.bootstrap)


async def setup_database_default_data(db: AsyncSession) -> bool:
    """
    Convenience function to setup database default data.

    Args:
        db: Database session

    Returns:
        True if setup was successful, False otherwise
    """
    return await database_setup.run_setup(db)
