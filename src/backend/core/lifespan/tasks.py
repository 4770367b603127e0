"""
Lifespan startup and shutdown task functions.

This module contains individual task functions for application startup
and shutdown sequences. Each function handles a specific responsibility.
"""

import logging


async def initialize_logging(settings, log_config):
    """Setup logging configuration."""
    from core.logging_config import setup_logging

    logger = logging.getLogger("main")
    setup_logging(log_config)

    logger.info(f"🚀 Starting {settings.api.app_name} v{settings.api.app_version}...")


async def log_cors_configuration(settings, logger):
    """Log CORS configuration for debugging."""
    logger.info(f"🔒 CORS Allowed Origins: {settings.cors.origins}")


async def initialize_database():
    """Create the database if needed, then the tables."""
    from core.database import init_db

    logger = logging.getLogger("main")
    await init_db()
    logger.info("✅ Database initialized")


async def setup_default_data(session_factory):
    """Seed default database data (bootstrap admin)."""
    from db.setup import setup_database_default_data

    logger = logging.getLogger("main")
    logger.info("Setting up default database data...")
    async with session_factory() as db:
        if await setup_database_default_data(db):
            logger.info("✅ Default data setup completed successfully")
        else:
            logger.error("❌ Default data setup failed - check logs above")


async def shutdown_database():
    """Close database connections."""
    from core.database import close_db

    logger = logging.getLogger("main")
    await close_db()
    logger.info("✅ Database connections closed")
