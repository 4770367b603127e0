"""Create database tables and seed the bootstrap admin without starting the API."""
import asyncio
import logging

from core.database import AsyncSessionLocal, close_db, init_db
from core.logging_config import LogConfig, setup_logging
from db.setup import setup_database_default_data

logger = logging.getLogger("init_db")


async def main():
    setup_logging(LogConfig(enable_file_logging=False))

    await init_db()
    logger.info("Database tables created successfully")

    async with AsyncSessionLocal() as db:
        if not await setup_database_default_data(db):
            logger.error("Default data setup failed")

    await close_db()


if __name__ == "__main__":
    asyncio.run(main())
