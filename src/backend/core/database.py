"""
Database configuration.
Implements connection pooling, async sessions and table initialization.
"""

import logging
from typing import Any, AsyncGenerator, Dict

import asyncpg
from sqlalchemy.exc import PendingRollbackError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import AsyncAdaptedQueuePool, StaticPool
from sqlmodel import SQLModel

from .config import settings

logger = logging.getLogger(__name__)


def engine_options(url: str) -> Dict[str, Any]:
    """
    Build engine keyword arguments for the given database URL.

    PostgreSQL gets a tuned connection pool; SQLite gets a single shared
    connection so in-memory databases survive across sessions.
    """
    if url.startswith("sqlite"):
        return {
            "echo": settings.logging.enable_query_logging,
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }

    return {
        "echo": settings.logging.enable_query_logging or settings.database.echo,
        "pool_pre_ping": False,
        "pool_size": settings.database.pool_size,
        "max_overflow": settings.database.max_overflow,
        "pool_timeout": settings.database.pool_timeout,
        "pool_recycle": settings.database.pool_recycle,
        "poolclass": AsyncAdaptedQueuePool,
        "connect_args": {
            "server_settings": {"application_name": settings.api.app_name},
            "command_timeout": 60,
            "timeout": 30,
        },
    }


def build_engine(url: str) -> AsyncEngine:
    """Create an async engine for the given URL."""
    return create_async_engine(url, **engine_options(url))


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to an engine."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,  # Prevent additional queries after commit
        autoflush=False,  # Manual flush for better control
    )


engine = build_engine(settings.database.url)
AsyncSessionLocal = build_session_factory(engine)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting async database sessions.
    Implements proper session lifecycle management.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            # Only commit if session is in a valid state
            if session.in_transaction():
                try:
                    await session.commit()
                except PendingRollbackError:
                    await session.rollback()
                    raise
        except Exception:
            await session.rollback()
            raise


async def ensure_database_exists() -> None:
    """
    Ensure the PostgreSQL database exists, create it if it doesn't.
    This connects to the default postgres database first to create the target database.
    """
    if settings.database.is_sqlite:
        return

    database_url = settings.database.database_url_sync
    db_name = database_url.rsplit("/", 1)[-1]
    base_url = database_url.rsplit("/", 1)[0] + "/postgres"

    try:
        conn = await asyncpg.connect(database_url)
        await conn.close()
        return
    except asyncpg.InvalidCatalogNameError:
        logger.info(f"Database {db_name} does not exist, creating it")
    except (OSError, asyncpg.PostgresError) as e:
        # Other connection issues - let the main engine report them
        logger.warning(f"Could not probe database {db_name}: {e}")
        return

    conn = await asyncpg.connect(base_url)
    try:
        await conn.execute(f'CREATE DATABASE "{db_name}"')
    except asyncpg.DuplicateDatabaseError:
        pass
    finally:
        await conn.close()


async def init_db(bind: AsyncEngine = engine) -> None:
    """
    Initialize database tables.
    Should be called on application startup.
    """
    # Register table metadata
    import db.models  # noqa: F401

    if bind is engine:
        await ensure_database_exists()

    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def close_db() -> None:
    """
    Close database connections.
    Should be called on application shutdown.
    """
    await engine.dispose()
