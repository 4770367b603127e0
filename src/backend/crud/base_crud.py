"""
Base CRUD operations as plain functions.

Provides reusable database operations that can be used across different models.
"""
from typing import Any, Dict, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

ModelType = TypeVar("ModelType", bound=SQLModel)


async def find_by_id(
    db: AsyncSession,
    model: Type[ModelType],
    id_value: Any,
) -> Optional[ModelType]:
    """
    Find a single record by ID.

    Args:
        db: Database session
        model: SQLModel class
        id_value: The ID value to search for

    Returns:
        Model instance or None if not found
    """
    stmt = select(model).where(model.id == id_value)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def find_one(
    db: AsyncSession,
    model: Type[ModelType],
    *,
    filters: Dict[str, Any],
) -> Optional[ModelType]:
    """
    Find a single record matching filters.

    Args:
        db: Database session
        model: SQLModel class
        filters: Dictionary of field:value filters

    Returns:
        First matching model instance or None
    """
    stmt = select(model)
    for field, value in filters.items():
        stmt = stmt.where(getattr(model, field) == value)

    result = await db.execute(stmt.limit(1))
    return result.scalar_one_or_none()


async def find_all(
    db: AsyncSession,
    model: Type[ModelType],
    *,
    filters: Optional[Dict[str, Any]] = None,
    order_by: Optional[Any] = None,
) -> List[ModelType]:
    """
    Find all records matching filters.

    Filters whose value is None are skipped, so optional query parameters
    can be passed straight through.

    Args:
        db: Database session
        model: SQLModel class
        filters: Dictionary of field:value filters
        order_by: Column to order by (defaults to primary key)

    Returns:
        List of model instances
    """
    stmt = select(model)

    if filters:
        for field, value in filters.items():
            if value is not None:
                stmt = stmt.where(getattr(model, field) == value)

    stmt = stmt.order_by(order_by if order_by is not None else model.id)

    result = await db.execute(stmt)
    return list(result.scalars().all())


async def count(
    db: AsyncSession,
    model: Type[ModelType],
    *,
    filters: Optional[Dict[str, Any]] = None
) -> int:
    """Count records matching filters."""
    stmt = select(func.count(model.id))

    if filters:
        for field, value in filters.items():
            if value is not None:
                stmt = stmt.where(getattr(model, field) == value)

    result = await db.execute(stmt)
    return result.scalar()


async def exists(
    db: AsyncSession,
    model: Type[ModelType],
    *,
    filters: Dict[str, Any]
) -> bool:
    """Check if a record exists matching filters."""
    return await count(db, model, filters=filters) > 0
