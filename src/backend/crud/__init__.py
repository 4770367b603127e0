"""
CRUD layer for database operations.

This package contains all data access logic isolated from business logic.

Pattern:
    await user_crud.find_by_id(db, user_id)
"""

from . import base_crud
from . import dispute_crud
from . import payment_crud
from . import user_crud

__all__ = [
    "base_crud",
    "dispute_crud",
    "payment_crud",
    "user_crud",
]
