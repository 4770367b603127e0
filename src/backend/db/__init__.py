"""
Database models and enums.
"""
from .models import (
    User,
    Payment,
    Dispute,

    # Utilities
    TableModel,
    utc_now,
)

from .enums import (
    UserRole,
    DisputeStatus,
    RESOLVED_DISPUTE_STATUSES,
)

__all__ = [
    # Enums
    "UserRole",
    "DisputeStatus",
    "RESOLVED_DISPUTE_STATUSES",

    # Tables
    "User",
    "Payment",
    "Dispute",

    # Utilities
    "TableModel",
    "utc_now",
]
