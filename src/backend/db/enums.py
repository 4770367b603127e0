"""
Model enums for database models.

Fixed value sets that never change at runtime and need no admin management.
"""
from enum import Enum


class UserRole(str, Enum):
    """
    Role of an account.

    WARGA is a citizen who pays the waste fee and may file disputes.
    ADMIN_KELURAHAN records payments, manages citizens and resolves disputes.
    """
    WARGA = "warga"
    ADMIN_KELURAHAN = "admin_kelurahan"


class DisputeStatus(str, Enum):
    """
    Dispute lifecycle state.

    Disputes start PENDING; resolution moves them to APPROVED or REJECTED
    and may be repeated.
    """
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


RESOLVED_DISPUTE_STATUSES = (DisputeStatus.APPROVED, DisputeStatus.REJECTED)
