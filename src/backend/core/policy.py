"""
Role and ownership policy.

Every mutating operation asks the same question through authorize():
may this actor perform this action on this resource? Services call
enforce() with the message that should reach the caller on denial;
FastAPI dependencies call it with the generic message.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

from core.exceptions import ForbiddenError
from db import Dispute, Payment, User, UserRole

logger = logging.getLogger(__name__)


class Action(str, Enum):
    """Operations subject to authorization."""

    MANAGE_USERS = "users:manage"
    VIEW_USER = "users:view"
    RECORD_PAYMENT = "payments:record"
    UPDATE_PAYMENT = "payments:update"
    VIEW_ALL_PAYMENTS = "payments:view_all"
    VIEW_USER_PAYMENTS = "payments:view_user"
    FILE_DISPUTE = "disputes:file"
    RESOLVE_DISPUTE = "disputes:resolve"
    VIEW_ALL_DISPUTES = "disputes:view_all"
    VIEW_USER_DISPUTES = "disputes:view_user"


def _is_admin(actor: User, resource: Any) -> bool:
    return actor.role == UserRole.ADMIN_KELURAHAN


def _is_admin_or_self(actor: User, resource: Any) -> bool:
    if _is_admin(actor, resource):
        return True
    return _owner_id(resource) == actor.id


def _owns_payment(actor: User, resource: Any) -> bool:
    if actor.role != UserRole.WARGA:
        return False
    # Filing without a loaded payment only checks the role
    return resource is None or _owner_id(resource) == actor.id


def _owner_id(resource: Any) -> Optional[int]:
    """Citizen that owns a resource; plain ints are treated as user ids."""
    if isinstance(resource, (Payment, Dispute)):
        return resource.citizen_id
    if isinstance(resource, User):
        return resource.id
    if isinstance(resource, int):
        return resource
    return None


_RULES: Dict[Action, Callable[[User, Any], bool]] = {
    Action.MANAGE_USERS: _is_admin,
    Action.VIEW_USER: _is_admin_or_self,
    Action.RECORD_PAYMENT: _is_admin,
    Action.UPDATE_PAYMENT: _is_admin,
    Action.VIEW_ALL_PAYMENTS: _is_admin,
    Action.VIEW_USER_PAYMENTS: _is_admin_or_self,
    Action.FILE_DISPUTE: _owns_payment,
    Action.RESOLVE_DISPUTE: _is_admin,
    Action.VIEW_ALL_DISPUTES: _is_admin,
    Action.VIEW_USER_DISPUTES: _is_admin_or_self,
}


def authorize(actor: Optional[User], action: Action, resource: Any = None) -> bool:
    """
    Decide whether actor may perform action on resource.

    Args:
        actor: User attempting the action (None is always denied)
        action: Action being attempted
        resource: Target entity, owning user id, or None

    Returns:
        True if allowed, False otherwise
    """
    if actor is None:
        return False
    rule = _RULES.get(action)
    if rule is None:
        return False
    return rule(actor, resource)


def enforce(
    actor: Optional[User],
    action: Action,
    resource: Any = None,
    detail: str = "Insufficient permissions",
) -> None:
    """
    Raise ForbiddenError unless authorize() allows the action.

    Raises:
        ForbiddenError: With the given detail when denied
    """
    if not authorize(actor, action, resource):
        logger.warning(
            f"Authorization denied | Actor: {getattr(actor, 'id', None)} | "
            f"Action: {action.value} | Detail: {detail}"
        )
        raise ForbiddenError(detail)
