"""
Access policy for resource ownership.

Services resolve the owner of the resource they are about to touch (directly
from a Property, or transitively from a Listing through its Property) and ask
`can_act` whether the acting identity may perform the action.
"""

from enum import Enum
from typing import Optional
import uuid

from app.models.user import UserRole
from app.utils.auth import TokenPayload
from app.utils.exceptions import ForbiddenError


class Action(str, Enum):
    """Actions subject to ownership checks."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


def can_act(actor: TokenPayload, action: Action, owner_id: Optional[uuid.UUID]) -> bool:
    """
    Decide whether `actor` may perform `action` on a resource owned by `owner_id`.

    Admins may act on any resource. Sellers and agents may act only on
    resources they own. Buyers never own resources.
    """
    if actor.role == UserRole.ADMIN.value:
        return True

    if actor.role not in (UserRole.SELLER.value, UserRole.AGENT.value):
        return False

    return owner_id is not None and owner_id == actor.user_id


def ensure_can_act(
    actor: TokenPayload,
    action: Action,
    owner_id: Optional[uuid.UUID],
    detail: str = "Access denied. Insufficient permissions."
) -> None:
    """Raise ForbiddenError unless `can_act` allows the action."""
    if not can_act(actor, action, owner_id):
        raise ForbiddenError(detail)
