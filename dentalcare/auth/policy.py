# dentalcare/auth/policy.py
"""Access rules for every clinic resource.

All role checks go through this module. A decision only ever looks at the
caller's id and role and at the id of the user who owns the resource; lifecycle
managers supply the owner and raise ``Forbidden`` on denial.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID

from dentalcare.common.errors import Forbidden, ValidationFailed
from dentalcare.models.models import STAFF_ROLES, User, UserRole

logger = logging.getLogger(__name__)

# Path value that stands for "the caller"
SELF_ALIAS = "me"


class Action(enum.Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    CHANGE_STATUS = "change_status"
    DELETE = "delete"
    # Appointment cancellation, reserved for the owning patient
    CANCEL = "cancel"


@dataclass(frozen=True)
class Actor:
    """An authenticated caller."""
    id: UUID
    role: UserRole

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(id=user.id, role=user.role)


def can_access(actor: Actor, action: Action, owner_id: Optional[UUID]) -> bool:
    """Decide whether ``actor`` may perform ``action`` on a resource owned by ``owner_id``.

    Pass ``owner_id=None`` for staff-only operations: no patient can own them.
    """
    if action is Action.CANCEL:
        return actor.role is UserRole.PATIENT and owner_id is not None and actor.id == owner_id
    if actor.is_staff:
        return True
    return owner_id is not None and actor.id == owner_id


def ensure_access(
    actor: Actor,
    action: Action,
    owner_id: Optional[UUID],
    message: Optional[str] = None
) -> None:
    if not can_access(actor, action, owner_id):
        logger.warning(
            "Denied %s for %s %s (owner=%s)", action.value, actor.role.value, actor.id, owner_id
        )
        raise Forbidden(message)


def ensure_staff(actor: Actor, message: Optional[str] = None) -> None:
    ensure_access(actor, Action.CREATE, None, message)


def is_addressee(actor: Actor, owner_id: Optional[UUID]) -> bool:
    """Strict ownership: staff get no override here."""
    return owner_id is not None and actor.id == owner_id


def ensure_addressee(actor: Actor, owner_id: Optional[UUID], message: Optional[str] = None) -> None:
    if not is_addressee(actor, owner_id):
        logger.warning("Denied addressee-only action for %s %s", actor.role.value, actor.id)
        raise Forbidden(message)


def resolve_owner(actor: Actor, raw_owner: Union[str, UUID]) -> UUID:
    """Turn a path value into a user id, mapping ``me`` to the caller."""
    if isinstance(raw_owner, UUID):
        return raw_owner
    if raw_owner == SELF_ALIAS:
        return actor.id
    try:
        return UUID(raw_owner)
    except ValueError:
        raise ValidationFailed(f"'{raw_owner}' is not a valid user id.")
