"""
Role-based authorization guard.

``authorize`` is a pure membership test of the caller's role against the
roles an action requires. Account management adds narrower checks that run
only after the generic check has allowed the caller in.
"""
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable
import logging

from quizroom.core.errors import Forbidden, ValidationError
from quizroom.core.security import Identity
from quizroom.models.orm import Role, User

logger = logging.getLogger(__name__)

ALL_ROLES: FrozenSet[Role] = frozenset(Role)
PRIVILEGED: FrozenSet[Role] = frozenset({Role.OWNER, Role.ADMIN})
OWNER_ONLY: FrozenSet[Role] = frozenset({Role.OWNER})

# Roles each caller may assign when creating an account.
CREATABLE_BY: Dict[Role, FrozenSet[Role]] = {
    Role.OWNER: frozenset({Role.ADMIN, Role.PUPIL}),
    Role.ADMIN: frozenset({Role.PUPIL}),
    Role.PUPIL: frozenset({Role.PUPIL}),
}

# Roles of the accounts each caller may delete.
DELETABLE_BY: Dict[Role, FrozenSet[Role]] = {
    Role.OWNER: frozenset({Role.ADMIN, Role.PUPIL}),
    Role.ADMIN: frozenset({Role.PUPIL}),
    Role.PUPIL: frozenset(),
}

# The owner is seeded once and never created, reassigned or removed through the API.
ASSIGNABLE_ROLES: FrozenSet[Role] = frozenset({Role.ADMIN, Role.PUPIL})


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""

    def __bool__(self) -> bool:
        return self.allowed


def authorize(identity: Identity, required: Iterable[Role]) -> Decision:
    if identity.role in frozenset(required):
        return Decision(True)
    return Decision(False, f"Role '{identity.role.value}' is not permitted")


def require(identity: Identity, required: Iterable[Role]) -> Identity:
    decision = authorize(identity, required)
    if not decision:
        logger.info(f"Denied user {identity.id}: {decision.reason}")
        raise Forbidden(decision.reason)
    return identity


def ensure_can_create(identity: Identity, role: Role) -> None:
    """Check that ``identity`` may create an account with ``role``."""
    if role not in ASSIGNABLE_ROLES:
        raise ValidationError("Invalid role")
    if role not in CREATABLE_BY[identity.role]:
        raise Forbidden("Only owners can add admins")


def ensure_can_delete(identity: Identity, target: User) -> None:
    if target.role not in DELETABLE_BY[identity.role]:
        if target.role is Role.OWNER:
            raise Forbidden("The owner account cannot be deleted")
        raise Forbidden(f"Role '{identity.role.value}' cannot delete {target.role.value} accounts")


def ensure_can_change_role(identity: Identity, target: User, role: Role) -> None:
    require(identity, OWNER_ONLY)
    if role not in ASSIGNABLE_ROLES:
        raise ValidationError("Invalid role")
    if target.role is Role.OWNER:
        raise Forbidden("The owner role cannot be reassigned")
