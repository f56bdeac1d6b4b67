"""Role hierarchy and permission resolution for preference access.

Roles form a fixed total order::

    read_only < user < project_admin < admin < security_admin

Each role holds every permission of the roles below it plus its own
exclusive tokens.  All lookups are static; nothing here raises — an
unknown or missing role simply has no privileges.

Example
-------
::

    from preference_governance.roles import Actor, RoleLevel, has_role

    actor = Actor(id="user-42", role=RoleLevel.ADMIN)
    assert has_role(actor, RoleLevel.PROJECT_ADMIN)
    assert not has_role(actor, "security_admin")
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum


class RoleLevel(str, Enum):
    """Privilege levels, declared from lowest to highest."""

    READ_ONLY = "read_only"
    USER = "user"
    PROJECT_ADMIN = "project_admin"
    ADMIN = "admin"
    SECURITY_ADMIN = "security_admin"

    @property
    def rank(self) -> int:
        """Position of this role in the hierarchy (0 = lowest)."""
        return ROLE_HIERARCHY.index(self)


ROLE_HIERARCHY: tuple[RoleLevel, ...] = (
    RoleLevel.READ_ONLY,
    RoleLevel.USER,
    RoleLevel.PROJECT_ADMIN,
    RoleLevel.ADMIN,
    RoleLevel.SECURITY_ADMIN,
)

# Tokens each role adds on top of the role directly below it.
_EXCLUSIVE_PERMISSIONS: dict[RoleLevel, frozenset[str]] = {
    RoleLevel.READ_ONLY: frozenset(["read_preferences"]),
    RoleLevel.USER: frozenset(["read_own_preferences", "write_own_preferences"]),
    RoleLevel.PROJECT_ADMIN: frozenset(
        [
            "read_project_preferences",
            "write_project_preferences",
            "manage_project_overrides",
        ]
    ),
    RoleLevel.ADMIN: frozenset(
        [
            "read_all_preferences",
            "write_preferences",
            "manage_overrides",
            "manage_templates",
        ]
    ),
    RoleLevel.SECURITY_ADMIN: frozenset(
        [
            "manage_security_policies",
            "access_audit_logs",
            "manage_delegations",
        ]
    ),
}


def _build_role_permissions() -> dict[RoleLevel, frozenset[str]]:
    table: dict[RoleLevel, frozenset[str]] = {}
    inherited: frozenset[str] = frozenset()
    for role in ROLE_HIERARCHY:
        inherited = inherited | _EXCLUSIVE_PERMISSIONS[role]
        table[role] = inherited
    return table


ROLE_PERMISSIONS: dict[RoleLevel, frozenset[str]] = _build_role_permissions()


@dataclass(frozen=True)
class Actor:
    """The user or service whose access is being evaluated.

    Attributes
    ----------
    id:
        Opaque identifier, recorded in the audit trail.
    role:
        The actor's role, or ``None`` for an actor with no privileges.
    """

    id: str
    role: RoleLevel | str | None = None


def role_level(role: object) -> RoleLevel | None:
    """Coerce *role* to a :class:`RoleLevel`, or ``None`` when unknown."""
    if isinstance(role, RoleLevel):
        return role
    if isinstance(role, str):
        try:
            return RoleLevel(role)
        except ValueError:
            return None
    return None


def actor_role(actor: object) -> RoleLevel | None:
    """Return the actor's role as a :class:`RoleLevel`.

    Accepts any object with a ``role`` attribute or any mapping with a
    ``"role"`` key.
    """
    if isinstance(actor, Mapping):
        raw = actor.get("role")
    else:
        raw = getattr(actor, "role", None)
    return role_level(raw)


def has_role(actor: object, required: RoleLevel | str) -> bool:
    """Return True when the actor's role ranks at or above *required*."""
    current = actor_role(actor)
    needed = role_level(required)
    if current is None or needed is None:
        return False
    return current.rank >= needed.rank


def has_any_role(actor: object, required_roles: Iterable[RoleLevel | str]) -> bool:
    """Return True when :func:`has_role` holds for at least one role.

    An empty collection never matches.
    """
    return any(has_role(actor, role) for role in required_roles)


def get_actor_permissions(actor: object) -> frozenset[str]:
    """Return the permission tokens granted by the actor's role."""
    role = actor_role(actor)
    if role is None:
        return frozenset()
    return ROLE_PERMISSIONS[role]


def has_permission(actor: object, permission: str) -> bool:
    """Return True when the actor's role grants *permission*."""
    return permission in get_actor_permissions(actor)
