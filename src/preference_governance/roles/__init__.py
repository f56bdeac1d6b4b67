"""Role hierarchy package.

Exports the role enumeration, the static role → permission table and the
pure lookup functions used by the policy matcher and the access facade.
"""
from __future__ import annotations

from preference_governance.roles.hierarchy import (
    ROLE_HIERARCHY,
    ROLE_PERMISSIONS,
    Actor,
    RoleLevel,
    actor_role,
    get_actor_permissions,
    has_any_role,
    has_permission,
    has_role,
    role_level,
)

__all__ = [
    "ROLE_HIERARCHY",
    "ROLE_PERMISSIONS",
    "Actor",
    "RoleLevel",
    "actor_role",
    "get_actor_permissions",
    "has_any_role",
    "has_permission",
    "has_role",
    "role_level",
]
