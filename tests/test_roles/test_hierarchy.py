"""Tests for the role hierarchy and permission table."""
from __future__ import annotations

import pytest

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


# ---------------------------------------------------------------------------
# role_level / actor_role
# ---------------------------------------------------------------------------


class TestRoleCoercion:
    def test_string_coerced(self) -> None:
        assert role_level("admin") is RoleLevel.ADMIN

    def test_enum_passthrough(self) -> None:
        assert role_level(RoleLevel.USER) is RoleLevel.USER

    def test_unknown_string_is_none(self) -> None:
        assert role_level("superuser") is None

    def test_non_string_is_none(self) -> None:
        assert role_level(42) is None
        assert role_level(None) is None

    def test_actor_role_from_mapping(self) -> None:
        assert actor_role({"role": "project_admin"}) is RoleLevel.PROJECT_ADMIN

    def test_actor_role_from_object(self) -> None:
        assert actor_role(Actor(id="u1", role="read_only")) is RoleLevel.READ_ONLY

    def test_actor_role_missing(self) -> None:
        assert actor_role({}) is None
        assert actor_role(object()) is None

    def test_ranks_follow_declaration_order(self) -> None:
        assert [r.rank for r in ROLE_HIERARCHY] == [0, 1, 2, 3, 4]


# ---------------------------------------------------------------------------
# has_role
# ---------------------------------------------------------------------------


class TestHasRole:
    def test_exact_match(self) -> None:
        assert has_role({"role": "admin"}, "admin")

    @pytest.mark.parametrize("required", list(RoleLevel))
    def test_security_admin_has_every_role(self, required: RoleLevel) -> None:
        assert has_role({"role": RoleLevel.SECURITY_ADMIN}, required)

    def test_user_is_not_project_admin(self) -> None:
        actor = {"role": "user"}
        assert has_role(actor, RoleLevel.PROJECT_ADMIN) is False
        assert has_role(actor, RoleLevel.READ_ONLY) is True

    def test_admin_is_not_security_admin(self) -> None:
        assert has_role({"role": "admin"}, "security_admin") is False

    def test_read_only_has_no_elevated_role(self) -> None:
        assert has_role({"role": "read_only"}, "user") is False

    def test_missing_role_is_false(self) -> None:
        assert has_role({}, "read_only") is False
        assert has_role(Actor(id="anon"), "read_only") is False

    def test_unknown_actor_role_is_false(self) -> None:
        assert has_role({"role": "unknown_role"}, "read_only") is False

    def test_unknown_required_role_is_false(self) -> None:
        assert has_role({"role": "security_admin"}, "root") is False


class TestHasAnyRole:
    def test_matches_one_of(self) -> None:
        actor = {"role": "project_admin"}
        assert has_any_role(actor, ["user", "project_admin", "admin"])

    def test_higher_role_satisfies_lower(self) -> None:
        assert has_any_role({"role": "admin"}, ["user", "project_admin"])

    def test_none_match(self) -> None:
        assert has_any_role({"role": "read_only"}, ["admin", "security_admin"]) is False

    @pytest.mark.parametrize("role", [None, "read_only", "security_admin"])
    def test_empty_list_is_false(self, role: str | None) -> None:
        assert has_any_role({"role": role}, []) is False


# ---------------------------------------------------------------------------
# Permissions
# ---------------------------------------------------------------------------


class TestActorPermissions:
    def test_read_only(self) -> None:
        permissions = get_actor_permissions({"role": "read_only"})
        assert "read_preferences" in permissions
        assert "write_preferences" not in permissions

    def test_user(self) -> None:
        permissions = get_actor_permissions({"role": "user"})
        assert {"read_preferences", "write_own_preferences", "read_own_preferences"} <= permissions

    def test_admin(self) -> None:
        permissions = get_actor_permissions({"role": "admin"})
        assert {
            "read_preferences",
            "write_preferences",
            "read_all_preferences",
            "manage_overrides",
        } <= permissions

    def test_security_admin_exclusive_tokens(self) -> None:
        permissions = get_actor_permissions({"role": "security_admin"})
        exclusive = {"manage_security_policies", "access_audit_logs", "manage_delegations"}
        assert exclusive <= permissions
        assert not exclusive & get_actor_permissions({"role": "admin"})

    def test_unknown_role_is_empty(self) -> None:
        assert get_actor_permissions({"role": "unknown_role"}) == frozenset()

    def test_missing_role_is_empty(self) -> None:
        assert get_actor_permissions({}) == frozenset()

    def test_admin_strict_subset_of_security_admin(self) -> None:
        assert ROLE_PERMISSIONS[RoleLevel.ADMIN] < ROLE_PERMISSIONS[RoleLevel.SECURITY_ADMIN]

    def test_inheritance_is_monotonic(self) -> None:
        for lower, higher in zip(ROLE_HIERARCHY, ROLE_HIERARCHY[1:]):
            assert ROLE_PERMISSIONS[lower] < ROLE_PERMISSIONS[higher]


class TestHasPermission:
    def test_granted(self) -> None:
        assert has_permission({"role": "admin"}, "write_preferences")

    def test_denied(self) -> None:
        assert has_permission({"role": "read_only"}, "write_preferences") is False

    def test_no_role(self) -> None:
        assert has_permission({}, "read_preferences") is False
