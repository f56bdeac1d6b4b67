"""Security policy records and key pattern matching.

A :class:`SecurityPolicy` is a read-only snapshot of a rule owned by an
external policy store.  The engine only ever reads policies; creating,
updating and deactivating them happens elsewhere.

Pattern semantics
-----------------
``preference_pattern`` is matched against a dot-separated preference key:

- ``None`` or ``""`` matches every key
- a pattern ending in ``*`` matches any key starting with the text before
  the ``*`` (``"api*"`` matches ``"api.key"`` and ``"api"``)
- any other pattern matches only the identical key

Example
-------
::

    policy = SecurityPolicy.from_dict(
        {
            "policy_name": "llm-keys",
            "resource_type": "user_preference",
            "preference_pattern": "llm.*",
            "required_roles": ["admin"],
            "approval_required": True,
            "approval_roles": ["security_admin"],
        }
    )
    assert matches_key(policy, "llm.openai.api_key")
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from preference_governance.roles.hierarchy import (
    RoleLevel,
    actor_role,
    get_actor_permissions,
    has_any_role,
    role_level,
)

WILDCARD: str = "*"
ALL_RESOURCES: str = "all"

POLICY_TYPES: frozenset[str] = frozenset(
    [
        "access_control",
        "approval_required",
        "encryption_required",
        "audit_required",
    ]
)


@dataclass(frozen=True)
class SecurityPolicy:
    """A single access rule keyed by a preference-key pattern.

    Attributes
    ----------
    policy_name:
        Human-readable identifier, used in logs only.
    resource_type:
        Resource type the policy governs (``"user_preference"``,
        ``"project_preference"``...) or ``"all"``.
    preference_pattern:
        Key pattern; see the module docstring.
    policy_type:
        One of :data:`POLICY_TYPES`.
    actions:
        Actions the policy covers.  Empty means every action.
    required_roles:
        The actor must hold at least one of these roles (or a higher one).
        Empty means no role requirement.
    required_permissions:
        The actor must hold every one of these tokens.  Empty means no
        permission requirement.
    approval_required:
        Whether actions under this policy need a human approval.
    approval_roles:
        Roles allowed to approve actions under this policy.
    priority:
        Higher numbers are evaluated first.
    active:
        Inactive policies never participate in a decision.
    """

    policy_name: str
    resource_type: str = ALL_RESOURCES
    preference_pattern: str | None = None
    policy_type: str = "access_control"
    actions: tuple[str, ...] = ()
    required_roles: tuple[RoleLevel, ...] = ()
    required_permissions: tuple[str, ...] = ()
    approval_required: bool = False
    approval_roles: tuple[RoleLevel, ...] = ()
    priority: int = 100
    active: bool = True
    description: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> SecurityPolicy:
        """Build a SecurityPolicy from a plain dictionary.

        Missing fields take their defaults, so partial records coming from
        a store (``{"approval_required": True, "active": True}``) are
        accepted.

        Raises
        ------
        ValueError
            If a role name is unknown or a boolean field is not a boolean.
        """
        name = str(data.get("policy_name", data.get("name", "unnamed")))

        approval_raw = data.get("approval_required", False)
        active_raw = data.get("active", True)
        for field_name, raw in (("approval_required", approval_raw), ("active", active_raw)):
            if not isinstance(raw, bool):
                raise ValueError(
                    f"SecurityPolicy.{field_name} must be a boolean; got {raw!r}."
                )

        pattern_raw = data.get("preference_pattern")
        description_raw = data.get("description")

        return cls(
            policy_name=name,
            resource_type=str(data.get("resource_type", ALL_RESOURCES)),
            preference_pattern=None if pattern_raw is None else str(pattern_raw),
            policy_type=str(data.get("policy_type", "access_control")),
            actions=_str_tuple(data.get("actions")),
            required_roles=_parse_roles(name, data.get("required_roles")),
            required_permissions=_str_tuple(data.get("required_permissions")),
            approval_required=approval_raw,
            approval_roles=_parse_roles(name, data.get("approval_roles")),
            priority=int(data.get("priority", 100)),  # type: ignore[call-overload]
            active=active_raw,
            description=None if description_raw is None else str(description_raw),
        )

    def covers_action(self, action: str) -> bool:
        """Return True if the policy applies to *action*."""
        return not self.actions or action in self.actions

    def covers_resource(self, resource_type: str | None) -> bool:
        """Return True if the policy applies to *resource_type*.

        ``None`` means the caller did not scope the request, so every
        policy applies.
        """
        if resource_type is None:
            return True
        return self.resource_type in (ALL_RESOURCES, resource_type)

    def grants(self, actor: object) -> bool:
        """Return True when *actor* meets both the role and permission requirements.

        An actor without a recognised role is never granted, even by a
        policy with no requirements.
        """
        if actor_role(actor) is None:
            return False
        if self.required_roles and not has_any_role(actor, self.required_roles):
            return False
        if self.required_permissions:
            held = get_actor_permissions(actor)
            return all(p in held for p in self.required_permissions)
        return True


def matches_key(policy: SecurityPolicy, preference_key: str) -> bool:
    """Return True if the policy's pattern matches *preference_key*."""
    pattern = policy.preference_pattern
    if not pattern:
        return True
    if pattern.endswith(WILDCARD):
        return preference_key.startswith(pattern[: -len(WILDCARD)])
    return pattern == preference_key


def _str_tuple(raw: object) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        return (raw,)
    return tuple(str(item) for item in raw)  # type: ignore[union-attr]


def _parse_roles(policy_name: str, raw: object) -> tuple[RoleLevel, ...]:
    if raw is None:
        return ()
    if isinstance(raw, (str, RoleLevel)):
        raw = [raw]
    roles: list[RoleLevel] = []
    for item in raw:  # type: ignore[union-attr]
        role = role_level(item)
        if role is None:
            raise ValueError(f"Policy '{policy_name}' names unknown role {item!r}.")
        roles.append(role)
    return tuple(roles)
