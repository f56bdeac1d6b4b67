"""Access control facade — the single decision surface for callers.

UI handlers, API endpoints and automation talk to :class:`AccessControl`
only; they never reach into the role table or the policy matcher
directly.

Example
-------
::

    from preference_governance import AccessControl, StaticPolicySource

    access = AccessControl(StaticPolicySource([
        {"policy_name": "ui", "preference_pattern": "ui*", "required_roles": ["user"]},
    ]))
    actor = {"id": "u1", "role": "user"}
    if access.authorize(actor, "update", "ui.theme"):
        needs_gate = access.requires_approval("ui.theme", "update")
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from preference_governance.audit.logger import AccessAuditLogger
from preference_governance.config.loader import GovernanceConfig
from preference_governance.policies.loader import PolicyLoader
from preference_governance.policies.matcher import AuthorizationDecision, PolicyMatcher
from preference_governance.policies.policy import SecurityPolicy
from preference_governance.policies.source import PolicySource, StaticPolicySource
from preference_governance.roles.hierarchy import (
    RoleLevel,
    get_actor_permissions,
    has_any_role,
    has_permission,
    has_role,
)

logger = logging.getLogger(__name__)


class AccessControl:
    """Role checks, permission checks and policy-backed decisions in one place.

    Holds no state of its own between calls; one instance per process is
    enough.

    Parameters
    ----------
    policy_source:
        Where active security policies are fetched from.
    audit_logger:
        Optional trail receiving one record per :meth:`authorize` call.
    """

    def __init__(
        self,
        policy_source: PolicySource,
        audit_logger: AccessAuditLogger | None = None,
    ) -> None:
        self._matcher = PolicyMatcher(policy_source)
        self._audit = audit_logger

    @classmethod
    def from_config(cls, config: GovernanceConfig) -> AccessControl:
        """Build a facade from a loaded :class:`GovernanceConfig`.

        Policies from every ``policy_files`` entry and the inline
        ``policies`` list are combined into one static snapshot.
        """
        loader = PolicyLoader()
        policies: list[SecurityPolicy] = []
        for path in config.policy_files:
            policies.extend(loader.load(path).policies)
        policies.extend(loader.parse_policies(config.policies, "<inline>"))

        audit_logger = None
        if config.audit.enabled:
            audit_logger = AccessAuditLogger(
                config.audit.log_path, session_id=config.audit.session_id
            )

        logger.info(
            "AccessControl configured with %d policies (audit=%s)",
            len(policies),
            config.audit.enabled,
        )
        return cls(StaticPolicySource(policies), audit_logger=audit_logger)

    # ------------------------------------------------------------------
    # Role and permission queries
    # ------------------------------------------------------------------

    def check_role(self, actor: object, required: RoleLevel | str) -> bool:
        """Return True when the actor ranks at or above *required*."""
        return has_role(actor, required)

    def check_any_role(
        self, actor: object, required_roles: Iterable[RoleLevel | str]
    ) -> bool:
        """Return True when the actor satisfies at least one of *required_roles*."""
        return has_any_role(actor, required_roles)

    def permissions(self, actor: object) -> frozenset[str]:
        """Return the permission tokens held by the actor."""
        return get_actor_permissions(actor)

    def check_permission(self, actor: object, permission: str) -> bool:
        """Return True when the actor holds *permission*."""
        return has_permission(actor, permission)

    # ------------------------------------------------------------------
    # Policy-backed decisions
    # ------------------------------------------------------------------

    def authorize(
        self,
        actor: object,
        action: str,
        preference_key: str,
        resource_type: str | None = None,
        policies: Sequence[SecurityPolicy] | None = None,
    ) -> AuthorizationDecision:
        """Decide whether *actor* may perform *action* on *preference_key*.

        Denied unless an active policy explicitly grants access.  See
        :meth:`PolicyMatcher.authorize`.  A failure to write the audit
        record is logged and does not change the decision.
        """
        decision = self._matcher.authorize(
            actor, action, preference_key, resource_type=resource_type, policies=policies
        )
        if self._audit is not None:
            try:
                self._audit.log_access(
                    actor_id=_actor_id(actor),
                    action=action,
                    preference_key=preference_key,
                    allowed=decision.allowed,
                    resource_type=resource_type,
                )
            except OSError as exc:
                logger.warning("Failed to record access decision: %s", exc)
        return decision

    def requires_approval(
        self,
        preference_key: str,
        action: str,
        resource_type: str | None = None,
        policies: Sequence[SecurityPolicy] | None = None,
    ) -> bool:
        """Return True if the change needs a human approval.

        True whenever the policy state cannot be determined.
        """
        return self._matcher.approval_required(
            preference_key, action, resource_type=resource_type, policies=policies
        )

    def can_approve(
        self,
        actor: object,
        preference_key: str,
        action: str,
        resource_type: str | None = None,
        policies: Sequence[SecurityPolicy] | None = None,
    ) -> bool:
        """Return True if *actor* may approve a gated change to *preference_key*."""
        approvers = self._matcher.approval_roles(
            preference_key, action, resource_type=resource_type, policies=policies
        )
        return has_any_role(actor, approvers)

    @property
    def matcher(self) -> PolicyMatcher:
        """The underlying policy matcher."""
        return self._matcher


def _actor_id(actor: object) -> str | None:
    raw = actor.get("id") if isinstance(actor, Mapping) else getattr(actor, "id", None)
    return None if raw is None else str(raw)
