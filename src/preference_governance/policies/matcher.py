"""Security policy matcher — authorization and approval decisions per key.

The matcher pulls the active policy set from an injected
:class:`~preference_governance.policies.source.PolicySource` and decides:

- **authorization** — fail-closed.  Access is granted only when an active
  policy matching the key and action grants it to the actor.  No policy,
  or a failed policy fetch, means denied.
- **approval requirement** — fail-safe.  Any applicable policy demanding
  approval wins (logical OR).  A failed policy fetch means approval is
  required.

Example
-------
::

    matcher = PolicyMatcher(StaticPolicySource([
        {"policy_name": "api", "preference_pattern": "api*",
         "required_roles": ["admin"], "approval_required": True},
    ]))
    decision = matcher.authorize({"id": "u1", "role": "admin"}, "update", "api.key")
    assert decision.allowed
    assert matcher.approval_required("api.key", "update")
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from preference_governance.policies.policy import SecurityPolicy, matches_key
from preference_governance.policies.source import PolicySource
from preference_governance.roles.hierarchy import RoleLevel

logger = logging.getLogger(__name__)

DENIED_REASON: str = "not authorized"


@dataclass(frozen=True)
class AuthorizationDecision:
    """Immutable outcome of an authorization check.

    Attributes
    ----------
    allowed:
        Whether the action is permitted.
    reason:
        Human-readable explanation.  Denials always carry the generic
        :data:`DENIED_REASON` so the rejecting policy is never disclosed.
    action:
        The action that was checked.
    preference_key:
        The preference key that was checked.
    matched_policy:
        Name of the granting policy, or ``None`` on denial.
    """

    allowed: bool
    reason: str
    action: str
    preference_key: str
    matched_policy: str | None = None

    def __bool__(self) -> bool:
        """Return True if access is granted."""
        return self.allowed

    @classmethod
    def deny(cls, action: str, preference_key: str) -> AuthorizationDecision:
        return cls(
            allowed=False,
            reason=DENIED_REASON,
            action=action,
            preference_key=preference_key,
        )


class PolicyMatcher:
    """Evaluates security policies against (actor, action, key) requests.

    Every public method accepts an optional ``policies`` snapshot.  When
    given, the source is not consulted, which lets a caller make several
    decisions against one consistent view of the policy store.

    Parameters
    ----------
    source:
        Where active policies are fetched from on each decision.
    """

    def __init__(self, source: PolicySource) -> None:
        self._source = source

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def applicable(
        self,
        policies: Iterable[SecurityPolicy],
        preference_key: str,
        action: str,
        resource_type: str | None = None,
    ) -> list[SecurityPolicy]:
        """Filter *policies* down to those governing this request.

        Returns active policies whose pattern matches the key and which
        cover the action and resource type, highest priority first.
        """
        matching = [
            p
            for p in policies
            if p.active
            and matches_key(p, preference_key)
            and p.covers_action(action)
            and p.covers_resource(resource_type)
        ]
        return sorted(matching, key=lambda p: p.priority, reverse=True)

    def authorize(
        self,
        actor: object,
        action: str,
        preference_key: str,
        resource_type: str | None = None,
        policies: Sequence[SecurityPolicy] | None = None,
    ) -> AuthorizationDecision:
        """Decide whether *actor* may perform *action* on *preference_key*.

        Parameters
        ----------
        actor:
            Object or mapping exposing an optional ``role``.
        action:
            The requested action (``"read"``, ``"update"``...).
        preference_key:
            Dot-separated preference key.
        resource_type:
            Optional resource type scope (``"user_preference"``...).
        policies:
            Optional pre-fetched snapshot.

        Returns
        -------
        AuthorizationDecision
            Denied unless an applicable policy explicitly grants access.
        """
        snapshot = self._snapshot(policies)
        if snapshot is None:
            return AuthorizationDecision.deny(action, preference_key)

        for policy in self.applicable(snapshot, preference_key, action, resource_type):
            if policy.grants(actor):
                logger.debug(
                    "Authorization ALLOW: action=%s key=%s policy=%s",
                    action,
                    preference_key,
                    policy.policy_name,
                )
                return AuthorizationDecision(
                    allowed=True,
                    reason=f"Granted by policy '{policy.policy_name}'.",
                    action=action,
                    preference_key=preference_key,
                    matched_policy=policy.policy_name,
                )

        logger.debug(
            "Authorization DENY: action=%s key=%s (no granting policy)",
            action,
            preference_key,
        )
        return AuthorizationDecision.deny(action, preference_key)

    def approval_required(
        self,
        preference_key: str,
        action: str,
        resource_type: str | None = None,
        policies: Sequence[SecurityPolicy] | None = None,
    ) -> bool:
        """Return True if changing *preference_key* needs a human approval.

        Any applicable policy with ``approval_required`` set wins.  When
        the policy fetch fails the answer is ``True``.
        """
        snapshot = self._snapshot(policies)
        if snapshot is None:
            return True
        return any(
            p.approval_required
            for p in self.applicable(snapshot, preference_key, action, resource_type)
        )

    def approval_roles(
        self,
        preference_key: str,
        action: str,
        resource_type: str | None = None,
        policies: Sequence[SecurityPolicy] | None = None,
    ) -> frozenset[RoleLevel]:
        """Return the roles allowed to approve a change to *preference_key*.

        The union of ``approval_roles`` over every applicable policy that
        requires approval.  Empty when the fetch fails.
        """
        snapshot = self._snapshot(policies)
        if snapshot is None:
            return frozenset()
        roles: set[RoleLevel] = set()
        for policy in self.applicable(snapshot, preference_key, action, resource_type):
            if policy.approval_required:
                roles.update(policy.approval_roles)
        return frozenset(roles)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _snapshot(
        self,
        policies: Sequence[SecurityPolicy] | None,
    ) -> Sequence[SecurityPolicy] | None:
        """Return the policies to decide against, or None if the fetch failed."""
        if policies is not None:
            return policies
        try:
            return self._source.active_policies()
        except Exception as exc:  # noqa: BLE001 - any store failure is folded into the decision
            logger.warning("Failed to fetch security policies: %s", exc)
            return None
