"""Security policy package.

Exports the policy record, the injected policy-source abstraction, the
matcher producing authorization and approval decisions, and the YAML
loader for policy snapshots.
"""
from __future__ import annotations

from preference_governance.policies.loader import (
    PolicyConfigError,
    PolicyLoader,
    check_policy,
)
from preference_governance.policies.matcher import (
    DENIED_REASON,
    AuthorizationDecision,
    PolicyMatcher,
)
from preference_governance.policies.policy import (
    ALL_RESOURCES,
    POLICY_TYPES,
    SecurityPolicy,
    matches_key,
)
from preference_governance.policies.source import (
    CallablePolicySource,
    PolicyLookupError,
    PolicySource,
    StaticPolicySource,
)

__all__ = [
    "ALL_RESOURCES",
    "DENIED_REASON",
    "POLICY_TYPES",
    "AuthorizationDecision",
    "CallablePolicySource",
    "PolicyConfigError",
    "PolicyLoader",
    "PolicyLookupError",
    "PolicyMatcher",
    "PolicySource",
    "SecurityPolicy",
    "StaticPolicySource",
    "check_policy",
    "matches_key",
]
