"""preference-governance — policy-gated access control for preference values.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import preference_governance as gov
>>> gov.__version__
'0.1.0'
>>> access = gov.AccessControl(gov.StaticPolicySource([]))
>>> access.authorize({"id": "u1", "role": "security_admin"}, "read", "ui.theme").allowed
False
>>> gov.validate_temperature("openai", 0.7).valid
True
"""
from __future__ import annotations

__version__: str = "0.1.0"

from preference_governance.access.control import AccessControl

# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------
from preference_governance.roles.hierarchy import (
    ROLE_HIERARCHY,
    ROLE_PERMISSIONS,
    Actor,
    RoleLevel,
    get_actor_permissions,
    has_any_role,
    has_permission,
    has_role,
)

# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------
from preference_governance.policies.loader import PolicyConfigError, PolicyLoader
from preference_governance.policies.matcher import AuthorizationDecision, PolicyMatcher
from preference_governance.policies.policy import SecurityPolicy, matches_key
from preference_governance.policies.source import (
    CallablePolicySource,
    PolicyLookupError,
    PolicySource,
    StaticPolicySource,
)

# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------
from preference_governance.validators.llm import (
    validate_cost_config,
    validate_fallback_chain,
    validate_llm_preferences,
    validate_model_selection,
    validate_monitoring_config,
    validate_provider_selection,
    validate_temperature,
    validate_token_limit,
)
from preference_governance.validators.result import ValidationResult

# ---------------------------------------------------------------------------
# Audit and configuration
# ---------------------------------------------------------------------------
from preference_governance.audit.logger import AccessAuditLogger
from preference_governance.config.loader import ConfigLoader, GovernanceConfig

__all__ = [
    "__version__",
    "AccessControl",
    # Roles
    "ROLE_HIERARCHY",
    "ROLE_PERMISSIONS",
    "Actor",
    "RoleLevel",
    "get_actor_permissions",
    "has_any_role",
    "has_permission",
    "has_role",
    # Policies
    "AuthorizationDecision",
    "CallablePolicySource",
    "PolicyConfigError",
    "PolicyLoader",
    "PolicyLookupError",
    "PolicyMatcher",
    "PolicySource",
    "SecurityPolicy",
    "StaticPolicySource",
    "matches_key",
    # Validators
    "ValidationResult",
    "validate_cost_config",
    "validate_fallback_chain",
    "validate_llm_preferences",
    "validate_model_selection",
    "validate_monitoring_config",
    "validate_provider_selection",
    "validate_temperature",
    "validate_token_limit",
    # Audit and configuration
    "AccessAuditLogger",
    "ConfigLoader",
    "GovernanceConfig",
]
