"""Preference value validators.

Pure functions enforcing semantic constraints on LLM provider preferences.
"""
from __future__ import annotations

from preference_governance.validators.capabilities import (
    PROVIDER_CAPABILITIES,
    SUPPORTED_PROVIDERS,
    ProviderCapabilities,
    get_capabilities,
)
from preference_governance.validators.llm import (
    MIN_HEALTH_CHECK_INTERVAL_MS,
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

__all__ = [
    "MIN_HEALTH_CHECK_INTERVAL_MS",
    "PROVIDER_CAPABILITIES",
    "SUPPORTED_PROVIDERS",
    "ProviderCapabilities",
    "ValidationResult",
    "get_capabilities",
    "validate_cost_config",
    "validate_fallback_chain",
    "validate_llm_preferences",
    "validate_model_selection",
    "validate_monitoring_config",
    "validate_provider_selection",
    "validate_temperature",
    "validate_token_limit",
]
