"""LLM provider preference validators.

Each function checks one kind of preference value against the static
tables in :mod:`preference_governance.validators.capabilities` and returns
a :class:`~preference_governance.validators.result.ValidationResult`.
None of them raise or touch external state, so they are safe to call from
any thread, before or alongside authorization.

Example
-------
>>> validate_temperature("anthropic", 1.1).error
'temperature must be between 0.0 and 1.0 for anthropic'
>>> bool(validate_fallback_chain(["anthropic", "openai"]))
True
"""
from __future__ import annotations

import logging
from collections.abc import Mapping

from preference_governance.validators.capabilities import (
    SUPPORTED_PROVIDERS,
    get_capabilities,
)
from preference_governance.validators.result import ValidationResult

logger = logging.getLogger(__name__)

MIN_HEALTH_CHECK_INTERVAL_MS: int = 10_000

_TOKEN_LIMIT_KEYS: tuple[str, ...] = ("daily_limit", "weekly_limit", "monthly_limit")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_sequence(value: object) -> bool:
    return isinstance(value, (list, tuple))


def _unknown_providers(values: list[object] | tuple[object, ...]) -> list[object]:
    return [v for v in values if v not in SUPPORTED_PROVIDERS]


# ---------------------------------------------------------------------------
# Provider / model
# ---------------------------------------------------------------------------


def validate_provider_selection(value: object) -> ValidationResult:
    """Validate a provider name or an ordered list of provider names."""
    if isinstance(value, str):
        if value in SUPPORTED_PROVIDERS:
            return ValidationResult.ok()
        return ValidationResult.fail(
            f"Invalid provider: {value}. Supported: {list(SUPPORTED_PROVIDERS)}"
        )

    if _is_sequence(value):
        invalid = _unknown_providers(value)  # type: ignore[arg-type]
        if invalid:
            return ValidationResult.fail(
                f"Invalid providers: {invalid!r}. Supported: {list(SUPPORTED_PROVIDERS)}"
            )
        return ValidationResult.ok()

    return ValidationResult.fail(
        "Provider selection must be a string or list of strings"
    )


def validate_model_selection(provider: str, model: object) -> ValidationResult:
    """Validate that *model* is offered by *provider*.

    The ``local`` provider accepts any non-empty model name.
    """
    capabilities = get_capabilities(provider)
    if capabilities is None:
        return ValidationResult.fail(f"Unknown provider: {provider}")

    if not isinstance(model, str) or not model.strip():
        return ValidationResult.fail(
            f"Model for {provider} must be a non-empty string, got: {model!r}"
        )

    if capabilities.models is None or model in capabilities.models:
        return ValidationResult.ok()

    return ValidationResult.fail(
        f"Invalid {provider} model: {model}. Supported: {sorted(capabilities.models)}"
    )


# ---------------------------------------------------------------------------
# Generation parameters
# ---------------------------------------------------------------------------


def validate_temperature(provider: str, value: object) -> ValidationResult:
    """Validate a sampling temperature against the provider's closed range."""
    capabilities = get_capabilities(provider)
    if capabilities is None:
        return ValidationResult.fail(f"Unknown provider: {provider}")

    low, high = capabilities.temperature_range
    if _is_number(value) and low <= value <= high:  # type: ignore[operator]
        return ValidationResult.ok()

    return ValidationResult.fail(
        f"temperature must be between {low} and {high} for {provider}"
    )


def validate_token_limit(provider: str, model: object, limit: object) -> ValidationResult:
    """Validate a max-token setting against the model's output ceiling.

    Models without a listed ceiling are held to
    :data:`~preference_governance.validators.capabilities.DEFAULT_MAX_OUTPUT_TOKENS`.
    """
    if not _is_positive_int(limit):
        return ValidationResult.fail(
            f"Token limit must be a positive integer, got: {limit!r}"
        )

    capabilities = get_capabilities(provider)
    if capabilities is None:
        return ValidationResult.fail(f"Unknown provider: {provider}")

    if not isinstance(model, str):
        return ValidationResult.fail(
            f"Model for {provider} must be a string, got: {model!r}"
        )

    ceiling = capabilities.token_ceiling(model)
    if limit > ceiling:  # type: ignore[operator]
        return ValidationResult.fail(
            f"Token limit {limit} exceeds model maximum of {ceiling} for {provider}/{model}"
        )
    return ValidationResult.ok()


def validate_fallback_chain(chain: object) -> ValidationResult:
    """Validate an ordered provider fallback chain.

    Every entry must be a known provider and no provider may appear twice.
    """
    if not _is_sequence(chain):
        return ValidationResult.fail("Fallback chain must be a list of provider names")

    invalid = _unknown_providers(chain)  # type: ignore[arg-type]
    if invalid:
        return ValidationResult.fail(
            f"Invalid providers in fallback chain: {invalid!r}"
        )

    if len(set(chain)) != len(chain):  # type: ignore[arg-type]
        return ValidationResult.fail("Fallback chain contains duplicate providers")

    return ValidationResult.ok()


# ---------------------------------------------------------------------------
# Cost and monitoring configuration
# ---------------------------------------------------------------------------


def validate_cost_config(config: object) -> ValidationResult:
    """Validate a cost optimisation configuration mapping.

    Required keys: ``quality_threshold`` in [0, 1], a positive
    ``cost_per_token_threshold`` and a ``token_usage_limits`` mapping.
    Within ``token_usage_limits`` the ``daily_limit``, ``weekly_limit`` and
    ``monthly_limit`` entries are optional but must be positive integers
    when present.
    """
    if not isinstance(config, Mapping):
        return ValidationResult.fail("Cost configuration must be a map")

    quality = config.get("quality_threshold")
    if not (_is_number(quality) and 0.0 <= quality <= 1.0):  # type: ignore[operator]
        return ValidationResult.fail(
            f"Quality threshold must be a number between 0.0 and 1.0, got: {quality!r}"
        )

    cost = config.get("cost_per_token_threshold")
    if not (_is_number(cost) and cost > 0):  # type: ignore[operator]
        return ValidationResult.fail(
            f"Cost threshold must be a positive number, got: {cost!r}"
        )

    limits = config.get("token_usage_limits")
    if not isinstance(limits, Mapping):
        return ValidationResult.fail(
            "Token usage limits must be a map of daily_limit, weekly_limit, monthly_limit"
        )
    for key in _TOKEN_LIMIT_KEYS:
        if key in limits and not _is_positive_int(limits[key]):
            return ValidationResult.fail(
                f"{key} must be a positive integer, got: {limits[key]!r}"
            )

    return ValidationResult.ok()


def validate_monitoring_config(config: object) -> ValidationResult:
    """Validate a provider health-monitoring configuration mapping.

    ``health_check_interval`` must be a whole number of milliseconds, at
    least :data:`MIN_HEALTH_CHECK_INTERVAL_MS`.  Entries of
    ``alert_thresholds`` are checked only when present.
    """
    if not isinstance(config, Mapping):
        return ValidationResult.fail("Monitoring configuration must be a map")

    if "health_check_interval" in config:
        interval = config["health_check_interval"]
        if not (_is_positive_int(interval) and interval >= MIN_HEALTH_CHECK_INTERVAL_MS):  # type: ignore[operator]
            return ValidationResult.fail(
                f"Health check interval must be an integer of at least "
                f"{MIN_HEALTH_CHECK_INTERVAL_MS} milliseconds, got: {interval!r}"
            )

    thresholds = config.get("alert_thresholds", {})
    if not isinstance(thresholds, Mapping):
        return ValidationResult.fail("Alert thresholds must be a map")

    for name in ("error_rate", "availability"):
        value = thresholds.get(name)
        if value is not None and not (_is_number(value) and 0.0 <= value <= 1.0):
            return ValidationResult.fail(
                f"{name} threshold must be between 0.0 and 1.0, got: {value!r}"
            )

    response_time = thresholds.get("response_time_ms")
    if response_time is not None and not (_is_number(response_time) and response_time > 0):
        return ValidationResult.fail(
            f"response_time_ms threshold must be positive, got: {response_time!r}"
        )

    return ValidationResult.ok()


# ---------------------------------------------------------------------------
# Whole preference sets
# ---------------------------------------------------------------------------


def validate_llm_preferences(preferences: Mapping[str, object]) -> ValidationResult:
    """Validate a flat mapping of ``llm.*`` preference keys as one set.

    Recognised keys::

        llm.providers.enabled          provider list
        llm.providers.primary          single provider, must be enabled
        llm.providers.fallback_chain   fallback chain
        llm.<provider>.model           model for that provider
        llm.<provider>.temperature     temperature for that provider
        llm.<provider>.max_tokens      checked against the configured model
        llm.cost                       cost configuration
        llm.monitoring                 monitoring configuration

    Unrecognised keys are ignored.  Keys are checked in sorted order and
    the first failure is returned.
    """
    for key in sorted(preferences):
        result = _validate_llm_key(key, preferences[key], preferences)
        if not result:
            logger.debug("LLM preference %s rejected: %s", key, result.error)
            return ValidationResult.fail(f"{key}: {result.error}")

    enabled = preferences.get("llm.providers.enabled")
    primary = preferences.get("llm.providers.primary")
    if _is_sequence(enabled) and primary is not None and primary not in enabled:  # type: ignore[operator]
        return ValidationResult.fail(
            f"llm.providers.primary: provider {primary!r} is not in llm.providers.enabled"
        )

    return ValidationResult.ok()


def _validate_llm_key(
    key: str,
    value: object,
    preferences: Mapping[str, object],
) -> ValidationResult:
    match key.split("."):
        case ["llm", "providers", "enabled"]:
            return validate_provider_selection(value)
        case ["llm", "providers", "primary"]:
            if not isinstance(value, str):
                return ValidationResult.fail("Primary provider must be a single provider name")
            return validate_provider_selection(value)
        case ["llm", "providers", "fallback_chain"]:
            return validate_fallback_chain(value)
        case ["llm", "cost"]:
            return validate_cost_config(value)
        case ["llm", "monitoring"]:
            return validate_monitoring_config(value)
        case ["llm", provider, "model"] if provider in SUPPORTED_PROVIDERS:
            return validate_model_selection(provider, value)
        case ["llm", provider, "temperature"] if provider in SUPPORTED_PROVIDERS:
            return validate_temperature(provider, value)
        case ["llm", provider, "max_tokens"] if provider in SUPPORTED_PROVIDERS:
            capabilities = get_capabilities(provider)
            default_model = capabilities.default_model if capabilities else ""
            model = preferences.get(f"llm.{provider}.model", default_model)
            return validate_token_limit(provider, model, value)
        case _:
            return ValidationResult.ok()
