"""YAML loader for security policy snapshots.

PolicyLoader reads policy files authored by security administrators and
builds a :class:`~preference_governance.policies.source.StaticPolicySource`.
Unlike :meth:`SecurityPolicy.from_dict`, which accepts any partial record a
store hands back, the loader enforces authoring rules:

- ``policy_type`` must be a known type
- ``priority`` must lie within 1..1000
- a policy with ``approval_required: true`` must list ``approval_roles``
- every approval role must rank at or above every required role
- ``preference_pattern`` may only use ``*`` as a trailing wildcard

Schema
------
::

    version: "1.0"
    policies:
      - policy_name: "llm-providers"
        resource_type: "all"
        preference_pattern: "llm.providers*"
        actions: ["update"]
        required_roles: ["admin"]
        approval_required: true
        approval_roles: ["security_admin"]
        priority: 500

Example
-------
::

    loader = PolicyLoader()
    source = loader.load("/etc/prefgov/policies.yaml")
    matcher = PolicyMatcher(source)
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

from preference_governance.policies.policy import (
    POLICY_TYPES,
    WILDCARD,
    SecurityPolicy,
)
from preference_governance.policies.source import StaticPolicySource

logger = logging.getLogger(__name__)

_SUPPORTED_VERSIONS: frozenset[str] = frozenset(["1.0", "1"])
_MIN_PRIORITY: int = 1
_MAX_PRIORITY: int = 1000


class PolicyConfigError(ValueError):
    """Raised when a policy file is malformed or a policy is inconsistent.

    Attributes
    ----------
    config_path:
        The path to the config file that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")


class PolicyLoader:
    """Loads security policy snapshots from YAML files, strings or dicts.

    Parameters
    ----------
    strict:
        When ``True``, unknown top-level keys are treated as an error.
        Default ``False`` (unknown keys are ignored).
    """

    _KNOWN_TOP_KEYS: frozenset[str] = frozenset(
        ["version", "policies", "metadata", "description"]
    )

    def __init__(self, strict: bool = False) -> None:
        self._strict = strict

    def load(self, config_path: str | Path) -> StaticPolicySource:
        """Load a policy snapshot from a YAML file on disk.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        PolicyConfigError
            If the file cannot be parsed or a policy is invalid.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Policy file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise PolicyConfigError(
                f"Failed to parse YAML: {exc}", str(config_path)
            ) from exc

        return self._build_source(raw, config_path=str(config_path))

    def load_from_dict(
        self,
        config: Mapping[str, object],
        config_path: str | None = None,
    ) -> StaticPolicySource:
        """Load a policy snapshot from an already-parsed config mapping."""
        return self._build_source(config, config_path=config_path)

    def load_from_yaml_string(
        self,
        yaml_string: str,
        config_path: str | None = None,
    ) -> StaticPolicySource:
        """Load a policy snapshot from a YAML string."""
        try:
            raw = yaml.safe_load(yaml_string) or {}
        except yaml.YAMLError as exc:
            raise PolicyConfigError(
                f"Failed to parse YAML string: {exc}", config_path
            ) from exc
        return self._build_source(raw, config_path=config_path)

    def parse_policies(
        self,
        raw_policies: list[Mapping[str, object]],
        config_path: str | None = None,
    ) -> list[SecurityPolicy]:
        """Parse and check a bare list of policy dicts."""
        policies: list[SecurityPolicy] = []
        for index, raw_policy in enumerate(raw_policies):
            if not isinstance(raw_policy, Mapping):
                raise PolicyConfigError(
                    f"Policy at index {index} must be a mapping.", config_path
                )
            try:
                policy = SecurityPolicy.from_dict(raw_policy)
                check_policy(policy)
            except (ValueError, TypeError) as exc:
                raise PolicyConfigError(
                    f"Error in policy at index {index}: {exc}", config_path
                ) from exc
            policies.append(policy)
        return policies

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_source(
        self,
        raw: Mapping[str, object],
        config_path: str | None = None,
    ) -> StaticPolicySource:
        """Validate and build a StaticPolicySource from a raw config mapping."""
        self._validate_structure(raw, config_path)

        version = str(raw.get("version", "1.0"))
        if version not in _SUPPORTED_VERSIONS:
            raise PolicyConfigError(
                f"Unsupported config version {version!r}. "
                f"Supported: {sorted(_SUPPORTED_VERSIONS)}.",
                config_path,
            )

        policies = self.parse_policies(list(raw["policies"]), config_path)  # type: ignore[arg-type]
        logger.info(
            "Loaded %d security policies from %s (%d active)",
            len(policies),
            config_path or "<dict>",
            sum(1 for p in policies if p.active),
        )
        return StaticPolicySource(policies)

    def _validate_structure(self, raw: object, config_path: str | None) -> None:
        if not isinstance(raw, Mapping):
            raise PolicyConfigError(
                "Policy config must be a YAML mapping (dict).", config_path
            )
        if "policies" not in raw:
            raise PolicyConfigError(
                "Policy config must contain a 'policies' list.", config_path
            )
        if not isinstance(raw["policies"], list):
            raise PolicyConfigError(
                "Policy config 'policies' must be a list.", config_path
            )
        if self._strict:
            unknown_keys = set(raw.keys()) - self._KNOWN_TOP_KEYS
            if unknown_keys:
                raise PolicyConfigError(
                    f"Unknown top-level keys: {sorted(unknown_keys)}. "
                    f"Known keys: {sorted(self._KNOWN_TOP_KEYS)}.",
                    config_path,
                )


def check_policy(policy: SecurityPolicy) -> None:
    """Enforce authoring rules on a single policy.

    Raises
    ------
    ValueError
        Describing the first rule the policy breaks.
    """
    name = policy.policy_name
    if policy.policy_type not in POLICY_TYPES:
        raise ValueError(
            f"Policy '{name}' has unknown policy_type {policy.policy_type!r}. "
            f"Valid: {sorted(POLICY_TYPES)}."
        )

    if not _MIN_PRIORITY <= policy.priority <= _MAX_PRIORITY:
        raise ValueError(
            f"Policy '{name}' priority must be between {_MIN_PRIORITY} and "
            f"{_MAX_PRIORITY}; got {policy.priority}."
        )

    pattern = policy.preference_pattern or ""
    if WILDCARD in pattern[:-1]:
        raise ValueError(
            f"Policy '{name}' pattern {pattern!r} may only end with '{WILDCARD}'."
        )

    if policy.approval_required and not policy.approval_roles:
        raise ValueError(
            f"Policy '{name}' requires approval but names no approval_roles."
        )

    for approver in policy.approval_roles:
        for required in policy.required_roles:
            if approver.rank < required.rank:
                raise ValueError(
                    f"Policy '{name}' approval role '{approver.value}' ranks below "
                    f"required role '{required.value}'."
                )
