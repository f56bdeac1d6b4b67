"""Governance configuration loader with Pydantic v2 validation.

Loads a ``preference_governance.yaml`` file into a typed
:class:`GovernanceConfig`.  Unknown keys are allowed so that newer files
keep loading on older releases.

Example
-------
>>> loader = ConfigLoader()
>>> config = loader.load(Path("preference_governance.yaml"))
>>> config.audit.enabled
True
"""
from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator


class AuditConfig(BaseModel):
    """Configuration for the access decision audit trail."""

    model_config = {"extra": "allow"}

    enabled: bool = Field(default=False)
    log_path: Path = Field(default=Path("./preference_access_audit.jsonl"))
    session_id: str | None = Field(default=None)


class GovernanceConfig(BaseModel):
    """Top-level configuration schema.

    ``policy_files`` are YAML policy snapshots read by
    :class:`~preference_governance.policies.loader.PolicyLoader`;
    ``policies`` holds inline policy dicts.  Both are merged.
    """

    model_config = {"extra": "allow"}

    version: str = Field(default="1")
    policy_files: list[Path] = Field(default_factory=list)
    policies: list[dict[str, object]] = Field(default_factory=list)
    audit: AuditConfig = Field(default_factory=AuditConfig)

    @field_validator("version", mode="before")
    @classmethod
    def validate_version(cls, value: object) -> str:
        value = str(value)
        if value not in {"1", "1.0"}:
            raise ValueError(f"Unsupported config version '{value}'. Valid: ['1', '1.0']")
        return value


class ConfigLoader:
    """Loads and validates governance YAML configuration."""

    def load(self, config_path: Path) -> GovernanceConfig:
        """Load and validate a governance YAML file.

        Relative ``policy_files`` entries are resolved against the
        directory holding *config_path*.

        Raises
        ------
        FileNotFoundError:
            When the config file does not exist.
        pydantic.ValidationError:
            When the YAML content fails validation.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Governance config not found: {config_path}")

        with config_path.open("r", encoding="utf-8") as fh:
            raw: dict[str, object] = yaml.safe_load(fh) or {}

        config = GovernanceConfig.model_validate(raw)
        base_dir = config_path.parent
        config.policy_files = [
            path if path.is_absolute() else base_dir / path
            for path in config.policy_files
        ]
        return config

    def load_string(self, yaml_content: str) -> GovernanceConfig:
        """Load and validate a YAML string directly."""
        raw: dict[str, object] = yaml.safe_load(yaml_content) or {}
        return GovernanceConfig.model_validate(raw)

    def defaults(self) -> GovernanceConfig:
        """Return a configuration with every default applied."""
        return GovernanceConfig()
