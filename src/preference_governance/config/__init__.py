"""Governance configuration package."""
from __future__ import annotations

from preference_governance.config.loader import (
    AuditConfig,
    ConfigLoader,
    GovernanceConfig,
)

__all__ = ["AuditConfig", "ConfigLoader", "GovernanceConfig"]
