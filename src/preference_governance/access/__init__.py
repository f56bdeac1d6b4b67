"""Access control facade package."""
from __future__ import annotations

from preference_governance.access.control import AccessControl

__all__ = ["AccessControl"]
