"""Access decision audit trail."""
from __future__ import annotations

from preference_governance.audit.logger import AccessAuditLogger

__all__ = ["AccessAuditLogger"]
