"""Append-only JSONL audit trail of preference access decisions.

Every authorization decision made through the access facade can be
recorded as one JSON line.  Each record carries a UTC ISO-8601 timestamp,
a session identifier, the actor id, the action, the preference key and the
outcome.  The name of the policy behind a denial is never written.

Writes are serialised with a threading.Lock so the trail is safe to share
between threads within one process.

Example
-------
>>> from pathlib import Path
>>> trail = AccessAuditLogger(Path("/tmp/access.jsonl"))
>>> trail.log_access(actor_id="u1", action="update", preference_key="llm.openai.model", allowed=False)
>>> [r["preference_key"] for r in trail.denials(actor_id="u1")]
['llm.openai.model']
"""
from __future__ import annotations

import json
import logging
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

GRANTED_EVENT: str = "access_granted"
DENIED_EVENT: str = "access_denied"


class AccessAuditLogger:
    """Append-only JSONL audit logger for access decisions.

    Parameters
    ----------
    log_path:
        Path to the ``.jsonl`` audit file.  Parent directories are created
        on first write.
    session_id:
        Optional session identifier stamped on every record.  A random UUID
        is generated if not supplied.
    """

    def __init__(
        self,
        log_path: Path,
        session_id: str | None = None,
    ) -> None:
        self._log_path = Path(log_path)
        self._session_id: str = session_id or str(uuid.uuid4())
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Write API
    # ------------------------------------------------------------------

    def log_access(
        self,
        actor_id: str | None,
        action: str,
        preference_key: str,
        allowed: bool,
        resource_type: str | None = None,
    ) -> None:
        """Record one authorization decision.

        Raises
        ------
        OSError
            If the audit file cannot be written.
        """
        record: dict[str, object] = {
            "event": GRANTED_EVENT if allowed else DENIED_EVENT,
            "actor_id": actor_id,
            "action": action,
            "preference_key": preference_key,
            "resource_type": resource_type,
            "allowed": allowed,
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
            "session_id": self._session_id,
        }
        line = json.dumps(record, default=str) + "\n"
        with self._lock:
            self._log_path.parent.mkdir(parents=True, exist_ok=True)
            with self._log_path.open("a", encoding="utf-8") as fh:
                fh.write(line)

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    def decisions(
        self,
        actor_id: str | None = None,
        preference_key: str | None = None,
        allowed: bool | None = None,
    ) -> list[dict[str, object]]:
        """Return recorded access decisions, oldest first.

        Parameters
        ----------
        actor_id:
            Only decisions about this actor.
        preference_key:
            Only decisions about this key.  A trailing ``*`` selects every
            key starting with the text before it (``"llm.*"``).
        allowed:
            Only granted (``True``) or denied (``False``) decisions.

        Filters left as ``None`` match every record.  A missing file reads
        as an empty trail.
        """
        return [
            record
            for record in self._load()
            if (actor_id is None or record.get("actor_id") == actor_id)
            and (allowed is None or record.get("allowed") is allowed)
            and _key_selected(preference_key, record.get("preference_key"))
        ]

    def denials(self, actor_id: str | None = None) -> list[dict[str, object]]:
        """Return denied decisions, optionally for one actor only."""
        return self.decisions(actor_id=actor_id, allowed=False)

    def _load(self) -> list[dict[str, object]]:
        with self._lock:
            try:
                lines = self._log_path.read_text(encoding="utf-8").splitlines()
            except FileNotFoundError:
                return []

        records: list[dict[str, object]] = []
        for number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                logger.warning("Skipping malformed audit line %d in %s", number, self._log_path)
                continue
            if isinstance(record, dict) and record.get("event") in (GRANTED_EVENT, DENIED_EVENT):
                records.append(record)
        return records

    @property
    def log_path(self) -> Path:
        """The filesystem path of the audit log file."""
        return self._log_path

    @property
    def session_id(self) -> str:
        """The session identifier stamped on every record."""
        return self._session_id


def _key_selected(selector: str | None, key: object) -> bool:
    if selector is None:
        return True
    if not isinstance(key, str):
        return False
    if selector.endswith("*"):
        return key.startswith(selector[:-1])
    return key == selector
