"""Tests for AccessAuditLogger."""
from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from preference_governance.audit.logger import AccessAuditLogger


@pytest.fixture()
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "audit" / "access.jsonl"


@pytest.fixture()
def trail(log_path: Path) -> AccessAuditLogger:
    return AccessAuditLogger(log_path, session_id="test-session-123")


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    def test_custom_session_id(self, trail: AccessAuditLogger) -> None:
        assert trail.session_id == "test-session-123"

    def test_auto_session_id_generated(self, log_path: Path) -> None:
        assert AccessAuditLogger(log_path).session_id

    def test_log_path_property(self, trail: AccessAuditLogger, log_path: Path) -> None:
        assert trail.log_path == log_path


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


class TestLogAccess:
    def test_creates_parent_directories(self, trail: AccessAuditLogger, log_path: Path) -> None:
        trail.log_access("u1", "read", "ui.theme", allowed=True)
        assert log_path.exists()

    def test_record_fields(self, trail: AccessAuditLogger, log_path: Path) -> None:
        trail.log_access("u1", "update", "llm.openai.model", allowed=False, resource_type="user_preference")
        record = json.loads(log_path.read_text(encoding="utf-8").strip())
        assert record["event"] == "access_denied"
        assert record["actor_id"] == "u1"
        assert record["action"] == "update"
        assert record["preference_key"] == "llm.openai.model"
        assert record["resource_type"] == "user_preference"
        assert record["allowed"] is False
        assert record["session_id"] == "test-session-123"
        assert "timestamp" in record

    def test_session_stamped_on_every_record(self, trail: AccessAuditLogger) -> None:
        trail.log_access("u1", "read", "ui.theme", allowed=True)
        trail.log_access("u2", "delete", "ui.theme", allowed=False)
        assert {r["session_id"] for r in trail.decisions()} == {"test-session-123"}

    def test_unwritable_path_raises_os_error(self, tmp_path: Path) -> None:
        trail = AccessAuditLogger(tmp_path)
        with pytest.raises(OSError):
            trail.log_access("u1", "read", "ui.theme", allowed=True)


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


class TestDecisions:
    @pytest.fixture()
    def populated(self, trail: AccessAuditLogger) -> AccessAuditLogger:
        trail.log_access("u1", "read", "ui.theme", allowed=True)
        trail.log_access("u2", "read", "llm.openai.model", allowed=False)
        trail.log_access("u1", "update", "llm.openai.api_key", allowed=False)
        return trail

    def test_missing_file_reads_empty(self, trail: AccessAuditLogger) -> None:
        assert trail.decisions() == []
        assert trail.denials() == []

    def test_chronological_order(self, populated: AccessAuditLogger) -> None:
        assert [r["actor_id"] for r in populated.decisions()] == ["u1", "u2", "u1"]

    def test_filter_by_actor(self, populated: AccessAuditLogger) -> None:
        assert len(populated.decisions(actor_id="u1")) == 2
        assert populated.decisions(actor_id="nobody") == []

    def test_filter_by_exact_key(self, populated: AccessAuditLogger) -> None:
        records = populated.decisions(preference_key="ui.theme")
        assert [r["actor_id"] for r in records] == ["u1"]

    def test_filter_by_key_prefix(self, populated: AccessAuditLogger) -> None:
        records = populated.decisions(preference_key="llm.*")
        assert [r["preference_key"] for r in records] == ["llm.openai.model", "llm.openai.api_key"]

    def test_filter_by_outcome(self, populated: AccessAuditLogger) -> None:
        assert len(populated.decisions(allowed=True)) == 1
        assert len(populated.decisions(allowed=False)) == 2

    def test_denials_for_actor(self, populated: AccessAuditLogger) -> None:
        denied = populated.denials(actor_id="u1")
        assert [r["preference_key"] for r in denied] == ["llm.openai.api_key"]

    def test_combined_filters(self, populated: AccessAuditLogger) -> None:
        records = populated.decisions(actor_id="u1", preference_key="llm*", allowed=False)
        assert len(records) == 1

    def test_malformed_and_foreign_lines_skipped(self, trail: AccessAuditLogger, log_path: Path) -> None:
        trail.log_access("u1", "read", "ui.theme", allowed=True)
        with log_path.open("a", encoding="utf-8") as fh:
            fh.write("not json\n\n")
            fh.write(json.dumps({"event": "something_else"}) + "\n")
            fh.write("[1, 2]\n")
        assert len(trail.decisions()) == 1


class TestThreadSafety:
    def test_concurrent_writes(self, trail: AccessAuditLogger) -> None:
        def _write(index: int) -> None:
            for _ in range(20):
                trail.log_access(f"u{index}", "read", "ui.theme", allowed=True)

        threads = [threading.Thread(target=_write, args=(i,)) for i in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(trail.decisions()) == 100
        assert len(trail.decisions(actor_id="u3")) == 20
