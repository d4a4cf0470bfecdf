"""Tests for the execution session state and log buffer."""

from __future__ import annotations

import pathlib
import sys
from datetime import datetime

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.flowcrm.graph.session import ExecutionSession


def test_execution_session_lifecycle():
    session = ExecutionSession()
    session.add_log({"message": "stale"})

    session.start()
    assert session.is_executing is True
    assert session.logs == []

    entry = session.add_log({"message": "Transcribed", "nodeId": "n1", "timestamp": "ignored"})
    assert entry["message"] == "Transcribed"
    assert entry["nodeId"] == "n1"
    assert isinstance(entry["timestamp"], datetime)
    assert entry["timestamp"].tzinfo is not None

    session.stop()
    assert session.is_executing is False
    assert session.logs == [entry]

    session.clear_logs()
    assert session.logs == []
