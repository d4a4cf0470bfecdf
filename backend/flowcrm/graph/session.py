"""Simulated execution session: a running flag and a diagnostic log."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any


class ExecutionSession:
    """Tracks whether a workflow run is in progress and what it reported.

    No work is ever performed or aborted here; stopping only flips the flag.
    """

    def __init__(self) -> None:
        self.is_executing = False
        self.logs: list[dict[str, Any]] = []

    def start(self) -> None:
        self.logs = []
        self.is_executing = True

    def stop(self) -> None:
        self.is_executing = False

    def add_log(self, entry: dict[str, Any]) -> dict[str, Any]:
        """Append ``entry`` stamped with the current UTC time and return it."""

        record = {**entry, "timestamp": datetime.now(UTC)}
        self.logs.append(record)
        return record

    def clear_logs(self) -> None:
        self.logs = []

    def reset(self) -> None:
        self.is_executing = False
        self.logs = []
