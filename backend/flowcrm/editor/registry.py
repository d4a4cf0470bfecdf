"""Registry of in-memory editor sessions, one graph store per session."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from flask import Flask, current_app

from ..graph.store import GraphStore
from ..graph.types import WorkflowInit

logger = logging.getLogger(__name__)

EXTENSION_KEY = "editor_sessions"


class SessionLimitError(RuntimeError):
    """Raised when the process already holds the maximum number of sessions."""


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass
class EditorSession:
    """A single editor's workflow plus the locks guarding it.

    ``lock`` serialises edits coming from concurrent requests; ``save_lock``
    allows at most one save in flight.
    """

    id: str
    store: GraphStore
    created_at: datetime = field(default_factory=_now)
    last_access: datetime = field(default_factory=_now)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    save_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class EditorSessionRegistry:
    """Live editor sessions; sessions idle longer than ``ttl`` are evicted on create."""

    def __init__(self, max_sessions: int = 100, ttl: timedelta | None = None) -> None:
        self.max_sessions = max_sessions
        self.ttl = ttl
        self._sessions: dict[str, EditorSession] = {}
        self._lock = threading.Lock()

    def create(
        self,
        initial: WorkflowInit | None = None,
        workflow: WorkflowInit | None = None,
    ) -> EditorSession:
        """Open a session whose store resets to ``initial`` and starts with ``workflow``."""

        store = GraphStore(initial=initial)
        if workflow is not None:
            store.set_workflow(workflow)

        with self._lock:
            self._evict_idle()
            if len(self._sessions) >= self.max_sessions:
                raise SessionLimitError(
                    f"editor session limit of {self.max_sessions} reached"
                )
            session = EditorSession(id=uuid.uuid4().hex, store=store)
            self._sessions[session.id] = session
        return session

    def _evict_idle(self) -> None:
        # Caller holds self._lock.
        if self.ttl is None:
            return
        cutoff = _now() - self.ttl
        idle = [
            session_id
            for session_id, session in self._sessions.items()
            if session.last_access < cutoff and not session.save_lock.locked()
        ]
        for session_id in idle:
            del self._sessions[session_id]
        if idle:
            logger.info("Evicted %s idle editor session(s)", len(idle))

    def get(self, session_id: str) -> EditorSession | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                session.last_access = _now()
            return session

    def discard(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


def init_app(app: Flask) -> EditorSessionRegistry:
    ttl_seconds = float(app.config.get("EDITOR_SESSION_TTL", 3600))
    registry = EditorSessionRegistry(
        int(app.config.get("EDITOR_MAX_SESSIONS", 100)),
        ttl=timedelta(seconds=ttl_seconds) if ttl_seconds > 0 else None,
    )
    app.extensions[EXTENSION_KEY] = registry
    return registry


def get_registry() -> EditorSessionRegistry:
    return current_app.extensions[EXTENSION_KEY]
