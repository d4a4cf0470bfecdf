"""Live editor sessions held by the web process."""

from .registry import EditorSession, EditorSessionRegistry, SessionLimitError, get_registry, init_app

__all__ = [
    "EditorSession",
    "EditorSessionRegistry",
    "SessionLimitError",
    "get_registry",
    "init_app",
]
