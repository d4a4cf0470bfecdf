"""Helpers resolving editor sessions for request handlers."""

from __future__ import annotations

import functools
from collections.abc import Callable
from http import HTTPStatus
from typing import Any, TypeVar, cast

from flask import jsonify

from ..editor import get_registry

TCallable = TypeVar("TCallable", bound=Callable[..., Any])


def session_not_found(session_id: str):
    return jsonify({"error": f"editor session {session_id} not found"}), HTTPStatus.NOT_FOUND


def editor_session(lock: bool = True) -> Callable[[TCallable], TCallable]:
    """Decorator resolving ``session_id`` to the live :class:`EditorSession`.

    With ``lock`` the handler runs while holding the session lock, so edits
    arriving on concurrent requests are applied one after another.
    """

    def decorator(func: TCallable) -> TCallable:
        @functools.wraps(func)
        def wrapper(session_id: str, *args: Any, **kwargs: Any):
            session = get_registry().get(session_id)
            if session is None:
                return session_not_found(session_id)

            if not lock:
                return func(session, *args, **kwargs)
            with session.lock:
                return func(session, *args, **kwargs)

        return cast(TCallable, wrapper)

    return decorator
