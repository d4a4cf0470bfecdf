"""API endpoints for the simulated execution session of an editor."""

from __future__ import annotations

import json
from http import HTTPStatus

from flask import Blueprint, Response, jsonify, request

from ..editor.registry import EditorSession
from ..editor.state import serialize_log
from ..utils.sessions import editor_session

bp = Blueprint("execution", __name__)

_VALID_LEVELS = {"info", "success", "warning", "error"}


def _recent_logs(session: EditorSession, limit: int | None) -> list[dict[str, object]]:
    entries = session.store.logs
    if limit is not None:
        limit = max(1, min(limit, 1000))
        entries = entries[-limit:]
    return [serialize_log(entry) for entry in entries]


@bp.get("/editor/sessions/<session_id>/execution")
@editor_session()
def get_execution(session: EditorSession) -> tuple[object, int]:
    limit = request.args.get("limit", type=int)
    return (
        jsonify({"isExecuting": session.store.is_executing, "logs": _recent_logs(session, limit)}),
        HTTPStatus.OK,
    )


@bp.post("/editor/sessions/<session_id>/execution/start")
@editor_session()
def start_execution(session: EditorSession) -> tuple[object, int]:
    session.store.start_execution()
    return jsonify({"isExecuting": True, "logs": []}), HTTPStatus.OK


@bp.post("/editor/sessions/<session_id>/execution/stop")
@editor_session()
def stop_execution(session: EditorSession) -> tuple[object, int]:
    session.store.stop_execution()
    return (
        jsonify({"isExecuting": False, "logs": _recent_logs(session, None)}),
        HTTPStatus.OK,
    )


@bp.post("/editor/sessions/<session_id>/execution/logs")
@editor_session()
def add_log(session: EditorSession) -> tuple[object, int]:
    """Append a diagnostic entry; the server stamps the timestamp."""

    payload = request.get_json(silent=True, force=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "payload must be an object"}), HTTPStatus.BAD_REQUEST

    message = payload.get("message")
    if not isinstance(message, str) or not message.strip():
        return jsonify({"error": "message is required"}), HTTPStatus.BAD_REQUEST
    level = payload.get("level", "info")
    if level not in _VALID_LEVELS:
        return (
            jsonify({"error": f"level must be one of: {', '.join(sorted(_VALID_LEVELS))}"}),
            HTTPStatus.BAD_REQUEST,
        )

    entry = {key: value for key, value in payload.items() if key != "timestamp"}
    entry["level"] = level
    record = session.store.add_execution_log(entry)
    return jsonify(serialize_log(record)), HTTPStatus.CREATED


@bp.delete("/editor/sessions/<session_id>/execution/logs")
@editor_session()
def clear_logs(session: EditorSession) -> tuple[object, int]:
    session.store.clear_execution_logs()
    return "", HTTPStatus.NO_CONTENT


@bp.get("/editor/sessions/<session_id>/execution/logs/download")
@editor_session()
def download_logs(session: EditorSession) -> Response:
    lines = [json.dumps(entry) for entry in _recent_logs(session, None)]
    response = Response("\n".join(lines), mimetype="application/x-ndjson")
    response.headers["Content-Disposition"] = (
        f"attachment; filename=execution-{session.id}.ndjson"
    )
    return response
