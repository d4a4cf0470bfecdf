"""REST API driving a live workflow editor session.

The canvas and the editing panel call these endpoints for every gesture; each
one maps onto a single graph store operation and answers with the data the
client needs to re-render.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, current_app, jsonify, request

from ..catalog import creation_payload, find_node_type, parse_config_blob
from ..editor import SessionLimitError, get_registry
from ..editor.registry import EditorSession
from ..editor.state import serialize_state
from ..extensions import db, limiter
from ..graph.changes import ChangeParseError, parse_edge_changes, parse_node_changes
from ..graph.serialization import edge_to_dict, node_to_dict, workflow_from_record
from ..graph.types import NotFound, WorkflowInit
from ..graph.validator import validate
from ..models.workflow import Workflow
from ..templates import TemplateNotFoundError, load_template
from ..utils.sessions import editor_session
from .workflow import persist_snapshot, serialize_workflow, workflow_init_from_model

bp = Blueprint("editor", __name__)


def _not_found(result: NotFound):
    return jsonify({"error": result.message}), HTTPStatus.NOT_FOUND


def _json_object() -> dict[str, Any] | None:
    payload = request.get_json(silent=True, force=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        return None
    return payload


def _invalid_payload():
    return jsonify({"error": "payload must be an object"}), HTTPStatus.BAD_REQUEST


def _load_saved_workflow(workflow_id: Any) -> tuple[WorkflowInit | None, tuple[object, int] | None]:
    if not isinstance(workflow_id, int) or isinstance(workflow_id, bool):
        return None, (jsonify({"error": "workflowId must be an integer"}), HTTPStatus.BAD_REQUEST)

    workflow = db.session.get(Workflow, workflow_id)
    if workflow is None:
        return None, (
            jsonify({"error": f"workflow {workflow_id} not found"}),
            HTTPStatus.NOT_FOUND,
        )
    try:
        return workflow_init_from_model(workflow), None
    except ValueError as exc:
        current_app.logger.warning("Saved workflow %s cannot be loaded: %s", workflow_id, exc)
        return None, (
            jsonify({"error": f"workflow {workflow_id} is corrupt: {exc}"}),
            HTTPStatus.UNPROCESSABLE_ENTITY,
        )


# -- sessions ---------------------------------------------------------------


@bp.post("/editor/sessions")
def open_session() -> tuple[object, int]:
    payload = _json_object()
    if payload is None:
        return _invalid_payload()

    workflow_id = payload.get("workflowId")
    template_id = payload.get("templateId")
    if workflow_id is not None and template_id is not None:
        return (
            jsonify({"error": "workflowId and templateId are mutually exclusive"}),
            HTTPStatus.BAD_REQUEST,
        )

    initial: WorkflowInit | None = None
    workflow: WorkflowInit | None = None
    if workflow_id is not None:
        workflow, error = _load_saved_workflow(workflow_id)
        if error is not None:
            return error
    else:
        template_id = template_id or current_app.config.get("EDITOR_DEFAULT_TEMPLATE")
        if template_id:
            try:
                initial = load_template(str(template_id))
            except TemplateNotFoundError as exc:
                return jsonify({"error": str(exc)}), HTTPStatus.NOT_FOUND

    try:
        session = get_registry().create(initial=initial, workflow=workflow)
    except SessionLimitError as exc:
        current_app.logger.warning("Refusing to open editor session: %s", exc)
        return jsonify({"error": str(exc)}), HTTPStatus.SERVICE_UNAVAILABLE

    return jsonify(serialize_state(session)), HTTPStatus.CREATED


@bp.get("/editor/sessions/<session_id>")
@editor_session()
def get_session(session: EditorSession) -> tuple[object, int]:
    return jsonify(serialize_state(session)), HTTPStatus.OK


@bp.delete("/editor/sessions/<session_id>")
@editor_session(lock=False)
def close_session(session: EditorSession) -> tuple[object, int]:
    get_registry().discard(session.id)
    return "", HTTPStatus.NO_CONTENT


# -- whole workflow ---------------------------------------------------------


@bp.put("/editor/sessions/<session_id>/workflow")
@editor_session()
def replace_workflow(session: EditorSession) -> tuple[object, int]:
    """Replace the session's workflow with a persisted-format record."""

    payload = _json_object()
    if payload is None:
        return _invalid_payload()
    try:
        workflow = workflow_from_record(payload)
    except ValueError as exc:
        return jsonify({"errors": [str(exc)]}), HTTPStatus.BAD_REQUEST

    session.store.set_workflow(workflow)
    return jsonify(serialize_state(session)), HTTPStatus.OK


@bp.post("/editor/sessions/<session_id>/load")
@editor_session()
def load_saved(session: EditorSession) -> tuple[object, int]:
    payload = _json_object()
    if payload is None:
        return _invalid_payload()

    workflow, error = _load_saved_workflow(payload.get("workflowId"))
    if error is not None:
        return error
    session.store.set_workflow(workflow)
    return jsonify(serialize_state(session)), HTTPStatus.OK


@bp.post("/editor/sessions/<session_id>/template")
@editor_session()
def apply_template(session: EditorSession) -> tuple[object, int]:
    payload = _json_object()
    if payload is None:
        return _invalid_payload()

    template_id = payload.get("templateId")
    if not isinstance(template_id, str) or not template_id.strip():
        return jsonify({"error": "templateId is required"}), HTTPStatus.BAD_REQUEST
    try:
        workflow = load_template(template_id.strip())
    except TemplateNotFoundError as exc:
        return jsonify({"error": str(exc)}), HTTPStatus.NOT_FOUND

    session.store.set_workflow(workflow)
    return jsonify(serialize_state(session)), HTTPStatus.OK


@bp.patch("/editor/sessions/<session_id>/metadata")
@editor_session()
def update_metadata(session: EditorSession) -> tuple[object, int]:
    payload = _json_object()
    if payload is None:
        return _invalid_payload()

    values: dict[str, str] = {}
    for key, field_name in (("name", "name"), ("description", "description"), ("toolId", "tool_id")):
        value = payload.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            return jsonify({"error": f"{key} must be a string"}), HTTPStatus.BAD_REQUEST
        values[field_name] = value
    if "name" in values and not values["name"].strip():
        return jsonify({"error": "name must not be empty"}), HTTPStatus.BAD_REQUEST

    session.store.update_metadata(**values)
    return jsonify(serialize_state(session)), HTTPStatus.OK


@bp.post("/editor/sessions/<session_id>/reset")
@editor_session()
def reset_workflow(session: EditorSession) -> tuple[object, int]:
    session.store.clear_workflow()
    return jsonify(serialize_state(session)), HTTPStatus.OK


@bp.put("/editor/sessions/<session_id>/dirty")
@editor_session()
def set_dirty(session: EditorSession) -> tuple[object, int]:
    payload = _json_object()
    if payload is None:
        return _invalid_payload()
    dirty = payload.get("dirty")
    if not isinstance(dirty, bool):
        return jsonify({"error": "dirty must be a boolean"}), HTTPStatus.BAD_REQUEST

    session.store.set_dirty(dirty)
    return jsonify({"dirty": session.store.dirty}), HTTPStatus.OK


# -- nodes --------------------------------------------------------------------


@bp.post("/editor/sessions/<session_id>/nodes")
@editor_session()
def add_node(session: EditorSession) -> tuple[object, int]:
    payload = _json_object()
    if payload is None:
        return _invalid_payload()
    try:
        node = session.store.add_node(payload)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), HTTPStatus.BAD_REQUEST
    return jsonify(node_to_dict(node)), HTTPStatus.CREATED


@bp.post("/editor/sessions/<session_id>/nodes/from-catalog")
@editor_session()
def add_catalog_node(session: EditorSession) -> tuple[object, int]:
    """Drop a library node onto the canvas."""

    payload = _json_object()
    if payload is None:
        return _invalid_payload()

    subtype = payload.get("subtype")
    node_type = find_node_type(subtype) if isinstance(subtype, str) else None
    if node_type is None:
        return jsonify({"error": f"unknown node subtype {subtype!r}"}), HTTPStatus.NOT_FOUND

    position = payload.get("position")
    if position is not None and not isinstance(position, dict):
        return jsonify({"error": "position must be an object"}), HTTPStatus.BAD_REQUEST
    try:
        node = session.store.add_node(creation_payload(node_type, position))
    except ValueError as exc:
        return jsonify({"error": str(exc)}), HTTPStatus.BAD_REQUEST
    return jsonify(node_to_dict(node)), HTTPStatus.CREATED


@bp.patch("/editor/sessions/<session_id>/nodes/<node_id>")
@editor_session()
def update_node(session: EditorSession, node_id: str) -> tuple[object, int]:
    payload = _json_object()
    if payload is None:
        return _invalid_payload()
    try:
        result = session.store.update_node(node_id, payload)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), HTTPStatus.BAD_REQUEST
    if isinstance(result, NotFound):
        return _not_found(result)
    return jsonify(node_to_dict(result)), HTTPStatus.OK


@bp.put("/editor/sessions/<session_id>/nodes/<node_id>/config/raw")
@editor_session()
def replace_raw_config(session: EditorSession, node_id: str) -> tuple[object, int]:
    """Apply a hand-edited JSON config; unparsable text leaves the config alone."""

    node = session.store.get_node(node_id)
    if node is None:
        return _not_found(NotFound("node", node_id))

    payload = _json_object()
    text = payload.get("text") if payload is not None else None
    config = parse_config_blob(text) if isinstance(text, str) else None
    if config is None:
        return jsonify({"applied": False, "node": node_to_dict(node)}), HTTPStatus.OK

    session.store.update_node(node_id, {"config": config})
    return jsonify({"applied": True, "node": node_to_dict(node)}), HTTPStatus.OK


@bp.delete("/editor/sessions/<session_id>/nodes/<node_id>")
@editor_session()
def delete_node(session: EditorSession, node_id: str) -> tuple[object, int]:
    result = session.store.delete_node(node_id)
    if isinstance(result, NotFound):
        return _not_found(result)
    return jsonify(serialize_state(session)), HTTPStatus.OK


@bp.post("/editor/sessions/<session_id>/nodes/changes")
@editor_session()
def apply_node_changes(session: EditorSession) -> tuple[object, int]:
    payload = request.get_json(silent=True, force=True)
    try:
        changes = parse_node_changes(payload)
    except ChangeParseError as exc:
        return jsonify({"error": str(exc)}), HTTPStatus.BAD_REQUEST

    missing = session.store.apply_node_changes(changes)
    state = serialize_state(session)
    state["missing"] = [item.id for item in missing]
    return jsonify(state), HTTPStatus.OK


# -- edges --------------------------------------------------------------------


@bp.post("/editor/sessions/<session_id>/edges")
@editor_session()
def connect(session: EditorSession) -> tuple[object, int]:
    payload = _json_object()
    if payload is None:
        return _invalid_payload()

    result = session.store.on_connect(payload)
    if result is None:
        return jsonify({"error": "source and target are required"}), HTTPStatus.BAD_REQUEST
    if isinstance(result, NotFound):
        return _not_found(result)
    return jsonify(edge_to_dict(result)), HTTPStatus.CREATED


@bp.patch("/editor/sessions/<session_id>/edges/<edge_id>")
@editor_session()
def update_edge(session: EditorSession, edge_id: str) -> tuple[object, int]:
    payload = _json_object()
    if payload is None:
        return _invalid_payload()
    try:
        result = session.store.update_edge(edge_id, payload)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), HTTPStatus.BAD_REQUEST
    if isinstance(result, NotFound):
        return _not_found(result)
    return jsonify(edge_to_dict(result)), HTTPStatus.OK


@bp.delete("/editor/sessions/<session_id>/edges/<edge_id>")
@editor_session()
def delete_edge(session: EditorSession, edge_id: str) -> tuple[object, int]:
    result = session.store.delete_edge(edge_id)
    if isinstance(result, NotFound):
        return _not_found(result)
    return jsonify(serialize_state(session)), HTTPStatus.OK


@bp.post("/editor/sessions/<session_id>/edges/changes")
@editor_session()
def apply_edge_changes(session: EditorSession) -> tuple[object, int]:
    payload = request.get_json(silent=True, force=True)
    try:
        changes = parse_edge_changes(payload)
    except ChangeParseError as exc:
        return jsonify({"error": str(exc)}), HTTPStatus.BAD_REQUEST

    missing = session.store.apply_edge_changes(changes)
    state = serialize_state(session)
    state["missing"] = [item.id for item in missing]
    return jsonify(state), HTTPStatus.OK


# -- selection ----------------------------------------------------------------


@bp.put("/editor/sessions/<session_id>/selection")
@editor_session()
def select(session: EditorSession) -> tuple[object, int]:
    payload = _json_object()
    if payload is None:
        return _invalid_payload()

    node_id = payload.get("nodeId")
    edge_id = payload.get("edgeId")
    if node_id is not None and edge_id is not None:
        return jsonify({"error": "select either a node or an edge"}), HTTPStatus.BAD_REQUEST

    if edge_id is not None:
        result = session.store.select_edge(str(edge_id))
    else:
        result = session.store.select_node(str(node_id) if node_id is not None else None)
    if isinstance(result, NotFound):
        return _not_found(result)

    state = serialize_state(session)
    return jsonify({"selectedNode": state["selectedNode"], "selectedEdge": state["selectedEdge"]}), HTTPStatus.OK


# -- validation & persistence -------------------------------------------------


@bp.post("/editor/sessions/<session_id>/validate")
@editor_session()
def validate_session(session: EditorSession) -> tuple[object, int]:
    result = validate(session.store.snapshot())
    return jsonify(result.to_dict()), HTTPStatus.OK


@bp.post("/editor/sessions/<session_id>/save")
@limiter.limit(lambda: current_app.config.get("SAVE_RATE_LIMIT", "30 per minute"))
@editor_session(lock=False)
def save_session(session: EditorSession) -> tuple[object, int]:
    """Persist the session's workflow; only one save per session may be in flight."""

    if not session.save_lock.acquire(blocking=False):
        return jsonify({"error": "a save is already in progress"}), HTTPStatus.CONFLICT
    try:
        with session.lock:
            snapshot = session.store.snapshot()
            revision = session.store.revision

        workflow, errors, status = persist_snapshot(snapshot)
        if errors:
            return jsonify({"errors": errors}), status

        with session.lock:
            session.store.mark_saved(workflow.id, revision)
            state = serialize_state(session)
        return jsonify({"workflow": serialize_workflow(workflow), "state": state}), status
    finally:
        session.save_lock.release()
