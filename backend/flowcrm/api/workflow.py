"""REST API endpoints for storing and retrieving workflows."""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import func

from ..extensions import db
from ..graph.serialization import graph_from_dict, graph_to_dict, workflow_from_record
from ..graph.types import WorkflowInit
from ..graph.validator import validate
from ..models.workflow import Workflow

bp = Blueprint("workflows", __name__)


def _load_graph(workflow: Workflow) -> dict[str, Any]:
    try:
        graph = json.loads(workflow.workflow_data)
    except (TypeError, ValueError):
        graph = {}
    if not isinstance(graph, dict):
        graph = {}
    return {"nodes": graph.get("nodes", []), "edges": graph.get("edges", [])}


def serialize_workflow(workflow: Workflow) -> dict[str, Any]:
    """Return the persisted record of a workflow."""

    return {
        "id": workflow.id,
        "name": workflow.name,
        "description": workflow.description,
        "toolId": workflow.tool_id,
        "workflowData": _load_graph(workflow),
        "createdAt": workflow.created_at.isoformat() + "Z",
        "updatedAt": workflow.updated_at.isoformat() + "Z",
    }


def workflow_init_from_model(workflow: Workflow) -> WorkflowInit:
    """Rebuild the editable graph of a saved workflow; raises ``ValueError`` if corrupt."""

    return workflow_from_record(serialize_workflow(workflow))


def _encode_graph(workflow: WorkflowInit) -> tuple[str, list[str]]:
    errors: list[str] = []
    graph_text = json.dumps(graph_to_dict(workflow.nodes, workflow.edges))
    max_bytes = int(current_app.config.get("MAX_GRAPH_BYTES", 500_000))
    if len(graph_text.encode("utf-8")) > max_bytes:
        errors.append("workflowData exceeds the maximum size")
    return graph_text, errors


def normalize_record(
    payload: dict[str, Any], *, require_graph: bool = True
) -> tuple[WorkflowInit | None, list[str]]:
    """Parse an incoming workflow record; graph validation happens on persist."""

    errors: list[str] = []
    name = payload.get("name")
    name = name.strip() if isinstance(name, str) else ""
    if not name:
        errors.append("name is required")

    description = payload.get("description") or ""
    tool_id = payload.get("toolId") or ""
    if not isinstance(description, str):
        errors.append("description must be a string")
    if not isinstance(tool_id, str):
        errors.append("toolId must be a string")

    graph = payload.get("workflowData")
    if graph is None and require_graph:
        errors.append("workflowData is required")
        return None, errors

    try:
        nodes, edges = graph_from_dict(graph)
    except ValueError as exc:
        errors.append(str(exc))
        return None, errors

    if errors:
        return None, errors

    workflow = WorkflowInit(
        id=None, name=name, description=description, tool_id=tool_id, nodes=nodes, edges=edges
    )
    return workflow, []


def _is_name_unique(name: str, workflow_id: int | None = None) -> bool:
    """Check whether the workflow name is unique."""

    query = Workflow.query.filter(func.lower(Workflow.name) == name.lower())
    if workflow_id is not None:
        query = query.filter(Workflow.id != workflow_id)
    return not db.session.query(query.exists()).scalar()


def persist_snapshot(snapshot: WorkflowInit) -> tuple[Workflow | None, list[str], HTTPStatus]:
    """Validate ``snapshot`` and create or update its database record.

    A snapshot whose id no longer exists in the database is stored as a new
    workflow.
    """

    name = (snapshot.name or "").strip()
    if not name:
        return None, ["name is required"], HTTPStatus.BAD_REQUEST

    result = validate(snapshot)
    if not result.is_valid:
        return None, result.errors, HTTPStatus.BAD_REQUEST

    graph_text, errors = _encode_graph(snapshot)
    if errors:
        return None, errors, HTTPStatus.BAD_REQUEST

    workflow = db.session.get(Workflow, snapshot.id) if snapshot.id is not None else None
    if not _is_name_unique(name, workflow.id if workflow is not None else None):
        return None, ["workflow with this name already exists"], HTTPStatus.CONFLICT

    if workflow is None:
        workflow = Workflow(name=name)
        db.session.add(workflow)
        status = HTTPStatus.CREATED
    else:
        workflow.name = name
        status = HTTPStatus.OK
    workflow.description = snapshot.description
    workflow.tool_id = snapshot.tool_id
    workflow.workflow_data = graph_text
    db.session.commit()
    return workflow, [], status


@bp.post("/workflows")
def create_workflow() -> tuple[object, int]:
    payload = request.get_json(silent=True, force=True) or {}
    data, errors = normalize_record(payload, require_graph=False)
    if errors:
        return jsonify({"errors": errors}), HTTPStatus.BAD_REQUEST

    if not _is_name_unique(data.name):
        return jsonify({"error": "workflow with this name already exists"}), HTTPStatus.CONFLICT

    workflow, errors, status = persist_snapshot(data)
    if errors:
        return jsonify({"errors": errors}), status

    return jsonify(serialize_workflow(workflow)), HTTPStatus.CREATED


@bp.get("/workflows")
def list_workflows() -> tuple[object, int]:
    tool_filter = request.args.get("toolId")
    query = Workflow.query
    if tool_filter:
        query = query.filter_by(tool_id=tool_filter)
    workflows = query.order_by(Workflow.created_at.desc()).all()
    return (
        jsonify(
            [
                {
                    "id": wf.id,
                    "name": wf.name,
                    "description": wf.description,
                    "toolId": wf.tool_id,
                    "updatedAt": wf.updated_at.isoformat() + "Z",
                }
                for wf in workflows
            ]
        ),
        HTTPStatus.OK,
    )


@bp.get("/workflows/<int:workflow_id>")
def get_workflow(workflow_id: int) -> tuple[object, int]:
    workflow = Workflow.query.get_or_404(workflow_id)
    return jsonify(serialize_workflow(workflow)), HTTPStatus.OK


@bp.put("/workflows/<int:workflow_id>")
def update_workflow(workflow_id: int) -> tuple[object, int]:
    workflow = Workflow.query.get_or_404(workflow_id)
    payload = request.get_json(silent=True, force=True) or {}

    merged = {
        "name": workflow.name,
        "description": workflow.description,
        "toolId": workflow.tool_id,
        **payload,
    }
    data, errors = normalize_record(merged)
    if errors:
        return jsonify({"errors": errors}), HTTPStatus.BAD_REQUEST

    if not _is_name_unique(data.name, workflow_id):
        return jsonify({"error": "workflow with this name already exists"}), HTTPStatus.CONFLICT

    data.id = workflow_id
    workflow, errors, status = persist_snapshot(data)
    if errors:
        return jsonify({"errors": errors}), status

    return jsonify(serialize_workflow(workflow)), HTTPStatus.OK


@bp.delete("/workflows/<int:workflow_id>")
def delete_workflow(workflow_id: int) -> tuple[object, int]:
    workflow = Workflow.query.get_or_404(workflow_id)
    db.session.delete(workflow)
    db.session.commit()
    return "", HTTPStatus.NO_CONTENT


@bp.post("/workflows/validate")
def validate_workflow() -> tuple[object, int]:
    """Validate a record without persisting it."""

    payload = request.get_json(silent=True, force=True) or {}
    try:
        nodes, edges = graph_from_dict(payload.get("workflowData"))
    except ValueError as exc:
        return jsonify({"errors": [str(exc)]}), HTTPStatus.BAD_REQUEST

    result = validate(WorkflowInit(nodes=nodes, edges=edges))
    return jsonify(result.to_dict()), HTTPStatus.OK
