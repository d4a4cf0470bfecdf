"""API endpoints for exporting and importing saved workflows."""
from __future__ import annotations

import json
from collections.abc import Iterable
from http import HTTPStatus
from typing import Any

from flask import Blueprint, current_app, jsonify, request
from sqlalchemy import func

from ..extensions import db
from ..graph.serialization import graph_to_dict
from ..graph.types import WorkflowInit
from ..graph.validator import validate
from ..models.workflow import Workflow
from .workflow import _load_graph, normalize_record

bp = Blueprint("export", __name__)

EXPORT_VERSION = 1


def _serialize_workflows(workflows: Iterable[Workflow]) -> list[dict[str, Any]]:
    return [
        {
            "name": workflow.name,
            "description": workflow.description,
            "toolId": workflow.tool_id,
            "workflowData": _load_graph(workflow),
        }
        for workflow in workflows
    ]


@bp.get("/export")
def export_workflows() -> tuple[object, int]:
    """Return a snapshot of all saved workflows."""

    workflows = Workflow.query.order_by(Workflow.name.asc()).all()
    payload = {"version": EXPORT_VERSION, "workflows": _serialize_workflows(workflows)}
    return jsonify(payload), HTTPStatus.OK


def _validate_workflows_for_import(
    payload: list[Any],
) -> tuple[list[WorkflowInit], list[str]]:
    """Parse and validate every workflow before anything is written."""

    normalised: list[WorkflowInit] = []
    seen: set[str] = set()
    for index, item in enumerate(payload, start=1):
        if not isinstance(item, dict):
            return normalised, [f"workflows[{index}] must be an object"]

        workflow, errors = normalize_record(item)
        if errors:
            return normalised, [f"workflows[{index}]: {error}" for error in errors]

        result = validate(workflow)
        if not result.is_valid:
            return normalised, [f"workflows[{index}]: {error}" for error in result.errors]

        key = workflow.name.lower()
        if key in seen:
            return normalised, [f"workflows[{index}]: duplicate name {workflow.name}"]
        seen.add(key)
        normalised.append(workflow)
    return normalised, []


@bp.post("/import")
def import_workflows() -> tuple[object, int]:
    """Import workflows from an export snapshot."""

    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "payload must be an object"}), HTTPStatus.BAD_REQUEST

    version = payload.get("version", EXPORT_VERSION)
    if version != EXPORT_VERSION:
        return jsonify({"error": f"unsupported export version {version}"}), HTTPStatus.BAD_REQUEST

    overwrite_flag = request.args.get("overwrite", "false").lower()
    overwrite = overwrite_flag in {"1", "true", "yes"}

    items = payload.get("workflows", [])
    if not isinstance(items, list):
        return jsonify({"error": "workflows must be a list"}), HTTPStatus.BAD_REQUEST

    workflows, errors = _validate_workflows_for_import(items)
    if errors:
        return jsonify({"errors": errors}), HTTPStatus.BAD_REQUEST

    created = 0
    updated = 0
    for data in workflows:
        graph_text = json.dumps(graph_to_dict(data.nodes, data.edges))
        existing = Workflow.query.filter(func.lower(Workflow.name) == data.name.lower()).first()
        if existing is not None:
            if not overwrite:
                db.session.rollback()
                return (
                    jsonify({"error": f"workflow {data.name} already exists"}),
                    HTTPStatus.CONFLICT,
                )
            existing.description = data.description
            existing.tool_id = data.tool_id
            existing.workflow_data = graph_text
            updated += 1
        else:
            db.session.add(
                Workflow(
                    name=data.name,
                    description=data.description,
                    tool_id=data.tool_id,
                    workflow_data=graph_text,
                )
            )
            created += 1

    db.session.commit()
    current_app.logger.info("Imported workflows: %s created, %s updated", created, updated)
    return jsonify({"created": created, "updated": updated}), HTTPStatus.OK
