"""API endpoints listing and instantiating workflow templates."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify

from ..graph.serialization import workflow_to_record
from ..templates import TemplateNotFoundError, get_templates, load_template

bp = Blueprint("templates", __name__)


@bp.get("/templates")
def list_templates() -> tuple[object, int]:
    return jsonify([template.summary() for template in get_templates()]), HTTPStatus.OK


@bp.get("/templates/<template_id>")
def get_template(template_id: str) -> tuple[object, int]:
    try:
        workflow = load_template(template_id)
    except TemplateNotFoundError as exc:
        return jsonify({"error": str(exc)}), HTTPStatus.NOT_FOUND
    return jsonify(workflow_to_record(workflow)), HTTPStatus.OK
