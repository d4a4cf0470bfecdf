"""API endpoints exposing the node library and configuration schemas."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify

from ..catalog import find_node_type, get_config_schema, get_groups, serialize_group, serialize_node_type

bp = Blueprint("catalog", __name__)


@bp.get("/catalog/nodes")
def list_node_types() -> tuple[object, int]:
    return jsonify([serialize_group(group) for group in get_groups()]), HTTPStatus.OK


@bp.get("/catalog/nodes/<subtype>")
def get_node_type(subtype: str) -> tuple[object, int]:
    """Return a library entry together with the fields its panel renders.

    Subtypes that only exist in templates have a schema but no library entry.
    """

    node_type = find_node_type(subtype)
    schema = get_config_schema(subtype)
    if node_type is None and not schema:
        return jsonify({"error": f"unknown node subtype {subtype}"}), HTTPStatus.NOT_FOUND

    return (
        jsonify(
            {
                "subtype": subtype,
                "nodeType": serialize_node_type(node_type) if node_type is not None else None,
                "schema": schema,
            }
        ),
        HTTPStatus.OK,
    )
