"""Conversion between graph objects and the persisted JSON representation.

Nodes are stored as ``{id, type, position: {x, y}, data: {...}}`` and edges as
``{id, source, target, sourceHandle?, targetHandle?, data?}``. Keys that the
editor does not interpret (``animated``, ``style``, ``markerEnd`` and friends)
are carried through ``extra`` so previously saved workflows round-trip.
"""

from __future__ import annotations

import copy
from typing import Any

from .types import Connection, Edge, EdgeData, Node, NodeCategory, Position, WorkflowInit

_NODE_KEYS = {"id", "type", "position", "data"}
_NODE_DATA_KEYS = {"label", "type", "subtype", "config", "description", "icon", "color"}
_EDGE_KEYS = {"id", "source", "target", "sourceHandle", "targetHandle", "data"}


def _require_str(payload: dict[str, Any], key: str, owner: str) -> str:
    value = payload.get(key)
    if value is None or isinstance(value, bool):
        raise ValueError(f"{owner}.{key} is required")
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str) or not value:
        raise ValueError(f"{owner}.{key} must be a non-empty string")
    return value


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def position_from_dict(value: Any) -> Position:
    if value is None:
        return Position()
    if not isinstance(value, dict):
        raise ValueError("position must be an object")
    try:
        return Position(x=float(value.get("x", 0)), y=float(value.get("y", 0)))
    except (TypeError, ValueError):
        raise ValueError("position coordinates must be numeric") from None


def node_to_dict(node: Node) -> dict[str, Any]:
    payload: dict[str, Any] = copy.deepcopy(node.extra)
    data: dict[str, Any] = payload.pop("data", {})
    data.update(
        {
            "label": node.label,
            "type": node.category.value,
            "subtype": node.subtype,
            "config": copy.deepcopy(node.config),
        }
    )
    if node.description is not None:
        data["description"] = node.description
    if node.icon is not None:
        data["icon"] = node.icon
    if node.color is not None:
        data["color"] = node.color

    payload.update(
        {
            "id": node.id,
            "type": node.category.value,
            "position": {"x": node.position.x, "y": node.position.y},
            "data": data,
        }
    )
    return payload


def node_from_dict(payload: Any) -> Node:
    """Build a node from its persisted representation."""

    if not isinstance(payload, dict):
        raise ValueError("node must be an object")

    node_id = _require_str(payload, "id", "node")
    data = payload.get("data")
    if not isinstance(data, dict):
        raise ValueError(f"node {node_id} is missing its data object")

    category = NodeCategory.parse(data.get("type", payload.get("type")))
    subtype = _require_str(data, "subtype", f"node {node_id} data")

    config = data.get("config") or {}
    if not isinstance(config, dict):
        raise ValueError(f"node {node_id} config must be an object")

    extra = {key: copy.deepcopy(value) for key, value in payload.items() if key not in _NODE_KEYS}
    leftovers = {key: value for key, value in data.items() if key not in _NODE_DATA_KEYS}
    if leftovers:
        extra["data"] = copy.deepcopy(leftovers)

    return Node(
        id=node_id,
        category=category,
        subtype=subtype,
        label=str(data.get("label") or ""),
        description=_optional_str(data.get("description")),
        position=position_from_dict(payload.get("position")),
        config=copy.deepcopy(config),
        icon=_optional_str(data.get("icon")),
        color=_optional_str(data.get("color")),
        extra=extra,
    )


def edge_to_dict(edge: Edge) -> dict[str, Any]:
    payload: dict[str, Any] = copy.deepcopy(edge.extra)
    payload.update({"id": edge.id, "source": edge.source, "target": edge.target})
    if edge.source_handle is not None:
        payload["sourceHandle"] = edge.source_handle
    if edge.target_handle is not None:
        payload["targetHandle"] = edge.target_handle
    if edge.data is not None:
        data = {
            key: value
            for key, value in (("label", edge.data.label), ("condition", edge.data.condition))
            if value is not None
        }
        payload["data"] = data
    return payload


def edge_data_from_dict(value: Any) -> EdgeData | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError("edge data must be an object")
    return EdgeData(
        label=_optional_str(value.get("label")),
        condition=_optional_str(value.get("condition")),
    )


def edge_from_dict(payload: Any) -> Edge:
    if not isinstance(payload, dict):
        raise ValueError("edge must be an object")

    edge_id = _require_str(payload, "id", "edge")
    return Edge(
        id=edge_id,
        source=_require_str(payload, "source", f"edge {edge_id}"),
        target=_require_str(payload, "target", f"edge {edge_id}"),
        source_handle=_optional_str(payload.get("sourceHandle")),
        target_handle=_optional_str(payload.get("targetHandle")),
        data=edge_data_from_dict(payload.get("data")),
        extra={key: copy.deepcopy(value) for key, value in payload.items() if key not in _EDGE_KEYS},
    )


def connection_from_dict(payload: dict[str, Any]) -> Connection:
    return Connection(
        source=_optional_str(payload.get("source")) or None,
        target=_optional_str(payload.get("target")) or None,
        source_handle=_optional_str(payload.get("sourceHandle")),
        target_handle=_optional_str(payload.get("targetHandle")),
    )


def graph_to_dict(nodes: list[Node], edges: list[Edge]) -> dict[str, list[dict[str, Any]]]:
    return {
        "nodes": [node_to_dict(node) for node in nodes],
        "edges": [edge_to_dict(edge) for edge in edges],
    }


def graph_from_dict(payload: Any) -> tuple[list[Node], list[Edge]]:
    """Parse a ``workflowData`` object into nodes and edges."""

    if payload is None:
        return [], []
    if not isinstance(payload, dict):
        raise ValueError("workflowData must be an object")

    raw_nodes = payload.get("nodes", [])
    raw_edges = payload.get("edges", [])
    if not isinstance(raw_nodes, list):
        raise ValueError("workflowData.nodes must be a list")
    if not isinstance(raw_edges, list):
        raise ValueError("workflowData.edges must be a list")

    return [node_from_dict(item) for item in raw_nodes], [edge_from_dict(item) for item in raw_edges]


def workflow_to_record(workflow: WorkflowInit) -> dict[str, Any]:
    """Return the record handed to storage on save."""

    return {
        "id": workflow.id,
        "name": workflow.name,
        "description": workflow.description,
        "toolId": workflow.tool_id,
        "workflowData": graph_to_dict(workflow.nodes, workflow.edges),
    }


def workflow_from_record(record: dict[str, Any]) -> WorkflowInit:
    workflow_id = record.get("id")
    if workflow_id is not None and (not isinstance(workflow_id, int) or isinstance(workflow_id, bool)):
        raise ValueError("id must be an integer or null")

    nodes, edges = graph_from_dict(record.get("workflowData"))
    return WorkflowInit(
        id=workflow_id,
        name=str(record.get("name") or ""),
        description=str(record.get("description") or ""),
        tool_id=str(record.get("toolId") or ""),
        nodes=nodes,
        edges=edges,
    )
