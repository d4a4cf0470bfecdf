"""JSON representation of a live editor session."""

from __future__ import annotations

from typing import Any

from ..graph.serialization import edge_to_dict, node_to_dict
from .registry import EditorSession


def serialize_log(entry: dict[str, Any]) -> dict[str, Any]:
    timestamp = entry.get("timestamp")
    return {**entry, "timestamp": timestamp.isoformat() if timestamp is not None else None}


def serialize_state(session: EditorSession) -> dict[str, Any]:
    """Return everything the canvas and editing panel render from."""

    store = session.store
    selected_node = store.selected_node
    selected_edge = store.selected_edge
    return {
        "sessionId": session.id,
        "id": store.workflow_id,
        "name": store.name,
        "description": store.description,
        "toolId": store.tool_id,
        "nodes": [node_to_dict(node) for node in store.nodes],
        "edges": [edge_to_dict(edge) for edge in store.edges],
        "selectedNode": node_to_dict(selected_node) if selected_node is not None else None,
        "selectedEdge": edge_to_dict(selected_edge) if selected_edge is not None else None,
        "isExecuting": store.is_executing,
        "logs": [serialize_log(entry) for entry in store.logs],
        "dirty": store.dirty,
        "revision": store.revision,
    }
