"""Catalog of creatable node subtypes and their configuration schemas.

The graph store never consults the catalog; it only supplies creation
payloads to the canvas and field definitions to the editing panel.
"""
from __future__ import annotations

import copy
import json
from collections.abc import Iterable
from typing import Any

from .library import GROUPS, NodeGroup, NodeType
from .schemas import CONFIG_SCHEMAS


def iter_node_types() -> Iterable[NodeType]:
    for group in GROUPS:
        yield from group.nodes


def get_groups() -> list[NodeGroup]:
    return list(GROUPS)


def find_node_type(subtype: str) -> NodeType | None:
    """Return the library entry for ``subtype``, if available."""

    for node_type in iter_node_types():
        if node_type.subtype == subtype:
            return node_type
    return None


def get_config_schema(subtype: str) -> dict[str, dict[str, Any]]:
    """Return the editable fields for ``subtype`` (empty for unknown subtypes)."""

    return copy.deepcopy(CONFIG_SCHEMAS.get(subtype, {}))


def creation_payload(
    node_type: NodeType, position: dict[str, float] | None = None
) -> dict[str, Any]:
    """Build the payload the canvas hands to ``GraphStore.add_node`` on drop."""

    return {
        "category": node_type.category.value,
        "subtype": node_type.subtype,
        "label": node_type.label,
        "description": node_type.description,
        "icon": node_type.icon,
        "color": node_type.color,
        "config": {},
        "position": dict(position or {"x": 0, "y": 0}),
    }


def parse_config_blob(text: str) -> dict[str, Any] | None:
    """Parse a hand-edited raw config; ``None`` means leave the config as it was."""

    try:
        parsed = json.loads(text)
    except (TypeError, ValueError):
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed


def serialize_node_type(node_type: NodeType) -> dict[str, Any]:
    return {
        "id": node_type.id,
        "label": node_type.label,
        "category": node_type.category.value,
        "subtype": node_type.subtype,
        "icon": node_type.icon,
        "color": node_type.color,
        "description": node_type.description,
        "hasSchema": node_type.subtype in CONFIG_SCHEMAS,
    }


def serialize_group(group: NodeGroup) -> dict[str, Any]:
    return {
        "key": group.key,
        "label": group.label,
        "color": group.color,
        "nodes": [serialize_node_type(node_type) for node_type in group.nodes],
    }


__all__ = [
    "CONFIG_SCHEMAS",
    "NodeGroup",
    "NodeType",
    "creation_payload",
    "find_node_type",
    "get_config_schema",
    "get_groups",
    "iter_node_types",
    "parse_config_blob",
    "serialize_group",
    "serialize_node_type",
]
