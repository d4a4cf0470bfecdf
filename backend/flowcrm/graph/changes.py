"""Batch change deltas emitted by the canvas during drags and multi-select edits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .serialization import position_from_dict
from .types import Position


class ChangeParseError(ValueError):
    """Raised when a change batch cannot be interpreted."""


@dataclass(frozen=True)
class PositionChange:
    id: str
    position: Position | None = None
    dragging: bool = False


@dataclass(frozen=True)
class SelectChange:
    id: str
    selected: bool


@dataclass(frozen=True)
class RemoveChange:
    id: str


NodeChange = Union[PositionChange, SelectChange, RemoveChange]
EdgeChange = Union[SelectChange, RemoveChange]


def _change_id(item: dict[str, Any], index: int) -> str:
    value = item.get("id")
    if value is None or value == "":
        raise ChangeParseError(f"changes[{index}].id is required")
    return str(value)


def _parse_change(item: Any, index: int, allowed: set[str]) -> NodeChange:
    if not isinstance(item, dict):
        raise ChangeParseError(f"changes[{index}] must be an object")

    change_type = item.get("type")
    if change_type not in allowed:
        raise ChangeParseError(
            f"changes[{index}].type must be one of: {', '.join(sorted(allowed))}"
        )

    change_id = _change_id(item, index)
    if change_type == "remove":
        return RemoveChange(id=change_id)
    if change_type == "select":
        return SelectChange(id=change_id, selected=bool(item.get("selected")))

    raw_position = item.get("position")
    try:
        position = position_from_dict(raw_position) if raw_position is not None else None
    except ValueError as exc:
        raise ChangeParseError(f"changes[{index}]: {exc}") from None
    return PositionChange(id=change_id, position=position, dragging=bool(item.get("dragging")))


def _ensure_list(payload: Any) -> list[Any]:
    if not isinstance(payload, list):
        raise ChangeParseError("changes must be a list")
    return payload


def parse_node_changes(payload: Any) -> list[NodeChange]:
    """Parse a JSON list of node changes."""

    items = _ensure_list(payload)
    return [
        _parse_change(item, index, {"position", "select", "remove"})
        for index, item in enumerate(items)
    ]


def parse_edge_changes(payload: Any) -> list[EdgeChange]:
    items = _ensure_list(payload)
    return [
        _parse_change(item, index, {"select", "remove"})  # type: ignore[misc]
        for index, item in enumerate(items)
    ]
