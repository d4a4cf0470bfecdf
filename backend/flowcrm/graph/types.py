"""Core value types of the workflow graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class NodeCategory(str, Enum):
    """Closed classification of workflow nodes."""

    TRIGGER = "trigger"
    ACTION = "action"
    LOGIC = "logic"
    INTEGRATION = "integration"

    @classmethod
    def parse(cls, value: Any) -> NodeCategory:
        """Return the category for ``value`` or raise ``ValueError``."""

        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(category.value for category in cls)
            raise ValueError(f"category must be one of: {allowed}") from None


@dataclass
class Position:
    x: float = 0.0
    y: float = 0.0


@dataclass
class Node:
    """A vertex of the workflow graph."""

    id: str
    category: NodeCategory
    subtype: str
    label: str = ""
    description: str | None = None
    position: Position = field(default_factory=Position)
    config: dict[str, Any] = field(default_factory=dict)
    icon: str | None = None
    color: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_trigger(self) -> bool:
        return self.category is NodeCategory.TRIGGER


@dataclass
class EdgeData:
    label: str | None = None
    condition: str | None = None


@dataclass
class Edge:
    """A directed connection between two nodes."""

    id: str
    source: str
    target: str
    source_handle: str | None = None
    target_handle: str | None = None
    data: EdgeData | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class Connection:
    """Endpoints reported by the canvas when a drag-to-connect completes."""

    source: str | None
    target: str | None
    source_handle: str | None = None
    target_handle: str | None = None


@dataclass
class WorkflowInit:
    """A complete workflow snapshot used to (re)initialise a store."""

    id: int | None = None
    name: str = "Untitled Workflow"
    description: str = ""
    tool_id: str = ""
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)


@dataclass(frozen=True)
class NotFound:
    """Returned instead of raising when an operation references a stale id."""

    kind: str
    id: str | None

    def __bool__(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return f"{self.kind} {self.id} not found"
