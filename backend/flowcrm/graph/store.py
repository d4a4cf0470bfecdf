"""In-memory graph store backing a single workflow editor session."""

from __future__ import annotations

import copy
import logging
import uuid
from collections.abc import Callable, Iterable
from typing import Any

from .changes import EdgeChange, NodeChange, PositionChange, RemoveChange
from .serialization import connection_from_dict, edge_data_from_dict, position_from_dict
from .session import ExecutionSession
from .types import Connection, Edge, EdgeData, Node, NodeCategory, NotFound, Position, WorkflowInit

logger = logging.getLogger(__name__)

DEFAULT_EDGE_OPTIONS: dict[str, Any] = {
    "animated": True,
    "style": {"strokeWidth": 2},
    "markerEnd": {"type": "arrowclosed", "width": 20, "height": 20},
}

UPDATABLE_NODE_FIELDS = frozenset({"label", "description", "config", "icon", "color"})
UPDATABLE_EDGE_FIELDS = frozenset({"label", "condition"})


def _default_id() -> str:
    return str(uuid.uuid4())


class GraphStore:
    """Sole mutator of a workflow's nodes, edges, selection and dirty flag.

    Every operation runs to completion synchronously. Operations that
    reference an id which is not (or no longer) part of the graph leave the
    state untouched and return a :class:`NotFound` value instead of raising.
    """

    def __init__(
        self,
        initial: WorkflowInit | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._initial = copy.deepcopy(initial) if initial is not None else WorkflowInit()
        self._new_id = id_factory or _default_id
        self.execution = ExecutionSession()
        self.revision = 0
        self._load_revision = 0
        self._load(self._initial)

    # -- read access -----------------------------------------------------

    @property
    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    @property
    def edges(self) -> list[Edge]:
        return list(self._edges.values())

    @property
    def selected_node(self) -> Node | None:
        if self._selected_node_id is None:
            return None
        return self._nodes.get(self._selected_node_id)

    @property
    def selected_edge(self) -> Edge | None:
        if self._selected_edge_id is None:
            return None
        return self._edges.get(self._selected_edge_id)

    def get_node(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    def get_edge(self, edge_id: str) -> Edge | None:
        return self._edges.get(edge_id)

    def snapshot(self) -> WorkflowInit:
        """Return a detached copy of the current workflow."""

        return WorkflowInit(
            id=self.workflow_id,
            name=self.name,
            description=self.description,
            tool_id=self.tool_id,
            nodes=copy.deepcopy(self.nodes),
            edges=copy.deepcopy(self.edges),
        )

    # -- whole-workflow operations ---------------------------------------

    def _load(self, workflow: WorkflowInit) -> None:
        self.workflow_id = workflow.id
        self.name = workflow.name
        self.description = workflow.description
        self.tool_id = workflow.tool_id
        self._nodes: dict[str, Node] = {}
        self._edges: dict[str, Edge] = {}

        for node in workflow.nodes:
            if node.id in self._nodes:
                logger.warning("Dropping duplicate node id %s from workflow snapshot", node.id)
                continue
            self._nodes[node.id] = copy.deepcopy(node)

        for edge in workflow.edges:
            if edge.id in self._edges:
                logger.warning("Dropping duplicate edge id %s from workflow snapshot", edge.id)
                continue
            if edge.source not in self._nodes or edge.target not in self._nodes:
                logger.warning(
                    "Dropping edge %s referencing missing node (%s -> %s)",
                    edge.id,
                    edge.source,
                    edge.target,
                )
                continue
            self._edges[edge.id] = copy.deepcopy(edge)

        self._selected_node_id: str | None = None
        self._selected_edge_id: str | None = None
        self.dirty = False
        self.revision += 1
        self._load_revision = self.revision

    def set_workflow(self, workflow: WorkflowInit) -> None:
        """Replace the entire workflow and mark it clean."""

        self._load(workflow)

    def clear_workflow(self) -> None:
        """Reset every piece of state to the defaults the store was created with."""

        self._load(self._initial)
        self.execution.reset()

    def update_metadata(
        self,
        name: str | None = None,
        description: str | None = None,
        tool_id: str | None = None,
    ) -> None:
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if tool_id is not None:
            self.tool_id = tool_id
        self._touch()

    def set_dirty(self, dirty: bool) -> None:
        self.dirty = bool(dirty)

    def mark_saved(self, workflow_id: int, revision: int) -> bool:
        """Record a successful save of the snapshot taken at ``revision``.

        Returns ``True`` when the store is clean afterwards. Edits that landed
        while the save was in flight keep the workflow dirty, and a save that
        completes after the workflow was replaced is ignored.
        """

        if revision < self._load_revision:
            return False
        self.workflow_id = workflow_id
        if revision == self.revision:
            self.dirty = False
        return not self.dirty

    def _touch(self) -> None:
        self.dirty = True
        self.revision += 1

    def _unique_id(self, taken: dict[str, Any], prefix: str = "") -> str:
        while True:
            candidate = f"{prefix}{self._new_id()}"
            if candidate not in taken:
                return candidate

    # -- nodes -----------------------------------------------------------

    def add_node(self, payload: dict[str, Any]) -> Node:
        """Create a node from a catalog creation payload and append it.

        Any ``id`` in the payload is ignored; a fresh one is generated.
        """

        category = NodeCategory.parse(payload.get("category", payload.get("type")))
        subtype = payload.get("subtype")
        if not isinstance(subtype, str) or not subtype.strip():
            raise ValueError("subtype is required")
        config = payload.get("config") or {}
        if not isinstance(config, dict):
            raise ValueError("config must be an object")

        description = payload.get("description")
        icon = payload.get("icon", payload.get("iconRef"))
        color = payload.get("color")
        node = Node(
            id=self._unique_id(self._nodes),
            category=category,
            subtype=subtype.strip(),
            label=str(payload.get("label") or ""),
            description=str(description) if description is not None else None,
            position=position_from_dict(payload.get("position")),
            config=copy.deepcopy(config),
            icon=str(icon) if icon is not None else None,
            color=str(color) if color is not None else None,
        )
        self._nodes[node.id] = node
        self._touch()
        return node

    def update_node(self, node_id: str, data: dict[str, Any]) -> Node | NotFound:
        """Shallow-merge ``data`` into the node's editable fields."""

        unknown = set(data) - UPDATABLE_NODE_FIELDS
        if unknown:
            raise ValueError(f"cannot update node fields: {', '.join(sorted(unknown))}")
        if "config" in data and not isinstance(data["config"], dict):
            raise ValueError("config must be an object")

        node = self._nodes.get(node_id)
        if node is None:
            return NotFound("node", node_id)

        for key, value in data.items():
            if key == "config":
                node.config = copy.deepcopy(value)
            elif key == "label":
                node.label = "" if value is None else str(value)
            else:
                setattr(node, key, None if value is None else str(value))
        self._touch()
        return node

    def _remove_nodes(self, node_ids: set[str]) -> list[Edge]:
        """Drop nodes and every incident edge; fix up the selection."""

        removed_edges = [
            edge
            for edge in self._edges.values()
            if edge.source in node_ids or edge.target in node_ids
        ]
        for edge in removed_edges:
            del self._edges[edge.id]
        for node_id in node_ids:
            self._nodes.pop(node_id, None)

        if self._selected_node_id in node_ids:
            self._selected_node_id = None
        if self._selected_edge_id is not None and self._selected_edge_id not in self._edges:
            self._selected_edge_id = None
        return removed_edges

    def delete_node(self, node_id: str) -> Node | NotFound:
        node = self._nodes.get(node_id)
        if node is None:
            return NotFound("node", node_id)

        self._remove_nodes({node_id})
        self._touch()
        return node

    def apply_node_changes(self, changes: Iterable[NodeChange]) -> list[NotFound]:
        """Apply a canvas change batch atomically.

        Removals and their edge cascades are resolved against the node set as
        it was before the batch, then applied in one step. Changes naming
        unknown nodes are skipped and reported back.
        """

        missing: list[NotFound] = []
        removed: set[str] = set()
        moves: list[PositionChange] = []
        selections = []

        for change in changes:
            if change.id not in self._nodes:
                missing.append(NotFound("node", change.id))
            elif isinstance(change, RemoveChange):
                removed.add(change.id)
            elif isinstance(change, PositionChange):
                moves.append(change)
            else:
                selections.append(change)

        moved = False
        for move in moves:
            if move.id in removed or move.position is None:
                continue
            self._nodes[move.id].position = Position(move.position.x, move.position.y)
            moved = True

        for selection in selections:
            if selection.id in removed:
                continue
            if selection.selected:
                self._selected_node_id = selection.id
                self._selected_edge_id = None
            elif self._selected_node_id == selection.id:
                self._selected_node_id = None

        if removed:
            self._remove_nodes(removed)
        if moved or removed:
            self._touch()
        return missing

    # -- edges -----------------------------------------------------------

    def add_edge(self, connection: Connection | dict[str, Any]) -> Edge | NotFound | None:
        """Connect two existing nodes.

        Returns ``None`` without touching the graph when either endpoint is
        missing from the connection, and :class:`NotFound` when an endpoint is
        not a node of this workflow.
        """

        if isinstance(connection, dict):
            connection = connection_from_dict(connection)
        if not connection.source or not connection.target:
            return None
        for endpoint in (connection.source, connection.target):
            if endpoint not in self._nodes:
                return NotFound("node", endpoint)

        edge = Edge(
            id=self._unique_id(self._edges, prefix=f"{connection.source}-{connection.target}-"),
            source=connection.source,
            target=connection.target,
            source_handle=connection.source_handle or None,
            target_handle=connection.target_handle or None,
            extra=copy.deepcopy(DEFAULT_EDGE_OPTIONS),
        )
        self._edges[edge.id] = edge
        self._touch()
        return edge

    def on_connect(self, connection: Connection | dict[str, Any]) -> Edge | NotFound | None:
        return self.add_edge(connection)

    def update_edge(self, edge_id: str, data: dict[str, Any]) -> Edge | NotFound:
        unknown = set(data) - UPDATABLE_EDGE_FIELDS
        if unknown:
            raise ValueError(f"cannot update edge fields: {', '.join(sorted(unknown))}")

        edge = self._edges.get(edge_id)
        if edge is None:
            return NotFound("edge", edge_id)

        merged = edge_data_from_dict(data) or EdgeData()
        current = edge.data or EdgeData()
        edge.data = EdgeData(
            label=merged.label if "label" in data else current.label,
            condition=merged.condition if "condition" in data else current.condition,
        )
        self._touch()
        return edge

    def delete_edge(self, edge_id: str) -> Edge | NotFound:
        edge = self._edges.pop(edge_id, None)
        if edge is None:
            return NotFound("edge", edge_id)

        if self._selected_edge_id == edge_id:
            self._selected_edge_id = None
        self._touch()
        return edge

    def apply_edge_changes(self, changes: Iterable[EdgeChange]) -> list[NotFound]:
        missing: list[NotFound] = []
        removed: set[str] = set()

        for change in changes:
            if change.id not in self._edges:
                missing.append(NotFound("edge", change.id))
            elif isinstance(change, RemoveChange):
                removed.add(change.id)
            elif change.selected:
                self._selected_edge_id = change.id
                self._selected_node_id = None
            elif self._selected_edge_id == change.id:
                self._selected_edge_id = None

        for edge_id in removed:
            del self._edges[edge_id]
        if self._selected_edge_id in removed:
            self._selected_edge_id = None
        if removed:
            self._touch()
        return missing

    # -- selection -------------------------------------------------------

    def select_node(self, node: Node | str | None) -> Node | NotFound | None:
        """Select a node (or clear the selection) and drop any edge selection."""

        node_id = node.id if isinstance(node, Node) else node
        if node_id is not None and node_id not in self._nodes:
            return NotFound("node", node_id)

        self._selected_node_id = node_id
        self._selected_edge_id = None
        return self.selected_node

    def select_edge(self, edge: Edge | str | None) -> Edge | NotFound | None:
        edge_id = edge.id if isinstance(edge, Edge) else edge
        if edge_id is not None and edge_id not in self._edges:
            return NotFound("edge", edge_id)

        self._selected_edge_id = edge_id
        self._selected_node_id = None
        return self.selected_edge

    # -- execution session -----------------------------------------------

    def start_execution(self) -> None:
        self.execution.start()

    def stop_execution(self) -> None:
        self.execution.stop()

    def add_execution_log(self, entry: dict[str, Any]) -> dict[str, Any]:
        return self.execution.add_log(entry)

    def clear_execution_logs(self) -> None:
        self.execution.clear_logs()

    @property
    def is_executing(self) -> bool:
        return self.execution.is_executing

    @property
    def logs(self) -> list[dict[str, Any]]:
        return self.execution.logs
