"""Structural validation run before a workflow is persisted."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from .types import Edge, Node, WorkflowInit

logger = logging.getLogger(__name__)

MISSING_TRIGGER_ERROR = "Workflow must have at least one trigger node."


@dataclass
class ValidationResult:
    """Outcome of :func:`validate`. Warnings never affect ``is_valid``."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, object]:
        return {"isValid": self.is_valid, "errors": list(self.errors), "warnings": list(self.warnings)}


def _duplicate_ids(items: Sequence[Node] | Sequence[Edge]) -> list[str]:
    counts = Counter(item.id for item in items)
    return sorted(item_id for item_id, count in counts.items() if count > 1)


def find_cycle(node_ids: Sequence[str], edges: Sequence[Edge]) -> list[str] | None:
    """Return one directed cycle as a closed path of node ids, or ``None``.

    Depth-first search with an explicit recursion stack; a back edge to a
    node still on the stack closes a cycle.
    """

    adjacency: dict[str, list[str]] = {node_id: [] for node_id in node_ids}
    for edge in edges:
        if edge.source in adjacency and edge.target in adjacency:
            adjacency[edge.source].append(edge.target)

    finished: set[str] = set()
    for root in adjacency:
        if root in finished:
            continue

        path: list[str] = [root]
        on_path: set[str] = {root}
        iterators = [iter(adjacency[root])]
        while iterators:
            neighbour = next(iterators[-1], None)
            if neighbour is None:
                iterators.pop()
                done = path.pop()
                on_path.discard(done)
                finished.add(done)
                continue
            if neighbour in on_path:
                start = path.index(neighbour)
                return path[start:] + [neighbour]
            if neighbour in finished:
                continue
            path.append(neighbour)
            on_path.add(neighbour)
            iterators.append(iter(adjacency[neighbour]))
    return None


def validate(workflow: WorkflowInit) -> ValidationResult:
    """Check the shape of ``workflow`` and collect blocking errors."""

    result = ValidationResult()
    nodes = workflow.nodes
    edges = workflow.edges

    triggers = [node for node in nodes if node.is_trigger]
    if nodes and not triggers:
        result.errors.append(MISSING_TRIGGER_ERROR)

    for node_id in _duplicate_ids(nodes):
        result.errors.append(f"Duplicate node id: {node_id}")
    for edge_id in _duplicate_ids(edges):
        result.errors.append(f"Duplicate edge id: {edge_id}")

    node_ids = {node.id for node in nodes}
    for edge in edges:
        for endpoint in (edge.source, edge.target):
            if endpoint not in node_ids:
                result.errors.append(f"Edge {edge.id} references missing node {endpoint}")

    if len(nodes) > 1:
        connected = {node.id for node in triggers}
        for edge in edges:
            connected.add(edge.source)
            connected.add(edge.target)
        disconnected = [node for node in nodes if node.id not in connected]
        if disconnected:
            labels = ", ".join(node.label or node.id for node in disconnected)
            message = f"Found {len(disconnected)} potentially disconnected node(s): {labels}"
            logger.warning(message)
            result.warnings.append(message)

    cycle = find_cycle([node.id for node in nodes], edges)
    if cycle is not None:
        result.errors.append(f"Workflow contains a cycle: {' -> '.join(cycle)}")

    return result
