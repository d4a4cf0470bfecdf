"""Workflow graph engine: model, store, change batches and validation."""

from .changes import ChangeParseError, parse_edge_changes, parse_node_changes
from .store import GraphStore
from .types import Connection, Edge, EdgeData, Node, NodeCategory, NotFound, Position, WorkflowInit
from .validator import ValidationResult, validate

__all__ = [
    "ChangeParseError",
    "Connection",
    "Edge",
    "EdgeData",
    "GraphStore",
    "Node",
    "NodeCategory",
    "NotFound",
    "Position",
    "ValidationResult",
    "WorkflowInit",
    "parse_edge_changes",
    "parse_node_changes",
    "validate",
]
