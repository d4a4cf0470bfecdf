"""Tests for change batch parsing and the persisted graph representation."""

from __future__ import annotations

import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.flowcrm.graph import ChangeParseError, NodeCategory, Position, parse_edge_changes, parse_node_changes
from backend.flowcrm.graph.changes import PositionChange, RemoveChange, SelectChange
from backend.flowcrm.graph.serialization import (
    edge_from_dict,
    edge_to_dict,
    graph_from_dict,
    node_from_dict,
    node_to_dict,
    workflow_from_record,
    workflow_to_record,
)


def test_parse_node_changes():
    changes = parse_node_changes(
        [
            {"type": "position", "id": "a", "position": {"x": 1, "y": 2}, "dragging": True},
            {"type": "position", "id": "b"},
            {"type": "select", "id": "c", "selected": True},
            {"type": "remove", "id": "d"},
        ]
    )

    assert changes == [
        PositionChange("a", Position(1.0, 2.0), True),
        PositionChange("b", None, False),
        SelectChange("c", True),
        RemoveChange("d"),
    ]


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"type": "remove"}, "changes must be a list"),
        ([{"type": "resize", "id": "a"}], r"changes\[0\]\.type must be one of"),
        ([{"type": "remove"}], r"changes\[0\]\.id is required"),
        (["nope"], r"changes\[0\] must be an object"),
        ([{"type": "position", "id": "a", "position": {"x": "left"}}], "numeric"),
    ],
)
def test_parse_node_changes_rejects_bad_batches(payload, message):
    with pytest.raises(ChangeParseError, match=message):
        parse_node_changes(payload)


def test_edge_changes_do_not_accept_positions():
    assert parse_edge_changes([{"type": "select", "id": "e1", "selected": False}]) == [
        SelectChange("e1", False)
    ]

    with pytest.raises(ChangeParseError):
        parse_edge_changes([{"type": "position", "id": "e1"}])


def test_node_roundtrip_preserves_unknown_keys():
    record = {
        "id": "n1",
        "type": "logic",
        "position": {"x": 5, "y": 6},
        "selected": False,
        "width": 180,
        "data": {
            "label": "Check",
            "type": "logic",
            "subtype": "condition",
            "config": {"expression": "x"},
            "icon": "GitBranch",
            "trueLabel": "yes",
        },
    }

    node = node_from_dict(record)

    assert node.category is NodeCategory.LOGIC
    assert node.extra == {"selected": False, "width": 180, "data": {"trueLabel": "yes"}}
    assert node_to_dict(node) == {
        **record,
        "position": {"x": 5.0, "y": 6.0},
    }


def test_node_from_dict_requires_data_and_known_category():
    with pytest.raises(ValueError, match="missing its data object"):
        node_from_dict({"id": "n1", "type": "action"})

    with pytest.raises(ValueError, match="category must be one of"):
        node_from_dict({"id": "n1", "data": {"type": "widget", "subtype": "x"}})


def test_edge_roundtrip_preserves_styling():
    record = {
        "id": "e1",
        "source": "a",
        "target": "b",
        "sourceHandle": "true",
        "animated": True,
        "style": {"stroke": "#6366f1"},
        "data": {"label": "High confidence"},
    }

    assert edge_to_dict(edge_from_dict(record)) == record


def test_graph_from_dict_validates_shape():
    assert graph_from_dict(None) == ([], [])

    with pytest.raises(ValueError, match="workflowData.nodes must be a list"):
        graph_from_dict({"nodes": {}})


def test_workflow_record_roundtrip():
    record = {
        "id": 3,
        "name": "Pipeline",
        "description": "desc",
        "toolId": "voiceToCRM",
        "workflowData": {
            "nodes": [
                {
                    "id": "t",
                    "type": "trigger",
                    "position": {"x": 0.0, "y": 0.0},
                    "data": {"label": "Start", "type": "trigger", "subtype": "manual", "config": {}},
                }
            ],
            "edges": [],
        },
    }

    assert workflow_to_record(workflow_from_record(record)) == record
