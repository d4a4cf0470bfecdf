"""Tests for the node library and configuration schemas."""

from __future__ import annotations

import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.flowcrm.catalog import (
    CONFIG_SCHEMAS,
    creation_payload,
    find_node_type,
    get_config_schema,
    get_groups,
    iter_node_types,
    parse_config_blob,
)
from backend.flowcrm.catalog.schemas import FIELD_TYPES
from backend.flowcrm.graph import GraphStore, NodeCategory


def test_library_groups_and_subtypes():
    groups = get_groups()

    assert [group.key for group in groups] == ["triggers", "actions", "logic", "integrations"]
    assert [len(group.nodes) for group in groups] == [3, 6, 5, 3]
    subtypes = [node_type.subtype for node_type in iter_node_types()]
    assert len(subtypes) == len(set(subtypes))


def test_group_members_share_category():
    expected = {
        "triggers": NodeCategory.TRIGGER,
        "actions": NodeCategory.ACTION,
        "logic": NodeCategory.LOGIC,
        "integrations": NodeCategory.INTEGRATION,
    }
    for group in get_groups():
        assert {node_type.category for node_type in group.nodes} == {expected[group.key]}


def test_creation_payload_feeds_store():
    node_type = find_node_type("webhook")
    store = GraphStore()

    node = store.add_node(creation_payload(node_type, {"x": 120, "y": 40}))

    assert node.category is NodeCategory.TRIGGER
    assert node.subtype == "webhook"
    assert node.label == "Webhook"
    assert node.icon == "Webhook"
    assert node.config == {}
    assert (node.position.x, node.position.y) == (120.0, 40.0)


def test_find_unknown_node_type():
    assert find_node_type("teleport") is None


def test_config_schemas_use_known_field_types():
    for subtype, fields in CONFIG_SCHEMAS.items():
        for name, field in fields.items():
            assert field["type"] in FIELD_TYPES, f"{subtype}.{name}"
            assert field["label"]


def test_get_config_schema_returns_copy():
    schema = get_config_schema("openai")
    schema["temperature"]["default"] = 2

    assert get_config_schema("openai")["temperature"]["default"] == 0.7
    assert get_config_schema("unknown") == {}


@pytest.mark.parametrize("text", ["{not json", "[1, 2]", "42", "null"])
def test_parse_config_blob_rejects_non_objects(text):
    assert parse_config_blob(text) is None


def test_parse_config_blob_accepts_objects():
    assert parse_config_blob('{"channel": "sms", "recipients": ["a"]}') == {
        "channel": "sms",
        "recipients": ["a"],
    }
