"""Tests for the built-in workflow templates."""

from __future__ import annotations

import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.flowcrm.graph import GraphStore, WorkflowInit, validate
from backend.flowcrm.templates import (
    TemplateNotFoundError,
    find_template,
    get_templates,
    load_template,
)


@pytest.mark.parametrize(
    "key, nodes, edges",
    [("default", 9, 8), ("simpleTranscription", 4, 3), ("voicePipeline", 6, 6)],
)
def test_template_sizes(key, nodes, edges):
    workflow = load_template(key)

    assert workflow.id is None
    assert len(workflow.nodes) == nodes
    assert len(workflow.edges) == edges


@pytest.mark.parametrize("template", get_templates(), ids=lambda template: template.key)
def test_templates_pass_validation(template):
    result = validate(load_template(template.key))

    assert result.is_valid, result.errors


def test_default_template_branches_on_condition_handles():
    workflow = load_template("default")
    handles = {
        edge.source_handle
        for edge in workflow.edges
        if edge.source == "logic-client-check"
    }

    assert handles == {"true", "false"}
    assert find_template("default").summary()["requiredCredentials"] == [
        "telegram_bot_token",
        "openai_api_key",
    ]


def test_loaded_template_is_independent_copy():
    first = load_template("simpleTranscription")
    first.nodes[0].config["mutated"] = True
    first.nodes[0].label = "changed"

    second = load_template("simpleTranscription")

    assert "mutated" not in second.nodes[0].config
    assert second.nodes[0].label != "changed"


def test_loading_template_into_store_resets_identity():
    store = GraphStore()
    store.set_workflow(WorkflowInit(id=42, name="Saved"))
    store.add_node({"category": "trigger", "subtype": "manual"})

    store.set_workflow(load_template("voicePipeline"))

    assert store.workflow_id is None
    assert store.name == "Voice to CRM Workflow"
    assert store.dirty is False
    assert store.selected_node is None


def test_unknown_template_raises():
    with pytest.raises(TemplateNotFoundError, match="Template nope not found"):
        load_template("nope")

    assert find_template("nope") is None
