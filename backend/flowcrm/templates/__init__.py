"""Collection of pre-authored workflow templates."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from types import ModuleType
from typing import Any

from ..graph.serialization import graph_from_dict
from ..graph.types import WorkflowInit
from . import simple_transcription, voice_pipeline, voice_to_crm


class TemplateNotFoundError(LookupError):
    """Raised when no template is registered under the requested id."""

    def __init__(self, template_id: str) -> None:
        super().__init__(f"Template {template_id} not found")
        self.template_id = template_id


@dataclass(frozen=True)
class WorkflowTemplate:
    """Metadata and graph skeleton of a registered template."""

    key: str
    id: str
    name: str
    description: str
    category: str
    tool_id: str
    required_credentials: tuple[str, ...]
    tags: tuple[str, ...]
    nodes: tuple[dict[str, Any], ...]
    edges: tuple[dict[str, Any], ...]

    def summary(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "toolId": self.tool_id,
            "requiredCredentials": list(self.required_credentials),
            "tags": list(self.tags),
            "nodeCount": len(self.nodes),
            "edgeCount": len(self.edges),
        }


def _register(key: str, module: ModuleType) -> WorkflowTemplate:
    return WorkflowTemplate(
        key=key,
        id=module.TEMPLATE_ID,
        name=module.NAME,
        description=module.DESCRIPTION,
        category=module.CATEGORY,
        tool_id=module.TOOL_ID,
        required_credentials=tuple(module.REQUIRED_CREDENTIALS),
        tags=tuple(module.TAGS),
        nodes=tuple(module.NODES),
        edges=tuple(module.EDGES),
    )


_TEMPLATES: dict[str, WorkflowTemplate] = {
    template.key: template
    for template in (
        _register("default", voice_to_crm),
        _register("simpleTranscription", simple_transcription),
        _register("voicePipeline", voice_pipeline),
    )
}


def get_templates() -> list[WorkflowTemplate]:
    """Return a copy of the registered templates."""

    return list(_TEMPLATES.values())


def iter_templates() -> Iterable[WorkflowTemplate]:
    yield from _TEMPLATES.values()


def find_template(template_id: str) -> WorkflowTemplate | None:
    return _TEMPLATES.get(template_id)


def load_template(template_id: str) -> WorkflowInit:
    """Instantiate a template as a fresh, never-persisted workflow.

    The returned nodes and edges are new objects, so editing the loaded
    workflow never alters the registered skeleton.
    """

    template = find_template(template_id)
    if template is None:
        raise TemplateNotFoundError(template_id)

    nodes, edges = graph_from_dict({"nodes": list(template.nodes), "edges": list(template.edges)})
    return WorkflowInit(
        id=None,
        name=template.name,
        description=template.description,
        tool_id=template.tool_id,
        nodes=nodes,
        edges=edges,
    )


__all__ = [
    "TemplateNotFoundError",
    "WorkflowTemplate",
    "find_template",
    "get_templates",
    "iter_templates",
    "load_template",
]
