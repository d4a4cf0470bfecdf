"""Seed the database with every built-in workflow template."""
from __future__ import annotations

import json
import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.flowcrm import create_app
from backend.flowcrm.extensions import db
from backend.flowcrm.graph.serialization import graph_to_dict
from backend.flowcrm.models.workflow import Workflow
from backend.flowcrm.templates import WorkflowTemplate, iter_templates, load_template


def _ensure_workflow(template: WorkflowTemplate) -> tuple[bool, bool]:
    """Create or update the saved workflow for a template."""

    workflow_init = load_template(template.key)
    graph_text = json.dumps(graph_to_dict(workflow_init.nodes, workflow_init.edges))
    created = False
    updated = False

    workflow = Workflow.query.filter_by(name=template.name).first()
    if workflow is None:
        workflow = Workflow(
            name=template.name,
            description=template.description,
            tool_id=template.tool_id,
            workflow_data=graph_text,
        )
        db.session.add(workflow)
        created = True
    elif (
        workflow.description != template.description
        or workflow.tool_id != template.tool_id
        or workflow.workflow_data != graph_text
    ):
        workflow.description = template.description
        workflow.tool_id = template.tool_id
        workflow.workflow_data = graph_text
        updated = True
    return created, updated


def main() -> None:
    app = create_app()
    with app.app_context():
        created_workflows = 0
        updated_workflows = 0
        for template in iter_templates():
            created, updated = _ensure_workflow(template)
            created_workflows += int(created)
            updated_workflows += int(updated)

        db.session.commit()

        print(
            "Seed completed",
            f"workflows created={created_workflows}",
            f"workflows updated={updated_workflows}",
        )


if __name__ == "__main__":
    main()
