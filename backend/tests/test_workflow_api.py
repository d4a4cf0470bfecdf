"""Tests for the workflow persistence REST API."""

from __future__ import annotations

from conftest import action_record, trigger_record


def _graph(*nodes, edges=()):
    return {"nodes": list(nodes), "edges": list(edges)}


def test_workflow_roundtrip(client):
    create_response = client.post("/api/workflows", json={"name": "Pipeline", "toolId": "voiceToCRM"})
    assert create_response.status_code == 201
    created = create_response.get_json()
    assert created["name"] == "Pipeline"
    assert created["workflowData"] == {"nodes": [], "edges": []}

    list_response = client.get("/api/workflows")
    assert list_response.status_code == 200
    listed = list_response.get_json()
    assert any(workflow["id"] == created["id"] for workflow in listed)

    detail_response = client.get(f"/api/workflows/{created['id']}")
    assert detail_response.status_code == 200
    detail = detail_response.get_json()
    assert detail["toolId"] == "voiceToCRM"

    graph_payload = _graph(
        trigger_record(),
        action_record(),
        edges=[{"id": "e1", "source": "t1", "target": "a1", "animated": True}],
    )
    update_response = client.put(
        f"/api/workflows/{created['id']}",
        json={"workflowData": graph_payload},
    )
    assert update_response.status_code == 200
    updated = update_response.get_json()
    assert updated["name"] == "Pipeline"
    assert [node["id"] for node in updated["workflowData"]["nodes"]] == ["t1", "a1"]
    assert updated["workflowData"]["edges"][0]["animated"] is True

    delete_response = client.delete(f"/api/workflows/{created['id']}")
    assert delete_response.status_code == 204
    assert client.get(f"/api/workflows/{created['id']}").status_code == 404


def test_create_requires_name(client):
    response = client.post("/api/workflows", json={"workflowData": _graph()})

    assert response.status_code == 400
    assert "name is required" in response.get_json()["errors"]


def test_duplicate_names_conflict(client):
    assert client.post("/api/workflows", json={"name": "Leads"}).status_code == 201

    response = client.post("/api/workflows", json={"name": "leads"})

    assert response.status_code == 409
    assert "already exists" in response.get_json()["error"]


def test_invalid_graph_is_not_persisted(client):
    response = client.post(
        "/api/workflows",
        json={"name": "No trigger", "workflowData": _graph(action_record())},
    )

    assert response.status_code == 400
    assert response.get_json()["errors"] == ["Workflow must have at least one trigger node."]
    assert client.get("/api/workflows").get_json() == []


def test_malformed_graph_is_rejected(client):
    response = client.post(
        "/api/workflows",
        json={"name": "Broken", "workflowData": {"nodes": [{"id": "x", "type": "action"}]}},
    )

    assert response.status_code == 400
    assert "missing its data object" in response.get_json()["errors"][0]


def test_update_requires_workflow_data(client):
    created = client.post("/api/workflows", json={"name": "Needs graph"}).get_json()

    response = client.put(f"/api/workflows/{created['id']}", json={"name": "Renamed"})

    assert response.status_code == 400
    assert response.get_json()["errors"] == ["workflowData is required"]


def test_graph_size_limit(app, client, monkeypatch):
    monkeypatch.setitem(app.config, "MAX_GRAPH_BYTES", 50)

    response = client.post(
        "/api/workflows",
        json={"name": "Large", "workflowData": _graph(trigger_record())},
    )

    assert response.status_code == 400
    assert response.get_json()["errors"] == ["workflowData exceeds the maximum size"]


def test_list_filters_by_tool(client):
    client.post("/api/workflows", json={"name": "Voice", "toolId": "voiceToCRM"})
    client.post("/api/workflows", json={"name": "Other", "toolId": "leadScoring"})

    response = client.get("/api/workflows", query_string={"toolId": "voiceToCRM"})

    assert [workflow["name"] for workflow in response.get_json()] == ["Voice"]


def test_validate_endpoint_reports_cycle_and_warnings(client):
    payload = {
        "workflowData": _graph(
            trigger_record(),
            action_record("a1"),
            action_record("a2"),
            action_record("lonely"),
            edges=[
                {"id": "e1", "source": "t1", "target": "a1"},
                {"id": "e2", "source": "a1", "target": "a2"},
                {"id": "e3", "source": "a2", "target": "a1"},
            ],
        )
    }

    response = client.post("/api/workflows/validate", json=payload)

    assert response.status_code == 200
    data = response.get_json()
    assert data["isValid"] is False
    assert data["errors"] == ["Workflow contains a cycle: a1 -> a2 -> a1"]
    assert data["warnings"] == ["Found 1 potentially disconnected node(s): Transcribe"]
