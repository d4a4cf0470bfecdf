"""Tests for the healthcheck, catalog and template endpoints."""

from __future__ import annotations


def test_health_endpoint_returns_ok(client):
    """The healthcheck endpoint should return a JSON payload with status ok."""

    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "service": "flowcrm"}


def test_catalog_lists_groups(client):
    response = client.get("/api/catalog/nodes")

    assert response.status_code == 200
    groups = response.get_json()
    assert [group["key"] for group in groups] == ["triggers", "actions", "logic", "integrations"]
    transcription = next(
        node for node in groups[1]["nodes"] if node["subtype"] == "transcription"
    )
    assert transcription["hasSchema"] is True


def test_catalog_node_detail(client):
    response = client.get("/api/catalog/nodes/database")
    data = response.get_json()
    assert data["nodeType"]["category"] == "integration"
    assert set(data["schema"]) == {"table", "action", "mapping"}

    schema_only = client.get("/api/catalog/nodes/voice").get_json()
    assert schema_only["nodeType"] is None
    assert schema_only["schema"]["autoStart"]["default"] is False

    assert client.get("/api/catalog/nodes/teleport").status_code == 404


def test_templates_listing_and_detail(client):
    listing = client.get("/api/templates").get_json()
    assert [item["key"] for item in listing] == ["default", "simpleTranscription", "voicePipeline"]

    response = client.get("/api/templates/voicePipeline")
    assert response.status_code == 200
    record = response.get_json()
    assert record["id"] is None
    assert record["toolId"] == "voice-crm"
    assert len(record["workflowData"]["nodes"]) == 6

    assert client.get("/api/templates/unknown").status_code == 404
