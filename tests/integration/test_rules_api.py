"""Integration tests for rule administration and history endpoints."""

from fastapi.testclient import TestClient


RULE = {
    "name": "Acknowledge new cases",
    "triggerType": "case_created",
    "conditions": {},
    "actions": [{"type": "add_comment", "parameters": {"comment": "Received {caseId}"}}],
    "priority": 2,
}


def test_create_and_list_rules(test_client: TestClient):
    response = test_client.post("/api/v1/rules", json=RULE)

    assert response.status_code == 201, response.text
    created = response.json()
    assert created["trigger_type"] == "case_created"
    assert created["actions"] == RULE["actions"]

    listing = test_client.get("/api/v1/rules")
    assert listing.status_code == 200
    assert [r["id"] for r in listing.json()] == [created["id"]]


def test_create_rule_validation_error(test_client: TestClient):
    response = test_client.post("/api/v1/rules", json={**RULE, "actions": []})
    assert response.status_code == 422

    response = test_client.post("/api/v1/rules", json={**RULE, "triggerType": "case_deleted"})
    assert response.status_code == 422


def test_patch_and_delete_rule(test_client: TestClient):
    rule_id = test_client.post("/api/v1/rules", json=RULE).json()["id"]

    patched = test_client.patch(f"/api/v1/rules/{rule_id}", json={"enabled": False})
    assert patched.status_code == 200
    assert patched.json()["enabled"] is False

    enabled_only = test_client.get("/api/v1/rules", params={"include_disabled": False})
    assert enabled_only.json() == []

    assert test_client.delete(f"/api/v1/rules/{rule_id}").status_code == 204
    assert test_client.get(f"/api/v1/rules/{rule_id}").status_code == 404


def test_unknown_rule_returns_404(test_client: TestClient):
    assert test_client.patch("/api/v1/rules/nope", json={"priority": 1}).status_code == 404
    assert test_client.delete("/api/v1/rules/nope").status_code == 404


def test_history_after_processing(test_client: TestClient):
    test_client.post("/api/v1/rules", json=RULE)
    test_client.put("/api/v1/cases/C-1", json={"status": "New", "priority": "Low"})
    test_client.post("/api/v1/workflow/process", json={"caseId": "C-1", "triggerType": "case_created"})

    response = test_client.get("/api/v1/history", params={"case_id": "C-1"})

    assert response.status_code == 200
    history = response.json()
    assert len(history) == 1
    assert history[0]["action_type"] == "add_comment"
    assert history[0]["result"] == "Success"
    assert history[0]["new_value"] == "Received C-1"


def test_health(test_client: TestClient):
    response = test_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"

    ready = test_client.get("/health/ready")
    assert ready.status_code == 200
    assert ready.json()["checks"]["rules_loaded"] == 0
