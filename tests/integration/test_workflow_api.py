"""Integration tests for case processing and scheduler tick endpoints."""

from datetime import timedelta

from fastapi.testclient import TestClient


ASSIGN_RULE = {
    "name": "Assign on status change",
    "triggerType": "status_change",
    "actions": [{"type": "change_status", "parameters": {"newStatus": "Assigned"}}],
    "priority": 1,
}


def test_process_applies_rule_to_stored_case(test_client: TestClient):
    test_client.post("/api/v1/rules", json=ASSIGN_RULE)
    put = test_client.put("/api/v1/cases/C-1", json={"status": "New", "priority": "Medium"})
    assert put.status_code == 200

    response = test_client.post(
        "/api/v1/workflow/process", json={"caseId": "C-1", "triggerType": "status_change"}
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["processed_rules"] == 1
    assert body["failed_rules"] == 0
    assert body["rules"][0]["actions"][0]["new_value"] == "Assigned"
    assert test_client.get("/api/v1/cases/C-1").json()["status"] == "Assigned"


def test_action_failures_are_reported_in_body(test_client: TestClient):
    test_client.post("/api/v1/rules", json=ASSIGN_RULE)
    test_client.put("/api/v1/cases/C-2", json={"status": "Closed"})

    response = test_client.post(
        "/api/v1/workflow/process", json={"caseId": "C-2", "triggerType": "status_change"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["failed_rules"] == 1
    assert "Invalid status transition" in body["rules"][0]["actions"][0]["error"]


def test_process_unknown_case_returns_404(test_client: TestClient):
    response = test_client.post(
        "/api/v1/workflow/process", json={"caseId": "ghost", "triggerType": "case_created"}
    )
    assert response.status_code == 404


def test_put_case_rejects_unknown_status_and_priority(test_client: TestClient):
    response = test_client.put("/api/v1/cases/P-1", json={"status": "Open"})
    assert response.status_code == 422

    response = test_client.put("/api/v1/cases/P-1", json={"status": "New", "priority": "Urgent"})
    assert response.status_code == 422

    assert test_client.get("/api/v1/cases/P-1").status_code == 404


def test_process_rejects_unknown_trigger(test_client: TestClient):
    test_client.put("/api/v1/cases/C-3", json={"status": "New"})
    response = test_client.post(
        "/api/v1/workflow/process", json={"caseId": "C-3", "triggerType": "case_deleted"}
    )
    assert response.status_code == 422


def test_periodic_and_daily_ticks(test_client: TestClient, now):
    test_client.post(
        "/api/v1/rules",
        json={
            "name": "Escalate slow high-priority cases",
            "triggerType": "priority_escalation",
            "actions": [{"type": "escalate_case", "parameters": {"escalationLevel": 1}}],
        },
    )
    created_at = (now - timedelta(hours=9)).isoformat()
    test_client.put(
        "/api/v1/cases/C-9",
        json={"status": "In Progress", "priority": "High", "created_at": created_at, "last_modified": created_at},
    )

    daily = test_client.post("/api/v1/workflow/ticks/daily")
    assert daily.status_code == 200
    assert daily.json()["triggers_raised"] == 1
    assert test_client.get("/api/v1/cases/C-9").json()["priority"] == "Critical"

    periodic = test_client.post("/api/v1/workflow/ticks/periodic")
    assert periodic.status_code == 200
    assert periodic.json()["cases_examined"] == 1
    assert periodic.json()["skipped"] is False
