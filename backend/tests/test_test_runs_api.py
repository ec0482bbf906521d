# File: backend/tests/test_test_runs_api.py
# Version: v0.2.0
"""
Test runs REST API: status codes, error bodies and partial updates.
"""
import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from backend.app.db.models import TestRun as TestRunRow


@pytest.fixture()
def run_123(session_factory):
    db = session_factory()
    try:
        db.add(TestRunRow(id=123, test_project_name="project 123"))
        db.commit()
    finally:
        db.close()
    return 123


def test_get_all_on_empty_store(client):
    r = client.get("/api/testrun/")
    assert r.status_code == 200
    assert r.json() == []


def test_get_all_returns_every_run(client, run_payload):
    client.post("/api/testrun/", json=run_payload)
    client.post("/api/testrun/", json={**run_payload, "TestProjectName": "project 2", "SuiteRuns": []})

    r = client.get("/api/testrun/")
    assert r.status_code == 200
    names = [item["TestProjectName"] for item in r.json()]
    assert names == ["project 123", "project 2"]


def test_get_by_id_uses_wire_keys(client, run_123):
    r = client.get(f"/api/testrun/{run_123}")
    assert r.status_code == 200
    data = r.json()
    assert data["ID"] == 123
    assert data["TestProjectName"] == "project 123"
    assert data["SuiteRuns"] == []


def test_get_by_id_not_found(client):
    r = client.get("/api/testrun/999")
    assert r.status_code == 404
    assert r.json() == {"error": "test run not found"}


def test_get_by_id_with_non_numeric_id_is_404(client):
    r = client.get("/api/testrun/abc")
    assert r.status_code == 404


def test_create_returns_assigned_ids(client, run_payload):
    r = client.post("/api/testrun/", json=run_payload)
    assert r.status_code == 201
    data = r.json()
    assert data["ID"] >= 1
    assert data["TestProjectName"] == "project 123"
    assert data["StartTime"] == "2024-05-01T10:00:00Z"
    suite = data["SuiteRuns"][0]
    assert suite["ID"] >= 1 and suite["TestRunID"] == data["ID"]
    spec = suite["SpecRuns"][1]
    assert spec["SuiteID"] == suite["ID"]
    assert spec["Status"] == "Failed"

    r2 = client.get(f"/api/testrun/{data['ID']}")
    assert r2.json() == data


def test_create_accepts_snake_case_keys(client):
    r = client.post("/api/testrun/", json={"test_project_name": "snake"})
    assert r.status_code == 201
    assert r.json()["TestProjectName"] == "snake"


def test_create_with_malformed_json_is_400(client):
    r = client.post("/api/testrun/", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"] == "invalid request body"


def test_create_without_project_name_is_400(client):
    r = client.post("/api/testrun/", json={"TestSeed": 1})
    assert r.status_code == 400


def test_update_not_found(client):
    r = client.put("/api/testrun/123", json={"test_project_name": "x"})
    assert r.status_code == 404
    assert r.json() == {"error": "test run not found"}


@pytest.mark.parametrize("body", [b"", b"{broken", b'{"TestSeed": "NaN-ish"}', b"[1, 2]"])
def test_update_not_found_for_any_payload(client, body):
    r = client.put("/api/testrun/77", content=body, headers={"Content-Type": "application/json"})
    assert r.status_code == 404


def test_update_with_non_numeric_id_is_404(client):
    r = client.put("/api/testrun/invalidID", json={"test_project_name": "x"})
    assert r.status_code == 404


def test_update_changes_only_supplied_fields(client, run_payload):
    created = client.post("/api/testrun/", json=run_payload).json()

    r = client.put(f"/api/testrun/{created['ID']}", json={"id": 1, "test_project_name": "Updated Project"})
    assert r.status_code == 200
    updated = r.json()
    assert updated["TestProjectName"] == "Updated Project"
    assert updated["ID"] == created["ID"]
    assert updated["StartTime"] == created["StartTime"]
    assert updated["EndTime"] == created["EndTime"]
    assert updated["SuiteRuns"] == created["SuiteRuns"]

    again = client.put(f"/api/testrun/{created['ID']}", json={"id": 1, "test_project_name": "Updated Project"})
    assert again.json() == updated


def test_update_with_unknown_keys_returns_record_unchanged(client, run_payload):
    created = client.post("/api/testrun/", json=run_payload).json()

    r = client.put(f"/api/testrun/{created['ID']}", json={"BAD_PAYLOAD_KEY": "BAD_VALUE"})
    assert r.status_code == 200
    assert r.json() == created


def test_update_with_undecodable_body_returns_record_unchanged(client, run_payload):
    created = client.post("/api/testrun/", json=run_payload).json()

    r = client.put(f"/api/testrun/{created['ID']}", content=b"{oops", headers={"Content-Type": "application/json"})
    assert r.status_code == 200
    assert r.json() == created


@pytest.mark.parametrize(
    "body",
    [{"TestSeed": "many"}, {"TestProjectName": 5}, {"TestProjectName": None}, {"SuiteRuns": None}],
)
def test_update_with_invalid_field_returns_record_unchanged(client, run_payload, body):
    created = client.post("/api/testrun/", json=run_payload).json()
    r = client.put(f"/api/testrun/{created['ID']}", json=body)
    assert r.status_code == 200
    assert r.json() == created


def test_update_applies_valid_fields_next_to_invalid_ones(client, run_payload):
    created = client.post("/api/testrun/", json=run_payload).json()
    r = client.put(f"/api/testrun/{created['ID']}", json={"TestSeed": "many", "TestProjectName": "renamed"})
    assert r.status_code == 200
    assert r.json()["TestProjectName"] == "renamed"
    assert r.json()["TestSeed"] == created["TestSeed"]


def test_update_replaces_suite_runs_when_supplied(client, run_payload):
    created = client.post("/api/testrun/", json=run_payload).json()
    r = client.put(f"/api/testrun/{created['ID']}", json={"SuiteRuns": [{"SuiteName": "Only"}]})
    assert r.status_code == 200
    suites = r.json()["SuiteRuns"]
    assert [s["SuiteName"] for s in suites] == ["Only"]
    assert suites[0]["SpecRuns"] == []


def test_delete_existing_run(client, run_123):
    r = client.delete(f"/api/testrun/{run_123}")
    assert r.status_code == 200
    assert r.json() == {"ID": 123}

    assert client.get(f"/api/testrun/{run_123}").status_code == 404

    again = client.delete(f"/api/testrun/{run_123}")
    assert again.status_code == 404
    assert again.json() == {"error": "test run not found"}


def test_delete_with_no_rows_affected(client):
    r = client.delete("/api/testrun/123")
    assert r.status_code == 404
    assert r.json() == {"error": "test run not found"}


def test_delete_with_invalid_id_format(client):
    r = client.delete("/api/testrun/invalidID")
    assert r.status_code == 404


def test_delete_store_failure_is_500_and_rolls_back(client, run_payload, monkeypatch):
    created = client.post("/api/testrun/", json=run_payload).json()
    real_execute = Session.execute

    def failing_execute(self, statement, *args, **kwargs):
        # children are swept first; fail on the final DELETE FROM test_runs
        if getattr(statement, "is_delete", False) and statement.table.name == "test_runs":
            raise OperationalError(str(statement), {}, Exception("connection lost"))
        return real_execute(self, statement, *args, **kwargs)

    monkeypatch.setattr(Session, "execute", failing_execute)
    r = client.delete(f"/api/testrun/{created['ID']}")
    monkeypatch.undo()

    assert r.status_code == 500
    assert r.json() == {"error": "internal store failure"}

    after = client.get(f"/api/testrun/{created['ID']}")
    assert after.status_code == 200
    assert after.json() == created


@pytest.mark.parametrize("method", ["get", "put", "delete"])
@pytest.mark.parametrize("test_run_id", ["99999999999999999999", "2147483648", "0", "-5"])
def test_out_of_range_id_is_404(client, method, test_run_id):
    kwargs = {"json": {"TestProjectName": "x"}} if method == "put" else {}
    r = getattr(client, method)(f"/api/testrun/{test_run_id}", **kwargs)
    assert r.status_code == 404
    assert r.json() == {"error": "test run not found"}


def test_create_keeps_the_instant_of_offset_times(client, run_payload):
    body = {**run_payload, "StartTime": "2024-05-01T10:00:00+02:00", "EndTime": "2024-05-01T08:30:00Z"}
    created = client.post("/api/testrun/", json=body).json()
    assert created["StartTime"] == "2024-05-01T08:00:00Z"
    assert created["EndTime"] == "2024-05-01T08:30:00Z"

    fetched = client.get(f"/api/testrun/{created['ID']}").json()
    assert fetched["StartTime"] == created["StartTime"]
    assert fetched["EndTime"] == created["EndTime"]


def _failing_commit(self):
    raise OperationalError("COMMIT", {}, Exception("disk I/O error"))


def test_create_commit_failure_is_500_and_rolls_back(client, run_payload, monkeypatch):
    monkeypatch.setattr(Session, "commit", _failing_commit)
    r = client.post("/api/testrun/", json=run_payload)
    monkeypatch.undo()

    assert r.status_code == 500
    assert r.json() == {"error": "internal store failure"}
    assert client.get("/api/testrun/").json() == []


def test_update_commit_failure_is_500_and_rolls_back(client, run_payload, monkeypatch):
    created = client.post("/api/testrun/", json=run_payload).json()

    monkeypatch.setattr(Session, "commit", _failing_commit)
    r = client.put(f"/api/testrun/{created['ID']}", json={"TestProjectName": "never stored"})
    monkeypatch.undo()

    assert r.status_code == 500
    assert r.json() == {"error": "internal store failure"}
    assert client.get(f"/api/testrun/{created['ID']}").json() == created
