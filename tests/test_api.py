"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from taskbrain.api.recurring_task import get_service
from taskbrain.main import app


@pytest.fixture
def client(service):
    app.dependency_overrides[get_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestFrequencyEndpoints:
    def test_normalize(self, client):
        response = client.post("/frequency/normalize", json={"label": "2 vær mnd"})

        assert response.status_code == 200
        assert response.json() == {
            "label": "2 vær mnd",
            "frequency": "bi-monthly",
            "db_value": "BI_MONTHLY",
        }

    def test_normalize_unknown_falls_back_to_monthly(self, client):
        response = client.post("/frequency/normalize", json={"label": "xyzzy"})

        assert response.json()["frequency"] == "monthly"

    def test_next_occurrence(self, client):
        response = client.post(
            "/frequency/next-occurrence",
            json={"frequency": "Månedlig", "start_date": "2024-01-15", "from_date": "2024-03-01"},
        )

        assert response.status_code == 200
        assert response.json() == {"frequency": "monthly", "next_occurrence": "2024-03-15"}

    def test_next_occurrence_invalid_date(self, client):
        response = client.post(
            "/frequency/next-occurrence",
            json={"frequency": "monthly", "start_date": "not-a-date"},
        )

        assert response.status_code == 400
        assert "start_date" in response.json()["detail"]


class TestRecurringTaskEndpoints:
    def _create(self, client, **overrides):
        body = {
            "client_name": "Fjordkraft Regnskap AS",
            "title": "Engangsoppdrag",
            "frequency_label": "engangs",
            "start_date": "2024-01-01",
        }
        body.update(overrides)
        return client.post("/recurring-tasks", json=body)

    def test_create_and_get(self, client):
        created = self._create(client)

        assert created.status_code == 201
        data = created.json()
        assert data["frequency"] == "ONCE"
        assert data["next_due_date"] == "2024-01-01"

        fetched = client.get(f"/recurring-tasks/{data['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["title"] == "Engangsoppdrag"

    def test_create_rejects_empty_label(self, client):
        response = self._create(client, frequency_label="  ")

        assert response.status_code == 422

    def test_get_missing_returns_404(self, client):
        assert client.get("/recurring-tasks/missing").status_code == 404

    def test_patch_and_delete(self, client):
        task_id = self._create(client).json()["id"]

        patched = client.patch(f"/recurring-tasks/{task_id}", json={"assigned_to": "ola"})
        assert patched.json()["assigned_to"] == "ola"

        assert client.delete(f"/recurring-tasks/{task_id}").json() == {"ok": True}
        assert client.get("/recurring-tasks").json() == []

    @pytest.mark.parametrize("field", ["client_name", "title", "frequency_label", "start_date", "enabled"])
    def test_patch_null_required_field_returns_422(self, client, field):
        task_id = self._create(client).json()["id"]

        response = client.patch(f"/recurring-tasks/{task_id}", json={field: None})

        assert response.status_code == 422
        assert client.get(f"/recurring-tasks/{task_id}").json()["title"] == "Engangsoppdrag"

    def test_patch_null_clears_optional_field(self, client):
        task_id = self._create(client, assigned_to="ola").json()["id"]

        response = client.patch(f"/recurring-tasks/{task_id}", json={"assigned_to": None})

        assert response.status_code == 200
        assert response.json()["assigned_to"] is None

    def test_trigger_generates_and_complete(self, client):
        task_id = self._create(client).json()["id"]

        triggered = client.post("/recurring-tasks/scheduler/trigger")
        assert triggered.status_code == 200
        [task] = triggered.json()
        assert task["due_date"] == "2024-01-01"

        instances = client.get(f"/recurring-tasks/{task_id}/instances").json()
        assert [i["id"] for i in instances] == [task["id"]]

        done = client.post(f"/recurring-tasks/tasks/{task['id']}/complete")
        assert done.json()["status"] == "done"

        [row] = client.get("/recurring-tasks/overview").json()
        assert row["status"] == "expired"

    def test_scheduler_status_when_not_started(self, client):
        response = client.get("/recurring-tasks/scheduler/status")

        assert response.status_code == 200
        assert response.json()["running"] is False
