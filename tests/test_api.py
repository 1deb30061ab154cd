"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from trigger_diary.services.advisor import HealthAdvisor
from trigger_diary.services.storage import RecordStore
from trigger_diary.utils.config import Settings
from trigger_diary.web.app import app
from trigger_diary.web.dependencies import get_composer, get_store


class FakeComposer:
    def compose(self, aggregate, records):
        return ["Sleep more", "Skip chocolate", "Drink water"]


@pytest.fixture
def store(tmp_path):
    with RecordStore(Settings(data_dir=tmp_path)) as store:
        yield store


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_composer] = lambda: FakeComposer()
    yield TestClient(app)
    app.dependency_overrides.clear()


def post_spike_scenario(client: TestClient) -> None:
    """Flat severity 2 on Jan 1-3, severity 9 on Jan 4; low sleep and chocolate on Jan 3."""
    for d, level in (("01", 2), ("02", 2), ("03", 2), ("04", 9)):
        response = client.post("/insert_symptoms", json={
            "date": f"2025-01-{d}T00:00:00Z",
            "nausea": level, "fatigue": level, "pain": level,
        })
        assert response.status_code == 200
    client.post("/insert_sleep", json={"date": "2025-01-03T00:00:00Z", "duration": 5.0, "quality": 4})
    client.post("/insert_diet", json={"date": "2025-01-03T00:00:00Z", "meal": "snack", "items": ["chocolate"]})


class TestBasics:
    """Tests for liveness and health routes."""

    def test_ping(self, client):
        """Test the liveness route."""
        assert client.get("/ping").json() == {"message": "pong"}

    def test_health(self, client):
        """Test the health route."""
        assert client.get("/health").json() == {"status": "ok"}


class TestRecordRoutes:
    """Tests for insert and fetch-all endpoints."""

    def test_insert_sleep(self, client):
        """Test inserting a sleep record returns it with its id."""
        response = client.post("/insert_sleep", json={
            "date": "2025-01-03T23:10:00Z",
            "duration": 6.5,
            "quality": 7,
            "disruptions": "noise",
            "notes": "",
        })
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == 1
        assert body["date"] == "2025-01-03"
        assert body["duration"] == 6.5

    def test_invalid_date_is_400(self, client):
        """Test a non-RFC3339 date is rejected with 400."""
        response = client.post("/insert_symptoms", json={
            "date": "03/01/2025", "nausea": 1, "fatigue": 1, "pain": 1,
        })
        assert response.status_code == 400
        assert "RFC3339" in response.json()["error"]

    def test_missing_field_is_400(self, client):
        """Test a missing required field is rejected with 400."""
        response = client.post("/insert_menstrual", json={"date": "2025-01-01T00:00:00Z"})
        assert response.status_code == 400
        assert "period_event" in response.json()["error"]

    def test_get_all_in_storage_order(self, client):
        """Test fetch-all returns records in insertion order."""
        client.post("/insert_diet", json={"date": "2025-01-05T00:00:00Z", "meal": "lunch", "items": ["rice"]})
        client.post("/insert_diet", json={"date": "2025-01-02T00:00:00Z", "meal": "dinner", "items": ["fish"]})

        body = client.get("/get_all_diet").json()

        assert [r["date"] for r in body] == ["2025-01-05", "2025-01-02"]
        assert body[1]["items"] == ["fish"]

    def test_get_all_empty(self, client):
        """Test fetch-all on an empty store."""
        for kind in ("sleep", "diet", "menstrual", "symptoms"):
            assert client.get(f"/get_all_{kind}").json() == []


class TestAnalysisRoutes:
    """Tests for trigger analysis and flare-up prediction endpoints."""

    def test_triggers_without_data(self, client):
        """Test trigger analysis with no symptom data."""
        assert client.get("/analysis/triggers").json() == {"message": "no symptom data"}

    def test_triggers_with_single_record(self, client):
        """Test trigger analysis with a single symptom record."""
        client.post("/insert_symptoms", json={
            "date": "2025-01-01T00:00:00Z", "nausea": 3, "fatigue": 3, "pain": 3,
        })
        response = client.get("/analysis/triggers")
        assert response.status_code == 200
        assert response.json() == {"message": "insufficient data for spike detection"}

    def test_triggers(self, client):
        """Test trigger analysis over the spike scenario."""
        post_spike_scenario(client)

        body = client.get("/analysis/triggers").json()

        assert body["mean"] == pytest.approx(3.75)
        assert body["std_dev"] == pytest.approx(3.5)
        assert body["low_sleep"] == {
            "count": 1,
            "examples": [{"date": "2025-01-03", "severity": 9.0}],
        }
        assert body["food_items"]["counts"] == {"chocolate": 1}
        assert body["food_items"]["examples"]["chocolate"] == [{"date": "2025-01-03", "severity": 9.0}]
        assert body["menstrual_events"] == {"counts": {}, "examples": {}}
        assert body["flow_levels"] == {"counts": {}, "examples": {}}

    def test_flareup(self, client):
        """Test flare-up prediction over the spike scenario."""
        post_spike_scenario(client)

        body = client.get("/analysis/flareup").json()

        assert body == {
            "flareup_probability": 100.0,
            "flareup_predictions": [
                "Low sleep hours on 2025-01-03",
                "Chocolate consumed on 2025-01-03",
            ],
        }

    def test_flareup_without_recent_explanations(self, client):
        """Test the message returned when nothing recent explains a flare-up."""
        for d in ("01", "02"):
            client.post("/insert_symptoms", json={
                "date": f"2025-01-{d}", "nausea": 2, "fatigue": 2, "pain": 2,
            })
        assert client.get("/analysis/flareup").json() == {
            "message": "no recent flareup predictions found"
        }


class TestAdvisorRoutes:
    """Tests for the recommendations endpoint."""

    def test_recommendations(self, client):
        """Test recommendations from the composer."""
        post_spike_scenario(client)

        body = client.get("/advisor/recommendations").json()

        assert body == {"recommendations": ["Sleep more", "Skip chocolate", "Drink water"]}

    def test_recommendations_without_data(self, client):
        """Test recommendations with no symptom data."""
        assert client.get("/advisor/recommendations").json() == {"message": "no symptom data"}

    def test_provider_not_configured(self, client):
        """Test 503 when no AI provider key is set."""
        post_spike_scenario(client)
        settings = Settings(anthropic_api_key=None, openai_api_key=None)
        app.dependency_overrides[get_composer] = lambda: HealthAdvisor(settings)

        response = client.get("/advisor/recommendations")

        assert response.status_code == 503
        assert "ANTHROPIC_API_KEY" in response.json()["error"]
