"""
Integration tests for the /reminders and /map endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from travel_proxy.core.dependencies import get_sample_data_source
from travel_proxy.main import app
from travel_proxy.services.sample_data import SAMPLE_REMINDERS, SampleDataSource


@pytest.fixture
def client():
    """Create test client for FastAPI application."""
    return TestClient(app)


class TestRemindersListing:
    """Test cases for GET /reminders."""

    def test_all_reminders(self, client):
        response = client.get("/reminders")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["total"] == 5
        assert [r["id"] for r in data["reminders"]] == ["1", "2", "3", "4", "5"]

    def test_explicit_all(self, client):
        response = client.get("/reminders", params={"type": "all"})

        assert response.json()["total"] == 5

    def test_filter_by_flight(self, client):
        """Test that only flight reminders are returned."""
        response = client.get("/reminders", params={"type": "flight"})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert len(data["reminders"]) == 1
        reminder = data["reminders"][0]
        assert reminder["id"] == "1"
        assert reminder["type"] == "flight"
        assert reminder["priority"] == "high"
        assert reminder["completed"] is False
        assert reminder["time"].startswith("2024-01-20T14:00:00")

    def test_filter_by_low_priority_types(self, client):
        for reminder_type in ("hotel", "activity", "location", "suggestion"):
            data = client.get("/reminders", params={"type": reminder_type}).json()
            assert data["total"] == 1
            assert all(r["type"] == reminder_type for r in data["reminders"])

    def test_unknown_type_is_empty_not_error(self, client):
        response = client.get("/reminders", params={"type": "cruise"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["reminders"] == []
        assert data["total"] == 0

    def test_injected_data_source(self, client):
        """Test that the data source dependency can be replaced with fixtures."""
        fixtures = [
            dict(SAMPLE_REMINDERS[0], id="a"),
            dict(SAMPLE_REMINDERS[0], id="b"),
            dict(SAMPLE_REMINDERS[1], id="c"),
        ]
        app.dependency_overrides[get_sample_data_source] = lambda: SampleDataSource(reminders=fixtures)
        try:
            response = client.get("/reminders", params={"type": "flight"})
        finally:
            app.dependency_overrides.clear()

        data = response.json()
        assert data["total"] == 2
        assert [r["id"] for r in data["reminders"]] == ["a", "b"]


class TestReminderActions:
    """Test cases for POST /reminders."""

    @pytest.mark.parametrize("action,message", [
        ("complete", "Reminder marked as completed"),
        ("snooze", "Reminder snoozed for 30 minutes"),
        ("dismiss", "Reminder dismissed"),
    ])
    def test_recognized_actions(self, client, action, message):
        response = client.post("/reminders", json={"reminderId": "1", "action": action})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == message
        assert data["reminderId"] == "1"

    def test_numeric_reminder_id(self, client):
        response = client.post("/reminders", json={"reminderId": 3, "action": "complete"})

        assert response.status_code == 200
        assert response.json()["reminderId"] == "3"

    def test_action_does_not_change_reminder(self, client):
        """Test that acknowledging an action leaves the reminder untouched."""
        client.post("/reminders", json={"reminderId": "1", "action": "complete"})

        reminder = client.get("/reminders", params={"type": "flight"}).json()["reminders"][0]
        assert reminder["completed"] is False

    def test_unrecognized_action(self, client):
        response = client.post("/reminders", json={"reminderId": "1", "action": "archive"})

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Invalid action"

    @pytest.mark.parametrize("body", [
        {"action": "complete"},
        {"reminderId": "1"},
        {"reminderId": "", "action": "complete"},
        {},
    ])
    def test_missing_fields(self, client, body):
        response = client.post("/reminders", json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Reminder ID and action are required"

    def test_malformed_body(self, client):
        response = client.post(
            "/reminders",
            content=b"not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["success"] is False


class TestMapEndpoint:
    """Test cases for GET /map."""

    def test_map_data(self, client):
        response = client.get("/map")

        assert response.status_code == 200
        data = response.json()
        assert data["center"] == {"latitude": 41.3851, "longitude": 2.1734}
        assert [m["id"] for m in data["markers"]] == ["cafe-central", "sagrada-familia", "park-guell"]

        marker = data["markers"][0]
        assert set(marker) == {"id", "title", "description", "latitude", "longitude", "type"}

    def test_location_does_not_change_result(self, client):
        default = client.get("/map").json()
        located = client.get("/map", params={"location": "Lisbon"}).json()

        assert located == default

    def test_filter_markers_by_type(self, client):
        data = client.get("/map", params={"type": "activity"}).json()

        assert [m["id"] for m in data["markers"]] == ["sagrada-familia", "park-guell"]

    def test_unknown_marker_type(self, client):
        data = client.get("/map", params={"type": "museum"}).json()

        assert data["markers"] == []
        assert data["center"]["latitude"] == 41.3851
