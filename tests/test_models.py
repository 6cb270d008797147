"""
Tests for Pydantic request and response models
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from travel_proxy.models import (
    ArchiveType,
    Coordinate,
    ErrorResponse,
    FlightEndpoint,
    FlightTrackerResponse,
    MapData,
    MapMarker,
    Place,
    ProxyRequest,
    ReminderActionRequest,
    ReminderActionResponse,
    ReminderRecord,
)


class TestProxyRequest:
    """Test ProxyRequest model validation"""

    def test_defaults(self):
        request = ProxyRequest()

        assert request.endpoint == FlightEndpoint.FLIGHTS
        assert request.query == ""
        assert request.limit == 10

    def test_valid_request(self):
        request = ProxyRequest(endpoint="routes", query="LHR", limit=3)

        assert request.endpoint == FlightEndpoint.ROUTES
        assert request.limit == 3

    def test_unknown_endpoint(self):
        with pytest.raises(ValidationError):
            ProxyRequest(endpoint="timetables")

    @pytest.mark.parametrize("limit", [0, -1])
    def test_non_positive_limit(self, limit):
        with pytest.raises(ValidationError):
            ProxyRequest(limit=limit)


class TestReminderModels:
    """Test reminder request and response models"""

    def test_action_request_alias(self):
        request = ReminderActionRequest.model_validate({"reminderId": "2", "action": "snooze"})

        assert request.reminder_id == "2"
        assert request.action == "snooze"

    def test_action_request_field_name(self):
        request = ReminderActionRequest(reminder_id="2", action="dismiss")

        assert request.reminder_id == "2"

    def test_action_request_numeric_id(self):
        assert ReminderActionRequest.model_validate({"reminderId": 7}).reminder_id == "7"

    def test_action_request_fields_optional(self):
        request = ReminderActionRequest.model_validate({})

        assert request.reminder_id is None
        assert request.action is None

    def test_action_response_serializes_alias(self):
        response = ReminderActionResponse(message="Reminder dismissed", reminder_id="4")

        assert response.model_dump(by_alias=True) == {
            "success": True,
            "message": "Reminder dismissed",
            "reminderId": "4",
        }

    def test_reminder_record(self):
        record = ReminderRecord(
            id="1",
            type="flight",
            title="Flight BA456 Check-in",
            description="Check-in opens 24 hours before departure",
            time="2024-01-20T14:00:00Z",
            location="London Heathrow",
            priority="high",
        )

        assert record.type == "flight"
        assert record.completed is False
        assert isinstance(record.time, datetime)

    def test_reminder_record_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            ReminderRecord(
                id="1", type="cruise", title="t", description="d",
                time="2024-01-20T14:00:00Z", location="l", priority="high"
            )


class TestMapModels:
    """Test map models"""

    def test_coordinate_bounds(self):
        with pytest.raises(ValidationError):
            Coordinate(latitude=91, longitude=0)

        with pytest.raises(ValidationError):
            Coordinate(latitude=0, longitude=-181)

    def test_map_data(self):
        map_data = MapData(
            center={"latitude": 41.3851, "longitude": 2.1734},
            markers=[{
                "id": "cafe-central",
                "title": "Café Central",
                "description": "Great coffee",
                "latitude": 41.3851,
                "longitude": 2.1734,
                "type": "food",
            }],
        )

        assert map_data.center.latitude == 41.3851
        assert isinstance(map_data.markers[0], MapMarker)
        assert map_data.markers[0].type == "food"


class TestPlaceModel:
    """Test the Place model"""

    def test_minimal_place(self):
        place = Place(
            id="wiki-lisbon",
            name="Lisbon",
            description="Capital of Portugal",
            location="Lisbon",
            coordinates={"lat": 0, "lng": 0},
            category="attractions",
            rating=4.3,
            estimated_cost_gbp=20,
            duration_hours=2,
        )

        assert place.booking_required is False
        assert place.google_place_id is None
        assert place.coordinates.lat == 0

    def test_rating_bounds(self):
        with pytest.raises(ValidationError):
            Place(
                id="x", name="x", description="x", location="x",
                coordinates={"lat": 0, "lng": 0}, category="attractions",
                rating=5.5, estimated_cost_gbp=0, duration_hours=1,
            )


class TestEnvelopes:
    """Test success and error envelopes"""

    def test_flight_tracker_response_defaults(self):
        response = FlightTrackerResponse(endpoint="flights")

        assert response.success is True
        assert response.data == []
        assert response.pagination is None
        assert response.query == ""

    def test_error_response(self):
        error = ErrorResponse(error="Invalid action", error_code="VALIDATION_ERROR")

        assert error.success is False
        assert isinstance(error.timestamp, datetime)

        dumped = error.model_dump(mode="json", exclude_none=True)
        assert set(dumped) == {"success", "error", "error_code", "timestamp"}

    def test_error_response_numeric_code(self):
        error = ErrorResponse(error="Bad request", error_code="UPSTREAM_DATA_ERROR", code=104)

        assert error.code == 104

    def test_archive_type_values(self):
        assert [t.value for t in ArchiveType] == ["source", "build"]
