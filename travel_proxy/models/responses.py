"""Response models for the Travel Proxy API."""

from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, List, Optional, Union

from .requests import ReminderPriority, ReminderType


class FlightTrackerResponse(BaseModel):
    """Successful envelope for the flight tracker proxy."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "data": [{"flight": {"iata": "BA456"}, "flight_status": "scheduled"}],
                "pagination": {"limit": 10, "offset": 0, "count": 1, "total": 1},
                "endpoint": "flights",
                "query": "BA456"
            }
        }
    )

    success: bool = Field(default=True, description="Always true for this envelope")
    data: List[Dict[str, Any]] = Field(default_factory=list, description="Upstream data array")
    pagination: Optional[Dict[str, Any]] = Field(default=None, description="Upstream pagination metadata")
    endpoint: str = Field(..., description="Upstream endpoint that was queried")
    query: str = Field(default="", description="Query string echoed back")


class ReminderRecord(BaseModel):
    """A single travel reminder."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: str
    type: ReminderType
    title: str
    description: str
    time: datetime = Field(..., description="When the reminder fires (ISO-8601)")
    location: str
    priority: ReminderPriority
    completed: bool = False


class RemindersResponse(BaseModel):
    """Response for the reminders listing."""

    success: bool = True
    reminders: List[ReminderRecord] = Field(default_factory=list)
    total: int = Field(..., ge=0)


class ReminderActionResponse(BaseModel):
    """Acknowledgement of a reminder action."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    reminder_id: str = Field(..., alias="reminderId")


class Coordinate(BaseModel):
    """Latitude/longitude pair."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class MapMarker(BaseModel):
    """Point of interest shown on the itinerary map."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    type: str


class MapData(BaseModel):
    """Map center and its markers."""

    center: Coordinate
    markers: List[MapMarker] = Field(default_factory=list)


class PlaceCoordinates(BaseModel):
    lat: float
    lng: float


class Place(BaseModel):
    """A place suggestion for a destination."""

    id: str
    name: str
    description: str
    location: str
    coordinates: PlaceCoordinates
    category: str
    rating: float = Field(..., ge=0, le=5)
    estimated_cost_gbp: float = Field(..., ge=0)
    duration_hours: float = Field(..., ge=0)
    booking_required: bool = False
    website: Optional[str] = None
    image: Optional[str] = None
    google_place_id: Optional[str] = None
    price_level: Optional[int] = None
    user_ratings_total: Optional[int] = None
    types: Optional[List[str]] = None


class PlacesSearchResponse(BaseModel):
    """Response for the places search."""

    success: bool = True
    places: List[Place] = Field(default_factory=list)
    source: str = Field(..., description="google_places, wikipedia or curated")
    destination: str
    category: str


class ChatAdvisorResponse(BaseModel):
    """Chat advisor answer with follow-up suggestions."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "response": "Nerja to Malaga is about 52km, roughly an hour by car on the A-7.",
                "suggestions": ["Bus schedules?", "Car rental tips?"],
                "ai_powered": True
            }
        }
    )

    success: bool = True
    response: str
    suggestions: List[str] = Field(default_factory=list, max_length=4)
    ai_powered: bool = Field(..., description="False when the answer came from the canned fallback")


class ErrorResponse(BaseModel):
    """Error response model for consistent error handling."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "error": "Aviation Stack API key not configured",
                "error_code": "CONFIGURATION_MISSING",
                "setup_instructions": {
                    "step1": "Add AVIATION_STACK_API_KEY to your .env file",
                    "step2": "Restart the development server",
                    "api_key": "Get your API key from https://aviationstack.com/dashboard"
                },
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }
    )

    success: bool = Field(default=False, description="Always false for errors")
    error: str = Field(..., description="Human-readable error message")
    error_code: str = Field(..., description="Error code or type")
    code: Optional[Union[str, int]] = Field(default=None, description="Upstream error code, when provided")
    details: Optional[str] = Field(default=None, description="Underlying error message")
    setup_instructions: Optional[Dict[str, str]] = Field(default=None, description="Steps to fix the configuration")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Error timestamp"
    )
