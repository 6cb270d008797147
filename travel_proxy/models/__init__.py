# Pydantic models for request/response validation

from .requests import (
    ArchiveType,
    ChatAdvisorRequest,
    ChatMessage,
    FlightEndpoint,
    ProxyRequest,
    ReminderAction,
    ReminderActionRequest,
    ReminderPriority,
    ReminderType,
)
from .responses import (
    ChatAdvisorResponse,
    Coordinate,
    ErrorResponse,
    FlightTrackerResponse,
    MapData,
    MapMarker,
    Place,
    PlaceCoordinates,
    PlacesSearchResponse,
    ReminderActionResponse,
    ReminderRecord,
    RemindersResponse,
)

__all__ = [
    "ArchiveType",
    "ChatAdvisorRequest",
    "ChatMessage",
    "FlightEndpoint",
    "ProxyRequest",
    "ReminderAction",
    "ReminderActionRequest",
    "ReminderPriority",
    "ReminderType",
    "ChatAdvisorResponse",
    "Coordinate",
    "ErrorResponse",
    "FlightTrackerResponse",
    "MapData",
    "MapMarker",
    "Place",
    "PlaceCoordinates",
    "PlacesSearchResponse",
    "ReminderActionResponse",
    "ReminderRecord",
    "RemindersResponse",
]
