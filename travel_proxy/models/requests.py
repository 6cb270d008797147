"""Request models for the Travel Proxy API."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FlightEndpoint(str, Enum):
    """Aviation Stack endpoints exposed through the flight tracker."""
    FLIGHTS = "flights"
    AIRPORTS = "airports"
    AIRLINES = "airlines"
    ROUTES = "routes"


class ReminderType(str, Enum):
    FLIGHT = "flight"
    HOTEL = "hotel"
    ACTIVITY = "activity"
    LOCATION = "location"
    SUGGESTION = "suggestion"


class ReminderPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ReminderAction(str, Enum):
    """Actions a client may apply to a reminder."""
    COMPLETE = "complete"
    SNOOZE = "snooze"
    DISMISS = "dismiss"


class ArchiveType(str, Enum):
    """Snapshot kinds offered by the download endpoint."""
    SOURCE = "source"
    BUILD = "build"


class ProxyRequest(BaseModel):
    """Request model for the flight tracker proxy."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "endpoint": "flights",
                "query": "BA456",
                "limit": 10
            }
        }
    )

    endpoint: FlightEndpoint = FlightEndpoint.FLIGHTS
    query: str = ""
    limit: int = Field(default=10, ge=1, description="Maximum number of upstream results")


class ReminderActionRequest(BaseModel):
    """Request body for reminder actions.

    Fields are optional here so the handler can report missing values
    with its own message.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "reminderId": "1",
                "action": "complete"
            }
        }
    )

    reminder_id: Optional[str] = Field(default=None, alias="reminderId")
    action: Optional[str] = None

    @field_validator("reminder_id", mode="before")
    @classmethod
    def coerce_numeric_id(cls, v):
        """Clients may send numeric ids"""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class ChatMessage(BaseModel):
    """One earlier turn of a chat advisor conversation."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    is_user: bool = Field(default=False, alias="isUser")


class ChatAdvisorRequest(BaseModel):
    """Request body for the chat advisor.

    ``message`` is optional here so the handler reports a missing message
    with its own error.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "message": "How far is Nerja from Malaga?",
                "conversationHistory": [
                    {"text": "I'm going to Nerja in December", "isUser": True}
                ]
            }
        }
    )

    message: Optional[str] = None
    conversation_history: List[ChatMessage] = Field(default_factory=list, alias="conversationHistory")
    user_profile: Optional[Dict[str, Any]] = Field(default=None, alias="userProfile")

    @field_validator("conversation_history", mode="before")
    @classmethod
    def default_history(cls, v):
        return [] if v is None else v
