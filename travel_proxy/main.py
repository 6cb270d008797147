"""
Travel Proxy API - FastAPI Application
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Depends, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from travel_proxy.core.config import Settings, get_global_settings
from travel_proxy.core.dependencies import (
    get_archive_builder,
    get_chat_advisor,
    get_flight_tracker,
    get_map_service,
    get_places_service,
    get_reminder_service,
)
from travel_proxy.core.error_handler import InvalidRequestError, register_exception_handlers
from travel_proxy.models.requests import ArchiveType, ChatAdvisorRequest, ReminderActionRequest
from travel_proxy.models.responses import (
    ChatAdvisorResponse,
    FlightTrackerResponse,
    MapData,
    PlacesSearchResponse,
    ReminderActionResponse,
    RemindersResponse,
)
from travel_proxy.services.archiver import ArchiveBuilder
from travel_proxy.services.chat_advisor import ChatAdvisor
from travel_proxy.services.flight_tracker import FlightTracker
from travel_proxy.services.places import PlacesService
from travel_proxy.services.query_normalizer import parse_proxy_request
from travel_proxy.services.sample_responder import MapService, ReminderService

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def log_startup_configuration(settings: Settings) -> None:
    """Log the effective configuration and flag missing upstream keys"""
    logger.info(f"Starting Travel Proxy API with config: {settings.mask_sensitive_data()}")
    for key_name in ("AVIATION_STACK_API_KEY", "GOOGLE_PLACES_API_KEY"):
        if not settings.is_configured(key_name):
            logger.warning(f"{key_name} is not set; dependent endpoints will return setup instructions")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_global_settings()
    settings.configure_logging()
    log_startup_configuration(settings)
    yield


# Create FastAPI application instance
app = FastAPI(
    title="Travel Proxy API",
    version="1.0.0",
    description="Proxy for flight, places and map data used by the travel planner app",
    lifespan=lifespan,
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:8081"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "message": "Travel Proxy API",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "travel-proxy"}


@app.get("/flight-tracker", response_model=FlightTrackerResponse)
async def flight_tracker(
    endpoint: Optional[str] = Query(None, description="Aviation Stack endpoint (default: flights)"),
    query: Optional[str] = Query(None, description="Flight number, airport code or search term"),
    limit: Optional[str] = Query(None, description="Maximum number of results (default: 10)"),
    tracker: FlightTracker = Depends(get_flight_tracker)
):
    """
    Proxy a flight data lookup to Aviation Stack.

    Flight-number queries (e.g. BA456) become ``flight_iata`` lookups; anything
    else is treated as an airport code.
    """
    request = parse_proxy_request(endpoint, query, limit)
    return await tracker.fetch(request)


@app.get("/map", response_model=MapData)
async def map_data(
    location: Optional[str] = Query(None, description="Location the map is requested for"),
    marker_type: Optional[str] = Query(None, alias="type", description="Only return markers of this type"),
    service: MapService = Depends(get_map_service)
):
    """Sample map center and markers"""
    return service.get_map(location=location, marker_type=marker_type)


@app.get("/reminders", response_model=RemindersResponse)
async def list_reminders(
    reminder_type: str = Query("all", alias="type", description="Reminder type to keep, or 'all'"),
    service: ReminderService = Depends(get_reminder_service)
):
    """List sample reminders, optionally filtered by type"""
    return service.list_reminders(reminder_type)


@app.post("/reminders", response_model=ReminderActionResponse)
async def reminder_action(
    body: ReminderActionRequest,
    service: ReminderService = Depends(get_reminder_service)
):
    """Acknowledge a complete/snooze/dismiss action on a reminder"""
    return service.apply_action(body.reminder_id, body.action)


@app.get("/download")
async def download(
    archive_type: Optional[str] = Query(None, alias="type", description="'source' (default) or 'build'"),
    builder: ArchiveBuilder = Depends(get_archive_builder)
):
    """
    Stream a gzip tarball of the project source or its web build.

    Returns:
        Response: The archive bytes with Content-Disposition naming the file
    """
    try:
        selected = ArchiveType(archive_type or ArchiveType.SOURCE.value)
    except ValueError:
        raise InvalidRequestError("Invalid type parameter", details=f"Expected 'source' or 'build', got {archive_type!r}")

    logger.info(f"Building {selected.value} archive")
    result = await builder.build(selected)

    return Response(
        content=result.content,
        media_type="application/gzip",
        headers={"Content-Disposition": result.content_disposition},
    )


@app.get("/places", response_model=PlacesSearchResponse)
async def search_places(
    destination: Optional[str] = Query(None, description="City or region to search"),
    category: str = Query("attractions", description="Place category"),
    service: PlacesService = Depends(get_places_service)
):
    """Places for a destination from Google Places, Wikipedia or the curated catalog"""
    return await service.search(destination, category)


@app.post("/chat-advisor", response_model=ChatAdvisorResponse)
async def chat_advisor(
    body: ChatAdvisorRequest,
    advisor: ChatAdvisor = Depends(get_chat_advisor)
):
    """
    Answer a travel question through the local chat model.

    Falls back to canned destination tips (``ai_powered`` false) when the
    model is unreachable or its output cannot be used.
    """
    return await advisor.advise(body.message, body.conversation_history)


if __name__ == "__main__":
    import uvicorn

    settings = get_global_settings()
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
