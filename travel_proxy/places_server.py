"""
Auxiliary places server - passes Google Places text search responses through.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Depends, Query

from travel_proxy.core.config import get_global_settings
from travel_proxy.core.dependencies import get_places_service
from travel_proxy.core.error_handler import register_exception_handlers
from travel_proxy.services.places import PlacesService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_global_settings()
    settings.configure_logging()
    logger.info(f"Places server starting on port {settings.PLACES_SERVER_PORT}")
    if not settings.is_configured("GOOGLE_PLACES_API_KEY"):
        logger.warning("GOOGLE_PLACES_API_KEY is not set; /places will return setup instructions")
    yield


app = FastAPI(
    title="Travel Places Server",
    version="1.0.0",
    description="Passthrough for Google Places text search",
    lifespan=lifespan,
)

register_exception_handlers(app)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "travel-places-server"}


@app.get("/places")
async def places(
    destination: Optional[str] = Query(None, description="City or region to search"),
    category: Optional[str] = Query(None, description="Place category, defaults to attractions"),
    service: PlacesService = Depends(get_places_service)
):
    """Raw Google Places text search for '<destination> <category>'"""
    return await service.passthrough(destination, category)


if __name__ == "__main__":
    import uvicorn

    settings = get_global_settings()
    uvicorn.run(app, host=settings.API_HOST, port=settings.PLACES_SERVER_PORT)
