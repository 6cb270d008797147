"""
FastAPI dependency providers.

Each provider builds its service from the injected Settings, so tests swap
configuration or whole services through ``app.dependency_overrides``.
"""

from typing import AsyncIterator

from fastapi import Depends

from travel_proxy.core.config import Settings, get_global_settings
from travel_proxy.services.archiver import Archiver, ArchiveBuilder, TarArchiver
from travel_proxy.services.chat_advisor import ChatAdvisor
from travel_proxy.services.flight_tracker import FlightTracker
from travel_proxy.services.places import PlacesService
from travel_proxy.services.sample_data import SampleDataSource, default_sample_data
from travel_proxy.services.sample_responder import MapService, ReminderService


async def get_flight_tracker(
    settings: Settings = Depends(get_global_settings)
) -> AsyncIterator[FlightTracker]:
    """Dependency to provide a FlightTracker; its HTTP client is closed after the request."""
    upstream = settings.get_upstream_config()
    tracker = FlightTracker(
        api_key=settings.AVIATION_STACK_API_KEY,
        base_url=upstream['aviation_stack_base_url'],
        timeout=upstream['timeout'],
    )
    try:
        yield tracker
    finally:
        await tracker.close()


async def get_places_service(
    settings: Settings = Depends(get_global_settings)
) -> AsyncIterator[PlacesService]:
    """Dependency to provide a PlacesService; its HTTP client is closed after the request."""
    upstream = settings.get_upstream_config()
    service = PlacesService(
        api_key=settings.GOOGLE_PLACES_API_KEY,
        base_url=upstream['google_places_base_url'],
        wikipedia_url=upstream['wikipedia_summary_url'],
        timeout=upstream['timeout'],
        wikipedia_timeout=upstream['wikipedia_timeout'],
    )
    try:
        yield service
    finally:
        await service.close()


async def get_chat_advisor(
    settings: Settings = Depends(get_global_settings)
) -> AsyncIterator[ChatAdvisor]:
    """Dependency to provide a ChatAdvisor; its HTTP client is closed after the request."""
    upstream = settings.get_upstream_config()
    advisor = ChatAdvisor(
        ollama_url=upstream['ollama_url'],
        model=upstream['ollama_model'],
        timeout=upstream['chat_timeout'],
    )
    try:
        yield advisor
    finally:
        await advisor.close()


def get_archiver(settings: Settings = Depends(get_global_settings)) -> Archiver:
    config = settings.get_archive_config()
    return TarArchiver(
        project_root=config['project_root'],
        excludes=config['excludes'],
        build_command=config['build_command'],
        build_output_dir=config['build_output_dir'],
    )


def get_archive_builder(
    archiver: Archiver = Depends(get_archiver),
    settings: Settings = Depends(get_global_settings)
) -> ArchiveBuilder:
    config = settings.get_archive_config()
    return ArchiveBuilder(
        archiver,
        tmp_dir=config['tmp_dir'],
        name_prefix=config['name_prefix'],
    )


def get_sample_data_source() -> SampleDataSource:
    return default_sample_data


def get_reminder_service(
    data_source: SampleDataSource = Depends(get_sample_data_source)
) -> ReminderService:
    return ReminderService(data_source)


def get_map_service(
    data_source: SampleDataSource = Depends(get_sample_data_source)
) -> MapService:
    return MapService(data_source)
