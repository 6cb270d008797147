"""
Places search service backed by Google Places, with Wikipedia and curated
fallbacks, plus the raw Google Places passthrough.
"""

import logging
import random
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from travel_proxy.core.error_handler import (
    ConfigurationMissingError,
    InvalidRequestError,
    UpstreamError,
)
from travel_proxy.models.responses import Place, PlacesSearchResponse
from travel_proxy.services.http_client import AsyncHttpClient, mask_url
from travel_proxy.services import places_catalog
from travel_proxy.services.places_catalog import DEFAULT_CATEGORY


SETUP_INSTRUCTIONS = {
    "step1": "Add GOOGLE_PLACES_API_KEY to your .env file",
    "step2": "Restart the development server",
    "api_key": "Get your API key from https://console.cloud.google.com/apis/credentials",
}

NEARBY_RADIUS_METERS = 10000
MAX_GOOGLE_RESULTS = 5

# Google statuses that mean the key or quota is unusable, not that nothing matched
DENIED_STATUSES = ("REQUEST_DENIED", "OVER_QUERY_LIMIT")


class PlacesService:
    """
    Finds places for a destination and category.

    ``search`` walks Google Places, then Wikipedia, then the curated catalog,
    and always returns a result. ``passthrough`` returns the raw Google text
    search response.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://maps.googleapis.com/maps/api/place",
        wikipedia_url: str = "https://en.wikipedia.org/api/rest_v1/page/summary",
        timeout: float = 10,
        wikipedia_timeout: float = 3,
        http_client: Optional[AsyncHttpClient] = None,
        rng: Optional[random.Random] = None
    ):
        self.logger = logging.getLogger(__name__)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.wikipedia_url = wikipedia_url.rstrip("/")
        self.timeout = timeout
        self.wikipedia_timeout = wikipedia_timeout
        self._http_client = http_client
        self.rng = rng or random.Random()

    @property
    def http_client(self) -> AsyncHttpClient:
        if self._http_client is None:
            self._http_client = AsyncHttpClient(timeout=self.timeout)
        return self._http_client

    @staticmethod
    def _require_destination(destination: Optional[str]) -> str:
        destination = (destination or "").strip()
        if not destination:
            raise InvalidRequestError("Destination is required")
        return destination

    async def passthrough(self, destination: Optional[str], category: Optional[str] = None) -> Dict[str, Any]:
        """
        Forward a text search for "<destination> <category>" to Google Places.

        Raises:
            InvalidRequestError: Destination missing
            ConfigurationMissingError: No Google Places key configured
            UpstreamError: Google Places unreachable or returned an unusable response
        """
        destination = self._require_destination(destination)
        category = category or DEFAULT_CATEGORY

        if not self.api_key:
            raise ConfigurationMissingError(
                "Google Places API key not configured",
                setup_instructions=dict(SETUP_INSTRUCTIONS),
            )

        try:
            return await self._get_json(
                f"{self.base_url}/textsearch/json",
                {"query": f"{destination} {category}", "key": self.api_key},
                self.timeout,
            )
        except httpx.HTTPStatusError as e:
            raise UpstreamError(
                "Failed to fetch from Google Places",
                details=f"Google Places returned HTTP {e.response.status_code}",
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise UpstreamError(
                "Failed to fetch from Google Places",
                details=type(e).__name__,
            ) from e

    async def search(self, destination: Optional[str], category: Optional[str] = None) -> PlacesSearchResponse:
        """Search places, falling back from Google to Wikipedia to curated data"""
        destination = self._require_destination(destination)
        category = category or DEFAULT_CATEGORY
        self.logger.info(f"Places search for {destination!r} ({category})")

        places = await self.fetch_google_places(destination, category)
        if places:
            self.logger.info(f"Found {len(places)} places via Google Places")
            return self._response(places, "google_places", destination, category)

        places = await self.fetch_wikipedia_places(destination, category)
        if places:
            self.logger.info(f"Found {len(places)} places via Wikipedia")
            return self._response(places, "wikipedia", destination, category)

        places = places_catalog.curated_places(destination, category, self.rng)
        self.logger.info(f"Using {len(places)} curated places for {destination!r}")
        return self._response(places, "curated", destination, category)

    @staticmethod
    def _response(places: List[Place], source: str, destination: str, category: str) -> PlacesSearchResponse:
        return PlacesSearchResponse(
            places=places,
            source=source,
            destination=destination,
            category=category,
        )

    async def _get_json(self, url: str, params: Dict[str, Any], timeout: float) -> Dict[str, Any]:
        response = await self.http_client.get(url, params=params, timeout=timeout)
        response.raise_for_status()
        return response.json()

    async def fetch_google_places(self, destination: str, category: str) -> List[Place]:
        """
        Locate the destination with a text search, then list nearby places of the
        category's Google type. Any failure is logged and yields an empty list.
        """
        if not self.api_key:
            self.logger.warning("Google Places API key missing; skipping Google Places")
            return []

        try:
            text_data = await self._get_json(
                f"{self.base_url}/textsearch/json",
                {"query": destination, "key": self.api_key},
                self.timeout,
            )
            if text_data.get("status") in DENIED_STATUSES:
                self.logger.error(f"Google Places text search refused: {text_data.get('status')}")
                return []

            results = text_data.get("results") or []
            if not results:
                self.logger.info(f"No Google location found for {destination!r}")
                return []

            location = results[0]["geometry"]["location"]
            nearby_data = await self._get_json(
                f"{self.base_url}/nearbysearch/json",
                {
                    "location": f"{location['lat']},{location['lng']}",
                    "radius": NEARBY_RADIUS_METERS,
                    "type": places_catalog.google_place_type(category),
                    "key": self.api_key,
                },
                self.timeout,
            )
            if nearby_data.get("status") in DENIED_STATUSES:
                self.logger.error(f"Google Places nearby search refused: {nearby_data.get('status')}")
                return []

            return [
                self._google_place(place, destination, category)
                for place in (nearby_data.get("results") or [])[:MAX_GOOGLE_RESULTS]
            ]
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            self.logger.error(f"Google Places API error: {type(e).__name__}: {mask_url(str(e))}")
            return []

    def _google_place(self, place: Dict[str, Any], destination: str, category: str) -> Place:
        geometry = place["geometry"]["location"]
        return Place(
            id=place["place_id"],
            name=place["name"],
            description=places_catalog.describe_place(place),
            location=place.get("vicinity") or place.get("formatted_address") or destination,
            coordinates={"lat": geometry["lat"], "lng": geometry["lng"]},
            category=category,
            rating=place.get("rating") or 4.0,
            estimated_cost_gbp=places_catalog.estimate_cost_from_price_level(
                place.get("price_level"), category, self.rng
            ),
            duration_hours=places_catalog.estimate_duration(category, self.rng),
            booking_required=places_catalog.should_require_booking(place, category),
            image=places_catalog.default_image(category),
            google_place_id=place["place_id"],
            price_level=place.get("price_level"),
            user_ratings_total=place.get("user_ratings_total"),
            types=place.get("types"),
        )

    async def fetch_wikipedia_places(self, destination: str, category: str) -> List[Place]:
        """Build a single place from the destination's Wikipedia summary"""
        try:
            response = await self.http_client.get(
                f"{self.wikipedia_url}/{quote(destination)}",
                timeout=self.wikipedia_timeout,
            )
            if not response.is_success:
                return []
            summary = response.json()
        except (httpx.HTTPError, ValueError) as e:
            self.logger.error(f"Wikipedia API error: {type(e).__name__}: {e}")
            return []

        if not isinstance(summary, dict) or not summary.get("title"):
            return []

        return [Place(
            id=f"wiki-{places_catalog.slugify(destination)}",
            name=summary["title"],
            description=summary.get("extract") or f"Explore the highlights of {destination}",
            location=destination,
            coordinates={"lat": 0, "lng": 0},
            category=category,
            rating=4.3,
            estimated_cost_gbp=places_catalog.estimate_cost(category, self.rng),
            duration_hours=places_catalog.estimate_duration(category, self.rng),
            booking_required=False,
            website=((summary.get("content_urls") or {}).get("desktop") or {}).get("page"),
            image=(summary.get("thumbnail") or {}).get("source") or places_catalog.default_image(category),
        )]

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.close()
