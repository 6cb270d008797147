"""
Test fixtures with sample upstream payloads and fakes for the proxy services.
"""

import json
from typing import Any, Dict, List, Optional

import httpx

from travel_proxy.services.archiver import Archiver, ArchiveJob


class AviationStackFixtures:
    """Sample Aviation Stack responses."""

    FLIGHTS_RESPONSE: Dict[str, Any] = {
        "pagination": {"limit": 10, "offset": 0, "count": 1, "total": 1},
        "data": [
            {
                "flight_date": "2024-01-20",
                "flight_status": "scheduled",
                "departure": {"airport": "Heathrow", "iata": "LHR", "scheduled": "2024-01-20T16:00:00+00:00"},
                "arrival": {"airport": "El Prat", "iata": "BCN", "scheduled": "2024-01-20T19:15:00+00:00"},
                "airline": {"name": "British Airways", "iata": "BA"},
                "flight": {"number": "456", "iata": "BA456", "icao": "BAW456"},
            }
        ],
    }

    AIRPORTS_RESPONSE: Dict[str, Any] = {
        "pagination": {"limit": 10, "offset": 0, "count": 1, "total": 1},
        "data": [
            {"airport_name": "London Heathrow", "iata_code": "LHR", "country_name": "United Kingdom"}
        ],
    }

    EMPTY_RESPONSE: Dict[str, Any] = {"pagination": {"limit": 10, "offset": 0, "count": 0, "total": 0}}

    ERROR_RESPONSE: Dict[str, Any] = {
        "error": {
            "code": "invalid_access_key",
            "message": "You have not supplied a valid API Access Key.",
        }
    }

    USAGE_LIMIT_RESPONSE: Dict[str, Any] = {
        "error": {"code": "usage_limit_reached"}
    }


class GooglePlacesFixtures:
    """Sample Google Places and Wikipedia responses."""

    TEXT_SEARCH_RESPONSE: Dict[str, Any] = {
        "status": "OK",
        "results": [
            {
                "name": "Barcelona",
                "place_id": "ChIJ5TCOcRaYpBIRCmZHTz37sEQ",
                "geometry": {"location": {"lat": 41.3874, "lng": 2.1686}},
            }
        ],
    }

    NEARBY_SEARCH_RESPONSE: Dict[str, Any] = {
        "status": "OK",
        "results": [
            {
                "place_id": f"place-{index}",
                "name": f"Attraction {index}",
                "vicinity": "Eixample, Barcelona",
                "geometry": {"location": {"lat": 41.40 + index / 1000, "lng": 2.17}},
                "rating": 4.6,
                "price_level": 2,
                "user_ratings_total": 1200 + index,
                "types": ["tourist_attraction", "point_of_interest"],
            }
            for index in range(1, 8)
        ],
    }

    DENIED_RESPONSE: Dict[str, Any] = {
        "status": "REQUEST_DENIED",
        "error_message": "The provided API key is invalid.",
        "results": [],
    }

    WIKIPEDIA_SUMMARY: Dict[str, Any] = {
        "title": "Lisbon",
        "extract": "Lisbon is the capital and largest city of Portugal.",
        "content_urls": {"desktop": {"page": "https://en.wikipedia.org/wiki/Lisbon"}},
        "thumbnail": {"source": "https://upload.wikimedia.org/lisbon.jpg"},
    }


class OllamaFixtures:
    """Sample /api/generate responses from a local Ollama server"""

    ANSWER = (
        "Nerja to Malaga is about 52km, roughly an hour by car on the A-7 "
        "or 1.5 hours on the ALSA bus."
    )

    GENERATED_TEXT = json.dumps({
        "response": ANSWER,
        "suggestions": ["Bus schedules?", "Car rental tips?", "Malaga attractions?"],
    })

    
    def generate_response(text: str) -> Dict[str, Any]:
        return {
            "model": "llama3.2:3b",
            "created_at": "2025-01-10T12:00:00Z",
            "response": text,
            "done": True,
        }


def json_response(payload: Any, status_code: int = 200, url: str = "https://upstream.test/") -> httpx.Response:
    """Build an httpx response carrying a JSON body"""
    return httpx.Response(status_code, json=payload, request=httpx.Request("GET", url))


class FakeArchiver(Archiver):
    """In-memory archiver recording the jobs it receives."""

    def __init__(self, content: bytes = b"\x1f\x8b\x08\x00fake-archive", error: Optional[Exception] = None):
        self.content = content
        self.error = error
        self.jobs: List[ArchiveJob] = []

    async def archive(self, job: ArchiveJob) -> bytes:
        self.jobs.append(job)
        if self.error is not None:
            raise self.error
        return self.content
