"""
Maps a free-text flight tracker query onto the Aviation Stack query parameter
it should populate.
"""

import re
from enum import Enum
from typing import Optional, Tuple, Union

from travel_proxy.core.error_handler import InvalidRequestError
from travel_proxy.models.requests import FlightEndpoint, ProxyRequest


# Two or three letter carrier code immediately followed by the flight number, e.g. BA456
FLIGHT_NUMBER_PATTERN = re.compile(r"^[A-Z]{2,3}\d+$", re.IGNORECASE)


class QueryKind(str, Enum):
    FLIGHT_NUMBER = "flight_number"
    LOCATION_CODE = "location_code"


def classify_query(query: str) -> QueryKind:
    """Classify a search term as a flight identifier or an airport/location code."""
    if FLIGHT_NUMBER_PATTERN.match(query.strip()):
        return QueryKind.FLIGHT_NUMBER
    return QueryKind.LOCATION_CODE


def derive_query_parameter(
    endpoint: Union[FlightEndpoint, str],
    query: Optional[str]
) -> Optional[Tuple[str, str]]:
    """
    Select the upstream parameter for a query.

    Args:
        endpoint: Aviation Stack endpoint being queried
        query: Raw search term from the client

    Returns:
        A (name, value) pair, or None when the query is empty
    """
    term = (query or "").strip()
    if not term:
        return None

    endpoint = FlightEndpoint(endpoint)

    if endpoint == FlightEndpoint.FLIGHTS:
        if classify_query(term) == QueryKind.FLIGHT_NUMBER:
            return "flight_iata", term.upper()
        return "dep_iata", term.upper()

    if endpoint in (FlightEndpoint.AIRPORTS, FlightEndpoint.AIRLINES):
        return "search", term

    # routes
    return "dep_iata", term.upper()


def parse_proxy_request(
    endpoint: Optional[str] = None,
    query: Optional[str] = None,
    limit: Optional[str] = None
) -> ProxyRequest:
    """
    Build a ProxyRequest from raw query string values.

    Missing or empty values fall back to the defaults (flights, no query, 10).

    Raises:
        InvalidRequestError: Unknown endpoint or a limit that is not a positive integer
    """
    endpoint = (endpoint or "").strip() or FlightEndpoint.FLIGHTS.value
    try:
        selected = FlightEndpoint(endpoint)
    except ValueError:
        allowed = ", ".join(e.value for e in FlightEndpoint)
        raise InvalidRequestError(
            "Invalid endpoint parameter",
            details=f"Expected one of {allowed}, got {endpoint!r}"
        )

    limit = (limit or "").strip()
    if not limit:
        parsed_limit = 10
    else:
        try:
            parsed_limit = int(limit)
        except ValueError:
            parsed_limit = 0
        if parsed_limit < 1:
            raise InvalidRequestError(
                "Invalid limit parameter",
                details=f"Expected a positive integer, got {limit!r}"
            )

    return ProxyRequest(endpoint=selected, query=query or "", limit=parsed_limit)
