"""
Flight tracker service proxying the Aviation Stack API.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from travel_proxy.core.error_handler import (
    ConfigurationMissingError,
    UpstreamDataError,
    UpstreamError,
)
from travel_proxy.models.requests import ProxyRequest
from travel_proxy.models.responses import FlightTrackerResponse
from travel_proxy.services.http_client import AsyncHttpClient
from travel_proxy.services.query_normalizer import derive_query_parameter


SETUP_INSTRUCTIONS = {
    "step1": "Add AVIATION_STACK_API_KEY to your .env file",
    "step2": "Restart the development server",
    "api_key": "Get your API key from https://aviationstack.com/dashboard",
}


class FlightTracker:
    """
    Proxies one flight tracker request to Aviation Stack.

    The credential check happens before any network activity, and each
    request issues exactly one upstream GET.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.aviationstack.com/v1",
        timeout: float = 10,
        http_client: Optional[AsyncHttpClient] = None
    ):
        """
        Initialize the FlightTracker.

        Args:
            api_key: Aviation Stack access key (may be empty when unconfigured)
            base_url: Aviation Stack API base URL
            timeout: Timeout in seconds for the upstream call
            http_client: Optional HTTP client instance, created lazily otherwise
        """
        self.logger = logging.getLogger(__name__)
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    @property
    def http_client(self) -> AsyncHttpClient:
        if self._http_client is None:
            self._http_client = AsyncHttpClient(timeout=self.timeout)
        return self._http_client

    def ensure_configured(self) -> None:
        if not self.api_key:
            raise ConfigurationMissingError(
                "Aviation Stack API key not configured",
                setup_instructions=dict(SETUP_INSTRUCTIONS),
            )

    def build_request(self, request: ProxyRequest) -> tuple:
        """Build the upstream URL and query parameters for a request"""
        endpoint = request.endpoint.value
        url = f"{self.base_url}/{endpoint}"
        params: Dict[str, Any] = {
            "access_key": self.api_key,
            "limit": request.limit,
        }

        derived = derive_query_parameter(request.endpoint, request.query)
        if derived:
            name, value = derived
            params[name] = value

        return url, params

    async def fetch(self, request: ProxyRequest) -> FlightTrackerResponse:
        """
        Fetch flight data for a request.

        Raises:
            ConfigurationMissingError: No access key is configured
            UpstreamError: Timeout, transport failure, non-success status or unreadable body
            UpstreamDataError: Upstream body carries an error object
        """
        self.ensure_configured()

        url, params = self.build_request(request)
        self.logger.info(f"Fetching from Aviation Stack: {request.endpoint.value} (query={request.query!r}, limit={request.limit})")

        try:
            response = await self.http_client.get(url, params=params, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise UpstreamError(
                f"Aviation Stack API timeout after {self.timeout}s"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(
                f"Aviation Stack API request failed: {type(e).__name__}"
            ) from e

        if not response.is_success:
            raise UpstreamError(f"Aviation Stack API error: {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError("Aviation Stack API returned an invalid JSON body") from e

        if not isinstance(payload, dict):
            raise UpstreamError("Aviation Stack API returned an unexpected body")

        upstream_error = payload.get("error")
        if upstream_error:
            if not isinstance(upstream_error, dict):
                upstream_error = {"message": str(upstream_error)}
            raise UpstreamDataError(
                upstream_error.get("message") or "Aviation Stack API error",
                code=upstream_error.get("code"),
            )

        data = payload.get("data") or []
        self.logger.info(f"Aviation Stack returned {len(data)} {request.endpoint.value} records")

        return FlightTrackerResponse(
            data=data,
            pagination=payload.get("pagination") or None,
            endpoint=request.endpoint.value,
            query=request.query,
        )

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.close()
