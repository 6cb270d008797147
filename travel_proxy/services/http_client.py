"""
Async HTTP client for one-shot calls to upstream travel APIs.
"""

import re
from typing import Any, Dict, Optional
import httpx
import logging

logger = logging.getLogger(__name__)


# Query parameters that carry credentials and must never reach the logs
SENSITIVE_PARAMS = ("access_key", "key", "api_key", "apikey")

_SENSITIVE_PARAM_RE = re.compile(
    r"(?P<name>(?:%s)=)[^&]+" % "|".join(SENSITIVE_PARAMS),
    re.IGNORECASE
)


def mask_url(url: str) -> str:
    """Hide credential query parameters in a URL"""
    return _SENSITIVE_PARAM_RE.sub(r"\g<name>API_KEY_HIDDEN", url)


class AsyncHttpClient:
    """
    Async HTTP client issuing a single timed request per call.

    Upstream calls are never retried: timeouts and transport failures
    propagate to the caller as httpx exceptions.
    """

    DEFAULT_HEADERS = {
        "Accept": "application/json",
        "User-Agent": "travel-proxy/1.0",
    }

    def __init__(
        self,
        timeout: float = 10,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.timeout = timeout

        # Configure httpx client
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=50)
        )

    def _get_headers(self, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Merge caller headers over the defaults"""
        merged = dict(self.DEFAULT_HEADERS)
        if headers:
            merged.update(headers)
        return merged

    async def request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        **kwargs
    ) -> httpx.Response:
        """Make one HTTP request; no retries"""
        if timeout is not None:
            kwargs["timeout"] = timeout

        logger.debug(f"Making {method} request to {mask_url(url)}")

        try:
            response = await self.client.request(
                method,
                url,
                params=params,
                headers=self._get_headers(headers),
                **kwargs
            )
        except httpx.TimeoutException as e:
            logger.warning(f"Timeout after {timeout or self.timeout}s for {mask_url(url)}: {type(e).__name__}")
            raise
        except httpx.HTTPError as e:
            logger.warning(f"Request to {mask_url(url)} failed: {type(e).__name__}")
            raise

        if response.status_code >= 400:
            logger.warning(f"Upstream returned {response.status_code} for {mask_url(url)}")
        else:
            logger.debug(f"Successful {method} request to {mask_url(url)}")

        return response

    async def get(self, url: str, **kwargs) -> httpx.Response:
        """Make async GET request"""
        return await self.request("GET", url, **kwargs)

    async def close(self) -> None:
        """Close the HTTP client"""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
