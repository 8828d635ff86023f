"""
NextBillion.ai HTTP client.

A thin async wrapper that sends a built UpstreamRequest and returns the parsed
JSON body. The upstream API reports failures inside the body, so the body is
returned whatever the HTTP status; classifying it is the normalizers' job.
"""

from typing import Any
import httpx

from .config import Settings
from .logger import get_logger
from .models import UpstreamRequest

logger = get_logger("client")


class NbaiClient:
    """
    Async client for the NextBillion.ai REST API.

    No retries, caching or rate limiting: every call is a single GET.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None):
        """
        Initialize the NextBillion.ai client.

        Args:
            settings: Loaded server settings (API key, base URL, timeout)
            http_client: Optional preconfigured httpx client, mainly for tests
        """
        self.settings = settings
        self.http_client = http_client or httpx.AsyncClient(timeout=settings.http_timeout)
        self.api_call_count = 0

    @property
    def api_key(self) -> str:
        return self.settings.api_key

    def url_for(self, request: UpstreamRequest) -> str:
        """Absolute URL of a request's endpoint, without the query string"""
        return f"{self.settings.base_url}{request.endpoint}"

    async def fetch_json(self, request: UpstreamRequest) -> Any:
        """
        Perform the GET request and parse its JSON body.

        Args:
            request: The request produced by a builder

        Returns:
            The parsed JSON document

        Raises:
            httpx.HTTPError: On transport failures
            ValueError: If the body is not valid JSON
        """
        logger.debug("GET %s", request.endpoint)
        self.api_call_count += 1
        response = await self.http_client.get(self.url_for(request), params=request.params)
        logger.debug("%s responded with HTTP %s", request.endpoint, response.status_code)
        return response.json()

    async def aclose(self) -> None:
        """Close the underlying HTTP client"""
        await self.http_client.aclose()

    def get_api_call_count(self) -> int:
        """Get the number of API calls made in this session"""
        return self.api_call_count

    def reset_api_call_count(self) -> None:
        """Reset the API call counter"""
        self.api_call_count = 0
