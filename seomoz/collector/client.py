"""
SEOmoz API Client

Async HTTP client for the Linkscape url-metrics endpoint with:
- Signed single-URL and batch (up to 10 URLs) queries
- Bulk queries over any number of URLs, batched and run concurrently
- Injectable httpx transport for testing
"""

import logging
import time
from typing import Callable, Dict, List, Optional

import httpx

from ..errors import APIStatusError, ConfigurationError, MozAPIError, TransportError
from ..models import DEFAULT_COLS, MAX_BATCH_URLS, URLMetrics
from ..utils.config import DEFAULT_API_URL, Settings, get_settings
from .builder import build_get_request, build_post_request, build_query_params, validate_endpoint
from .orchestrator import BulkQueryOrchestrator
from .reconcile import parse_batch_response, parse_single_response

logger = logging.getLogger(__name__)


class MozClient:
    """
    Async client for the SEOmoz API.

    Usage:
        async with MozClient(access_id="my_id", secret_key="my_secret") as client:
            metrics = await client.get_url_metrics("https://example.com")
            many = await client.get_bulk_url_metrics(urls)
    """

    def __init__(
        self,
        access_id: str,
        secret_key: str,
        *,
        endpoint: str = DEFAULT_API_URL,
        max_batch_urls: int = MAX_BATCH_URLS,
        max_concurrency: Optional[int] = None,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize SEOmoz client.

        Args:
            access_id: SEOmoz access id
            secret_key: SEOmoz secret key
            endpoint: url-metrics endpoint
            max_batch_urls: URLs per batch call, at most 10
            max_concurrency: Max batch calls in flight during a bulk query (None = no limit)
            timeout: Request timeout in seconds
            transport: httpx transport to send requests through
            clock: Returns the current Unix time, used for signature expiry
        """
        if not 1 <= max_batch_urls <= MAX_BATCH_URLS:
            raise ConfigurationError(
                f"max_batch_urls must be between 1 and {MAX_BATCH_URLS}, got {max_batch_urls}"
            )
        if max_concurrency is not None and max_concurrency < 1:
            raise ConfigurationError(f"max_concurrency must be at least 1, got {max_concurrency}")

        self.access_id = access_id
        self.secret_key = secret_key
        self.endpoint = validate_endpoint(endpoint)
        self.max_batch_urls = max_batch_urls
        self.max_concurrency = max_concurrency
        self._clock = clock

        self._client = httpx.AsyncClient(
            transport=transport,
            timeout=httpx.Timeout(timeout),
        )
        self._closed = False

    @classmethod
    def from_env(cls, settings: Optional[Settings] = None, **kwargs) -> "MozClient":
        """
        Create a client configured from SEOMOZ_* environment variables.

        Keyword arguments are passed through to the constructor and win over
        the settings.
        """
        settings = settings or get_settings()
        options = {
            "endpoint": settings.SEOMOZ_API_URL,
            "max_batch_urls": settings.SEOMOZ_MAX_BATCH_URLS,
            "max_concurrency": settings.SEOMOZ_MAX_CONCURRENCY,
            "timeout": settings.SEOMOZ_TIMEOUT,
        }
        options.update(kwargs)
        return cls(settings.SEOMOZ_ACCESS_ID, settings.SEOMOZ_SECRET_KEY, **options)

    def _query_params(self, cols: int) -> Dict[str, str]:
        # Fresh expiry and signature on every request
        return build_query_params(self.access_id, self.secret_key, cols, self._clock())

    async def _send(self, request: httpx.Request) -> bytes:
        """Send a request and return the body of a successful response."""
        if self._closed:
            raise MozAPIError("Client is closed")

        logger.debug(f"{request.method} {request.url.host}{request.url.path}")

        try:
            response = await self._client.send(request)
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP error: {e}") from e

        if not response.is_success:
            raise APIStatusError(
                f"API request failed: {response.status_code}",
                status_code=response.status_code,
                response=response.text,
            )
        return response.content

    async def get_url_metrics(self, link: str, cols: int = DEFAULT_COLS) -> URLMetrics:
        """
        Fetch metrics for a single URL.

        Args:
            link: URL to analyze
            cols: Column bitmask

        Returns:
            URLMetrics for *link*

        Raises:
            MozAPIError: On transport, status or decode errors
        """
        request = build_get_request(self._client, self.endpoint, link, self._query_params(cols))
        content = await self._send(request)
        return parse_single_response(content)

    async def get_batch_url_metrics(
        self,
        urls: List[str],
        cols: int = DEFAULT_COLS,
    ) -> Dict[str, URLMetrics]:
        """
        Execute one batch API call.

        Args:
            urls: URLs to analyze, at most ``max_batch_urls``
            cols: Column bitmask

        Returns:
            Mapping of each requested URL to its metrics

        Raises:
            ValueError: If *urls* is empty or larger than the batch limit
            MozAPIError: On transport, status, decode or count mismatch errors
        """
        if not urls:
            raise ValueError("At least one URL is required for a batch call")
        if len(urls) > self.max_batch_urls:
            raise ValueError(
                f"At most {self.max_batch_urls} URLs are allowed in a batch call, got {len(urls)}"
            )

        urls = list(urls)
        request = build_post_request(self._client, self.endpoint, urls, self._query_params(cols))
        content = await self._send(request)
        return parse_batch_response(urls, content)

    async def get_bulk_url_metrics(
        self,
        urls: List[str],
        cols: int = DEFAULT_COLS,
    ) -> Dict[str, URLMetrics]:
        """
        Fetch metrics for any number of URLs using as many batch calls as needed.

        Batches run concurrently. If any batch fails, the first error is
        raised and no metrics are returned.
        """
        orchestrator = BulkQueryOrchestrator(
            self.get_batch_url_metrics,
            max_batch_urls=self.max_batch_urls,
            max_concurrency=self.max_concurrency,
        )
        return await orchestrator.run(urls, cols)

    async def close(self):
        """Close the HTTP client."""
        if not self._closed:
            await self._client.aclose()
            self._closed = True

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
