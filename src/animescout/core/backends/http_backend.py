"""
HTTP Backend implementation using httpx.

Provides async HTTP fetching with:
- Persistent connection pooling
- JSON accept headers
- Rate limit detection
"""

from __future__ import annotations

import time

import httpx

from animescout.core.logging import get_logger

from .base import (
    Backend,
    FetchError,
    FetchResult,
    RateLimitError,
    RequestSpec,
)

logger = get_logger("backends.http")

DEFAULT_USER_AGENT = "animescout/0.1"


class HttpBackend(Backend):
    """HTTP backend using httpx for async requests.

    Only GET is supported; the API is read-only for this client.
    No retries are attempted; a failed call is reported to the caller
    as-is.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str | None = None,
        default_headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize HTTP backend.

        Args:
            timeout: Default request timeout in seconds
            user_agent: Custom user agent
            default_headers: Default headers for all requests
            transport: Custom httpx transport (used for testing)
        """
        self.timeout = timeout
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.default_headers = {
            "User-Agent": self.user_agent,
            "Accept": "application/json",
            **(default_headers or {}),
        }
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        return "http"

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                headers=self.default_headers,
                transport=self._transport,
                limits=httpx.Limits(
                    max_connections=10,
                    max_keepalive_connections=5,
                ),
            )
        return self._client

    def _check_rate_limit(self, response: httpx.Response) -> None:
        """Raise RateLimitError on a 429 response."""
        if response.status_code != 429:
            return

        retry_after = response.headers.get("Retry-After")
        retry_seconds = None
        if retry_after:
            try:
                retry_seconds = float(retry_after)
            except ValueError:
                pass

        raise RateLimitError(
            "Rate limit exceeded",
            url=str(response.url),
            retry_after=retry_seconds,
        )

    async def fetch(self, request: RequestSpec) -> FetchResult:
        """Fetch a URL.

        Args:
            request: Request specification

        Returns:
            FetchResult with response data

        Raises:
            FetchError: On transport failure or unsupported method
            RateLimitError: When the server answers 429
        """
        if request.method.upper() != "GET":
            raise FetchError(f"Unsupported method: {request.method}", url=request.url)

        client = await self._ensure_client()
        headers = {**self.default_headers, **request.headers}
        timeout = request.timeout if request.timeout is not None else self.timeout

        logger.debug("GET %s params=%s", request.url, request.params, extra={"url": request.url})
        start = time.perf_counter()

        try:
            response = await client.get(
                request.url,
                headers=headers,
                params=request.params or None,
                timeout=timeout,
            )
        except httpx.HTTPError as e:
            raise FetchError(
                f"Transport error: {e}",
                url=request.url,
                cause=e,
            ) from e

        elapsed_ms = (time.perf_counter() - start) * 1000

        self._check_rate_limit(response)

        return FetchResult(
            url=request.url,
            final_url=str(response.url),
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
            elapsed_ms=elapsed_ms,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
