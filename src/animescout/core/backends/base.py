"""
Backend base classes and data structures.

Defines the interface contract for HTTP backends.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import orjson


@dataclass
class RequestSpec:
    """Specification for an HTTP request."""

    url: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    timeout: float | None = None

    # Metadata for logging/debugging
    page_type: str | None = None  # "listing", "detail"


@dataclass
class FetchResult:
    """Result of a fetch operation."""

    url: str
    final_url: str  # After redirects
    status_code: int
    text: str
    headers: dict[str, str]

    # Timing
    elapsed_ms: float
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def ok(self) -> bool:
        """Check if request was successful (2xx status)."""
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Decode the body as JSON.

        Raises:
            orjson.JSONDecodeError: If the body is not valid JSON
        """
        return orjson.loads(self.text)


class Backend(ABC):
    """Abstract base class for HTTP backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier."""
        pass

    @abstractmethod
    async def fetch(self, request: RequestSpec) -> FetchResult:
        """Fetch a URL and return the response.

        Non-2xx responses are returned, not raised; the caller decides.

        Raises:
            BackendError: On transport failure
        """
        pass

    async def close(self) -> None:
        """Clean up backend resources."""
        pass

    async def __aenter__(self) -> "Backend":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


class BackendError(Exception):
    """Base exception for backend errors."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class FetchError(BackendError):
    """Error during fetch operation."""
    pass


class RateLimitError(BackendError):
    """Rate limit hit (429)."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        retry_after: float | None = None,
    ):
        super().__init__(message, url, status_code=429)
        self.retry_after = retry_after
