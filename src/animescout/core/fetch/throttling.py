"""
Request throttling.

Provides a single cooldown gate that spaces calls to the anime API's
host(s) at least ``min_interval_ms`` apart, and a backend wrapper that
routes every fetch through it.
"""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, Iterable
from urllib.parse import urlparse

from animescout.core.backends.base import Backend, FetchResult, RequestSpec
from animescout.core.logging import get_logger

logger = get_logger("fetch.throttling")

Clock = Callable[[], float]
Sleeper = Callable[[float], Awaitable[None]]

DEFAULT_HOSTS = ("api.jikan.moe",)


class ThrottleGate:
    """Minimum-interval gate for outbound API calls.

    The gate holds one timestamp: the moment the most recent call was
    actually issued. ``acquire`` holds a lock across the wait and stores
    the clock reading taken after waking, so a caller that oversleeps
    pushes the next caller back instead of eating into its interval.

    Requests to hosts outside ``hosts`` are never delayed and do not
    touch the timestamp.
    """

    def __init__(
        self,
        min_interval_ms: int = 1000,
        hosts: Iterable[str] = DEFAULT_HOSTS,
        clock: Clock = time.monotonic,
        sleep: Sleeper = asyncio.sleep,
    ):
        """Initialize the gate.

        Args:
            min_interval_ms: Minimum spacing between two throttled calls
            hosts: Hostnames the gate applies to
            clock: Monotonic clock in seconds
            sleep: Coroutine used to suspend the caller
        """
        if min_interval_ms < 0:
            raise ValueError("min_interval_ms must be >= 0")
        self.min_interval = min_interval_ms / 1000.0
        self.hosts = frozenset(h.lower() for h in hosts)
        self._clock = clock
        self._sleep = sleep
        self._last_call: float | None = None
        self._lock = asyncio.Lock()

    @property
    def last_call(self) -> float | None:
        """Issue time of the latest call, or None before the first."""
        return self._last_call

    def applies_to(self, url: str) -> bool:
        """Check whether a URL targets a throttled host."""
        host = urlparse(url).hostname
        return host is not None and host.lower() in self.hosts

    def _remaining(self) -> float:
        """Seconds left until the interval since the last call has passed."""
        if self._last_call is None:
            return 0.0
        return self._last_call + self.min_interval - self._clock()

    async def acquire(self, url: str) -> float | None:
        """Wait until a call to ``url`` may be issued.

        Args:
            url: Target URL of the call about to be made

        Returns:
            The clock time the call is issued at, or None when the URL
            is not throttled
        """
        if not self.applies_to(url):
            return None

        async with self._lock:
            wait = self._remaining()
            if wait > 0:
                logger.debug(
                    "Throttling call for %.0f ms",
                    wait * 1000,
                    extra={"url": url, "wait_ms": round(wait * 1000)},
                )
                await self._sleep(wait)

            self._last_call = self._clock()
            return self._last_call

    def reset(self) -> None:
        """Forget the last call so the next one proceeds immediately."""
        self._last_call = None


class ThrottledBackend(Backend):
    """Wrapper that adds throttling to any backend.

    Usage:
        backend = HttpBackend()
        throttled = ThrottledBackend(backend, ThrottleGate())
        result = await throttled.fetch(request)
    """

    def __init__(self, backend: Backend, gate: ThrottleGate):
        self.backend = backend
        self.gate = gate

    @property
    def name(self) -> str:
        return f"throttled_{self.backend.name}"

    async def fetch(self, request: RequestSpec) -> FetchResult:
        """Fetch once the gate allows it; results and errors pass through."""
        await self.gate.acquire(request.url)
        return await self.backend.fetch(request)

    async def close(self) -> None:
        await self.backend.close()
