"""
Jikan API client.

Thin async wrapper over an injected backend. Pass a ThrottledBackend to
keep calls within the API's rate limit; the client itself does no
timing, caching or retrying.
"""

from __future__ import annotations

from typing import Any

import orjson

from animescout.core.backends.base import Backend, BackendError, RequestSpec
from animescout.core.config.models import DEFAULT_BASE_URL
from animescout.core.logging import get_logger

logger = get_logger("api.jikan")


class ApiError(BackendError):
    """The API answered, but not with a usable response."""
    pass


class JikanClient:
    """Read-only client for the anime collection endpoint.

    Attributes:
        backend: Backend used for every request
        base_url: Collection endpoint, e.g. https://api.jikan.moe/v4/anime
    """

    def __init__(self, backend: Backend, base_url: str = DEFAULT_BASE_URL):
        self.backend = backend
        self.base_url = base_url.rstrip("/")

    def detail_url(self, mal_id: int) -> str:
        return f"{self.base_url}/{mal_id}/full"

    async def search_anime(self, params: dict[str, str]) -> dict[str, Any]:
        """Fetch one page of the collection.

        Args:
            params: Query parameters (see build_query_params)

        Returns:
            Decoded response object with ``data`` and ``pagination``

        Raises:
            BackendError: On transport failure, non-2xx status or bad JSON
        """
        request = RequestSpec(url=self.base_url, params=params, page_type="listing")
        return await self._get_json(request)

    async def get_anime(self, mal_id: int) -> dict[str, Any]:
        """Fetch the full record for one title.

        Raises:
            BackendError: On transport failure, non-2xx status or bad JSON
        """
        request = RequestSpec(url=self.detail_url(mal_id), page_type="detail")
        return await self._get_json(request)

    async def close(self) -> None:
        await self.backend.close()

    async def _get_json(self, request: RequestSpec) -> dict[str, Any]:
        result = await self.backend.fetch(request)

        if not result.ok:
            raise ApiError(
                f"Network response was not ok (HTTP {result.status_code})",
                url=result.final_url,
                status_code=result.status_code,
            )

        try:
            payload = result.json()
        except orjson.JSONDecodeError as e:
            raise ApiError(
                "Response is not valid JSON",
                url=result.final_url,
                status_code=result.status_code,
                cause=e,
            ) from e

        if not isinstance(payload, dict):
            raise ApiError(
                f"Unexpected response type: {type(payload).__name__}",
                url=result.final_url,
                status_code=result.status_code,
            )

        logger.debug(
            "Fetched %s in %.0f ms",
            request.page_type,
            result.elapsed_ms,
            extra={"url": result.final_url},
        )
        return payload
