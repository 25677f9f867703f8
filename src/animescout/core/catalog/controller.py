"""
Catalog controller.

Owns the session's query and pagination state, turns user actions into
API requests, and hands the results to a RenderTarget. Failures never
propagate to the caller; they end in a rendered message.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from animescout.core.api.jikan import ApiError, JikanClient
from animescout.core.backends.base import BackendError
from animescout.core.config.models import DEFAULT_PAGE_SIZE
from animescout.core.logging import get_logger

from .models import (
    AnimeDetail,
    AnimeStatus,
    AnimeSummary,
    AnimeType,
    DetailUnavailable,
    PaginationInfo,
    QueryState,
    SortKey,
)
from .query import build_query_params
from .render import (
    FAILED_DETAIL_MESSAGE,
    FAILED_LIST_MESSAGE,
    NOT_FOUND_MESSAGE,
    RenderTarget,
)

logger = get_logger("catalog.controller")


def parse_list_payload(payload: dict[str, Any]) -> tuple[list[AnimeSummary], PaginationInfo]:
    """Extract result cards and pagination from a list response.

    Missing ``data`` yields an empty list; missing ``pagination`` yields 1/1.

    Raises:
        ApiError: If ``data`` is not a list
        ValidationError: If an item is malformed
    """
    raw_items = payload.get("data") or []
    if not isinstance(raw_items, list):
        raise ApiError(f"Expected a list of items, got {type(raw_items).__name__}")
    items = [AnimeSummary.model_validate(item) for item in raw_items]
    return items, PaginationInfo.from_payload(payload.get("pagination"))


class CatalogController:
    """Search/filter/sort/page state machine for one browsing session.

    Every list request gets a generation number. A response is applied
    only if no newer request was issued while it was in flight, so a
    slow early response cannot overwrite a later one.
    """

    def __init__(
        self,
        client: JikanClient,
        renderer: RenderTarget,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.client = client
        self.renderer = renderer
        self.page_size = page_size

        self._state = QueryState()
        self._pagination = PaginationInfo()
        self._items: list[AnimeSummary] = []
        self._generation = 0
        self._detail_generation = 0
        self._in_flight = 0

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def pagination(self) -> PaginationInfo:
        return self._pagination

    @property
    def items(self) -> list[AnimeSummary]:
        """Cards from the last successful list response."""
        return list(self._items)

    @property
    def generation(self) -> int:
        return self._generation

    # ------------------------------------------------------------------ #
    # User actions
    # ------------------------------------------------------------------ #

    async def search(
        self,
        search_term: str = "",
        type: AnimeType | None = None,
        status: AnimeStatus | None = None,
        sort: SortKey | None = None,
        page: int = 1,
    ) -> bool:
        """Replace the whole query and load its first (or given) page."""
        self._state = self._state.with_filters(
            search_term=search_term,
            type=type,
            status=status,
            sort=sort,
        )
        return await self.load_page(page)

    async def next_page(self) -> bool:
        if not self._pagination.has_next:
            return False
        return await self.load_page(self._pagination.current_page + 1)

    async def previous_page(self) -> bool:
        if not self._pagination.has_previous:
            return False
        return await self.load_page(self._pagination.current_page - 1)

    async def go_to_page(self, page: int) -> bool:
        """Load ``page`` unless it is already shown or out of range."""
        if page == self._pagination.current_page:
            return False
        if not 1 <= page <= self._pagination.last_page:
            logger.warning(
                "Page %d is outside 1..%d",
                page,
                self._pagination.last_page,
                extra={"page": page},
            )
            return False
        return await self.load_page(page)

    # ------------------------------------------------------------------ #
    # Requests
    # ------------------------------------------------------------------ #

    def _begin_request(self) -> None:
        self._in_flight += 1
        self.renderer.set_loading_visible(True)

    def _end_request(self) -> None:
        # List and detail requests share one indicator
        self._in_flight -= 1
        if self._in_flight == 0:
            self.renderer.set_loading_visible(False)

    async def load_page(self, page: int) -> bool:
        """Request ``page`` of the current query and render the outcome.

        Returns:
            True if the response was applied, False on failure, for a
            page below 1, or when a newer request superseded this one
        """
        if page < 1:
            logger.warning("Refusing to load page %d", page, extra={"page": page})
            return False

        self._generation += 1
        generation = self._generation
        params = build_query_params(self._state, page, self.page_size)

        self._begin_request()
        try:
            try:
                payload = await self.client.search_anime(params)
                items, pagination = parse_list_payload(payload)
            except (BackendError, ValidationError) as e:
                if generation != self._generation:
                    logger.debug(
                        "Discarding failed stale response",
                        extra={"page": page, "generation": generation},
                    )
                    return False
                logger.error(
                    "Error fetching anime: %s",
                    e,
                    extra={"page": page, "generation": generation, "url": self.client.base_url},
                )
                self.renderer.render_error(FAILED_LIST_MESSAGE)
                return False

            if generation != self._generation:
                logger.debug(
                    "Discarding stale response (current generation %d)",
                    self._generation,
                    extra={"page": page, "generation": generation},
                )
                return False

            self._items = items
            self._pagination = pagination
            self._state = self._state.at_page(pagination.current_page)
            if not items:
                logger.info("No results for %s", params, extra={"page": page})
            self.renderer.render_list(items, pagination)
            return True
        finally:
            self._end_request()

    async def open_detail(self, mal_id: int) -> bool:
        """Fetch and render the full record for one title."""
        self._detail_generation += 1
        generation = self._detail_generation

        self._begin_request()
        try:
            try:
                payload = await self.client.get_anime(mal_id)
                raw = payload.get("data")
                detail = AnimeDetail.model_validate(raw) if raw else None
            except (BackendError, ValidationError) as e:
                if generation != self._detail_generation:
                    return False
                logger.error("Error fetching anime details: %s", e, extra={"mal_id": mal_id})
                self.renderer.render_detail(DetailUnavailable(FAILED_DETAIL_MESSAGE))
                return False

            if generation != self._detail_generation:
                logger.debug("Discarding stale detail response", extra={"mal_id": mal_id})
                return False

            if detail is None:
                logger.warning("No data in detail response", extra={"mal_id": mal_id})
                self.renderer.render_detail(DetailUnavailable(NOT_FOUND_MESSAGE))
                return False

            self.renderer.render_detail(detail)
            return True
        finally:
            self._end_request()
