"""Rendering collaborator interface used by the catalog controller."""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from .models import AnimeDetail, AnimeSummary, DetailUnavailable, PaginationInfo

FAILED_LIST_MESSAGE = "Failed to load anime. Please try again later."
NO_RESULTS_MESSAGE = "No anime found. Try a different search."
FAILED_DETAIL_MESSAGE = "Failed to load anime details. Please try again later."
NOT_FOUND_MESSAGE = "Anime details not found."


@runtime_checkable
class RenderTarget(Protocol):
    """Anything that can display catalog results.

    ``render_list`` receives an empty sequence when a query matched
    nothing and must show NO_RESULTS_MESSAGE rather than fail.
    """

    def render_list(self, items: Sequence[AnimeSummary], pagination: PaginationInfo) -> None: ...

    def render_detail(self, detail: AnimeDetail | DetailUnavailable) -> None: ...

    def render_error(self, message: str) -> None: ...

    def set_loading_visible(self, visible: bool) -> None: ...
