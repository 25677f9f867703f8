"""Catalog state - query building, pagination, controller."""

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
from .pagination import page_window
from .query import build_query_params
from .render import (
    FAILED_DETAIL_MESSAGE,
    FAILED_LIST_MESSAGE,
    NO_RESULTS_MESSAGE,
    NOT_FOUND_MESSAGE,
    RenderTarget,
)
from .controller import CatalogController, parse_list_payload

__all__ = [
    # Enums
    "AnimeType",
    "AnimeStatus",
    "SortKey",
    # State and payloads
    "QueryState",
    "PaginationInfo",
    "AnimeSummary",
    "AnimeDetail",
    "DetailUnavailable",
    # Operations
    "page_window",
    "build_query_params",
    "parse_list_payload",
    "CatalogController",
    # Rendering
    "RenderTarget",
    "FAILED_LIST_MESSAGE",
    "NO_RESULTS_MESSAGE",
    "FAILED_DETAIL_MESSAGE",
    "NOT_FOUND_MESSAGE",
]
