"""Translate a QueryState into API request parameters."""

from __future__ import annotations

from animescout.core.config.models import DEFAULT_PAGE_SIZE

from .models import QueryState

SORT_DIRECTION = "desc"


def build_query_params(
    state: QueryState,
    page: int,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> dict[str, str]:
    """Build the list endpoint's query parameters.

    ``page`` and ``limit`` are always present. Search term, type, status
    and sort are included only when set; a sort key also adds
    ``sort=desc``. Values are left unencoded for the HTTP layer.
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")

    params = {"page": str(page), "limit": str(page_size)}

    search_term = state.search_term.strip()
    if search_term:
        params["q"] = search_term
    if state.type is not None:
        params["type"] = state.type.value
    if state.status is not None:
        params["status"] = state.status.value
    if state.sort is not None:
        params["order_by"] = state.sort.value
        params["sort"] = SORT_DIRECTION

    return params
