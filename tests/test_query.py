"""Tests for query state and request parameter building."""

import pytest

from animescout.core.catalog.models import AnimeStatus, AnimeType, QueryState, SortKey
from animescout.core.catalog.query import build_query_params


class TestBuildQueryParams:
    """Test build_query_params."""

    def test_search_type_and_sort(self):
        """Test that only set fields are sent and sort adds a direction."""
        state = QueryState(search_term="naruto", type=AnimeType.TV, sort=SortKey.SCORE)

        params = build_query_params(state, page=1)

        assert params == {
            "page": "1",
            "limit": "24",
            "q": "naruto",
            "type": "tv",
            "order_by": "score",
            "sort": "desc",
        }
        assert "status" not in params

    def test_empty_state_sends_only_paging(self):
        params = build_query_params(QueryState(), page=3)
        assert params == {"page": "3", "limit": "24"}

    def test_blank_search_term_is_omitted(self):
        params = build_query_params(QueryState(search_term="   "), page=1)
        assert "q" not in params

    def test_status_filter_and_custom_page_size(self):
        state = QueryState(status=AnimeStatus.AIRING)
        params = build_query_params(state, page=2, page_size=10)
        assert params == {"page": "2", "limit": "10", "status": "airing"}

    def test_search_term_left_unencoded(self):
        """Test that encoding is left to the HTTP layer."""
        params = build_query_params(QueryState(search_term="fullmetal & alchemist"), page=1)
        assert params["q"] == "fullmetal & alchemist"

    def test_rejects_page_zero(self):
        with pytest.raises(ValueError):
            build_query_params(QueryState(), page=0)


class TestQueryState:
    """Test QueryState transitions."""

    def test_with_filters_replaces_everything_and_resets_page(self):
        state = QueryState(search_term="bleach", type=AnimeType.TV, sort=SortKey.RANK, page=7)

        new_state = state.with_filters(search_term=" one piece ", status=AnimeStatus.AIRING)

        assert new_state == QueryState(search_term="one piece", status=AnimeStatus.AIRING, page=1)

    def test_at_page_keeps_filters(self):
        state = QueryState(search_term="bleach", type=AnimeType.MOVIE)
        moved = state.at_page(4)
        assert moved.page == 4
        assert moved.search_term == "bleach"
        assert moved.type is AnimeType.MOVIE
        assert state.page == 1
