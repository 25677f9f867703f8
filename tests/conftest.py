"""Shared fixtures for AnimeScout tests."""

from __future__ import annotations

from typing import Any, Callable, Sequence

import httpx
import pytest

from animescout.core.api.jikan import JikanClient
from animescout.core.backends.http_backend import HttpBackend
from animescout.core.catalog.models import (
    AnimeDetail,
    AnimeSummary,
    DetailUnavailable,
    PaginationInfo,
)

API_BASE = "https://api.jikan.moe/v4/anime"


class RecordingRenderer:
    """RenderTarget double that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def render_list(self, items: Sequence[AnimeSummary], pagination: PaginationInfo) -> None:
        self.calls.append(("list", (list(items), pagination)))

    def render_detail(self, detail: AnimeDetail | DetailUnavailable) -> None:
        self.calls.append(("detail", detail))

    def render_error(self, message: str) -> None:
        self.calls.append(("error", message))

    def set_loading_visible(self, visible: bool) -> None:
        self.calls.append(("loading", visible))

    def of_kind(self, kind: str) -> list[Any]:
        return [payload for name, payload in self.calls if name == kind]


class FakeClock:
    """Manual clock whose sleep records delays and moves time forward.

    ``overshoot`` is added to every sleep, which models an event loop
    that wakes sleepers late.
    """

    def __init__(self, start: float = 100.0, overshoot: float = 0.0) -> None:
        self.now = start
        self.overshoot = overshoot
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, delay: float) -> None:
        self.sleeps.append(delay)
        self.now += delay + self.overshoot


def anime_item(mal_id: int = 20, **overrides: Any) -> dict[str, Any]:
    """A list/detail item shaped like the API's."""
    item: dict[str, Any] = {
        "mal_id": mal_id,
        "title": "Naruto",
        "type": "TV",
        "score": 8.01,
        "scored_by": 2_000_000,
        "rank": 650,
        "episodes": 220,
        "status": "Finished Airing",
        "duration": "23 min per ep",
        "rating": "PG-13 - Teens 13 or older",
        "images": {
            "jpg": {
                "image_url": f"https://cdn.myanimelist.net/images/anime/{mal_id}.jpg",
                "large_image_url": f"https://cdn.myanimelist.net/images/anime/{mal_id}l.jpg",
            }
        },
        "aired": {"from": "2002-10-03T00:00:00+00:00", "to": "2007-02-08T00:00:00+00:00"},
        "genres": [
            {"mal_id": 1, "name": "Action"},
            {"mal_id": 2, "name": "Adventure"},
            {"mal_id": 10, "name": "Fantasy"},
            {"mal_id": 27, "name": "Shounen"},
        ],
        "studios": [{"mal_id": 1, "name": "Studio Pierrot"}],
        "synopsis": "Moments prior to Naruto Uzumaki's birth...",
        "background": None,
    }
    item.update(overrides)
    return item


def list_payload(items: list[dict[str, Any]], current: int = 1, last: int = 1) -> dict[str, Any]:
    return {
        "data": items,
        "pagination": {"current_page": current, "last_visible_page": last, "has_next_page": current < last},
    }


Handler = Callable[[httpx.Request], httpx.Response]


def make_client(handler: Handler) -> JikanClient:
    """JikanClient over an unthrottled HttpBackend with a mock transport."""
    backend = HttpBackend(transport=httpx.MockTransport(handler))
    return JikanClient(backend, base_url=API_BASE)


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
