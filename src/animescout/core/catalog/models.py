"""
Catalog data models.

Query state, pagination metadata, and the anime payloads returned by
the API, with the display helpers used by result cards and the detail
view.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .pagination import page_window


PLACEHOLDER_CARD_IMAGE = "/api/placeholder/280/380"
PLACEHOLDER_DETAIL_IMAGE = "/api/placeholder/250/350"
CARD_GENRE_LIMIT = 3
UNKNOWN = "Unknown"
NOT_AVAILABLE = "N/A"


# =============================================================================
# Enums
# =============================================================================


class AnimeType(str, Enum):
    """Type filter values accepted by the API."""

    TV = "tv"
    MOVIE = "movie"
    OVA = "ova"
    SPECIAL = "special"
    ONA = "ona"
    MUSIC = "music"


class AnimeStatus(str, Enum):
    """Airing status filter values accepted by the API."""

    AIRING = "airing"
    COMPLETE = "complete"
    UPCOMING = "upcoming"


class SortKey(str, Enum):
    """Sort keys; results are always sorted descending."""

    SCORE = "score"
    POPULARITY = "popularity"
    RANK = "rank"
    TITLE = "title"
    START_DATE = "start_date"
    EPISODES = "episodes"


# =============================================================================
# Query and pagination state
# =============================================================================


class QueryState(BaseModel):
    """Current search/filter/sort selection and page."""

    model_config = ConfigDict(frozen=True)

    search_term: str = ""
    type: AnimeType | None = None
    status: AnimeStatus | None = None
    sort: SortKey | None = None
    page: int = Field(default=1, ge=1)

    def with_filters(
        self,
        search_term: str = "",
        type: AnimeType | None = None,
        status: AnimeStatus | None = None,
        sort: SortKey | None = None,
    ) -> "QueryState":
        """Build a fresh state from a user action; the page goes back to 1."""
        return QueryState(
            search_term=search_term.strip(),
            type=type,
            status=status,
            sort=sort,
            page=1,
        )

    def at_page(self, page: int) -> "QueryState":
        return self.model_copy(update={"page": page})


class PaginationInfo(BaseModel):
    """Current and last page as reported by the API.

    Always satisfies 1 <= current_page <= last_page.
    """

    model_config = ConfigDict(frozen=True)

    current_page: int = Field(default=1, ge=1)
    last_page: int = Field(default=1, ge=1)

    @classmethod
    def clamped(cls, current_page: Any, last_page: Any) -> "PaginationInfo":
        """Build from raw values, forcing them into a valid range."""
        last = _positive_int(last_page)
        current = min(_positive_int(current_page), last)
        return cls(current_page=current, last_page=last)

    @classmethod
    def from_payload(cls, payload: dict[str, Any] | None) -> "PaginationInfo":
        """Read the ``pagination`` block of a list response (defaults 1/1)."""
        if not isinstance(payload, dict):
            return cls()
        return cls.clamped(
            payload.get("current_page"),
            payload.get("last_visible_page"),
        )

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.last_page

    @property
    def window(self) -> list[int]:
        """Page numbers to show as pagination controls."""
        return page_window(self.current_page, self.last_page)


def _positive_int(value: Any) -> int:
    """Coerce to an int >= 1; anything unusable becomes 1."""
    if isinstance(value, bool):
        return 1
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 1
    return max(1, number)


# =============================================================================
# API payloads
# =============================================================================


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class NamedEntry(_Payload):
    """Genre, studio or similar reference."""

    mal_id: int | None = None
    name: str


class ImageUrls(_Payload):
    image_url: str | None = None
    large_image_url: str | None = None


class Images(_Payload):
    jpg: ImageUrls | None = None


class Aired(_Payload):
    from_: str | None = Field(default=None, alias="from")
    to: str | None = None


def parse_api_date(value: str | None) -> datetime | None:
    """Parse an ISO-8601 timestamp from the API, or None."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_date(value: datetime) -> str:
    return f"{value:%b} {value.day}, {value.year}"


class AnimeSummary(_Payload):
    """One entry of a list response, as shown on a result card."""

    mal_id: int
    title: str = UNKNOWN
    type: str | None = None
    score: float | None = None
    images: Images | None = None
    aired: Aired | None = None
    genres: list[NamedEntry] = Field(default_factory=list)

    @property
    def image_url(self) -> str:
        if self.images and self.images.jpg and self.images.jpg.image_url:
            return self.images.jpg.image_url
        return PLACEHOLDER_CARD_IMAGE

    @property
    def year(self) -> int | None:
        started = parse_api_date(self.aired.from_) if self.aired else None
        return started.year if started else None

    @property
    def year_display(self) -> str:
        return str(self.year) if self.year else UNKNOWN

    @property
    def type_display(self) -> str:
        return self.type or UNKNOWN

    @property
    def score_display(self) -> str:
        return f"{self.score:.1f}" if self.score else NOT_AVAILABLE

    @property
    def card_genres(self) -> list[str]:
        return [genre.name for genre in self.genres[:CARD_GENRE_LIMIT]]


class AnimeDetail(AnimeSummary):
    """Full record from the detail endpoint."""

    episodes: int | None = None
    status: str | None = None
    duration: str | None = None
    rating: str | None = None
    scored_by: int | None = None
    rank: int | None = None
    studios: list[NamedEntry] = Field(default_factory=list)
    synopsis: str | None = None
    background: str | None = None

    @property
    def large_image_url(self) -> str:
        if self.images and self.images.jpg and self.images.jpg.large_image_url:
            return self.images.jpg.large_image_url
        return PLACEHOLDER_DETAIL_IMAGE

    @property
    def aired_display(self) -> str:
        if not self.aired:
            return UNKNOWN
        started = parse_api_date(self.aired.from_)
        if started is None:
            return UNKNOWN
        ended = parse_api_date(self.aired.to)
        return f"{format_date(started)} to {format_date(ended) if ended else 'Present'}"

    @property
    def score_display(self) -> str:
        if not self.score:
            return NOT_AVAILABLE
        if self.scored_by is None:
            return str(self.score)
        return f"{self.score} ({self.scored_by} votes)"

    @property
    def rank_display(self) -> str:
        return f"#{self.rank}" if self.rank else NOT_AVAILABLE

    @property
    def studios_display(self) -> str:
        return ", ".join(studio.name for studio in self.studios) or UNKNOWN

    @property
    def genre_names(self) -> list[str]:
        return [genre.name for genre in self.genres]

    @property
    def synopsis_display(self) -> str:
        return self.synopsis or "No synopsis available."

    def info_rows(self) -> list[tuple[str, str]]:
        """Label/value pairs for the detail info grid."""
        return [
            ("Type", self.type_display),
            ("Episodes", str(self.episodes) if self.episodes else UNKNOWN),
            ("Status", self.status or UNKNOWN),
            ("Aired", self.aired_display),
            ("Duration", self.duration or UNKNOWN),
            ("Rating", self.rating or UNKNOWN),
            ("Score", self.score_display),
            ("Rank", self.rank_display),
            ("Studios", self.studios_display),
        ]


@dataclass(frozen=True)
class DetailUnavailable:
    """Shown in place of a detail view when it cannot be loaded."""

    message: str
