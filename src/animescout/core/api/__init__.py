"""External API clients."""

from .jikan import ApiError, JikanClient

__all__ = [
    "ApiError",
    "JikanClient",
]
