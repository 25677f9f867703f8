"""Backend implementations for fetching API responses."""

from .base import (
    Backend,
    BackendError,
    FetchError,
    FetchResult,
    RateLimitError,
    RequestSpec,
)
from .http_backend import HttpBackend

__all__ = [
    # Base classes
    "Backend",
    "RequestSpec",
    "FetchResult",
    # Base errors
    "BackendError",
    "FetchError",
    "RateLimitError",
    # HTTP backend
    "HttpBackend",
]
