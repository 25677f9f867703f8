"""CLI command modules."""

from . import browse, catalog

__all__ = [
    "browse",
    "catalog",
]
