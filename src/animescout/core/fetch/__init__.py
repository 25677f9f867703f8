"""Fetch utilities - throttling."""

from .throttling import ThrottleGate, ThrottledBackend

__all__ = [
    "ThrottleGate",
    "ThrottledBackend",
]
