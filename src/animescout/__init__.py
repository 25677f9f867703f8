"""
AnimeScout - Terminal-first browser for the Jikan anime API.

Search, filter and sort the anime catalogue page by page, and open a
detail view for any title, while keeping outbound calls within the
API's published rate limit.
"""

__version__ = "0.1.0"
__app_name__ = "animescout"
