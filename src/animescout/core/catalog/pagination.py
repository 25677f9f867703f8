"""Page window arithmetic for pagination controls."""

from __future__ import annotations

WINDOW_WIDTH = 5


def page_window(current_page: int, last_page: int, width: int = WINDOW_WIDTH) -> list[int]:
    """Contiguous page numbers centred as closely as possible on ``current_page``.

    The window is ``min(width, last_page)`` wide, contains the current page,
    and stays within ``[1, last_page]``. Out-of-range inputs are clamped
    first.

    >>> page_window(1, 10)
    [1, 2, 3, 4, 5]
    >>> page_window(10, 10)
    [6, 7, 8, 9, 10]
    >>> page_window(2, 3)
    [1, 2, 3]
    """
    if width < 1:
        raise ValueError("width must be >= 1")

    last = max(1, last_page)
    current = min(max(1, current_page), last)
    span = width - 1

    start = max(1, current - span // 2)
    end = min(last, start + span)
    if end - start < span:
        start = max(1, end - span)

    return list(range(start, end + 1))
