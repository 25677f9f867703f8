"""
Rich terminal renderer.

Implements RenderTarget: result cards as a table, pagination controls
as a single line, and the detail view as a panel.
"""

from __future__ import annotations

from typing import Sequence

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.status import Status
from rich.table import Table
from rich.text import Text

from animescout.core.catalog.models import (
    AnimeDetail,
    AnimeSummary,
    DetailUnavailable,
    PaginationInfo,
)
from animescout.core.catalog.render import NO_RESULTS_MESSAGE

PREV_LABEL = "← Prev"
NEXT_LABEL = "Next →"


def format_pagination(pagination: PaginationInfo) -> str:
    """Plain-text pagination controls, active page in brackets.

    >>> format_pagination(PaginationInfo(current_page=3, last_page=9))
    '← Prev  1  2  [3]  4  5  Next →'
    """
    parts: list[str] = []
    if pagination.has_previous:
        parts.append(PREV_LABEL)
    for page in pagination.window:
        parts.append(f"[{page}]" if page == pagination.current_page else str(page))
    if pagination.has_next:
        parts.append(NEXT_LABEL)
    return "  ".join(parts)


class ConsoleRenderer:
    """RenderTarget backed by a Rich console."""

    def __init__(self, console: Console | None = None, show_images: bool = False):
        self.console = console or Console()
        self.show_images = show_images
        self._status: Status | None = None

    def set_loading_visible(self, visible: bool) -> None:
        # Spinners only make sense on an interactive terminal
        if not self.console.is_terminal:
            return
        if visible and self._status is None:
            self._status = self.console.status("[cyan]Loading...[/cyan]")
            self._status.start()
        elif not visible and self._status is not None:
            self._status.stop()
            self._status = None

    def render_list(self, items: Sequence[AnimeSummary], pagination: PaginationInfo) -> None:
        if not items:
            self.console.print(f"[yellow]{NO_RESULTS_MESSAGE}[/yellow]")
            self._print_pagination(pagination)
            return

        table = Table(show_header=True, header_style="bold magenta", expand=False)
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Title", style="cyan")
        table.add_column("★", justify="right")
        table.add_column("Year · Type")
        table.add_column("Genres", style="green")
        if self.show_images:
            table.add_column("Image", style="dim")

        for anime in items:
            row = [
                str(anime.mal_id),
                escape(anime.title),
                anime.score_display,
                f"{anime.year_display} · {escape(anime.type_display)}",
                escape(", ".join(anime.card_genres)),
            ]
            if self.show_images:
                row.append(anime.image_url)
            table.add_row(*row)

        self.console.print(table)
        self._print_pagination(pagination)

    def _print_pagination(self, pagination: PaginationInfo) -> None:
        line = Text(format_pagination(pagination), style="bold")
        line.append(f"   (page {pagination.current_page} of {pagination.last_page})", style="dim")
        self.console.print(line)

    def render_detail(self, detail: AnimeDetail | DetailUnavailable) -> None:
        if isinstance(detail, DetailUnavailable):
            self.console.print(Panel(escape(detail.message), border_style="red"))
            return

        info = Table.grid(padding=(0, 2))
        info.add_column(style="bold")
        info.add_column()
        for label, value in detail.info_rows():
            info.add_row(f"{label}:", escape(value))
        genres = ", ".join(detail.genre_names) or "No genres listed"
        info.add_row("Genres:", escape(genres))
        if self.show_images:
            info.add_row("Image:", detail.large_image_url)

        sections: list = [info, Text(""), Text("Synopsis", style="bold underline"), Text(detail.synopsis_display)]
        if detail.background:
            sections += [Text(""), Text("Background", style="bold underline"), Text(detail.background)]

        self.console.print(Panel(
            Group(*sections),
            title=f"[bold]{escape(detail.title)}[/bold]",
            subtitle=f"#{detail.mal_id}",
            border_style="cyan",
        ))

    def render_error(self, message: str) -> None:
        self.console.print(f"[red]{escape(message)}[/red]")
