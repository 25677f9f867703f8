"""
Interactive browsing.

Keeps one controller (and one throttle gate) alive for the whole
session and maps short commands onto its actions.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import typer
from rich.console import Console
from rich.prompt import Prompt

from animescout.core.catalog.controller import CatalogController
from animescout.core.catalog.models import AnimeStatus, AnimeType, SortKey
from animescout.core.config.models import AppConfig
from animescout.core.session import create_controller

from ..render import ConsoleRenderer

console = Console()

HELP_TEXT = (
    "[bold]n[/bold] next page  [bold]p[/bold] previous page  [bold]<number>[/bold] go to page\n"
    "[bold]d <id>[/bold] details  [bold]s <term>[/bold] new search  "
    "[bold]h[/bold] help  [bold]q[/bold] quit"
)


class BrowseAction(str, Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    PAGE = "page"
    DETAIL = "detail"
    SEARCH = "search"
    HELP = "help"
    QUIT = "quit"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class BrowseCommand:
    action: BrowseAction
    page: int | None = None
    mal_id: int | None = None
    term: str = ""


def parse_browse_command(text: str) -> BrowseCommand:
    """Parse one line typed at the browse prompt.

    >>> parse_browse_command("d 20")
    BrowseCommand(action=<BrowseAction.DETAIL: 'detail'>, page=None, mal_id=20, term='')
    """
    stripped = text.strip()
    if not stripped:
        return BrowseCommand(BrowseAction.UNKNOWN)

    head, _, rest = stripped.partition(" ")
    head = head.lower()
    rest = rest.strip()

    if head.isdigit():
        page = int(head)
        if page >= 1:
            return BrowseCommand(BrowseAction.PAGE, page=page)
        return BrowseCommand(BrowseAction.UNKNOWN)
    if head in ("n", "next"):
        return BrowseCommand(BrowseAction.NEXT)
    if head in ("p", "prev", "previous"):
        return BrowseCommand(BrowseAction.PREVIOUS)
    if head in ("d", "detail", "details"):
        if rest.isdigit():
            return BrowseCommand(BrowseAction.DETAIL, mal_id=int(rest))
        return BrowseCommand(BrowseAction.UNKNOWN)
    if head in ("s", "search"):
        return BrowseCommand(BrowseAction.SEARCH, term=rest)
    if head in ("h", "help", "?"):
        return BrowseCommand(BrowseAction.HELP)
    if head in ("q", "quit", "exit"):
        return BrowseCommand(BrowseAction.QUIT)
    return BrowseCommand(BrowseAction.UNKNOWN)


async def apply_browse_command(controller: CatalogController, command: BrowseCommand) -> bool:
    """Run one command against the controller.

    A new search keeps the current type, status and sort filters.

    Returns:
        False when the session should end
    """
    state = controller.state

    if command.action is BrowseAction.QUIT:
        return False
    if command.action is BrowseAction.NEXT:
        if not await controller.next_page():
            console.print("[dim]Already on the last page.[/dim]")
    elif command.action is BrowseAction.PREVIOUS:
        if not await controller.previous_page():
            console.print("[dim]Already on the first page.[/dim]")
    elif command.action is BrowseAction.PAGE and command.page is not None:
        await controller.go_to_page(command.page)
    elif command.action is BrowseAction.DETAIL and command.mal_id is not None:
        await controller.open_detail(command.mal_id)
    elif command.action is BrowseAction.SEARCH:
        await controller.search(
            search_term=command.term,
            type=state.type,
            status=state.status,
            sort=state.sort,
        )
    elif command.action is BrowseAction.HELP:
        console.print(HELP_TEXT)
    else:
        console.print("[yellow]Unknown command.[/yellow] Type [bold]h[/bold] for help.")
    return True


def browse(
    ctx: typer.Context,
    query: str = typer.Argument("", help="Initial search term"),
    anime_type: Optional[AnimeType] = typer.Option(
        None, "--type", "-t", case_sensitive=False, help="Only this type"
    ),
    status: Optional[AnimeStatus] = typer.Option(
        None, "--status", "-s", case_sensitive=False, help="Only this airing status"
    ),
    sort: Optional[SortKey] = typer.Option(
        None, "--sort", "-o", case_sensitive=False, help="Sort key (always descending)"
    ),
) -> None:
    """Browse results page by page in an interactive session."""
    config = ctx.obj if isinstance(ctx.obj, AppConfig) else AppConfig()
    asyncio.run(_run_browse(config, query, anime_type, status, sort))


async def _run_browse(
    config: AppConfig,
    query: str,
    anime_type: AnimeType | None,
    status: AnimeStatus | None,
    sort: SortKey | None,
) -> None:
    controller = create_controller(config, ConsoleRenderer(console))
    try:
        await controller.search(search_term=query, type=anime_type, status=status, sort=sort)
        console.print(HELP_TEXT)
        while True:
            line = await asyncio.to_thread(Prompt.ask, "[cyan]browse[/cyan]", console=console, default="q")
            if not await apply_browse_command(controller, parse_browse_command(line)):
                break
    finally:
        await controller.client.close()
