"""
One-shot catalog commands: a single page of results, or one detail view.
"""

from __future__ import annotations

import asyncio
from typing import Optional

import typer
from rich.console import Console

from animescout.core.catalog.models import AnimeStatus, AnimeType, SortKey
from animescout.core.config.models import AppConfig
from animescout.core.session import create_controller

from ..render import ConsoleRenderer

console = Console()


def _config(ctx: typer.Context) -> AppConfig:
    return ctx.obj if isinstance(ctx.obj, AppConfig) else AppConfig()


def search(
    ctx: typer.Context,
    query: str = typer.Argument("", help="Search term (empty lists everything)"),
    anime_type: Optional[AnimeType] = typer.Option(
        None,
        "--type",
        "-t",
        case_sensitive=False,
        help="Only this type",
    ),
    status: Optional[AnimeStatus] = typer.Option(
        None,
        "--status",
        "-s",
        case_sensitive=False,
        help="Only this airing status",
    ),
    sort: Optional[SortKey] = typer.Option(
        None,
        "--sort",
        "-o",
        case_sensitive=False,
        help="Sort key (always descending)",
    ),
    page: int = typer.Option(1, "--page", "-p", min=1, help="Page to show"),
    images: bool = typer.Option(False, "--images", help="Show image URLs"),
) -> None:
    """Show one page of anime matching a search.

    Examples:
        animescout search naruto --type tv --sort score
        animescout search --status airing --page 2
    """
    ok = asyncio.run(_run_search(
        _config(ctx),
        query=query,
        anime_type=anime_type,
        status=status,
        sort=sort,
        page=page,
        images=images,
    ))
    if not ok:
        raise typer.Exit(1)


async def _run_search(
    config: AppConfig,
    query: str,
    anime_type: AnimeType | None,
    status: AnimeStatus | None,
    sort: SortKey | None,
    page: int,
    images: bool,
) -> bool:
    renderer = ConsoleRenderer(console, show_images=images)
    controller = create_controller(config, renderer)
    try:
        return await controller.search(
            search_term=query,
            type=anime_type,
            status=status,
            sort=sort,
            page=page,
        )
    finally:
        await controller.client.close()


def show(
    ctx: typer.Context,
    mal_id: int = typer.Argument(..., min=1, help="MyAnimeList ID of the title"),
    images: bool = typer.Option(False, "--images", help="Show image URL"),
) -> None:
    """Show the full details of one title."""
    ok = asyncio.run(_run_show(_config(ctx), mal_id, images))
    if not ok:
        raise typer.Exit(1)


async def _run_show(config: AppConfig, mal_id: int, images: bool) -> bool:
    renderer = ConsoleRenderer(console, show_images=images)
    controller = create_controller(config, renderer)
    try:
        return await controller.open_detail(mal_id)
    finally:
        await controller.client.close()
