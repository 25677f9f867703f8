"""
AnimeScout CLI - Main entry point.

A terminal-first browser for the Jikan anime API with search, filters,
sorting, pagination and a detail view.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.traceback import install as install_rich_traceback

from animescout import __app_name__, __version__
from animescout.core.config import LoggingConfig
from animescout.core.config.loader import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    load_app_config,
    write_default_config,
)
from animescout.core.logging import setup_logging

# Load environment variables from .env (if present)
load_dotenv()

install_rich_traceback(show_locals=False, width=120)

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name=__app_name__,
    help="Terminal browser for the Jikan anime catalogue",
    rich_markup_mode="rich",
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold cyan]{__app_name__}[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to app.yaml (default: $ANIMESCOUT_CONFIG or configs/app.yaml)",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Override the configured log level",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """AnimeScout - browse the anime catalogue from your terminal."""
    if ctx.invoked_subcommand == "init":
        return

    try:
        config = load_app_config(config_path)
    except ConfigError as e:
        err_console.print(f"[red]Error loading config:[/red] {e}")
        if e.details:
            err_console.print(f"[dim]{e.details}[/dim]")
        raise typer.Exit(1)

    if log_level:
        try:
            logging_config = LoggingConfig.model_validate(
                {**config.logging.model_dump(), "level": log_level}
            )
        except ValidationError as e:
            err_console.print(f"[red]Invalid --log-level:[/red] {escape(log_level)}")
            err_console.print(f"[dim]{e.errors()[0]['msg']}[/dim]")
            raise typer.Exit(1)
        config = config.model_copy(update={"logging": logging_config})

    setup_logging(
        level=config.logging.level,
        log_file=config.logging.file,
        json_format=config.logging.json_format,
        rich_console=config.logging.rich_console,
    )
    ctx.obj = config


# =============================================================================
# Register catalog commands
# =============================================================================

from .commands import browse, catalog  # noqa: E402

app.command("search")(catalog.search)
app.command("show")(catalog.show)
app.command("browse")(browse.browse)


# =============================================================================
# Init Command
# =============================================================================


@app.command()
def init(
    path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--path",
        "-p",
        help="Where to write the configuration file",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite existing configuration",
    ),
) -> None:
    """Write a default configuration file."""
    if not write_default_config(path, force=force):
        err_console.print(f"[yellow]{path} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)

    console.print(Panel.fit(
        f"[bold green]OK - configuration written to [cyan]{path}[/cyan][/bold green]\n\n"
        "Next steps:\n"
        "  1. Search: [yellow]animescout search naruto --type tv[/yellow]\n"
        "  2. Details: [yellow]animescout show 20[/yellow]\n"
        "  3. Browse interactively: [yellow]animescout browse --sort score[/yellow]",
        title="[bold]Initialization Complete[/bold]",
        border_style="green",
    ))


# =============================================================================
# Entry Point
# =============================================================================


def run() -> None:
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    run()
