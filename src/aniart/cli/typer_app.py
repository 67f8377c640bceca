"""
AniArt Typer CLI Application

Small command-line front end for inspecting artwork resolution:
candidate queries for a title, and backdrop/logo/details lookups for a
catalog id.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from dependency_injector import providers
from rich.console import Console
from rich.table import Table

from aniart import __version__
from aniart.config.loader import load_settings
from aniart.containers import Container
from aniart.core.matching.candidates import build_candidate_queries
from aniart.shared.errors import AniArtError
from aniart.shared.logging import setup_structured_logger

console = Console()


class LogLevel(str, Enum):
    """Log level enumeration for type safety."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class CliState:
    json_output: bool = False


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(f"AniArt {__version__}")
        raise typer.Exit


app = typer.Typer(
    name="aniart",
    help="Resolve anime artwork and fallback details from TMDB.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Annotated[
        LogLevel,
        typer.Option("--log-level", case_sensitive=False, help="Logging level. Default: WARNING."),
    ] = LogLevel.WARNING,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Emit machine-readable JSON instead of tables."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version information and exit.",
        ),
    ] = False,
) -> None:
    """Configure logging and shared options."""
    setup_structured_logger("aniart", log_level.value)
    ctx.obj = CliState(json_output=json_output)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj if isinstance(ctx.obj, CliState) else CliState()


def build_container(config_path: Path | None = None) -> Container:
    """Create a container, optionally bound to an explicit TOML config file."""
    container = Container()
    if config_path is not None:
        container.config.override(providers.Singleton(load_settings, config_path))
    return container


async def resolve_entity(
    container: Container,
    entity_id: int,
    title: str,
    year: int | None,
    *,
    with_details: bool,
) -> dict[str, Any]:
    """Resolve backdrop and logo (and optionally details) for one id."""
    client = container.tmdb_client()
    backdrops = container.backdrop_repository()
    logos = container.logo_repository()
    try:
        backdrop_url, logo_url = await asyncio.gather(
            backdrops.resolve(entity_id, title, year),
            logos.resolve(entity_id, title, year),
        )
        record = (
            await container.metadata_fallback().get_details(entity_id, title, year)
            if with_details
            else None
        )
    finally:
        await client.close()

    return {
        "id": entity_id,
        "title": title,
        "tmdb_enabled": client.enabled,
        "backdrop_url": backdrop_url,
        "backdrop_state": backdrops.state(entity_id).value,
        "logo_url": logo_url,
        "logo_state": logos.state(entity_id).value,
        "details": record.model_dump(mode="json") if record is not None else None,
    }


def _print_error(error: AniArtError, *, json_output: bool) -> None:
    if json_output:
        typer.echo(json.dumps({"success": False, "error": error.to_dict()}, indent=2))
    else:
        console.print(f"[red]Error:[/red] {error.message}")


@app.command("candidates")
def candidates_command(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Display title to expand into search queries.")],
) -> None:
    """Show the search queries tried for a title, in order."""
    queries = build_candidate_queries(title)

    if _state(ctx).json_output:
        typer.echo(json.dumps(queries, ensure_ascii=False))
        return

    if not queries:
        console.print("[yellow]No usable queries for this title.[/yellow]")
        return
    for index, query in enumerate(queries, start=1):
        console.print(f"{index}. {query}")


@app.command("resolve")
def resolve_command(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Display title of the catalog entry.")],
    entity_id: Annotated[int, typer.Option("--id", help="Catalog id of the entry.")],
    year: Annotated[Optional[int], typer.Option("--year", help="Season year hint.")] = None,
    details: Annotated[
        bool, typer.Option("--details", help="Also resolve fallback details.")
    ] = False,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", exists=True, dir_okay=False, help="TOML configuration file."),
    ] = None,
) -> None:
    """Resolve backdrop and logo URLs for a catalog entry."""
    state = _state(ctx)
    try:
        container = build_container(config_path)
        outcome = asyncio.run(
            resolve_entity(container, entity_id, title, year, with_details=details)
        )
    except AniArtError as e:
        _print_error(e, json_output=state.json_output)
        raise typer.Exit(1) from e

    if state.json_output:
        typer.echo(json.dumps(outcome, indent=2, ensure_ascii=False))
        return

    if not outcome["tmdb_enabled"]:
        console.print("[yellow]TMDB API key is not configured; lookups are disabled.[/yellow]")

    table = Table(title=f"{title} (id {entity_id})")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_row("Backdrop", outcome["backdrop_url"] or f"- ({outcome['backdrop_state']})")
    table.add_row("Logo", outcome["logo_url"] or f"- ({outcome['logo_state']})")

    record = outcome["details"]
    if details:
        if record is None:
            table.add_row("Details", "-")
        else:
            table.add_row("Title", record["title"])
            table.add_row("Format", record["format"] or "-")
            table.add_row("Year", str(record["season_year"] or "-"))
            table.add_row("Score", str(record["average_score"] or "-"))
            table.add_row("Genres", ", ".join(record["genres"]) or "-")
    console.print(table)


if __name__ == "__main__":
    app()
