"""tagmatch CLI - Main application entry point and app structure."""

import asyncio
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Annotated

from rich.console import Console
import typer

from src.application.use_cases import MatchLocalFilesCommand, MatchLocalFilesUseCase
from src.config import get_logger, log_startup_info, settings, setup_loguru_logger
from src.domain.matching import (
    LabelField,
    TierThresholds,
    classify,
    edit_distance,
    normalize,
    normalize_label,
)
from src.infrastructure.cli.ui import (
    ProgressMatchObserver,
    command_error_handler,
    create_progress,
    display_outcomes,
)
from src.infrastructure.connectors.spotify import SpotifySearchConnector
from src.infrastructure.metadata import MutagenTagReader, discover_audio_files
from src.infrastructure.services.match_observers import (
    CompositeMatchObserver,
    LoggingMatchObserver,
)

try:
    VERSION = version("tagmatch")
except PackageNotFoundError:
    VERSION = "0.0.0+dev"

console = Console(width=100)
logger = get_logger(__name__)

app = typer.Typer(
    help=f"🎵 tagmatch v{VERSION} - Match local audio files against the Spotify catalog",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
    pretty_exceptions_enable=True,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
)


@app.command(name="match", rich_help_panel="🎵 Matching")
@command_error_handler
def match_command(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Audio files or directories to match"),
    ],
    concurrency: Annotated[
        int,
        typer.Option("--concurrency", "-c", min=1, help="Concurrent tag reads"),
    ] = settings.extraction.concurrency,
    search_concurrency: Annotated[
        int,
        typer.Option("--search-concurrency", "-s", min=1, help="Concurrent Spotify searches"),
    ] = settings.api.spotify_concurrency,
    limit: Annotated[
        int,
        typer.Option("--limit", "-l", min=1, max=50, help="Spotify results per search"),
    ] = settings.api.spotify_search_limit,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (table, json)"),
    ] = "table",
) -> None:
    """Read tags of local files and match them against Spotify."""
    files = discover_audio_files(paths)
    if not files:
        console.print("[bold red]No audio files found[/bold red]")
        raise typer.Exit(code=1)

    searcher = SpotifySearchConnector(limit=limit)
    outcomes = asyncio.run(
        _run_match(files, searcher, concurrency, search_concurrency)
    )
    display_outcomes(outcomes, output_format=output_format)


async def _run_match(
    files: list[Path],
    searcher: SpotifySearchConnector,
    concurrency: int,
    search_concurrency: int,
):
    with create_progress() as progress:
        task_id = progress.add_task("Matching tracks", total=len(files))
        observer = CompositeMatchObserver.of([
            LoggingMatchObserver(),
            ProgressMatchObserver(progress=progress, task_id=task_id),
        ])
        use_case = MatchLocalFilesUseCase(
            tag_reader=MutagenTagReader(),
            searcher=searcher,
            observer=observer,
            thresholds=settings.matching.thresholds(),
            extraction_concurrency=concurrency,
            search_concurrency=search_concurrency,
        )
        return await use_case.execute(MatchLocalFilesCommand(paths=files))


@app.command(name="normalize", rich_help_panel="🔧 Utilities")
@command_error_handler
def normalize_command(
    field: Annotated[LabelField, typer.Argument(help="Label field")],
    value: Annotated[str, typer.Argument(help="Raw label text")],
) -> None:
    """Show the normalized form of an artist or title label."""
    console.print(normalize(field, value), markup=False)


@app.command(name="distance", rich_help_panel="🔧 Utilities")
@command_error_handler
def distance_command(
    local: Annotated[str, typer.Argument(help='Local label, "artist - title"')],
    remote: Annotated[str, typer.Argument(help='Catalog label, "artist - title"')],
    good_below: Annotated[int, typer.Option(min=1)] = settings.matching.good_below,
    fair_below: Annotated[int, typer.Option(min=1)] = settings.matching.fair_below,
) -> None:
    """Score two "artist - title" labels the way the matcher does."""
    local_artist, _, local_title = local.partition(" - ")
    remote_artist, _, remote_title = remote.partition(" - ")
    label = normalize_label(local_artist, local_title)

    distance = edit_distance(
        label.as_query().lower(), f"{remote_artist} {remote_title}".lower()
    )
    tier = classify(distance, TierThresholds(good_below=good_below, fair_below=fair_below))
    console.print(f"{distance} {tier.value.upper()}")


@app.command(name="version", rich_help_panel="⚙️ System")
def version_command() -> None:
    """Show version information."""
    console.print(f"[bold bright_blue]🎵 tagmatch[/bold bright_blue] [dim]v{VERSION}[/dim]")


@app.callback()
def init_cli(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output"),
    ] = False,
) -> None:
    """Initialize tagmatch CLI."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    setup_loguru_logger(verbose)
    log_startup_info()


def main() -> int:
    """Application entry point."""
    try:
        return app() or 0
    except Exception:
        logger.exception("Unhandled exception")
        return 1
