"""UI helpers for CLI interaction.

This module provides reusable UI components and helpers for the CLI,
keeping the presentation logic separate from business logic.
"""

from collections.abc import Callable, Sequence
import functools
import json

from attrs import define, field
from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
)
from rich.table import Table
import typer

from src.config import get_logger
from src.domain.matching import MatchOutcome, MatchTier

# Initialize console and logger
console = Console()
logger = get_logger(__name__)

TIER_STYLES: dict[MatchTier, str] = {
    MatchTier.GOOD: "green",
    MatchTier.FAIR: "yellow",
    MatchTier.POOR: "red",
    MatchTier.UNMATCHED: "dim red",
    MatchTier.EXTRACTION_FAILED: "bold red",
}


def command_error_handler[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Decorator to standardize error handling for CLI commands.

    This decorator wraps a command function to:
    1. Provide consistent error handling using Typer's Exit mechanism
    2. Log errors using Loguru with proper context
    3. Display user-friendly error messages with Rich

    Args:
        func: The command function to wrap

    Returns:
        Wrapped function with integrated error handling
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        operation = func.__name__.replace("_", " ")

        with logger.contextualize(operation=operation):
            try:
                logger.debug(f"Executing {operation}")
                return func(*args, **kwargs)

            except typer.Exit:
                raise

            except typer.Abort:
                logger.info(f"Operation {operation} aborted by user")
                raise

            except Exception as e:
                logger.exception(f"Error during {operation}")
                console.print(f"\n[bold red]✗ Error during {operation}:[/bold red] {e}")
                raise typer.Exit(code=1) from e

    return wrapper


@define(slots=True)
class ProgressMatchObserver:
    """Advances a Rich progress bar as outcomes arrive."""

    progress: Progress
    task_id: TaskID = field(default=TaskID(0))

    def on_match_evaluated(self, outcome: MatchOutcome) -> None:
        self.progress.advance(self.task_id)


def create_progress() -> Progress:
    """Progress bar used while resolving matches."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    )


def _format_tier(tier: MatchTier) -> str:
    style = TIER_STYLES[tier]
    return f"[{style}]{tier.value.replace('_', ' ').upper()}[/{style}]"


def display_outcomes(
    outcomes: Sequence[MatchOutcome],
    output_format: str = "table",
    title: str = "Match Results",
) -> None:
    """Display match outcomes in input order.

    Args:
        outcomes: Outcomes to display
        output_format: "table" or "json"
        title: Table title
    """
    if output_format == "json":
        console.print_json(json.dumps([outcome.as_dict() for outcome in outcomes]))
        return

    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Local", style="cyan")
    table.add_column("Spotify", style="green")
    table.add_column("Diff", justify="right")
    table.add_column("Tier")

    for outcome in outcomes:
        record = outcome.local_record
        if outcome.tier == MatchTier.EXTRACTION_FAILED:
            local = escape(record.source or record.display_name)
        else:
            local = escape(record.display_name)

        if outcome.candidate is not None:
            remote = escape(outcome.candidate.display_name)
        elif outcome.errored:
            remote = f"[red]{escape(outcome.error)}[/red]"
        else:
            remote = "[dim]No results[/dim]"

        table.add_row(
            str(record.id),
            local,
            remote,
            "" if outcome.distance is None else str(outcome.distance),
            _format_tier(outcome.tier),
        )

    console.print(table)
    display_summary(outcomes)


def display_summary(outcomes: Sequence[MatchOutcome]) -> None:
    """Print per-tier counts on one line."""
    parts = [f"Total: {len(outcomes)}"]
    for tier in MatchTier:
        count = sum(1 for outcome in outcomes if outcome.tier == tier)
        if count:
            parts.append(f"{_format_tier(tier)} {count}")
    errored = sum(1 for outcome in outcomes if outcome.errored)
    if errored:
        parts.append(f"[red]errored[/red] {errored}")
    console.print(" | ".join(parts))
