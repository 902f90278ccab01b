"""Protocols for matching collaborators.

These protocols define contracts for the catalog search, tag reading and
outcome reporting without depending on external implementations, following
the dependency inversion principle.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from src.domain.entities.track import Candidate

from .types import MatchOutcome


@runtime_checkable
class TrackSearcher(Protocol):
    """Protocol for catalog search services."""

    async def search(self, artist: str, title: str) -> Sequence[Candidate]:
        """Search the catalog for a normalized artist/title pair.

        Args:
            artist: Normalized artist label
            title: Normalized title label

        Returns:
            Candidates ordered best first, possibly empty

        Raises:
            SearchError: Transport or parsing failure
        """
        ...


class TagData(Protocol):
    """Protocol for tag data read from a file."""

    @property
    def title(self) -> str | None:
        """Track title."""
        ...

    @property
    def artist(self) -> str | None:
        """Artist as tagged."""
        ...

    @property
    def album(self) -> str | None:
        """Album name."""
        ...

    @property
    def year(self) -> str | None:
        """Release year or date string."""
        ...


class TagReader(Protocol):
    """Protocol for file metadata extraction."""

    async def read_tags(self, path: Path) -> TagData:
        """Read tags of one file.

        Raises:
            TagReadError: File could not be parsed
        """
        ...


class MatchObserver(Protocol):
    """Receives each outcome as soon as its record is resolved."""

    def on_match_evaluated(self, outcome: MatchOutcome) -> None:
        """Handle a completed outcome."""
        ...
