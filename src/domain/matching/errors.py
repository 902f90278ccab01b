"""Errors raised by matching collaborators."""


class MatchingError(Exception):
    """Base class for recoverable per-record matching failures."""


class SearchError(MatchingError):
    """Catalog search failed for one query (transport or payload error)."""

    def __init__(
        self, message: str, *, artist: str | None = None, title: str | None = None
    ) -> None:
        super().__init__(message)
        self.artist = artist
        self.title = title


class TagReadError(MatchingError):
    """Metadata of one file could not be read."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
