"""Application use cases - orchestrate business operations."""

from .extract_records import (
    ExtractionFailure,
    ExtractRecordsCommand,
    ExtractRecordsResult,
    ExtractRecordsUseCase,
    record_from_tags,
)
from .match_local_files import MatchLocalFilesCommand, MatchLocalFilesUseCase
from .resolve_matches import (
    CallableSearcher,
    ResolveMatchesCommand,
    ResolveMatchesResult,
    ResolveMatchesUseCase,
    resolve,
)

__all__ = [
    "CallableSearcher",
    "ExtractRecordsCommand",
    "ExtractRecordsResult",
    "ExtractRecordsUseCase",
    "ExtractionFailure",
    "MatchLocalFilesCommand",
    "MatchLocalFilesUseCase",
    "ResolveMatchesCommand",
    "ResolveMatchesResult",
    "ResolveMatchesUseCase",
    "record_from_tags",
    "resolve",
]
