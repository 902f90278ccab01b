"""Core domain entities representing local and remote music records."""

from .track import Candidate, LocalRecord

__all__ = [
    "Candidate",
    "LocalRecord",
]
