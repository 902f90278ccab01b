"""tagmatch domain layer - pure business logic with no I/O."""

from . import entities, matching

from .entities import Candidate, LocalRecord
from .matching import (
    MatchOutcome,
    MatchTier,
    classify,
    edit_distance,
    normalize,
)

__all__ = [
    # Modules
    "entities",
    "matching",
    # Key domain types
    "Candidate",
    "LocalRecord",
    "MatchOutcome",
    "MatchTier",
    # Matching functions
    "classify",
    "edit_distance",
    "normalize",
]
