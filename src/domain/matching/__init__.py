"""Label normalization, distance scoring and tier classification for track matching."""

from .algorithms import classify, edit_distance, evaluate_match, similarity
from .errors import MatchingError, SearchError, TagReadError
from .normalization import normalize, normalize_label
from .protocols import MatchObserver, TagData, TagReader, TrackSearcher
from .types import (
    DEFAULT_THRESHOLDS,
    LabelField,
    MatchEvidence,
    MatchOutcome,
    MatchTier,
    NormalizedLabel,
    TierThresholds,
)

__all__ = [
    "DEFAULT_THRESHOLDS",
    "LabelField",
    "MatchEvidence",
    "MatchObserver",
    "MatchOutcome",
    "MatchTier",
    "MatchingError",
    "NormalizedLabel",
    "SearchError",
    "TagData",
    "TagReadError",
    "TagReader",
    "TierThresholds",
    "TrackSearcher",
    "classify",
    "edit_distance",
    "evaluate_match",
    "normalize",
    "normalize_label",
    "similarity",
]
