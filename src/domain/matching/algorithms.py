"""Pure algorithms for label distance scoring and tier classification.

These functions contain no I/O and implement the core business logic for
deciding how well a local record matches a catalog candidate.
"""

from collections.abc import Sequence

from rapidfuzz.distance import Levenshtein

from src.domain.entities.track import Candidate, LocalRecord

from .types import (
    DEFAULT_THRESHOLDS,
    MatchEvidence,
    MatchOutcome,
    MatchTier,
    NormalizedLabel,
    TierThresholds,
)


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between two strings.

    Minimum number of single-character insertions, deletions and
    substitutions turning ``a`` into ``b``, all at unit cost. Case-sensitive:
    callers lower-case before comparing.
    """
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Edit distance scaled to [0, 1], 1.0 meaning identical."""
    return Levenshtein.normalized_similarity(a, b)


def classify(distance: int, thresholds: TierThresholds = DEFAULT_THRESHOLDS) -> MatchTier:
    """Classify an edit distance into a confidence tier.

    Args:
        distance: Non-negative edit distance
        thresholds: Tier boundaries (exclusive upper bounds)

    Returns:
        GOOD, FAIR or POOR

    Raises:
        ValueError: distance is negative
    """
    if distance < 0:
        raise ValueError(f"Distance must be non-negative, got {distance}")
    if distance < thresholds.good_below:
        return MatchTier.GOOD
    if distance < thresholds.fair_below:
        return MatchTier.FAIR
    return MatchTier.POOR


def evaluate_match(
    record: LocalRecord,
    label: NormalizedLabel,
    candidates: Sequence[Candidate],
    thresholds: TierThresholds = DEFAULT_THRESHOLDS,
) -> MatchOutcome:
    """Score the best-ranked candidate against a record's normalized label.

    Args:
        record: Local record being resolved
        label: Normalized artist/title of the record
        candidates: Search results, best first
        thresholds: Tier boundaries

    Returns:
        UNMATCHED outcome when there are no candidates, otherwise the scored
        outcome for ``candidates[0]``
    """
    if not candidates:
        return MatchOutcome.unmatched(record)

    best = candidates[0]
    local_label = label.as_query().lower()
    candidate_label = f"{best.artist_string} {best.name}".lower()

    distance = edit_distance(local_label, candidate_label)

    return MatchOutcome(
        local_record=record,
        tier=classify(distance, thresholds),
        candidate=best,
        distance=distance,
        candidate_count=len(candidates),
        evidence=MatchEvidence(
            local_label=local_label,
            candidate_label=candidate_label,
            distance=distance,
            similarity=similarity(local_label, candidate_label),
        ),
    )
