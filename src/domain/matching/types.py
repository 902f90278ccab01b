"""Pure domain types for label matching and confidence tiers.

These types represent the core concepts in our matching domain with zero external dependencies.
"""

from enum import StrEnum
from typing import Any

from attrs import define, field, validators

from src.domain.entities.track import Candidate, LocalRecord


class LabelField(StrEnum):
    """Free-text label fields that can be normalized."""

    ARTIST = "artist"
    TITLE = "title"


class MatchTier(StrEnum):
    """Coarse confidence bucket for a local record."""

    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    UNMATCHED = "unmatched"
    EXTRACTION_FAILED = "extraction_failed"


@define(frozen=True, slots=True)
class NormalizedLabel:
    """Normalized (artist, title) pair used as search query and comparison key."""

    artist: str
    title: str

    def as_query(self) -> str:
        """Single comparison string "artist title"."""
        return f"{self.artist} {self.title}"


@define(frozen=True, slots=True)
class TierThresholds:
    """Edit distance boundaries between tiers.

    A distance below ``good_below`` is GOOD, below ``fair_below`` is FAIR,
    anything else is POOR.
    """

    good_below: int = field(default=25, validator=validators.gt(0))
    fair_below: int = field(default=50)

    @fair_below.validator
    def _check_order(self, attribute, value: int) -> None:
        if value < self.good_below:
            raise ValueError(
                f"fair_below ({value}) must be >= good_below ({self.good_below})"
            )


DEFAULT_THRESHOLDS = TierThresholds()


@define(frozen=True, slots=True)
class MatchEvidence:
    """Evidence behind a tier decision, kept for diagnostics."""

    local_label: str
    candidate_label: str
    distance: int
    similarity: float = 0.0

    def as_dict(self) -> dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "local_label": self.local_label,
            "candidate_label": self.candidate_label,
            "distance": self.distance,
            "similarity": round(self.similarity, 2),
        }


@define(frozen=True, slots=True)
class MatchOutcome:
    """Result of reconciling one local record against the catalog.

    - ``candidate``/``distance`` are set only when a candidate was scored
    - ``error`` is set when the search itself failed, which distinguishes a
      failed query from a query that returned no candidates
    """

    local_record: LocalRecord
    tier: MatchTier
    candidate: Candidate | None = None
    distance: int | None = None
    error: str | None = None
    candidate_count: int = 0
    evidence: MatchEvidence | None = None

    @property
    def matched(self) -> bool:
        """Whether a candidate was found and scored."""
        return self.candidate is not None

    @property
    def errored(self) -> bool:
        """Whether the record could not be resolved because of a failure."""
        return self.error is not None

    @classmethod
    def unmatched(
        cls, record: LocalRecord, error: str | None = None
    ) -> "MatchOutcome":
        """Outcome for a record with no candidates or a failed search."""
        return cls(local_record=record, tier=MatchTier.UNMATCHED, error=error)

    @classmethod
    def extraction_failed(cls, record: LocalRecord, error: str) -> "MatchOutcome":
        """Outcome for a file whose tags could not be read."""
        return cls(local_record=record, tier=MatchTier.EXTRACTION_FAILED, error=error)

    def as_dict(self) -> dict[str, Any]:
        """Flat representation for JSON output."""
        record = self.local_record
        return {
            "id": record.id,
            "source": record.source,
            "artist": record.artist,
            "title": record.title,
            "tier": str(self.tier),
            "distance": self.distance,
            "candidate": self.candidate.display_name if self.candidate else None,
            "candidate_id": self.candidate.connector_id if self.candidate else None,
            "candidate_count": self.candidate_count,
            "error": self.error,
        }
