"""MatchObserver implementations.

Outcome reporting is a replaceable sink: the resolver only knows the
MatchObserver protocol, these classes decide where outcomes go.
"""

from collections.abc import Iterable

from attrs import define, field

from src.config import get_logger
from src.domain.matching import MatchObserver, MatchOutcome, MatchTier

logger = get_logger(__name__)

# Log level per tier
TIER_LOG_LEVELS: dict[MatchTier, str] = {
    MatchTier.GOOD: "SUCCESS",
    MatchTier.FAIR: "INFO",
    MatchTier.POOR: "WARNING",
    MatchTier.UNMATCHED: "WARNING",
    MatchTier.EXTRACTION_FAILED: "ERROR",
}


@define(frozen=True, slots=True)
class LoggingMatchObserver:
    """Logs one structured line per evaluated outcome."""

    def on_match_evaluated(self, outcome: MatchOutcome) -> None:
        record = outcome.local_record
        level = TIER_LOG_LEVELS[outcome.tier]
        context = {"record_id": record.id, "tier": str(outcome.tier)}

        if outcome.candidate is not None:
            if outcome.evidence is not None:
                context.update(outcome.evidence.as_dict())
            logger.bind(**context).log(
                level,
                f"Found ({outcome.candidate_count}): {outcome.candidate.display_name} "
                f"for {record.display_name} (difference {outcome.distance})",
            )
        elif outcome.errored:
            logger.bind(**context).log(level, f"Failed: {record.display_name}: {outcome.error}")
        else:
            logger.bind(**context).log(level, f"No results: {record.display_name}")


@define(frozen=True, slots=True)
class CompositeMatchObserver:
    """Fans each outcome out to several observers."""

    observers: tuple[MatchObserver, ...] = field(converter=tuple)

    @classmethod
    def of(cls, observers: Iterable[MatchObserver | None]) -> "CompositeMatchObserver":
        return cls(observers=[o for o in observers if o is not None])

    def on_match_evaluated(self, outcome: MatchOutcome) -> None:
        for observer in self.observers:
            observer.on_match_evaluated(outcome)
