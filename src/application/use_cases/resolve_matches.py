"""Match resolution use case for local records against a catalog search.

For every record: normalize its labels, query the search collaborator, score
the best candidate and classify it. Records are resolved independently under
a concurrency cap and outcomes are returned in input order.
"""

from collections.abc import Awaitable, Callable, Sequence
import time

from attrs import define, field

from src.application.utilities.batching import BatchProcessor, ItemResult
from src.config import get_logger
from src.domain.entities.track import Candidate, LocalRecord
from src.domain.matching import (
    DEFAULT_THRESHOLDS,
    MatchObserver,
    MatchOutcome,
    MatchTier,
    SearchError,
    TierThresholds,
    TrackSearcher,
    evaluate_match,
    normalize_label,
)

logger = get_logger(__name__)

SearchFn = Callable[[str, str], Awaitable[Sequence[Candidate]]]


@define(frozen=True, slots=True)
class CallableSearcher:
    """Adapts a plain ``async def search(artist, title)`` to TrackSearcher."""

    func: SearchFn

    async def search(self, artist: str, title: str) -> Sequence[Candidate]:
        return await self.func(artist, title)


@define(frozen=True, slots=True)
class ResolveMatchesCommand:
    """Command for resolving an ordered batch of local records."""

    records: Sequence[LocalRecord] = field(converter=tuple)

    def __attrs_post_init__(self) -> None:
        """Validate command parameters."""
        ids = [record.id for record in self.records]
        if len(ids) != len(set(ids)):
            raise ValueError("Record IDs must be unique within a batch")


@define(frozen=True, slots=True)
class ResolveMatchesResult:
    """Outcomes in input order plus operation metadata."""

    outcomes: list[MatchOutcome]
    execution_time_ms: int = 0

    def count(self, tier: MatchTier) -> int:
        """Number of outcomes in the given tier."""
        return sum(1 for outcome in self.outcomes if outcome.tier == tier)

    @property
    def errored_count(self) -> int:
        """Number of records whose search failed."""
        return sum(1 for outcome in self.outcomes if outcome.errored)


@define(slots=True)
class ResolveMatchesUseCase:
    """Resolves local records against an injected catalog searcher.

    The observer, when given, is notified once per record as soon as that
    record completes, which may be out of input order under concurrency.
    """

    searcher: TrackSearcher
    observer: MatchObserver | None = None
    thresholds: TierThresholds = DEFAULT_THRESHOLDS
    concurrency_limit: int = 1

    async def execute(self, command: ResolveMatchesCommand) -> ResolveMatchesResult:
        """Execute match resolution.

        Args:
            command: Records to resolve, in reporting order.

        Returns:
            Result with exactly one outcome per record, in input order.
        """
        start_time = time.time()
        records = command.records

        with logger.contextualize(
            operation="resolve_matches", record_count=len(records)
        ):
            logger.info(f"Resolving {len(records)} local records")

            processor = BatchProcessor[LocalRecord, MatchOutcome](
                concurrency_limit=self.concurrency_limit,
                logger_instance=logger,
            )

            def on_item_done(index: int, item: ItemResult[MatchOutcome]) -> None:
                self._notify(self._to_outcome(records[index], item))

            item_results = await processor.process(
                records, self._resolve_record, on_item_done=on_item_done
            )
            outcomes = [
                self._to_outcome(records[item.index], item) for item in item_results
            ]

            result = ResolveMatchesResult(
                outcomes=outcomes,
                execution_time_ms=int((time.time() - start_time) * 1000),
            )
            logger.info(
                f"Resolved {len(outcomes)} records: "
                f"{result.count(MatchTier.GOOD)} good, "
                f"{result.count(MatchTier.FAIR)} fair, "
                f"{result.count(MatchTier.POOR)} poor, "
                f"{result.count(MatchTier.UNMATCHED)} unmatched "
                f"({result.errored_count} errored)",
                execution_time_ms=result.execution_time_ms,
            )
            return result

    async def _resolve_record(self, record: LocalRecord) -> MatchOutcome:
        label = normalize_label(record.artist, record.title)
        try:
            candidates = await self.searcher.search(label.artist, label.title)
        except SearchError as e:
            logger.bind(record_id=record.id).warning(
                f"Search failed for {record.display_name}: {e}"
            )
            return MatchOutcome.unmatched(record, error=str(e))

        return evaluate_match(record, label, candidates, self.thresholds)

    def _to_outcome(self, record: LocalRecord, item: ItemResult[MatchOutcome]) -> MatchOutcome:
        if item.ok and item.value is not None:
            return item.value
        # Unexpected collaborator failure, already logged by the processor
        return MatchOutcome.unmatched(record, error=f"{type(item.error).__name__}: {item.error}")

    def _notify(self, outcome: MatchOutcome) -> None:
        if not self.observer:
            return
        try:
            self.observer.on_match_evaluated(outcome)
        except Exception:
            logger.exception("Match observer failed")


async def resolve(
    records: Sequence[LocalRecord],
    search: TrackSearcher | SearchFn,
    *,
    observer: MatchObserver | None = None,
    thresholds: TierThresholds = DEFAULT_THRESHOLDS,
    concurrency_limit: int = 1,
) -> list[MatchOutcome]:
    """Resolve records against a searcher and return outcomes in input order.

    Args:
        records: Local records in reporting order
        search: TrackSearcher or plain async ``search(artist, title)`` function
        observer: Optional per-outcome listener
        thresholds: Tier boundaries
        concurrency_limit: Maximum concurrent search calls (1 = sequential)

    Returns:
        One MatchOutcome per record, in input order
    """
    searcher = search if isinstance(search, TrackSearcher) else CallableSearcher(search)
    use_case = ResolveMatchesUseCase(
        searcher=searcher,
        observer=observer,
        thresholds=thresholds,
        concurrency_limit=concurrency_limit,
    )
    result = await use_case.execute(ResolveMatchesCommand(records=records))
    return result.outcomes
