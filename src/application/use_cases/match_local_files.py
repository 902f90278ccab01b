"""End-to-end local file matching: tag extraction followed by resolution.

Produces one outcome per input file in file order. Files whose tags could
not be read are never searched and surface as EXTRACTION_FAILED.
"""

from collections.abc import Sequence
from pathlib import Path

from attrs import define, field

from src.config import get_logger
from src.domain.entities.track import LocalRecord
from src.domain.matching import (
    DEFAULT_THRESHOLDS,
    MatchObserver,
    MatchOutcome,
    TagReader,
    TierThresholds,
    TrackSearcher,
)

from .extract_records import ExtractRecordsCommand, ExtractRecordsUseCase
from .resolve_matches import ResolveMatchesCommand, ResolveMatchesUseCase

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class MatchLocalFilesCommand:
    """Command listing the files to match, in reporting order."""

    paths: Sequence[Path] = field(converter=lambda paths: tuple(Path(p) for p in paths))


@define(slots=True)
class MatchLocalFilesUseCase:
    """Orchestrates extraction and resolution with injected collaborators."""

    tag_reader: TagReader
    searcher: TrackSearcher
    observer: MatchObserver | None = None
    thresholds: TierThresholds = DEFAULT_THRESHOLDS
    extraction_concurrency: int = 5
    search_concurrency: int = 1

    async def execute(self, command: MatchLocalFilesCommand) -> list[MatchOutcome]:
        """Match every file.

        Args:
            command: Files in reporting order.

        Returns:
            One outcome per file, in file order.
        """
        extraction = await ExtractRecordsUseCase(
            tag_reader=self.tag_reader,
            concurrency_limit=self.extraction_concurrency,
        ).execute(ExtractRecordsCommand(paths=command.paths))

        resolution = await ResolveMatchesUseCase(
            searcher=self.searcher,
            observer=self.observer,
            thresholds=self.thresholds,
            concurrency_limit=self.search_concurrency,
        ).execute(ResolveMatchesCommand(records=extraction.records))

        outcomes_by_id = {
            outcome.local_record.id: outcome for outcome in resolution.outcomes
        }
        for failure in extraction.failures:
            outcome = MatchOutcome.extraction_failed(
                LocalRecord(id=failure.record_id, source=str(failure.path)),
                failure.message,
            )
            outcomes_by_id[failure.record_id] = outcome
            if self.observer:
                try:
                    self.observer.on_match_evaluated(outcome)
                except Exception:
                    logger.exception("Match observer failed")

        return [outcomes_by_id[record_id] for record_id in sorted(outcomes_by_id)]
