"""Local record extraction use case.

Reads the tags of every selected file through an injected TagReader with
bounded concurrency. Each file keeps its 1-based position as record ID; a file
whose tags cannot be read is reported as a failure in its own slot without
aborting the others.
"""

from collections.abc import Sequence
from pathlib import Path

from attrs import define, field

from src.application.utilities.batching import BatchProcessor
from src.config import get_logger
from src.domain.entities.track import LocalRecord
from src.domain.matching import TagData, TagReader, TagReadError

logger = get_logger(__name__)


@define(frozen=True, slots=True)
class ExtractRecordsCommand:
    """Command listing the files to extract, in reporting order."""

    paths: Sequence[Path] = field(converter=lambda paths: tuple(Path(p) for p in paths))


@define(frozen=True, slots=True)
class ExtractionFailure:
    """A file whose metadata could not be read."""

    record_id: int
    path: Path
    message: str


@define(frozen=True, slots=True)
class ExtractRecordsResult:
    """Extracted records and failures, both ordered by record ID."""

    records: list[LocalRecord] = field(factory=list)
    failures: list[ExtractionFailure] = field(factory=list)

    @property
    def total(self) -> int:
        """Number of input files."""
        return len(self.records) + len(self.failures)


def _clean(value: str | None) -> str | None:
    """Blank tag values count as absent."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def record_from_tags(record_id: int, tags: TagData, source: Path | None = None) -> LocalRecord:
    """Build a LocalRecord from tag data."""
    return LocalRecord(
        id=record_id,
        title=_clean(tags.title),
        artist=_clean(tags.artist),
        album=_clean(tags.album),
        year=_clean(tags.year),
        source=str(source) if source else None,
    )


@define(slots=True)
class ExtractRecordsUseCase:
    """Fans tag reads out over files under a concurrency cap."""

    tag_reader: TagReader
    concurrency_limit: int = 5

    async def execute(self, command: ExtractRecordsCommand) -> ExtractRecordsResult:
        """Read tags of every file.

        Args:
            command: Files in reporting order.

        Returns:
            Records for readable files and failures for the rest. Waits for
            every file before returning.
        """
        paths = list(command.paths)
        if not paths:
            return ExtractRecordsResult()

        with logger.contextualize(operation="extract_records", file_count=len(paths)):
            processor = BatchProcessor[Path, TagData](
                concurrency_limit=self.concurrency_limit,
                logger_instance=logger,
            )
            item_results = await processor.process(paths, self.tag_reader.read_tags)

            records: list[LocalRecord] = []
            failures: list[ExtractionFailure] = []
            for item in item_results:
                path = paths[item.index]
                record_id = item.index + 1
                if item.ok and item.value is not None:
                    records.append(record_from_tags(record_id, item.value, path))
                    continue

                message = (
                    str(item.error)
                    if isinstance(item.error, TagReadError)
                    else f"Unexpected error reading tags: {item.error}"
                )
                logger.warning(f"Could not read tags of {path}: {message}")
                failures.append(
                    ExtractionFailure(record_id=record_id, path=path, message=message)
                )

            logger.info(
                f"Extracted {len(records)} of {len(paths)} files",
                failure_count=len(failures),
            )
            return ExtractRecordsResult(records=records, failures=failures)
