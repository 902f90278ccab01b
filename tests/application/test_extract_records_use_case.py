"""Tests for the local record extraction use case."""

import asyncio
from pathlib import Path

import pytest

from src.application.use_cases.extract_records import (
    ExtractRecordsCommand,
    ExtractRecordsUseCase,
    record_from_tags,
)
from src.domain.matching import TagReadError
from src.infrastructure.metadata import TagInfo


class FakeTagReader:
    """Tag reader serving canned tags, failing for selected files."""

    def __init__(self, tags: dict[str, TagInfo], failing: tuple[str, ...] = ()):
        self.tags = tags
        self.failing = failing
        self.in_flight = 0
        self.peak = 0

    async def read_tags(self, path: Path) -> TagInfo:
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await asyncio.sleep(0.01)
            if path.name in self.failing:
                raise TagReadError(f"{path.name}: corrupt header", path=str(path))
            return self.tags[path.name]
        finally:
            self.in_flight -= 1


@pytest.fixture
def tag_reader():
    return FakeTagReader(
        {
            f"{i}.mp3": TagInfo(title=f"Track {i}", artist=f"Artist {i}", year="2001")
            for i in range(1, 9)
        },
        failing=("3.mp3",),
    )


class TestExtractRecords:
    async def test_ids_follow_file_order(self, tag_reader):
        paths = [Path(f"{i}.mp3") for i in (2, 1, 4)]

        result = await ExtractRecordsUseCase(tag_reader=tag_reader).execute(
            ExtractRecordsCommand(paths=paths)
        )

        assert [(r.id, r.title) for r in result.records] == [
            (1, "Track 2"),
            (2, "Track 1"),
            (3, "Track 4"),
        ]
        assert result.records[0].source == "2.mp3"

    async def test_failure_reported_without_aborting(self, tag_reader):
        """A failing file is reported alone; the others are still extracted."""
        paths = [Path(f"{i}.mp3") for i in range(1, 6)]

        result = await ExtractRecordsUseCase(tag_reader=tag_reader).execute(
            ExtractRecordsCommand(paths=paths)
        )

        assert [r.id for r in result.records] == [1, 2, 4, 5]
        assert len(result.failures) == 1
        failure = result.failures[0]
        assert failure.record_id == 3
        assert failure.path == Path("3.mp3")
        assert "corrupt header" in failure.message
        assert result.total == 5

    async def test_concurrency_capped(self, tag_reader):
        """At most five reads in flight by default."""
        paths = [Path(f"{i}.mp3") for i in range(1, 9)]

        await ExtractRecordsUseCase(tag_reader=tag_reader).execute(
            ExtractRecordsCommand(paths=paths)
        )

        assert tag_reader.peak == 5

    async def test_empty_paths(self, tag_reader):
        result = await ExtractRecordsUseCase(tag_reader=tag_reader).execute(
            ExtractRecordsCommand(paths=[])
        )
        assert result.records == []
        assert result.failures == []


class TestRecordFromTags:
    def test_blank_values_are_absent(self):
        record = record_from_tags(1, TagInfo(title="  ", artist="Artist", album=""))

        assert record.title is None
        assert record.artist == "Artist"
        assert record.album is None
        assert record.source is None
