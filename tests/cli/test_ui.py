"""Tests for outcome rendering."""

import json
from unittest.mock import patch

from rich.console import Console
import pytest

from src.domain.entities import LocalRecord
from src.domain.matching import MatchOutcome, MatchTier
from src.infrastructure.cli.ui import display_outcomes


@pytest.fixture
def recorded_console():
    console = Console(record=True, width=120, color_system=None)
    with patch("src.infrastructure.cli.ui.console", console):
        yield console


@pytest.fixture
def outcomes(record, exact_candidate):
    return [
        MatchOutcome(
            local_record=record,
            tier=MatchTier.GOOD,
            candidate=exact_candidate,
            distance=0,
            candidate_count=1,
        ),
        MatchOutcome.extraction_failed(
            LocalRecord(id=2, source="broken [live].mp3"), "unsupported audio format"
        ),
        MatchOutcome.unmatched(LocalRecord(id=3, artist="A", title="B"), error="HTTP 503"),
    ]


def test_table_lists_outcomes_in_order(recorded_console, outcomes):
    display_outcomes(outcomes)
    text = recorded_console.export_text()

    assert text.index("Daft Punk - One More Time") < text.index("broken [live].mp3")
    assert "EXTRACTION FAILED" in text
    assert "HTTP 503" in text
    assert "Total: 3" in text


def test_json_output(recorded_console, outcomes):
    display_outcomes(outcomes, output_format="json")
    data = json.loads(recorded_console.export_text())

    assert [item["id"] for item in data] == [1, 2, 3]
    assert [item["tier"] for item in data] == ["good", "extraction_failed", "unmatched"]
