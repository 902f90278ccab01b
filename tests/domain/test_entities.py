"""Tests for local record and candidate entities."""

import attrs
import pytest

from src.domain.entities import Candidate, LocalRecord
from src.domain.matching import MatchOutcome, MatchTier


class TestLocalRecord:
    def test_fields_optional(self):
        record = LocalRecord(id=3)
        assert record.title is None
        assert record.artist is None
        assert record.display_name == "Unknown Artist - Unknown Title"

    def test_rejects_non_positive_id(self):
        """IDs are 1-based."""
        with pytest.raises(ValueError):
            LocalRecord(id=0)

    def test_immutable(self, record):
        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            record.title = "Other"


class TestCandidate:
    def test_artist_string_joins_in_order(self):
        candidate = Candidate(name="Song", artists=["B", "A"])
        assert candidate.artists == ("B", "A")
        assert candidate.artist_string == "B, A"
        assert candidate.display_name == "B, A - Song"

    def test_single_artist_string_coerced(self):
        assert Candidate(name="Song", artists="Solo").artists == ("Solo",)

    def test_no_artists(self):
        assert Candidate(name="Song").artist_string == ""


class TestMatchOutcome:
    def test_error_marker_distinguishes_failed_query(self, record):
        """A failed query and a true no-match are both UNMATCHED but distinguishable."""
        no_match = MatchOutcome.unmatched(record)
        failed = MatchOutcome.unmatched(record, error="timeout")

        assert no_match.tier == failed.tier == MatchTier.UNMATCHED
        assert not no_match.errored
        assert failed.errored

    def test_as_dict(self, record, exact_candidate):
        outcome = MatchOutcome(
            local_record=record,
            tier=MatchTier.GOOD,
            candidate=exact_candidate,
            distance=0,
            candidate_count=1,
        )
        data = outcome.as_dict()

        assert data["id"] == 1
        assert data["tier"] == "good"
        assert data["candidate"] == "Daft Punk - One More Time"
        assert data["error"] is None
