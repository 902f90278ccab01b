"""Tests for artist/title label normalization."""

import pytest

from src.domain.matching.normalization import normalize, normalize_label
from src.domain.matching.types import LabelField, NormalizedLabel

ARTIST_SAMPLES = [
    "Artist A featuring Artist B",
    "Artist A feat. Artist B",
    "Artist A ft. Artist B & Artist C",
    "Above & Beyond vs. Armin van Buuren",
    "Simon and Garfunkel",
    "Crosby, Stills, Nash & Young",
    "  Lots   of    space  ",
    "FEAT FT VS AND",
    "",
    "Band of Horses",
]

TITLE_SAMPLES = [
    "Song Name (Extended Mix)",
    "Song Name (Original Mix)",
    "Song Name (Radio Edit)",
    "Song Name (Official Video)",
    "Song Name (DJ Tool)",
    "Song Name (Pro Mix)",
    "Song Name (Someone Bootleg)",
    "Song Name (Remix)",
    "((Nested (Extended Mix)))",
    "",
    "Plain Title",
]


class TestArtistNormalization:
    """Artist noise tokens: feature markers, conjunctions, punctuation."""

    def test_removes_featuring_marker(self):
        """Feature marker is dropped and the rest collapsed."""
        assert normalize("artist", "Artist A featuring Artist B") == "artist a artist b"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Artist A feat. Artist B", "artist a artist b"),
            ("Artist A ft. Artist B", "artist a artist b"),
            ("Artist A FT Artist B", "artist a artist b"),
            ("Above & Beyond vs. Armin van Buuren", "above beyond armin van buuren"),
            ("Simon and Garfunkel", "simon garfunkel"),
            ("Crosby, Stills, Nash & Young", "crosby stills nash young"),
            ("Dr. Dre", "dr dre"),
        ],
    )
    def test_noise_tokens_removed(self, raw, expected):
        """Noise tokens are removed anywhere in the label."""
        assert normalize(LabelField.ARTIST, raw) == expected

    def test_tokens_only_match_whole_words(self):
        """Words containing noise tokens are left intact."""
        assert normalize("artist", "Band of Andromeda") == "band of andromeda"
        assert normalize("artist", "Left Feather") == "left feather"
        assert normalize("artist", "Swift") == "swift"

    def test_symbols_do_not_join_words(self):
        """Removed punctuation leaves a word break behind."""
        assert normalize("artist", "Artist A,Artist B") == "artist a artist b"

    def test_collapses_whitespace(self):
        """Whitespace runs collapse and edges are trimmed."""
        assert normalize("artist", "  Lots   of \t space  ") == "lots of space"

    def test_title_tokens_untouched_in_artist_field(self):
        """Noise sets are field-specific."""
        assert normalize("artist", "Mix (Edit)") == "mix (edit)"


class TestTitleNormalization:
    """Title noise tokens: remix/edit qualifiers and parentheses."""

    def test_strips_extended_mix_qualifier(self):
        """Qualifier parenthetical is stripped."""
        assert normalize("title", "Song Name (Extended Mix)") == "song name"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Song Name (Original Mix)", "song name"),
            ("Song Name (Radio Edit)", "song name"),
            ("Song Name (Official Video)", "song name video"),
            ("Song Name (DJ Edit)", "song name"),
            ("Song Name (Someone Bootleg)", "song name someone"),
            ("Song Name (Remix)", "song name remix"),
            ("Song Name (Pro Mix)", "song name"),
            ("Song Name (Production Version)", "song name production version"),
        ],
    )
    def test_qualifiers_removed(self, raw, expected):
        """Qualifier openers, closers and bare parentheses are removed."""
        assert normalize(LabelField.TITLE, raw) == expected

    def test_artist_tokens_untouched_in_title_field(self):
        """'and' is meaningful in titles."""
        assert normalize("title", "Rock and Roll") == "rock and roll"

    def test_case_insensitive(self):
        """Qualifiers match regardless of case."""
        assert normalize("title", "SONG (EXTENDED MIX)") == "song"


class TestNormalizeContract:
    """Purity, idempotence and input validation."""

    @pytest.mark.parametrize("value", ARTIST_SAMPLES)
    def test_artist_idempotent(self, value):
        """Normalizing twice equals normalizing once."""
        once = normalize("artist", value)
        assert normalize("artist", once) == once

    @pytest.mark.parametrize("value", TITLE_SAMPLES)
    def test_title_idempotent(self, value):
        """Normalizing twice equals normalizing once."""
        once = normalize("title", value)
        assert normalize("title", once) == once

    def test_empty_string(self):
        """Empty input yields empty output."""
        assert normalize("artist", "") == ""
        assert normalize("title", "") == ""

    def test_output_is_lowercase(self):
        for value in ARTIST_SAMPLES:
            assert normalize("artist", value) == normalize("artist", value).lower()

    def test_rejects_none(self):
        """Absent input must be substituted by the caller."""
        with pytest.raises(TypeError):
            normalize("artist", None)

    def test_rejects_unknown_field(self):
        with pytest.raises(ValueError):
            normalize("album", "Discovery")


class TestNormalizeLabel:
    """Pair normalization used by the resolver."""

    def test_absent_values_become_empty(self):
        assert normalize_label(None, None) == NormalizedLabel(artist="", title="")

    def test_pair(self):
        label = normalize_label("Artist A feat. Artist B", "Song (Radio Edit)")
        assert label == NormalizedLabel(artist="artist a artist b", title="song")
        assert label.as_query() == "artist a artist b song"
