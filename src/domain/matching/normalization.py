"""Label normalization for artist/title comparison.

Strips noise tokens that do not help identify a work (feature markers,
remix/edit qualifiers, punctuation) and canonicalizes case and whitespace.
"""

import re

from .types import LabelField, NormalizedLabel

# Noise tokens per field. Word tokens only match on word boundaries.
ARTIST_NOISE_WORDS = ("featuring", "feat", "ft", "vs", "and")
ARTIST_NOISE_SYMBOLS = ("&", ",", ".")

TITLE_QUALIFIER_OPENERS = ("original", "official", "extended", "radio", "pro", "dj")
TITLE_QUALIFIER_CLOSERS = ("bootleg", "mix", "edit")

_NOISE_PATTERNS: dict[LabelField, re.Pattern[str]] = {
    LabelField.ARTIST: re.compile(
        r"\b(?:{})\b|[{}]".format(
            "|".join(ARTIST_NOISE_WORDS),
            re.escape("".join(ARTIST_NOISE_SYMBOLS)),
        ),
        re.IGNORECASE,
    ),
    LabelField.TITLE: re.compile(
        # Qualifiers are tried before bare parentheses
        r"\((?:{})\b|\b(?:{})\)|[()]".format(
            "|".join(TITLE_QUALIFIER_OPENERS),
            "|".join(TITLE_QUALIFIER_CLOSERS),
        ),
        re.IGNORECASE,
    ),
}

_WHITESPACE = re.compile(r"\s+")


def normalize(field: LabelField | str, value: str) -> str:
    """Normalize one label component for comparison.

    Removes the field's noise tokens wherever they occur, lower-cases the
    result and collapses whitespace. Idempotent.

    Args:
        field: "artist" or "title"
        value: Raw label text (empty string allowed)

    Returns:
        Normalized label text

    Raises:
        TypeError: value is not a string
        ValueError: unknown field
    """
    if not isinstance(value, str):
        raise TypeError(f"Expected str for {field} label, got {type(value).__name__}")

    pattern = _NOISE_PATTERNS[LabelField(field)]
    # Replace with a space so removal never joins neighbouring words
    stripped = pattern.sub(" ", value.lower())
    return _WHITESPACE.sub(" ", stripped).strip()


def normalize_label(artist: str | None, title: str | None) -> NormalizedLabel:
    """Normalize an (artist, title) pair, treating absent values as empty."""
    return NormalizedLabel(
        artist=normalize(LabelField.ARTIST, artist or ""),
        title=normalize(LabelField.TITLE, title or ""),
    )
