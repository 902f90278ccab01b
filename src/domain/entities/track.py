"""Track-related domain entities.

Pure track representations with zero external dependencies beyond attrs:
the locally-known record read from file tags and the remote catalog candidate.
"""

from attrs import define, field, validators


def _tuple_of_names(value) -> tuple[str, ...]:
    """Coerce an artist-name sequence into an immutable tuple."""
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@define(frozen=True, slots=True)
class LocalRecord:
    """Immutable record extracted from one local file's tags.

    Records are numbered 1-based in file-list order and every tag field is
    optional, because files in the wild are tagged inconsistently.
    """

    id: int = field(validator=validators.instance_of(int))
    title: str | None = field(default=None)
    artist: str | None = field(default=None)
    album: str | None = field(default=None)
    year: str | None = field(default=None)
    source: str | None = field(default=None, eq=False)

    @id.validator
    def _check_id(self, attribute, value: int) -> None:
        if value <= 0:
            raise ValueError(f"Invalid record ID: {value}. Must be a positive integer.")

    @property
    def display_name(self) -> str:
        """Human readable "artist - title" label with placeholders for gaps."""
        return f"{self.artist or 'Unknown Artist'} - {self.title or 'Unknown Title'}"


@define(frozen=True, slots=True)
class Candidate:
    """Remote catalog entry returned by a search as a possible match.

    Artist names are kept in the order the catalog lists them.
    """

    name: str = field(validator=validators.instance_of(str))
    artists: tuple[str, ...] = field(
        factory=tuple,
        converter=_tuple_of_names,
        validator=validators.deep_iterable(
            member_validator=validators.instance_of(str),
        ),
    )
    connector_id: str | None = field(default=None)
    album: str | None = field(default=None)
    uri: str | None = field(default=None, eq=False)

    @property
    def artist_string(self) -> str:
        """All artist names joined into a single display string."""
        return ", ".join(self.artists)

    @property
    def display_name(self) -> str:
        """Human readable "artists - name" label."""
        return f"{self.artist_string} - {self.name}"
