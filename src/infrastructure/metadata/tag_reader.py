"""Audio file tag reading with mutagen.

Reads title/artist/album/year from ID3, Vorbis comment and MP4 tags and
discovers audio files under the paths given on the command line.
"""

import asyncio
from collections.abc import Iterable
import os
from pathlib import Path

from attrs import define, field
from mutagen import File, MutagenError

from src.config import get_logger, settings
from src.domain.matching import TagReadError

logger = get_logger(__name__)

# Tag keys per field across ID3 frames, Vorbis comments and MP4 atoms
TAG_KEYS: dict[str, tuple[str, ...]] = {
    "title": ("TIT2", "title", "\xa9nam"),
    "artist": ("TPE1", "artist", "\xa9ART"),
    "album": ("TALB", "album", "\xa9alb"),
    "year": ("TDRC", "TYER", "date", "year", "\xa9day"),
}


@define(frozen=True, slots=True)
class TagInfo:
    """Tags read from one file; every field optional."""

    title: str | None = None
    artist: str | None = None
    album: str | None = None
    year: str | None = None


def _first(value: object) -> str | None:
    # ID3 frames and Vorbis/MP4 values are list-like
    if hasattr(value, "text"):
        value = value.text
    if isinstance(value, list):
        return str(value[0]) if value else None
    if value is None:
        return None
    return str(value)


def read_tags_sync(path: Path) -> TagInfo:
    """Read tags of a single file.

    Raises:
        TagReadError: File is missing, unsupported, or unparsable
    """
    try:
        audio = File(path)
    except (MutagenError, OSError) as e:
        raise TagReadError(f"{path.name}: {e}", path=str(path)) from e

    if audio is None:
        raise TagReadError(f"{path.name}: unsupported audio format", path=str(path))

    tags = audio.tags
    if not tags:
        return TagInfo()

    def get_any(keys: Iterable[str]) -> str | None:
        for key in keys:
            if key in tags:
                return _first(tags[key])
        return None

    return TagInfo(**{name: get_any(keys) for name, keys in TAG_KEYS.items()})


@define(frozen=True, slots=True)
class MutagenTagReader:
    """TagReader implementation running mutagen in a worker thread."""

    async def read_tags(self, path: Path) -> TagInfo:
        """Read tags without blocking the event loop."""
        logger.debug(f"Reading tags from {path}")
        return await asyncio.to_thread(read_tags_sync, Path(path))


@define(frozen=True, slots=True)
class AudioFileFinder:
    """Expands files and directories into a sorted list of audio files."""

    extensions: frozenset[str] = field(
        factory=lambda: frozenset(settings.extraction.extensions),
        converter=lambda exts: frozenset(e.lower() for e in exts),
    )

    def is_audio(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions

    def discover(self, paths: Iterable[Path]) -> list[Path]:
        """Collect audio files, preserving argument order.

        Directories are walked recursively and their files sorted; explicit
        files are kept when their suffix is a known audio extension.
        """
        files: list[Path] = []
        seen: set[Path] = set()
        for root in map(Path, paths):
            if root.is_file():
                found = [root] if self.is_audio(root) else []
            elif root.is_dir():
                found = sorted(
                    Path(dirpath) / name
                    for dirpath, _, filenames in os.walk(root)
                    for name in filenames
                    if self.is_audio(Path(name))
                )
            else:
                logger.warning(f"Skipping missing path {root}")
                found = []

            for path in found:
                if path not in seen:
                    seen.add(path)
                    files.append(path)
        return files


def discover_audio_files(paths: Iterable[Path]) -> list[Path]:
    """Discover audio files using configured extensions."""
    return AudioFileFinder().discover(paths)
