"""Local file metadata extraction."""

from .tag_reader import (
    AudioFileFinder,
    MutagenTagReader,
    TagInfo,
    discover_audio_files,
    read_tags_sync,
)

__all__ = [
    "AudioFileFinder",
    "MutagenTagReader",
    "TagInfo",
    "discover_audio_files",
    "read_tags_sync",
]
