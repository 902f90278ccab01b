import os
from pathlib import Path
import tempfile

# Must run before src.config creates the settings singleton
os.environ.setdefault("LOG_FILE", str(Path(tempfile.gettempdir()) / "tagmatch-tests.log"))
os.environ.setdefault("SPOTIFY_CLIENT_ID", "test-client-id")
os.environ.setdefault("SPOTIFY_CLIENT_SECRET", "test-client-secret")

import pytest  # noqa: E402

from src.domain.entities import Candidate, LocalRecord  # noqa: E402


@pytest.fixture
def record():
    """Single well-tagged local record."""
    return LocalRecord(id=1, artist="Daft Punk", title="One More Time", album="Discovery")


@pytest.fixture
def records():
    """Five local records in file order."""
    return [
        LocalRecord(id=i, artist=f"Artist {i}", title=f"Track {i}") for i in range(1, 6)
    ]


@pytest.fixture
def exact_candidate():
    """Catalog candidate identical to the ``record`` fixture."""
    return Candidate(
        name="One More Time",
        artists=("Daft Punk",),
        connector_id="0DiWol3AO6WpXZgp0goxAV",
        album="Discovery",
    )
