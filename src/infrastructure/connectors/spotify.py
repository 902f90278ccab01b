"""Spotify catalog search connector.

This module provides a search-only connector for the Spotify API using the
spotipy library (https://spotipy.readthedocs.io/) with client-credentials
authentication, and converts Spotify search payloads into domain Candidates.

Key components:
- SpotifySearchConnector: TrackSearcher implementation with retry and backoff
- build_search_query: Field-filtered query from normalized labels
- convert_spotify_search_results: Spotify payload to ordered Candidates
"""

import asyncio
from typing import Any

from attrs import define, field
import backoff
import requests
import spotipy
from spotipy.oauth2 import SpotifyClientCredentials, SpotifyOauthError

from src.config import get_config, get_logger, resilient_operation, settings
from src.domain.entities import Candidate
from src.domain.matching import SearchError

# Get contextual logger with service binding
logger = get_logger(__name__).bind(service="spotify")

RETRYABLE_ERRORS = (spotipy.SpotifyException, requests.exceptions.RequestException)


def _is_permanent_error(error: Exception) -> bool:
    """Client errors other than rate limiting are not worth retrying."""
    if isinstance(error, spotipy.SpotifyException):
        status = error.http_status or 0
        return 400 <= status < 500 and status != 429
    return False


def _on_backoff(details: dict[str, Any]) -> None:
    logger.warning(
        f"Backing off {details['target'].__name__} (attempt {details['tries']})",
        retry_delay=f"{details['wait']:.2f}s",
    )


def _on_giveup(details: dict[str, Any]) -> None:
    exception = details.get("exception")
    logger.error(
        f"All {details['tries']} attempts failed for {details['target'].__name__}",
        elapsed_time=f"{details['elapsed']:.2f}s",
        error=str(exception) if exception else "Unknown error",
    )


def build_search_query(artist: str, title: str) -> str:
    """Build a Spotify field-filtered query, skipping empty fields."""
    parts = []
    if artist:
        parts.append(f"artist:{artist}")
    if title:
        parts.append(f"track:{title}")
    return " ".join(parts)


def convert_spotify_track_to_candidate(spotify_track: dict[str, Any]) -> Candidate:
    """Convert one Spotify track object to a Candidate."""
    return Candidate(
        name=spotify_track["name"],
        artists=tuple(
            artist["name"] for artist in spotify_track.get("artists") or [] if artist
        ),
        connector_id=spotify_track.get("id"),
        album=(spotify_track.get("album") or {}).get("name"),
        uri=spotify_track.get("uri"),
    )


def convert_spotify_search_results(results: Any) -> list[Candidate]:
    """Convert a Spotify search response to Candidates in Spotify's ranking order.

    Raises:
        SearchError: The payload does not have the expected shape
    """
    if not results:
        return []

    try:
        items = results["tracks"]["items"]
        return [
            convert_spotify_track_to_candidate(item) for item in items if item
        ]
    except (KeyError, TypeError, ValueError) as e:
        raise SearchError(f"Malformed Spotify search response: {e!r}") from e


@define(slots=True)
class SpotifySearchConnector:
    """Thin wrapper around spotipy's search endpoint.

    Implements the TrackSearcher protocol. Transient failures are retried
    with exponential backoff and full jitter, bounded by a try count and a
    total time cap, before surfacing as SearchError.
    """

    client_id: str = field(factory=lambda: settings.credentials.spotify_client_id)
    client_secret: str = field(
        factory=lambda: settings.credentials.spotify_client_secret, repr=False
    )
    market: str = field(factory=lambda: settings.api.spotify_market)
    limit: int = field(factory=lambda: settings.api.spotify_search_limit)
    client: spotipy.Spotify | None = field(default=None, repr=False)

    def __attrs_post_init__(self) -> None:
        """Initialize Spotify client with client-credentials configuration."""
        if self.client is not None:
            return

        logger.debug("Initializing Spotify search connector")
        try:
            auth_manager = SpotifyClientCredentials(
                client_id=self.client_id or None,
                client_secret=self.client_secret or None,
            )
        except SpotifyOauthError as e:
            raise ValueError(
                "Spotify credentials missing: set SPOTIFY_CLIENT_ID and SPOTIFY_CLIENT_SECRET"
            ) from e

        # Retries are handled by backoff below
        self.client = spotipy.Spotify(
            auth_manager=auth_manager,
            requests_timeout=10,
            retries=0,
            status_retries=0,
        )

    async def search(self, artist: str, title: str) -> list[Candidate]:
        """Search Spotify for tracks matching a normalized artist/title pair.

        Args:
            artist: Normalized artist label
            title: Normalized title label

        Returns:
            Candidates in Spotify's relevance order, possibly empty

        Raises:
            SearchError: Request failed after retries or payload was malformed
        """
        query = build_search_query(artist, title)
        if not query:
            logger.debug("Skipping Spotify search for empty labels")
            return []

        try:
            results = await self._search(query)
        except (*RETRYABLE_ERRORS, SpotifyOauthError) as e:
            raise SearchError(
                f"Spotify search failed for '{query}': {e}", artist=artist, title=title
            ) from e

        candidates = convert_spotify_search_results(results)
        logger.debug(f"Spotify returned {len(candidates)} candidates for '{query}'")
        return candidates

    @resilient_operation("spotify_search")
    @backoff.on_exception(
        backoff.expo,
        RETRYABLE_ERRORS,
        max_tries=get_config("SPOTIFY_API_RETRY_COUNT", 3) + 1,
        max_time=get_config("SPOTIFY_API_MAX_RETRY_TIME", 60.0),
        factor=get_config("SPOTIFY_API_RETRY_BASE_DELAY", 0.5),
        max_value=get_config("SPOTIFY_API_RETRY_MAX_DELAY", 30.0),
        jitter=backoff.full_jitter,
        giveup=_is_permanent_error,
        on_backoff=_on_backoff,
        on_giveup=_on_giveup,
    )
    async def _search(self, query: str) -> dict[str, Any]:
        logger.debug(f"Searching Spotify with query: {query}")
        return await asyncio.to_thread(
            self.client.search,
            query,
            limit=self.limit,
            type="track",
            market=self.market,
        )
