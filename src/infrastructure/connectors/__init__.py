"""Service connectors for external music catalogs."""

from src.infrastructure.connectors.spotify import (
    SpotifySearchConnector,
    build_search_query,
    convert_spotify_search_results,
    convert_spotify_track_to_candidate,
)

__all__ = [
    "SpotifySearchConnector",
    "build_search_query",
    "convert_spotify_search_results",
    "convert_spotify_track_to_candidate",
]
