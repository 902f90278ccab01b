"""Configuration management using Pydantic Settings.

This module provides type-safe configuration management with automatic
environment variable loading and validation using Pydantic Settings.

The configuration is organized into logical groups:
- LoggingConfig: Logging levels, files, and debugging options
- CredentialsConfig: Spotify API credentials
- APIConfig: Catalog search concurrency, paging and retry settings
- ExtractionConfig: Tag extraction fan-out and file discovery
- MatchingConfig: Distance thresholds for confidence tiers
"""

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.matching.types import TierThresholds


class LoggingConfig(BaseModel):
    """Logging configuration for console and file output."""

    console_level: str = "INFO"
    file_level: str = "DEBUG"
    log_file: Path = Path("logs/tagmatch.log")
    real_time_debug: bool = True


class CredentialsConfig(BaseModel):
    """API credentials and authentication settings."""

    spotify_client_id: str = ""
    spotify_client_secret: str = ""


class APIConfig(BaseModel):
    """Catalog search configuration and retry policy."""

    spotify_concurrency: int = 5
    spotify_search_limit: int = 5
    spotify_market: str = "US"
    spotify_retry_count: int = 3
    spotify_retry_base_delay: float = 0.5
    spotify_retry_max_delay: float = 30.0
    spotify_max_retry_time: float = 60.0  # Total latency cap per search call


class ExtractionConfig(BaseModel):
    """Tag extraction configuration."""

    concurrency: int = 5
    extensions: list[str] = [".mp3", ".flac", ".m4a", ".aac", ".ogg", ".opus", ".wav"]


class MatchingConfig(BaseModel):
    """Edit distance thresholds separating confidence tiers."""

    good_below: int = 25
    fair_below: int = 50

    def thresholds(self) -> TierThresholds:
        """Build domain thresholds from configured values."""
        return TierThresholds(good_below=self.good_below, fair_below=self.fair_below)


class Settings(BaseSettings):
    """Main application settings with environment variable support.

    Environment variables can be set using flat naming or nested naming:
    - Flat: SPOTIFY_CLIENT_ID, CONSOLE_LOG_LEVEL, LOG_FILE
    - Nested: CREDENTIALS__SPOTIFY_CLIENT_ID, API__SPOTIFY_CONCURRENCY

    The .env file is automatically loaded for development convenience.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    logging: LoggingConfig = LoggingConfig()
    credentials: CredentialsConfig = CredentialsConfig()
    api: APIConfig = APIConfig()
    extraction: ExtractionConfig = ExtractionConfig()
    matching: MatchingConfig = MatchingConfig()

    @model_validator(mode="before")
    @classmethod
    def transform_flat_env_vars(cls, data: Any) -> Any:
        """Transform flat environment variables to nested structure.

        Handles flat env vars (SPOTIFY_CLIENT_ID) and maps them to the
        nested structure expected by the models (credentials.spotify_client_id).
        """
        if not isinstance(data, dict):
            return data

        transformed: dict[str, dict[str, Any]] = {}

        def take(env_key: str) -> Any:
            if env_key in data:
                return data.pop(env_key)
            return os.environ.get(env_key.upper())

        log_mapping = {
            "console_log_level": "console_level",
            "file_log_level": "file_level",
            "log_file": "log_file",
            "log_real_time_debug": "real_time_debug",
        }
        for env_key, field_key in log_mapping.items():
            value = take(env_key)
            if value is not None:
                transformed.setdefault("logging", {})[field_key] = value

        cred_mapping = {
            "spotify_client_id": "spotify_client_id",
            "spotify_client_secret": "spotify_client_secret",
        }
        for env_key, field_key in cred_mapping.items():
            value = take(env_key)
            if value is not None:
                transformed.setdefault("credentials", {})[field_key] = value

        for section, values in transformed.items():
            existing = data.get(section)
            if isinstance(existing, dict):
                values = {**values, **existing}
            data[section] = values

        return data


# Singleton instance for application use
settings = Settings()


# =============================================================================
# FLAT KEY ACCESS
# =============================================================================

_LEGACY_KEY_MAP = {
    # Logging settings
    "CONSOLE_LOG_LEVEL": lambda: settings.logging.console_level,
    "FILE_LOG_LEVEL": lambda: settings.logging.file_level,
    "LOG_FILE": lambda: settings.logging.log_file,
    "LOG_REAL_TIME_DEBUG": lambda: settings.logging.real_time_debug,
    # Credentials
    "SPOTIFY_CLIENT_ID": lambda: settings.credentials.spotify_client_id,
    "SPOTIFY_CLIENT_SECRET": lambda: settings.credentials.spotify_client_secret,
    # Spotify API settings
    "SPOTIFY_API_CONCURRENCY": lambda: settings.api.spotify_concurrency,
    "SPOTIFY_API_SEARCH_LIMIT": lambda: settings.api.spotify_search_limit,
    "SPOTIFY_API_MARKET": lambda: settings.api.spotify_market,
    "SPOTIFY_API_RETRY_COUNT": lambda: settings.api.spotify_retry_count,
    "SPOTIFY_API_RETRY_BASE_DELAY": lambda: settings.api.spotify_retry_base_delay,
    "SPOTIFY_API_RETRY_MAX_DELAY": lambda: settings.api.spotify_retry_max_delay,
    "SPOTIFY_API_MAX_RETRY_TIME": lambda: settings.api.spotify_max_retry_time,
    # Extraction settings
    "EXTRACTION_CONCURRENCY": lambda: settings.extraction.concurrency,
    "EXTRACTION_EXTENSIONS": lambda: settings.extraction.extensions,
    # Matching thresholds
    "MATCH_GOOD_BELOW": lambda: settings.matching.good_below,
    "MATCH_FAIR_BELOW": lambda: settings.matching.fair_below,
}


def get_config(key: str, default=None):
    """Get configuration value by flat key with optional default.

    Maps flat keys to the nested Pydantic settings structure. Useful where
    a plain value is needed at import time, e.g. decorator arguments.

    Args:
        key: Configuration key to retrieve
        default: Default value if key not found

    Returns:
        Configuration value or default

    Example:
        >>> retries = get_config("SPOTIFY_API_RETRY_COUNT", 3)
    """
    if key in _LEGACY_KEY_MAP:
        return _LEGACY_KEY_MAP[key]()

    return default
