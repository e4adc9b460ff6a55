"""Application configuration management using Pydantic Settings.

This module defines the `Settings` class, which loads configuration parameters
from environment variables and a `.env` file. It centralizes the values the
encoding pipeline treats as external contracts: the default (system) metadata
key set that decides the system/user partition, the local timezone used when
rendering timestamps, and the logging level of the package's own logger.

The `get_settings` function provides a cached, singleton instance of the
configuration. The encoder reads it once per call and threads the values
explicitly into each stage; no stage reads settings on its own.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict as _SettingsConfigDict

DEFAULT_METADATA_KEYS: tuple[str, ...] = (
    "application",
    "logger",
    "module",
    "function",
    "file",
    "line",
    "pid",
    "process_name",
    "thread_name",
    "crash_reason",
    "domain",
)


class Settings(BaseSettings):
    """Defines all configuration parameters of the encoder.

    Values are loaded from environment variables (or a `.env` file). List
    valued settings accept either a real list (from code/tests) or a
    comma-separated string (from the environment).
    """

    model_config = _SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Use Any type to prevent Pydantic Settings JSON decoding; validator converts to list[str]
    DEFAULT_METADATA_KEYS: Any = Field(
        default_factory=lambda: list(DEFAULT_METADATA_KEYS),
        description=(
            "Comma-separated metadata keys treated as system context. Entries with "
            "these keys are nested under metadata.context; every other key stays "
            "at the top level of the payload metadata."
        ),
    )
    LOCAL_TIMEZONE: Optional[str] = Field(
        default=None,
        description=(
            "IANA timezone name used when rendering structured timestamps "
            "(e.g. Europe/Amsterdam). Unset or blank uses the host local zone."
        ),
    )
    LOG_LEVEL: str = Field(default="WARNING", description="Logging level of the log_payload logger")

    @field_validator("DEFAULT_METADATA_KEYS", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: Any) -> list[str]:
        """Parse comma-separated string into list of stripped strings.

        Supports both direct list/set/tuple input and comma-separated string
        input. Empty strings result in an empty list (every key is then user
        metadata).
        """
        if isinstance(v, (list, tuple, set, frozenset)):
            return [str(s).strip() for s in v if str(s).strip()]
        if isinstance(v, str):
            if not v.strip():
                return []
            return [s.strip() for s in v.split(",") if s.strip()]
        return []

    @field_validator("LOCAL_TIMEZONE", mode="before")
    @classmethod
    def validate_timezone(cls, v: Any) -> Optional[str]:
        """Trim whitespace, normalize blank -> None and reject unknown zones."""
        if v is None:
            return None
        if isinstance(v, str):
            trimmed = v.strip()
            if not trimmed:
                return None
            try:
                ZoneInfo(trimmed)
            except (ZoneInfoNotFoundError, ValueError) as e:
                raise ValueError(f"Unknown timezone: {trimmed!r}") from e
            return trimmed
        raise ValueError("LOCAL_TIMEZONE must be a string")

    @property
    def default_keys(self) -> frozenset[str]:
        return frozenset(self.DEFAULT_METADATA_KEYS)

    @property
    def tzinfo(self) -> Optional[ZoneInfo]:
        """Configured zone, or None for the host local zone."""
        if self.LOCAL_TIMEZONE is None:
            return None
        return ZoneInfo(self.LOCAL_TIMEZONE)


@lru_cache(maxsize=1)
def get_settings() -> Settings:  # pragma: no cover - trivial
    """Return a cached, singleton instance of the encoder settings."""
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Apply LOG_LEVEL to the package logger.

    The library never installs handlers; output goes wherever the host
    application routes the `log_payload` logger.
    """
    settings = settings or get_settings()
    logging.getLogger("log_payload").setLevel(settings.LOG_LEVEL.upper())


__all__ = ["DEFAULT_METADATA_KEYS", "Settings", "configure_logging", "get_settings"]
