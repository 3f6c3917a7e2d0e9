"""Centralized configuration management for the Media Stacks service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load a local .env before the settings singleton is built so credentials kept
# there are visible to every consumer importing :mod:`mediastacks.settings`.
load_dotenv()

# -- Application-wide constants -------------------------------------------------

DEFAULT_FAVORITES_PATH = "./data/favorites"
DEFAULT_REDIS_URL = "redis://localhost:6379/0"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_PORT = 5174


def _normalize_origin(origin: str) -> str:
    """Return the origin stripped of whitespace and trailing slashes."""

    return origin.strip().rstrip("/")


def _credential(value: str | None) -> str | None:
    """Strip ``value``; blank credentials count as unset."""

    if value is None:
        return None
    return value.strip() or None


@dataclass(frozen=True)
class MovieProviderConfig:
    api_key: str | None

    def __post_init__(self) -> None:
        object.__setattr__(self, "api_key", _credential(self.api_key))


@dataclass(frozen=True)
class BookProviderConfig:
    api_key: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "api_key", _credential(self.api_key))


@dataclass(frozen=True)
class AlbumProviderConfig:
    token: str | None
    user_agent: str | None

    def __post_init__(self) -> None:
        object.__setattr__(self, "token", _credential(self.token))
        object.__setattr__(self, "user_agent", _credential(self.user_agent))


class AppSettings(BaseSettings):
    """Typed configuration surface built on top of ``pydantic-settings``.

    Provider credentials are exposed as small frozen config objects so each
    adapter validates exactly what it needs in its constructor instead of
    reading the environment at request time.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    tmdb_api_key: str | None = Field(
        default=None,
        alias="TMDB_API_KEY",
        description="TMDB v3 API key. Required for movie search.",
    )
    google_books_api_key: str | None = Field(
        default=None,
        alias="GOOGLE_BOOKS_API_KEY",
        description="Optional Google Books key that raises the anonymous quota.",
    )
    discogs_token: str | None = Field(
        default=None,
        alias="DISCOGS_TOKEN",
        description="Discogs personal access token. Required for album search.",
    )
    discogs_user_agent: str | None = Field(
        default=None,
        alias="DISCOGS_USER_AGENT",
        description=(
            "Identifying User-Agent string Discogs requires on every request,"
            " e.g. 'MediaStacks/0.1 +https://example.com'."
        ),
    )
    favorites_backend: Literal["memory", "file", "redis"] = Field(
        default="file",
        alias="FAVORITES_BACKEND",
        description="Storage medium backing the favorites document.",
    )
    favorites_path: str = Field(
        default=DEFAULT_FAVORITES_PATH,
        alias="FAVORITES_PATH",
        description="Directory used by the file storage backend.",
    )
    redis_url: str = Field(
        default=DEFAULT_REDIS_URL,
        alias="REDIS_URL",
        description="Redis connection string used when FAVORITES_BACKEND=redis.",
    )
    upstream_timeout_seconds: float | None = Field(
        default=None,
        alias="UPSTREAM_TIMEOUT_SECONDS",
        description=(
            "Timeout applied to provider calls. Unset means searches wait for"
            " the upstream indefinitely."
        ),
    )
    cors_allow_origins_raw: str | None = Field(
        default=None,
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of allowed CORS origins; '*' when unset.",
    )
    log_level: str = Field(
        default=DEFAULT_LOG_LEVEL,
        alias="LOG_LEVEL",
        description="Root logging level (e.g. INFO, DEBUG, WARNING).",
    )

    def movie_provider(self) -> MovieProviderConfig:
        return MovieProviderConfig(api_key=self.tmdb_api_key)

    def book_provider(self) -> BookProviderConfig:
        return BookProviderConfig(api_key=self.google_books_api_key)

    def album_provider(self) -> AlbumProviderConfig:
        return AlbumProviderConfig(
            token=self.discogs_token,
            user_agent=self.discogs_user_agent,
        )

    @property
    def cors_allow_origins(self) -> list[str]:
        """Return normalised CORS origins, allowing everything when unset."""

        if not self.cors_allow_origins_raw:
            return ["*"]

        origins = [
            _normalize_origin(origin)
            for origin in self.cors_allow_origins_raw.split(",")
            if origin.strip()
        ]
        return [origin for origin in origins if origin] or ["*"]

    @property
    def log_level_numeric(self) -> int:
        """Translate ``log_level`` into the numeric constant expected by logging."""

        candidate = logging.getLevelName(self.log_level.upper())
        if isinstance(candidate, int):
            return candidate
        return logging.INFO

    def missing_credentials(self) -> list[str]:
        """Return the names of required provider credentials that are unset."""

        movie = self.movie_provider()
        album = self.album_provider()
        required = (
            ("TMDB_API_KEY", movie.api_key),
            ("DISCOGS_TOKEN", album.token),
            ("DISCOGS_USER_AGENT", album.user_agent),
        )
        return [name for name, value in required if value is None]

    def optional_config_warnings(self) -> list[str]:
        """Return human-readable warnings for configuration gaps."""

        warnings = [
            f"{name} is not set - the matching search category will fail"
            for name in self.missing_credentials()
        ]
        if self.favorites_backend == "memory":
            warnings.append(
                "FAVORITES_BACKEND=memory - favorites are lost when the process exits"
            )
        return warnings


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Return a cached instance of :class:`AppSettings`."""

    return AppSettings()


__all__ = [
    "AlbumProviderConfig",
    "AppSettings",
    "BookProviderConfig",
    "DEFAULT_FAVORITES_PATH",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_PORT",
    "DEFAULT_REDIS_URL",
    "MovieProviderConfig",
    "get_settings",
]
