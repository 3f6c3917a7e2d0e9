from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

import httpx

from mediastacks.errors import ConfigError, ValidationError
from mediastacks.providers.base import ProviderAdapter
from mediastacks.providers.discogs import AlbumAdapter
from mediastacks.providers.google_books import BookAdapter
from mediastacks.providers.tmdb import MovieAdapter
from mediastacks.settings import AppSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderEntry:
    category: str
    media_type: str
    build_adapter: Callable[[AppSettings, httpx.AsyncClient], ProviderAdapter]


PROVIDERS: dict[str, ProviderEntry] = {
    "movies": ProviderEntry(
        category="movies",
        media_type="movie",
        build_adapter=lambda settings, client: MovieAdapter(
            settings.movie_provider(), client
        ),
    ),
    "books": ProviderEntry(
        category="books",
        media_type="book",
        build_adapter=lambda settings, client: BookAdapter(
            settings.book_provider(), client
        ),
    ),
    "albums": ProviderEntry(
        category="albums",
        media_type="album",
        build_adapter=lambda settings, client: AlbumAdapter(
            settings.album_provider(), client
        ),
    ),
}


def get_provider(category: str) -> ProviderEntry:
    provider = PROVIDERS.get(category)
    if not provider:
        raise ValidationError(f"Unknown category: {category}")
    return provider


class AdapterRegistry:
    """Adapters built once per process, keyed by search category.

    Categories whose adapter failed to construct keep the :class:`ConfigError`
    so every search against them reports the same configuration failure
    without touching the network.
    """

    def __init__(
        self,
        adapters: dict[str, ProviderAdapter],
        failures: dict[str, ConfigError] | None = None,
    ) -> None:
        self._adapters = dict(adapters)
        self._failures = dict(failures or {})

    @classmethod
    def from_settings(
        cls, settings: AppSettings, http_client: httpx.AsyncClient
    ) -> AdapterRegistry:
        adapters: dict[str, ProviderAdapter] = {}
        failures: dict[str, ConfigError] = {}
        for category, entry in PROVIDERS.items():
            try:
                adapters[category] = entry.build_adapter(settings, http_client)
            except ConfigError as exc:
                logger.error(
                    "Provider configuration error for %s: %s", category, exc.message
                )
                failures[category] = exc
        return cls(adapters, failures)

    @property
    def categories(self) -> list[str]:
        return sorted(set(self._adapters) | set(self._failures))

    def resolve(self, category: str) -> ProviderAdapter:
        """Return the adapter for ``category`` or raise the stored failure."""

        get_provider(category)
        failure = self._failures.get(category)
        if failure is not None:
            raise failure
        adapter = self._adapters.get(category)
        if adapter is None:
            raise ValidationError(f"Unknown category: {category}")
        return adapter
