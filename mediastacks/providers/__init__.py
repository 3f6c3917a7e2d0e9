"""Adapters translating external catalogs into :class:`MediaItem` results."""

from mediastacks.errors import ProviderError
from mediastacks.providers.base import MAX_RESULTS, ProviderAdapter
from mediastacks.providers.discogs import AlbumAdapter
from mediastacks.providers.google_books import BookAdapter
from mediastacks.providers.registry import PROVIDERS, AdapterRegistry, get_provider
from mediastacks.providers.tmdb import MovieAdapter

__all__ = [
    "AdapterRegistry",
    "AlbumAdapter",
    "BookAdapter",
    "MAX_RESULTS",
    "MovieAdapter",
    "PROVIDERS",
    "ProviderError",
    "ProviderAdapter",
    "get_provider",
]
