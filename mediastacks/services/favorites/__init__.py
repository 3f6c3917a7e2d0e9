"""Favorites domain components split by responsibility.

:class:`FavoritesStore` owns the dedup/capacity state machine while the
storage backends isolate the medium the document is persisted to.
"""

from .storage import (
    FileStorage,
    MemoryStorage,
    RedisStorage,
    StorageBackend,
    build_storage,
)
from .store import FAVORITES_STORAGE_KEY, FavoritesStore

__all__ = [
    "FAVORITES_STORAGE_KEY",
    "FavoritesStore",
    "FileStorage",
    "MemoryStorage",
    "RedisStorage",
    "StorageBackend",
    "build_storage",
]
