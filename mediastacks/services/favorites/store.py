"""Persisted favorites collection with dedup and capacity guards.

Every mutation is a read-modify-write of one JSON document stored under
:data:`FAVORITES_STORAGE_KEY`:

* ``load`` never raises for missing or corrupt data; both read as empty.
* ``add`` rejects duplicates (string match on ``id`` within the item's
  category) and full categories before anything is written.
* ``remove`` and ``clear`` always succeed.

There is no locking. Two writers interleaving their read-modify-write cycles
can lose an update; the service assumes a single user session.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError as PydanticValidationError

from mediastacks.errors import CapacityError, DuplicateError, ValidationError
from mediastacks.schemas.favorites import FAVORITES_CAPACITY, FavoritesCollection
from mediastacks.schemas.media import MEDIA_TYPES, MediaItem
from mediastacks.services.favorites.storage import StorageBackend

logger = logging.getLogger(__name__)

FAVORITES_STORAGE_KEY = "mediaStacks.favorites.v1"


class FavoritesStore:
    """Add/remove/list operations over the persisted favorites document."""

    def __init__(
        self,
        storage: StorageBackend,
        *,
        key: str = FAVORITES_STORAGE_KEY,
        capacity: int = FAVORITES_CAPACITY,
    ) -> None:
        self._storage = storage
        self._key = key
        self._capacity = capacity

    @property
    def capacity(self) -> int:
        return self._capacity

    async def load(self) -> FavoritesCollection:
        """Return the persisted collection, or an empty one."""

        payload = await self._storage.get(self._key)
        if payload is None:
            return FavoritesCollection()

        try:
            document = json.loads(payload)
        except (ValueError, UnicodeDecodeError):
            logger.warning("Discarding unparseable favorites document under %s", self._key)
            return FavoritesCollection()

        if not isinstance(document, dict):
            logger.warning("Discarding non-object favorites document under %s", self._key)
            return FavoritesCollection()

        try:
            return FavoritesCollection.model_validate(document)
        except PydanticValidationError as exc:
            logger.warning(
                "Discarding malformed favorites document under %s: %s",
                self._key,
                exc.error_count(),
            )
            return FavoritesCollection()

    async def add(self, item: MediaItem) -> FavoritesCollection:
        """Append ``item`` to its category and persist the whole collection."""

        collection = await self.load()
        media_type = item.type
        existing = collection.items_for(media_type)

        if any(str(saved.id) == str(item.id) for saved in existing):
            raise DuplicateError(media_type, item.id)
        if len(existing) >= self._capacity:
            raise CapacityError(media_type, self._capacity)

        updated = collection.with_items(media_type, [*existing, item])
        await self._save(updated)
        logger.info("Added %s %s to favorites", media_type, item.id)
        return updated

    async def remove(self, media_type: str, item_id: str | int) -> FavoritesCollection:
        """Drop every item in ``media_type`` whose id matches ``item_id``."""

        if media_type not in MEDIA_TYPES:
            raise ValidationError(f"Unknown favorites category: {media_type}")

        collection = await self.load()
        target = str(item_id)
        remaining = [
            saved for saved in collection.items_for(media_type) if str(saved.id) != target
        ]
        updated = collection.with_items(media_type, remaining)
        await self._save(updated)
        return updated

    async def clear(self) -> None:
        """Discard every saved favorite."""

        await self._storage.delete(self._key)
        logger.info("Cleared all favorites")

    async def _save(self, collection: FavoritesCollection) -> None:
        encoded = collection.model_dump_json().encode("utf-8")
        await self._storage.set(self._key, encoded)
