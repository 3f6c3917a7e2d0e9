"""Pydantic schema for the persisted favorites document."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from mediastacks.schemas.media import MediaItem

FAVORITES_CAPACITY = 5


class FavoritesCollection(BaseModel):
    """Category-partitioned favorites, each list kept in insertion order."""

    movie: list[MediaItem] = Field(default_factory=list)
    book: list[MediaItem] = Field(default_factory=list)
    album: list[MediaItem] = Field(default_factory=list)

    @field_validator("movie", "book", "album", mode="before")
    @classmethod
    def _non_list_is_empty(cls, value: Any) -> Any:
        """Treat any non-list category value as an empty category."""

        if not isinstance(value, list):
            return []
        return value

    def items_for(self, media_type: str) -> list[MediaItem]:
        return list(getattr(self, media_type))

    def with_items(self, media_type: str, items: list[MediaItem]) -> FavoritesCollection:
        """Return a copy with ``media_type`` replaced by ``items``."""

        return self.model_copy(update={media_type: list(items)})
