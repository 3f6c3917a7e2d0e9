"""Canonical item schema every provider response is normalized into."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

MediaType = Literal["movie", "book", "album"]

MEDIA_TYPES: tuple[str, ...] = ("movie", "book", "album")

UNTITLED = "Untitled"


class MediaItem(BaseModel):
    """Provider-agnostic search result.

    ``id`` is only unique within its provider, so ``(type, id)`` is the identity
    used by the favorites store.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Provider-scoped identifier, always a string")
    type: MediaType = Field(..., description="Kind of media the item represents")
    title: str = Field(UNTITLED, description="Display title")
    subtitle: str = Field(
        "",
        description="Year for movies and albums, comma-joined authors for books",
    )
    image: str = Field("", description="Artwork URL, empty when none exists")
    raw: dict[str, Any] = Field(
        default_factory=dict,
        description="Untouched upstream record retained for later use",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        if value is None:
            raise ValueError("id is required")
        return str(value)

    @field_validator("title", mode="before")
    @classmethod
    def _default_title(cls, value: Any) -> str:
        if value is None or (isinstance(value, str) and not value):
            return UNTITLED
        return value


class SearchResponse(BaseModel):
    """Envelope returned by ``GET /api/search/{category}``."""

    items: list[MediaItem] = Field(default_factory=list)
