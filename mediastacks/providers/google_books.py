# providers/google_books.py

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import Field

from mediastacks.providers.base import ProviderAdapter, UpstreamRecord, list_field
from mediastacks.schemas.media import MediaItem
from mediastacks.settings import BookProviderConfig

GOOGLE_BOOKS_SEARCH_URL = "https://www.googleapis.com/books/v1/volumes"


class ImageLinks(UpstreamRecord):
    thumbnail: str | None = None
    small_thumbnail: str | None = Field(default=None, alias="smallThumbnail")


class VolumeInfo(UpstreamRecord):
    title: str | None = None
    authors: list[str] | None = None
    image_links: ImageLinks | None = Field(default=None, alias="imageLinks")


class GoogleVolume(UpstreamRecord):
    id: str | None = None
    volume_info: VolumeInfo | None = Field(default=None, alias="volumeInfo")


class BookAdapter(ProviderAdapter):
    """Google Books volumes search. The API key is optional."""

    name = "Google Books"
    media_type = "book"
    record_model = GoogleVolume

    def __init__(
        self, config: BookProviderConfig, http_client: httpx.AsyncClient
    ) -> None:
        super().__init__(http_client)
        self._api_key = config.api_key

    def build_request(self, query: str) -> tuple[str, dict[str, Any], dict[str, str]]:
        params = {"q": query, "maxResults": "20"}
        if self._api_key:
            params["key"] = self._api_key
        return GOOGLE_BOOKS_SEARCH_URL, params, {}

    def extract_records(self, payload: Mapping[str, Any]) -> list[Any]:
        return list_field(payload, "items")

    def to_item(self, record: GoogleVolume, raw: dict[str, Any]) -> MediaItem:
        info = record.volume_info or VolumeInfo()
        links = info.image_links or ImageLinks()
        return MediaItem(
            id=record.id,
            type="book",
            title=info.title,
            subtitle=", ".join(info.authors) if info.authors else "",
            image=links.thumbnail or links.small_thumbnail or "",
            raw=raw,
        )
