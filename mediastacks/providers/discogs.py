# providers/discogs.py

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import Field

from mediastacks.errors import ConfigError
from mediastacks.providers.base import (
    ProviderAdapter,
    UpstreamRecord,
    list_field,
    year_subtitle,
)
from mediastacks.schemas.media import MediaItem
from mediastacks.settings import AlbumProviderConfig

DISCOGS_SEARCH_URL = "https://api.discogs.com/database/search"


class DiscogsResult(UpstreamRecord):
    id: int | str | None = None
    title: str | None = None
    year: int | str | None = None
    formats: list[str] | None = Field(default=None, alias="format")
    cover_image: str | None = None


class AlbumAdapter(ProviderAdapter):
    """Discogs database search restricted to album masters.

    ``type=master`` and ``format=album`` trade some recall for far fewer
    singles and compilations in the results.
    """

    name = "Discogs"
    media_type = "album"
    record_model = DiscogsResult

    def __init__(
        self, config: AlbumProviderConfig, http_client: httpx.AsyncClient
    ) -> None:
        if not config.token:
            raise ConfigError("Missing env var: DISCOGS_TOKEN")
        if not config.user_agent:
            raise ConfigError("Missing env var: DISCOGS_USER_AGENT")
        super().__init__(http_client)
        self._token = config.token
        self._user_agent = config.user_agent

    def build_request(self, query: str) -> tuple[str, dict[str, Any], dict[str, str]]:
        params = {
            "q": query,
            "per_page": "20",
            "page": "1",
            "type": "master",
            "format": "album",
        }
        headers = {
            "User-Agent": self._user_agent,
            "Authorization": f"Discogs token={self._token}",
        }
        return DISCOGS_SEARCH_URL, params, headers

    def extract_records(self, payload: Mapping[str, Any]) -> list[Any]:
        return list_field(payload, "results")

    def to_item(self, record: DiscogsResult, raw: dict[str, Any]) -> MediaItem:
        if record.year:
            subtitle = year_subtitle(record.year)
        else:
            subtitle = record.formats[0] if record.formats else ""
        return MediaItem(
            id=record.id,
            type="album",
            title=record.title,
            subtitle=subtitle,
            image=record.cover_image or "",
            raw=raw,
        )
