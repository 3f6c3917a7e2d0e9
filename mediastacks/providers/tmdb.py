# providers/tmdb.py

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from mediastacks.errors import ConfigError
from mediastacks.providers.base import (
    ProviderAdapter,
    UpstreamRecord,
    list_field,
    year_subtitle,
)
from mediastacks.schemas.media import MediaItem
from mediastacks.settings import MovieProviderConfig

TMDB_SEARCH_URL = "https://api.themoviedb.org/3/search/movie"
TMDB_POSTER_BASE_URL = "https://image.tmdb.org/t/p/w342"


class TmdbMovie(UpstreamRecord):
    id: int | str | None = None
    title: str | None = None
    release_date: str | None = None
    poster_path: str | None = None


class MovieAdapter(ProviderAdapter):
    name = "TMDB"
    media_type = "movie"
    record_model = TmdbMovie

    def __init__(
        self, config: MovieProviderConfig, http_client: httpx.AsyncClient
    ) -> None:
        if not config.api_key:
            raise ConfigError("Missing env var: TMDB_API_KEY")
        super().__init__(http_client)
        self._api_key = config.api_key

    def build_request(self, query: str) -> tuple[str, dict[str, Any], dict[str, str]]:
        params = {
            "query": query,
            "include_adult": "false",
            "language": "en-US",
            "page": "1",
            "api_key": self._api_key,
        }
        return TMDB_SEARCH_URL, params, {}

    def extract_records(self, payload: Mapping[str, Any]) -> list[Any]:
        return list_field(payload, "results")

    def to_item(self, record: TmdbMovie, raw: dict[str, Any]) -> MediaItem:
        poster = (
            f"{TMDB_POSTER_BASE_URL}{record.poster_path}" if record.poster_path else ""
        )
        return MediaItem(
            id=record.id,
            type="movie",
            title=record.title,
            subtitle=year_subtitle(record.release_date or None),
            image=poster,
            raw=raw,
        )
