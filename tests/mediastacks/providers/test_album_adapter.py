"""Tests for the Discogs album adapter."""

from __future__ import annotations

import httpx
import pytest

from mediastacks.errors import ConfigError, UpstreamError
from mediastacks.providers.discogs import AlbumAdapter
from mediastacks.settings import AlbumProviderConfig
from tests.mediastacks.support.http import (
    ClientFactory,
    RecordingTransport,
    json_responder,
    text_responder,
)

USER_AGENT = "MediaStacksTests/0.1 +https://example.com"


def _adapter(
    client: httpx.AsyncClient,
    *,
    token: str | None = "discogs-token",
    user_agent: str | None = USER_AGENT,
) -> AlbumAdapter:
    config = AlbumProviderConfig(token=token, user_agent=user_agent)
    return AlbumAdapter(config, client)


@pytest.mark.parametrize(
    ("token", "user_agent", "missing"),
    [
        (None, USER_AGENT, "DISCOGS_TOKEN"),
        ("discogs-token", None, "DISCOGS_USER_AGENT"),
        ("", "", "DISCOGS_TOKEN"),
        ("   ", USER_AGENT, "DISCOGS_TOKEN"),
        ("discogs-token", " \t", "DISCOGS_USER_AGENT"),
    ],
)
@pytest.mark.asyncio
async def test_both_credentials_are_required(
    http_client_for: ClientFactory,
    token: str | None,
    user_agent: str | None,
    missing: str,
) -> None:
    """Either missing credential is a configuration error naming the variable."""
    transport = RecordingTransport(json_responder({"results": []}))

    with pytest.raises(ConfigError) as excinfo:
        _adapter(http_client_for(transport), token=token, user_agent=user_agent)

    assert excinfo.value.message == f"Missing env var: {missing}"
    assert transport.calls == 0


@pytest.mark.asyncio
async def test_request_carries_identity_headers_and_album_filters(
    http_client_for: ClientFactory,
) -> None:
    transport = RecordingTransport(json_responder({"results": []}))

    await _adapter(http_client_for(transport)).search("daft punk")

    request = transport.requests[0]
    assert request.headers["User-Agent"] == USER_AGENT
    assert request.headers["Authorization"] == "Discogs token=discogs-token"
    params = request.url.params
    assert params["q"] == "daft punk"
    assert params["type"] == "master"
    assert params["format"] == "album"
    assert params["per_page"] == "20"
    assert params["page"] == "1"


@pytest.mark.asyncio
async def test_subtitle_prefers_year_then_first_format(
    http_client_for: ClientFactory,
) -> None:
    results = [
        {
            "id": 1,
            "title": "Daft Punk - Discovery",
            "year": "2001",
            "format": ["Vinyl", "LP"],
            "cover_image": "https://img.discogs.example/discovery.jpg",
        },
        {"id": 2, "title": "Daft Punk - Alive", "format": ["CD", "Album"]},
        {"id": 3, "title": "Daft Punk - Unknown"},
    ]
    transport = RecordingTransport(json_responder({"results": results}))

    discovery, alive, unknown = await _adapter(http_client_for(transport)).search("daft punk")

    assert discovery.subtitle == "(2001)"
    assert discovery.image == "https://img.discogs.example/discovery.jpg"
    assert discovery.id == "1"
    assert alive.subtitle == "CD"
    assert alive.image == ""
    assert unknown.subtitle == ""


@pytest.mark.asyncio
async def test_numeric_year_is_formatted(http_client_for: ClientFactory) -> None:
    transport = RecordingTransport(
        json_responder({"results": [{"id": 9, "title": "Homework", "year": 1997}]})
    )

    [item] = await _adapter(http_client_for(transport)).search("homework")

    assert item.subtitle == "(1997)"


@pytest.mark.asyncio
async def test_html_error_page_is_kept_as_raw_details(
    http_client_for: ClientFactory,
) -> None:
    """Discogs sometimes answers errors with HTML; it is wrapped, not re-raised."""
    transport = RecordingTransport(
        text_responder("<html><body>Bad Gateway</body></html>", status_code=502)
    )

    with pytest.raises(UpstreamError) as excinfo:
        await _adapter(http_client_for(transport)).search("daft punk")

    assert excinfo.value.message == "Discogs request failed"
    assert excinfo.value.status == 502
    assert excinfo.value.details == {"raw": "<html><body>Bad Gateway</body></html>"}


@pytest.mark.asyncio
async def test_empty_results(http_client_for: ClientFactory) -> None:
    transport = RecordingTransport(json_responder({"pagination": {}, "results": []}))

    assert await _adapter(http_client_for(transport)).search("nothing") == []
