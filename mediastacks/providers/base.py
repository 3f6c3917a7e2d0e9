# providers/base.py

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from mediastacks.errors import ProviderError
from mediastacks.schemas.media import MediaItem

logger = logging.getLogger(__name__)

MAX_RESULTS = 20


class UpstreamRecord(BaseModel):
    """Base for per-provider decoding models.

    Every field on a subclass is optional with an explicit fallback, and
    unknown upstream fields are ignored.
    """

    model_config = ConfigDict(extra="ignore")


def parse_body(response: httpx.Response) -> tuple[Any, bool]:
    """Decode ``response`` as JSON, wrapping anything else as a diagnostic.

    Returns the payload together with a flag telling whether structured
    parsing succeeded. Providers occasionally answer with HTML error pages,
    which end up as ``{"raw": <text>}``.
    """

    text = response.text
    try:
        return json.loads(text), True
    except ValueError:
        return {"raw": text}, False


def list_field(payload: Mapping[str, Any], key: str) -> list[Any]:
    """Return ``payload[key]`` when it is a list, otherwise an empty list."""

    value = payload.get(key)
    return value if isinstance(value, list) else []


def year_subtitle(value: Any) -> str:
    """Format a year (or an ISO date string) as ``"(YYYY)"``."""

    if value is None:
        return ""
    year = str(value)[:4]
    if not year:
        return ""
    return f"({year})"


class ProviderAdapter(ABC):
    """Translate one upstream catalog into :class:`MediaItem` results.

    Subclasses validate their configuration in ``__init__`` and raise
    :class:`~mediastacks.errors.ConfigError` there, so a constructed adapter is
    always able to issue requests.
    """

    name: str
    media_type: str
    record_model: type[UpstreamRecord]

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self._http = http_client

    @abstractmethod
    def build_request(self, query: str) -> tuple[str, dict[str, Any], dict[str, str]]:
        """Return ``(url, params, headers)`` for a search request."""
        raise NotImplementedError

    @abstractmethod
    def extract_records(self, payload: Mapping[str, Any]) -> list[Any]:
        """Pull the list of raw result records out of a decoded response."""
        raise NotImplementedError

    @abstractmethod
    def to_item(self, record: UpstreamRecord, raw: dict[str, Any]) -> MediaItem:
        """Normalize one decoded record."""
        raise NotImplementedError

    async def search(self, query: str) -> list[MediaItem]:
        """Search the provider and return at most :data:`MAX_RESULTS` items.

        Raises :class:`ProviderError` when the upstream call fails or its body
        cannot be used.
        """

        url, params, headers = self.build_request(query)
        logger.debug("%s search query=%r", self.name, query)
        payload = await self._get_json(url, params=params, headers=headers)

        items: list[MediaItem] = []
        for raw in self.extract_records(payload):
            item = self._normalize(raw)
            if item is None:
                continue
            items.append(item)
            if len(items) == MAX_RESULTS:
                break
        return items

    def _normalize(self, raw: Any) -> MediaItem | None:
        if not isinstance(raw, dict):
            logger.debug("%s skipped non-object record: %r", self.name, raw)
            return None
        try:
            record = self.record_model.model_validate(raw)
            return self.to_item(record, raw)
        except PydanticValidationError as exc:
            logger.debug("%s skipped undecodable record: %s", self.name, exc)
            return None

    async def _get_json(
        self,
        url: str,
        *,
        params: dict[str, Any],
        headers: dict[str, str],
    ) -> Mapping[str, Any]:
        message = f"{self.name} request failed"
        try:
            response = await self._http.get(url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("%s transport error: %s", self.name, exc)
            raise ProviderError(message, details=str(exc)) from exc

        payload, structured = parse_body(response)
        if not response.is_success:
            logger.warning(
                "%s error: status=%s details=%s",
                self.name,
                response.status_code,
                payload,
            )
            raise ProviderError(message, status=response.status_code, details=payload)

        if not structured or not isinstance(payload, dict):
            logger.warning(
                "%s returned an unparseable payload: status=%s details=%.500s",
                self.name,
                response.status_code,
                payload,
            )
            raise ProviderError(message, status=response.status_code, details=payload)

        return payload
