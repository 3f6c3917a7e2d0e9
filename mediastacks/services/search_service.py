from __future__ import annotations

import logging

from mediastacks.errors import ValidationError
from mediastacks.providers.registry import AdapterRegistry
from mediastacks.schemas.media import SearchResponse

logger = logging.getLogger(__name__)

MISSING_QUERY_MESSAGE = "Missing query param q"


class SearchService:
    """Validate a search request and dispatch it to one provider adapter.

    A failing provider never falls back to another one; ``ConfigError`` and
    ``UpstreamError`` propagate to the caller unchanged.
    """

    def __init__(self, registry: AdapterRegistry) -> None:
        self._registry = registry

    async def handle(self, category: str, raw_query: str | None) -> SearchResponse:
        query = (raw_query or "").strip()
        if not query:
            raise ValidationError(MISSING_QUERY_MESSAGE)

        adapter = self._registry.resolve(category)
        items = await adapter.search(query)
        logger.info(
            "Search category=%s query=%r returned %d item(s)",
            category,
            query,
            len(items),
        )
        return SearchResponse(items=items)
