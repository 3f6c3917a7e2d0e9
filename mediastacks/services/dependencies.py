"""FastAPI dependency wiring for backend services.

Long-lived collaborators (the adapter registry and the favorites storage
backend) are created once in the application lifespan and parked on
``app.state``. The factories below only look them up, which keeps routers free
of construction logic and lets tests swap them via ``dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Request

from mediastacks.services.favorites import FavoritesStore
from mediastacks.services.search_service import SearchService


def get_search_service(request: Request) -> SearchService:
    """Provide a :class:`SearchService` bound to the process-wide registry."""

    return SearchService(request.app.state.adapter_registry)


def get_favorites_store(request: Request) -> FavoritesStore:
    """Provide a :class:`FavoritesStore` over the configured storage backend."""

    return FavoritesStore(request.app.state.favorites_storage)


__all__ = ["get_favorites_store", "get_search_service"]
