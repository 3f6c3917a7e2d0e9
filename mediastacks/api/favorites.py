"""FastAPI router exposing the favorites collection."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from mediastacks.schemas.favorites import FavoritesCollection
from mediastacks.schemas.media import MediaItem, MediaType
from mediastacks.services.dependencies import get_favorites_store
from mediastacks.services.favorites import FavoritesStore

router = APIRouter()


@router.get("", response_model=FavoritesCollection)
async def list_favorites(
    store: FavoritesStore = Depends(get_favorites_store),
) -> FavoritesCollection:
    """Return every saved item grouped by type."""

    return await store.load()


@router.post(
    "",
    response_model=FavoritesCollection,
    status_code=status.HTTP_201_CREATED,
)
async def add_favorite(
    item: MediaItem,
    store: FavoritesStore = Depends(get_favorites_store),
) -> FavoritesCollection:
    """Save a search result exactly as it was returned by the search endpoint.

    Duplicates and full categories are rejected with a 409 and leave the
    collection untouched.
    """

    return await store.add(item)


@router.delete("/{media_type}/{item_id}", response_model=FavoritesCollection)
async def remove_favorite(
    media_type: MediaType,
    item_id: str,
    store: FavoritesStore = Depends(get_favorites_store),
) -> FavoritesCollection:
    """Remove an item; removing something that is not saved is a no-op."""

    return await store.remove(media_type, item_id)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_favorites(
    store: FavoritesStore = Depends(get_favorites_store),
) -> Response:
    """Discard all favorites across every category."""

    await store.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
