from fastapi import APIRouter, Depends, Query

from mediastacks.schemas.media import SearchResponse
from mediastacks.services.dependencies import get_search_service
from mediastacks.services.search_service import SearchService

router = APIRouter()


@router.get("/{category}", response_model=SearchResponse)
async def search_catalog(
    category: str,
    q: str = Query("", description="Free-text query sent to the provider."),
    service: SearchService = Depends(get_search_service),
) -> SearchResponse:
    """Search one external catalog and return normalized items.

    ``category`` is one of ``movies``, ``books`` or ``albums``. Unknown
    categories and blank queries are rejected with a 400; provider and
    configuration failures surface as a 500 with a short message.

    Examples:
        /api/search/movies?q=batman
        /api/search/books?q=harry%20potter
        /api/search/albums?q=daft%20punk
    """

    return await service.handle(category, q)
