"""Pydantic schemas for API responses."""

from mediastacks.schemas.error import (  # noqa: F401
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from mediastacks.schemas.favorites import (  # noqa: F401
    FAVORITES_CAPACITY,
    FavoritesCollection,
)
from mediastacks.schemas.media import (  # noqa: F401
    MEDIA_TYPES,
    MediaItem,
    MediaType,
    SearchResponse,
)
