"""Exception taxonomy shared by the search and favorites layers.

Every error raised by the core derives from :class:`MediaStacksError` so the
FastAPI exception handlers and the CLI can translate failures into short,
user-facing messages without inspecting provider internals.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "CapacityError",
    "ConfigError",
    "DuplicateError",
    "FavoritesError",
    "MediaStacksError",
    "ProviderError",
    "UpstreamError",
    "ValidationError",
]


class MediaStacksError(Exception):
    """Base class carrying a human-readable ``message``."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(MediaStacksError):
    """Caller-supplied input was rejected before any provider was contacted."""


class ConfigError(MediaStacksError):
    """A credential required by a provider is not configured."""


class UpstreamError(MediaStacksError):
    """An external catalog failed or answered with an unusable payload.

    ``status`` is the upstream HTTP status code when a response was received
    (``None`` for transport failures). ``details`` holds whatever diagnostic
    body could be obtained and is only ever logged.
    """

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.details = details


ProviderError = UpstreamError


class FavoritesError(MediaStacksError):
    """Recoverable rejection of a favorites mutation."""


class DuplicateError(FavoritesError):
    """The item is already saved in its category."""

    def __init__(self, media_type: str, item_id: str) -> None:
        super().__init__("Already in favorites.")
        self.media_type = media_type
        self.item_id = item_id


class CapacityError(FavoritesError):
    """The category already holds the maximum number of items."""

    def __init__(self, media_type: str, limit: int) -> None:
        super().__init__(f"You already have {limit} {media_type}s. Remove one first.")
        self.media_type = media_type
        self.limit = limit
