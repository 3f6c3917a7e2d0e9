"""Helpers for constructing structured API error responses.

Every handler in :mod:`mediastacks.main` goes through these builders so the
request ID and a timezone-aware timestamp are embedded consistently.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from mediastacks.errors import (
    CapacityError,
    ConfigError,
    DuplicateError,
    MediaStacksError,
    UpstreamError,
    ValidationError,
)
from mediastacks.schemas.error import (
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
    ValidationErrorResponse,
)
from mediastacks.utils.request_context import get_request_id

__all__ = [
    "build_error_response",
    "build_validation_error_response",
    "error_type_for",
    "status_code_for",
]

_ERROR_MAPPING: tuple[tuple[type[MediaStacksError], ErrorType, int], ...] = (
    (ValidationError, ErrorType.VALIDATION_ERROR, 400),
    (ConfigError, ErrorType.CONFIG_ERROR, 500),
    (UpstreamError, ErrorType.UPSTREAM_ERROR, 500),
    (DuplicateError, ErrorType.DUPLICATE_ERROR, 409),
    (CapacityError, ErrorType.CAPACITY_ERROR, 409),
)


def _current_timestamp() -> datetime:
    """Return a timezone-aware timestamp for error payloads.

    Kept as a separate helper so tests can monkeypatch the clock.
    """

    return datetime.now(UTC)


def error_type_for(exc: MediaStacksError) -> ErrorType:
    for error_class, error_type, _ in _ERROR_MAPPING:
        if isinstance(exc, error_class):
            return error_type
    return ErrorType.INTERNAL_ERROR


def status_code_for(exc: MediaStacksError) -> int:
    for error_class, _, status_code in _ERROR_MAPPING:
        if isinstance(exc, error_class):
            return status_code
    return 500


def build_validation_error_response(
    *,
    errors: Sequence[ValidationErrorDetail],
    message: str,
    status_code: int,
    path: str,
    request_id: str | None = None,
) -> ValidationErrorResponse:
    """Construct a ``ValidationErrorResponse`` enriched with metadata."""

    resolved_request_id = request_id or get_request_id()
    return ValidationErrorResponse(
        error=message,
        status_code=status_code,
        timestamp=_current_timestamp(),
        request_id=resolved_request_id or None,
        path=path,
        errors=list(errors),
    )


def build_error_response(
    *,
    error_type: ErrorType,
    message: str,
    status_code: int,
    path: str,
    upstream_status: int | None = None,
    request_id: str | None = None,
) -> ErrorResponse:
    """Construct a generic ``ErrorResponse`` enriched with metadata."""

    resolved_request_id = request_id or get_request_id()
    return ErrorResponse(
        error=message,
        error_type=error_type,
        status_code=status_code,
        upstream_status=upstream_status,
        timestamp=_current_timestamp(),
        request_id=resolved_request_id or None,
        path=path,
    )
