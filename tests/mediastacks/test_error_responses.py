"""Tests covering the helper utilities that construct error responses."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from mediastacks.errors import (
    CapacityError,
    ConfigError,
    DuplicateError,
    MediaStacksError,
    UpstreamError,
    ValidationError,
)
from mediastacks.schemas.error import ErrorType, ValidationErrorDetail
from mediastacks.utils import error_responses
from mediastacks.utils.error_responses import (
    build_error_response,
    build_validation_error_response,
    error_type_for,
    status_code_for,
)
from mediastacks.utils.request_context import (
    clear_request_id,
    get_request_id,
    set_request_id,
)


def _freeze_timestamp(monkeypatch: pytest.MonkeyPatch, fixed: datetime) -> None:
    """Override ``_current_timestamp`` to yield the provided ``datetime``."""

    monkeypatch.setattr(error_responses, "_current_timestamp", lambda: fixed)


def test_build_validation_error_response_includes_context_metadata(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """The helper should embed the request ID and a timezone-aware timestamp."""

    fixed_timestamp = datetime(2025, 1, 1, 12, 0, 0, tzinfo=UTC)
    _freeze_timestamp(monkeypatch, fixed_timestamp)

    token = set_request_id("req-123")
    try:
        errors = [
            ValidationErrorDetail(
                field="body.id",
                message="Field required",
                value=None,
            )
        ]

        response = build_validation_error_response(
            message="Request validation failed",
            status_code=422,
            path="/api/favorites",
            errors=errors,
        )

        assert response.request_id == "req-123"
        assert response.timestamp == fixed_timestamp
        assert response.errors == errors
        assert response.error_type is ErrorType.VALIDATION_ERROR
    finally:
        clear_request_id(token)


def test_build_error_response_allows_request_id_override(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Explicit request identifiers should take precedence over context values."""

    fixed_timestamp = datetime(2025, 1, 2, 6, 30, 0, tzinfo=UTC)
    _freeze_timestamp(monkeypatch, fixed_timestamp)

    clear_request_id()

    response = build_error_response(
        error_type=ErrorType.UPSTREAM_ERROR,
        message="TMDB request failed",
        status_code=500,
        path="/api/search/movies",
        upstream_status=401,
        request_id="override-id",
    )

    assert response.request_id == "override-id"
    assert response.timestamp == fixed_timestamp
    assert response.upstream_status == 401


def test_missing_request_id_serializes_as_null() -> None:
    clear_request_id()
    assert get_request_id() == ""

    response = build_error_response(
        error_type=ErrorType.INTERNAL_ERROR,
        message="Internal server error",
        status_code=500,
        path="/api/health",
    )

    assert response.model_dump(mode="json")["request_id"] is None


@pytest.mark.parametrize(
    ("exc", "error_type", "status_code"),
    [
        (ValidationError("Missing query param q"), ErrorType.VALIDATION_ERROR, 400),
        (ConfigError("Missing env var: TMDB_API_KEY"), ErrorType.CONFIG_ERROR, 500),
        (UpstreamError("Discogs request failed", status=429), ErrorType.UPSTREAM_ERROR, 500),
        (DuplicateError("movie", "1"), ErrorType.DUPLICATE_ERROR, 409),
        (CapacityError("book", 5), ErrorType.CAPACITY_ERROR, 409),
        (MediaStacksError("odd"), ErrorType.INTERNAL_ERROR, 500),
    ],
)
def test_exceptions_map_to_status_codes(
    exc: MediaStacksError, error_type: ErrorType, status_code: int
) -> None:
    assert error_type_for(exc) is error_type
    assert status_code_for(exc) == status_code
