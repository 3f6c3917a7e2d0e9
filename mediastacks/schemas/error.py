"""Error response schemas for consistent error handling."""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorType(str, Enum):
    """Types of errors that can occur."""

    VALIDATION_ERROR = "validation_error"
    CONFIG_ERROR = "config_error"
    UPSTREAM_ERROR = "upstream_error"
    DUPLICATE_ERROR = "duplicate_error"
    CAPACITY_ERROR = "capacity_error"
    NOT_FOUND = "not_found"
    INTERNAL_ERROR = "internal_error"


class ErrorResponse(BaseModel):
    """Standardized error response model.

    ``error`` is the short, user-facing status message. Upstream bodies and
    stack traces never appear here; they are written to the logs instead.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "Discogs request failed",
                "error_type": "upstream_error",
                "status_code": 500,
                "upstream_status": 429,
                "timestamp": "2025-11-03T10:30:00Z",
                "request_id": "0b6f1b0e-0c55-4c3f-9d0f-1c1b3f3f0b1a",
                "path": "/api/search/albums",
            }
        }
    )

    error: str = Field(..., description="Human-readable error message")
    error_type: ErrorType = Field(..., description="Category of error")
    status_code: int = Field(..., description="HTTP status code")
    upstream_status: int | None = Field(
        None, description="Status code returned by the external catalog, if any"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="When error occurred"
    )
    request_id: str | None = Field(None, description="Unique request identifier for tracking")
    path: str | None = Field(None, description="Request path that caused the error")


class ValidationErrorDetail(BaseModel):
    """Details for validation errors."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")
    value: Any = Field(None, description="Value that failed validation")


class ValidationErrorResponse(ErrorResponse):
    """Extended error response for request body and parameter validation."""

    error_type: ErrorType = Field(default=ErrorType.VALIDATION_ERROR)
    errors: list[ValidationErrorDetail] = Field(
        default_factory=list, description="List of validation errors"
    )
