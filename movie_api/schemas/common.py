"""
Movie Catalog API — Shared Schema Types
=========================================

What:  Constrained field types reused by several schemas, plus the error and
       health response models.
"""

from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field, StringConstraints

from movie_api.models.types import SEPARATOR


def _reject_separator(value: str) -> str:
    """Genre names are stored comma-joined, so a comma inside one would split it."""
    if SEPARATOR in value:
        raise ValueError(f"must not contain '{SEPARATOR}'")
    return value


# A genre name as it appears in Genre.name and in every Movie.genres element.
# Whitespace is stripped before the length check, so "  " is rejected as empty.
GenreName = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=255),
    AfterValidator(_reject_separator),
]


def reject_null(value):
    """
    Shared `mode="before"` validator for PATCH payloads.

    Fields may be omitted, but an explicit null would try to write NULL into a
    NOT NULL column.
    """
    if value is None:
        raise ValueError("may be omitted but must not be null")
    return value


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models: one error format across all endpoints
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Movie with ID '42' was not found",
            "details": {"resource": "Movie", "resource_id": "42"},
            "request_id": "1f0c9a2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
