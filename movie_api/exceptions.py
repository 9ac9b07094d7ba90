"""
Movie Catalog API — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the error scenarios of the catalog.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    MovieCatalogError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    ├── ConflictError     → 409 Conflict
    └── DatabaseError     → 500 Internal Server Error

Not-found policy:
    Every lookup by id on a missing row raises NotFoundError. Services never
    return None to signal absence.
"""

from typing import Any, Dict, Optional


class MovieCatalogError(Exception):
    """
    Base exception for all catalog application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only selectively returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MovieCatalogError):
    """
    Raised when client input fails a business rule.

    HTTP:    400 Bad Request

    Schema-level problems (wrong types, missing fields) are caught earlier by
    FastAPI's RequestValidationError, which main.py maps to the same 400 shape.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(MovieCatalogError):
    """
    Raised when a requested resource does not exist.

    When:    ListOne*/Update*/Delete* with an id that has no row.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(MovieCatalogError):
    """
    Raised when a write would break a uniqueness rule.

    When:    AddGenre/UpdateGenre with a name another genre already holds.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "The resource conflicts with an existing one",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(MovieCatalogError):
    """
    Raised when database operations fail unexpectedly.

    What:    A query, insert, or update failed (connection lost, deadlock, ...).
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the context
    (operation name, original exception type) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
