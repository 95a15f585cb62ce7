"""
PlotRegistry Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the error scenarios of the plot API.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    PlotRegistryError (base)
    ├── ValidationError   → 400 Bad Request (missing fields, bad enum, unknown target)
    ├── NotFoundError     → 404 Not Found (read misses)
    ├── ConflictError     → 409 Conflict (duplicate plot number, missing block)
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class PlotRegistryError(Exception):
    """
    Base exception for all PlotRegistry application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional info; returned as `details` for client errors,
                  only logged for server errors
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PlotRegistryError):
    """
    Raised when client input fails validation.

    When:    Required fields missing, enum value not allowed, non-positive area,
             or the plot targeted by an update/delete does not exist.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid unit for area!",
            "details": {"errors": [{"field": "areaUnit", "message": "Invalid unit for area!"}]}
        }
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


class NotFoundError(PlotRegistryError):
    """
    Raised when a read finds nothing.

    When:    GET /plots on an empty collection, GET /plots/{id} with an unknown id.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        message: str = "No plot found",
        resource: str = "plot",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(PlotRegistryError):
    """
    Raised when a write would break a referential or uniqueness rule.

    When:    blockId names no Block, or plotNumber already belongs to another plot
             (detected by lookup or by the unique index on plot_number).
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "Conflict with existing data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(PlotRegistryError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, driver errors, deadlocks.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; context
    (original exception type, ids) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
