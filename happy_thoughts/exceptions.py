"""
Happy Thoughts API - Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for each error kind the API reports.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) map them to
       HTTP status codes and render the response envelope.
Who:   Raised by services and dependencies; caught by global handlers.

Exception Hierarchy:
    HappyThoughtsError (base)
    ├── ValidationError       → 400 Bad Request
    ├── UnauthenticatedError  → 401 Unauthorized
    ├── ForbiddenError        → 403 Forbidden
    ├── NotFoundError         → 404 Not Found
    ├── ConflictError         → 409 Conflict
    └── DatabaseError         → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class HappyThoughtsError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(HappyThoughtsError):
    """
    Raised when client input fails validation.

    When:    Bad query parameter (hearts, sort, id) or a model-level rule
             such as the thought message length.
    HTTP:    400 Bad Request

    Example response:
        {
            "success": false,
            "response": {"field": "hearts"},
            "message": "Invalid 'hearts' parameter. Must be a number."
        }
    """

    status_code = 400

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


class UnauthenticatedError(HappyThoughtsError):
    """
    Raised when a request needs a user but carries no valid access token.

    HTTP:    401 Unauthorized
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized: Access token invalid or missing.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(HappyThoughtsError):
    """
    Raised when an authenticated user acts on a record they do not own.

    HTTP:    403 Forbidden
    """

    status_code = 403

    def __init__(
        self,
        message: str = "You are not allowed to modify this resource.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(HappyThoughtsError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing records; services convert that into
    NotFoundError so the handler layer stays free of status-code logic.
    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(HappyThoughtsError):
    """
    Raised when a write would duplicate a unique field.

    The user service translates the store's integrity violation into this
    error, so handlers never see driver-specific error codes.
    HTTP:    409 Conflict
    """

    status_code = 409

    def __init__(
        self,
        message: str = "A record with the same unique value already exists.",
        fields: Optional[list] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if fields:
            ctx["fields"] = fields
        super().__init__(message=message, context=ctx)
        self.fields = fields or []


class DatabaseError(HappyThoughtsError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic. Details (SQL,
    constraint names) are logged server-side only.
    HTTP:    500 Internal Server Error
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
