"""
Notes API — Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for the outcomes callers must tell apart.
How:   Each exception class carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching HTTP status.
Who:   NotFoundError and StoreError are raised by NoteStore; ValidationError by
       NoteService and the routes; RateLimitExceededError by middleware callers.

Exception Hierarchy:
    NotesAPIError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── NotFoundError            → 404 Not Found
    ├── StoreError               → 500 Internal Server Error
    └── RateLimitExceededError   → 429 Too Many Requests
"""

from typing import Any, Dict, Optional


class NotesAPIError(Exception):
    """
    Base exception for all Notes API errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, not returned for 5xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesAPIError):
    """
    Raised when client input fails validation.

    When:    Malformed body, unparseable note id, blank title, empty patch.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Title cannot be empty",
            "details": {"field": "title"}
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


class NotFoundError(NotesAPIError):
    """
    Raised when a requested resource does not exist.

    When:    get/update/delete on a note id that was never issued or was deleted.
    HTTP:    404 Not Found

    This is the only domain-level failure of the store. It is recoverable and
    never indicates a bug.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class StoreError(NotesAPIError):
    """
    Raised when the note store cannot complete an operation.

    When:    Id space exhausted, or an invariant of the store is violated.
    HTTP:    500 Internal Server Error

    The client always receives a generic message; the context is logged
    server-side only. Not retried automatically: the store keeps no
    partial-failure state.
    """

    def __init__(
        self,
        message: str = "The note store could not complete the operation.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(NotesAPIError):
    """
    Raised when a client exceeds the per-client request rate limit.

    HTTP:    429 Too Many Requests

    Response includes:
        - retry_after: Seconds until the oldest request leaves the window
        - Retry-After header for HTTP-compliant clients
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Too many requests. Please wait {retry_after} seconds before retrying."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
