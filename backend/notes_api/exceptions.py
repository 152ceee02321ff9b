"""
Notes API — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions, one per failure a request can end in.
How:   Each exception class carries a client-safe message, a fixed HTTP status
       and an optional context dict. Global exception handlers (registered in
       main.py) turn them into `{"error": message}` JSON responses.
Who:   Raised by the auth gate, validators and services; caught by handlers.

Exception Hierarchy:
    NotesApiError (base)
    ├── MissingAuthError        → 401 Unauthorized
    ├── UnauthorizedError       → 401 Unauthorized
    ├── MethodNotAllowedError   → 405 Method Not Allowed
    ├── ValidationError         → 400 Bad Request
    ├── QueryError              → 500 Internal Server Error
    └── InternalServerError     → 500 Internal Server Error

`message` is returned to the client verbatim. `context` is logged server-side
only and may contain store error details, so it never reaches a response body.
"""

from typing import Any, Dict, Optional


class NotesApiError(Exception):
    """
    Base exception for all Notes API errors.

    Attributes:
        message:     User-facing error description (safe to return in API response)
        context:     Additional debug info (logged but NOT returned to client)
        status_code: HTTP status the global handler responds with
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class MissingAuthError(NotesApiError):
    """
    Raised when the request carries no `Authorization` header.

    HTTP: 401 Unauthorized
    """

    status_code = 401

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Missing authorization header", context=context)


class UnauthorizedError(NotesApiError):
    """
    Raised when the identity service rejects the bearer token or returns no user.

    HTTP: 401 Unauthorized

    The reason (expired, malformed, revoked) is kept in `context`; the client
    only ever sees "Unauthorized".
    """

    status_code = 401

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Unauthorized", context=context)


class MethodNotAllowedError(NotesApiError):
    """
    Raised when an endpoint is called with a verb it does not support.

    HTTP: 405 Method Not Allowed
    """

    status_code = 405

    def __init__(self, method: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        if method:
            ctx["method"] = method
        super().__init__(message="Method not allowed", context=ctx)


class ValidationError(NotesApiError):
    """
    Raised when client input fails validation.

    When:  Missing title/content on create, malformed pagination parameters.
    HTTP:  400 Bad Request

    Example response:
        {"error": "Title and content are required"}
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


class QueryError(NotesApiError):
    """
    Raised when the store reports an error for a read or insert.

    HTTP:  500 Internal Server Error

    Security Note:
        The message is always generic ("Failed to fetch notes",
        "Failed to create note"). PostgREST error payloads name tables,
        columns and constraints; they are logged from `context` only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Query failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InternalServerError(NotesApiError):
    """
    Catch-all for failures that are not the client's fault and not a store
    error: malformed JSON bodies, missing configuration, unexpected exceptions.

    HTTP: 500 Internal Server Error
    """

    status_code = 500

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message="Internal server error", context=context)
