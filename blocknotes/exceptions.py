"""
BlockNotes — Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for the API server and the client side.
Why:   Each error class maps to one HTTP status code (server) or one banner
       state (client controllers), without leaking internal details.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) translate the
       server-side ones into structured JSON error responses.

Exception Hierarchy:
    BlockNotesError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    │   └── BlockShapeError      → persisted content that cannot be normalized
    ├── NotFoundError            → 404 Not Found
    ├── DatabaseError            → 500 Internal Server Error
    ├── RateLimitExceededError   → 429 Too Many Requests
    └── ApiRequestError          → raised by the HTTP client, never by the server
"""

from typing import Any, Dict, Optional


class BlockNotesError(Exception):
    """
    Base exception for all BlockNotes errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlockNotesError):
    """
    Raised when client input fails validation.

    When:    Missing note id, id that is not a valid UUID.
    HTTP:    400 Bad Request

    Body schema errors (wrong field types) are left to FastAPI's own 422
    handling; this class covers the business rules on identifiers.
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


class BlockShapeError(ValidationError):
    """
    Raised when stored note content cannot be turned into blocks.

    Recoverable problems (a todo whose content is not an object, a heading
    level out of range) are normalized to the block type's defaults; this
    error is reserved for entries that are not objects at all or that carry
    an unknown type tag.
    """

    def __init__(
        self,
        message: str = "Note content contains an unsupported block",
        position: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if position is not None:
            ctx["position"] = position
        super().__init__(message=message, field="content", context=ctx)
        self.position = position


class NotFoundError(BlockNotesError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE on a note id that has no record.
    HTTP:    404 Not Found
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


class DatabaseError(BlockNotesError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic; the SQLAlchemy
    error is logged server-side only.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(BlockNotesError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    HTTP:    429 Too Many Requests, with a Retry-After header.
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class ApiRequestError(BlockNotesError):
    """
    Raised by NotesApiClient when a request fails.

    Covers both transport failures (connection refused, timeout; status_code
    is None) and non-2xx responses. Controllers turn it into their error
    banner; nothing retries automatically.
    """

    def __init__(
        self,
        message: str = "Request to the notes API failed",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
