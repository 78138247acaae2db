"""
ContactBook Backend — Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for the failures a request can hit.
Why:   Each failure ends the request exactly once. Raising (instead of writing
       an error body and carrying on) guarantees that an error response and a
       success response are never both produced for one request.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) map them to
       structured JSON error responses with the right HTTP status code.
Who:   Raised by ContactRepository and the route body parser; caught by handlers.

Exception Hierarchy:
    ContactBookError (base)      → 500 Internal Server Error
    ├── ValidationError          → 400 Bad Request (client can fix)
    └── DatabaseError            → 500 Internal Server Error

Not-found is deliberately absent: a missing contact is reported as a `null`
document (GET/PUT) or a plain success message (DELETE), never as an error.
"""

from typing import Any, Dict, Optional


class ContactBookError(Exception):
    """
    Base exception for all ContactBook application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged; only returned for ValidationError)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ContactBookError):
    """
    Raised when client input cannot be used.

    When:    Malformed contact ID, non-object or unparsable body,
             unsupported request content type.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "'abc' is not a valid contact ID",
            "details": {"field": "contact_id"}
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


class DatabaseError(ContactBookError):
    """
    Raised when a document-store operation fails.

    What:    An insert, query, update or delete against the contacts table failed.
    When:    Connection lost, pool exhausted, constraint violation, etc.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        The driver error type and operation name are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
