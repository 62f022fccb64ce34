"""
MarkNotes Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured error responses with correct HTTP status codes.
Who:   Raised by stores and services; caught by global handlers.

Exception Hierarchy:
    MarkNotesError (base)
    ├── NotFoundError   → 404 Not Found (normal negative lookup result)
    ├── StorageError    → 503 Service Unavailable (persistence failed)
    └── RenderError     → 500 Internal Server Error (strict Markdown mode only)

A missing note is never reported as a StorageError, and a storage
failure is never reported as a missing note.
"""

from typing import Any, Dict, Optional


class MarkNotesError(Exception):
    """
    Base exception for all MarkNotes application errors.

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


class NotFoundError(MarkNotesError):
    """
    Raised when a requested resource does not exist.

    When:    find_by_id() with an id that was never returned by create().
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; the store converts that
    None into this exception so callers never receive an empty Note.
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


class StorageError(MarkNotesError):
    """
    Raised when the persistence layer cannot complete an operation.

    When:    Connection lost, database unreachable, constraint violation, I/O fault.
    HTTP:    503 Service Unavailable

    Security Note:
        The message returned to the client is always generic.
        The underlying driver error is logged server-side only.
    """

    def __init__(
        self,
        message: str = "The note store is temporarily unavailable. Please try again later.",
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message=message, context=ctx)
        self.operation = operation


class RenderError(MarkNotesError):
    """
    Raised when Markdown rendering fails and the renderer runs in strict mode.

    In the default (non-strict) mode the renderer falls back to the escaped
    source text instead, so this never reaches a client.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "The note content could not be rendered",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
