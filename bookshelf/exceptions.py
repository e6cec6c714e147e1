"""
Bookshelf Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for the record managers and routes.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   ConflictError / InvalidReferenceError are raised by services;
       NotFoundError is raised by routes only.

Exception Hierarchy:
    BookshelfError (base)
    ├── ConflictError           → 409 Conflict (uniqueness, blocked delete)
    ├── InvalidReferenceError   → 400 Bad Request (missing related record)
    └── NotFoundError           → 404 Not Found

Absence is not an error at the service layer: `find_one` and `update`
return None, `remove` returns False. Only the request boundary converts
absence into NotFoundError.
"""

from typing import Any, Dict, Optional


class BookshelfError(Exception):
    """
    Base exception for all Bookshelf application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned as `details` where useful)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ConflictError(BookshelfError):
    """
    Raised when a write would violate a record invariant.

    When:    Duplicate author name pair on create, duplicate ISBN on
             create/update, deleting an author that still has books.
    HTTP:    409 Conflict

    Never retried; the same request will keep failing until the conflicting
    state changes.
    """

    def __init__(
        self,
        message: str = "Resource conflict",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidReferenceError(BookshelfError):
    """
    Raised when a required related record does not exist.

    When:    A book is created or updated with an authorId that matches no
             author.
    HTTP:    400 Bad Request

    Distinct from ConflictError: the client sent a stale or malformed
    reference, it did not collide with existing state.
    """

    def __init__(
        self,
        message: str = "Referenced resource does not exist",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(BookshelfError):
    """
    Raised by the routes when a service reports absence.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)
