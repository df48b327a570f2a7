"""
Product API — Custom Exception Hierarchy
=========================================

What:  Application-specific exceptions for the error scenarios of the API.
How:   Each exception class carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the fixed JSON error bodies with the right status code.
Who:   Raised by the data mapper and the payload decoder; caught by the
       global handlers.

Exception Hierarchy:
    ProductAPIError (base)
    ├── InvalidPayloadError  → 400 Bad Request
    ├── NotFoundError        → 404 Not Found
    └── DatabaseError        → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class ProductAPIError(Exception):
    """
    Base exception for all Product API errors.

    Attributes:
        message:  Human-readable error description
        context:  Additional debug info (logged, NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InvalidPayloadError(ProductAPIError):
    """
    Raised when a request body does not decode into a product payload.

    When:    Body is not JSON, not an object, missing a field, or a field has
             the wrong JSON type.
    HTTP:    400 Bad Request, body {"error": "Invalid request payload"}
    """

    def __init__(
        self,
        message: str = "Invalid request payload",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(ProductAPIError):
    """
    Raised when a requested product does not exist.

    SQLAlchemy returns None for missing rows; the data mapper converts that
    into this exception so handlers never branch on None.
    HTTP:    404 Not Found, body {"error": "Product not found"}
    """

    def __init__(
        self,
        resource: str = "product",
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


class DatabaseError(ProductAPIError):
    """
    Raised when a store operation fails unexpectedly.

    When:    Connection lost mid-query, constraint violation, failed commit.
    HTTP:    500 Internal Server Error

    The client only ever sees a generic body; the original error type and
    the affected id are kept in `context` for the server log.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
