"""Failure taxonomy for storefront operations.

Every error carries a ``kind`` (the classification surfaced to clients) and
the HTTP status it maps to. Messages are safe to show to end users.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    kind = "Internal"
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class Unauthenticated(StorefrontError):
    """Raised when a request carries no resolvable principal."""

    kind = "Unauthenticated"
    status_code = 401

    def __init__(self, message: str = "Please login to access this resource"):
        super().__init__(message)


class Unauthorized(StorefrontError):
    """Raised when the principal's role does not allow the operation."""

    kind = "Unauthorized"
    status_code = 403

    def __init__(self, message: str = "You are not authorized to perform this action"):
        super().__init__(message)


class NotFound(StorefrontError):
    kind = "NotFound"
    status_code = 404


class NoOrders(StorefrontError):
    """Raised by the admin order report when no user has an active order."""

    kind = "NoOrders"
    status_code = 404

    def __init__(self, message: str = "No orders found"):
        super().__init__(message)


class InvalidInput(StorefrontError):
    kind = "InvalidInput"
    status_code = 400


class InsufficientStock(StorefrontError):
    """Raised when a reservation asks for more units than are in stock."""

    kind = "InsufficientStock"
    status_code = 409

    def __init__(self, product_id: str, requested: int, available: int):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(f"Insufficient stock: requested {requested}, only {available} available")


class Conflict(StorefrontError):
    kind = "Conflict"
    status_code = 409


class Internal(StorefrontError):
    kind = "Internal"
    status_code = 500

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)


def classify(exc: Exception) -> StorefrontError:
    """Translate any exception into a storefront error.

    Framework validation and lookup failures keep their meaning; anything
    else becomes an opaque ``Internal`` error.
    """
    if isinstance(exc, StorefrontError):
        return exc
    if isinstance(exc, ValidationError):
        return InvalidInput(_flatten_messages(exc.messages))
    if isinstance(exc, ObjectNotFoundError):
        return NotFound("Resource not found")
    return Internal()


def _flatten_messages(messages) -> str:
    if not isinstance(messages, dict):
        return str(messages)
    parts = []
    for field, errors in messages.items():
        if isinstance(errors, list | tuple):
            parts.extend(f"{field}: {error}" for error in errors)
        else:
            parts.append(f"{field}: {errors}")
    return "; ".join(parts) or "Invalid input"
