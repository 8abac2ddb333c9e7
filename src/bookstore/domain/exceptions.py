"""Domain-level exceptions.

All failures the checkout flow can surface are subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Checkout input was rejected before any storage access.

    ``field`` names the offending form field when the failure is tied to
    one; cart-level failures leave it as None.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StorageError(DomainException):
    """A storage operation failed, or a rollback itself failed."""


class OrderCancelledError(DomainException):
    """Order placement was cancelled between storage operations."""


class DeadlineExceededError(DomainException):
    """Order placement ran past its deadline."""
