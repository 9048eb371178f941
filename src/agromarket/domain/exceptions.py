"""Domain-level exceptions.

All business rule violations and store failures are expressed as
subclasses of DomainException so the CLI layer can catch them uniformly
and display user-friendly messages.  Each class carries the status code
a request/response surface would answer with.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    status_code = 400


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    status_code = 404


class ForbiddenError(DomainException):
    """The requester does not own the entity it tried to change."""

    status_code = 403


class EmptyCartError(ValidationError):
    def __init__(self, message: str = "Order must contain at least one product") -> None:
        super().__init__(message)


class ProductNotFoundError(ValidationError):
    """One or more products referenced by a cart do not exist."""

    def __init__(self, missing_ids: list[str]) -> None:
        self.missing_ids = list(missing_ids)
        super().__init__(
            "Products not found: " + ", ".join(f"'{pid}'" for pid in self.missing_ids)
        )


class InsufficientStockError(ValidationError):
    def __init__(
        self,
        product_id: str,
        product_name: str,
        available: int,
        requested: int,
    ) -> None:
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {product_name}: "
            f"{available} available, {requested} requested"
        )


class InvalidTransitionError(ValidationError):
    def __init__(self, current: str, requested: str) -> None:
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move order from '{current}' to '{requested}'")


class MissingReasonError(ValidationError):
    def __init__(self, message: str = "A cancellation reason is required") -> None:
        super().__init__(message)


class InvalidStateError(ValidationError):
    """The entity exists but is not in a state that allows the operation."""


# ---------------------------------------------------------------------------
# Store failures
# ---------------------------------------------------------------------------


class StoreError(DomainException):
    """The backing store could not complete a unit of work."""

    status_code = 503


class StorageUnavailableError(StoreError):
    """The store could not be read or written."""


class StoreTimeoutError(StoreError):
    """The store did not become available within the configured timeout."""

    status_code = 504
