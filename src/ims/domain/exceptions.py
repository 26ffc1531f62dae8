"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PreconditionError(DomainException):
    """An operation is not allowed in the entity's current state."""


class InsufficientStockError(ValidationError):
    """An order asks for more units than a variation has in stock."""

    def __init__(self, product_name: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for {product_name} "
            f"(requested {requested}, available {available})"
        )
        self.product_name = product_name
        self.requested = requested
        self.available = available


class StoreError(DomainException):
    """The document store failed to read or write."""


class ConcurrentModificationError(StoreError):
    """A conditional write found a value other than the one expected."""

    def __init__(self, path: str, expected: object, actual: object) -> None:
        super().__init__(
            f"Value at '{path}' changed concurrently "
            f"(expected {expected!r}, found {actual!r})"
        )
        self.path = path
        self.expected = expected
        self.actual = actual
