"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed arguments or a violated business rule."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(DomainException):
    """Not enough stock of one product to satisfy a request."""

    def __init__(self, product_id: str, required: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for '{product_id}' "
            f"(required {required}, available {available})"
        )
        self.product_id = product_id
        self.required = required
        self.available = available


class InvalidStateError(DomainException):
    """An operation is not allowed in the entity's current lifecycle state."""


class UnsupportedOperationError(DomainException):
    """The store does not support the requested operation."""


class StorageError(DomainException):
    """Reading or writing the backing files failed."""
