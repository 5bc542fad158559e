"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed or out-of-range input."""


class NotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(DomainException):
    """A reservation asks for more units than are currently available."""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock (need {requested}, have {available} available)"
        )
        self.requested = requested
        self.available = available


class StockConflictError(DomainException):
    """The stock row changed between read and write (lost compare-and-swap)."""


class OrderConflictError(DomainException):
    """An order changed between the read a stock delta was based on and its write."""


class CompensationFailure(DomainException):
    """Stock was adjusted, the order step failed, and the rollback failed too.

    The stock register and the order store now disagree and must be
    reconciled by hand.
    """

    def __init__(self, delta: int, original: Exception, rollback_error: Exception) -> None:
        super().__init__(
            f"Stock delta {delta:+d} could not be reversed after order failure "
            f"({original}); rollback error: {rollback_error}"
        )
        self.delta = delta
        self.original = original
        self.rollback_error = rollback_error
