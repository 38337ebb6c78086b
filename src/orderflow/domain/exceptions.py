"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each class carries a ``kind`` so callers can tell "out of stock" apart from
"try again later" without inspecting messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    kind = "domain"


class ValidationError(DomainException):
    """A business rule or invariant was violated, or the input was malformed."""

    kind = "validation"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = "not_found"


class InsufficientStockError(DomainException):
    """The requested quantity exceeds the stock available at commit time."""

    kind = "insufficient_stock"

    def __init__(self, product_name: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for {product_name} "
            f"(need {requested}, have {available} available)"
        )
        self.product_name = product_name
        self.requested = requested
        self.available = available


class ServerError(DomainException):
    """An unexpected failure (storage, transaction infrastructure).

    The message is generic on purpose; the original exception is chained
    and logged where it was caught.
    """

    kind = "server"
