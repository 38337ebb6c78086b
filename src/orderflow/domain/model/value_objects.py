"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Union

from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.numeric import round_money

DEFAULT_CURRENCY = "USD"


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def rounded(self) -> Money:
        """Return the amount rounded half-up to cents."""
        return Money(round_money(self.amount), self.currency)

    def times(self, factor: Decimal) -> Money:
        """Scale by a non-negative decimal factor, rounding to cents."""
        return Money(round_money(self.amount * factor), self.currency)

    def in_currency(self, currency: str) -> Money:
        """Relabel the amount (no conversion is performed)."""
        return Money(self.amount, currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0.00"), currency)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


# ---------------------------------------------------------------------------
# Product references
# ---------------------------------------------------------------------------

_OBJECT_ID = re.compile(r"^[0-9a-fA-F]{24}$")
_DIGITS = re.compile(r"^[0-9]+$")


def is_canonical_id(value: str) -> bool:
    """True if *value* has the shape of a canonical 24-hex identity."""
    return bool(_OBJECT_ID.match(value))


@dataclass(frozen=True)
class CanonicalId:
    """A product's primary identity (24 hexadecimal characters)."""

    value: str
    raw: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AlternateCode:
    """An external catalog code, numeric or free-form."""

    value: int | str
    raw: str

    def __str__(self) -> str:
        return str(self.value)


ProductRef = Union[CanonicalId, AlternateCode]


def parse_product_ref(raw: object) -> ProductRef:
    """Classify a client-supplied product reference.

    The stripped text as presented is kept in ``raw`` so lookups can be
    reported back under the key the caller used.
    """
    if raw is None or isinstance(raw, bool):
        raise ValidationError("Product reference is required")
    text = str(raw).strip()
    if not text:
        raise ValidationError("Product reference is required")
    if is_canonical_id(text):
        return CanonicalId(value=text.lower(), raw=text)
    if _DIGITS.match(text):
        return AlternateCode(value=int(text), raw=text)
    return AlternateCode(value=text, raw=text)
