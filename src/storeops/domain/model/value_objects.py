"""Money and Quantity, the two scalar types every price calculation uses.

Both are frozen and validate on construction, so a Money or Quantity
that exists is always usable in arithmetic.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from storeops.domain.exceptions import ValidationError

CENT = Decimal("0.01")


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, order=True)
class Money:
    """A dollar amount at cent precision, never negative.

    Construction rounds half-up to the cent. Line subtotals are rounded
    once, so an order total always equals the sum of the printed lines.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        amount = self.amount
        if not isinstance(amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(amount).__name__}"
            )
        if not amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {amount}")
        if amount.is_signed() and amount != 0:
            raise ValidationError(f"Money amount cannot be negative, got {amount}")
        object.__setattr__(self, "amount", abs(amount).quantize(CENT, ROUND_HALF_UP))

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, count: int) -> Money:
        if not _is_int(count):
            raise TypeError(f"Money can only be scaled by an int, not {type(count).__name__}")
        return Money(self.amount * count)

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    @classmethod
    def zero(cls) -> Money:
        return cls(Decimal(0))

    @classmethod
    def of(cls, raw: str | float | int | Decimal) -> Money:
        """Parse user or record input (``"15"``, ``9.99``, ``Decimal``)."""
        if isinstance(raw, bool):
            raise ValidationError(f"Invalid money amount: {raw!r}")
        try:
            amount = raw if isinstance(raw, Decimal) else Decimal(str(raw).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError(f"Invalid money amount: {raw!r}") from None
        return cls(amount)

    @classmethod
    def total(cls, amounts: Iterable[Money]) -> Money:
        return sum(amounts, cls.zero())


@dataclass(frozen=True)
class Quantity:
    """How many units of a product an order line asks for (at least one)."""

    value: int

    def __post_init__(self) -> None:
        if not _is_int(self.value):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise ValidationError(f"Quantity must be positive, got {self.value}")

    def __str__(self) -> str:
        return f"{self.value}"
