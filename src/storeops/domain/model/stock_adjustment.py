"""StockAdjustment: an append-only ledger entry for a product's stock."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storeops.domain.exceptions import ValidationError


class AdjustmentReason(Enum):
    RESTOCK = "restock"
    DAMAGE = "damage"
    THEFT = "theft"
    RETURN = "return"
    CORRECTION = "correction"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | AdjustmentReason | None) -> AdjustmentReason:
        if isinstance(value, AdjustmentReason):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            allowed = ", ".join(r.value for r in cls)
            raise ValidationError(
                f"Unknown adjustment reason '{value}' (expected one of: {allowed})"
            ) from None


def validate_adjustment_quantity(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise ValidationError(
            f"Adjustment quantity must be an integer, got {type(quantity).__name__}"
        )
    if quantity == 0:
        raise ValidationError("Adjustment quantity cannot be zero")


@dataclass(frozen=True)
class StockAdjustment:
    """A signed change to one product's stock.

    Positive quantities add stock, negative ones remove it. Entries are
    never edited; a mistake is corrected by recording another adjustment.
    The one exception is ``stock_applied``, which flips to True once the
    product's stock has actually been moved by this entry.
    """

    id: int | None
    product_id: int
    quantity: int
    reason: AdjustmentReason
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    stock_applied: bool = False

    def __post_init__(self) -> None:
        validate_adjustment_quantity(self.quantity)

    @property
    def is_increase(self) -> bool:
        return self.quantity > 0
