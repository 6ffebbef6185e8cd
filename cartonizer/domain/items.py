from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Optional

from cartonizer.domain.errors import ValidationError
from cartonizer.domain.measurements import Dimension, Weight


@dataclass(frozen=True)
class RequestedItem:
    """One order line as it arrives: a sku and how many of it."""

    sku: str
    quantity: int

    def __post_init__(self):
        if not isinstance(self.sku, str) or not self.sku.strip():
            raise ValidationError("SKU cannot be null or empty")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity <= 0:
            raise ValidationError("Quantity must be positive")


@dataclass(frozen=True)
class EnrichedItem:
    """A requested line with its physical attributes attached.

    ``weight`` and ``dimensions`` describe a single unit. Construction does not
    validate; ``BusinessRuleValidator`` decides whether an item is usable so a
    request with a missing attribute is rejected as a whole.
    """

    sku: str
    quantity: int
    dimensions: Optional[Dimension]
    weight: Optional[Weight]
    category: str = "UNKNOWN"
    fragile: bool = False

    @property
    def is_fragile(self) -> bool:
        return self.fragile is True

    @property
    def total_volume(self) -> Decimal:
        return self.dimensions.volume * self.quantity

    @property
    def total_weight(self) -> Weight:
        return self.weight.times(self.quantity)

    def split_units(self) -> list["EnrichedItem"]:
        if self.quantity == 1:
            return [self]
        unit = replace(self, quantity=1)
        return [unit] * self.quantity

    def to_dict(self) -> dict:
        return {
            "sku": self.sku,
            "quantity": self.quantity,
            "dimensions": self.dimensions.to_dict() if self.dimensions else None,
            "weight": self.weight.to_dict() if self.weight else None,
            "category": self.category,
            "fragile": self.is_fragile,
        }
