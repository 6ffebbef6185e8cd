from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from cartonizer.domain.measurements import to_decimal

DEFAULT_MAX_UTILIZATION = Decimal("0.95")


@dataclass(frozen=True)
class PackingPolicy:
    optimize_for_minimum_boxes: bool = True
    allow_mixed_categories: bool = True
    separate_fragile_items: bool = True
    max_utilization_threshold: Optional[Decimal] = DEFAULT_MAX_UTILIZATION

    def __post_init__(self):
        # range checks belong to BusinessRuleValidator
        threshold = self.max_utilization_threshold
        if threshold is None:
            threshold = DEFAULT_MAX_UTILIZATION
        object.__setattr__(self, "max_utilization_threshold", to_decimal(threshold))
        for name in ("optimize_for_minimum_boxes", "allow_mixed_categories", "separate_fragile_items"):
            value = getattr(self, name)
            object.__setattr__(self, name, True if value is None else bool(value))

    @classmethod
    def default(cls) -> "PackingPolicy":
        return cls()
