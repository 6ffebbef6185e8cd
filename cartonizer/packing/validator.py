from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from cartonizer.domain.errors import ValidationError
from cartonizer.domain.items import EnrichedItem
from cartonizer.domain.measurements import Dimension, Weight
from cartonizer.domain.package import ratio
from cartonizer.domain.policy import PackingPolicy

MAX_ITEM_DIMENSION = Decimal(1000)
MAX_ITEM_WEIGHT = Decimal(1000)
# every unit becomes its own line inside the packer
MAX_TOTAL_UNITS = 5000


class BusinessRuleValidator:
    """Checks a whole request before any packing work starts.

    Category mixing and fragile separation are enforced here for the whole
    request: a request that breaks either rule is rejected outright.
    """

    def validate(self, items: Optional[Sequence[EnrichedItem]], policy: Optional[PackingPolicy]) -> None:
        if not items:
            raise ValidationError("Packing request must contain at least one item")
        if policy is None:
            raise ValidationError("Packing rules cannot be null")

        threshold = policy.max_utilization_threshold
        if threshold is None or threshold <= 0 or threshold > 1:
            raise ValidationError("Max utilization threshold must be between 0 and 1")

        self._validate_items(items)
        self._validate_compatibility(items, policy)

    def is_item_valid(self, item: Optional[EnrichedItem]) -> bool:
        if item is None:
            return False
        if not isinstance(item.sku, str) or not item.sku.strip():
            return False
        if isinstance(item.quantity, bool) or not isinstance(item.quantity, int) or item.quantity <= 0:
            return False
        if not isinstance(item.dimensions, Dimension) or item.dimensions.has_zero_or_negative_values():
            return False
        if not isinstance(item.weight, Weight) or item.weight.is_zero_or_negative():
            return False
        return True

    def can_pack_together(self, first: EnrichedItem, second: EnrichedItem, policy: PackingPolicy) -> bool:
        if not policy.allow_mixed_categories and first.category != second.category:
            return False
        if policy.separate_fragile_items and first.is_fragile != second.is_fragile:
            return False
        return True

    def exceeds_weight_threshold(
        self,
        total_weight: Optional[Decimal],
        max_weight: Optional[Decimal],
        threshold: Optional[Decimal],
    ) -> bool:
        if total_weight is None or max_weight is None or threshold is None or max_weight == 0:
            return True
        return ratio(total_weight, max_weight) > threshold

    def exceeds_volume_threshold(
        self,
        used_volume: Optional[Decimal],
        total_volume: Optional[Decimal],
        threshold: Optional[Decimal],
    ) -> bool:
        if used_volume is None or total_volume is None or threshold is None or total_volume == 0:
            return True
        return ratio(used_volume, total_volume) > threshold

    def _validate_items(self, items: Sequence[EnrichedItem]) -> None:
        total_units = 0
        for item in items:
            if not self.is_item_valid(item):
                raise ValidationError(f"Invalid item in packing request: {getattr(item, 'sku', None)!r}")
            if item.dimensions.largest_side > MAX_ITEM_DIMENSION:
                raise ValidationError(f"Item dimensions exceed maximum allowed size: {item.sku}")
            if item.weight.value > MAX_ITEM_WEIGHT:
                raise ValidationError(f"Item weight exceeds maximum allowed weight: {item.sku}")
            total_units += item.quantity

        if total_units > MAX_TOTAL_UNITS:
            raise ValidationError(f"Too many units in one request ({total_units} > {MAX_TOTAL_UNITS})")

    def _validate_compatibility(self, items: Sequence[EnrichedItem], policy: PackingPolicy) -> None:
        if not policy.allow_mixed_categories:
            if len({item.category for item in items}) > 1:
                raise ValidationError("Mixed categories not allowed according to packing rules")

        if policy.separate_fragile_items:
            fragile = {item.is_fragile for item in items}
            if len(fragile) > 1:
                raise ValidationError(
                    "Fragile and non-fragile items cannot be packed together according to packing rules"
                )
