from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from cartonizer.domain.carton import Carton
from cartonizer.domain.errors import ConstraintViolationError
from cartonizer.domain.items import EnrichedItem
from cartonizer.domain.measurements import DimensionUnit, WeightUnit, conversion_factor, convert_volume
from cartonizer.domain.policy import PackingPolicy

RATIO = Decimal("0.0001")


def ratio(numerator: Decimal, denominator: Decimal) -> Decimal:
    return (numerator / denominator).quantize(RATIO, rounding=ROUND_HALF_UP)


class Package:
    """One bin being filled: a carton plus what has been assigned to it.

    Only aggregate weight and volume are tracked, never item positions. Weight
    is kept in the carton's weight unit and volume in its dimension unit.
    Items are never removed once added.
    """

    def __init__(self, carton: Carton):
        self._carton = carton
        self._items: list[EnrichedItem] = []
        self.current_weight = Decimal(0)
        self.used_volume = Decimal(0)

    @property
    def carton(self) -> Carton:
        return self._carton

    @property
    def items(self) -> tuple[EnrichedItem, ...]:
        return tuple(self._items)

    @property
    def carton_volume(self) -> Decimal:
        return self._carton.dimensions.volume

    def _item_weight(self, item: EnrichedItem) -> Decimal:
        return item.weight.convert_to(self._carton.max_weight.unit).value

    def _item_volume(self, item: EnrichedItem) -> Decimal:
        return item.dimensions.convert_to(self._carton.dimensions.unit).volume

    def can_add_item(self, item: EnrichedItem, policy: PackingPolicy) -> bool:
        carton = self._carton
        if not carton.can_fit_item(item.dimensions, item.weight):
            return False

        if self.current_weight + self._item_weight(item) > carton.max_weight.value:
            return False

        carton_volume = self.carton_volume
        if carton_volume <= 0:
            return False
        if ratio(self.used_volume + self._item_volume(item), carton_volume) > policy.max_utilization_threshold:
            return False

        if policy.separate_fragile_items:
            if any(existing.is_fragile != item.is_fragile for existing in self._items):
                return False

        if not policy.allow_mixed_categories:
            if any(existing.category != item.category for existing in self._items):
                return False

        return True

    def add_item(self, item: EnrichedItem, policy: PackingPolicy) -> None:
        if not self.can_add_item(item, policy):
            raise ConstraintViolationError(f"Cannot add item to package: {item.sku}")
        self._items.append(item)
        self.current_weight += self._item_weight(item)
        self.used_volume += self._item_volume(item)

    @property
    def utilization(self) -> Decimal:
        carton_volume = self.carton_volume
        if carton_volume == 0:
            return Decimal(0)
        return ratio(self.used_volume, carton_volume)

    @property
    def remaining_volume(self) -> Decimal:
        return self.carton_volume - self.used_volume

    def weight_in(self, unit: WeightUnit) -> Decimal:
        return self.current_weight * conversion_factor(self._carton.max_weight.unit, unit)

    def used_volume_in(self, unit: DimensionUnit) -> Decimal:
        return convert_volume(self.used_volume, self._carton.dimensions.unit, unit)

    def carton_volume_in(self, unit: DimensionUnit) -> Decimal:
        return convert_volume(self.carton_volume, self._carton.dimensions.unit, unit)

    def remaining_volume_in(self, unit: DimensionUnit) -> Decimal:
        return convert_volume(self.remaining_volume, self._carton.dimensions.unit, unit)

    @property
    def remaining_weight(self) -> Decimal:
        return self._carton.max_weight.value - self.current_weight

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items)

    @property
    def is_fragile(self) -> bool:
        return any(item.is_fragile for item in self._items)

    def grouped_items(self) -> list[tuple[EnrichedItem, int]]:
        """Items merged by sku in first-seen order, with their summed quantity."""
        merged: dict[str, list] = {}
        for item in self._items:
            entry = merged.setdefault(item.sku, [item, 0])
            entry[1] += item.quantity
        return [(item, quantity) for item, quantity in merged.values()]

    def __repr__(self) -> str:
        return f"Package(carton={self._carton.name!r}, items={self.item_count}, utilization={self.utilization})"
