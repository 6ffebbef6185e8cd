from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Union

from cartonizer.domain.errors import NonPositiveValueError

Number = Union[Decimal, int, float, str]

CENTS = Decimal("0.01")
INCHES_TO_CM = Decimal("2.54")
POUNDS_TO_KG = Decimal("0.453592")


class DimensionUnit(str, Enum):
    INCHES = "INCHES"
    CENTIMETERS = "CENTIMETERS"

    @classmethod
    def parse(cls, raw: "str | DimensionUnit") -> "DimensionUnit":
        if isinstance(raw, cls):
            return raw
        key = str(raw).strip().upper()
        key = _DIMENSION_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unknown dimension unit: {raw}") from None


class WeightUnit(str, Enum):
    POUNDS = "POUNDS"
    KILOGRAMS = "KILOGRAMS"

    @classmethod
    def parse(cls, raw: "str | WeightUnit") -> "WeightUnit":
        if isinstance(raw, cls):
            return raw
        key = str(raw).strip().upper()
        key = _WEIGHT_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unknown weight unit: {raw}") from None


_DIMENSION_ALIASES = {"IN": "INCHES", "INCH": "INCHES", "CM": "CENTIMETERS", "CENTIMETER": "CENTIMETERS"}
_WEIGHT_ALIASES = {"LB": "POUNDS", "LBS": "POUNDS", "POUND": "POUNDS", "KG": "KILOGRAMS", "KILOGRAM": "KILOGRAMS"}

# Only these pairs convert; any other pair falls back to a factor of 1.
_CONVERSION_FACTORS: dict[tuple[Enum, Enum], Decimal] = {
    (DimensionUnit.INCHES, DimensionUnit.CENTIMETERS): INCHES_TO_CM,
    (DimensionUnit.CENTIMETERS, DimensionUnit.INCHES): (Decimal(1) / INCHES_TO_CM).quantize(
        Decimal("0.0001"), rounding=ROUND_HALF_UP
    ),
    (WeightUnit.POUNDS, WeightUnit.KILOGRAMS): POUNDS_TO_KG,
    (WeightUnit.KILOGRAMS, WeightUnit.POUNDS): (Decimal(1) / POUNDS_TO_KG).quantize(
        Decimal("0.000001"), rounding=ROUND_HALF_UP
    ),
}


def conversion_factor(source: Enum, target: Enum) -> Decimal:
    if source == target:
        return Decimal(1)
    return _CONVERSION_FACTORS.get((source, target), Decimal(1))


def convert_volume(volume: Decimal, source: DimensionUnit, target: DimensionUnit) -> Decimal:
    """Rescale a cubic volume between dimension units."""
    return volume * conversion_factor(source, target) ** 3


def to_decimal(value: Number | None) -> Decimal | None:
    if value is None or isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() keeps 0.1 as 0.1 instead of its binary expansion
        return Decimal(str(value))
    return Decimal(value)


def _require_positive(value: Number | None, name: str) -> Decimal:
    number = to_decimal(value)
    if number is None or not number.is_finite() or number <= 0:
        raise NonPositiveValueError(f"{name} must be positive")
    return number


@dataclass(frozen=True)
class Dimension:
    """Bounding box of an item or the inside of a carton."""

    length: Decimal
    width: Decimal
    height: Decimal
    unit: DimensionUnit = DimensionUnit.INCHES

    def __post_init__(self):
        object.__setattr__(self, "length", _require_positive(self.length, "Length"))
        object.__setattr__(self, "width", _require_positive(self.width, "Width"))
        object.__setattr__(self, "height", _require_positive(self.height, "Height"))
        object.__setattr__(self, "unit", DimensionUnit.parse(self.unit))

    @property
    def volume(self) -> Decimal:
        return (self.length * self.width * self.height).quantize(CENTS, rounding=ROUND_HALF_UP)

    @property
    def largest_side(self) -> Decimal:
        return max(self.length, self.width, self.height)

    def sorted_sides(self) -> list[Decimal]:
        return sorted((self.length, self.width, self.height))

    def convert_to(self, unit: DimensionUnit) -> "Dimension":
        unit = DimensionUnit.parse(unit)
        if unit == self.unit:
            return self
        factor = conversion_factor(self.unit, unit)
        return Dimension(self.length * factor, self.width * factor, self.height * factor, unit)

    def can_contain(self, other: "Dimension") -> bool:
        """True if ``other`` fits inside in some axis-aligned orientation."""
        inner = other.convert_to(self.unit).sorted_sides()
        outer = self.sorted_sides()
        return all(i <= o for i, o in zip(inner, outer))

    def has_zero_or_negative_values(self) -> bool:
        return min(self.length, self.width, self.height) <= 0

    def to_dict(self) -> dict:
        return {
            "length": float(self.length),
            "width": float(self.width),
            "height": float(self.height),
            "unit": self.unit.value,
        }


@dataclass(frozen=True)
class Weight:
    value: Decimal
    unit: WeightUnit = WeightUnit.POUNDS

    def __post_init__(self):
        object.__setattr__(self, "value", _require_positive(self.value, "Weight value"))
        object.__setattr__(self, "unit", WeightUnit.parse(self.unit))

    def convert_to(self, unit: WeightUnit) -> "Weight":
        unit = WeightUnit.parse(unit)
        if unit == self.unit:
            return self
        return Weight(self.value * conversion_factor(self.unit, unit), unit)

    def is_greater_than(self, other: "Weight") -> bool:
        return self.value > other.convert_to(self.unit).value

    def times(self, quantity: int) -> "Weight":
        return Weight(self.value * quantity, self.unit)

    def is_zero_or_negative(self) -> bool:
        return self.value <= 0

    def to_dict(self) -> dict:
        return {"value": float(self.value), "unit": self.unit.value}
