from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from cartonizer.domain.carton import Carton
from cartonizer.domain.measurements import DimensionUnit, WeightUnit
from cartonizer.domain.package import Package
from cartonizer.domain.solution import PackingSolution


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- requests ---

class ItemModel(CamelModel):
    sku: str = Field(min_length=1, max_length=64)
    quantity: int = Field(gt=0)


class PackingRequest(CamelModel):
    items: List[ItemModel] = Field(min_length=1)
    order_id: Optional[str] = Field(default=None, max_length=50)
    optimize_for_minimum_boxes: bool = True
    allow_mixed_categories: bool = True


class CartonIn(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    length: Decimal = Field(gt=0)
    width: Decimal = Field(gt=0)
    height: Decimal = Field(gt=0)
    dimension_unit: DimensionUnit = DimensionUnit.INCHES
    max_weight: Decimal = Field(gt=0)
    weight_unit: WeightUnit = WeightUnit.POUNDS

    @field_validator("dimension_unit", mode="before")
    @classmethod
    def parse_dimension_unit(cls, v):
        return DimensionUnit.parse(v)

    @field_validator("weight_unit", mode="before")
    @classmethod
    def parse_weight_unit(cls, v):
        return WeightUnit.parse(v)


class LoginIn(BaseModel):
    username: str
    password: str


# --- responses ---

class DimensionOut(CamelModel):
    length: float
    width: float
    height: float
    unit: str


class WeightOut(CamelModel):
    value: float
    unit: str


class CartonOut(CamelModel):
    id: str
    name: str
    dimensions: DimensionOut
    max_weight: WeightOut
    volume: float
    status: str
    created_at: datetime
    updated_at: datetime


class PackedItemOut(CamelModel):
    sku: str
    quantity: int
    category: str
    fragile: bool


class PackageOut(CamelModel):
    carton_id: str
    carton_name: str
    items: List[PackedItemOut]
    item_count: int
    current_weight: float
    weight_unit: str
    dimension_unit: str
    used_volume: float
    carton_volume: float
    utilization: float


class PackingSolutionOut(CamelModel):
    solution_id: str
    request_id: Optional[str] = None
    order_id: Optional[str] = None
    created_at: datetime
    total_packages: int
    total_items: int
    total_weight: float
    weight_unit: str
    total_volume: float
    used_volume: float
    dimension_unit: str
    average_utilization: float
    packages: List[PackageOut]


class HealthOut(CamelModel):
    status: str
    application: str
    version: str
    uptime_seconds: float
    active_cartons: int


def carton_view(carton: Carton) -> CartonOut:
    dims = carton.dimensions
    return CartonOut(
        id=carton.id,
        name=carton.name,
        dimensions=DimensionOut(
            length=float(dims.length), width=float(dims.width), height=float(dims.height), unit=dims.unit.value
        ),
        max_weight=WeightOut(value=float(carton.max_weight.value), unit=carton.max_weight.unit.value),
        volume=float(dims.volume),
        status=carton.status.value,
        created_at=carton.created_at,
        updated_at=carton.updated_at,
    )


def package_view(pkg: Package) -> PackageOut:
    return PackageOut(
        carton_id=pkg.carton.id,
        carton_name=pkg.carton.name,
        items=[
            PackedItemOut(sku=item.sku, quantity=quantity, category=item.category, fragile=item.is_fragile)
            for item, quantity in pkg.grouped_items()
        ],
        item_count=pkg.item_count,
        current_weight=float(pkg.current_weight),
        weight_unit=pkg.carton.max_weight.unit.value,
        dimension_unit=pkg.carton.dimensions.unit.value,
        used_volume=float(pkg.used_volume),
        carton_volume=float(pkg.carton_volume),
        utilization=float(pkg.utilization),
    )


def solution_view(solution: PackingSolution) -> PackingSolutionOut:
    return PackingSolutionOut(
        solution_id=solution.solution_id,
        request_id=solution.request_id,
        order_id=solution.order_id,
        created_at=solution.created_at,
        total_packages=solution.total_packages,
        total_items=solution.total_items,
        total_weight=float(solution.total_weight),
        weight_unit=solution.weight_unit.value,
        total_volume=float(solution.total_volume),
        used_volume=float(solution.used_volume),
        dimension_unit=solution.dimension_unit.value,
        average_utilization=float(solution.average_utilization),
        packages=[package_view(pkg) for pkg in solution.packages],
    )
