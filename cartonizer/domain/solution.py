from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from cartonizer.domain.events import utcnow
from cartonizer.domain.items import EnrichedItem
from cartonizer.domain.measurements import DimensionUnit, WeightUnit
from cartonizer.domain.package import Package, ratio

# Totals across packages are reported in these units whatever the cartons use.
REPORT_WEIGHT_UNIT = WeightUnit.POUNDS
REPORT_DIMENSION_UNIT = DimensionUnit.INCHES


def new_solution_id() -> str:
    return "sol-" + uuid.uuid4().hex[:12]


class PackingSolution:
    """Result of one calculation. Metrics are derived on read."""

    def __init__(
        self,
        packages: list[Package],
        solution_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ):
        self.solution_id = solution_id or new_solution_id()
        self._packages = tuple(packages)
        self.created_at = created_at or utcnow()
        self.request_id: Optional[str] = None
        self.order_id: Optional[str] = None

    @property
    def packages(self) -> tuple[Package, ...]:
        return self._packages

    @property
    def total_packages(self) -> int:
        return len(self._packages)

    @property
    def total_items(self) -> int:
        return sum(pkg.item_count for pkg in self._packages)

    @property
    def weight_unit(self) -> WeightUnit:
        return REPORT_WEIGHT_UNIT

    @property
    def dimension_unit(self) -> DimensionUnit:
        return REPORT_DIMENSION_UNIT

    @property
    def total_weight(self) -> Decimal:
        return sum((pkg.weight_in(REPORT_WEIGHT_UNIT) for pkg in self._packages), Decimal(0))

    @property
    def total_volume(self) -> Decimal:
        return sum((pkg.carton_volume_in(REPORT_DIMENSION_UNIT) for pkg in self._packages), Decimal(0))

    @property
    def used_volume(self) -> Decimal:
        return sum((pkg.used_volume_in(REPORT_DIMENSION_UNIT) for pkg in self._packages), Decimal(0))

    @property
    def average_utilization(self) -> Decimal:
        if not self._packages:
            return Decimal(0)
        total = sum((pkg.utilization for pkg in self._packages), Decimal(0))
        return ratio(total, Decimal(len(self._packages)))

    @property
    def all_items(self) -> list[EnrichedItem]:
        return [item for pkg in self._packages for item in pkg.items]

    @property
    def is_empty(self) -> bool:
        return all(pkg.is_empty for pkg in self._packages)

    def __repr__(self) -> str:
        return f"PackingSolution(id={self.solution_id!r}, packages={self.total_packages})"
