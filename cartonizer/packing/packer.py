from __future__ import annotations

import logging
import time
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from cartonizer.domain.carton import Carton
from cartonizer.domain.errors import InfeasibleItemError
from cartonizer.domain.items import EnrichedItem
from cartonizer.domain.measurements import Dimension, DimensionUnit
from cartonizer.domain.package import Package
from cartonizer.domain.policy import PackingPolicy
from cartonizer.domain.solution import PackingSolution

logger = logging.getLogger(__name__)


def _sort_volume(dimensions: Dimension) -> Decimal:
    # inches -> centimeters is an exact scale, so mixed-unit inputs order correctly
    return dimensions.convert_to(DimensionUnit.CENTIMETERS).volume


def sort_items(items: Iterable[EnrichedItem]) -> list[EnrichedItem]:
    """Largest first. Each line is split into single units; equal volumes keep input order."""
    units = [unit for item in items for unit in item.split_units()]
    return sorted(units, key=lambda it: _sort_volume(it.dimensions), reverse=True)


def sort_cartons(cartons: Iterable[Carton]) -> list[Carton]:
    """Active cartons only, smallest first."""
    return sorted((c for c in cartons if c.is_active), key=lambda c: _sort_volume(c.dimensions))


class PackingAlgorithm:
    """Greedy bin packing over cumulative weight and volume.

    ``optimize_for_minimum_boxes`` selects best-fit-decreasing, otherwise
    first-fit-decreasing. Either an error is raised or a complete solution is
    returned; partial results never leave this class.
    """

    def pack(
        self,
        items: Sequence[EnrichedItem],
        cartons: Sequence[Carton],
        policy: PackingPolicy,
    ) -> PackingSolution:
        start_perf = time.perf_counter()
        logger.info(
            "Starting packing calculation for %d items with %d available carton types",
            len(items), len(cartons),
        )

        sorted_items = sort_items(items)
        sorted_cartons = sort_cartons(cartons)

        if policy.optimize_for_minimum_boxes:
            packages = self.best_fit_decreasing(sorted_items, sorted_cartons, policy)
        else:
            packages = self.first_fit_decreasing(sorted_items, sorted_cartons, policy)

        solution = PackingSolution(packages)
        duration = time.perf_counter() - start_perf
        logger.info(
            "Packing calculation completed in %.4fs. Solution uses %d packages with %.2f%% average utilization",
            duration, solution.total_packages, solution.average_utilization * 100,
        )
        return solution

    def best_fit_decreasing(
        self,
        items: Sequence[EnrichedItem],
        cartons: Sequence[Carton],
        policy: PackingPolicy,
    ) -> list[Package]:
        packages: list[Package] = []
        for item in items:
            best: Optional[Package] = None
            best_remaining = Decimal(0)
            for pkg in packages:
                if not pkg.can_add_item(item, policy):
                    continue
                # tightest fit wins; ties go to the older package
                remaining = pkg.remaining_volume_in(DimensionUnit.CENTIMETERS)
                if best is None or remaining < best_remaining:
                    best, best_remaining = pkg, remaining

            if best is None:
                best = self.open_package(item, cartons, policy)
                packages.append(best)
            best.add_item(item, policy)
        return packages

    def first_fit_decreasing(
        self,
        items: Sequence[EnrichedItem],
        cartons: Sequence[Carton],
        policy: PackingPolicy,
    ) -> list[Package]:
        packages: list[Package] = []
        for item in items:
            target = next((pkg for pkg in packages if pkg.can_add_item(item, policy)), None)
            if target is None:
                target = self.open_package(item, cartons, policy)
                packages.append(target)
            target.add_item(item, policy)
        return packages

    def open_package(
        self,
        item: EnrichedItem,
        cartons: Sequence[Carton],
        policy: PackingPolicy,
    ) -> Package:
        """Fresh package on the smallest carton that takes ``item`` on its own."""
        for carton in cartons:
            if not carton.can_fit_item(item.dimensions, item.weight):
                continue
            pkg = Package(carton)
            if pkg.can_add_item(item, policy):
                return pkg
        logger.error("No suitable carton found for item: %s", item.sku)
        raise InfeasibleItemError(item.sku)
