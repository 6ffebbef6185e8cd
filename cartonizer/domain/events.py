from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from cartonizer.domain.measurements import Dimension, Weight


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    event_type = "domain.event"

    def to_dict(self) -> dict:
        raise NotImplementedError


@dataclass(frozen=True)
class _CartonSnapshot(DomainEvent):
    carton_id: str
    name: str
    dimensions: Dimension
    max_weight: Weight
    occurred_on: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "type": self.event_type,
            "cartonId": self.carton_id,
            "name": self.name,
            "dimensions": self.dimensions.to_dict(),
            "maxWeight": self.max_weight.to_dict(),
            "occurredOn": self.occurred_on.isoformat(),
        }


@dataclass(frozen=True)
class CartonCreated(_CartonSnapshot):
    event_type = "carton.created"


@dataclass(frozen=True)
class CartonUpdated(_CartonSnapshot):
    event_type = "carton.updated"


@dataclass(frozen=True)
class CartonDeactivated(DomainEvent):
    event_type = "carton.deactivated"

    carton_id: str
    occurred_on: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict:
        return {
            "type": self.event_type,
            "cartonId": self.carton_id,
            "occurredOn": self.occurred_on.isoformat(),
        }


@dataclass(frozen=True)
class PackingSolutionCalculated(DomainEvent):
    event_type = "packing-solution.calculated"

    solution_id: str
    request_id: Optional[str]
    order_id: Optional[str]
    package_count: int
    total_weight: Decimal
    weight_unit: str
    average_utilization: Decimal
    occurred_on: datetime = field(default_factory=utcnow)

    @classmethod
    def from_solution(cls, solution) -> "PackingSolutionCalculated":
        return cls(
            solution_id=solution.solution_id,
            request_id=solution.request_id,
            order_id=solution.order_id,
            package_count=solution.total_packages,
            total_weight=solution.total_weight,
            weight_unit=solution.weight_unit.value,
            average_utilization=solution.average_utilization,
            occurred_on=solution.created_at,
        )

    def to_dict(self) -> dict:
        return {
            "type": self.event_type,
            "solutionId": self.solution_id,
            "requestId": self.request_id,
            "orderId": self.order_id,
            "packageCount": self.package_count,
            "totalWeight": float(self.total_weight),
            "weightUnit": self.weight_unit,
            "averageUtilization": float(self.average_utilization),
            "occurredOn": self.occurred_on.isoformat(),
        }
