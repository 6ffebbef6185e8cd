from __future__ import annotations

import logging
import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from cartonizer.domain.errors import CartonStateError
from cartonizer.domain.events import (
    CartonCreated,
    CartonDeactivated,
    CartonUpdated,
    DomainEvent,
    utcnow,
)
from cartonizer.domain.measurements import Dimension, Weight

logger = logging.getLogger(__name__)


class CartonStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


def _validate_name(name: Optional[str]) -> str:
    if name is None or not str(name).strip():
        raise CartonStateError("Carton name cannot be empty")
    return str(name).strip()


def _validate_dimensions(dimensions: Optional[Dimension]) -> Dimension:
    if not isinstance(dimensions, Dimension) or dimensions.has_zero_or_negative_values():
        raise CartonStateError("Invalid carton dimensions")
    return dimensions


def _validate_weight(weight: Optional[Weight]) -> Weight:
    if not isinstance(weight, Weight) or weight.is_zero_or_negative():
        raise CartonStateError("Invalid carton weight capacity")
    return weight


class Carton:
    """A container type that packages are opened from.

    Every successful mutation appends one event to an internal buffer. The
    persistence side drains it with ``pull_events`` once the write went through.
    """

    def __init__(
        self,
        carton_id: str,
        name: str,
        dimensions: Dimension,
        max_weight: Weight,
        status: CartonStatus = CartonStatus.ACTIVE,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._id = carton_id
        self.name = name
        self.dimensions = dimensions
        self.max_weight = max_weight
        self.status = CartonStatus(status)
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or self.created_at
        self._events: list[DomainEvent] = []

    @property
    def id(self) -> str:
        return self._id

    @property
    def is_active(self) -> bool:
        return self.status == CartonStatus.ACTIVE

    @classmethod
    def create(cls, name: str, dimensions: Dimension, max_weight: Weight) -> "Carton":
        name = _validate_name(name)
        _validate_dimensions(dimensions)
        _validate_weight(max_weight)

        carton = cls(str(uuid.uuid4()), name, dimensions, max_weight, CartonStatus.ACTIVE)
        carton._record(CartonCreated(carton.id, name, dimensions, max_weight, carton.created_at))
        logger.info("Created new carton with ID: %s", carton.id)
        return carton

    @classmethod
    def restore(
        cls,
        carton_id: str,
        name: str,
        dimensions: Dimension,
        max_weight: Weight,
        status: CartonStatus,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Carton":
        """Rebuild a stored carton with its existing identity; emits nothing."""
        return cls(carton_id, name, dimensions, max_weight, status, created_at, updated_at)

    def can_fit_item(self, item_dimensions: Dimension, item_weight: Weight) -> bool:
        # weight is checked first, independent of shape
        if item_weight.is_greater_than(self.max_weight):
            return False
        return self.dimensions.can_contain(item_dimensions)

    def activate(self) -> None:
        if self.status == CartonStatus.ACTIVE:
            logger.warning("Carton %s is already active", self.id)
            return
        self.status = CartonStatus.ACTIVE
        self.updated_at = utcnow()
        logger.info("Activated carton: %s", self.id)

    def deactivate(self) -> None:
        if self.status == CartonStatus.INACTIVE:
            logger.warning("Carton %s is already inactive", self.id)
            return
        self.status = CartonStatus.INACTIVE
        self.updated_at = utcnow()
        self._record(CartonDeactivated(self.id, self.updated_at))
        logger.info("Deactivated carton: %s", self.id)

    def update_dimensions(self, dimensions: Dimension) -> None:
        self.dimensions = _validate_dimensions(dimensions)
        self._touch()
        logger.info("Updated dimensions for carton: %s", self.id)

    def update_name(self, name: str) -> None:
        self.name = _validate_name(name)
        self._touch()
        logger.info("Updated name for carton: %s", self.id)

    def update_max_weight(self, max_weight: Weight) -> None:
        self.max_weight = _validate_weight(max_weight)
        self._touch()
        logger.info("Updated max weight for carton: %s", self.id)

    def update_carton(self, name: str, dimensions: Dimension, max_weight: Weight) -> None:
        name = _validate_name(name)
        _validate_dimensions(dimensions)
        _validate_weight(max_weight)
        self.name = name
        self.dimensions = dimensions
        self.max_weight = max_weight
        self._touch()
        logger.info("Updated carton: %s", self.id)

    def pull_events(self) -> list[DomainEvent]:
        events, self._events = self._events, []
        return events

    @property
    def pending_events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._events)

    def _touch(self) -> None:
        self.updated_at = utcnow()
        self._record(CartonUpdated(self.id, self.name, self.dimensions, self.max_weight, self.updated_at))

    def _record(self, event: DomainEvent) -> None:
        self._events.append(event)

    def __repr__(self) -> str:
        return f"Carton(id={self.id!r}, name={self.name!r}, status={self.status.value})"
