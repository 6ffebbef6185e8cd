from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Iterable

from cartonizer.domain.events import DomainEvent

logger = logging.getLogger(__name__)

CARTON_EVENTS_TOPIC = "cartonization.carton.events"
SOLUTION_CALCULATED_TOPIC = "cartonization.packing-solution.calculated"


@dataclass(frozen=True)
class OutboundEvent:
    topic: str
    key: str | None
    payload: dict


class EventPublisher:
    """Hands domain events to the outside world.

    Delivery transport is not part of this service; events are logged and kept
    in a bounded in-memory outbox that a relay (or a test) can read.
    """

    def __init__(self, max_outbox: int = 1000):
        self._outbox: deque[OutboundEvent] = deque(maxlen=max_outbox)
        self._lock = threading.Lock()

    def publish(self, topic: str, key: str | None, event: DomainEvent) -> OutboundEvent:
        outbound = OutboundEvent(topic=topic, key=key, payload=event.to_dict())
        with self._lock:
            self._outbox.append(outbound)
        logger.info("Published %s to %s (key=%s)", event.event_type, topic, key)
        return outbound

    def publish_all(self, topic: str, key: str | None, events: Iterable[DomainEvent]) -> int:
        count = 0
        for event in events:
            self.publish(topic, key, event)
            count += 1
        return count

    @property
    def outbox(self) -> list[OutboundEvent]:
        with self._lock:
            return list(self._outbox)

    def drain(self) -> list[OutboundEvent]:
        with self._lock:
            events = list(self._outbox)
            self._outbox.clear()
        return events


event_publisher = EventPublisher()
