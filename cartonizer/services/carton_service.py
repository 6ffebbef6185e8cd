from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cartonizer.domain.carton import Carton
from cartonizer.domain.errors import CartonNotFoundError
from cartonizer.domain.measurements import Dimension, Weight
from cartonizer.services.carton_repository import CartonRepository
from cartonizer.services.event_publisher import CARTON_EVENTS_TOPIC, EventPublisher

logger = logging.getLogger(__name__)


class CartonManagementService:
    def __init__(self, db: AsyncSession, publisher: EventPublisher):
        self.db = db
        self.repo = CartonRepository(db)
        self.publisher = publisher

    async def _save(self, carton: Carton) -> Carton:
        await self.repo.save(carton)
        await self.db.commit()
        # events leave only after the write is committed
        self.publisher.publish_all(CARTON_EVENTS_TOPIC, carton.id, carton.pull_events())
        return carton

    async def create_carton(self, name: str, dimensions: Dimension, max_weight: Weight) -> Carton:
        logger.info("Creating new carton: %s", name)
        carton = Carton.create(name, dimensions, max_weight)
        await self._save(carton)
        logger.info("Successfully created carton with ID: %s", carton.id)
        return carton

    async def get_carton(self, carton_id: str) -> Carton:
        carton = await self.repo.find_by_id(carton_id)
        if carton is None:
            raise CartonNotFoundError(carton_id)
        return carton

    async def list_cartons(self, active_only: bool = False) -> list[Carton]:
        if active_only:
            return await self.repo.find_all_active()
        return await self.repo.find_all()

    async def update_carton(self, carton_id: str, name: str, dimensions: Dimension, max_weight: Weight) -> Carton:
        logger.info("Updating carton: %s", carton_id)
        carton = await self.get_carton(carton_id)
        carton.update_carton(name, dimensions, max_weight)
        return await self._save(carton)

    async def deactivate_carton(self, carton_id: str) -> Carton:
        logger.info("Deactivating carton: %s", carton_id)
        carton = await self.get_carton(carton_id)
        carton.deactivate()
        return await self._save(carton)

    async def activate_carton(self, carton_id: str) -> Carton:
        carton = await self.get_carton(carton_id)
        carton.activate()
        return await self._save(carton)
