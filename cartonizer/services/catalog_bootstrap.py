from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from cartonizer.domain.carton import Carton
from cartonizer.domain.measurements import Dimension, DimensionUnit, Weight, WeightUnit
from cartonizer.services.carton_repository import CartonRepository

logger = logging.getLogger(__name__)

# name, (length, width, height) in inches, max weight in pounds
DEFAULT_CARTONS = [
    ("Small Box", ("8", "6", "4"), "10"),
    ("Medium Box", ("12", "10", "8"), "25"),
    ("Large Box", ("18", "14", "12"), "40"),
]


async def ensure_default_cartons(db: AsyncSession) -> None:
    repo = CartonRepository(db)
    if await repo.count() > 0:
        return
    for name, (length, width, height), max_weight in DEFAULT_CARTONS:
        carton = Carton.create(
            name,
            Dimension(Decimal(length), Decimal(width), Decimal(height), DimensionUnit.INCHES),
            Weight(Decimal(max_weight), WeightUnit.POUNDS),
        )
        # seeding is not a catalog change anyone subscribes to
        carton.pull_events()
        await repo.save(carton)
    logger.info("Seeded %d default cartons", len(DEFAULT_CARTONS))
