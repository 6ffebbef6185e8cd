from __future__ import annotations

from datetime import timezone

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from cartonizer.domain.carton import Carton, CartonStatus
from cartonizer.domain.measurements import Dimension, Weight
from cartonizer.models.carton import CartonRecord


def _aware(value):
    # sqlite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_domain(row: CartonRecord) -> Carton:
    return Carton.restore(
        carton_id=row.id,
        name=row.name,
        dimensions=Dimension(row.length, row.width, row.height, row.dimension_unit),
        max_weight=Weight(row.max_weight, row.weight_unit),
        status=CartonStatus(row.status),
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def apply_to_record(carton: Carton, row: CartonRecord) -> CartonRecord:
    row.name = carton.name
    row.length = carton.dimensions.length
    row.width = carton.dimensions.width
    row.height = carton.dimensions.height
    row.dimension_unit = carton.dimensions.unit.value
    row.max_weight = carton.max_weight.value
    row.weight_unit = carton.max_weight.unit.value
    row.status = carton.status.value
    row.created_at = carton.created_at
    row.updated_at = carton.updated_at
    return row


class CartonRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, carton: Carton) -> Carton:
        row = await self.db.get(CartonRecord, carton.id)
        if row is None:
            row = CartonRecord(id=carton.id)
            self.db.add(row)
        apply_to_record(carton, row)
        await self.db.flush()
        return carton

    async def find_by_id(self, carton_id: str) -> Carton | None:
        row = await self.db.get(CartonRecord, carton_id)
        return to_domain(row) if row else None

    async def find_all(self) -> list[Carton]:
        rows = (await self.db.execute(select(CartonRecord).order_by(CartonRecord.created_at))).scalars().all()
        return [to_domain(r) for r in rows]

    async def find_all_active(self) -> list[Carton]:
        rows = (await self.db.execute(
            select(CartonRecord)
            .where(CartonRecord.status == CartonStatus.ACTIVE.value)
            .order_by(CartonRecord.created_at)
        )).scalars().all()
        return [to_domain(r) for r in rows]

    async def count(self, active_only: bool = False) -> int:
        stmt = select(func.count()).select_from(CartonRecord)
        if active_only:
            stmt = stmt.where(CartonRecord.status == CartonStatus.ACTIVE.value)
        return int((await self.db.execute(stmt)).scalar_one())
