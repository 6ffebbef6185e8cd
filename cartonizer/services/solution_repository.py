from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cartonizer.domain.solution import PackingSolution
from cartonizer.models.solution import PackingSolutionRecord
from cartonizer.packing.schemas import PackingSolutionOut, solution_view


class PackingSolutionRepository:
    """Stores calculated solutions as their rendered view.

    Packages hold live carton objects that may change afterwards, so a stored
    solution is the snapshot taken when it was calculated.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, solution: PackingSolution) -> PackingSolutionOut:
        view = solution_view(solution)
        row = PackingSolutionRecord(
            solution_id=solution.solution_id,
            request_id=solution.request_id,
            order_id=solution.order_id,
            total_packages=solution.total_packages,
            total_items=solution.total_items,
            average_utilization=solution.average_utilization,
            payload=view.model_dump(mode="json", by_alias=True),
            created_at=solution.created_at,
        )
        self.db.add(row)
        await self.db.flush()
        return view

    async def find_by_id(self, solution_id: str) -> PackingSolutionOut | None:
        row = await self.db.get(PackingSolutionRecord, solution_id)
        return PackingSolutionOut.model_validate(row.payload) if row else None

    async def find_by_request_id(self, request_id: str) -> PackingSolutionOut | None:
        row = (await self.db.execute(
            select(PackingSolutionRecord).where(PackingSolutionRecord.request_id == request_id)
        )).scalar_one_or_none()
        return PackingSolutionOut.model_validate(row.payload) if row else None
