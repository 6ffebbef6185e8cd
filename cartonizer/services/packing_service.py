from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from cartonizer.core.settings import settings
from cartonizer.domain.errors import NoActiveCartonsError, SolutionNotFoundError
from cartonizer.domain.events import PackingSolutionCalculated
from cartonizer.domain.items import RequestedItem
from cartonizer.domain.policy import PackingPolicy
from cartonizer.packing.packer import PackingAlgorithm
from cartonizer.packing.schemas import PackingSolutionOut
from cartonizer.packing.validator import BusinessRuleValidator
from cartonizer.services.carton_repository import CartonRepository
from cartonizer.services.enrichment import ProductDimensionEnricher
from cartonizer.services.event_publisher import SOLUTION_CALCULATED_TOPIC, EventPublisher
from cartonizer.services.solution_repository import PackingSolutionRepository

logger = logging.getLogger(__name__)


@dataclass
class CalculatePackingCommand:
    request_id: str
    items: list[RequestedItem] = field(default_factory=list)
    order_id: Optional[str] = None
    optimize_for_minimum_boxes: bool = True
    allow_mixed_categories: bool = True


class PackingSolutionService:
    def __init__(
        self,
        db: AsyncSession,
        publisher: EventPublisher,
        enricher: ProductDimensionEnricher,
        algorithm: PackingAlgorithm | None = None,
        validator: BusinessRuleValidator | None = None,
    ):
        self.db = db
        self.cartons = CartonRepository(db)
        self.solutions = PackingSolutionRepository(db)
        self.publisher = publisher
        self.enricher = enricher
        self.algorithm = algorithm or PackingAlgorithm()
        self.validator = validator or BusinessRuleValidator()

    def build_policy(self, command: CalculatePackingCommand) -> PackingPolicy:
        return PackingPolicy(
            optimize_for_minimum_boxes=command.optimize_for_minimum_boxes,
            allow_mixed_categories=command.allow_mixed_categories,
            separate_fragile_items=settings.SEPARATE_FRAGILE_ITEMS,
            max_utilization_threshold=settings.MAX_UTILIZATION_THRESHOLD,
        )

    async def calculate(self, command: CalculatePackingCommand) -> PackingSolutionOut:
        logger.info("Calculating packing solution for request: %s", command.request_id)

        existing = await self.find_by_request(command.request_id)
        if existing is not None:
            logger.info("Request %s already solved as %s", command.request_id, existing.solution_id)
            return existing

        cartons = await self.cartons.find_all_active()
        if not cartons:
            raise NoActiveCartonsError()

        items = await self.enricher.enrich_items(command.items)
        policy = self.build_policy(command)
        self.validator.validate(items, policy)

        solution = await run_in_threadpool(self.algorithm.pack, items, cartons, policy)
        solution.request_id = command.request_id
        solution.order_id = command.order_id

        try:
            view = await self.solutions.save(solution)
            await self.db.commit()
        except IntegrityError:
            # a concurrent submission with the same request id won the insert
            await self.db.rollback()
            stored = await self.find_by_request(command.request_id)
            if stored is None:
                raise
            return stored

        self.publisher.publish(
            SOLUTION_CALCULATED_TOPIC, solution.solution_id, PackingSolutionCalculated.from_solution(solution)
        )
        logger.info(
            "Packing solution %s created with %d packages", solution.solution_id, solution.total_packages
        )
        return view

    async def get_solution(self, solution_id: str) -> PackingSolutionOut:
        view = await self.solutions.find_by_id(solution_id)
        if view is None:
            raise SolutionNotFoundError(solution_id)
        return view

    async def find_by_request(self, request_id: str | None) -> PackingSolutionOut | None:
        if not request_id:
            return None
        return await self.solutions.find_by_request_id(request_id)
