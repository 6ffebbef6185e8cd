from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from cartonizer.core.logging import request_id_var
from cartonizer.deps import get_packing_service
from cartonizer.domain.items import RequestedItem
from cartonizer.packing.schemas import PackingRequest, PackingSolutionOut
from cartonizer.services.packing_service import CalculatePackingCommand, PackingSolutionService

router = APIRouter(prefix="/api/v1/packing-solutions", tags=["packing"])


@router.post("", response_model=PackingSolutionOut)
async def calculate(
    payload: PackingRequest,
    request: Request,
    service: PackingSolutionService = Depends(get_packing_service),
):
    # the middleware has already read or generated X-Request-ID
    request_id = getattr(request.state, "request_id", None) or request_id_var.get()
    command = CalculatePackingCommand(
        request_id=request_id,
        order_id=payload.order_id,
        items=[RequestedItem(it.sku, it.quantity) for it in payload.items],
        optimize_for_minimum_boxes=payload.optimize_for_minimum_boxes,
        allow_mixed_categories=payload.allow_mixed_categories,
    )
    return await service.calculate(command)


@router.get("/{solution_id}", response_model=PackingSolutionOut)
async def get_solution(solution_id: str, service: PackingSolutionService = Depends(get_packing_service)):
    return await service.get_solution(solution_id)
