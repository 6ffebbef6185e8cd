from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response

from cartonizer.deps import get_carton_service, get_current_operator
from cartonizer.domain.measurements import Dimension, Weight
from cartonizer.models.operator import Operator
from cartonizer.packing.schemas import CartonIn, CartonOut, carton_view
from cartonizer.services.carton_service import CartonManagementService

router = APIRouter(prefix="/api/v1/cartons", tags=["cartons"])


def _measurements(payload: CartonIn) -> tuple[Dimension, Weight]:
    return (
        Dimension(payload.length, payload.width, payload.height, payload.dimension_unit),
        Weight(payload.max_weight, payload.weight_unit),
    )


@router.post("", response_model=CartonOut, status_code=201)
async def create_carton(
    payload: CartonIn,
    _: Operator = Depends(get_current_operator),
    service: CartonManagementService = Depends(get_carton_service),
):
    dimensions, max_weight = _measurements(payload)
    carton = await service.create_carton(payload.name, dimensions, max_weight)
    return carton_view(carton)


@router.get("", response_model=list[CartonOut])
async def list_cartons(
    active_only: bool = Query(default=False, alias="activeOnly"),
    service: CartonManagementService = Depends(get_carton_service),
):
    return [carton_view(c) for c in await service.list_cartons(active_only)]


@router.get("/{carton_id}", response_model=CartonOut)
async def get_carton(carton_id: str, service: CartonManagementService = Depends(get_carton_service)):
    return carton_view(await service.get_carton(carton_id))


@router.put("/{carton_id}", response_model=CartonOut)
async def update_carton(
    carton_id: str,
    payload: CartonIn,
    _: Operator = Depends(get_current_operator),
    service: CartonManagementService = Depends(get_carton_service),
):
    dimensions, max_weight = _measurements(payload)
    carton = await service.update_carton(carton_id, payload.name, dimensions, max_weight)
    return carton_view(carton)


@router.delete("/{carton_id}", status_code=204)
async def deactivate_carton(
    carton_id: str,
    _: Operator = Depends(get_current_operator),
    service: CartonManagementService = Depends(get_carton_service),
):
    await service.deactivate_carton(carton_id)
    return Response(status_code=204)


@router.post("/{carton_id}/activate", response_model=CartonOut)
async def activate_carton(
    carton_id: str,
    _: Operator = Depends(get_current_operator),
    service: CartonManagementService = Depends(get_carton_service),
):
    return carton_view(await service.activate_carton(carton_id))
