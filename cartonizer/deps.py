from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from cartonizer.core.settings import settings
from cartonizer.db import get_db
from cartonizer.models.operator import Operator
from cartonizer.services.carton_service import CartonManagementService
from cartonizer.services.catalog_client import ProductCatalogClient
from cartonizer.services.enrichment import ProductDimensionEnricher
from cartonizer.services.event_publisher import EventPublisher, event_publisher
from cartonizer.services.packing_service import PackingSolutionService
from cartonizer.services.security import decode_token


async def get_current_operator(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Operator:
    token = request.cookies.get(settings.COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=401, detail="not_logged_in")
    payload = decode_token(token)
    if not payload or payload.get("type") != "operator":
        raise HTTPException(status_code=401, detail="invalid_token")
    operator_id = payload.get("oid")
    if not operator_id:
        raise HTTPException(status_code=401, detail="invalid_token")
    operator = (await db.execute(select(Operator).where(Operator.id == int(operator_id)))).scalar_one_or_none()
    if not operator or not operator.is_active:
        raise HTTPException(status_code=401, detail="operator_not_found")
    return operator


def get_event_publisher() -> EventPublisher:
    return event_publisher


def get_catalog_client() -> ProductCatalogClient:
    return ProductCatalogClient()


def get_carton_service(
    db: AsyncSession = Depends(get_db),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> CartonManagementService:
    return CartonManagementService(db, publisher)


def get_packing_service(
    db: AsyncSession = Depends(get_db),
    publisher: EventPublisher = Depends(get_event_publisher),
    client: ProductCatalogClient = Depends(get_catalog_client),
) -> PackingSolutionService:
    return PackingSolutionService(db, publisher, ProductDimensionEnricher(client))
