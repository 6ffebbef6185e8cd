from __future__ import annotations

import time

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cartonizer.core.settings import settings
from cartonizer.db import get_db
from cartonizer.packing.schemas import HealthOut
from cartonizer.services.carton_repository import CartonRepository

router = APIRouter(prefix="/api/v1", tags=["health"])

_STARTED = time.monotonic()


@router.get("/health", response_model=HealthOut)
async def health(db: AsyncSession = Depends(get_db)):
    return HealthOut(
        status="UP",
        application=settings.APP_NAME,
        version=settings.APP_VERSION,
        uptime_seconds=round(time.monotonic() - _STARTED, 3),
        active_cartons=await CartonRepository(db).count(active_only=True),
    )
