from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from cartonizer.core.settings import settings
from cartonizer.db import get_db
from cartonizer.deps import get_current_operator
from cartonizer.domain.events import utcnow
from cartonizer.models.operator import Operator
from cartonizer.packing.schemas import LoginIn
from cartonizer.services.security import create_token, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _operator_out(operator: Operator) -> dict:
    return {"id": operator.id, "username": operator.username}


@router.post("/login")
async def login(payload: LoginIn, response: Response, db: AsyncSession = Depends(get_db)):
    username = payload.username.strip()
    operator = (await db.execute(select(Operator).where(Operator.username == username))).scalar_one_or_none()
    if not operator or not verify_password(payload.password, operator.password_hash):
        logger.warning("Failed login for operator: %s", username)
        raise HTTPException(status_code=400, detail="invalid_credentials")
    if not operator.is_active:
        raise HTTPException(status_code=403, detail="operator_disabled")

    operator.last_login_at = utcnow()
    token = create_token({"type": "operator", "oid": operator.id})
    response.set_cookie(settings.COOKIE_NAME, token, httponly=True, samesite="lax")
    return {"ok": True, "operator": _operator_out(operator)}


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(settings.COOKIE_NAME)
    return {"ok": True}


@router.get("/me")
async def me(operator: Operator = Depends(get_current_operator)):
    return _operator_out(operator)
