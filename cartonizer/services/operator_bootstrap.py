from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from cartonizer.core.settings import settings
from cartonizer.models.operator import Operator
from cartonizer.services.security import hash_password

logger = logging.getLogger(__name__)


async def ensure_default_operator(db: AsyncSession) -> None:
    username = settings.DEFAULT_OPERATOR_USERNAME
    operator = (await db.execute(select(Operator).where(Operator.username == username))).scalar_one_or_none()
    if operator:
        return
    db.add(Operator(username=username, password_hash=hash_password(settings.DEFAULT_OPERATOR_PASSWORD)))
    logger.info("Created default operator account: %s", username)
