from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import NullPool

from cartonizer.core.settings import settings


class Base(DeclarativeBase):
    pass


_is_sqlite = settings.DATABASE_URL.startswith("sqlite")

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    future=True,
    # aiosqlite connections are tied to the loop that opened them
    poolclass=NullPool if _is_sqlite else None,
)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create tables on startup, then seed the default operator and cartons."""
    from cartonizer.models import all_models  # noqa: F401
    from sqlalchemy import text
    from cartonizer.services.operator_bootstrap import ensure_default_operator
    from cartonizer.services.catalog_bootstrap import ensure_default_cartons

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        if _is_sqlite:
            await conn.execute(text("PRAGMA journal_mode=WAL;"))
            await conn.execute(text("PRAGMA synchronous=NORMAL;"))

    async with AsyncSessionLocal() as session:
        await ensure_default_operator(session)
        if settings.SEED_DEFAULT_CARTONS:
            await ensure_default_cartons(session)
        await session.commit()
