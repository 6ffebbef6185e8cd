from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, String, Integer, DateTime, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from cartonizer.db import Base


class PackingSolutionRecord(Base):
    __tablename__ = "packing_solutions"

    solution_id: Mapped[str] = mapped_column(String(32), primary_key=True)
    request_id: Mapped[str | None] = mapped_column(String(64), nullable=True, unique=True, index=True)
    order_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)

    total_packages: Mapped[int] = mapped_column(Integer)
    total_items: Mapped[int] = mapped_column(Integer)
    average_utilization: Mapped[Decimal] = mapped_column(Numeric(6, 4))

    # full response view, so reads never re-run the packer
    payload: Mapped[dict] = mapped_column(JSON)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
