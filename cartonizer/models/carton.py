from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DateTime, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from cartonizer.db import Base


class CartonRecord(Base):
    __tablename__ = "cartons"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(100))

    length: Mapped[Decimal] = mapped_column(Numeric(12, 4))
    width: Mapped[Decimal] = mapped_column(Numeric(12, 4))
    height: Mapped[Decimal] = mapped_column(Numeric(12, 4))
    dimension_unit: Mapped[str] = mapped_column(String(16))  # INCHES/CENTIMETERS

    max_weight: Mapped[Decimal] = mapped_column(Numeric(12, 4))
    weight_unit: Mapped[str] = mapped_column(String(16))  # POUNDS/KILOGRAMS

    status: Mapped[str] = mapped_column(String(16), default="ACTIVE", index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
