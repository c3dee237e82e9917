"""Fixed cost model."""
from __future__ import annotations

from datetime import date

from sqlalchemy import Boolean, Date, Enum, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base
from .enums import CostCategory, CostFrequency


class FixedCost(Base):
    """Recurring or one-time shop expense."""

    __tablename__ = "fixed_costs"
    __table_args__ = (Index("ix_fixed_costs_active_category", "is_active", "category"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False, default="")
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[CostCategory] = mapped_column(
        Enum(CostCategory, name="cost_category"), default=CostCategory.GENERAL, nullable=False
    )
    frequency: Mapped[CostFrequency] = mapped_column(Enum(CostFrequency, name="cost_frequency"), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
