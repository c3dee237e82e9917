"""Shop settings model holding the pricing table."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base

SETTINGS_ROW_ID = 1


class ShopSettings(Base):
    """Singleton row with shop contact details, opening hours and rates."""

    __tablename__ = "shop_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SETTINGS_ROW_ID)
    shop_name: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    opening_time: Mapped[str] = mapped_column(String(5), nullable=False)
    closing_time: Mapped[str] = mapped_column(String(5), nullable=False)
    pricing_hourly: Mapped[float] = mapped_column(Float, nullable=False)
    pricing_half_day: Mapped[float] = mapped_column(Float, nullable=False)
    pricing_full_day: Mapped[float] = mapped_column(Float, nullable=False)
    pricing_trailer_hourly: Mapped[float] = mapped_column(Float, nullable=False)
    pricing_trailer_half_day: Mapped[float] = mapped_column(Float, nullable=False)
    pricing_trailer_full_day: Mapped[float] = mapped_column(Float, nullable=False)
    pricing_guide_hourly: Mapped[float] = mapped_column(Float, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
