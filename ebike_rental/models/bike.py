"""Garage bike and maintenance models."""
from __future__ import annotations

from datetime import date

from sqlalchemy import Boolean, Date, Enum, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base
from .enums import BikeSize, BikeType, Suspension


class Bike(Base):
    """Individually tracked bike or trailer in the shop garage."""

    __tablename__ = "bikes"
    __table_args__ = (Index("ix_bikes_active_type", "is_active", "type"),)

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    brand: Mapped[str] = mapped_column(String, nullable=False, default="")
    model: Mapped[str | None] = mapped_column(String)
    type: Mapped[BikeType] = mapped_column(Enum(BikeType, name="bike_type"), nullable=False)
    size: Mapped[BikeSize | None] = mapped_column(Enum(BikeSize, name="bike_size"))
    suspension: Mapped[Suspension | None] = mapped_column(Enum(Suspension, name="bike_suspension"))
    has_trailer_hook: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False, default="")
    min_height: Mapped[int | None] = mapped_column(Integer)
    max_height: Mapped[int | None] = mapped_column(Integer)
    purchase_date: Mapped[date | None] = mapped_column(Date)
    purchase_price: Mapped[float | None] = mapped_column(Float)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    total_maintenance_cost: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    last_maintenance_date: Mapped[date | None] = mapped_column(Date)
    next_maintenance_date: Mapped[date | None] = mapped_column(Date)

    maintenance: Mapped[list["MaintenanceRecord"]] = relationship(
        "MaintenanceRecord",
        back_populates="bike",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="MaintenanceRecord.service_date",
    )


class MaintenanceRecord(Base):
    """Service performed on a bike."""

    __tablename__ = "maintenance_records"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    bike_id: Mapped[str] = mapped_column(ForeignKey("bikes.id", ondelete="CASCADE"), nullable=False)
    service_date: Mapped[date] = mapped_column(Date, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(String, nullable=False, default="")
    cost: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    mechanic: Mapped[str | None] = mapped_column(String)
    notes: Mapped[str | None] = mapped_column(String)

    bike: Mapped["Bike"] = relationship("Bike", back_populates="maintenance")
