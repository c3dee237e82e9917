"""Booking models."""
from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, Enum, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base
from .enums import BikeSize, BikeType, BookingStatus, RentalCategory, Suspension


class Booking(Base):
    """Customer reservation for one or more bikes on a single day."""

    __tablename__ = "bookings"
    __table_args__ = (Index("ix_bookings_date_status", "booking_date", "status"),)

    id: Mapped[str] = mapped_column(String, primary_key=True)
    customer_name: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str | None] = mapped_column(String)
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    category: Mapped[RentalCategory] = mapped_column(Enum(RentalCategory, name="rental_category"), nullable=False)
    needs_guide: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, name="booking_status"), default=BookingStatus.CONFIRMED, nullable=False
    )
    total_price: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    bikes: Mapped[list["BookingBike"]] = relationship(
        "BookingBike",
        back_populates="booking",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="BookingBike.id",
    )


class BookingBike(Base):
    """Line item: how many bikes of one group a booking takes."""

    __tablename__ = "booking_bikes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_id: Mapped[str] = mapped_column(
        ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    bike_type: Mapped[BikeType] = mapped_column(Enum(BikeType, name="bike_type"), nullable=False)
    bike_size: Mapped[BikeSize | None] = mapped_column(Enum(BikeSize, name="bike_size"))
    bike_suspension: Mapped[Suspension | None] = mapped_column(Enum(Suspension, name="bike_suspension"))
    has_trailer_hook: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    count: Mapped[int] = mapped_column(Integer, nullable=False)

    booking: Mapped["Booking"] = relationship("Booking", back_populates="bikes")
