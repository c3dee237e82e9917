"""Booking persistence helpers."""
from __future__ import annotations

from datetime import date
from typing import Any

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.booking import Booking, BookingBike
from ..models.enums import BookingStatus


async def get_by_id(session: AsyncSession, booking_id: str) -> Booking | None:
    """Return a booking with its bike line items."""

    return await session.get(Booking, booking_id)


async def list_bookings(
    session: AsyncSession,
    *,
    day: date | None = None,
    status: BookingStatus | None = None,
) -> list[Booking]:
    """Return bookings ordered by date and start time, optionally filtered."""

    stmt: Select[tuple[Booking]] = select(Booking)
    if day is not None:
        stmt = stmt.where(Booking.booking_date == day)
    if status is not None:
        stmt = stmt.where(Booking.status == status)
    stmt = stmt.order_by(Booking.booking_date.asc(), Booking.start_time.asc())
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_between(session: AsyncSession, *, start: date, end: date) -> list[Booking]:
    """Return bookings dated between the provided days inclusive."""

    stmt = (
        select(Booking)
        .where(Booking.booking_date >= start, Booking.booking_date <= end)
        .order_by(Booking.booking_date.asc(), Booking.start_time.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


def _line_items(bikes: list[dict[str, Any]]) -> list[BookingBike]:
    return [
        BookingBike(
            bike_type=item["type"],
            bike_size=item.get("size"),
            bike_suspension=item.get("suspension"),
            has_trailer_hook=bool(item.get("has_trailer_hook")),
            count=item["count"],
        )
        for item in bikes
    ]


async def create_booking(
    session: AsyncSession,
    *,
    booking_id: str,
    fields: dict[str, Any],
    bikes: list[dict[str, Any]],
) -> Booking:
    """Persist a booking and its line items."""

    booking = Booking(id=booking_id, **fields)
    booking.bikes = _line_items(bikes)
    session.add(booking)
    await session.flush()
    return booking


async def replace_booking(
    session: AsyncSession,
    booking: Booking,
    *,
    fields: dict[str, Any],
    bikes: list[dict[str, Any]],
) -> Booking:
    """Overwrite booking fields and swap its line items."""

    for name, value in fields.items():
        setattr(booking, name, value)
    booking.bikes = _line_items(bikes)
    session.add(booking)
    await session.flush()
    return booking


async def delete_booking(session: AsyncSession, booking: Booking) -> None:
    """Hard-delete a booking; line items go with it."""

    await session.delete(booking)
    await session.flush()


async def delete_all(session: AsyncSession) -> None:
    await session.execute(delete(BookingBike))
    await session.execute(delete(Booking))


async def count_bookings(session: AsyncSession) -> int:
    result = await session.execute(select(func.count(Booking.id)))
    return result.scalar_one()
