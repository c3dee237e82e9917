"""Business logic for bookings, availability lookups and quotes."""
from __future__ import annotations

import logging
from datetime import date
from uuid import uuid4

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.bike import Bike
from ..models.booking import Booking
from ..models.enums import BookingStatus
from ..repositories import bikes as bikes_repo
from ..repositories import bookings as bookings_repo
from ..schemas import bookings as schemas
from . import availability, pricing
from .shop_settings import get_pricing_table

logger = logging.getLogger(__name__)


def to_unit(bike: Bike) -> availability.BikeUnit:
    return availability.BikeUnit(
        id=bike.id,
        type=bike.type,
        size=bike.size,
        suspension=bike.suspension,
        has_trailer_hook=bool(bike.has_trailer_hook),
        is_active=bool(bike.is_active),
    )


def to_record(booking: Booking) -> availability.BookingRecord:
    return availability.BookingRecord(
        id=booking.id,
        booking_date=booking.booking_date,
        start_time=booking.start_time,
        end_time=booking.end_time,
        category=booking.category,
        status=booking.status,
        bikes=tuple(
            availability.BikeLineItem(
                type=item.bike_type,
                size=item.bike_size,
                suspension=item.bike_suspension,
                has_trailer_hook=bool(item.has_trailer_hook),
                count=item.count,
            )
            for item in booking.bikes
        ),
    )


def to_line_items(items: list[schemas.BikeLineItem]) -> list[availability.BikeLineItem]:
    return [
        availability.BikeLineItem(
            type=item.type,
            size=item.size,
            suspension=item.suspension,
            has_trailer_hook=item.has_trailer_hook,
            count=item.count,
        )
        for item in items
    ]


def to_response(booking: Booking) -> schemas.BookingResponse:
    return schemas.BookingResponse(
        id=booking.id,
        customer_name=booking.customer_name,
        phone=booking.phone,
        email=booking.email,
        date=booking.booking_date,
        start_time=booking.start_time,
        end_time=booking.end_time,
        category=booking.category,
        needs_guide=booking.needs_guide,
        status=booking.status,
        total_price=booking.total_price,
        bikes=[
            schemas.BikeLineItem(
                type=item.bike_type,
                size=item.bike_size,
                suspension=item.bike_suspension,
                has_trailer_hook=item.has_trailer_hook,
                count=item.count,
            )
            for item in booking.bikes
        ],
        created_at=booking.created_at,
        updated_at=booking.updated_at,
    )


async def _available_groups(
    session: AsyncSession,
    window: schemas.RentalWindow,
    *,
    exclude_booking_id: str | None = None,
) -> list[availability.BikeGroup]:
    """Load the day's bookings and the active garage, then run the availability rules."""

    day_bookings = await bookings_repo.list_bookings(session, day=window.date)
    units = await bikes_repo.list_bikes(session, active_only=True)
    records = [to_record(booking) for booking in day_bookings if booking.id != exclude_booking_id]
    return availability.compute_availability(
        window.date,
        window.start_time,
        window.end_time,
        window.category,
        records,
        [to_unit(bike) for bike in units],
    )


async def list_bookings(
    session: AsyncSession,
    *,
    day: date | None = None,
    booking_status: BookingStatus | None = None,
) -> schemas.BookingListResponse:
    bookings = await bookings_repo.list_bookings(session, day=day, status=booking_status)
    return schemas.BookingListResponse(items=[to_response(booking) for booking in bookings])


async def get_booking(booking_id: str, session: AsyncSession) -> schemas.BookingResponse:
    booking = await bookings_repo.get_by_id(session, booking_id)
    if booking is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    return to_response(booking)


async def check_availability(
    payload: schemas.AvailabilityRequest,
    session: AsyncSession,
) -> schemas.AvailabilityResponse:
    """Return the bike groups still free for the requested window."""

    groups = await _available_groups(session, payload, exclude_booking_id=payload.exclude_booking_id)
    return schemas.AvailabilityResponse(
        date=payload.date,
        start_time=payload.start_time,
        end_time=payload.end_time,
        category=payload.category,
        groups=[
            schemas.BikeGroupCount(
                type=group.type,
                size=group.size,
                suspension=group.suspension,
                has_trailer_hook=group.has_trailer_hook,
                count=group.count,
            )
            for group in groups
        ],
        total_available=sum(group.count for group in groups),
    )


async def quote(payload: schemas.QuoteRequest, session: AsyncSession) -> schemas.QuoteResponse:
    """Price a selection with the shop's current rates."""

    table = await get_pricing_table(session)
    items = to_line_items(payload.bikes)
    base = pricing.compute_base_price(items, payload.category, payload.start_time, payload.end_time, table)
    total = pricing.compute_price(
        items, payload.category, payload.needs_guide, payload.start_time, payload.end_time, table
    )
    hours = pricing.rental_hours(payload.category, payload.start_time, payload.end_time)
    return schemas.QuoteResponse(
        base_price=round(base, 2),
        guide_price=round(total - base, 2),
        total_price=total,
        billable_hours=pricing.billable_hours(payload.start_time, payload.end_time),
        guide_hours=hours if payload.needs_guide else 0,
    )


def _describe_shortages(shortages: dict[availability.GroupKey, tuple[int, int]]) -> str:
    parts = []
    for (bike_type, size, suspension, hook), (wanted, free) in sorted(shortages.items()):
        label = bike_type if size == availability.NO_VALUE else f"{bike_type} {size} {suspension}"
        if hook:
            label += " with trailer hook"
        parts.append(f"{label}: requested {wanted}, available {free}")
    return "Not enough bikes available (" + "; ".join(parts) + ")"


async def _ensure_capacity(
    session: AsyncSession,
    payload: schemas.BookingRequest,
    *,
    exclude_booking_id: str | None,
) -> None:
    """Reject confirmed bookings that would promise more bikes than the garage holds."""

    if payload.status is not BookingStatus.CONFIRMED:
        return
    groups = await _available_groups(session, payload, exclude_booking_id=exclude_booking_id)
    shortages = availability.find_shortages(to_line_items(payload.bikes), groups)
    if shortages:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=_describe_shortages(shortages))


async def _booking_fields(payload: schemas.BookingRequest, session: AsyncSession) -> dict[str, object]:
    total_price = payload.total_price
    if total_price is None:
        table = await get_pricing_table(session)
        total_price = pricing.compute_price(
            to_line_items(payload.bikes),
            payload.category,
            payload.needs_guide,
            payload.start_time,
            payload.end_time,
            table,
        )
    return {
        "customer_name": payload.customer_name.strip(),
        "phone": payload.phone,
        "email": payload.email,
        "booking_date": payload.date,
        "start_time": payload.start_time,
        "end_time": payload.end_time,
        "category": payload.category,
        "needs_guide": payload.needs_guide,
        "status": payload.status,
        "total_price": total_price,
    }


def _bike_rows(payload: schemas.BookingRequest) -> list[dict[str, object]]:
    return [item.model_dump() for item in payload.bikes]


async def create_booking(
    payload: schemas.BookingRequest,
    session: AsyncSession,
) -> schemas.BookingResponse:
    """Create a booking, guarding against overbooking the garage."""

    booking_id = payload.id or str(uuid4())

    async with session.begin():
        if payload.id and await bookings_repo.get_by_id(session, payload.id) is not None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Booking id already exists")

        await _ensure_capacity(session, payload, exclude_booking_id=None)
        fields = await _booking_fields(payload, session)
        booking = await bookings_repo.create_booking(
            session, booking_id=booking_id, fields=fields, bikes=_bike_rows(payload)
        )
        response = to_response(booking)

    logger.info(
        "Booking %s created for %s on %s %s-%s (%s, %s)",
        booking_id,
        payload.customer_name,
        payload.date,
        payload.start_time,
        payload.end_time,
        payload.category.value,
        payload.status.value,
    )
    return response


async def update_booking(
    booking_id: str,
    payload: schemas.BookingRequest,
    session: AsyncSession,
) -> schemas.BookingResponse:
    """Replace a booking's details; any status may move to any other."""

    async with session.begin():
        booking = await bookings_repo.get_by_id(session, booking_id)
        if booking is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")

        await _ensure_capacity(session, payload, exclude_booking_id=booking_id)
        fields = await _booking_fields(payload, session)
        booking = await bookings_repo.replace_booking(session, booking, fields=fields, bikes=_bike_rows(payload))
        response = to_response(booking)

    logger.info("Booking %s updated (status=%s)", booking_id, payload.status.value)
    return response


async def delete_booking(booking_id: str, session: AsyncSession) -> None:
    async with session.begin():
        booking = await bookings_repo.get_by_id(session, booking_id)
        if booking is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
        await bookings_repo.delete_booking(session, booking)

    logger.info("Booking %s deleted", booking_id)
