"""Booking, availability and quote endpoints."""
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..models.enums import BookingStatus
from ..schemas import bookings as bookings_schema
from ..services import bookings as bookings_service

router = APIRouter(tags=["bookings"])


@router.get("/bookings", response_model=bookings_schema.BookingListResponse)
async def list_bookings(
    day: date | None = Query(default=None, alias="date"),
    booking_status: BookingStatus | None = Query(default=None, alias="status"),
    session: AsyncSession = Depends(get_session),
) -> bookings_schema.BookingListResponse:
    """Return bookings, optionally for one day or status."""

    return await bookings_service.list_bookings(session, day=day, booking_status=booking_status)


@router.post(
    "/bookings",
    response_model=bookings_schema.BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    payload: bookings_schema.BookingRequest,
    session: AsyncSession = Depends(get_session),
) -> bookings_schema.BookingResponse:
    return await bookings_service.create_booking(payload, session)


@router.get("/bookings/{booking_id}", response_model=bookings_schema.BookingResponse)
async def get_booking(
    booking_id: str,
    session: AsyncSession = Depends(get_session),
) -> bookings_schema.BookingResponse:
    return await bookings_service.get_booking(booking_id, session)


@router.put("/bookings/{booking_id}", response_model=bookings_schema.BookingResponse)
async def update_booking(
    booking_id: str,
    payload: bookings_schema.BookingRequest,
    session: AsyncSession = Depends(get_session),
) -> bookings_schema.BookingResponse:
    return await bookings_service.update_booking(booking_id, payload, session)


@router.delete("/bookings/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_booking(
    booking_id: str,
    session: AsyncSession = Depends(get_session),
) -> Response:
    await bookings_service.delete_booking(booking_id, session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/availability", response_model=bookings_schema.AvailabilityResponse)
async def check_availability(
    payload: bookings_schema.AvailabilityRequest,
    session: AsyncSession = Depends(get_session),
) -> bookings_schema.AvailabilityResponse:
    """Return the bike groups still free for a rental window."""

    return await bookings_service.check_availability(payload, session)


@router.post("/quote", response_model=bookings_schema.QuoteResponse)
async def quote(
    payload: bookings_schema.QuoteRequest,
    session: AsyncSession = Depends(get_session),
) -> bookings_schema.QuoteResponse:
    """Price a bike selection with the current rates."""

    return await bookings_service.quote(payload, session)
