"""Dashboard statistics over bookings and fixed costs."""
from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.booking import Booking
from ..models.enums import BookingStatus, RentalCategory
from ..repositories import bookings as bookings_repo
from ..repositories import fixed_costs as costs_repo
from ..schemas import statistics as schemas
from ..schemas.bookings import BikeGroupCount
from . import availability, pricing
from .fixed_costs import summarize

DAYS_PER_MONTH = 30


def period_range(period: schemas.StatsPeriod, today: date) -> tuple[date, date]:
    """Return the inclusive date range covered by a period ending today."""

    if period is schemas.StatsPeriod.TODAY:
        return today, today
    if period is schemas.StatsPeriod.WEEK:
        return today - timedelta(days=6), today
    if period is schemas.StatsPeriod.MONTH:
        return today.replace(day=1), today
    return today.replace(month=1, day=1), today


def previous_range(start: date, end: date) -> tuple[date, date]:
    """The equally long range immediately before ``start``."""

    previous_end = start - timedelta(days=1)
    return previous_end - (end - start), previous_end


def growth_pct(current: float, previous: float) -> float:
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return round((current - previous) / previous * 100, 2)


def _revenue(bookings: Sequence[Booking]) -> float:
    return round(sum(booking.total_price for booking in bookings), 2)


def _most_rented(bookings: Sequence[Booking]) -> BikeGroupCount | None:
    counts: Counter[availability.GroupKey] = Counter()
    samples: dict[availability.GroupKey, object] = {}
    for booking in bookings:
        for item in booking.bikes:
            key = availability.group_key(item.bike_type, item.bike_size, item.bike_suspension, item.has_trailer_hook)
            counts[key] += item.count
            samples.setdefault(key, item)
    if not counts:
        return None
    key = min(counts, key=lambda k: (-counts[k], k))
    item = samples[key]
    return BikeGroupCount(
        type=item.bike_type,
        size=item.bike_size,
        suspension=item.bike_suspension,
        has_trailer_hook=bool(item.has_trailer_hook),
        count=counts[key],
    )


def build_statistics(
    period: schemas.StatsPeriod,
    start: date,
    end: date,
    bookings: Sequence[Booking],
    previous: Sequence[Booking],
    monthly_fixed_costs: float,
) -> schemas.StatisticsResponse:
    """Aggregate the period's bookings; cancelled bookings count only in ``by_status``."""

    by_status = Counter(getattr(booking.status, "value", booking.status) for booking in bookings)
    current = [booking for booking in bookings if booking.status != BookingStatus.CANCELLED]
    earlier = [booking for booking in previous if booking.status != BookingStatus.CANCELLED]

    revenue = _revenue(current)
    previous_revenue = _revenue(earlier)
    guided = sum(1 for booking in current if booking.needs_guide)
    total_hours = sum(
        pricing.rental_hours(booking.category, booking.start_time, booking.end_time) for booking in current
    )
    days = (end - start).days + 1
    fixed = round(monthly_fixed_costs * days / DAYS_PER_MONTH, 2)

    return schemas.StatisticsResponse(
        period=period,
        start=start,
        end=end,
        bookings=len(current),
        previous_bookings=len(earlier),
        booking_growth_pct=growth_pct(len(current), len(earlier)),
        revenue=revenue,
        previous_revenue=previous_revenue,
        revenue_growth_pct=growth_pct(revenue, previous_revenue),
        by_category={category: sum(1 for b in current if b.category == category) for category in RentalCategory},
        by_status=dict(by_status),
        guided_bookings=guided,
        guide_utilization_pct=round(guided / len(current) * 100, 2) if current else 0.0,
        average_rental_hours=round(total_hours / len(current), 2) if current else 0.0,
        average_booking_value=round(revenue / len(current), 2) if current else 0.0,
        most_rented=_most_rented(current),
        fixed_costs=fixed,
        net_profit=round(revenue - fixed, 2),
    )


async def get_statistics(
    period: schemas.StatsPeriod,
    session: AsyncSession,
    *,
    today: date | None = None,
) -> schemas.StatisticsResponse:
    today = today or date.today()
    start, end = period_range(period, today)
    previous_start, previous_end = previous_range(start, end)

    bookings = await bookings_repo.list_between(session, start=previous_start, end=end)
    current = [booking for booking in bookings if booking.booking_date >= start]
    previous = [booking for booking in bookings if booking.booking_date <= previous_end]

    costs = summarize(await costs_repo.list_costs(session, active_only=True))
    return build_statistics(period, start, end, current, previous, costs.total_monthly)
