"""Tests for dashboard statistics."""
from __future__ import annotations

from datetime import date
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from ebike_rental.models.enums import (
    BikeSize,
    BikeType,
    BookingStatus,
    CostFrequency,
    RentalCategory,
    Suspension,
)
from ebike_rental.repositories import bookings as bookings_repo
from ebike_rental.repositories import fixed_costs as costs_repo
from ebike_rental.schemas.statistics import StatsPeriod
from ebike_rental.services import statistics as stats_service

TODAY = date(2025, 6, 14)


def booking_stub(
    day: date,
    price: float,
    *,
    category: RentalCategory = RentalCategory.HOURLY,
    status: BookingStatus = BookingStatus.CONFIRMED,
    guide: bool = False,
    start: str = "09:00",
    end: str = "11:00",
    bikes: list[SimpleNamespace] | None = None,
) -> SimpleNamespace:
    return SimpleNamespace(
        booking_date=day,
        total_price=price,
        category=category,
        status=status,
        needs_guide=guide,
        start_time=start,
        end_time=end,
        bikes=bikes or [],
    )


def item(bike_type: BikeType, count: int, size=None, suspension=None) -> SimpleNamespace:
    return SimpleNamespace(
        bike_type=bike_type,
        bike_size=size,
        bike_suspension=suspension,
        has_trailer_hook=False,
        count=count,
    )


@pytest.mark.parametrize(
    ("period", "start"),
    [
        (StatsPeriod.TODAY, date(2025, 6, 14)),
        (StatsPeriod.WEEK, date(2025, 6, 8)),
        (StatsPeriod.MONTH, date(2025, 6, 1)),
        (StatsPeriod.YEAR, date(2025, 1, 1)),
    ],
)
def test_period_range(period, start):
    assert stats_service.period_range(period, TODAY) == (start, TODAY)


def test_previous_range_has_the_same_length():
    assert stats_service.previous_range(date(2025, 6, 8), date(2025, 6, 14)) == (date(2025, 6, 1), date(2025, 6, 7))
    assert stats_service.previous_range(TODAY, TODAY) == (date(2025, 6, 13), date(2025, 6, 13))


@pytest.mark.parametrize(
    ("current", "previous", "expected"),
    [(150, 100, 50.0), (50, 100, -50.0), (10, 0, 100.0), (0, 0, 0.0)],
)
def test_growth_pct(current, previous, expected):
    assert stats_service.growth_pct(current, previous) == expected


def test_build_statistics_aggregates_current_period():
    adult = item(BikeType.ADULT, 2, BikeSize.M, Suspension.FULL)
    trailer = item(BikeType.TRAILER, 1)
    current = [
        booking_stub(TODAY, 100, guide=True, bikes=[adult]),
        booking_stub(TODAY, 140, category=RentalCategory.FULL_DAY, bikes=[adult, trailer]),
        booking_stub(TODAY, 500, status=BookingStatus.CANCELLED, bikes=[trailer, trailer, trailer]),
        booking_stub(TODAY, 60, category=RentalCategory.HALF_DAY, status=BookingStatus.PENDING, bikes=[trailer]),
    ]
    previous = [booking_stub(date(2025, 6, 13), 150)]

    stats = stats_service.build_statistics(StatsPeriod.TODAY, TODAY, TODAY, current, previous, 300)

    assert stats.bookings == 3
    assert stats.previous_bookings == 1
    assert stats.revenue == 300
    assert stats.revenue_growth_pct == 100.0
    assert stats.booking_growth_pct == 200.0
    assert stats.by_category == {
        RentalCategory.HOURLY: 1,
        RentalCategory.HALF_DAY: 1,
        RentalCategory.FULL_DAY: 1,
    }
    assert stats.by_status == {"confirmed": 2, "cancelled": 1, "pending": 1}
    assert stats.guided_bookings == 1
    assert stats.average_rental_hours == round((2 + 8 + 4) / 3, 2)
    assert stats.average_booking_value == 100
    assert stats.most_rented is not None
    assert stats.most_rented.type is BikeType.ADULT
    assert stats.most_rented.count == 4
    assert stats.fixed_costs == 10
    assert stats.net_profit == 290


def test_build_statistics_on_empty_period():
    stats = stats_service.build_statistics(StatsPeriod.WEEK, date(2025, 6, 8), TODAY, [], [], 0)

    assert stats.bookings == 0
    assert stats.revenue == 0
    assert stats.average_rental_hours == 0
    assert stats.most_rented is None
    assert stats.net_profit == 0


@pytest.mark.asyncio
async def test_get_statistics_splits_loaded_bookings_by_period(monkeypatch):
    loaded = [booking_stub(date(2025, 6, 5), 80), booking_stub(date(2025, 6, 10), 120)]
    list_between = AsyncMock(return_value=loaded)
    monkeypatch.setattr(bookings_repo, "list_between", list_between)
    monkeypatch.setattr(
        costs_repo,
        "list_costs",
        AsyncMock(
            return_value=[
                SimpleNamespace(
                    amount=600, frequency=CostFrequency.MONTHLY, category="rent", is_active=True
                )
            ]
        ),
    )

    stats = await stats_service.get_statistics(StatsPeriod.WEEK, AsyncMock(), today=TODAY)

    list_between.assert_awaited_once()
    assert list_between.await_args.kwargs == {"start": date(2025, 6, 1), "end": TODAY}
    assert stats.revenue == 120
    assert stats.previous_revenue == 80
    assert stats.fixed_costs == 140
    assert stats.net_profit == -20
