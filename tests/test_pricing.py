"""Tests for rental price rules."""
from __future__ import annotations

import pytest

from ebike_rental.models.enums import BikeType, RentalCategory
from ebike_rental.services import pricing
from ebike_rental.services.availability import BikeLineItem

TABLE = pricing.PricingTable(
    hourly=15,
    half_day=45,
    full_day=70,
    trailer_hourly=8,
    trailer_half_day=20,
    trailer_full_day=35,
    guide_hourly=25,
)


def items(*pairs: tuple[BikeType, int]) -> list[BikeLineItem]:
    return [BikeLineItem(type=bike_type, count=count) for bike_type, count in pairs]


def test_hourly_two_adults_for_three_hours():
    price = pricing.compute_price(
        items((BikeType.ADULT, 2)), RentalCategory.HOURLY, False, "09:00", "12:00", TABLE
    )

    assert price == 90


def test_full_day_bike_and_trailer_use_their_own_rates():
    price = pricing.compute_price(
        items((BikeType.ADULT, 1), (BikeType.TRAILER, 1)), RentalCategory.FULL_DAY, False, "09:00", "17:00", TABLE
    )

    assert price == 105


def test_half_day_guide_is_billed_four_hours():
    price = pricing.compute_price(
        items((BikeType.ADULT, 1)), RentalCategory.HALF_DAY, True, "09:00", "13:00", TABLE
    )

    assert price == 145


def test_zero_length_hourly_rental_has_no_base_price():
    base = pricing.compute_base_price(items((BikeType.ADULT, 3)), RentalCategory.HOURLY, "10:00", "10:00", TABLE)

    assert base == 0


def test_minutes_are_ignored_for_hourly_duration():
    assert pricing.billable_hours("09:30", "11:15") == 2
    assert pricing.billable_hours("10:45", "11:05") == 1
    assert pricing.compute_price(
        items((BikeType.ADULT, 1)), RentalCategory.HOURLY, False, "09:30", "11:15", TABLE
    ) == 30


def test_end_before_start_prices_at_zero():
    assert pricing.compute_price(
        items((BikeType.ADULT, 2)), RentalCategory.HOURLY, True, "14:00", "10:00", TABLE
    ) == 0


def test_guide_is_not_multiplied_by_bike_count():
    single = pricing.compute_price(items((BikeType.ADULT, 1)), RentalCategory.FULL_DAY, True, "", "", TABLE)
    many = pricing.compute_price(items((BikeType.ADULT, 4)), RentalCategory.FULL_DAY, True, "", "", TABLE)

    assert single == 70 + 25 * 8
    assert many - single == 3 * 70


@pytest.mark.parametrize(
    ("bike_type", "category", "expected"),
    [
        (BikeType.CHILD, RentalCategory.HOURLY, 15),
        (BikeType.CHILD_TRAILER, RentalCategory.HOURLY, 8),
        (BikeType.TRAILER, RentalCategory.HALF_DAY, 20),
        ("child-trailer", "full-day", 35),
    ],
)
def test_rate_for_picks_trailer_rates(bike_type, category, expected):
    assert TABLE.rate_for(bike_type, category) == expected


@pytest.mark.parametrize("value", ["", "xx:00", None])
def test_hour_of_reads_junk_as_zero(value):
    assert pricing.hour_of(value) == 0
