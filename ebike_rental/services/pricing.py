"""Rental price rules."""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from ..models.enums import BikeType, RentalCategory

FULL_DAY_HOURS = 8
HALF_DAY_HOURS = 4

TRAILER_TYPES = frozenset({BikeType.TRAILER.value, BikeType.CHILD_TRAILER.value})


class PricedItem(Protocol):
    type: BikeType
    count: int


@dataclass(frozen=True, slots=True)
class PricingTable:
    hourly: float
    half_day: float
    full_day: float
    trailer_hourly: float
    trailer_half_day: float
    trailer_full_day: float
    guide_hourly: float

    def rate_for(self, bike_type: BikeType | str, category: RentalCategory | str) -> float:
        """Return the per-unit rate for a bike type in a category."""

        trailer = is_trailer(bike_type)
        if category == RentalCategory.FULL_DAY:
            return self.trailer_full_day if trailer else self.full_day
        if category == RentalCategory.HALF_DAY:
            return self.trailer_half_day if trailer else self.half_day
        return self.trailer_hourly if trailer else self.hourly


def is_trailer(bike_type: BikeType | str) -> bool:
    return getattr(bike_type, "value", bike_type) in TRAILER_TYPES


def hour_of(value: str) -> int:
    """Return the hour component of ``HH:MM``; minutes are ignored, junk reads as 0."""

    head = str(value).split(":", 1)[0].strip()
    try:
        return int(head)
    except ValueError:
        return 0


def billable_hours(start_time: str, end_time: str) -> int:
    """Whole hours between two times, by hour component only, never negative.

    09:30-11:15 bills two hours (11 - 9), 10:45-11:05 bills one.
    """

    return max(0, hour_of(end_time) - hour_of(start_time))


def rental_hours(category: RentalCategory | str, start_time: str, end_time: str) -> int:
    """Hours a rental lasts for guide billing and reporting."""

    if category == RentalCategory.FULL_DAY:
        return FULL_DAY_HOURS
    if category == RentalCategory.HALF_DAY:
        return HALF_DAY_HOURS
    return billable_hours(start_time, end_time)


def compute_base_price(
    items: Iterable[PricedItem],
    category: RentalCategory | str,
    start_time: str,
    end_time: str,
    pricing: PricingTable,
) -> float:
    per_period = sum(pricing.rate_for(item.type, category) * item.count for item in items)
    if category in (RentalCategory.FULL_DAY, RentalCategory.HALF_DAY):
        return per_period
    return per_period * billable_hours(start_time, end_time)


def compute_price(
    items: Iterable[PricedItem],
    category: RentalCategory | str,
    needs_guide: bool,
    start_time: str,
    end_time: str,
    pricing: PricingTable,
) -> float:
    """Return the total price of a rental.

    The guide is billed once per rental, whatever the number of bikes.
    """

    base = compute_base_price(items, category, start_time, end_time, pricing)
    guide = pricing.guide_hourly * rental_hours(category, start_time, end_time) if needs_guide else 0.0
    return round(base + guide, 2)
