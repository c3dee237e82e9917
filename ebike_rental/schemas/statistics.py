"""Schemas for dashboard statistics."""
from __future__ import annotations

import datetime as dt
import enum

from pydantic import BaseModel

from ..models.enums import RentalCategory
from .bookings import BikeGroupCount


class StatsPeriod(str, enum.Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class StatisticsResponse(BaseModel):
    period: StatsPeriod
    start: dt.date
    end: dt.date
    bookings: int
    previous_bookings: int
    booking_growth_pct: float
    revenue: float
    previous_revenue: float
    revenue_growth_pct: float
    by_category: dict[RentalCategory, int]
    by_status: dict[str, int]
    guided_bookings: int
    guide_utilization_pct: float
    average_rental_hours: float
    average_booking_value: float
    most_rented: BikeGroupCount | None = None
    fixed_costs: float
    net_profit: float
