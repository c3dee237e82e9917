"""Enumerations shared by the ORM models, schemas and pricing/availability rules."""
from __future__ import annotations

import enum


class BikeType(str, enum.Enum):
    CHILD = "child"
    ADULT = "adult"
    TRAILER = "trailer"
    CHILD_TRAILER = "child-trailer"

    @property
    def is_trailer(self) -> bool:
        return self in (BikeType.TRAILER, BikeType.CHILD_TRAILER)


class BikeSize(str, enum.Enum):
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"


class Suspension(str, enum.Enum):
    FULL = "full"
    FRONT_ONLY = "front-only"


class RentalCategory(str, enum.Enum):
    HOURLY = "hourly"
    HALF_DAY = "half-day"
    FULL_DAY = "full-day"


class BookingStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    PENDING = "pending"
    CANCELLED = "cancelled"


class CostCategory(str, enum.Enum):
    RENT = "rent"
    INSURANCE = "insurance"
    UTILITIES = "utilities"
    INTERNET = "internet"
    MAINTENANCE = "maintenance"
    GENERAL = "general"


class CostFrequency(str, enum.Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"
    ONE_TIME = "one-time"
