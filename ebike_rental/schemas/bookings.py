"""Schemas for bookings, availability lookups and quotes."""
from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field, model_validator
from pydantic_core import PydanticCustomError

from ..models.enums import BikeSize, BikeType, BookingStatus, RentalCategory, Suspension

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
PHONE_PATTERN = r"^\+?[0-9][0-9 ()\-]{5,19}$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class BikeLineItem(BaseModel):
    type: BikeType
    size: BikeSize | None = None
    suspension: Suspension | None = None
    has_trailer_hook: bool = False
    count: int = Field(gt=0)

    @model_validator(mode="after")
    def _check_attributes(self) -> "BikeLineItem":
        """Trailers carry no size or suspension; bikes need both."""

        if self.type.is_trailer:
            self.size = None
            self.suspension = None
            self.has_trailer_hook = False
        elif self.size is None or self.suspension is None:
            raise PydanticCustomError("missing", "size and suspension are required for bikes")
        return self


class RentalWindow(BaseModel):
    date: dt.date
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    category: RentalCategory

    @model_validator(mode="after")
    def _check_order(self) -> "RentalWindow":
        if self.category is RentalCategory.HOURLY and self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class BookingRequest(RentalWindow):
    id: str | None = Field(default=None, min_length=1)
    customer_name: str = Field(min_length=1)
    phone: str = Field(pattern=PHONE_PATTERN)
    email: str | None = Field(default=None, pattern=EMAIL_PATTERN)
    needs_guide: bool = False
    status: BookingStatus = BookingStatus.CONFIRMED
    total_price: float | None = Field(default=None, ge=0)
    bikes: list[BikeLineItem] = Field(min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _blank_email(cls, data: object) -> object:
        """Treat an empty email field as absent."""

        if isinstance(data, dict) and isinstance(data.get("email"), str) and not data["email"].strip():
            return {**data, "email": None}
        return data


class BookingResponse(BaseModel):
    id: str
    customer_name: str
    phone: str
    email: str | None = None
    date: dt.date
    start_time: str
    end_time: str
    category: RentalCategory
    needs_guide: bool
    status: BookingStatus
    total_price: float
    bikes: list[BikeLineItem]
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class BookingListResponse(BaseModel):
    items: list[BookingResponse]


class AvailabilityRequest(RentalWindow):
    exclude_booking_id: str | None = None


class BikeGroupCount(BaseModel):
    type: BikeType
    size: BikeSize | None = None
    suspension: Suspension | None = None
    has_trailer_hook: bool = False
    count: int


class AvailabilityResponse(BaseModel):
    date: dt.date
    start_time: str
    end_time: str
    category: RentalCategory
    groups: list[BikeGroupCount]
    total_available: int


class QuoteRequest(BaseModel):
    bikes: list[BikeLineItem] = Field(min_length=1)
    category: RentalCategory
    needs_guide: bool = False
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)


class QuoteResponse(BaseModel):
    base_price: float
    guide_price: float
    total_price: float
    billable_hours: int
    guide_hours: int
