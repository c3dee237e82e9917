"""Schemas for shop settings and pricing."""
from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from .bookings import EMAIL_PATTERN, PHONE_PATTERN, TIME_PATTERN


class Pricing(BaseModel):
    hourly: float = Field(ge=0)
    half_day: float = Field(ge=0)
    full_day: float = Field(ge=0)
    trailer_hourly: float = Field(ge=0)
    trailer_half_day: float = Field(ge=0)
    trailer_full_day: float = Field(ge=0)
    guide_hourly: float = Field(ge=0)


class ShopSettingsPayload(BaseModel):
    shop_name: str = Field(min_length=1)
    phone: str = Field(pattern=PHONE_PATTERN)
    email: str = Field(pattern=EMAIL_PATTERN)
    opening_time: str = Field(pattern=TIME_PATTERN)
    closing_time: str = Field(pattern=TIME_PATTERN)
    pricing: Pricing

    @model_validator(mode="after")
    def _check_hours(self) -> "ShopSettingsPayload":
        if self.closing_time <= self.opening_time:
            raise ValueError("closing_time must be after opening_time")
        return self
