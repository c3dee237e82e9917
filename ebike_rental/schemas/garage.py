"""Schemas for garage management."""
from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field, model_validator
from pydantic_core import PydanticCustomError

from ..models.enums import BikeSize, BikeType, Suspension


class BikeRequest(BaseModel):
    id: str | None = Field(default=None, min_length=1)
    name: str = Field(min_length=1)
    brand: str = ""
    model: str | None = None
    type: BikeType
    size: BikeSize | None = None
    suspension: Suspension | None = None
    has_trailer_hook: bool = False
    description: str = ""
    min_height: int | None = Field(default=None, gt=0)
    max_height: int | None = Field(default=None, gt=0)
    purchase_date: dt.date | None = None
    purchase_price: float | None = Field(default=None, ge=0)
    is_active: bool = True
    next_maintenance_date: dt.date | None = None

    @model_validator(mode="after")
    def _check_attributes(self) -> "BikeRequest":
        if self.type.is_trailer:
            self.size = None
            self.suspension = None
            self.has_trailer_hook = False
            self.min_height = None
            self.max_height = None
        elif self.size is None or self.suspension is None:
            raise PydanticCustomError("missing", "size and suspension are required for bikes")
        if self.min_height is not None and self.max_height is not None and self.min_height > self.max_height:
            raise ValueError("min_height must not exceed max_height")
        return self


class MaintenanceRequest(BaseModel):
    date: dt.date
    type: str = Field(min_length=1)
    description: str = ""
    cost: float = Field(default=0, ge=0)
    mechanic: str | None = None
    notes: str | None = None
    next_maintenance_date: dt.date | None = None


class MaintenanceEntry(BaseModel):
    id: str
    date: dt.date
    type: str
    description: str
    cost: float
    mechanic: str | None = None
    notes: str | None = None


class BikeResponse(BaseModel):
    id: str
    name: str
    brand: str
    model: str | None = None
    type: BikeType
    size: BikeSize | None = None
    suspension: Suspension | None = None
    has_trailer_hook: bool
    description: str
    min_height: int | None = None
    max_height: int | None = None
    purchase_date: dt.date | None = None
    purchase_price: float | None = None
    is_active: bool
    total_maintenance_cost: float
    last_maintenance_date: dt.date | None = None
    next_maintenance_date: dt.date | None = None
    maintenance: list[MaintenanceEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _clear_trailer_attributes(self) -> "BikeResponse":
        if self.type.is_trailer:
            self.size = None
            self.suspension = None
            self.has_trailer_hook = False
            self.min_height = None
            self.max_height = None
        return self


class BikeListResponse(BaseModel):
    items: list[BikeResponse]


class BikePerformance(BaseModel):
    bike_id: str
    name: str
    type: BikeType
    total_cost: float
    estimated_revenue: float
    profitability: float


class BikePerformanceResponse(BaseModel):
    items: list[BikePerformance]
    average_profitability: float
