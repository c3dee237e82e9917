"""Schemas for the fixed-cost ledger."""
from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from ..models.enums import CostCategory, CostFrequency


class FixedCostRequest(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    amount: float = Field(gt=0)
    category: CostCategory = CostCategory.GENERAL
    frequency: CostFrequency
    start_date: dt.date
    is_active: bool = True


class FixedCostResponse(FixedCostRequest):
    id: int
    monthly_cost: float
    annual_cost: float


class FixedCostListResponse(BaseModel):
    items: list[FixedCostResponse]


class FixedCostSummary(BaseModel):
    total_monthly: float
    total_annual: float
    monthly_by_category: dict[CostCategory, float]
    active_count: int
