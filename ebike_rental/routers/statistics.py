"""Dashboard statistics endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import statistics as stats_schema
from ..services import statistics as stats_service

router = APIRouter(tags=["statistics"])


@router.get("/statistics", response_model=stats_schema.StatisticsResponse)
async def get_statistics(
    period: stats_schema.StatsPeriod = stats_schema.StatsPeriod.MONTH,
    session: AsyncSession = Depends(get_session),
) -> stats_schema.StatisticsResponse:
    """Return revenue, booking and cost figures for a period."""

    return await stats_service.get_statistics(period, session)
