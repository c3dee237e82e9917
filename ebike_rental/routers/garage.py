"""Garage endpoints: bikes, maintenance and profitability."""
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import garage as garage_schema
from ..services import garage as garage_service

router = APIRouter(prefix="/bikes", tags=["garage"])


@router.get("", response_model=garage_schema.BikeListResponse)
async def list_bikes(
    active_only: bool = False,
    session: AsyncSession = Depends(get_session),
) -> garage_schema.BikeListResponse:
    return await garage_service.list_bikes(session, active_only=active_only)


@router.post("", response_model=garage_schema.BikeResponse, status_code=status.HTTP_201_CREATED)
async def create_bike(
    payload: garage_schema.BikeRequest,
    session: AsyncSession = Depends(get_session),
) -> garage_schema.BikeResponse:
    return await garage_service.create_bike(payload, session)


@router.get("/performance", response_model=garage_schema.BikePerformanceResponse)
async def bike_performance(session: AsyncSession = Depends(get_session)) -> garage_schema.BikePerformanceResponse:
    """Return estimated profitability for every bike."""

    return await garage_service.bike_performance(session)


@router.get("/{bike_id}", response_model=garage_schema.BikeResponse)
async def get_bike(bike_id: str, session: AsyncSession = Depends(get_session)) -> garage_schema.BikeResponse:
    return await garage_service.get_bike(bike_id, session)


@router.put("/{bike_id}", response_model=garage_schema.BikeResponse)
async def update_bike(
    bike_id: str,
    payload: garage_schema.BikeRequest,
    session: AsyncSession = Depends(get_session),
) -> garage_schema.BikeResponse:
    return await garage_service.update_bike(bike_id, payload, session)


@router.delete("/{bike_id}", response_model=garage_schema.BikeResponse)
async def retire_bike(bike_id: str, session: AsyncSession = Depends(get_session)) -> garage_schema.BikeResponse:
    """Retire a bike; it stays on record but is no longer rentable."""

    return await garage_service.retire_bike(bike_id, session)


@router.post("/{bike_id}/maintenance", response_model=garage_schema.BikeResponse)
async def record_maintenance(
    bike_id: str,
    payload: garage_schema.MaintenanceRequest,
    session: AsyncSession = Depends(get_session),
) -> garage_schema.BikeResponse:
    return await garage_service.record_maintenance(bike_id, payload, session)
