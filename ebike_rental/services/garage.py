"""Garage management: bikes, maintenance and profitability estimates."""
from __future__ import annotations

import logging
from datetime import date

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.bike import Bike
from ..repositories import bikes as bikes_repo
from ..schemas import garage as schemas

logger = logging.getLogger(__name__)

ESTIMATED_DAILY_REVENUE = 50.0
ESTIMATED_UTILIZATION = 0.3
DEFAULT_DAYS_OWNED = 365


def to_response(bike: Bike) -> schemas.BikeResponse:
    return schemas.BikeResponse(
        id=bike.id,
        name=bike.name,
        brand=bike.brand,
        model=bike.model,
        type=bike.type,
        size=bike.size,
        suspension=bike.suspension,
        has_trailer_hook=bike.has_trailer_hook,
        description=bike.description,
        min_height=bike.min_height,
        max_height=bike.max_height,
        purchase_date=bike.purchase_date,
        purchase_price=bike.purchase_price,
        is_active=bike.is_active,
        total_maintenance_cost=bike.total_maintenance_cost or 0.0,
        last_maintenance_date=bike.last_maintenance_date,
        next_maintenance_date=bike.next_maintenance_date,
        maintenance=[
            schemas.MaintenanceEntry(
                id=record.id,
                date=record.service_date,
                type=record.type,
                description=record.description,
                cost=record.cost,
                mechanic=record.mechanic,
                notes=record.notes,
            )
            for record in bike.maintenance
        ],
    )


def _bike_fields(payload: schemas.BikeRequest) -> dict[str, object]:
    return payload.model_dump(exclude={"id"})


def estimate_profitability(bike: Bike, *, today: date | None = None) -> schemas.BikePerformance:
    """Rough profit estimate: 50/day at 30% utilisation since purchase, minus costs."""

    today = today or date.today()
    days_owned = (today - bike.purchase_date).days if bike.purchase_date else DEFAULT_DAYS_OWNED
    estimated_revenue = max(days_owned, 0) * ESTIMATED_DAILY_REVENUE * ESTIMATED_UTILIZATION
    total_cost = (bike.purchase_price or 0.0) + (bike.total_maintenance_cost or 0.0)
    return schemas.BikePerformance(
        bike_id=bike.id,
        name=bike.name,
        type=bike.type,
        total_cost=round(total_cost, 2),
        estimated_revenue=round(estimated_revenue, 2),
        profitability=round(estimated_revenue - total_cost, 2),
    )


async def list_bikes(session: AsyncSession, *, active_only: bool = False) -> schemas.BikeListResponse:
    bikes = await bikes_repo.list_bikes(session, active_only=active_only)
    return schemas.BikeListResponse(items=[to_response(bike) for bike in bikes])


async def get_bike(bike_id: str, session: AsyncSession) -> schemas.BikeResponse:
    bike = await bikes_repo.get_by_id(session, bike_id)
    if bike is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bike not found")
    return to_response(bike)


async def create_bike(payload: schemas.BikeRequest, session: AsyncSession) -> schemas.BikeResponse:
    """Add a unit to the garage."""

    async with session.begin():
        if payload.id and await bikes_repo.get_by_id(session, payload.id) is not None:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Bike id already exists")
        bike = await bikes_repo.create_bike(session, bike_id=payload.id, fields=_bike_fields(payload))
        response = to_response(bike)

    logger.info("Bike %s added (%s, %s)", bike.id, payload.name, payload.type.value)
    return response


async def update_bike(bike_id: str, payload: schemas.BikeRequest, session: AsyncSession) -> schemas.BikeResponse:
    async with session.begin():
        bike = await bikes_repo.get_by_id(session, bike_id)
        if bike is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bike not found")
        for name, value in _bike_fields(payload).items():
            setattr(bike, name, value)
        session.add(bike)
        response = to_response(bike)

    logger.info("Bike %s updated", bike_id)
    return response


async def retire_bike(bike_id: str, session: AsyncSession) -> schemas.BikeResponse:
    """Take a unit out of service; its history stays for the analytics."""

    async with session.begin():
        bike = await bikes_repo.get_by_id(session, bike_id)
        if bike is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bike not found")
        bike.is_active = False
        session.add(bike)
        response = to_response(bike)

    logger.info("Bike %s retired", bike_id)
    return response


async def record_maintenance(
    bike_id: str,
    payload: schemas.MaintenanceRequest,
    session: AsyncSession,
) -> schemas.BikeResponse:
    """Log a service on a bike, adding its cost to the running total."""

    async with session.begin():
        bike = await bikes_repo.get_by_id(session, bike_id)
        if bike is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Bike not found")
        await bikes_repo.add_maintenance(
            session,
            bike,
            fields={
                "service_date": payload.date,
                "type": payload.type,
                "description": payload.description,
                "cost": payload.cost,
                "mechanic": payload.mechanic,
                "notes": payload.notes,
            },
        )
        if payload.next_maintenance_date is not None:
            bike.next_maintenance_date = payload.next_maintenance_date
        response = to_response(bike)

    logger.info("Maintenance recorded for bike %s (%s, cost=%.2f)", bike_id, payload.type, payload.cost)
    return response


async def bike_performance(session: AsyncSession, *, today: date | None = None) -> schemas.BikePerformanceResponse:
    bikes = await bikes_repo.list_bikes(session)
    items = [estimate_profitability(bike, today=today) for bike in bikes]
    average = sum(item.profitability for item in items) / len(items) if items else 0.0
    return schemas.BikePerformanceResponse(items=items, average_profitability=round(average, 2))
