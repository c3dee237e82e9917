"""Garage persistence helpers."""
from __future__ import annotations

from typing import Any
from uuid import uuid4

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.bike import Bike, MaintenanceRecord


async def get_by_id(session: AsyncSession, bike_id: str) -> Bike | None:
    """Return a bike with its maintenance history."""

    return await session.get(Bike, bike_id)


async def list_bikes(session: AsyncSession, *, active_only: bool = False) -> list[Bike]:
    """Return garage units ordered by type, size and name."""

    stmt = select(Bike)
    if active_only:
        stmt = stmt.where(Bike.is_active.is_(True))
    stmt = stmt.order_by(Bike.type.asc(), Bike.size.asc(), Bike.name.asc())
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def count_bikes(session: AsyncSession) -> tuple[int, int]:
    """Return ``(total, active)`` unit counts."""

    total = await session.execute(select(func.count(Bike.id)))
    active = await session.execute(select(func.count(Bike.id)).where(Bike.is_active.is_(True)))
    return total.scalar_one(), active.scalar_one()


async def create_bike(session: AsyncSession, *, bike_id: str | None, fields: dict[str, Any]) -> Bike:
    """Persist a new garage unit."""

    bike = Bike(id=bike_id or str(uuid4()), maintenance=[], **fields)
    session.add(bike)
    await session.flush()
    return bike


async def add_maintenance(session: AsyncSession, bike: Bike, *, fields: dict[str, Any]) -> MaintenanceRecord:
    """Attach a maintenance record to the bike and roll its totals forward."""

    record = MaintenanceRecord(id=str(uuid4()), bike_id=bike.id, **fields)
    bike.maintenance.append(record)
    bike.total_maintenance_cost = (bike.total_maintenance_cost or 0.0) + record.cost
    if bike.last_maintenance_date is None or record.service_date > bike.last_maintenance_date:
        bike.last_maintenance_date = record.service_date
    session.add(bike)
    await session.flush()
    return record


async def delete_all(session: AsyncSession) -> None:
    await session.execute(delete(MaintenanceRecord))
    await session.execute(delete(Bike))


async def restore_bike(
    session: AsyncSession,
    *,
    fields: dict[str, Any],
    maintenance: list[dict[str, Any]],
) -> Bike:
    """Insert a bike and its maintenance history as exported, totals untouched."""

    bike = Bike(**fields)
    bike.maintenance = [MaintenanceRecord(bike_id=bike.id, **record) for record in maintenance]
    session.add(bike)
    await session.flush()
    return bike
