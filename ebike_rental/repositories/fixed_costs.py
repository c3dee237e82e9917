"""Fixed-cost persistence helpers."""
from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.fixed_cost import FixedCost


async def get_by_id(session: AsyncSession, cost_id: int) -> FixedCost | None:
    return await session.get(FixedCost, cost_id)


async def list_costs(session: AsyncSession, *, active_only: bool = False) -> list[FixedCost]:
    """Return fixed costs, newest start date first."""

    stmt = select(FixedCost)
    if active_only:
        stmt = stmt.where(FixedCost.is_active.is_(True))
    stmt = stmt.order_by(FixedCost.start_date.desc(), FixedCost.id.asc())
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def count_costs(session: AsyncSession) -> int:
    result = await session.execute(select(func.count(FixedCost.id)))
    return result.scalar_one()


async def create_cost(session: AsyncSession, *, fields: dict[str, Any]) -> FixedCost:
    cost = FixedCost(**fields)
    session.add(cost)
    await session.flush()
    return cost


async def delete_all(session: AsyncSession) -> None:
    await session.execute(delete(FixedCost))
