"""Fixed-cost ledger."""
from __future__ import annotations

import logging
from collections.abc import Iterable

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.enums import CostCategory, CostFrequency
from ..models.fixed_cost import FixedCost
from ..repositories import fixed_costs as costs_repo
from ..schemas import fixed_costs as schemas

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def monthly_cost(amount: float, frequency: CostFrequency | str) -> float:
    """Monthly share of a cost; one-time costs are spread over a year."""

    if frequency == CostFrequency.MONTHLY:
        return amount
    return amount / MONTHS_PER_YEAR


def annual_cost(amount: float, frequency: CostFrequency | str) -> float:
    if frequency == CostFrequency.MONTHLY:
        return amount * MONTHS_PER_YEAR
    return amount


def summarize(costs: Iterable[FixedCost]) -> schemas.FixedCostSummary:
    """Totals over active costs."""

    by_category: dict[CostCategory, float] = {}
    total_monthly = 0.0
    total_annual = 0.0
    active = 0
    for cost in costs:
        if not cost.is_active:
            continue
        active += 1
        monthly = monthly_cost(cost.amount, cost.frequency)
        total_monthly += monthly
        total_annual += annual_cost(cost.amount, cost.frequency)
        by_category[cost.category] = by_category.get(cost.category, 0.0) + monthly
    return schemas.FixedCostSummary(
        total_monthly=round(total_monthly, 2),
        total_annual=round(total_annual, 2),
        monthly_by_category={key: round(value, 2) for key, value in by_category.items()},
        active_count=active,
    )


def to_response(cost: FixedCost) -> schemas.FixedCostResponse:
    return schemas.FixedCostResponse(
        id=cost.id,
        name=cost.name,
        description=cost.description,
        amount=cost.amount,
        category=cost.category,
        frequency=cost.frequency,
        start_date=cost.start_date,
        is_active=cost.is_active,
        monthly_cost=round(monthly_cost(cost.amount, cost.frequency), 2),
        annual_cost=round(annual_cost(cost.amount, cost.frequency), 2),
    )


async def list_costs(session: AsyncSession, *, active_only: bool = False) -> schemas.FixedCostListResponse:
    costs = await costs_repo.list_costs(session, active_only=active_only)
    return schemas.FixedCostListResponse(items=[to_response(cost) for cost in costs])


async def cost_summary(session: AsyncSession) -> schemas.FixedCostSummary:
    return summarize(await costs_repo.list_costs(session, active_only=True))


async def create_cost(payload: schemas.FixedCostRequest, session: AsyncSession) -> schemas.FixedCostResponse:
    async with session.begin():
        cost = await costs_repo.create_cost(session, fields=payload.model_dump())
        response = to_response(cost)

    logger.info("Fixed cost %s added (%s, %.2f %s)", cost.id, payload.name, payload.amount, payload.frequency.value)
    return response


async def update_cost(
    cost_id: int,
    payload: schemas.FixedCostRequest,
    session: AsyncSession,
) -> schemas.FixedCostResponse:
    async with session.begin():
        cost = await costs_repo.get_by_id(session, cost_id)
        if cost is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fixed cost not found")
        for name, value in payload.model_dump().items():
            setattr(cost, name, value)
        session.add(cost)
        response = to_response(cost)

    logger.info("Fixed cost %s updated", cost_id)
    return response


async def delete_cost(cost_id: int, session: AsyncSession) -> None:
    async with session.begin():
        cost = await costs_repo.get_by_id(session, cost_id)
        if cost is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fixed cost not found")
        await session.delete(cost)

    logger.info("Fixed cost %s deleted", cost_id)
