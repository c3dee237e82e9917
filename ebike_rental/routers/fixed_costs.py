"""Fixed-cost ledger endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import fixed_costs as costs_schema
from ..services import fixed_costs as costs_service

router = APIRouter(prefix="/fixed-costs", tags=["fixed-costs"])


@router.get("", response_model=costs_schema.FixedCostListResponse)
async def list_costs(
    active_only: bool = False,
    session: AsyncSession = Depends(get_session),
) -> costs_schema.FixedCostListResponse:
    return await costs_service.list_costs(session, active_only=active_only)


@router.post("", response_model=costs_schema.FixedCostResponse, status_code=status.HTTP_201_CREATED)
async def create_cost(
    payload: costs_schema.FixedCostRequest,
    session: AsyncSession = Depends(get_session),
) -> costs_schema.FixedCostResponse:
    return await costs_service.create_cost(payload, session)


@router.get("/summary", response_model=costs_schema.FixedCostSummary)
async def cost_summary(session: AsyncSession = Depends(get_session)) -> costs_schema.FixedCostSummary:
    """Monthly and annual totals of the active costs."""

    return await costs_service.cost_summary(session)


@router.put("/{cost_id}", response_model=costs_schema.FixedCostResponse)
async def update_cost(
    cost_id: int,
    payload: costs_schema.FixedCostRequest,
    session: AsyncSession = Depends(get_session),
) -> costs_schema.FixedCostResponse:
    return await costs_service.update_cost(cost_id, payload, session)


@router.delete("/{cost_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cost(cost_id: int, session: AsyncSession = Depends(get_session)) -> Response:
    await costs_service.delete_cost(cost_id, session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
