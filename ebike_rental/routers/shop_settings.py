"""Shop settings endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import shop_settings as settings_schema
from ..services import shop_settings as settings_service

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=settings_schema.ShopSettingsPayload)
async def get_settings(session: AsyncSession = Depends(get_session)) -> settings_schema.ShopSettingsPayload:
    return await settings_service.get_shop_settings(session)


@router.put("", response_model=settings_schema.ShopSettingsPayload)
async def update_settings(
    payload: settings_schema.ShopSettingsPayload,
    session: AsyncSession = Depends(get_session),
) -> settings_schema.ShopSettingsPayload:
    """Replace shop details and rates."""

    return await settings_service.update_shop_settings(payload, session)
