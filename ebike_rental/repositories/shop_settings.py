"""Shop settings persistence helpers."""
from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.shop_settings import SETTINGS_ROW_ID, ShopSettings


async def get_settings(session: AsyncSession) -> ShopSettings | None:
    """Return the singleton settings row if it has been created."""

    return await session.get(ShopSettings, SETTINGS_ROW_ID)


async def save_settings(session: AsyncSession, *, fields: dict[str, Any]) -> ShopSettings:
    """Create or overwrite the singleton settings row."""

    row = await session.get(ShopSettings, SETTINGS_ROW_ID)
    if row is None:
        row = ShopSettings(id=SETTINGS_ROW_ID, **fields)
    else:
        for name, value in fields.items():
            setattr(row, name, value)
    session.add(row)
    await session.flush()
    return row
