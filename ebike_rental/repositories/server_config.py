"""Server config persistence helpers."""
from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.server_config import SERVER_CONFIG_ROW_ID, ServerConfig


async def get_config(session: AsyncSession) -> ServerConfig | None:
    return await session.get(ServerConfig, SERVER_CONFIG_ROW_ID)


async def save_config(session: AsyncSession, *, fields: dict[str, Any]) -> ServerConfig:
    """Create or overwrite the singleton server config row."""

    row = await session.get(ServerConfig, SERVER_CONFIG_ROW_ID)
    if row is None:
        row = ServerConfig(id=SERVER_CONFIG_ROW_ID, **fields)
    else:
        for name, value in fields.items():
            setattr(row, name, value)
    session.add(row)
    await session.flush()
    return row
