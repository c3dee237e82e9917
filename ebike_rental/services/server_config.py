"""Runtime server options: automatic backups, backup retention and debug logging."""
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings, settings
from ..models.server_config import ServerConfig
from ..repositories import server_config as config_repo
from ..schemas.admin import ServerConfigPayload

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "ebike_rental"


def default_payload(config: Settings = settings) -> ServerConfigPayload:
    return ServerConfigPayload(
        auto_backup=config.auto_backup,
        backup_interval_hours=config.backup_interval_hours,
        max_backup_files=config.max_backup_files,
        debug_mode=config.debug_mode,
    )


def payload_from_row(row: ServerConfig) -> ServerConfigPayload:
    return ServerConfigPayload(
        auto_backup=row.auto_backup,
        backup_interval_hours=row.backup_interval_hours,
        max_backup_files=row.max_backup_files,
        debug_mode=row.debug_mode,
    )


def apply_debug_mode(enabled: bool) -> None:
    """Log the package at DEBUG, or fall back to the root level."""

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if enabled else logging.NOTSET)


async def get_server_config(session: AsyncSession, *, config: Settings = settings) -> ServerConfigPayload:
    """Return stored options, falling back to the environment."""

    row = await config_repo.get_config(session)
    if row is None:
        return default_payload(config)
    return payload_from_row(row)


async def update_server_config(payload: ServerConfigPayload, session: AsyncSession) -> ServerConfigPayload:
    async with session.begin():
        await config_repo.save_config(session, fields=payload.model_dump())

    apply_debug_mode(payload.debug_mode)
    logger.info(
        "Server config updated (auto_backup=%s, interval=%dh, keep=%d, debug=%s)",
        payload.auto_backup,
        payload.backup_interval_hours,
        payload.max_backup_files,
        payload.debug_mode,
    )
    return payload
