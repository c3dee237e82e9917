"""Database administration: backups, stats, export and import."""
from __future__ import annotations

import asyncio
import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Awaitable, Callable

from fastapi import HTTPException, status
from pydantic import ValidationError
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..core.config import Settings, settings
from ..repositories import bikes as bikes_repo
from ..repositories import bookings as bookings_repo
from ..repositories import fixed_costs as costs_repo
from ..repositories import shop_settings as settings_repo
from ..schemas import admin as schemas
from ..schemas.bookings import BookingResponse
from ..schemas.fixed_costs import FixedCostResponse
from ..schemas.garage import BikeResponse
from ..schemas.shop_settings import ShopSettingsPayload
from . import bookings as bookings_service
from . import fixed_costs as costs_service
from . import garage as garage_service
from .server_config import get_server_config
from .shop_settings import get_shop_settings, row_fields

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "backup_"
BACKUP_SUFFIX = ".db"
EXPORT_VERSION = 1


def _database_path(config: Settings) -> Path:
    path = config.sqlite_path
    if path is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Database is not a SQLite file")
    return path


def backup_name(moment: datetime) -> str:
    return f"{BACKUP_PREFIX}{moment.strftime('%Y-%m-%dT%H-%M-%S')}{BACKUP_SUFFIX}"


def prune_backups(backup_dir: Path, keep: int) -> list[str]:
    """Delete the oldest backups so at most ``keep`` remain; returns removed names."""

    backups = sorted(
        (path for path in backup_dir.glob(f"{BACKUP_PREFIX}*{BACKUP_SUFFIX}") if path.is_file()),
        key=lambda path: path.name,
        reverse=True,
    )
    removed = []
    for path in backups[keep:]:
        path.unlink()
        removed.append(path.name)
    return removed


def _copy_database(source: Path, backup_dir: Path, name: str) -> Path:
    backup_dir.mkdir(parents=True, exist_ok=True)
    target = backup_dir / name
    shutil.copy2(source, target)
    return target


async def create_backup(
    session: AsyncSession,
    *,
    config: Settings = settings,
    now: datetime | None = None,
) -> schemas.BackupResponse:
    """Copy the SQLite file into the backup directory and prune old copies."""

    source = _database_path(config)
    if not source.exists():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Database file not found")

    # Fold the WAL into the main file so the copy is complete.
    await session.execute(text("PRAGMA wal_checkpoint(TRUNCATE)"))

    name = backup_name(now or datetime.now())
    target = await asyncio.to_thread(_copy_database, source, config.backup_dir, name)
    options = await get_server_config(session, config=config)
    removed = await asyncio.to_thread(prune_backups, config.backup_dir, options.max_backup_files)

    logger.info("Database backup created at %s (%d old backups removed)", target, len(removed))
    return schemas.BackupResponse(backup_path=str(target), size_bytes=target.stat().st_size, removed=removed)


async def run_scheduled_backup(
    session: AsyncSession,
    *,
    config: Settings = settings,
    now: datetime | None = None,
) -> schemas.BackupResponse | None:
    """Take a backup unless automatic backups are switched off."""

    options = await get_server_config(session, config=config)
    if not options.auto_backup:
        logger.debug("Automatic backup disabled, skipping")
        return None
    return await create_backup(session, config=config, now=now)


async def auto_backup_loop(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    config: Settings = settings,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """Back up the database every `backup_interval_hours`, re-reading the options each round."""

    while True:
        async with session_factory() as session:
            options = await get_server_config(session, config=config)
        await sleep(options.backup_interval_hours * 3600)

        async with session_factory() as session:
            try:
                await run_scheduled_backup(session, config=config)
            except (HTTPException, OSError) as exc:
                logger.warning("Automatic backup failed: %s", getattr(exc, "detail", exc))


async def database_stats(
    session: AsyncSession,
    *,
    config: Settings = settings,
) -> schemas.DatabaseStatsResponse:
    total_bikes, active_bikes = await bikes_repo.count_bikes(session)
    response = schemas.DatabaseStatsResponse(
        total_bookings=await bookings_repo.count_bookings(session),
        total_bikes=total_bikes,
        active_bikes=active_bikes,
        total_fixed_costs=await costs_repo.count_costs(session),
    )
    path = config.sqlite_path
    if path is not None and path.exists():
        stat = path.stat()
        response.database_size = stat.st_size
        response.last_modified = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)
    return response


async def export_data(session: AsyncSession) -> schemas.DataExport:
    """Dump every table as plain JSON-ready dictionaries."""

    shop = await get_shop_settings(session)
    bikes = await bikes_repo.list_bikes(session)
    bookings = await bookings_repo.list_bookings(session)
    costs = await costs_repo.list_costs(session)
    return schemas.DataExport(
        version=EXPORT_VERSION,
        exported_at=datetime.now(timezone.utc),
        settings=shop.model_dump(mode="json"),
        bikes=[garage_service.to_response(bike).model_dump(mode="json") for bike in bikes],
        bookings=[bookings_service.to_response(booking).model_dump(mode="json") for booking in bookings],
        fixed_costs=[costs_service.to_response(cost).model_dump(mode="json") for cost in costs],
    )


def _booking_fields(booking: BookingResponse) -> dict[str, object]:
    fields = booking.model_dump(exclude={"id", "bikes", "date", "created_at", "updated_at"})
    fields["booking_date"] = booking.date
    if booking.created_at is not None:
        fields["created_at"] = booking.created_at
    if booking.updated_at is not None:
        fields["updated_at"] = booking.updated_at
    return fields


async def import_data(payload: schemas.DataExport, session: AsyncSession) -> schemas.ImportResponse:
    """Replace all shop data with the content of an export."""

    try:
        shop = ShopSettingsPayload.model_validate(payload.settings) if payload.settings else None
        bikes = [BikeResponse.model_validate(item) for item in payload.bikes]
        bookings = [BookingResponse.model_validate(item) for item in payload.bookings]
        costs = [FixedCostResponse.model_validate(item) for item in payload.fixed_costs]
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid import payload: {exc.error_count()} invalid field(s)",
        ) from exc

    async with session.begin():
        await bookings_repo.delete_all(session)
        await bikes_repo.delete_all(session)
        await costs_repo.delete_all(session)

        if shop is not None:
            await settings_repo.save_settings(session, fields=row_fields(shop))

        for bike in bikes:
            await bikes_repo.restore_bike(
                session,
                fields=bike.model_dump(exclude={"maintenance"}),
                maintenance=[
                    {
                        "id": entry.id,
                        "service_date": entry.date,
                        "type": entry.type,
                        "description": entry.description,
                        "cost": entry.cost,
                        "mechanic": entry.mechanic,
                        "notes": entry.notes,
                    }
                    for entry in bike.maintenance
                ],
            )

        for booking in bookings:
            await bookings_repo.create_booking(
                session,
                booking_id=booking.id,
                fields=_booking_fields(booking),
                bikes=[item.model_dump() for item in booking.bikes],
            )

        for cost in costs:
            await costs_repo.create_cost(session, fields=cost.model_dump(exclude={"monthly_cost", "annual_cost"}))

    logger.info(
        "Data imported: %d bikes, %d bookings, %d fixed costs, settings=%s",
        len(bikes),
        len(bookings),
        len(costs),
        shop is not None,
    )
    return schemas.ImportResponse(
        bikes=len(bikes),
        bookings=len(bookings),
        fixed_costs=len(costs),
        settings=shop is not None,
    )
