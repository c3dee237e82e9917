"""Round trips through the repositories and services on a temporary SQLite file."""
from __future__ import annotations

import logging
from datetime import date, datetime
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ebike_rental.core.config import Settings
from ebike_rental.db.session import build_engine
from ebike_rental.models.base import Base
from ebike_rental.models.enums import BookingStatus
from ebike_rental.repositories import bikes as bikes_repo
from ebike_rental.schemas import admin as admin_schemas
from ebike_rental.schemas import bookings as booking_schemas
from ebike_rental.schemas import garage as garage_schemas
from ebike_rental.schemas import shop_settings as settings_schemas
from ebike_rental.services import admin as admin_service
from ebike_rental.services import bookings as bookings_service
from ebike_rental.services import garage as garage_service
from ebike_rental.services import server_config as server_config_service
from ebike_rental.services import shop_settings as settings_service

DAY = date(2025, 6, 14)


@pytest_asyncio.fixture
async def db(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'shop.db'}"
    engine = build_engine(url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    sessions = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)
    yield sessions, Settings(database_url=url, backup_dir=tmp_path / "backups", max_backup_files=2)
    await engine.dispose()


async def add_adult_bikes(sessions, count: int) -> None:
    for index in range(count):
        async with sessions() as session:
            await garage_service.create_bike(
                garage_schemas.BikeRequest(
                    id=f"adult-{index}",
                    name=f"Adult M #{index}",
                    type="adult",
                    size="M",
                    suspension="front-only",
                ),
                session,
            )


def booking_payload(count: int, start: str, end: str, **overrides) -> booking_schemas.BookingRequest:
    data = {
        "customer_name": "Luca Neri",
        "phone": "+39 333 9998888",
        "date": DAY,
        "start_time": start,
        "end_time": end,
        "category": "hourly",
        "bikes": [{"type": "adult", "size": "M", "suspension": "front-only", "count": count}],
    }
    data.update(overrides)
    return booking_schemas.BookingRequest(**data)


@pytest.mark.asyncio
async def test_booking_flow_against_sqlite(db):
    sessions, _ = db
    await add_adult_bikes(sessions, 3)

    async with sessions() as session:
        created = await bookings_service.create_booking(booking_payload(2, "09:00", "12:00"), session)

    assert created.total_price == 90

    async with sessions() as session:
        availability = await bookings_service.check_availability(
            booking_schemas.AvailabilityRequest(date=DAY, start_time="10:00", end_time="11:00", category="hourly"),
            session,
        )
    assert availability.total_available == 1

    async with sessions() as session:
        with pytest.raises(HTTPException) as exc:
            await bookings_service.create_booking(booking_payload(2, "10:00", "11:00"), session)
    assert exc.value.status_code == 409

    async with sessions() as session:
        await bookings_service.update_booking(
            created.id, booking_payload(2, "09:00", "12:00", status="cancelled"), session
        )

    async with sessions() as session:
        listing = await bookings_service.list_bookings(session, day=DAY, booking_status=BookingStatus.CANCELLED)
    assert [item.id for item in listing.items] == [created.id]


@pytest.mark.asyncio
async def test_settings_change_reprices_quotes(db):
    sessions, _ = db
    custom = settings_schemas.ShopSettingsPayload(
        shop_name="Test Shop",
        phone="+39 000 000000",
        email="shop@example.com",
        opening_time="08:00",
        closing_time="18:00",
        pricing=settings_schemas.Pricing(
            hourly=20,
            half_day=50,
            full_day=80,
            trailer_hourly=10,
            trailer_half_day=25,
            trailer_full_day=40,
            guide_hourly=30,
        ),
    )

    async with sessions() as session:
        await settings_service.update_shop_settings(custom, session)
    async with sessions() as session:
        quote = await bookings_service.quote(
            booking_schemas.QuoteRequest(
                bikes=[{"type": "adult", "size": "M", "suspension": "full", "count": 1}],
                category="full-day",
                start_time="09:00",
                end_time="17:00",
            ),
            session,
        )

    assert quote.total_price == 80


@pytest.mark.asyncio
async def test_maintenance_rolls_totals_forward(db):
    sessions, _ = db
    await add_adult_bikes(sessions, 1)

    for day, cost in ((date(2025, 3, 1), 20.0), (date(2025, 5, 1), 35.0)):
        async with sessions() as session:
            await garage_service.record_maintenance(
                "adult-0", garage_schemas.MaintenanceRequest(date=day, type="service", cost=cost), session
            )

    async with sessions() as session:
        bike = await garage_service.get_bike("adult-0", session)

    assert bike.total_maintenance_cost == 55
    assert bike.last_maintenance_date == date(2025, 5, 1)
    assert [entry.date for entry in bike.maintenance] == [date(2025, 3, 1), date(2025, 5, 1)]


@pytest.mark.asyncio
async def test_export_then_import_restores_rows(db):
    sessions, config = db
    await add_adult_bikes(sessions, 2)
    async with sessions() as session:
        await bookings_service.create_booking(booking_payload(1, "09:00", "10:00"), session)

    async with sessions() as session:
        exported = await admin_service.export_data(session)

    async with sessions() as session:
        await garage_service.retire_bike("adult-1", session)

    async with sessions() as session:
        result = await admin_service.import_data(admin_schemas.DataExport.model_validate(exported.model_dump()), session)

    assert (result.bikes, result.bookings, result.fixed_costs, result.settings) == (2, 1, 0, True)

    async with sessions() as session:
        bike = await bikes_repo.get_by_id(session, "adult-1")
        stats = await admin_service.database_stats(session, config=config)

    assert bike is not None and bike.is_active is True
    assert stats.total_bookings == 1
    assert stats.active_bikes == 2
    assert stats.database_size and stats.database_size > 0


@pytest.mark.asyncio
async def test_import_rejects_malformed_rows(db):
    sessions, _ = db
    payload = admin_schemas.DataExport(exported_at=datetime(2025, 6, 1), bikes=[{"id": "x", "type": "unicycle"}])

    async with sessions() as session:
        with pytest.raises(HTTPException) as exc:
            await admin_service.import_data(payload, session)

    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_backups_are_pruned(db):
    sessions, config = db

    for minute in range(3):
        async with sessions() as session:
            result = await admin_service.create_backup(
                session, config=config, now=datetime(2025, 6, 14, 10, minute, 0)
            )

    names = sorted(path.name for path in config.backup_dir.iterdir())
    assert names == ["backup_2025-06-14T10-01-00.db", "backup_2025-06-14T10-02-00.db"]
    assert result.removed == ["backup_2025-06-14T10-00-00.db"]
    assert result.size_bytes > 0


@pytest.mark.asyncio
async def test_imported_trailer_loses_bike_only_attributes(db):
    sessions, _ = db
    trailer = {
        "id": "trailer-1",
        "name": "Trailer #1",
        "brand": "Thule",
        "type": "trailer",
        "size": "M",
        "suspension": "full",
        "has_trailer_hook": True,
        "description": "",
        "min_height": 120,
        "max_height": 150,
        "is_active": True,
        "total_maintenance_cost": 0,
    }
    payload = admin_schemas.DataExport(exported_at=datetime(2025, 6, 1), bikes=[trailer])

    async with sessions() as session:
        await admin_service.import_data(payload, session)

    async with sessions() as session:
        stored = await bikes_repo.get_by_id(session, "trailer-1")

    assert stored is not None
    assert (stored.size, stored.suspension, stored.has_trailer_hook) == (None, None, False)
    assert (stored.min_height, stored.max_height) == (None, None)

    async with sessions() as session:
        created = await bookings_service.create_booking(
            booking_payload(1, "09:00", "10:00", bikes=[{"type": "trailer", "count": 1}]), session
        )

    assert created.bikes[0].has_trailer_hook is False


@pytest.mark.asyncio
async def test_server_config_drives_backup_retention_and_debug_logging(db):
    sessions, config = db

    async with sessions() as session:
        defaults = await server_config_service.get_server_config(session, config=config)
    assert (defaults.auto_backup, defaults.backup_interval_hours, defaults.max_backup_files, defaults.debug_mode) == (
        True,
        24,
        2,
        False,
    )

    updated = admin_schemas.ServerConfigPayload(
        auto_backup=True, backup_interval_hours=6, max_backup_files=1, debug_mode=True
    )
    try:
        async with sessions() as session:
            await server_config_service.update_server_config(updated, session)
        assert logging.getLogger("ebike_rental").level == logging.DEBUG

        async with sessions() as session:
            stored = await server_config_service.get_server_config(session, config=config)
        assert stored == updated

        for minute in range(2):
            async with sessions() as session:
                await admin_service.create_backup(session, config=config, now=datetime(2025, 6, 14, 10, minute, 0))
    finally:
        server_config_service.apply_debug_mode(False)

    assert [path.name for path in config.backup_dir.iterdir()] == ["backup_2025-06-14T10-01-00.db"]
    assert logging.getLogger("ebike_rental").level == logging.NOTSET


@pytest.mark.asyncio
async def test_scheduled_backup_is_skipped_when_disabled(db):
    sessions, config = db
    disabled = admin_schemas.ServerConfigPayload(
        auto_backup=False, backup_interval_hours=24, max_backup_files=5, debug_mode=False
    )

    async with sessions() as session:
        await server_config_service.update_server_config(disabled, session)
    async with sessions() as session:
        result = await admin_service.run_scheduled_backup(session, config=config)

    assert result is None
    assert not config.backup_dir.exists()


@pytest.mark.asyncio
async def test_auto_backup_loop_waits_for_the_configured_interval(db):
    sessions, config = db
    sleep = AsyncMock(side_effect=[None, RuntimeError("stop")])

    with pytest.raises(RuntimeError):
        await admin_service.auto_backup_loop(sessions, config=config, sleep=sleep)

    assert [call.args for call in sleep.await_args_list] == [(24 * 3600,), (24 * 3600,)]
    assert len(list(config.backup_dir.iterdir())) == 1
