"""Tests for garage management and profitability estimates."""
from __future__ import annotations

from datetime import date
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from ebike_rental.models.enums import BikeSize, BikeType, Suspension
from ebike_rental.repositories import bikes as bikes_repo
from ebike_rental.schemas import garage as schemas
from ebike_rental.services import garage as garage_service


class DummySession:
    """Minimal session stub supporting async transaction context."""

    def __init__(self) -> None:
        self.added: list[object] = []

    def add(self, obj: object) -> None:
        self.added.append(obj)

    def begin(self):  # noqa: D401 - mimic SQLAlchemy's async begin
        session = self

        class _Tx:
            async def __aenter__(self_inner):
                return session

            async def __aexit__(self_inner, exc_type, exc, tb):
                return False

        return _Tx()


def bike_stub(**overrides) -> SimpleNamespace:
    data = {
        "id": "bike-1",
        "name": "Adult M Full #1",
        "brand": "Haibike",
        "model": None,
        "type": BikeType.ADULT,
        "size": BikeSize.M,
        "suspension": Suspension.FULL,
        "has_trailer_hook": False,
        "description": "",
        "min_height": None,
        "max_height": None,
        "purchase_date": None,
        "purchase_price": None,
        "is_active": True,
        "total_maintenance_cost": 0.0,
        "last_maintenance_date": None,
        "next_maintenance_date": None,
        "maintenance": [],
    }
    data.update(overrides)
    return SimpleNamespace(**data)


def test_profitability_uses_days_since_purchase():
    bike = bike_stub(purchase_date=date(2025, 1, 1), purchase_price=1000.0, total_maintenance_cost=50.0)

    estimate = garage_service.estimate_profitability(bike, today=date(2025, 4, 11))

    assert estimate.estimated_revenue == pytest.approx(1500)
    assert estimate.total_cost == 1050
    assert estimate.profitability == pytest.approx(450)


def test_profitability_defaults_to_a_year_without_purchase_date():
    estimate = garage_service.estimate_profitability(bike_stub(), today=date(2025, 4, 11))

    assert estimate.estimated_revenue == pytest.approx(5475)
    assert estimate.profitability == estimate.estimated_revenue


def test_bike_request_requires_size_for_bikes_and_clears_it_for_trailers():
    with pytest.raises(ValidationError) as excinfo:
        schemas.BikeRequest(name="No size", type="adult", suspension="full")

    assert excinfo.value.errors()[0]["type"] == "missing"

    trailer = schemas.BikeRequest(name="Trailer", type="trailer", size="M", suspension="full", has_trailer_hook=True)

    assert trailer.size is None
    assert trailer.suspension is None
    assert trailer.has_trailer_hook is False


def test_bike_request_rejects_inverted_heights():
    with pytest.raises(ValidationError):
        schemas.BikeRequest(name="Bike", type="adult", size="M", suspension="full", min_height=190, max_height=170)


@pytest.mark.asyncio
async def test_retire_bike_deactivates(monkeypatch):
    bike = bike_stub()
    monkeypatch.setattr(bikes_repo, "get_by_id", AsyncMock(return_value=bike))
    session = DummySession()

    response = await garage_service.retire_bike("bike-1", session)

    assert response.is_active is False
    assert bike in session.added


@pytest.mark.asyncio
async def test_record_maintenance_sets_next_date(monkeypatch):
    bike = bike_stub()

    async def add_maintenance_stub(session, target, *, fields):
        record = SimpleNamespace(id="m-1", bike_id=target.id, **fields)
        target.maintenance.append(record)
        target.total_maintenance_cost += record.cost
        target.last_maintenance_date = record.service_date
        return record

    monkeypatch.setattr(bikes_repo, "get_by_id", AsyncMock(return_value=bike))
    monkeypatch.setattr(bikes_repo, "add_maintenance", add_maintenance_stub)
    payload = schemas.MaintenanceRequest(
        date=date(2025, 5, 2), type="brakes", cost=45.5, next_maintenance_date=date(2025, 11, 2)
    )

    response = await garage_service.record_maintenance("bike-1", payload, DummySession())

    assert response.total_maintenance_cost == 45.5
    assert response.last_maintenance_date == date(2025, 5, 2)
    assert response.next_maintenance_date == date(2025, 11, 2)
    assert response.maintenance[0].type == "brakes"


@pytest.mark.asyncio
async def test_get_missing_bike_is_404(monkeypatch):
    monkeypatch.setattr(bikes_repo, "get_by_id", AsyncMock(return_value=None))

    with pytest.raises(HTTPException) as exc:
        await garage_service.get_bike("missing", AsyncMock())

    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_bike_performance_averages_estimates(monkeypatch):
    bikes = [
        bike_stub(id="a", purchase_price=1000.0),
        bike_stub(id="b", purchase_price=3000.0),
    ]
    monkeypatch.setattr(bikes_repo, "list_bikes", AsyncMock(return_value=bikes))

    response = await garage_service.bike_performance(AsyncMock(), today=date(2025, 4, 11))

    assert [item.bike_id for item in response.items] == ["a", "b"]
    assert response.average_profitability == pytest.approx(3475)
