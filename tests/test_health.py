from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from ebike_rental.core.monitoring import RequestMetrics
from ebike_rental.db.session import get_session
from ebike_rental.main import app, create_app


@pytest.mark.asyncio
async def test_health_endpoint() -> None:
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/api/health")
        head = await client.head("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert head.status_code == 200


@pytest.mark.asyncio
async def test_metrics_are_counted_per_app() -> None:
    first = create_app()
    second = create_app()

    async with AsyncClient(transport=ASGITransport(app=first), base_url="http://testserver") as client:
        await client.get("/api/health")
        await client.get("/api/unknown")
        response = await client.get("/api/admin/metrics")

    assert response.status_code == 200
    body = response.json()
    assert body["requests"] == 1
    assert body["errors"] == 1
    assert first.state.metrics.requests == 2
    assert second.state.metrics.requests == 0


def test_request_metrics_snapshot_and_reset() -> None:
    metrics = RequestMetrics()
    metrics.record(100, failed=False, slow=False)
    metrics.record(700, failed=True, slow=True)

    snapshot = metrics.snapshot()

    assert snapshot["requests"] == 2
    assert snapshot["errors"] == 1
    assert snapshot["slow_requests"] == 1
    assert snapshot["avg_duration_ms"] == 400

    metrics.reset()
    assert metrics.snapshot()["requests"] == 0


@pytest.fixture
def validation_app():
    test_app = create_app()

    async def session_override():
        yield AsyncMock()

    test_app.dependency_overrides[get_session] = session_override
    return test_app


VALID_BOOKING = {
    "customer_name": "Anna Verdi",
    "phone": "+39 333 1112222",
    "date": "2025-06-14",
    "start_time": "09:00",
    "end_time": "11:00",
    "category": "hourly",
    "bikes": [{"type": "adult", "size": "M", "suspension": "full", "count": 1}],
}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("changes", "field", "code"),
    [
        ({"customer_name": None}, "customer_name", "missing-field"),
        ({"customer_name": ""}, "customer_name", "missing-field"),
        ({"bikes": [{"type": "adult", "count": 1}]}, 0, "missing-field"),
        ({"start_time": "9am"}, "start_time", "invalid-format"),
        ({"email": "not-an-email"}, "email", "invalid-format"),
        ({"date": "14/06/2025"}, "date", "invalid-format"),
        ({"category": "weekly"}, "category", "invalid-enum"),
        ({"bikes": [{"type": "adult", "size": "M", "suspension": "full", "count": 0}]}, "count", "non-positive-count"),
        ({"bikes": []}, "bikes", "non-positive-count"),
        ({"bikes": [{"type": "tandem", "count": 1}]}, "type", "invalid-enum"),
        ({"end_time": "08:00"}, None, "invalid-value"),
    ],
)
async def test_booking_validation_codes(validation_app, changes, field, code) -> None:
    payload = {**VALID_BOOKING, **changes}
    payload = {key: value for key, value in payload.items() if value is not None}

    async with AsyncClient(transport=ASGITransport(app=validation_app), base_url="http://testserver") as client:
        response = await client.post("/api/bookings", json=payload)

    assert response.status_code == 422
    details = response.json()["detail"]
    matching = [item for item in details if field is None or item["loc"][-1] == field]
    assert matching
    assert matching[0]["code"] == code


@pytest.mark.asyncio
async def test_server_config_rejects_zero_interval(validation_app) -> None:
    payload = {"auto_backup": True, "backup_interval_hours": 0, "max_backup_files": 5, "debug_mode": False}

    async with AsyncClient(transport=ASGITransport(app=validation_app), base_url="http://testserver") as client:
        response = await client.put("/api/admin/server-config", json=payload)

    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"][-1] == "backup_interval_hours"
    assert response.json()["detail"][0]["code"] == "invalid-value"
