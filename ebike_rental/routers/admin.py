"""Admin endpoints for backups, database stats, export/import, server config and metrics."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import admin as admin_schema
from ..services import admin as admin_service
from ..services import server_config as server_config_service

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/backup", response_model=admin_schema.BackupResponse)
async def create_backup(session: AsyncSession = Depends(get_session)) -> admin_schema.BackupResponse:
    """Copy the database file to the backup directory."""

    return await admin_service.create_backup(session)


@router.get("/database-stats", response_model=admin_schema.DatabaseStatsResponse)
async def database_stats(session: AsyncSession = Depends(get_session)) -> admin_schema.DatabaseStatsResponse:
    return await admin_service.database_stats(session)


@router.get("/export", response_model=admin_schema.DataExport)
async def export_data(session: AsyncSession = Depends(get_session)) -> admin_schema.DataExport:
    return await admin_service.export_data(session)


@router.post("/import", response_model=admin_schema.ImportResponse)
async def import_data(
    payload: admin_schema.DataExport,
    session: AsyncSession = Depends(get_session),
) -> admin_schema.ImportResponse:
    """Replace every row with the content of an export."""

    return await admin_service.import_data(payload, session)


@router.get("/server-config", response_model=admin_schema.ServerConfigPayload)
async def get_server_config(session: AsyncSession = Depends(get_session)) -> admin_schema.ServerConfigPayload:
    return await server_config_service.get_server_config(session)


@router.put("/server-config", response_model=admin_schema.ServerConfigPayload)
async def update_server_config(
    payload: admin_schema.ServerConfigPayload,
    session: AsyncSession = Depends(get_session),
) -> admin_schema.ServerConfigPayload:
    """Store backup options and toggle debug logging."""

    return await server_config_service.update_server_config(payload, session)


@router.get("/metrics", response_model=admin_schema.MetricsResponse)
async def metrics(request: Request) -> admin_schema.MetricsResponse:
    """Return request counters for this process."""

    return admin_schema.MetricsResponse(**request.app.state.metrics.snapshot())
