"""Schemas for database administration endpoints."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class BackupResponse(BaseModel):
    backup_path: str
    size_bytes: int
    removed: list[str] = Field(default_factory=list)


class DatabaseStatsResponse(BaseModel):
    total_bookings: int
    total_bikes: int
    active_bikes: int
    total_fixed_costs: int
    database_size: int | None = None
    last_modified: datetime | None = None


class DataExport(BaseModel):
    version: int = 1
    exported_at: datetime
    settings: dict[str, Any] | None = None
    bikes: list[dict[str, Any]] = Field(default_factory=list)
    bookings: list[dict[str, Any]] = Field(default_factory=list)
    fixed_costs: list[dict[str, Any]] = Field(default_factory=list)


class ImportResponse(BaseModel):
    bikes: int
    bookings: int
    fixed_costs: int
    settings: bool


class MetricsResponse(BaseModel):
    requests: int
    errors: int
    slow_requests: int
    avg_duration_ms: float
    uptime_sec: int
    requests_per_minute: float


class ServerConfigPayload(BaseModel):
    auto_backup: bool
    backup_interval_hours: int = Field(ge=1, le=24 * 30)
    max_backup_files: int = Field(ge=1)
    debug_mode: bool
