"""Application configuration for the rental shop service."""
from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    app_env: str = Field(default="development")
    cors_allow_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])

    database_url: str = Field(default="sqlite+aiosqlite:///./ebike_rental.db")
    sqlite_pragmas_enabled: bool = Field(default=True)

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("logs"))
    log_retention_days: int = Field(default=30, ge=1)
    slow_request_ms: int = Field(default=500, ge=0)

    backup_dir: Path = Field(default=Path("backups"))
    max_backup_files: int = Field(default=30, ge=1)
    auto_backup: bool = Field(default=True)
    backup_interval_hours: int = Field(default=24, ge=1, le=24 * 30)
    debug_mode: bool = Field(default=False)

    shop_name: str = Field(default="E-Bike Rent Go & Fun")
    shop_phone: str = Field(default="+39 123 456 7890")
    shop_email: str = Field(default="info@ebike-rent.example")
    opening_time: str = Field(default="09:00")
    closing_time: str = Field(default="19:00")

    price_hourly: float = Field(default=15, ge=0)
    price_half_day: float = Field(default=45, ge=0)
    price_full_day: float = Field(default=70, ge=0)
    price_trailer_hourly: float = Field(default=8, ge=0)
    price_trailer_half_day: float = Field(default=20, ge=0)
    price_trailer_full_day: float = Field(default=35, ge=0)
    price_guide_hourly: float = Field(default=25, ge=0)

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: object) -> object:
        """Accept comma-separated or JSON list env values for CORS origins."""

        if isinstance(value, str):
            if value.strip().startswith("["):
                return json.loads(value)
            parts = [item.strip() for item in value.split(",") if item.strip()]
            return parts
        return value

    @property
    def sqlite_path(self) -> Path | None:
        """Filesystem path of the SQLite database, if the URL points at a file."""

        prefix = "sqlite+aiosqlite:///"
        if not self.database_url.startswith(prefix):
            return None
        raw = self.database_url[len(prefix):]
        if not raw or raw == ":memory:":
            return None
        return Path(raw)


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


settings = get_settings()
