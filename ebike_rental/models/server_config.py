"""Runtime server options editable from the admin panel."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base

SERVER_CONFIG_ROW_ID = 1


class ServerConfig(Base):
    """Singleton row overriding the backup and debug defaults from the environment."""

    __tablename__ = "server_config"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SERVER_CONFIG_ROW_ID)
    auto_backup: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    backup_interval_hours: Mapped[int] = mapped_column(Integer, nullable=False, default=24)
    max_backup_files: Mapped[int] = mapped_column(Integer, nullable=False, default=30)
    debug_mode: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
