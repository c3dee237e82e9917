"""Database session management."""
from __future__ import annotations

from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ..core.config import settings

SQLITE_PRAGMAS: tuple[str, ...] = (
    "PRAGMA foreign_keys = ON",
    "PRAGMA journal_mode = WAL",
    "PRAGMA synchronous = NORMAL",
    "PRAGMA temp_store = MEMORY",
)


def _apply_sqlite_pragmas(dbapi_connection, connection_record) -> None:  # noqa: ARG001
    cursor = dbapi_connection.cursor()
    try:
        for pragma in SQLITE_PRAGMAS:
            cursor.execute(pragma)
    finally:
        cursor.close()


def build_engine(url: str, *, pragmas: bool = True) -> AsyncEngine:
    """Create an async engine, tuning SQLite connections when applicable."""

    async_engine = create_async_engine(url, echo=False)
    if pragmas and async_engine.dialect.name == "sqlite":
        sync_engine: Engine = async_engine.sync_engine
        event.listen(sync_engine, "connect", _apply_sqlite_pragmas)
    return async_engine


engine = build_engine(settings.database_url, pragmas=settings.sqlite_pragmas_enabled)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency to provide an async session."""

    async with SessionLocal() as session:
        yield session
