"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from topup_server.core.config import DatabaseSettings, get_settings
from topup_server.infrastructure.database.base import Base

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def build_engine(database: DatabaseSettings, echo: bool = False) -> AsyncEngine:
    engine_kwargs: dict[str, Any] = {"echo": database.echo or echo}
    if make_url(database.url).get_backend_name() == "sqlite":
        # concurrent webhook deliveries wait for the writer lock instead of failing
        engine_kwargs["connect_args"] = {"timeout": database.busy_timeout}
    else:
        engine_kwargs["pool_pre_ping"] = True
        if database.pool_size is not None:
            engine_kwargs["pool_size"] = database.pool_size
        if database.max_overflow is not None:
            engine_kwargs["max_overflow"] = database.max_overflow
    return create_async_engine(database.url, **engine_kwargs)


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = build_engine(settings.database, echo=settings.debug)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(bind=get_engine(), class_=AsyncSession, expire_on_commit=False)
    return _session_factory


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Session that commits on success and rolls back on any exception."""
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with session_scope() as session:
        yield session


async def init_db() -> None:
    """Create missing tables; deployments run the alembic migrations instead."""
    from topup_server.db import models  # noqa: F401

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
