"""Alembic environment for the top-up schema.

The database URL always comes from application settings (``DATABASE__URL``),
never from ``alembic.ini``.
"""

from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection, make_url

from topup_server.core.config import get_settings
from topup_server.db import models  # noqa: F401
from topup_server.infrastructure.database.base import Base
from topup_server.infrastructure.database.session import build_engine

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def offline_url() -> str:
    # offline mode only renders SQL, so the sync dialect is enough
    url = make_url(get_settings().database.url)
    return url.set(drivername=url.get_backend_name()).render_as_string(hide_password=False)


def run_offline() -> None:
    context.configure(
        url=offline_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    # batch mode lets ALTERs run on SQLite
    context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)
    with context.begin_transaction():
        context.run_migrations()


async def run_online() -> None:
    engine = build_engine(get_settings().database)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    asyncio.run(run_online())
