"""Alembic migration environment for the message document tables.

The database URL comes from the application's Settings (DATABASE_URL or
.env), so migrations and the API always target the same store. Pass
`-x url=...` to migrate a different database once.

SQLite targets run in batch mode, since SQLite cannot ALTER most columns.
"""

import asyncio
import os
import sys
from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

# Make message_api importable when run from services/api
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

load_dotenv()

from message_api.models import FeedRecord, MessageRecord, UserRecord  # noqa: F401,E402
from message_api.settings import Settings  # noqa: E402
from message_api.stores.postgres import Base  # noqa: E402

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def get_url() -> str:
    """Database URL for this run: `-x url=...` first, then Settings."""
    override = context.get_x_argument(as_dictionary=True).get("url")
    if override:
        return Settings(database_url=override).async_database_url
    return Settings().async_database_url


def _configure_kwargs(url: str) -> dict[str, object]:
    return {
        "target_metadata": target_metadata,
        "render_as_batch": url.startswith("sqlite"),
        "compare_type": True,
    }


def run_migrations_offline() -> None:
    """Emit migration SQL to the script output without connecting."""
    url = get_url()
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_kwargs(url),
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection, url: str) -> None:
    context.configure(connection=connection, **_configure_kwargs(url))

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Apply migrations over a throwaway async engine."""
    url = get_url()
    connectable = create_async_engine(url, poolclass=pool.NullPool)

    try:
        async with connectable.connect() as connection:
            await connection.run_sync(do_run_migrations, url)
    finally:
        await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
