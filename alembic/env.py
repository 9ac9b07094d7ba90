"""
Movie Catalog migrations environment.

Runs Alembic against the same async engine configuration as the service:
the URL comes from movie_api.config (DATABASE_URL), never from alembic.ini,
and the genres/movies tables are described by movie_api.models.

    alembic upgrade head            apply pending revisions
    alembic upgrade head --sql      print the SQL instead (offline mode)
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config
from alembic import context

from movie_api import models  # noqa: F401  (registers Genre and Movie on Base.metadata)
from movie_api.config import settings
from movie_api.database import Base

config = context.config
config.set_main_option("sqlalchemy.url", settings.database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def configure_context(**options) -> None:
    context.configure(target_metadata=target_metadata, **options)


def run_offline() -> None:
    configure_context(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def migrate(connection) -> None:
    # batch mode lets SQLite rebuild tables for ALTERs it cannot do in place
    configure_context(
        connection=connection,
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_online() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    asyncio.run(run_online())
