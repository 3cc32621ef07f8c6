from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from app.core.configuration import parametres_application
from app.domaine.modeles import BaseModele  # importe tous les modèles via __init__

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = BaseModele.metadata


def url_base_donnees() -> str:
    """`alembic -x url=...` prioritaire sur DATABASE_URL."""

    return context.get_x_argument(as_dictionary=True).get("url") or parametres_application.url_base_donnees


def _options_contexte(url: str) -> dict[str, object]:
    # SQLite ne sait pas faire ALTER TABLE complet : mode batch
    return {"compare_type": True, "render_as_batch": url.startswith("sqlite")}


def run_migrations_offline() -> None:
    """Génère le SQL sans connexion (alembic upgrade --sql)."""

    url = url_base_donnees()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_options_contexte(url),
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        **_options_contexte(url_base_donnees()),
    )

    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section, {})
    configuration["sqlalchemy.url"] = url_base_donnees()

    connectable = async_engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
