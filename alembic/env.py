"""Alembic environment configuration."""

from __future__ import annotations

from alembic import context
from sqlalchemy import engine_from_config, pool

from emergency_sos.core.config import settings
from emergency_sos.db.base import Base
from emergency_sos.models import Contact, SosEvent  # noqa: F401 - register tables on Base.metadata

config = context.config
config.set_main_option("sqlalchemy.url", settings.database_url)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=settings.database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:  # pragma: no cover - alembic bootstrap
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():  # pragma: no cover - alembic bootstrap
    run_migrations_offline()
else:
    run_migrations_online()
