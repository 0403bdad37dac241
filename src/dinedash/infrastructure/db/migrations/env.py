from __future__ import annotations

from alembic import context
from sqlalchemy import engine_from_config, pool

from dinedash.infrastructure.db.models.order import OrderModel  # noqa: F401
from dinedash.infrastructure.db.models.restaurant import Base
from dinedash.infrastructure.db.session import configured_database_url

config = context.config
config.set_main_option("sqlalchemy.url", configured_database_url().replace("%", "%%"))

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
