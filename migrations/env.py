"""Alembic environment for the Inkwell schema.

The database URL comes from ``sqlalchemy.url`` when the caller sets it (as
``inkwell-migrate`` does) and from the application settings otherwise. Online
runs connect through the application's own engine factory so SQLite gets the
same foreign-key and transaction handling as the running service.
"""

from logging.config import fileConfig

from alembic import context

from inkwell.core.settings import settings
from inkwell.db.session import Base, build_engine

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

database_url = config.get_main_option("sqlalchemy.url") or settings.database_url_sync


def _skip_alembic_bookkeeping(obj, name, type_, reflected, compare_to) -> bool:
    return not (type_ == "table" and name == "alembic_version")


def run_migrations_offline() -> None:
    """Emit the migration SQL for ``database_url`` without connecting."""
    context.configure(
        url=database_url,
        target_metadata=Base.metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        include_object=_skip_alembic_bookkeeping,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply pending revisions to ``database_url``."""
    engine = build_engine(database_url)
    try:
        with engine.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=Base.metadata,
                include_object=_skip_alembic_bookkeeping,
                render_as_batch=connection.dialect.name == "sqlite",
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
