"""
Alembic migration environment for the catalog.

The database URL comes from catalog settings (DATABASE_URL or .env),
never from alembic.ini. Online runs use the same engine builder as
CatalogStore; SQLite runs in batch mode so ALTER-style migrations work.

    alembic upgrade head
    alembic upgrade head --sql    # offline, prints the SQL
"""

from logging.config import fileConfig

from alembic import context

from catalog.config import get_settings
from catalog.database import Base, build_engine
import catalog.models  # noqa: F401  registers every table on Base.metadata

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

database_url = get_settings().database_url
render_as_batch = database_url.startswith("sqlite")


def run_migrations_offline() -> None:
    context.configure(
        url=database_url,
        target_metadata=Base.metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=render_as_batch,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = build_engine(database_url)
    try:
        with engine.connect() as connection:
            context.configure(
                connection=connection,
                target_metadata=Base.metadata,
                compare_type=True,
                render_as_batch=render_as_batch,
            )
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
