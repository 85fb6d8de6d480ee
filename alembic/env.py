"""Migration environment for rollcall: DATABASE_URL comes from settings, autogenerate from the ORM metadata."""

from logging.config import fileConfig
from typing import Any

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.pool import NullPool

from rollcall.core.config import settings
from rollcall.models import Base

config = context.config
# alembic.ini carries no logging sections; the app's basicConfig applies instead.
if config.config_file_name is not None and config.file_config.has_section("formatters"):
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _options(backend: str) -> dict[str, Any]:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        # SQLite rebuilds tables to change constraints.
        "render_as_batch": backend == "sqlite",
    }


def run_migrations_offline() -> None:
    """Emit SQL for the configured database without connecting."""
    url = make_url(settings.DATABASE_URL)
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_options(url.get_backend_name()),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(settings.DATABASE_URL, poolclass=NullPool)
    with engine.connect() as connection:
        context.configure(connection=connection, **_options(connection.dialect.name))
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
