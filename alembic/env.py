"""Migration runner bound to the ebookshare schema and DATABASE_URL from Settings."""

import logging
from logging.config import fileConfig

from alembic import context

from ebookshare.core.config import get_settings
from ebookshare.core.database import build_engine
from ebookshare.models import Base

logger = logging.getLogger("alembic.env")

alembic_config = context.config
if alembic_config.config_file_name is not None and alembic_config.file_config.has_section("loggers"):
    fileConfig(alembic_config.config_file_name)

settings = get_settings()


def _configure(**kwargs) -> None:
    # SQLite cannot ALTER most constraints in place; batch mode recreates the table.
    context.configure(
        target_metadata=Base.metadata,
        render_as_batch=settings.DATABASE_URL.startswith("sqlite"),
        compare_type=True,
        **kwargs,
    )


def migrate_to_script() -> None:
    _configure(
        url=settings.DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def migrate_database() -> None:
    engine = build_engine(settings)
    logger.info("Migrating %s", engine.url.render_as_string(hide_password=True))
    try:
        with engine.connect() as connection:
            _configure(connection=connection)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    migrate_to_script()
else:
    migrate_database()
