"""Alembic env for Luno.

The API talks to MySQL through aiomysql (SQLite through aiosqlite in dev and
tests); migrations run synchronously, so the URL is rewritten to PyMySQL /
the stdlib sqlite3 driver before an engine is built.
"""
from logging.config import fileConfig
import os

from alembic import context
from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine import make_url

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

from luno.db.base import Base  # noqa: E402
from luno.core.config import get_settings  # noqa: E402

target_metadata = Base.metadata

# async driver -> sync driver used for migrations
SYNC_DRIVERS = {
    "mysql+aiomysql": "mysql+pymysql",
    "sqlite+aiosqlite": "sqlite",
}


def migration_url() -> str:
    """ALEMBIC_DATABASE_URL wins; else the app's DATABASE_URL with a sync driver; else alembic.ini."""
    explicit = os.getenv("ALEMBIC_DATABASE_URL")
    if explicit:
        return explicit

    app_url = get_settings().database_url
    if not app_url:
        return config.get_main_option("sqlalchemy.url")

    url = make_url(app_url)
    sync_driver = SYNC_DRIVERS.get(url.drivername)
    if sync_driver:
        url = url.set(drivername=sync_driver)
    return url.render_as_string(hide_password=False)


def run_migrations_offline() -> None:
    context.configure(
        url=migration_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section) or {}
    section["sqlalchemy.url"] = migration_url()
    engine = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with engine.connect() as connection:
        # SQLite needs batch mode for ALTER TABLE in later revisions
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
