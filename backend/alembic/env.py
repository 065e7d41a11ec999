# backend/alembic/env.py
"""
Migration environment for SacramentDesk.

Run from backend/:  alembic upgrade head
The database URL comes from DATABASE_URL (or .env), then alembic.ini,
then the application default.
"""
import logging
import os
import sys
from logging.config import fileConfig
from typing import Any, Dict

from alembic import context
from sqlalchemy import create_engine, pool

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")

# backend/ must be importable no matter where alembic was launched from
BACKEND_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

import sacramentdesk.models  # noqa: E402,F401  (registers every table on Base)
from sacramentdesk.config import get_settings  # noqa: E402
from sacramentdesk.db import Base  # noqa: E402

target_metadata = Base.metadata


def resolve_url() -> str:
    # importing sacramentdesk.config has already loaded .env
    url = (
        os.getenv("DATABASE_URL")
        or config.get_main_option("sqlalchemy.url")
        or get_settings().database_url
    )
    logger.info("migrating %s", url.split("://", 1)[0])
    return url


def _configure_kwargs(url: str) -> Dict[str, Any]:
    # SQLite cannot ALTER most constraints in place; batch mode recreates tables
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "compare_server_default": True,
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    url = resolve_url()
    context.configure(url=url, literal_binds=True, **_configure_kwargs(url))
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    url = resolve_url()
    engine = create_engine(url, poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(connection=connection, **_configure_kwargs(url))
        with context.begin_transaction():
            context.run_migrations()
    engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
