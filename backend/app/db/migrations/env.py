# File: backend/app/db/migrations/env.py
# Version: v0.3.0
"""
Alembic environment for Fern Reporter.

- Ensures repo root is on sys.path so `import backend...` works regardless of CWD.
- Uses DATABASE_URL env var when present, then the app's SETTINGS.DB_URL,
  then alembic.ini.
- Registers ALL SQLAlchemy models on Base.metadata so `--autogenerate` can
  detect schema changes (test_runs, suite_runs, spec_runs).
"""
from __future__ import annotations

import os
import sys
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool
from alembic import context

# --------------------------------------------------------------------------------------
# Make the repository importable no matter where Alembic is invoked from
# This file lives at: backend/app/db/migrations/env.py
# repo_root = <this_file>/../../../../
# --------------------------------------------------------------------------------------
THIS_DIR = os.path.dirname(os.path.abspath(__file__))
REPO_ROOT = os.path.abspath(os.path.join(THIS_DIR, "../../../../"))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

# Importing the models module populates Base.metadata
from backend.app.core.config import settings  # noqa: E402
from backend.app.db.base import Base  # noqa: E402
import backend.app.db.models  # noqa: F401,E402

# --------------------------------------------------------------------------------------
# Alembic configuration
# --------------------------------------------------------------------------------------
config = context.config

# Configure logging from alembic.ini
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Target metadata for autogenerate
target_metadata = Base.metadata


def _database_url() -> str:
    url = os.getenv("DATABASE_URL") or settings.DB_URL or config.get_main_option("sqlalchemy.url")
    if not url:
        raise RuntimeError(
            "No database URL: set DATABASE_URL or DB_URL, or sqlalchemy.url in alembic.ini "
            "(e.g., sqlite:///backend/app/data/fern_reporter.db)."
        )
    return url


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    We configure the context with just a URL, so no DBAPI needs to be available.
    """
    context.configure(
        url=_database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """
    Run migrations in 'online' mode.

    In this scenario we create an Engine and associate a connection with the context.
    """
    config.set_main_option("sqlalchemy.url", _database_url())

    # engine_from_config reads keys prefixed with "sqlalchemy." in alembic.ini
    connectable = engine_from_config(
        config.get_section(config.config_ini_section) or {},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
