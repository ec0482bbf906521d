# File: backend/app/db/maintenance.py
# Version: v0.3.0
"""
SQLite schema maintenance helpers (dev-only, non-destructive).

- ensure_schema_sqlite(engine): creates only tables that are missing.
- Critically, this module imports `backend.app.db.models` (not just Base),
  so ALL ORM models (TestRun, SuiteRun, SpecRun) are registered in
  Base.metadata.

Usage:
  Keep SCHEMA_AUTOHEAL=true (the default) and a SQLite DB_URL. On app
  startup, ensure_schema_sqlite(engine) creates any missing tables and logs
  each action. `python -m backend.app.cli.server_cli init-db` does the same
  for any backend.

Notes:
  * Safe to run multiple times; it never drops or alters existing tables.
  * Use Alembic migrations for staging/production changes.
"""
from __future__ import annotations

import logging
from typing import List

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

# Import the MODELS MODULE for side effects so every model class is attached
# to Base before we inspect metadata.
import backend.app.db.models as models  # noqa: F401
from backend.app.db.base import Base

logger = logging.getLogger(__name__)


def ensure_schema(engine: Engine) -> List[str]:
    """
    Create any missing tables declared on Base.metadata.

    Returns a list of human-readable action strings (e.g., "created table test_runs").
    """
    inspector = inspect(engine)
    existing = set(inspector.get_table_names())

    actions: List[str] = []
    # sorted_tables is dependency-ordered, so parents exist before FKs point at them
    for table in Base.metadata.sorted_tables:
        if table.name in existing:
            continue
        # checkfirst guards against races / repeated calls
        table.create(bind=engine, checkfirst=True)
        actions.append(f"created table {table.name}")
        logger.info("schema: created table %s", table.name)

    if not actions:
        actions.append("all tables present")

    return actions


def ensure_schema_sqlite(engine: Engine) -> List[str]:
    """Same as `ensure_schema`, but a no-op (empty list) for non-SQLite engines."""
    if engine.url.get_backend_name() != "sqlite":
        return []
    return ensure_schema(engine)
