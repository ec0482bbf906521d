# File: backend/app/db/session.py
# Version: v0.2.0
"""
SQLAlchemy engine and session factory.

- `build_engine(url)` creates an engine; SQLite file URLs get their parent
  directory created, in-memory URLs share one connection (StaticPool), and
  every SQLite connection turns on `PRAGMA foreign_keys` so ON DELETE CASCADE
  is enforced.
- `build_session_factory(engine)` returns the sessionmaker that
  `backend.app.main.create_app()` stores on `app.state`.
- `get_db()` is the FastAPI dependency managing one session per request.

This is intentionally synchronous. A few rows per request do not justify an
async driver, and sync SQLAlchemy is simpler to test.
"""
from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    if isinstance(dbapi_connection, sqlite3.Connection):
        cur = dbapi_connection.cursor()
        cur.execute("PRAGMA foreign_keys=ON;")
        cur.close()


def build_engine(db_url: str, **kwargs) -> Engine:
    url = make_url(db_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(url, future=True, **kwargs)

    database = url.database or ""
    if database and database != ":memory:":
        Path(database).resolve().parent.mkdir(parents=True, exist_ok=True)
    else:
        kwargs.setdefault("poolclass", StaticPool)
    kwargs.setdefault("connect_args", {"check_same_thread": False})

    engine = create_engine(url, future=True, **kwargs)
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a session from the app's factory and guarantee closing it after use."""
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
