# File: backend/app/cli/server_cli.py
# Version: v0.1.0
"""
Command-line interface for the Fern Reporter server.

Usage:
    python -m backend.app.cli.server_cli serve [--host 0.0.0.0] [--port 8080] [--reload]
    python -m backend.app.cli.server_cli init-db [--db-url sqlite:///...]

`init-db` creates any missing tables (non-destructive); use Alembic for
schema changes on shared databases.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import uvicorn

from backend.app.core.config import settings
from backend.app.db.maintenance import ensure_schema
from backend.app.db.session import build_engine

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Fern Reporter server CLI")
    p.add_argument("--log-level", dest="log_level", default=settings.LOG_LEVEL.upper(),
                   choices=LOG_LEVELS, help="Logging level (default: from settings)")
    sub = p.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", default=settings.HOST)
    serve.add_argument("--port", type=int, default=settings.PORT)
    serve.add_argument("--reload", action="store_true", help="Auto-reload on code changes (dev)")

    init_db = sub.add_parser("init-db", help="Create missing tables")
    init_db.add_argument("--db-url", default=settings.DB_URL)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level))
    log = logging.getLogger("server_cli")

    if args.command == "init-db":
        actions = ensure_schema(build_engine(args.db_url))
        for action in actions:
            log.info(action)
        return 0

    log.info("=== fern-reporter serve === HOST=%s | PORT=%d | DB=%s", args.host, args.port, settings.DB_URL)
    uvicorn.run(
        "backend.app.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
