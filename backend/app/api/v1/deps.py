# File: backend/app/api/v1/deps.py
# Version: v0.3.0
"""
Dependency providers shared by the test run, report and GraphQL routers.

- `get_test_run_store`: one `TestRunStore` per request, built on the
  request-scoped session from `backend.app.db.session.get_db`.
- `path_test_run_id`: parses the `{test_run_id}` path segment; anything
  non-numeric is a 404, never a 422.
- `patch_body`: reads a PUT body leniently; a body that is not a JSON object
  becomes an empty patch.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from backend.app.core.errors import parse_test_run_id
from backend.app.db.session import get_db
from backend.app.services.test_run_store import TestRunStore

logger = logging.getLogger(__name__)


def get_test_run_store(db: Session = Depends(get_db)) -> TestRunStore:
    return TestRunStore(db)


def path_test_run_id(test_run_id: str) -> int:
    return parse_test_run_id(test_run_id)


async def patch_body(request: Request) -> Dict[str, Any]:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        logger.warning("ignoring undecodable update body (%d bytes)", len(raw))
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring update body of type %s", type(data).__name__)
        return {}
    return data
