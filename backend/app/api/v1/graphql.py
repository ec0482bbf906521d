# File: backend/app/api/v1/graphql.py
# Version: v0.2.0
"""
GraphQL endpoint.

Endpoints:
- POST /query                 execute a GraphQL operation
- GET  /query                 GraphiQL explorer
- GET  /testrun/_graphql      redirect to the explorer (mounted under /api)
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from ariadne import graphql_sync
from ariadne.explorer import ExplorerGraphiQL
from fastapi import APIRouter, Body, Depends
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from backend.app.api.v1.deps import get_test_run_store
from backend.app.gql.resolvers import schema
from backend.app.services.test_run_store import TestRunStore

logger = logging.getLogger(__name__)

EXPLORER_HTML = ExplorerGraphiQL(title="Fern Reporter GraphQL").html(None)

router = APIRouter(tags=["graphql"])
playground_router = APIRouter(tags=["graphql"])


@router.get("/query", response_class=HTMLResponse)
def graphql_explorer():
    return HTMLResponse(EXPLORER_HTML)


@router.post("/query")
def graphql_server(
    data: Dict[str, Any] = Body(...),
    store: TestRunStore = Depends(get_test_run_store),
):
    _, result = graphql_sync(
        schema,
        data,
        context_value={"store": store},
        logger=logger.name,
    )
    # Documents that fail to parse or validate never reach execution and carry no "data"
    return JSONResponse(result, status_code=200 if "data" in result else 400)


@playground_router.get("/testrun/_graphql")
def graphql_playground():
    return RedirectResponse("/query")
