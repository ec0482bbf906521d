# File: backend/app/api/v1/api.py
# Version: v0.8.0
"""
v1 API aggregator.

Routers included under /api:
- health
- testrun GraphQL playground redirect (before testrun so `_graphql` is not
  taken for an id)
- testrun

Additionally, we expose `public_router` for the root-level routes: the HTML
reports at /reports/testruns/* and the GraphQL endpoint at /query, so
main.py doesn't need to import those routers directly.
"""
from __future__ import annotations

from fastapi import APIRouter

from . import health as health_router
from . import graphql as graphql_router
from . import reports as reports_router
from . import test_runs as test_runs_router

# All v1 JSON APIs live under /api via api_router
api_router = APIRouter()
api_router.include_router(health_router.router)
api_router.include_router(graphql_router.playground_router)
api_router.include_router(test_runs_router.router)

# Public (root-level) router; main.py includes it at the app root.
public_router = APIRouter()
public_router.include_router(reports_router.router)  # exposes /reports/testruns/*
public_router.include_router(graphql_router.router)  # exposes /query
