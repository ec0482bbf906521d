# File: backend/app/api/v1/reports.py
# Version: v0.2.0
"""
HTML test run reports (rendered on request, nothing stored on disk).

Endpoints:
- GET /reports/testruns/                 all test runs
- GET /reports/testruns/{test_run_id}    one test run (404 when missing)
"""
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from backend.app.api.v1.deps import get_test_run_store, path_test_run_id
from backend.app.services.report import build_report
from backend.app.services.test_run_store import TestRunStore

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(prefix="/reports/testruns", tags=["reports"])


@router.get("/", response_class=HTMLResponse)
def report_test_run_all(request: Request, store: TestRunStore = Depends(get_test_run_store)):
    reports = build_report(store.find_all())
    return templates.TemplateResponse(
        request, "test_runs.html", {"title": "Test runs", "reports": reports}
    )


@router.get("/{test_run_id}", response_class=HTMLResponse)
def report_test_run_by_id(
    request: Request,
    test_run_id: int = Depends(path_test_run_id),
    store: TestRunStore = Depends(get_test_run_store),
):
    reports = build_report([store.find_by_id(test_run_id)])
    return templates.TemplateResponse(
        request, "test_runs.html", {"title": f"Test run {test_run_id}", "reports": reports}
    )
