# File: backend/app/services/report.py
# Version: v0.1.0
"""
Report assembly for the HTML test run views.

Turns loaded `TestRun` trees into plain view objects with display-only
values (elapsed durations, per-suite status counts). Nothing computed here is
written back to the store.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from backend.app.db.models import SpecRun, SpecStatus, SuiteRun, TestRun


def format_duration(start: Optional[datetime], end: Optional[datetime]) -> str:
    """Elapsed `end - start` as a compact string: "1h2m3.5s", "250ms", "0s".

    Returns "-" when either bound is missing.
    """
    if start is None or end is None:
        return "-"
    if (start.tzinfo is None) != (end.tzinfo is None):
        start, end = start.replace(tzinfo=None), end.replace(tzinfo=None)
    return _format_delta(end - start)


def _format_delta(delta: timedelta) -> str:
    sign = "-" if delta < timedelta(0) else ""
    micros = abs(delta) // timedelta(microseconds=1)
    if micros == 0:
        return "0s"
    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_trim(micros / 1_000)}ms"

    hours, rem = divmod(micros, 3_600_000_000)
    minutes, rem = divmod(rem, 60_000_000)
    seconds = _trim(rem / 1_000_000)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def _trim(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return text or "0"


# ---------- View objects ----------
@dataclass
class SpecReport:
    id: int
    description: str
    status: str
    message: Optional[str]
    duration: str


@dataclass
class SuiteReport:
    id: int
    name: str
    duration: str
    specs: List[SpecReport] = field(default_factory=list)
    passed: int = 0
    failed: int = 0
    skipped: int = 0


@dataclass
class TestRunReport:
    __test__ = False

    id: int
    project: str
    seed: Optional[int]
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    duration: str
    suites: List[SuiteReport] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return sum(s.failed for s in self.suites)


def _spec_report(spec: SpecRun) -> SpecReport:
    return SpecReport(
        id=spec.id,
        description=spec.spec_description,
        status=SpecStatus(spec.status).value,
        message=spec.message,
        duration=format_duration(spec.start_time, spec.end_time),
    )


def _suite_report(suite: SuiteRun) -> SuiteReport:
    specs = [_spec_report(s) for s in suite.spec_runs]
    counts = Counter(s.status for s in specs)
    return SuiteReport(
        id=suite.id,
        name=suite.suite_name,
        duration=format_duration(suite.start_time, suite.end_time),
        specs=specs,
        passed=counts[SpecStatus.PASSED.value],
        failed=counts[SpecStatus.FAILED.value],
        skipped=counts[SpecStatus.SKIPPED.value],
    )


def build_report(runs: Iterable[TestRun]) -> List[TestRunReport]:
    """Build view objects for runs whose suite/spec trees are already loaded."""
    return [
        TestRunReport(
            id=run.id,
            project=run.test_project_name,
            seed=run.test_seed,
            start_time=run.start_time,
            end_time=run.end_time,
            duration=format_duration(run.start_time, run.end_time),
            suites=[_suite_report(s) for s in run.suite_runs],
        )
        for run in runs
    ]
