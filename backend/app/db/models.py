# File: backend/app/db/models.py
# Version: v0.5.0
"""
ORM models for Fern Reporter.

Tables:
- TestRun:  one execution of a test suite collection (root entity).
- SuiteRun: one suite's execution inside a test run (`suite_runs.test_run_id`).
- SpecRun:  one test case's execution inside a suite run (`spec_runs.suite_id`).

Child collections are declared `lazy="raise"`: nothing is loaded behind the
caller's back. Stores attach the loaders they need explicitly (see
`backend.app.services.test_run_store.TREE_LOADER`).
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import List, Optional

from sqlalchemy import BigInteger, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import TypeDecorator

from backend.app.db.base import Base


class UTCDateTime(TypeDecorator):
    """Timestamps stored as UTC and read back timezone-aware.

    SQLite keeps no offset, so aware values are converted to UTC before
    binding. Naive values are taken to be UTC already.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class SpecStatus(str, PyEnum):
    PASSED = "Passed"
    FAILED = "Failed"
    SKIPPED = "Skipped"
    PENDING = "Pending"

    @classmethod
    def _missing_(cls, value):
        # Reporters send "passed", "PASSED", ...
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        return None


class SpecRun(Base):
    __tablename__ = "spec_runs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    suite_id: Mapped[int] = mapped_column(
        ForeignKey("suite_runs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    spec_description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    status: Mapped[SpecStatus] = mapped_column(
        Enum(
            SpecStatus,
            name="spec_status",
            native_enum=False,
            values_callable=lambda enum: [m.value for m in enum],
            validate_strings=True,
        ),
        nullable=False,
        default=SpecStatus.PENDING,
    )
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    start_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    end_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)


class SuiteRun(Base):
    __tablename__ = "suite_runs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    test_run_id: Mapped[int] = mapped_column(
        ForeignKey("test_runs.id", ondelete="CASCADE"), nullable=False, index=True
    )
    suite_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    start_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    end_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)

    spec_runs: Mapped[List[SpecRun]] = relationship(
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=SpecRun.id,
        lazy="raise",
    )


class TestRun(Base):
    """A single reported test run and its ordered suite runs."""
    __tablename__ = "test_runs"
    __test__ = False  # keep pytest from collecting this class

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    test_project_name: Mapped[str] = mapped_column(String(255), nullable=False)
    test_seed: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    start_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)
    end_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime(), nullable=True)

    suite_runs: Mapped[List[SuiteRun]] = relationship(
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=SuiteRun.id,
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<TestRun {self.id} {self.test_project_name!r}>"
