# File: backend/app/db/migrations/versions/20261017_0001_create_test_run_tables.py
# Version: v0.1.0
"""
Create `test_runs`, `suite_runs` and `spec_runs`.

Idempotent for SQLite/local dev: skips tables that already exist (for
databases bootstrapped by SCHEMA_AUTOHEAL or `server_cli init-db`).

Revision ID: 0001_create_test_run_tables
Revises: None
Create Date: 2026-10-17

Run:
  alembic upgrade head
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "0001_create_test_run_tables"
down_revision = None
branch_labels = None
depends_on = None

SPEC_STATUSES = ("Passed", "Failed", "Skipped", "Pending")


def upgrade() -> None:
    bind = op.get_bind()
    tables = set(sa.inspect(bind).get_table_names())

    if "test_runs" not in tables:
        op.create_table(
            "test_runs",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("test_project_name", sa.String(length=255), nullable=False),
            sa.Column("test_seed", sa.BigInteger(), nullable=True),
            sa.Column("start_time", sa.DateTime(timezone=True), nullable=True),
            sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        )

    if "suite_runs" not in tables:
        op.create_table(
            "suite_runs",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column(
                "test_run_id",
                sa.Integer(),
                sa.ForeignKey("test_runs.id", name="fk_suite_runs_test_run_id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column("suite_name", sa.String(length=255), nullable=False),
            sa.Column("start_time", sa.DateTime(timezone=True), nullable=True),
            sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        )
        op.create_index("ix_suite_runs_test_run_id", "suite_runs", ["test_run_id"])

    if "spec_runs" not in tables:
        op.create_table(
            "spec_runs",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column(
                "suite_id",
                sa.Integer(),
                sa.ForeignKey("suite_runs.id", name="fk_spec_runs_suite_id", ondelete="CASCADE"),
                nullable=False,
            ),
            sa.Column("spec_description", sa.Text(), nullable=False),
            sa.Column(
                "status",
                sa.Enum(*SPEC_STATUSES, name="spec_status", native_enum=False),
                nullable=False,
            ),
            sa.Column("message", sa.Text(), nullable=True),
            sa.Column("start_time", sa.DateTime(timezone=True), nullable=True),
            sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        )
        op.create_index("ix_spec_runs_suite_id", "spec_runs", ["suite_id"])


def downgrade() -> None:
    bind = op.get_bind()
    tables = set(sa.inspect(bind).get_table_names())

    # Children first so FKs never dangle
    for name in ("spec_runs", "suite_runs", "test_runs"):
        if name in tables:
            op.drop_table(name)
