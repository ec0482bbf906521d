# File: backend/app/db/base.py
# Version: v0.2.0
"""
Declarative Base for Fern Reporter.

Model modules import Base from here:

    from backend.app.db.base import Base

We do NOT import model modules here to avoid circular imports. Instead,
the Alembic env and `maintenance.py` import `backend.app.db.models` before
they inspect metadata.
"""

from __future__ import annotations

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
