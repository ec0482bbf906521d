# File: backend/app/core/errors.py
# Version: v0.2.0
"""
Error taxonomy shared by the store, the REST handlers and the GraphQL resolvers.

Each error carries the HTTP status it maps to; `backend.app.main` renders
them as `{"error": <message>}` bodies.
"""
from __future__ import annotations


class ReporterError(Exception):
    status_code: int = 500
    default_message: str = "internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ReporterError):
    """No row matches the identifier, or the identifier is not numeric."""

    status_code = 404
    default_message = "test run not found"


class BadRequestError(ReporterError):
    status_code = 400
    default_message = "invalid request body"


class StoreFailureError(ReporterError):
    """The database rejected a statement; the transaction was rolled back."""

    status_code = 500
    default_message = "internal store failure"


# Identifiers are INTEGER columns (32-bit on PostgreSQL)
MAX_TEST_RUN_ID = 2**31 - 1


def parse_test_run_id(raw: str | int) -> int:
    """Parse a path/GraphQL identifier.

    Anything non-numeric, or outside the identifier column's range, is a
    NotFoundError: no row can carry such an id.
    """
    if isinstance(raw, int):
        value = raw
    else:
        try:
            value = int(str(raw).strip())
        except ValueError:
            raise NotFoundError() from None
    if not 1 <= value <= MAX_TEST_RUN_ID:
        raise NotFoundError()
    return value
