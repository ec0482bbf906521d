# File: backend/app/gql/resolvers.py
# Version: v0.1.0
"""
GraphQL bindings for `schema.graphql` (schema-first, ariadne).

Resolvers read the request's `TestRunStore` from `info.context["store"]` and
call the same operations as the REST handlers, so not-found and bad-input
semantics match: a `NotFoundError` becomes a GraphQL error whose message is
"test run not found".

Names are converted between camelCase (schema) and snake_case (Python), so
ORM objects resolve directly and input dicts validate against the pydantic
schemas.
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from ariadne import (
    EnumType,
    MutationType,
    QueryType,
    ScalarType,
    load_schema_from_path,
    make_executable_schema,
)
from pydantic import ValidationError

from backend.app.core.errors import BadRequestError, parse_test_run_id
from backend.app.db.models import SpecStatus
from backend.app.db.schemas.test_run import TestRunCreate

SCHEMA_PATH = Path(__file__).with_name("schema.graphql")

query = QueryType()
mutation = MutationType()
time_scalar = ScalarType("Time")
int64_scalar = ScalarType("Int64")
spec_status = EnumType("SpecStatus", SpecStatus)


# ---------- Scalars ----------
@time_scalar.serializer
def serialize_time(value: datetime) -> str:
    # RFC 3339, UTC written as "Z"
    return value.isoformat().replace("+00:00", "Z")


@time_scalar.value_parser
def parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value)


@int64_scalar.serializer
def serialize_int64(value: Any) -> int:
    return int(value)


@int64_scalar.value_parser
def parse_int64(value: Any) -> int:
    return int(value)


# ---------- Queries ----------
@query.field("testRuns")
def resolve_test_runs(_, info):
    return info.context["store"].find_all()


@query.field("testRun")
def resolve_test_run(_, info, id: str):
    return info.context["store"].find_by_id(parse_test_run_id(id))


# ---------- Mutations ----------
@mutation.field("createTestRun")
def resolve_create_test_run(_, info, input: Dict[str, Any]):
    try:
        payload = TestRunCreate.model_validate(input)
    except ValidationError as exc:
        raise BadRequestError(str(exc.errors()[0].get("msg", "invalid input"))) from exc
    return info.context["store"].create(payload)


@mutation.field("updateTestRun")
def resolve_update_test_run(_, info, id: str, patch: Dict[str, Any]):
    return info.context["store"].update(parse_test_run_id(id), patch)


@mutation.field("deleteTestRun")
def resolve_delete_test_run(_, info, id: str):
    return info.context["store"].delete(parse_test_run_id(id))


schema = make_executable_schema(
    load_schema_from_path(str(SCHEMA_PATH)),
    query,
    mutation,
    time_scalar,
    int64_scalar,
    spec_status,
    convert_names_case=True,
)
