"""Presence query tests: param parsing and statement shape."""

import pytest
from sqlalchemy.dialects import sqlite

from fieldguard.core.errors import InvalidValidationError
from fieldguard.core.presence_query import (
    TableRef, build_presence_query, parse_table_param,
)


@pytest.mark.parametrize("param, expected", [
    ("users", TableRef("users", "id", None)),
    ("users;email", TableRef("users", "email", None)),
    ("auth.users;email", TableRef("users", "email", "auth")),
    (" users ; email ", TableRef("users", "email", None)),
    ("users;", TableRef("users", "id", None)),
])
def test_parse_table_param(param, expected):
    assert parse_table_param(param) == expected


@pytest.mark.parametrize("param", ["", ";email", "auth.", "users;email;x"])
def test_missing_table_is_misuse(param):
    with pytest.raises(InvalidValidationError):
        parse_table_param(param)


def _sql(stmt) -> str:
    return str(stmt.compile(
        dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True},
    ))


def test_statement_counts_matches_on_column():
    sql = _sql(build_presence_query(TableRef("users", "email"), "a@example.com"))

    assert "CASE WHEN" in sql
    assert "count(*)" in sql
    assert "FROM users" in sql
    assert "users.email = 'a@example.com'" in sql


def test_statement_uses_schema():
    sql = _sql(build_presence_query(TableRef("users", "id", "auth"), 7))

    assert "FROM auth.users" in sql
    assert "auth.users.id = 7" in sql
