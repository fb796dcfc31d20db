"""Presence Query: parses `table;column` rule params and builds the lookup statement.

Invariants:
    - Param format is `table` or `table;column`; column defaults to "id";
      more than one ";" is misuse
    - `schema.table` selects a schema
    - The statement yields exactly one row: 1 when a match exists, else 0
    - Identifiers go through SQLAlchemy quoting, values through bound parameters

Design Decisions:
    - Lightweight table()/column() constructs instead of reflected Table objects:
      no metadata round-trip per rule, and no ORM model required
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import Select, case, column, func, select, table

from fieldguard.core.errors import InvalidValidationError

DEFAULT_COLUMN = "id"


@dataclass(frozen=True)
class TableRef:
    table: str
    column: str = DEFAULT_COLUMN
    schema: str | None = None


def parse_table_param(param: str) -> TableRef:
    """Parse `users`, `users;email` or `auth.users;email`."""
    if param.count(";") > 1:
        raise InvalidValidationError(f"too many ';' in rule param {param!r}")
    table_part, _, column_part = param.partition(";")
    schema, _, table_name = table_part.strip().rpartition(".")
    table_name = table_name.strip()
    if not table_name:
        raise InvalidValidationError(f"missing table name in rule param {param!r}")
    return TableRef(
        table=table_name,
        column=column_part.strip() or DEFAULT_COLUMN,
        schema=schema.strip() or None,
    )


def build_presence_query(ref: TableRef, value: Any) -> Select:
    """SELECT CASE WHEN COUNT(*) > 0 THEN 1 ELSE 0 END FROM t WHERE col = :value."""
    target = table(ref.table, column(ref.column), schema=ref.schema)
    return (
        select(case((func.count() > 0, 1), else_=0))
        .select_from(target)
        .where(target.c[ref.column] == value)
    )
