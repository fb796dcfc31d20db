"""Record Rules: `exists` and `uq` checks against database rows.

Invariants:
    - exists passes only when the presence query returns 1
    - uq passes only when the presence query returns 0
    - Only string and numeric values reach the database; anything else (None,
      lists, dicts, bools) fails exists and passes uq without a query
    - Query failures propagate as DatabaseError; they are never a failed rule

Design Decisions:
    - One short-lived session per lookup through DatabaseSessionManager, so the
      rollback-and-map error handling lives in one place
"""

import logging

from fieldguard.core.domain_types import FieldKind, kind_of
from fieldguard.core.field_context import FieldContext
from fieldguard.core.presence_query import build_presence_query, parse_table_param
from fieldguard.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)


def _is_lookup_value(value: object) -> bool:
    return kind_of(value) in (FieldKind.STRING, FieldKind.NUMBER)


class RecordRules:
    """Database-backed rule callbacks bound to one session manager."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def exists(self, ctx: FieldContext) -> bool:
        if not _is_lookup_value(ctx.value):
            return False
        return await self._presence(ctx) == 1

    async def unique(self, ctx: FieldContext) -> bool:
        if not _is_lookup_value(ctx.value):
            return True
        return await self._presence(ctx) == 0

    async def _presence(self, ctx: FieldContext) -> int:
        ref = parse_table_param(ctx.param)
        stmt = build_presence_query(ref, ctx.value)
        async with self._db.session() as session:
            result = await session.execute(stmt)
            found = result.scalar_one()
        logger.debug(
            f"Presence lookup on {ref.table}.{ref.column} -> {found}",
            extra={"rule": ctx.tag, "field": ctx.name, "table": ref.table},
        )
        return found
