"""Current Password Rule: delegates the check to a host-supplied callback.

Invariants:
    - Exactly one checker per process; registering again replaces it
    - The rule fails when no checker is registered
    - The owning object must expose a non-negative int `user_id`, else the rule fails
    - Non-string values fail without calling the checker

Design Decisions:
    - Module-level checker instead of a Validation attribute: the host wires its
      password verification once at startup, independent of how many
      Validation instances exist
"""

import inspect
import logging
from typing import Awaitable, Callable

from fieldguard.core.field_context import FieldContext

logger = logging.getLogger(__name__)

USER_ID_ATTRIBUTE = "user_id"

CurrentPasswordChecker = Callable[[int, str], "bool | Awaitable[bool]"]

_current_password_checker: CurrentPasswordChecker | None = None


def register_current_password_checker(checker: CurrentPasswordChecker | None) -> None:
    global _current_password_checker
    _current_password_checker = checker


def get_current_password_checker() -> CurrentPasswordChecker | None:
    return _current_password_checker


async def current_password(ctx: FieldContext) -> bool:
    checker = _current_password_checker
    if checker is None:
        logger.debug(
            "No current password checker registered",
            extra={"rule": ctx.tag, "field": ctx.name},
        )
        return False
    if not isinstance(ctx.value, str):
        return False

    user_id = getattr(ctx.parent, USER_ID_ATTRIBUTE, None)
    if not isinstance(user_id, int) or isinstance(user_id, bool) or user_id < 0:
        return False

    result = checker(user_id, ctx.value)
    if inspect.isawaitable(result):
        result = await result
    return bool(result)
