"""Builtin Rules: pure predicates available to every Validation instance.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Character-class rules reject non-string values instead of coercing them
    - min/max/len compare length for strings and collections, magnitude for numbers
    - A non-numeric min/max/len parameter raises InvalidValidationError

Design Decisions:
    - nullable always passes: it marks a field as accepting empty values without
      forcing omitempty semantics on the rest of the tag
    - required treats 0 and False as present: Python callers send them on purpose
    - mobile and nullable live here but are registered by Validation alongside the
      database rules; BUILTIN_RULES holds only the generic character/size rules
"""

import re
from typing import Callable

from fieldguard.core.domain_types import FieldKind, kind_of
from fieldguard.core.errors import InvalidValidationError
from fieldguard.core.field_context import FieldContext
from fieldguard.core.patterns import lazy_compile, mobile_regex

_numeric_regex = lazy_compile(r"^[-+]?[0-9]+(?:\.[0-9]+)?$")


def is_empty(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def required(ctx: FieldContext) -> bool:
    return not is_empty(ctx.value)


def nullable(ctx: FieldContext) -> bool:
    return True


def mobile(ctx: FieldContext) -> bool:
    """Iranian mobile number: 11 ASCII digits starting with 09."""
    return isinstance(ctx.value, str) and mobile_regex().fullmatch(ctx.value) is not None


def ascii_(ctx: FieldContext) -> bool:
    return isinstance(ctx.value, str) and ctx.value.isascii()


def alpha(ctx: FieldContext) -> bool:
    value = ctx.value
    return isinstance(value, str) and value.isascii() and value.isalpha()


def alphanum(ctx: FieldContext) -> bool:
    value = ctx.value
    return isinstance(value, str) and value.isascii() and value.isalnum()


def alphaunicode(ctx: FieldContext) -> bool:
    return isinstance(ctx.value, str) and ctx.value.isalpha()


def alphanumunicode(ctx: FieldContext) -> bool:
    return isinstance(ctx.value, str) and ctx.value.isalnum()


def numeric(ctx: FieldContext) -> bool:
    if kind_of(ctx.value) is FieldKind.NUMBER:
        return True
    return isinstance(ctx.value, str) and _numeric_regex().match(ctx.value) is not None


def _number_param(ctx: FieldContext) -> float:
    try:
        return float(ctx.param)
    except ValueError:
        raise InvalidValidationError(
            f"rule {ctx.tag!r} on {ctx.name!r} needs a numeric parameter, got {ctx.param!r}",
        )


def _measure(ctx: FieldContext) -> float | None:
    kind = kind_of(ctx.value)
    if kind in (FieldKind.STRING, FieldKind.ITEMS):
        return len(ctx.value)
    if kind is FieldKind.NUMBER:
        return ctx.value
    return None


def min_(ctx: FieldContext) -> bool:
    limit = _number_param(ctx)
    size = _measure(ctx)
    return size is not None and size >= limit


def max_(ctx: FieldContext) -> bool:
    limit = _number_param(ctx)
    size = _measure(ctx)
    return size is not None and size <= limit


def len_(ctx: FieldContext) -> bool:
    limit = _number_param(ctx)
    size = _measure(ctx)
    return size is not None and size == limit


def oneof(ctx: FieldContext) -> bool:
    """Space-separated choices: `oneof=red green blue`."""
    if kind_of(ctx.value) not in (FieldKind.STRING, FieldKind.NUMBER):
        return False
    return str(ctx.value) in re.split(r"\s+", ctx.param.strip())


BUILTIN_RULES: dict[str, Callable[[FieldContext], bool]] = {
    "required": required,
    "ascii": ascii_,
    "alpha": alpha,
    "alphanum": alphanum,
    "alphaunicode": alphaunicode,
    "alphanumunicode": alphanumunicode,
    "numeric": numeric,
    "min": min_,
    "max": max_,
    "len": len_,
    "oneof": oneof,
}
