"""Domain Types: enums and aliases shared by rules, runner and translator.

Invariants:
    - Locale values are the language codes used in settings and templates
    - FieldKind is derived from the runtime value, never declared by callers

Design Decisions:
    - str Enums: serialize to JSON and compare against env strings directly
"""

from decimal import Decimal
from enum import Enum
from typing import Any


class Locale(str, Enum):
    """Supported message locales. FA is the default."""
    FA = "fa"
    EN = "en"


class FieldKind(str, Enum):
    """Value shape used to pick length vs magnitude message variants."""
    STRING = "string"
    NUMBER = "number"
    ITEMS = "items"
    OTHER = "other"


def kind_of(value: Any) -> FieldKind:
    if isinstance(value, str):
        return FieldKind.STRING
    if isinstance(value, bool):
        return FieldKind.OTHER
    if isinstance(value, (int, float, Decimal)):
        return FieldKind.NUMBER
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return FieldKind.ITEMS
    return FieldKind.OTHER
