"""Field Context: what a rule sees, and what a failed rule leaves behind.

Invariants:
    - FieldContext is immutable; rules read it and return a bool
    - parent is the object owning the field, None for single-value validation
    - FieldFailure.key is already snake_cased; label is the human-facing name
"""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from fieldguard.core.domain_types import FieldKind, kind_of
from fieldguard.core.naming import to_snake_case


@dataclass(frozen=True)
class FieldContext:
    """Input to a rule callback."""
    value: Any
    name: str
    param: str = ""
    parent: Any = None
    tag: str = ""


@dataclass(frozen=True)
class FieldFailure:
    """A rule group that rejected a field value."""
    key: str
    label: str
    tag: str
    param: str = ""
    value: Any = None

    @property
    def kind(self) -> FieldKind:
        return kind_of(self.value)


RuleFunc = Callable[[FieldContext], "bool | Awaitable[bool]"]


@dataclass
class StructContext:
    """Input to a struct-level validator. Failures are reported, not returned."""
    current: Any
    failures: list[FieldFailure] = field(default_factory=list)

    def report_error(
        self, field_name: str, tag: str, param: str = "",
        value: Any = None, label: str | None = None,
    ) -> None:
        key = to_snake_case(field_name)
        self.failures.append(
            FieldFailure(key, label or key, tag, param, value),
        )


StructLevelFunc = Callable[[StructContext], "None | Awaitable[None]"]
