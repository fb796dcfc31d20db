"""Rule Runner: walks objects, evaluates field tags and struct-level validators.

Invariants:
    - Targets are pydantic model instances or dataclass instances; anything else
      raises InvalidValidationError
    - Groups run in tag order; the first failing group is the field's only failure
    - A field whose tag passes (or has no tag) and holds a model/dataclass value
      is walked recursively; "-" skips the field and its nested value
    - Struct-level validators run after all fields of their object
    - An unknown rule name raises InvalidValidationError

Design Decisions:
    - Field specs are resolved once per class (bounded lru_cache): metadata lookup
      and snake_casing do not repeat on every validate() call, and classes built
      at runtime are evicted instead of pinned
    - Rules, aliases and struct validators are shared mappings owned by
      Validation; registering after construction is visible to the runner
"""

import dataclasses
import inspect
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping, get_type_hints

from pydantic import BaseModel

from fieldguard.core.builtin_rules import is_empty
from fieldguard.core.errors import InvalidValidationError
from fieldguard.core.field_context import (
    FieldContext, FieldFailure, RuleFunc, StructContext, StructLevelFunc,
)
from fieldguard.core.naming import to_snake_case
from fieldguard.core.tags import ParsedTag, RuleGroup, Rules, parse_tag


@dataclass(frozen=True)
class FieldSpec:
    attr: str
    key: str
    label: str
    tag: str | None


def is_struct(obj: Any) -> bool:
    if isinstance(obj, BaseModel):
        return True
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def _rules_tag(metadata: Any) -> str | None:
    for item in metadata:
        if isinstance(item, Rules):
            return item.tag
    return None


@lru_cache(maxsize=1024)
def field_specs(cls: type) -> tuple[FieldSpec, ...]:
    """Resolve attribute name, error key, label and tag for every field of cls."""
    if issubclass(cls, BaseModel):
        specs = []
        for name, info in cls.model_fields.items():
            key = to_snake_case(info.alias or name)
            specs.append(FieldSpec(name, key, info.title or key, _rules_tag(info.metadata)))
        return tuple(specs)

    hints = get_type_hints(cls, include_extras=True)
    specs = []
    for f in dataclasses.fields(cls):
        key = to_snake_case(f.name)
        metadata = getattr(hints.get(f.name), "__metadata__", ())
        specs.append(FieldSpec(f.name, key, key, _rules_tag(metadata)))
    return tuple(specs)


async def call_rule(rule: RuleFunc, ctx: FieldContext) -> bool:
    result = rule(ctx)
    if inspect.isawaitable(result):
        result = await result
    return bool(result)


class RuleRunner:
    """Evaluates tags against values using the shared rule registry."""

    def __init__(
        self,
        rules: Mapping[str, RuleFunc],
        aliases: Mapping[str, str],
        struct_validators: Mapping[type, StructLevelFunc],
    ):
        self._rules = rules
        self._aliases = aliases
        self._struct_validators = struct_validators

    def parse(self, tag: str) -> ParsedTag:
        return parse_tag(tag, self._aliases)

    async def run_struct(self, obj: Any) -> list[FieldFailure]:
        if not is_struct(obj):
            raise InvalidValidationError(
                f"expected a pydantic model or dataclass instance, got {type(obj).__name__}",
            )
        failures: list[FieldFailure] = []
        await self._walk(obj, failures)
        return failures

    async def run_value(
        self, value: Any, tag: str, key: str, label: str | None = None,
    ) -> FieldFailure | None:
        return await self.run_parsed(self.parse(tag), value, key, label or key)

    async def run_parsed(
        self, parsed: ParsedTag, value: Any, key: str, label: str,
        parent: Any = None,
    ) -> FieldFailure | None:
        if parsed.skip or (parsed.omit_empty and is_empty(value)):
            return None
        for group in parsed.groups:
            if not await self._run_group(group, value, key, parent):
                return FieldFailure(key, label, group.tag, group.param, value)
        return None

    async def _walk(self, obj: Any, failures: list[FieldFailure]) -> None:
        for spec in field_specs(type(obj)):
            value = getattr(obj, spec.attr)
            if spec.tag is not None:
                parsed = self.parse(spec.tag)
                if parsed.skip:
                    continue
                failure = await self.run_parsed(parsed, value, spec.key, spec.label, obj)
                if failure is not None:
                    failures.append(failure)
                    continue
            if is_struct(value):
                await self._walk(value, failures)

        validator = self._struct_validators.get(type(obj))
        if validator is not None:
            ctx = StructContext(obj)
            result = validator(ctx)
            if inspect.isawaitable(result):
                await result
            failures.extend(ctx.failures)

    async def _run_group(
        self, group: RuleGroup, value: Any, name: str, parent: Any,
    ) -> bool:
        for spec in group.alternatives:
            rule = self._rules.get(spec.name)
            if rule is None:
                raise InvalidValidationError(f"undefined validation rule {spec.name!r}")
            ctx = FieldContext(value, name, spec.param, parent, spec.name)
            if await call_rule(rule, ctx):
                return True
        return False
