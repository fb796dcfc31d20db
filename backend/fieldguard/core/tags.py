"""Rule Tags: the `Rules` field marker and the tag grammar that feeds the runner.

Invariants:
    - Rules are separated by ",", alternatives by "|", a parameter follows "="
    - "-" as the whole tag skips the field; "omitempty" is only valid first
    - An alias expands to its tag; every group it produces reports the alias name
    - Malformed tags and alias cycles raise InvalidValidationError (misuse)

Design Decisions:
    - Rules rides in typing.Annotated metadata: pydantic keeps unknown metadata
      in FieldInfo.metadata, dataclasses keep it in the resolved type hints
    - Parsing is pure and returns frozen dataclasses: the runner never re-splits strings
"""

from dataclasses import dataclass
from typing import Mapping

from fieldguard.core.errors import InvalidValidationError

RULE_SEPARATOR = ","
OR_SEPARATOR = "|"
PARAM_SEPARATOR = "="
SKIP_TAG = "-"
OMIT_EMPTY = "omitempty"


@dataclass(frozen=True)
class Rules:
    """Field marker: `Annotated[str, Rules("required,mobile")]`."""
    tag: str


@dataclass(frozen=True)
class RuleSpec:
    name: str
    param: str = ""


@dataclass(frozen=True)
class RuleGroup:
    """One comma-separated position in a tag. Passes if any alternative passes."""
    tag: str
    param: str
    alternatives: tuple[RuleSpec, ...]


@dataclass(frozen=True)
class ParsedTag:
    groups: tuple[RuleGroup, ...] = ()
    skip: bool = False
    omit_empty: bool = False


def parse_tag(
    tag: str, aliases: Mapping[str, str] | None = None,
    _expanding: tuple[str, ...] = (),
) -> ParsedTag:
    """Parse a tag string into rule groups, expanding aliases."""
    aliases = aliases or {}
    tag = tag.strip()
    if tag == SKIP_TAG:
        return ParsedTag(skip=True)
    if not tag:
        raise InvalidValidationError("empty validation tag")

    groups: list[RuleGroup] = []
    omit_empty = False
    for index, raw in enumerate(tag.split(RULE_SEPARATOR)):
        raw = raw.strip()
        if not raw:
            raise InvalidValidationError(f"empty rule in tag {tag!r}")
        if raw == OMIT_EMPTY:
            if index != 0:
                raise InvalidValidationError(
                    f"{OMIT_EMPTY} must be the first rule in tag {tag!r}",
                )
            omit_empty = True
            continue
        if raw in aliases:
            groups.extend(_expand_alias(raw, aliases, _expanding))
            continue
        groups.append(_parse_group(raw, tag))
    return ParsedTag(groups=tuple(groups), omit_empty=omit_empty)


def _parse_group(raw: str, tag: str) -> RuleGroup:
    alternatives = tuple(
        _parse_rule(part.strip(), tag) for part in raw.split(OR_SEPARATOR)
    )
    if len(alternatives) == 1:
        only = alternatives[0]
        return RuleGroup(only.name, only.param, alternatives)
    return RuleGroup(raw, "", alternatives)


def _parse_rule(part: str, tag: str) -> RuleSpec:
    name, _, param = part.partition(PARAM_SEPARATOR)
    name = name.strip()
    if not name:
        raise InvalidValidationError(f"rule without a name in tag {tag!r}")
    return RuleSpec(name, param.strip())


def _expand_alias(
    alias: str, aliases: Mapping[str, str], expanding: tuple[str, ...],
) -> list[RuleGroup]:
    if alias in expanding:
        chain = " -> ".join(expanding + (alias,))
        raise InvalidValidationError(f"alias cycle: {chain}")
    expanded = parse_tag(aliases[alias], aliases, expanding + (alias,))
    if expanded.skip or expanded.omit_empty:
        raise InvalidValidationError(
            f"alias {alias!r} cannot contain {SKIP_TAG!r} or {OMIT_EMPTY!r}",
        )
    return [
        RuleGroup(alias, "", group.alternatives) for group in expanded.groups
    ]
