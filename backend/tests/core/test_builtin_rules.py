"""Builtin rule tests: pure predicates over FieldContext.

Tests cover:
    - required treats None and empty containers as missing, 0/False as present
    - nullable always passes
    - character-class rules reject non-strings
    - min/max/len by length for strings and collections, by value for numbers
    - a non-numeric size param is misuse
"""

import pytest

from fieldguard.core.builtin_rules import (
    alpha, alphanum, alphanumunicode, alphaunicode, ascii_, len_, max_, min_,
    nullable, numeric, oneof, required,
)
from fieldguard.core.errors import InvalidValidationError
from fieldguard.core.field_context import FieldContext


def ctx(value, param="", tag="") -> FieldContext:
    return FieldContext(value, "field", param, None, tag)


@pytest.mark.parametrize("value", [None, "", [], {}, ()])
def test_required_rejects_empty(value):
    assert required(ctx(value)) is False


@pytest.mark.parametrize("value", ["x", " ", 0, False, [0], 1.5])
def test_required_accepts_present(value):
    assert required(ctx(value)) is True


@pytest.mark.parametrize("value", [None, "", "anything", 0])
def test_nullable_always_passes(value):
    assert nullable(ctx(value)) is True


def test_character_classes():
    assert ascii_(ctx("hello world!")) is True
    assert ascii_(ctx("سلام")) is False
    assert alpha(ctx("Hello")) is True
    assert alpha(ctx("Hello1")) is False
    assert alpha(ctx("سلام")) is False
    assert alphanum(ctx("abc123")) is True
    assert alphaunicode(ctx("سلام")) is True
    assert alphaunicode(ctx("سلام دنیا")) is False
    assert alphanumunicode(ctx("سلام۱۲۳")) is True


@pytest.mark.parametrize("rule", [ascii_, alpha, alphanum, alphaunicode, alphanumunicode])
def test_character_classes_reject_non_strings(rule):
    assert rule(ctx(123)) is False


def test_empty_string_is_ascii_but_not_alpha():
    assert ascii_(ctx("")) is True
    assert alpha(ctx("")) is False


@pytest.mark.parametrize("value, expected", [
    ("42", True), ("-3.5", True), ("+7", True), ("4e2", False), ("", False),
    (12, True), (1.5, True), (True, False), ("۴۲", False),
])
def test_numeric(value, expected):
    assert numeric(ctx(value)) is expected


def test_min_max_len_on_strings():
    assert min_(ctx("abc", "3", "min")) is True
    assert min_(ctx("ab", "3", "min")) is False
    assert max_(ctx("abcd", "3", "max")) is False
    assert len_(ctx("سلام", "4", "len")) is True


def test_min_max_on_numbers_and_items():
    assert min_(ctx(18, "18", "min")) is True
    assert min_(ctx(17.9, "18", "min")) is False
    assert max_(ctx([1, 2, 3], "2", "max")) is False
    assert len_(ctx({"a": 1}, "1", "len")) is True


def test_size_rules_reject_unsized_values():
    assert min_(ctx(None, "1", "min")) is False
    assert max_(ctx(object(), "1", "max")) is False


def test_size_rule_with_bad_param_is_misuse():
    with pytest.raises(InvalidValidationError) as exc:
        min_(ctx("abc", "three", "min"))
    assert "three" in exc.value.reason


def test_oneof():
    assert oneof(ctx("red", "red green  blue")) is True
    assert oneof(ctx("pink", "red green blue")) is False
    assert oneof(ctx(2, "1 2 3")) is True
    assert oneof(ctx(["red"], "red")) is False
