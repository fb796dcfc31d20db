"""Translations: locale-specific messages for rule failures and pydantic errors.

Invariants:
    - All templates are pure data formatted with {field} and {param} (rules)
      or {field} plus the pydantic error ctx keys (pydantic errors)
    - Covers every Locale; each locale has a fallback template
    - Lookup order for rules: "<tag>.<kind>", "<tag>", fallback
    - Unknown pydantic error types fall back to pydantic's own message
    - Registered rule templates may only use {field} and {param}

Design Decisions:
    - One dict per concern keyed by Locale, same shape as the other string tables
    - Translator holds per-instance overrides so hosts can add messages for their
      own rules without mutating the shared defaults
"""

import logging
from string import Formatter
from typing import Any

from fieldguard.core.domain_types import Locale
from fieldguard.core.errors import InvalidValidationError
from fieldguard.core.field_context import FieldFailure

logger = logging.getLogger(__name__)

_RULE_PLACEHOLDERS = frozenset({"field", "param"})

_FALLBACK: dict[Locale, str] = {
    Locale.FA: "{field} معتبر نیست",
    Locale.EN: "{field} is invalid",
}


# --- Rule templates -----------------------------------------------------------

_RULE_MESSAGES: dict[Locale, dict[str, str]] = {
    Locale.FA: {
        "required": "{field} الزامی است",
        "nullable": "{field} معتبر نیست",
        "exists": "{field} انتخاب شده معتبر نیست",
        "uq": "{field} قبلا ثبت شده است",
        "current_password": "رمز عبور فعلی صحیح نیست",
        "mobile": "{field} باید یک شماره موبایل معتبر باشد",
        "string": "{field} باید یک رشته متنی معتبر باشد",
        "ascii": "{field} فقط می‌تواند شامل کاراکترهای اسکی باشد",
        "alpha": "{field} فقط می‌تواند شامل حروف انگلیسی باشد",
        "alphanum": "{field} فقط می‌تواند شامل حروف و اعداد انگلیسی باشد",
        "alphaunicode": "{field} فقط می‌تواند شامل حروف باشد",
        "alphanumunicode": "{field} فقط می‌تواند شامل حروف و اعداد باشد",
        "numeric": "{field} باید یک مقدار عددی باشد",
        "min.string": "{field} باید حداقل {param} کاراکتر باشد",
        "min.number": "{field} باید {param} یا بیشتر باشد",
        "min.items": "{field} باید حداقل شامل {param} مورد باشد",
        "max.string": "{field} باید حداکثر {param} کاراکتر باشد",
        "max.number": "{field} باید {param} یا کمتر باشد",
        "max.items": "{field} باید حداکثر شامل {param} مورد باشد",
        "len.string": "طول {field} باید {param} کاراکتر باشد",
        "len.number": "{field} باید برابر با {param} باشد",
        "len.items": "{field} باید شامل {param} مورد باشد",
        "oneof": "{field} باید یکی از مقادیر [{param}] باشد",
    },
    Locale.EN: {
        "required": "{field} is a required field",
        "nullable": "{field} is invalid",
        "exists": "the selected {field} is invalid",
        "uq": "{field} has already been taken",
        "current_password": "the current password is incorrect",
        "mobile": "{field} must be a valid mobile number",
        "string": "{field} must be a valid string",
        "ascii": "{field} must contain only ascii characters",
        "alpha": "{field} can only contain alphabetic characters",
        "alphanum": "{field} can only contain alphanumeric characters",
        "alphaunicode": "{field} can only contain letters",
        "alphanumunicode": "{field} can only contain letters and numbers",
        "numeric": "{field} must be a valid numeric value",
        "min.string": "{field} must be at least {param} characters in length",
        "min.number": "{field} must be {param} or greater",
        "min.items": "{field} must contain at least {param} items",
        "max.string": "{field} must be a maximum of {param} characters in length",
        "max.number": "{field} must be {param} or less",
        "max.items": "{field} must contain at maximum {param} items",
        "len.string": "{field} must be {param} characters in length",
        "len.number": "{field} must be equal to {param}",
        "len.items": "{field} must contain {param} items",
        "oneof": "{field} must be one of [{param}]",
    },
}


# --- Pydantic error templates -------------------------------------------------

_PYDANTIC_MESSAGES: dict[Locale, dict[str, str]] = {
    Locale.FA: {
        "missing": "{field} الزامی است",
        "string_type": "{field} باید یک رشته متنی باشد",
        "int_type": "{field} باید یک عدد صحیح باشد",
        "int_parsing": "{field} باید یک عدد صحیح باشد",
        "float_type": "{field} باید یک عدد باشد",
        "float_parsing": "{field} باید یک عدد باشد",
        "bool_type": "{field} باید درست یا نادرست باشد",
        "bool_parsing": "{field} باید درست یا نادرست باشد",
        "string_too_short": "{field} باید حداقل {min_length} کاراکتر باشد",
        "string_too_long": "{field} باید حداکثر {max_length} کاراکتر باشد",
        "too_short": "{field} باید حداقل شامل {min_length} مورد باشد",
        "too_long": "{field} باید حداکثر شامل {max_length} مورد باشد",
        "greater_than": "{field} باید بیشتر از {gt} باشد",
        "greater_than_equal": "{field} باید {ge} یا بیشتر باشد",
        "less_than": "{field} باید کمتر از {lt} باشد",
        "less_than_equal": "{field} باید {le} یا کمتر باشد",
        "string_pattern_mismatch": "قالب {field} معتبر نیست",
        "literal_error": "{field} باید یکی از مقادیر {expected} باشد",
        "enum": "{field} باید یکی از مقادیر {expected} باشد",
    },
    Locale.EN: {
        "missing": "{field} is a required field",
        "string_type": "{field} must be a string",
        "int_type": "{field} must be an integer",
        "int_parsing": "{field} must be an integer",
        "float_type": "{field} must be a number",
        "float_parsing": "{field} must be a number",
        "bool_type": "{field} must be true or false",
        "bool_parsing": "{field} must be true or false",
        "string_too_short": "{field} must be at least {min_length} characters in length",
        "string_too_long": "{field} must be a maximum of {max_length} characters in length",
        "too_short": "{field} must contain at least {min_length} items",
        "too_long": "{field} must contain at maximum {max_length} items",
        "greater_than": "{field} must be greater than {gt}",
        "greater_than_equal": "{field} must be {ge} or greater",
        "less_than": "{field} must be less than {lt}",
        "less_than_equal": "{field} must be {le} or less",
        "string_pattern_mismatch": "{field} has an invalid format",
        "literal_error": "{field} must be one of {expected}",
        "enum": "{field} must be one of {expected}",
    },
}


class Translator:
    """Translate failures into one locale. Overrides shadow the defaults."""

    def __init__(self, locale: Locale = Locale.FA):
        self.locale = Locale(locale)
        self._overrides: dict[str, str] = {}

    def register(self, tag: str, template: str) -> None:
        """Add or replace the template for a rule tag (or "<tag>.<kind>")."""
        try:
            names = [name for _, name, _, _ in Formatter().parse(template) if name is not None]
        except ValueError as e:
            raise InvalidValidationError(f"malformed template for {tag!r}: {e}")
        unknown = [name for name in names if name not in _RULE_PLACEHOLDERS]
        if unknown:
            raise InvalidValidationError(
                f"template for {tag!r} uses unknown placeholders {unknown}",
            )
        self._overrides[tag] = template

    def template_for(self, failure: FieldFailure) -> str:
        defaults = _RULE_MESSAGES[self.locale]
        for key in (f"{failure.tag}.{failure.kind.value}", failure.tag):
            if key in self._overrides:
                return self._overrides[key]
            if key in defaults:
                return defaults[key]
        return _FALLBACK[self.locale]

    def translate(self, failure: FieldFailure) -> str:
        fields = {"field": failure.label, "param": failure.param}
        try:
            return self.template_for(failure).format(**fields)
        except (KeyError, IndexError, ValueError):
            logger.warning(
                f"Unusable template for {failure.tag!r}, using fallback",
                extra={"rule": failure.tag, "locale": self.locale.value},
            )
            return _FALLBACK[self.locale].format(**fields)

    def translate_pydantic(self, error: dict[str, Any], label: str) -> str:
        """Translate one entry of pydantic's ValidationError.errors()."""
        template = _PYDANTIC_MESSAGES[self.locale].get(error["type"])
        if template is None:
            return error["msg"]
        try:
            return template.format(field=label, **error.get("ctx", {}))
        except KeyError:
            return error["msg"]
