"""Validation: rule registration, validation entry points and error translation.

Invariants:
    - Every instance registers exists, nullable, uq, current_password, mobile
      and the `string` alias on top of the builtin rules
    - init() builds the process-wide instance at most once; later calls return it
    - A failed init() is not cached: the next call retries
    - Entry points return None on success and raise FieldValidationError with a
      snake_cased field -> translated messages mapping on failure
    - Misuse raises InvalidValidationError (fixed user-facing message)

Design Decisions:
    - validate_data runs pydantic first, then tag rules: type/constraint errors
      and rule failures reach the caller in the same mapping shape
    - Struct-level validators are keyed by exact type; registering again replaces
"""

import logging
import threading
from typing import Any, Iterable

from pydantic import BaseModel, ValidationError

from fieldguard.config import get_settings
from fieldguard.core.builtin_rules import BUILTIN_RULES, mobile, nullable
from fieldguard.core.domain_types import Locale
from fieldguard.core.errors import FieldValidationError, InvalidValidationError
from fieldguard.core.field_context import FieldFailure, RuleFunc, StructLevelFunc
from fieldguard.core.naming import to_snake_case
from fieldguard.core.tags import (
    OR_SEPARATOR, PARAM_SEPARATOR, RULE_SEPARATOR, SKIP_TAG, parse_tag,
)
from fieldguard.core.translations import Translator
from fieldguard.infrastructure.database import DatabaseSessionManager
from fieldguard.services.password_rule import (
    CurrentPasswordChecker, current_password, register_current_password_checker,
)
from fieldguard.services.record_rules import RecordRules
from fieldguard.services.rule_runner import RuleRunner, field_specs

logger = logging.getLogger(__name__)

STRING_ALIAS = "alphanumunicode|alphaunicode|ascii"
VALUE_FIELD = "value"
NON_FIELD_KEY = "__all__"

_RESERVED = (RULE_SEPARATOR, OR_SEPARATOR, PARAM_SEPARATOR)


class Validation:
    """Validator with database-aware rules and locale-translated errors."""

    def __init__(self, db: DatabaseSessionManager, locale: Locale = Locale.FA):
        self.database = db
        self.translator = Translator(locale)
        self._rules: dict[str, RuleFunc] = dict(BUILTIN_RULES)
        self._aliases: dict[str, str] = {}
        self._struct_validators: dict[type, StructLevelFunc] = {}
        self._runner = RuleRunner(self._rules, self._aliases, self._struct_validators)

        records = RecordRules(db)
        self.register_validation("exists", records.exists)
        self.register_validation("nullable", nullable)
        self.register_validation("uq", records.unique)
        self.register_validation("current_password", current_password)
        self.register_validation("mobile", mobile)
        self.register_alias("string", STRING_ALIAS)

    # --- Registration ---------------------------------------------------------

    def register_validation(self, tag: str, fn: RuleFunc) -> None:
        """Map a rule name to a callback taking a FieldContext."""
        _check_name(tag)
        if not callable(fn):
            raise InvalidValidationError(f"rule {tag!r} callback is not callable")
        self._rules[tag] = fn
        logger.debug(f"Registered rule {tag!r}", extra={"rule": tag})

    def register_alias(self, alias: str, tags: str) -> None:
        """Make `alias` expand to `tags`; failures are reported as `alias`."""
        _check_name(alias)
        # parse once with the new alias in place so cycles fail at registration
        parse_tag(alias, {**self._aliases, alias: tags})
        self._aliases[alias] = tags

    def register_struct_validation(
        self, fn: StructLevelFunc, *types: type,
    ) -> None:
        if not types:
            raise InvalidValidationError("struct validation needs at least one type")
        for cls in types:
            self._struct_validators[cls] = fn

    def register_translation(self, tag: str, template: str) -> None:
        self.translator.register(tag, template)

    def register_app_dependencies(self, checker: CurrentPasswordChecker | None) -> None:
        """Install the host's password verification for `current_password`."""
        register_current_password_checker(checker)

    # --- Entry points ---------------------------------------------------------

    async def validate(self, obj: Any) -> None:
        """Run every field tag and struct-level validator on a model instance."""
        failures = await self._runner.run_struct(obj)
        self._raise_for(failures)

    async def validate_var(
        self, value: Any, rule: str, field: str = VALUE_FIELD,
    ) -> None:
        """Validate one value against a tag string."""
        key = to_snake_case(field)
        failure = await self._runner.run_value(value, rule, key)
        self._raise_for([failure] if failure is not None else [])

    async def validate_data(self, schema: type[BaseModel], data: Any) -> BaseModel:
        """Parse data with pydantic, then run the tag rules on the result."""
        if not (isinstance(schema, type) and issubclass(schema, BaseModel)):
            raise InvalidValidationError(f"expected a pydantic model class, got {schema!r}")
        try:
            obj = schema.model_validate(data)
        except ValidationError as e:
            raise self._translate_pydantic(schema, e) from e
        await self.validate(obj)
        return obj

    # --- Translation ----------------------------------------------------------

    def _raise_for(self, failures: Iterable[FieldFailure]) -> None:
        errors: dict[str, list[str]] = {}
        for failure in failures:
            errors.setdefault(failure.key, []).append(
                self.translator.translate(failure),
            )
        if errors:
            logger.info(
                f"Validation failed for {len(errors)} field(s)",
                extra={"error_code": "VALIDATION_ERROR", "field": ",".join(errors)},
            )
            raise FieldValidationError(errors)

    def _translate_pydantic(
        self, schema: type[BaseModel], exc: ValidationError,
    ) -> FieldValidationError:
        labels = {spec.key: spec.label for spec in field_specs(schema)}
        errors: dict[str, list[str]] = {}
        for error in exc.errors():
            names = [part for part in error["loc"] if isinstance(part, str)]
            key = to_snake_case(names[-1]) if names else NON_FIELD_KEY
            label = labels.get(key, key)
            errors.setdefault(key, []).append(
                self.translator.translate_pydantic(error, label),
            )
        logger.info(
            f"Schema {schema.__name__} rejected input",
            extra={"error_code": "VALIDATION_ERROR", "field": ",".join(errors)},
        )
        return FieldValidationError(errors)


def _check_name(name: str) -> None:
    if not name or name == SKIP_TAG or any(sep in name for sep in _RESERVED):
        raise InvalidValidationError(f"invalid rule or alias name {name!r}")


# --- Process-wide instance ----------------------------------------------------

_lock = threading.Lock()
_instance: Validation | None = None


def init(
    db: DatabaseSessionManager | None = None, locale: Locale | None = None,
) -> Validation:
    """Build the shared Validation once; later calls return the same instance."""
    global _instance
    with _lock:
        if _instance is None:
            settings = get_settings()
            instance = Validation(
                db or DatabaseSessionManager.from_settings(settings),
                locale or settings.validation_locale,
            )
            _instance = instance
            logger.info(
                "Validation initialized",
                extra={"locale": instance.translator.locale.value},
            )
        return _instance


def current() -> Validation | None:
    return _instance
