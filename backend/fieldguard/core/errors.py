"""Error Hierarchy: typed, categorized exceptions for all fieldguard failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Rule failures (422) are recoverable; misuse and database errors are not
    - InvalidValidationError never exposes its reason in the user-facing message
    - str(FieldValidationError) is the JSON encoding of the field -> messages mapping

Design Decisions:
    - Single hierarchy with FieldGuardError base: one FastAPI handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging
    - Database failures surface as DatabaseError instead of a failed rule, so
      "record not found" and "query error" stay distinguishable
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

GENERIC_ERROR_MESSAGE = "something went wrong. Please try again later"


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    rule: str | None = None
    field_name: str | None = None
    debug_info: dict[str, Any] | None = None


class FieldGuardError(Exception):
    """Base exception for all fieldguard errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


class FieldValidationError(FieldGuardError):
    """One or more rules failed. Carries translated messages per field."""

    def __init__(
        self, errors: dict[str, list[str]], context: ErrorContext | None = None,
    ):
        super().__init__(
            json.dumps(errors, ensure_ascii=False),
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 422,
        )
        self.errors = errors

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["fields"] = self.errors
        return response


class InvalidValidationError(FieldGuardError):
    """Validation was misused: bad target, unknown rule, malformed tag or param."""

    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(
            GENERIC_ERROR_MESSAGE, "INVALID_VALIDATION", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, context, 500,
        )
        self.reason = reason


class DatabaseError(FieldGuardError):
    """Database operation failed."""

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
