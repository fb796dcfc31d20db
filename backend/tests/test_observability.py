"""Structured logging tests: JSON formatter fields."""

import json
import logging

from fieldguard.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "fieldguard.services.record_rules", logging.INFO, __file__, 1,
        "Presence lookup on %s", ("users.email",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_base_fields():
    log = json.loads(JSONFormatter().format(_record()))

    assert log["level"] == "INFO"
    assert log["logger"] == "fieldguard.services.record_rules"
    assert log["message"] == "Presence lookup on users.email"
    assert "timestamp" in log


def test_json_formatter_surfaces_rule_extras():
    log = json.loads(JSONFormatter().format(
        _record(rule="uq", field="email", table="users", unrelated="x"),
    ))

    assert log["rule"] == "uq"
    assert log["field"] == "email"
    assert log["table"] == "users"
    assert "unrelated" not in log


def test_json_formatter_keeps_non_ascii():
    record = _record(locale="fa")
    record.msg = "پیام"
    record.args = ()

    assert "پیام" in JSONFormatter().format(record)
