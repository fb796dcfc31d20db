"""Field naming tests: snake_case error keys."""

import pytest

from fieldguard.core.naming import to_snake_case


@pytest.mark.parametrize(
    "name, expected",
    [
        ("UserID", "user_id"),
        ("mobileNumber", "mobile_number"),
        ("HTTPServer", "http_server"),
        ("CurrentPassword", "current_password"),
        ("already_snake", "already_snake"),
        ("kebab-case-name", "kebab_case_name"),
        ("Email", "email"),
    ],
)
def test_to_snake_case(name, expected):
    assert to_snake_case(name) == expected
