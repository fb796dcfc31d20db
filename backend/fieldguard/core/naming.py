"""Field Naming: converts attribute and alias names to snake_case error keys.

Invariants:
    - Output is lowercase with single underscores between words
    - Acronym runs stay together: UserID -> user_id, HTTPServer -> http_server
"""

import re

_WORD_BOUNDARY = re.compile(r"(.)([A-Z][a-z]+)")
_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[\s\-]+")
_REPEATED_UNDERSCORES = re.compile(r"_+")


def to_snake_case(name: str) -> str:
    """Convert a CamelCase, camelCase or kebab-case name to snake_case."""
    name = _SEPARATORS.sub("_", name.strip())
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    name = _LOWER_UPPER.sub(r"\1_\2", name)
    return _REPEATED_UNDERSCORES.sub("_", name).lower()
