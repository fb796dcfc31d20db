"""Regex Patterns: lazily compiled, compile-once expressions used by rules.

Invariants:
    - Each pattern is compiled at most once per process (functools.cache)
    - Digit classes match ASCII digits only (re.ASCII)
"""

import re
from functools import cache
from typing import Callable

MOBILE_PATTERN = r"^09\d{9}$"


def lazy_compile(pattern: str, flags: int = re.ASCII) -> Callable[[], re.Pattern]:
    """Return a zero-arg accessor that compiles `pattern` on first call."""

    @cache
    def compiled() -> re.Pattern:
        return re.compile(pattern, flags)

    return compiled


mobile_regex = lazy_compile(MOBILE_PATTERN)
