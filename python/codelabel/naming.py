"""Label name grammar."""

from __future__ import annotations

import re
from typing import Pattern, Protocol

LABEL_NAME_PATTERN = r"^[@_a-zA-Z]+[@_a-zA-Z0-9]*$"


class NameValidator(Protocol):
    def is_valid(self, name: str) -> bool:
        ...


class LabelNameValidator:
    """Accepts identifiers made of letters, digits, ``_`` and ``@``.

    The first character may not be a digit.  The empty string is *not* a
    valid name here; callers that allow unnamed labels check for it first.
    """

    def __init__(self, pattern: str = LABEL_NAME_PATTERN) -> None:
        self._regex: Pattern[str] = re.compile(pattern)

    def is_valid(self, name: str) -> bool:
        if not isinstance(name, str):
            return False
        # fullmatch so a trailing newline does not sneak past "$"
        return self._regex.fullmatch(name) is not None


DEFAULT_NAME_VALIDATOR = LabelNameValidator()


def is_valid_label_name(name: str) -> bool:
    return DEFAULT_NAME_VALIDATOR.is_valid(name)
