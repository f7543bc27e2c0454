"""Command-line tokenising for the codelabel shell."""

from __future__ import annotations

import shlex
from typing import Iterable, Iterator, List

PARSE_ERROR_MARKER = "#parse-error"


def split_command(line: str) -> List[str]:
    """Split a shell line into argv tokens using POSIX shlex rules.

    Label lines contain ``:`` and may contain ``\\n`` escapes; quote them with
    single quotes to keep the backslash.  On a quoting error the raw line is
    returned followed by a ``#parse-error:<reason>`` token.
    """
    if not line:
        return []
    try:
        return shlex.split(line, comments=False, posix=True)
    except ValueError as exc:
        return [line.strip(), f"{PARSE_ERROR_MARKER}:{exc}"]


def is_parse_error(argv: List[str]) -> bool:
    return len(argv) == 2 and argv[1].startswith(PARSE_ERROR_MARKER)


def script_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield the command lines of a script, skipping blanks and ``#`` comments."""
    for raw in lines:
        stripped = raw.strip()
        if not stripped or stripped.startswith("#"):
            continue
        yield stripped
