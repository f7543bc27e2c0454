"""Line codec for code labels.

One label per line::

    <REGION_TAG>:<ADDR_HEX>[-<ADDR_HEX_END>]:<NAME>[:<COMMENT>]

Addresses are uppercase hexadecimal padded to at least four digits; a range is
inclusive.  Line breaks inside the comment are stored as the two characters
``\\n`` so every label stays on a single line.  The comment is the last field
and may itself contain ``:``.

:func:`encode_label` never fails.  :func:`decode_label` never raises for any
string input: a line that cannot be decoded yields ``None`` and callers are
expected to skip it.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Union

from .naming import DEFAULT_NAME_VALIDATOR, NameValidator
from .record import U32_MAX, CodeLabel
from .regions import region_for_tag, tag_for_region

LOGGER = logging.getLogger("codelabel.codec")

FIELD_SEPARATOR = ":"
RANGE_SEPARATOR = "-"
COMMENT_NEWLINE_ESCAPE = "\\n"

_MAX_FIELDS = 4
_MIN_FIELDS = 3
_HEX_RE = re.compile(r"[ \t\n\v\f\r]*([0-9A-Fa-f]+)[ \t\n\v\f\r]*")
# "\r\n" first so a Windows line break becomes a single escape.
_LINE_BREAKS = ("\r\n", "\n", "\r")
_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")


class _Rejected(ValueError):
    """Internal signal for a line that cannot be decoded."""


def split_lines(text: str) -> List[str]:
    """Split *text* on the line breaks the encoder escapes.

    Unlike :meth:`str.splitlines`, separators such as U+2028 are left in place,
    since an encoded comment may carry them unescaped.
    """
    return _LINE_SPLIT_RE.split(text)


def _format_address(value: int) -> str:
    return format(value, "04X")


def escape_comment(comment: str) -> str:
    for sequence in _LINE_BREAKS:
        comment = comment.replace(sequence, COMMENT_NEWLINE_ESCAPE)
    return comment


def unescape_comment(text: str) -> str:
    return text.replace(COMMENT_NEWLINE_ESCAPE, "\n")


def encode_label(label: CodeLabel) -> str:
    """Return the single-line text form of *label*.

    The name is written verbatim; it is the caller's job to have validated it.
    A comment that is empty or whitespace-only is omitted together with its
    separator.
    """

    parts = [tag_for_region(label.region), FIELD_SEPARATOR, _format_address(label.address)]
    if label.length > 1:
        parts.append(RANGE_SEPARATOR)
        parts.append(_format_address(label.address + label.length - 1))
    parts.append(FIELD_SEPARATOR)
    parts.append(label.name)
    if label.comment.strip():
        parts.append(FIELD_SEPARATOR)
        parts.append(escape_comment(label.comment))
    return "".join(parts)


def _parse_hex(text: str) -> int:
    match = _HEX_RE.fullmatch(text)
    if not match:
        raise _Rejected(f"invalid hex value {text!r}")
    value = int(match.group(1), 16)
    if value > U32_MAX:
        raise _Rejected(f"address {text!r} does not fit in 32 bits")
    return value


def _parse_span(field: str) -> tuple[int, int]:
    if RANGE_SEPARATOR not in field:
        return _parse_hex(field), 1
    # segments after the second "-" are ignored
    parts = field.split(RANGE_SEPARATOR)
    start_text, end_text = parts[0], parts[1]
    start = _parse_hex(start_text)
    end = _parse_hex(end_text)
    if end < start:
        raise _Rejected(f"range end {end:#x} precedes start {start:#x}")
    length = end - start + 1
    if length > U32_MAX:
        raise _Rejected("range length does not fit in 32 bits")
    return start, length


def _decode(line: str, validator: NameValidator) -> CodeLabel:
    fields = line.split(FIELD_SEPARATOR, _MAX_FIELDS - 1)
    if len(fields) < _MIN_FIELDS:
        raise _Rejected("too few fields")
    region = region_for_tag(fields[0])
    if region is None:
        raise _Rejected(f"unknown region tag {fields[0]!r}")
    address, length = _parse_span(fields[1])
    name = fields[2]
    if name and not validator.is_valid(name):
        raise _Rejected(f"invalid label name {name!r}")
    comment = unescape_comment(fields[3]) if len(fields) > 3 else ""
    return CodeLabel(address=address, region=region, name=name, comment=comment, length=length)


def decode_label(line: str, validator: NameValidator = DEFAULT_NAME_VALIDATOR) -> Optional[CodeLabel]:
    """Parse one label line, or return ``None`` if it is not a valid label."""

    if not isinstance(line, str):
        LOGGER.debug("rejected non-string label line %r", line)
        return None
    try:
        return _decode(line, validator)
    except _Rejected as exc:
        LOGGER.debug("rejected label line %r: %s", line, exc)
        return None


def encode_lines(labels: Iterable[CodeLabel]) -> List[str]:
    return [encode_label(label) for label in labels]


def decode_lines(
    lines: Union[str, Iterable[str]],
    validator: NameValidator = DEFAULT_NAME_VALIDATOR,
) -> List[CodeLabel]:
    """Decode every valid label in *lines*, skipping blank and invalid rows.

    *lines* may be a text blob or any iterable of lines; trailing line breaks
    on individual lines are stripped before decoding.
    """

    if isinstance(lines, str):
        lines = split_lines(lines)
    labels: List[CodeLabel] = []
    skipped = 0
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        label = decode_label(line, validator)
        if label is None:
            skipped += 1
            continue
        labels.append(label)
    if skipped:
        LOGGER.info("skipped %d invalid label line(s)", skipped)
    return labels
