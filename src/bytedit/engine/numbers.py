"""Lenient number literal parsing for command arguments."""

from __future__ import annotations

import re

from bytedit.exceptions import OffsetError

_LITERAL = re.compile(r" *(?:0[xX](?P<hex>[0-9a-fA-F]+)|(?P<dec>[0-9]+))")


def parse_number(default: int, text: str | None) -> int:
    """Parse a decimal or ``0x`` hex literal, returning *default* otherwise.

    Leading spaces are allowed.  Signs, trailing characters, and empty
    input all fall back to *default*; this function never raises.
    """
    if not text:
        return default
    match = _LITERAL.fullmatch(text)
    if match is None:
        return default
    if match.group("hex") is not None:
        return int(match.group("hex"), 16)
    return int(match.group("dec"))


def parse_offset(text: str) -> int:
    """Strict variant of :func:`parse_number` for edit offsets.

    Raises:
        OffsetError: If *text* is not a recognized literal.
    """
    value = parse_number(-1, text)
    if value < 0:
        raise OffsetError(f"Invalid offset: {text!r}")
    return value
