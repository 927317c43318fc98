"""Byte value -> display glyph translation.

Printable ASCII (32..126) maps to itself, everything else to ``.``.
Display only: never compare bytes through their glyphs.
"""

from __future__ import annotations

PLACEHOLDER = "."

GLYPHS: tuple[str, ...] = tuple(
    chr(b) if 32 <= b <= 126 else PLACEHOLDER for b in range(256)
)


def glyph(value: int) -> str:
    """Return the display glyph for a byte value."""
    return GLYPHS[value]
