"""Tests for the byte -> glyph translation table."""

from __future__ import annotations

from bytedit.engine.translate import GLYPHS, PLACEHOLDER, glyph


class TestGlyphs:
    def test_table_covers_every_byte(self):
        assert len(GLYPHS) == 256

    def test_printable_ascii_maps_to_itself(self):
        for b in range(32, 127):
            assert glyph(b) == chr(b)

    def test_control_and_high_bytes_use_placeholder(self):
        for b in list(range(0, 32)) + list(range(127, 256)):
            assert glyph(b) == PLACEHOLDER
