"""Shared test fixtures for bytedit.

Provides file-backed and in-memory editors over small sample buffers.
"""

from __future__ import annotations

import pytest

from bytedit.editor import Editor
from bytedit.engine.overlay import PendingEditOverlay
from bytedit.storage.files import MemoryByteStore

SAMPLE = bytes(range(0x30, 0x30 + 40))  # "0123456789:;<=>?@ABC..."


@pytest.fixture
def overlay() -> PendingEditOverlay:
    return PendingEditOverlay()


@pytest.fixture
def sample_store() -> MemoryByteStore:
    return MemoryByteStore(SAMPLE, name="sample.bin")


@pytest.fixture
def sample_file(tmp_path):
    """A 40-byte file on disk; returns its path as a string."""
    path = tmp_path / "sample.bin"
    path.write_bytes(SAMPLE)
    return str(path)


# ------------------------------------------------------------------
# Shared test helpers
# ------------------------------------------------------------------

def make_editor(data: bytes = SAMPLE, **kwargs) -> Editor:
    """Create an in-memory Editor for testing."""
    return Editor.from_store(MemoryByteStore(data, name="test.bin"), **kwargs)


class FailingStore(MemoryByteStore):
    """Memory store whose writes fail at chosen offsets.

    ``fail_times`` limits how many times each offset fails before
    succeeding; None means it always fails.
    """

    def __init__(self, data: bytes, fail_at: set[int], fail_times: int | None = None) -> None:
        super().__init__(data, name="failing.bin")
        self.fail_at = set(fail_at)
        self.fail_times = fail_times
        self.attempts: dict[int, int] = {}

    def write_byte(self, offset: int, value: int) -> None:
        count = self.attempts.get(offset, 0) + 1
        self.attempts[offset] = count
        if offset in self.fail_at and (self.fail_times is None or count <= self.fail_times):
            raise OSError(f"simulated write failure at {offset}")
        super().write_byte(offset, value)
