"""Pending edit overlay: staged byte changes not yet written to disk.

The overlay never stores a no-op: an entry at ``offset`` exists only
while its value differs from the on-disk byte.  Callers that stage a
value must therefore supply the current disk byte.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

logger = logging.getLogger(__name__)


class PendingEditOverlay:
    """Sparse ``offset -> byte`` map of uncommitted edits."""

    def __init__(self) -> None:
        self._entries: dict[int, int] = {}

    def stage(self, offset: int, value: int, disk_value: int) -> bool:
        """Stage *value* at *offset*, or clear the entry if it equals disk.

        Returns:
            True if an entry is present at *offset* afterwards.
        """
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Byte value out of range: {value}")
        if value == disk_value:
            if self._entries.pop(offset, None) is not None:
                logger.debug("Cleared pending edit at %#x", offset)
            return False
        self._entries[offset] = value
        logger.debug("Staged %#04x at %#x (disk %#04x)", value, offset, disk_value)
        return True

    def discard(self, offset: int) -> None:
        self._entries.pop(offset, None)

    def clear(self) -> None:
        self._entries.clear()

    def get(self, offset: int) -> int | None:
        return self._entries.get(offset)

    def offsets(self) -> list[int]:
        """Staged offsets in ascending order."""
        return sorted(self._entries)

    def items(self) -> list[tuple[int, int]]:
        return sorted(self._entries.items())

    def as_dict(self) -> dict[int, int]:
        return dict(self._entries)

    def __contains__(self, offset: object) -> bool:
        return offset in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[int]:
        return iter(self.offsets())

    def __repr__(self) -> str:
        inner = ", ".join(f"{o:#x}: {v:#04x}" for o, v in self.items())
        return f"PendingEditOverlay({{{inner}}})"
