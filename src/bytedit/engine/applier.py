"""Merge a parsed byte sequence into the pending edit overlay.

Every byte is compared against the on-disk value, never against a
previously staged one, so applying the same patch twice is a no-op the
second time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from bytedit.exceptions import OffsetError

if TYPE_CHECKING:
    from bytedit.engine.overlay import PendingEditOverlay
    from bytedit.protocols import ByteStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApplyResult:
    """Outcome of applying a patch.

    Attributes:
        start: First offset of the patch.
        staged: Offsets that now hold a pending edit.
        cleared: Offsets whose value matched disk (no entry left).
        truncated: Number of trailing bytes dropped at end of file.
    """

    start: int
    staged: list[int] = field(default_factory=list)
    cleared: list[int] = field(default_factory=list)
    truncated: int = 0

    @property
    def end(self) -> int:
        """Offset one past the last byte that was applied."""
        return self.start + len(self.staged) + len(self.cleared)


def apply_patch(
    overlay: PendingEditOverlay,
    start: int,
    data: bytes,
    store: ByteStore,
    eof: int | None = None,
) -> ApplyResult:
    """Stage *data* at *start* against the bytes currently in *store*.

    Bytes that would land at or past end of file are dropped silently.

    Raises:
        OffsetError: If *start* is negative.
    """
    if start < 0:
        raise OffsetError(f"Negative offset: {start}")
    if eof is None:
        eof = store.size()

    applicable = max(0, min(len(data), eof - start))
    disk = store.read(start, applicable)
    staged: list[int] = []
    cleared: list[int] = []
    for i in range(applicable):
        offset = start + i
        if overlay.stage(offset, data[i], disk[i]):
            staged.append(offset)
        else:
            cleared.append(offset)

    truncated = len(data) - applicable
    if truncated:
        logger.debug("Dropped %d byte(s) past end of file at %#x", truncated, eof)
    return ApplyResult(start=start, staged=staged, cleared=cleared, truncated=truncated)
