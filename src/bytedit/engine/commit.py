"""Flush the pending edit overlay to the byte store.

Entries are written one byte at a time in ascending offset order and
removed from the overlay as each write succeeds.  On the first failure
the commit stops and the overlay holds exactly the unwritten entries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import tenacity

from bytedit.exceptions import CommitError

if TYPE_CHECKING:
    from bytedit.engine.overlay import PendingEditOverlay
    from bytedit.protocols import ByteStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitResult:
    """Offsets written by a successful commit, in write order."""

    written: list[int] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.written)


class CommitCoordinator:
    """Writes staged bytes to a store.

    Args:
        write_attempts: Tries per byte before an ``OSError`` fails the
            commit.  1 means no retry.
        retry_wait: Seconds between retries of the same byte.
    """

    def __init__(self, *, write_attempts: int = 1, retry_wait: float = 0.05) -> None:
        if write_attempts < 1:
            raise ValueError("write_attempts must be >= 1")
        self.write_attempts = write_attempts
        self.retry_wait = retry_wait

    def _write(self, store: ByteStore, offset: int, value: int) -> None:
        retryer = tenacity.Retrying(
            retry=tenacity.retry_if_exception_type(OSError),
            stop=tenacity.stop_after_attempt(self.write_attempts),
            wait=tenacity.wait_fixed(self.retry_wait),
            before_sleep=tenacity.before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        retryer(store.write_byte, offset, value)

    def commit(self, overlay: PendingEditOverlay, store: ByteStore) -> CommitResult:
        """Write every overlay entry to *store*.

        Raises:
            CommitError: When a byte cannot be written.  The overlay keeps
                the failed entry and everything after it.
        """
        written: list[int] = []
        for offset, value in overlay.items():
            try:
                self._write(store, offset, value)
            except OSError as exc:
                pending = overlay.offsets()
                logger.warning(
                    "Commit stopped at %#x: %d written, %d pending",
                    offset, len(written), len(pending),
                )
                raise CommitError(written, pending, exc) from exc
            overlay.discard(offset)
            written.append(offset)

        logger.info("Committed %d byte(s) to %s", len(written), store.name)
        return CommitResult(written=written)
