"""Protocol definitions for bytedit.

Defines the byte-store interface the editing engine reads from and
commits to.  The engine never opens files itself.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteStore(Protocol):
    """Random-access byte storage (normally a file opened for update)."""

    @property
    def name(self) -> str:
        """Human-readable identifier shown in status output."""
        ...

    @property
    def writable(self) -> bool:
        ...

    def size(self) -> int:
        """Current length in bytes."""
        ...

    def read(self, offset: int, length: int) -> bytes:
        """Read up to *length* bytes at *offset* (short at end of file)."""
        ...

    def write_byte(self, offset: int, value: int) -> None:
        """Write one byte at *offset*.  Raises OSError on failure."""
        ...

    def close(self) -> None:
        ...
