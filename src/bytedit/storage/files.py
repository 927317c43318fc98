"""File-backed and in-memory byte stores.

``open_store(":memory:")`` mirrors the in-memory convention used for
tests; anything else is treated as a path and opened in binary mode.
"""

from __future__ import annotations

import logging
import os
from typing import BinaryIO

from bytedit.exceptions import FileAccessError

logger = logging.getLogger(__name__)


class FileByteStore:
    """Byte store over a file opened ``rb`` (read-only) or ``r+b``."""

    def __init__(self, path: str, *, read_only: bool = False) -> None:
        self._path = path
        self._read_only = read_only
        if os.path.isdir(path):
            raise FileAccessError(path, "is a directory")
        mode = "rb" if read_only else "r+b"
        try:
            self._fh: BinaryIO = open(path, mode)  # noqa: SIM115
        except OSError as exc:
            raise FileAccessError(path, exc.strerror or str(exc)) from exc
        logger.debug("Opened %s (%s)", path, mode)

    @property
    def name(self) -> str:
        return self._path

    @property
    def writable(self) -> bool:
        return not self._read_only

    def size(self) -> int:
        return os.fstat(self._fh.fileno()).st_size

    def read(self, offset: int, length: int) -> bytes:
        if length <= 0 or offset < 0:
            return b""
        self._fh.seek(offset)
        return self._fh.read(length)

    def write_byte(self, offset: int, value: int) -> None:
        if self._read_only:
            raise OSError(f"{self._path} is open read-only")
        self._fh.seek(offset)
        self._fh.write(bytes((value,)))
        self._fh.flush()

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.close()

    def __enter__(self) -> FileByteStore:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class MemoryByteStore:
    """Byte store over an in-memory buffer."""

    def __init__(self, data: bytes = b"", *, name: str = ":memory:", read_only: bool = False) -> None:
        self._data = bytearray(data)
        self._name = name
        self._read_only = read_only

    @property
    def name(self) -> str:
        return self._name

    @property
    def writable(self) -> bool:
        return not self._read_only

    @property
    def data(self) -> bytes:
        return bytes(self._data)

    def size(self) -> int:
        return len(self._data)

    def read(self, offset: int, length: int) -> bytes:
        if length <= 0 or offset < 0:
            return b""
        return bytes(self._data[offset:offset + length])

    def write_byte(self, offset: int, value: int) -> None:
        if self._read_only:
            raise OSError(f"{self._name} is read-only")
        if not 0 <= offset < len(self._data):
            raise OSError(f"Offset {offset:#x} is past end of buffer")
        self._data[offset] = value

    def close(self) -> None:
        pass

    def __enter__(self) -> MemoryByteStore:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def open_store(path: str, *, read_only: bool = False) -> FileByteStore | MemoryByteStore:
    """Open *path* as a byte store.

    Raises:
        FileAccessError: If the file is missing or cannot be opened.
    """
    if path == ":memory:":
        return MemoryByteStore(read_only=read_only)
    if not os.path.exists(path):
        raise FileAccessError(path, "no such file")
    return FileByteStore(path, read_only=read_only)
