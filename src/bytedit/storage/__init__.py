"""Byte store implementations (files on disk and in-memory buffers)."""

from bytedit.storage.files import FileByteStore, MemoryByteStore, open_store

__all__ = ["FileByteStore", "MemoryByteStore", "open_store"]
