"""Session status: file identity, size, record geometry, pending edits."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PendingEdit:
    """One staged byte: where, what is on disk, what will be written."""

    offset: int
    disk: int
    staged: int


@dataclass(frozen=True)
class StatusInfo:
    """Current editor status returned by Editor.status().

    Attributes:
        name: Store identifier (file path).
        size: File length in bytes.
        position: Current offset.
        record_length: Logical record length.
        max_record: Index of the last record navigation can reach.
        read_only: Whether edits and writes are disabled.
        pending: Staged edits in offset order.
    """

    name: str
    size: int
    position: int
    record_length: int
    max_record: int
    read_only: bool
    pending: list[PendingEdit] = field(default_factory=list)

    @property
    def dirty(self) -> bool:
        return bool(self.pending)

    def __str__(self) -> str:
        mode = " (read-only)" if self.read_only else ""
        return (
            f"{self.name}{mode} | {self.size} bytes | lrl {self.record_length} "
            f"| max record {self.max_record} | {len(self.pending)} pending"
        )
