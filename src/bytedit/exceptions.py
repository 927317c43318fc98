"""bytedit exception hierarchy.

All bytedit-specific exceptions inherit from BytEditError.
"""

from __future__ import annotations


class BytEditError(Exception):
    """Base exception for all bytedit errors."""


class FileAccessError(BytEditError):
    """Raised when the target file is missing or cannot be opened."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot open {path}: {reason}")


class PatchSyntaxError(BytEditError):
    """Raised (or collected) for a patch token that is neither hex nor quoted."""

    def __init__(self, token: str, reason: str = "not a hex string or quoted string") -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"Invalid patch token {token!r}: {reason}")


class OffsetError(BytEditError):
    """Raised when an edit offset is unparsable or outside the file."""


class RecordLengthError(BytEditError):
    """Raised when a logical record length is out of range."""

    def __init__(self, value: int, maximum: int) -> None:
        self.value = value
        self.maximum = maximum
        super().__init__(
            f"Record length must be between 1 and {maximum} (got {value})"
        )


class ReadOnlyError(BytEditError):
    """Raised when an edit or write is attempted in read-only mode."""

    def __init__(self) -> None:
        super().__init__("File is open read-only; edits and writes are disabled.")


class CommitError(BytEditError):
    """Raised when a byte write fails part-way through a commit.

    ``written`` holds the offsets flushed before the failure, ``pending``
    the offsets still staged in the overlay.  Retrying the commit only
    touches ``pending``.
    """

    def __init__(
        self, written: list[int], pending: list[int], cause: BaseException
    ) -> None:
        self.written = written
        self.pending = pending
        self.cause = cause
        super().__init__(
            f"Write failed at offset {pending[0]:#x} ({cause}); "
            f"{len(written)} byte(s) written, {len(pending)} still pending"
        )
