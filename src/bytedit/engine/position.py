"""Position and logical-record navigation.

All navigation goes through :meth:`PositionModel.clamp`, which snaps
out-of-range positions to the start of the last record so the view
always has something to show.  Edit-offset validation uses the plain
:meth:`PositionModel.clamp_to_eof` / range check instead.
"""

from __future__ import annotations

from bytedit.exceptions import RecordLengthError

DEFAULT_RECORD_LENGTH = 256
MAX_RECORD_LENGTH = 32768


class PositionModel:
    """Current offset plus logical record length for one editing session."""

    def __init__(
        self,
        record_length: int = DEFAULT_RECORD_LENGTH,
        *,
        max_record_length: int = MAX_RECORD_LENGTH,
    ) -> None:
        self._max_record_length = max_record_length
        self._record_length = DEFAULT_RECORD_LENGTH
        self.set_record_length(record_length)
        self.position = 0

    @property
    def record_length(self) -> int:
        return self._record_length

    @property
    def max_record_length(self) -> int:
        return self._max_record_length

    def set_record_length(self, value: int) -> int:
        """Change the logical record length.

        Raises:
            RecordLengthError: If *value* is below 1 or above the ceiling.
                The previous length is kept.
        """
        if value < 1 or value > self._max_record_length:
            raise RecordLengthError(value, self._max_record_length)
        self._record_length = value
        return value

    # ------------------------------------------------------------------
    # Clamping
    # ------------------------------------------------------------------

    def clamp(self, pos: int, eof: int) -> int:
        """Clamp *pos* into the file, snapping past-end to the last record start."""
        if pos < 0:
            return 0
        if pos >= eof:
            return (eof // self._record_length) * self._record_length
        return pos

    @staticmethod
    def clamp_to_eof(pos: int, eof: int) -> int:
        """Clamp *pos* into ``[0, eof]`` without record snapping."""
        if pos < 0:
            return 0
        return min(pos, eof)

    def record_index(self, pos: int | None = None) -> int:
        if pos is None:
            pos = self.position
        return pos // self._record_length

    def max_record_index(self, eof: int) -> int:
        return self.record_index(self.last_record_offset(eof))

    # ------------------------------------------------------------------
    # Navigation (each returns and stores the new position)
    # ------------------------------------------------------------------

    def seek(self, pos: int, eof: int) -> int:
        self.position = self.clamp(pos, eof)
        return self.position

    def forward(self, records: int, eof: int) -> int:
        return self.seek(self.position + records * self._record_length, eof)

    def backward(self, records: int, eof: int) -> int:
        return self.seek(self.position - records * self._record_length, eof)

    def goto_record(self, record: int, eof: int) -> int:
        return self.seek(record * self._record_length, eof)

    def last_record_offset(self, eof: int) -> int:
        raw = (eof // self._record_length) * self._record_length
        if raw == eof and eof > self._record_length:
            raw -= self._record_length
        return raw

    def last_record(self, eof: int) -> int:
        self.position = self.last_record_offset(eof)
        return self.position
