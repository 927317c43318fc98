"""Editor -- the session object tying store, navigation, overlay and commit together.

Users interact with ``Editor.open()``, ``ed.seek()``, ``ed.dump()``,
``ed.edit()``, ``ed.write()``, etc.  All session state (position,
record length, pending edits) lives on the instance; there is no
module-level state.

Not thread-safe.  The file is assumed to be exclusively ours while open.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bytedit.engine.applier import ApplyResult, apply_patch
from bytedit.engine.commit import CommitCoordinator, CommitResult
from bytedit.engine.dump import DumpView, render_dump
from bytedit.engine.interactive import InteractiveEditSession
from bytedit.engine.overlay import PendingEditOverlay
from bytedit.engine.patch import PatchResult, parse_patch
from bytedit.engine.position import PositionModel
from bytedit.exceptions import OffsetError, ReadOnlyError
from bytedit.models.config import EditorConfig
from bytedit.status import PendingEdit, StatusInfo
from bytedit.storage.files import open_store

if TYPE_CHECKING:
    from bytedit.protocols import ByteStore

logger = logging.getLogger(__name__)


class Editor:
    """Byte-level editing session over one file.

    Create one via :meth:`Editor.open` (recommended) or
    :meth:`Editor.from_store` (testing / DI).

    Example::

        with Editor.open("image.bin", record_length=16) as ed:
            ed.edit(0x10, '"MAGIC"')
            print(ed.dump(0x10))
            ed.write()
    """

    def __init__(self, *, store: ByteStore, config: EditorConfig) -> None:
        self._store = store
        self._config = config
        self._position = PositionModel(
            config.record_length, max_record_length=config.max_record_length
        )
        self._overlay = PendingEditOverlay()
        self._committer = CommitCoordinator(write_attempts=config.write_attempts)
        self._closed = False

    @classmethod
    def open(
        cls,
        path: str,
        *,
        config: EditorConfig | None = None,
        **overrides: object,
    ) -> Editor:
        """Open *path* for editing.

        Keyword overrides are applied on top of *config* (or the defaults).

        Raises:
            FileAccessError: If the file is missing or cannot be opened.
        """
        config = cls._merge_config(config, overrides)
        store = open_store(path, read_only=config.read_only)
        return cls(store=store, config=config)

    @classmethod
    def from_store(
        cls,
        store: ByteStore,
        *,
        config: EditorConfig | None = None,
        **overrides: object,
    ) -> Editor:
        config = cls._merge_config(config, overrides)
        if not store.writable and not config.read_only:
            config = config.model_copy(update={"read_only": True})
        return cls(store=store, config=config)

    @staticmethod
    def _merge_config(config: EditorConfig | None, overrides: dict) -> EditorConfig:
        base = config.model_dump() if config is not None else {}
        base.update(overrides)
        return EditorConfig(**base)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> EditorConfig:
        return self._config

    @property
    def store(self) -> ByteStore:
        return self._store

    @property
    def overlay(self) -> PendingEditOverlay:
        return self._overlay

    @property
    def position(self) -> int:
        return self._position.position

    @property
    def record_length(self) -> int:
        return self._position.record_length

    @property
    def record(self) -> int:
        """Index of the record holding the current position."""
        return self._position.record_index()

    @property
    def eof(self) -> int:
        return self._store.size()

    @property
    def read_only(self) -> bool:
        return self._config.read_only

    @property
    def dirty(self) -> bool:
        return bool(self._overlay)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def seek(self, offset: int) -> int:
        return self._position.seek(offset, self.eof)

    def goto_record(self, record: int | None = None) -> int:
        if record is None:
            record = self.record
        return self._position.goto_record(record, self.eof)

    def forward(self, records: int = 1) -> int:
        return self._position.forward(records, self.eof)

    def backward(self, records: int = 1) -> int:
        return self._position.backward(records, self.eof)

    def last_record(self) -> int:
        return self._position.last_record(self.eof)

    def set_record_length(self, value: int) -> int:
        """Change the logical record length.

        Raises:
            RecordLengthError: If out of range; the old length is kept.
        """
        return self._position.set_record_length(value)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def dump(self, offset: int | None = None, records: int | None = None) -> DumpView:
        """Render *records* records from *offset* (default: current position)."""
        return render_dump(
            self._store,
            self._overlay,
            self._position,
            self.position if offset is None else offset,
            self._config.dump_records if records is None else records,
            bytes_per_line=self._config.bytes_per_line,
        )

    def status(self) -> StatusInfo:
        eof = self.eof
        pending = [
            PendingEdit(offset=o, disk=self._store.read(o, 1)[0], staged=v)
            for o, v in self._overlay.items()
        ]
        return StatusInfo(
            name=self._store.name,
            size=eof,
            position=self.position,
            record_length=self.record_length,
            max_record=self._position.max_record_index(eof),
            read_only=self.read_only,
            pending=pending,
        )

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def _check_writable(self) -> None:
        if self.read_only:
            raise ReadOnlyError()

    def _check_offset(self, offset: int) -> int:
        eof = self.eof
        if not 0 <= offset < eof:
            raise OffsetError(
                f"Offset {offset} (0x{offset:x}) is outside the file (size {eof})"
            )
        return eof

    def edit(self, offset: int, patch: str | list[str]) -> tuple[PatchResult, ApplyResult]:
        """Stage a patch expression at *offset*.

        Tokens that fail to parse are reported in the returned
        :class:`PatchResult` and contribute no bytes; the remaining
        tokens are still staged.

        Raises:
            ReadOnlyError: In read-only mode.
            OffsetError: If *offset* is outside ``[0, eof)``.
        """
        self._check_writable()
        eof = self._check_offset(offset)
        parsed = parse_patch(patch)
        applied = apply_patch(self._overlay, offset, parsed.data, self._store, eof)
        return parsed, applied

    def edit_session(self, offset: int) -> InteractiveEditSession:
        """Start an interactive byte-by-byte session at *offset*.

        Raises:
            ReadOnlyError: In read-only mode.
            OffsetError: If *offset* is outside ``[0, eof)``.
        """
        self._check_writable()
        self._check_offset(offset)
        return InteractiveEditSession(self._store, self._overlay, offset)

    def write(self) -> CommitResult:
        """Write all pending edits to the file.

        Raises:
            ReadOnlyError: In read-only mode.
            CommitError: If a byte write fails; unwritten edits stay pending.
        """
        self._check_writable()
        return self._committer.commit(self._overlay, self._store)

    def discard(self) -> int:
        """Drop every pending edit.  Returns how many were dropped."""
        count = len(self._overlay)
        self._overlay.clear()
        if count:
            logger.info("Discarded %d pending edit(s)", count)
        return count

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        if self._closed:
            return
        if self._overlay:
            logger.warning(
                "Closing %s with %d unwritten edit(s)", self._store.name, len(self._overlay)
            )
        self._store.close()
        self._closed = True

    def __enter__(self) -> Editor:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
