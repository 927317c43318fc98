"""bytedit: an interactive byte-level file editor.

View a file as a hex+ASCII dump by offset or fixed-length logical
record, stage byte edits in memory, and write them all at once.
"""

from bytedit._version import __version__

# Core entry point
from bytedit.editor import Editor

# Configuration
from bytedit.models.config import EditorConfig

# Engine
from bytedit.engine.applier import ApplyResult, apply_patch
from bytedit.engine.commit import CommitCoordinator, CommitResult
from bytedit.engine.dump import DumpCell, DumpRow, DumpView, render_dump
from bytedit.engine.interactive import ByteView, InteractiveEditSession, SessionState, StepResult
from bytedit.engine.numbers import parse_number, parse_offset
from bytedit.engine.overlay import PendingEditOverlay
from bytedit.engine.patch import PatchResult, parse_patch, tokenize_patch
from bytedit.engine.position import DEFAULT_RECORD_LENGTH, MAX_RECORD_LENGTH, PositionModel
from bytedit.engine.translate import glyph

# Storage
from bytedit.protocols import ByteStore
from bytedit.storage.files import FileByteStore, MemoryByteStore, open_store

# Status
from bytedit.status import PendingEdit, StatusInfo

# Exceptions
from bytedit.exceptions import (
    BytEditError,
    CommitError,
    FileAccessError,
    OffsetError,
    PatchSyntaxError,
    ReadOnlyError,
    RecordLengthError,
)

__all__ = [
    "__version__",
    "Editor",
    "EditorConfig",
    "ApplyResult",
    "apply_patch",
    "CommitCoordinator",
    "CommitResult",
    "DumpCell",
    "DumpRow",
    "DumpView",
    "render_dump",
    "ByteView",
    "InteractiveEditSession",
    "SessionState",
    "StepResult",
    "parse_number",
    "parse_offset",
    "PendingEditOverlay",
    "PatchResult",
    "parse_patch",
    "tokenize_patch",
    "DEFAULT_RECORD_LENGTH",
    "MAX_RECORD_LENGTH",
    "PositionModel",
    "glyph",
    "ByteStore",
    "FileByteStore",
    "MemoryByteStore",
    "open_store",
    "PendingEdit",
    "StatusInfo",
    "BytEditError",
    "CommitError",
    "FileAccessError",
    "OffsetError",
    "PatchSyntaxError",
    "ReadOnlyError",
    "RecordLengthError",
]
