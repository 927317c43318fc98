"""Configuration model for an editing session.

EditorConfig holds the per-session settings the CLI collects from
options and environment variables.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator, model_validator

from bytedit.engine.position import DEFAULT_RECORD_LENGTH, MAX_RECORD_LENGTH

SUPPORTED_LINE_WIDTHS = (16, 32)


class EditorConfig(BaseModel):
    """Per-session editor configuration."""

    record_length: int = DEFAULT_RECORD_LENGTH
    max_record_length: int = MAX_RECORD_LENGTH
    bytes_per_line: int = 16
    read_only: bool = False
    write_attempts: int = 1
    dump_records: int = 1

    @field_validator("bytes_per_line")
    @classmethod
    def _check_width(cls, v: int) -> int:
        if v not in SUPPORTED_LINE_WIDTHS:
            raise ValueError(f"bytes_per_line must be one of {SUPPORTED_LINE_WIDTHS}")
        return v

    @field_validator("write_attempts", "dump_records", "max_record_length")
    @classmethod
    def _check_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    @model_validator(mode="after")
    def _check_record_length(self) -> EditorConfig:
        if not 1 <= self.record_length <= self.max_record_length:
            raise ValueError(
                f"record_length must be between 1 and {self.max_record_length}"
            )
        return self
