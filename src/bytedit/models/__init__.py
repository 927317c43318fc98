"""Pydantic models for bytedit."""

from bytedit.models.config import EditorConfig

__all__ = ["EditorConfig"]
