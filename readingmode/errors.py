"""Exceptions raised across the readingmode package."""
from __future__ import annotations

from typing import Optional


class ReadingModeError(RuntimeError):
    """Base class for errors surfaced to callers."""


class ArticleParseError(ReadingModeError):
    """Raised when the HTML parser cannot build a document tree."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


__all__ = ["ArticleParseError", "ReadingModeError"]
