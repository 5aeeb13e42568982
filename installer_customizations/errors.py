"""Errors raised while writing customization files into an install root."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class CustomizationError(RuntimeError):
    """Raised for failures that should abort the image build step."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.__cause__ = cause


class MacroFileError(CustomizationError):
    """A macro file or one of its parent directories could not be written."""

    def __init__(self, path: Path, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"{message}: {path}", cause=cause)
        self.path = path
