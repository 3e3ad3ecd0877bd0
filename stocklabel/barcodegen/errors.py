# -*- coding: utf-8 -*-
"""
Exception hierarchy for the encode-and-render pipeline.

Guidelines:
- Input errors are raised before any rendering starts and are always reported to the caller.
- Format errors mean a renderer could not serialize a valid module train; treat as fatal.
- Artifact write errors from a detached write are logged and never re-raised.
"""

from __future__ import annotations

from typing import Optional


class BarcodeGenError(Exception):
    """Barcode generation/validation error."""

    def __init__(
        self, message: str = "", *, cause: Optional[BaseException] = None
    ) -> None:
        super().__init__(message)
        self.__cause__ = cause


class BarcodeInputError(BarcodeGenError, ValueError):
    """Raised when text cannot be encoded (empty, or outside the alphabet)."""


class EmptyInputError(BarcodeInputError):
    """Raised on an empty token."""


class UnsupportedCharacterError(BarcodeInputError):
    """Raised when a character is outside the symbology alphabet."""

    def __init__(self, char: str, position: Optional[int] = None) -> None:
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"Character {char!r}{where} is not encodable in Code 39")
        self.char = char
        self.position = position


class BarcodeFormatError(BarcodeGenError):
    """Raised when a renderer cannot produce valid output for a module train."""


class ArtifactWriteError(BarcodeGenError, OSError):
    """Raised when a directory or artifact file cannot be created/written/flushed."""


__all__ = [
    "BarcodeGenError",
    "BarcodeInputError",
    "EmptyInputError",
    "UnsupportedCharacterError",
    "BarcodeFormatError",
    "ArtifactWriteError",
]
