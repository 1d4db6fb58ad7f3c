"""Error taxonomy for the workout store."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class StoreError(RuntimeError):
    """Base class for persistence failures."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class StorageUnavailable(StoreError):
    """Raised when the private storage directory cannot be located or accessed."""


class DecodeError(StoreError):
    """Raised when stored bytes are not a valid workout collection."""


class EncodeError(StoreError):
    """Raised when the in-memory collection cannot be serialized."""


class WriteError(StoreError):
    """Raised when the encoded collection cannot be written to disk."""
