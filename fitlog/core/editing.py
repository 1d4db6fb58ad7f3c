"""Stage edits on a scratch copy and merge them only on confirmation."""

from __future__ import annotations

import enum
import logging
from typing import Callable, Generic, Optional, Protocol, TypeVar

logger = logging.getLogger(__name__)


class Mergeable(Protocol):
    def update_from(self, other): ...

    def copy(self): ...


E = TypeVar("E", bound=Mergeable)


class EditState(str, enum.Enum):
    STAGING = "staging"
    COMMITTED = "committed"
    DISCARDED = "discarded"


class EditSessionError(RuntimeError):
    """Raised when a finished edit session is used again."""


class EditSession(Generic[E]):
    """One edit of ``target`` through a private ``draft`` copy.

    Nothing the caller does to ``draft`` is visible on ``target`` until
    :meth:`commit`. Leaving a ``with`` block without committing discards.
    """

    def __init__(self, target: E, on_commit: Optional[Callable[[E], None]] = None) -> None:
        self.target = target
        self.draft: E = target.copy()
        self.state = EditState.STAGING
        self._on_commit = on_commit

    def _ensure_staging(self) -> None:
        if self.state is not EditState.STAGING:
            raise EditSessionError(f"Edit session already {self.state.value}")

    def commit(self) -> E:
        """Merge the draft into the target and run the commit hook."""
        self._ensure_staging()
        self.target.update_from(self.draft)
        self.state = EditState.COMMITTED
        if self._on_commit is not None:
            self._on_commit(self.target)
        logger.debug("Committed edit of %s", getattr(self.target, "id", self.target))
        return self.target

    def discard(self) -> None:
        self._ensure_staging()
        self.state = EditState.DISCARDED

    def __enter__(self) -> "EditSession[E]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self.state is EditState.STAGING:
            self.discard()


def begin_edit(target: E, on_commit: Optional[Callable[[E], None]] = None) -> EditSession[E]:
    """Start staging an edit of ``target``."""
    return EditSession(target, on_commit=on_commit)
