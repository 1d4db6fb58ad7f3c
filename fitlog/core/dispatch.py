"""Hand completions from I/O workers back to the interactive thread."""

from __future__ import annotations

import queue
import threading
from concurrent.futures import Future
from typing import Any, Callable, Optional, Tuple, TypeVar

T = TypeVar("T")

_POLL_INTERVAL = 0.05


class CompletionQueue:
    """Callbacks posted from any thread, run only by the owning thread.

    The thread that creates the queue owns it. Workers call :meth:`post`;
    the owner runs the callbacks from :meth:`run_pending` or
    :meth:`run_until_complete`.
    """

    def __init__(self) -> None:
        self._items: "queue.Queue[Tuple[Callable[..., Any], Tuple[Any, ...]]]" = queue.Queue()
        self.owner = threading.get_ident()

    def post(self, callback: Callable[..., Any], *args: Any) -> None:
        self._items.put((callback, args))

    @property
    def pending(self) -> int:
        return self._items.qsize()

    def _check_owner(self) -> None:
        if threading.get_ident() != self.owner:
            raise RuntimeError("Completions must be run on the thread that owns the queue")

    def run_pending(self, block: bool = False, timeout: Optional[float] = None) -> int:
        """Run queued callbacks; with ``block`` wait up to ``timeout`` for the first one."""
        self._check_owner()
        ran = 0
        while True:
            try:
                if block and ran == 0:
                    callback, args = self._items.get(timeout=timeout)
                else:
                    callback, args = self._items.get_nowait()
            except queue.Empty:
                return ran
            callback(*args)
            ran += 1

    def run_until_complete(self, future: "Future[T]", timeout: Optional[float] = None) -> T:
        """Process completions until ``future`` finished and its callback ran."""
        self._check_owner()
        waited = 0.0
        while not future.done():
            self.run_pending(block=True, timeout=_POLL_INTERVAL)
            waited += _POLL_INTERVAL
            if timeout is not None and waited >= timeout and not future.done():
                raise TimeoutError("Timed out waiting for background task")
        # The worker posts its completion before the future resolves.
        self.run_pending()
        return future.result()
