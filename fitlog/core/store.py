"""Load and save the workout collection to a single local file."""

from __future__ import annotations

import copy
import logging
import os
import tempfile
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from fitlog.core.codec import decode_workouts, encode_workouts
from fitlog.core.config import default_data_dir
from fitlog.core.constants import STORE_FILENAME
from fitlog.core.dispatch import CompletionQueue
from fitlog.core.errors import StorageUnavailable, StoreError, WriteError
from fitlog.core.models import Workout
from fitlog.core.result import Result

logger = logging.getLogger(__name__)

LoadCallback = Callable[[Result[List[Workout]]], None]
SaveCallback = Callable[[Result[int]], None]


class WorkoutStore:
    """File-backed persistence for the workout collection.

    Blocking ``load``/``save`` raise :class:`StoreError` subclasses.
    ``load_async``/``save_async`` run on a single background worker, so calls
    execute one at a time in submission order, and deliver a :class:`Result`
    to their callback through the completion queue.
    """

    def __init__(
        self,
        data_dir: Optional[Path] = None,
        completions: Optional[CompletionQueue] = None,
    ) -> None:
        self.data_dir = data_dir
        self.completions = completions or CompletionQueue()
        self._file_lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None

    def resolve_storage_location(self) -> Path:
        """Return the path of the workout file, creating its directory if needed."""
        directory = self.data_dir if self.data_dir is not None else default_data_dir()
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageUnavailable(f"Cannot create data directory {directory}: {exc}", directory) from exc
        if not directory.is_dir():
            raise StorageUnavailable(f"Data directory {directory} is not a directory", directory)
        if not os.access(directory, os.R_OK | os.W_OK | os.X_OK):
            raise StorageUnavailable(f"Data directory {directory} is not accessible", directory)
        return directory / STORE_FILENAME

    def load(self) -> List[Workout]:
        """Read the stored collection; an absent file means no workouts yet."""
        path = self.resolve_storage_location()
        with self._file_lock:
            if not path.exists():
                logger.debug("No workout file at %s; starting empty", path)
                return []
            try:
                data = path.read_bytes()
            except OSError as exc:
                raise StorageUnavailable(f"Cannot read {path}: {exc}", path) from exc

        try:
            workouts = decode_workouts(data)
        except StoreError as exc:
            exc.path = path
            raise
        logger.debug("Loaded %d workouts from %s", len(workouts), path)
        return workouts

    def save(self, workouts: Sequence[Workout]) -> int:
        """Replace the stored collection with ``workouts`` and return the count."""
        payload = encode_workouts(workouts)
        path = self.resolve_storage_location()
        with self._file_lock:
            self._write_atomic(path, payload)
        logger.debug("Saved %d workouts to %s", len(workouts), path)
        return len(workouts)

    @staticmethod
    def _write_atomic(path: Path, payload: bytes) -> None:
        fd = -1
        tmp_path: Optional[Path] = None
        try:
            fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}-", suffix=".tmp", dir=path.parent)
            tmp_path = Path(temp_name)
            with os.fdopen(fd, "wb") as handle:
                fd = -1
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as exc:
            raise WriteError(f"Failed to write {path}: {exc}", path) from exc
        finally:
            if fd >= 0:
                os.close(fd)
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)

    def _get_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="fitlog-io")
        return self._executor

    def load_async(self, callback: Optional[LoadCallback] = None) -> "Future[Result[List[Workout]]]":
        """Load on the I/O worker; ``callback`` runs on the completion queue's thread."""

        def _task() -> Result[List[Workout]]:
            try:
                result: Result[List[Workout]] = Result.success(self.load())
            except StoreError as exc:
                logger.debug("Load failed: %s", exc)
                result = Result.failure(exc)
            if callback is not None:
                self.completions.post(callback, result)
            return result

        return self._get_executor().submit(_task)

    def save_async(
        self,
        workouts: Sequence[Workout],
        callback: Optional[SaveCallback] = None,
    ) -> "Future[Result[int]]":
        """Save a snapshot of ``workouts`` on the I/O worker."""
        snapshot = copy.deepcopy(list(workouts))

        def _task() -> Result[int]:
            try:
                result: Result[int] = Result.success(self.save(snapshot))
            except StoreError as exc:
                logger.debug("Save failed: %s", exc)
                result = Result.failure(exc)
            if callback is not None:
                self.completions.post(callback, result)
            return result

        return self._get_executor().submit(_task)

    def close(self) -> None:
        """Wait for queued I/O and stop the worker."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "WorkoutStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
