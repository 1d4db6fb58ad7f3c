"""Application lifecycle: load on start, save when the app goes inactive."""

from __future__ import annotations

import enum
import logging
from typing import Callable, List, Optional

from fitlog.core.errors import StoreError
from fitlog.core.models import Workout
from fitlog.core.result import Result
from fitlog.core.state import WorkoutState
from fitlog.core.store import WorkoutStore

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[str, StoreError], None]


class LifecyclePhase(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    BACKGROUND = "background"


class WorkoutApp:
    """Owns the store and the shared state for one run of the application.

    Persistence failures never abort the process: they are logged, passed to
    ``on_error`` and kept in ``last_error`` while the in-memory workouts stay
    untouched.
    """

    def __init__(
        self,
        store: WorkoutStore,
        state: Optional[WorkoutState] = None,
        on_error: Optional[ErrorHandler] = None,
    ) -> None:
        self.store = store
        self.state = state if state is not None else WorkoutState()
        self.on_error = on_error
        self.phase = LifecyclePhase.ACTIVE
        self.loaded = False
        self.last_error: Optional[StoreError] = None
        self.last_saved_count: Optional[int] = None

    def _report(self, action: str, error: StoreError) -> None:
        self.last_error = error
        logger.error("Could not %s workouts: %s", action, error)
        if self.on_error is not None:
            self.on_error(action, error)

    def _apply_loaded(self, result: Result[List[Workout]]) -> None:
        if not result.ok:
            self._report("load", result.error)  # type: ignore[arg-type]
            return
        self.state.replace_all(result.value or [])
        self.loaded = True
        logger.info("Loaded %d workouts", len(self.state))

    def start(self) -> bool:
        """Load the stored workouts into the shared state; True on success."""
        future = self.store.load_async(self._apply_loaded)
        result = self.store.completions.run_until_complete(future)
        return result.ok

    def save(self) -> bool:
        """Save the whole collection and wait for the completion."""
        revision = self.state.revision

        def _saved(result: Result[int]) -> None:
            if not result.ok:
                self._report("save", result.error)  # type: ignore[arg-type]
                return
            self.state.mark_saved(revision)
            self.last_saved_count = result.value
            logger.info("Saved %d workouts", result.value)

        future = self.store.save_async(self.state.workouts, _saved)
        result = self.store.completions.run_until_complete(future)
        return result.ok

    def on_phase_change(self, phase: LifecyclePhase) -> Optional[bool]:
        """Track the lifecycle phase; leaving the foreground saves everything."""
        previous, self.phase = self.phase, phase
        logger.debug("Lifecycle phase %s -> %s", previous.value, phase.value)
        if phase not in (LifecyclePhase.INACTIVE, LifecyclePhase.BACKGROUND):
            return None
        if not self.loaded:
            # Saving now would overwrite a file that failed to load.
            logger.warning("Skipping save: workouts were never loaded")
            return False
        return self.save()

    def shutdown(self) -> None:
        """Final save of changes made while active, then stop the I/O worker."""
        try:
            if self.loaded and self.state.dirty and self.phase is LifecyclePhase.ACTIVE:
                self.save()
        finally:
            self.store.close()
