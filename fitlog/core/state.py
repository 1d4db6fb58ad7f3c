"""Shared workout collection and CLI runtime state."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Optional
from uuid import UUID

from rich.console import Console

from fitlog.core.editing import EditSession, begin_edit
from fitlog.core.models import Workout

if TYPE_CHECKING:
    from fitlog.core.app import WorkoutApp

logger = logging.getLogger(__name__)

Observer = Callable[["WorkoutState"], None]


class WorkoutState:
    """The live, observable list of workouts.

    Observers are notified after every change made through this object's
    methods. Direct field edits on a workout should be followed by
    :meth:`notify`.
    """

    def __init__(self, workouts: Optional[Iterable[Workout]] = None) -> None:
        self.workouts: List[Workout] = list(workouts or [])
        self.revision = 0
        self._saved_revision = 0
        self._observers: List[Observer] = []

    def __len__(self) -> int:
        return len(self.workouts)

    def __iter__(self):
        return iter(self.workouts)

    def __getitem__(self, index: int) -> Workout:
        return self.workouts[index]

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer``; returns a function that unregisters it."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def notify(self) -> None:
        self.revision += 1
        for observer in list(self._observers):
            observer(self)

    @property
    def dirty(self) -> bool:
        return self.revision != self._saved_revision

    def mark_saved(self, revision: Optional[int] = None) -> None:
        self._saved_revision = self.revision if revision is None else revision

    def replace_all(self, workouts: Iterable[Workout]) -> None:
        """Swap in a freshly loaded collection."""
        self.workouts = list(workouts)
        self.notify()
        self.mark_saved()

    def add_workout(self, workout: Optional[Workout] = None, sort: bool = True) -> Workout:
        """Append ``workout`` (a new default one if omitted) and keep date order."""
        if workout is None:
            workout = Workout()
        self.workouts.append(workout)
        if sort:
            self._sort()
        self.notify()
        return workout

    def remove_workout(self, index: int) -> Workout:
        """Remove the workout at ``index`` together with its exercises and sets."""
        removed = self.workouts.pop(index)
        logger.debug("Removed workout %s (%s)", removed.id, removed.name)
        self.notify()
        return removed

    def replace_workout(self, index: int, workout: Workout) -> Workout:
        previous = self.workouts[index]
        self.workouts[index] = workout
        self.notify()
        return previous

    def _sort(self) -> None:
        # list.sort is stable with reverse=True, so equal dates keep insertion order.
        self.workouts.sort(key=lambda item: item.date, reverse=True)

    def sort_by_date(self) -> None:
        """Newest first."""
        self._sort()
        self.notify()

    def find(self, workout_id: UUID) -> Optional[Workout]:
        for workout in self.workouts:
            if workout.id == workout_id:
                return workout
        return None

    def index_of(self, workout_id: UUID) -> int:
        for index, workout in enumerate(self.workouts):
            if workout.id == workout_id:
                return index
        raise ValueError(f"No workout with id {workout_id}")

    def begin_workout_edit(self, index: int) -> EditSession[Workout]:
        """Stage an edit of the workout at ``index``; commit re-sorts by date."""
        return begin_edit(self.workouts[index], on_commit=lambda _: self.sort_by_date())

    def begin_child_edit(self, target: Any) -> EditSession[Any]:
        """Stage an edit of an exercise or set owned by one of the workouts."""
        return begin_edit(target, on_commit=lambda _: self.notify())


@dataclass
class CLIState:
    """CLI runtime options, loaded configuration and the workout app."""

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console
    data_dir: Optional[Path] = None
    app: Optional["WorkoutApp"] = None
