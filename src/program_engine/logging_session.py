"""Workout logging session: the client's in-progress record of one day.

A session is created for a single (program, week, day) slot, captures
its start time once, and keeps its ExerciseLogs in memory until
``save_progress()`` or ``submit()`` hands them to the recorder. Dropping
a session without submitting leaves the stored day as the last
``save_progress()`` wrote it.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from program_engine.analytics.aggregator import percent
from program_engine.clock import Clock
from program_engine.exceptions import NotFoundError, StateError, ValidationError
from program_engine.models.enums import (
    MAX_RATING,
    MAX_RPE,
    MIN_RATING,
    RPE_NOT_RECORDED,
    DayOfWeek,
)
from program_engine.models.program import DayWorkout, Program
from program_engine.models.user import User
from program_engine.models.workout_log import ClientWorkoutLog, ExerciseLog, SetLog

if TYPE_CHECKING:
    from program_engine.service import ProgramService

logger = logging.getLogger(__name__)

_SET_FIELDS = frozenset({"actual_reps", "actual_weight", "rpe", "completed"})
_CLEARED_SET_VALUES = {"actual_reps": 0, "actual_weight": "", "rpe": RPE_NOT_RECORDED}


def build_exercise_logs(day: DayWorkout) -> tuple[ExerciseLog, ...]:
    """One ExerciseLog per exercise, in ``order_index`` order.

    Each log gets one SetLog per planned set, pre-filled with the planned
    weight. Empty for a day without exercises.
    """
    return tuple(
        ExerciseLog(
            exercise_id=ex.id,
            actual_sets=tuple(
                SetLog(set_number=n, actual_weight=ex.weight or "")
                for n in range(1, ex.sets + 1)
            ),
        )
        for ex in sorted(day.exercises, key=lambda e: e.order_index)
    )


def _clean_set_updates(updates: dict) -> dict:
    """Validate set updates and map cleared (None) values to their empty form."""
    unknown = set(updates) - _SET_FIELDS
    if unknown:
        raise ValidationError(f"Unknown set fields: {sorted(unknown)}")
    if updates.get("completed", False) is None:
        raise ValidationError("Set completed flag cannot be None", field="completed")
    updates = {
        name: _CLEARED_SET_VALUES.get(name) if value is None else value
        for name, value in updates.items()
    }
    rpe = updates.get("rpe")
    if rpe is not None and not (rpe == RPE_NOT_RECORDED or 1 <= rpe <= MAX_RPE):
        raise ValidationError(f"RPE must be 1-{MAX_RPE} (0 = not recorded), got {rpe}", field="rpe")
    reps = updates.get("actual_reps")
    if reps is not None and reps < 0:
        raise ValidationError(f"Reps cannot be negative, got {reps}", field="actual_reps")
    return updates


class WorkoutSession:
    """Set-by-set logging for one program day.

    Usage:
        session = service.start_workout_session(program_id, 1, DayOfWeek.MONDAY)
        session.initialize()
        session.toggle_set_completed(exercise_id, 1)
        session.save_progress()
        session.submit()
    """

    def __init__(
        self,
        recorder: ProgramService,
        program: Program,
        week_number: int,
        day_of_week: DayOfWeek,
        day: DayWorkout,
        clock: Clock,
        actor: User | None = None,
    ) -> None:
        self._recorder = recorder
        self.program_id = program.id
        self.week_number = week_number
        self.day_of_week = day_of_week
        self.day = day
        self._clock = clock
        self._actor = actor
        self._started_at = clock.now()
        self._exercise_logs: tuple[ExerciseLog, ...] = ()
        self.overall_notes = ""
        self._rating: int | None = None

    # ------------------------------------------------------------------
    # Session state
    # ------------------------------------------------------------------

    @property
    def exercise_logs(self) -> tuple[ExerciseLog, ...]:
        return self._exercise_logs

    @property
    def rating(self) -> int | None:
        return self._rating

    def set_rating(self, rating: int | None) -> None:
        """Set the 1-5 session rating; 0 or None clears it."""
        if not rating:
            self._rating = None
            return
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(
                f"Rating must be {MIN_RATING}-{MAX_RATING}, got {rating}", field="rating"
            )
        self._rating = rating

    def initialize(self) -> None:
        """Build fresh exercise logs from the day's exercises.

        Does nothing for a day without exercises.
        """
        logs = build_exercise_logs(self.day)
        if not logs:
            logger.debug("No exercises to log on %s", self.day.date.isoformat())
            return
        self._exercise_logs = logs

    def update_set(self, exercise_id: str, set_number: int, **updates) -> bool:
        """Merge *updates* into one SetLog. A None value clears that field.

        Returns False, changing nothing, when the exercise or set number
        is not part of this session.
        """
        updates = _clean_set_updates(updates)
        return self._modify_set(
            exercise_id, set_number, lambda s: dataclasses.replace(s, **updates)
        )

    def toggle_set_completed(self, exercise_id: str, set_number: int) -> bool:
        """Flip a set's ``completed`` flag. Returns False if the set is unknown."""
        return self._modify_set(
            exercise_id, set_number, lambda s: dataclasses.replace(s, completed=not s.completed)
        )

    def update_exercise_notes(self, exercise_id: str, notes: str) -> bool:
        for i, ex_log in enumerate(self._exercise_logs):
            if ex_log.exercise_id == exercise_id:
                self._replace_log(i, dataclasses.replace(ex_log, notes=notes))
                return True
        logger.warning("Notes for unknown exercise %s ignored", exercise_id)
        return False

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def completion_percentage(self) -> int:
        """Completed sets as a percentage of all sets in the session."""
        total = sum(len(e.actual_sets) for e in self._exercise_logs)
        done = sum(e.completed_set_count for e in self._exercise_logs)
        return percent(done, total)

    def duration(self) -> int:
        """Whole minutes elapsed since the session started."""
        elapsed = (self._clock.now() - self._started_at).total_seconds()
        return int(elapsed / 60 + 0.5)

    def build_log(self) -> ClientWorkoutLog:
        """Snapshot the session as a ClientWorkoutLog stamped now."""
        return ClientWorkoutLog(
            logged_at=self._clock.now(),
            exercise_logs=self._exercise_logs,
            duration_min=self.duration(),
            overall_notes=self.overall_notes,
            rating=self._rating,
        )

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save_progress(self) -> DayWorkout:
        """Store the current log and move the day to IN_PROGRESS."""
        program = self._recorder.record_progress(
            self.program_id,
            self.week_number,
            self.day_of_week,
            self.build_log(),
            actor=self._actor,
        )
        self.day = program.week(self.week_number).day(self.day_of_week)
        return self.day

    def submit(self) -> DayWorkout:
        """Store the final log and move the day to SUBMITTED.

        Raises:
            StateError: If the session has no exercise logs, or the day's
                status does not allow submission.
            ValidationError: If the target day no longer exists.
        """
        if not self._exercise_logs:
            raise StateError(
                "Nothing to submit: no exercise logs initialized", status=self.day.status
            )
        try:
            program = self._recorder.record_submission(
                self.program_id,
                self.week_number,
                self.day_of_week,
                self.build_log(),
                actor=self._actor,
            )
        except NotFoundError as exc:
            raise ValidationError(
                f"Cannot submit: workout day is no longer available ({exc})",
                field="day_of_week",
            ) from exc
        self.day = program.week(self.week_number).day(self.day_of_week)
        return self.day

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _modify_set(self, exercise_id, set_number, fn) -> bool:
        for i, ex_log in enumerate(self._exercise_logs):
            if ex_log.exercise_id != exercise_id:
                continue
            for j, set_log in enumerate(ex_log.actual_sets):
                if set_log.set_number == set_number:
                    sets = list(ex_log.actual_sets)
                    sets[j] = fn(set_log)
                    self._replace_log(i, dataclasses.replace(ex_log, actual_sets=tuple(sets)))
                    return True
            logger.warning("Set %s not found for exercise %s", set_number, exercise_id)
            return False
        logger.warning("Exercise %s not found in logging session", exercise_id)
        return False

    def _replace_log(self, index: int, ex_log: ExerciseLog) -> None:
        logs = list(self._exercise_logs)
        logs[index] = ex_log
        self._exercise_logs = tuple(logs)
