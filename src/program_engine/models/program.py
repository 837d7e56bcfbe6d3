"""Program, Week and DayWorkout models.

A Program owns its Weeks, a Week owns its seven Days, a Day owns its
Exercises, at most one ClientWorkoutLog and at most one TrainerReview.
All models are frozen; writes build new values with ``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from program_engine.models.enums import (
    DayOfWeek,
    DayType,
    ProgramStatus,
    WorkoutStatus,
)
from program_engine.models.exercise import Exercise
from program_engine.models.workout_log import ClientWorkoutLog, TrainerReview


@dataclass(frozen=True)
class DayWorkout:
    """One calendar day of a program week."""

    day_of_week: DayOfWeek
    date: date
    day_type: DayType = DayType.WORKOUT
    status: WorkoutStatus = WorkoutStatus.LOCKED
    exercises: tuple[Exercise, ...] = field(default_factory=tuple)
    notes: str | None = None
    client_log: ClientWorkoutLog | None = None
    trainer_review: TrainerReview | None = None

    @property
    def is_rest(self) -> bool:
        return self.day_type == DayType.REST

    def exercise(self, exercise_id: str) -> Exercise | None:
        """Return the exercise with *exercise_id*, or None."""
        for ex in self.exercises:
            if ex.id == exercise_id:
                return ex
        return None


@dataclass(frozen=True)
class Week:
    """Seven consecutive days, Monday slot first."""

    week_number: int  # 1-indexed
    start_date: date
    end_date: date  # start_date + 6 days
    days: tuple[DayWorkout, ...] = field(default_factory=tuple)
    notes: str | None = None
    copied_from_week: int | None = None

    def day(self, day_of_week: DayOfWeek) -> DayWorkout | None:
        """Return the day in the *day_of_week* slot, or None."""
        for d in self.days:
            if d.day_of_week == day_of_week:
                return d
        return None

    def contains(self, on_date: date) -> bool:
        """True if *on_date* falls in [start_date, end_date] inclusive."""
        return self.start_date <= on_date <= self.end_date


@dataclass(frozen=True)
class Program:
    """A trainer-authored, dated multi-week plan assigned to one client."""

    id: str
    trainer_id: str
    client_id: str
    title: str
    start_date: date
    duration_weeks: int
    created_at: datetime
    updated_at: datetime
    description: str = ""
    status: ProgramStatus = ProgramStatus.DRAFT
    weeks: tuple[Week, ...] = field(default_factory=tuple)

    @property
    def is_active(self) -> bool:
        return self.status == ProgramStatus.ACTIVE

    @property
    def end_date(self) -> date | None:
        """End date of the last week, or None for a program without weeks."""
        if not self.weeks:
            return None
        return self.weeks[-1].end_date

    def week(self, week_number: int) -> Week | None:
        """Return the week numbered *week_number*, or None."""
        for w in self.weeks:
            if w.week_number == week_number:
                return w
        return None

    def iter_days(self):
        """Yield (week, day) pairs in calendar order."""
        for w in self.weeks:
            for d in w.days:
                yield w, d


@dataclass(frozen=True)
class ProgramDraft:
    """Input for creating a program.

    ``start_date`` may be a ``date`` or an ISO ``YYYY-MM-DD`` string.
    When ``weeks`` is None the calendar is generated from the start
    date and duration.
    """

    trainer_id: str
    client_id: str
    title: str
    start_date: date | str
    duration_weeks: int
    description: str = ""
    status: ProgramStatus = ProgramStatus.DRAFT
    weeks: tuple[Week, ...] | None = None


@dataclass(frozen=True)
class PendingReview:
    """A submitted day awaiting the trainer's review."""

    program: Program
    week: Week
    day: DayWorkout


@dataclass(frozen=True)
class WeekProgress:
    """Reviewed vs. scheduled (non-rest) days for one week."""

    completed: int
    total: int
    percentage: int
