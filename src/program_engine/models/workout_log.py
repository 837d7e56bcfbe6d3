"""Client workout logs and trainer reviews."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from program_engine.models.enums import RPE_NOT_RECORDED


@dataclass(frozen=True)
class SetLog:
    """As-performed record of one planned set."""

    set_number: int  # 1-indexed
    actual_reps: int = 0
    actual_weight: str = ""
    rpe: int = RPE_NOT_RECORDED
    completed: bool = False


@dataclass(frozen=True)
class ExerciseLog:
    """Per-exercise log: one SetLog per planned set.

    ``completed`` is derived from the sets and cannot be assigned.
    """

    exercise_id: str
    actual_sets: tuple[SetLog, ...] = field(default_factory=tuple)
    notes: str = ""

    @property
    def completed(self) -> bool:
        return all(s.completed for s in self.actual_sets)

    @property
    def completed_set_count(self) -> int:
        return sum(1 for s in self.actual_sets if s.completed)


@dataclass(frozen=True)
class ClientWorkoutLog:
    """The client's record of a day, written on save-progress and on submit."""

    logged_at: datetime
    exercise_logs: tuple[ExerciseLog, ...] = field(default_factory=tuple)
    duration_min: int = 0
    overall_notes: str = ""
    rating: int | None = None  # 1-5

    @property
    def total_sets(self) -> int:
        return sum(len(e.actual_sets) for e in self.exercise_logs)

    @property
    def completed_sets(self) -> int:
        return sum(e.completed_set_count for e in self.exercise_logs)


@dataclass(frozen=True)
class TrainerReview:
    """Trainer feedback on a submitted day."""

    reviewed_at: datetime
    rating: int  # 1-5
    feedback: str
    encouragement: str | None = None
    adjustments_needed: str | None = None
    next_steps: str | None = None
