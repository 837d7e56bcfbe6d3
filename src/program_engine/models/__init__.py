"""Data models for the program engine."""

from program_engine.models.enums import (
    DayOfWeek,
    DayType,
    ProgramStatus,
    StatusEvent,
    UserRole,
    WorkoutStatus,
)
from program_engine.models.exercise import Exercise
from program_engine.models.program import (
    DayWorkout,
    PendingReview,
    Program,
    ProgramDraft,
    Week,
    WeekProgress,
)
from program_engine.models.user import User
from program_engine.models.workout_log import (
    ClientWorkoutLog,
    ExerciseLog,
    SetLog,
    TrainerReview,
)

__all__ = [
    "ClientWorkoutLog",
    "DayOfWeek",
    "DayType",
    "DayWorkout",
    "Exercise",
    "ExerciseLog",
    "PendingReview",
    "Program",
    "ProgramDraft",
    "ProgramStatus",
    "SetLog",
    "StatusEvent",
    "TrainerReview",
    "User",
    "UserRole",
    "Week",
    "WeekProgress",
    "WorkoutStatus",
]
