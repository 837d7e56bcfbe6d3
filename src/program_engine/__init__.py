"""Program engine: calendar scheduling, day status and workout logging."""

from program_engine.clock import Clock, FixedClock, SystemClock
from program_engine.exceptions import (
    AccessDeniedError,
    NotFoundError,
    ProgramEngineError,
    StateError,
    ValidationError,
)
from program_engine.logging_session import WorkoutSession
from program_engine.service import ProgramService

__all__ = [
    "AccessDeniedError",
    "Clock",
    "FixedClock",
    "NotFoundError",
    "ProgramEngineError",
    "ProgramService",
    "StateError",
    "SystemClock",
    "ValidationError",
    "WorkoutSession",
]
