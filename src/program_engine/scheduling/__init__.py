"""Calendar generation, day status resolution and week copying."""

from program_engine.scheduling.calendar import generate_weeks, parse_date
from program_engine.scheduling.status import (
    change_day_type,
    initial_status,
    transition,
    unlock_program,
)
from program_engine.scheduling.week_copy import copy_week

__all__ = [
    "change_day_type",
    "copy_week",
    "generate_weeks",
    "initial_status",
    "parse_date",
    "transition",
    "unlock_program",
]
