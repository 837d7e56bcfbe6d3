"""Enumerations and domain constants for the program engine.

Enum members are persisted by ``name``, so renaming a member is a
breaking change for stored records.
"""

from enum import IntEnum, auto


class DayOfWeek(IntEnum):
    """Calendar weekday, numbered like ``date.weekday()`` (Monday = 0)."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class DayType(IntEnum):
    """Purpose of a scheduled day. Only REST days are barred from exercises."""

    WORKOUT = auto()
    REST = auto()
    CARDIO = auto()
    ACTIVE_RECOVERY = auto()


class WorkoutStatus(IntEnum):
    """Lifecycle state of a single day, in progression order."""

    LOCKED = auto()
    PENDING = auto()
    IN_PROGRESS = auto()
    SUBMITTED = auto()
    REVIEWED = auto()


class StatusEvent(IntEnum):
    """Events that drive WorkoutStatus transitions."""

    UNLOCK = auto()          # date reached by the daily sweep
    SAVE_PROGRESS = auto()   # client saves a partial log
    SUBMIT = auto()          # client submits the log
    REVIEW = auto()          # trainer attaches a review


class ProgramStatus(IntEnum):
    """Publication state of a program."""

    DRAFT = auto()
    ACTIVE = auto()
    COMPLETED = auto()
    PAUSED = auto()


class UserRole(IntEnum):
    """Role tag carried by every User."""

    TRAINER = auto()
    CLIENT = auto()


# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------

DAYS_PER_WEEK = 7
WEEK_SPAN_DAYS = DAYS_PER_WEEK - 1  # end_date = start_date + 6

MIN_DURATION_WEEKS = 1
MIN_SETS = 1

MIN_RATING = 1  # session rating and trainer rating, 1-5 stars
MAX_RATING = 5

MIN_RPE = 1  # Borg CR-10 style scale; 0 means "not recorded"
MAX_RPE = 10
RPE_NOT_RECORDED = 0
