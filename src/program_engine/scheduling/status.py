"""Day status resolution: initial status, transition table, unlock sweep.

Status progression for a single day:

    LOCKED --unlock--> PENDING --save--> IN_PROGRESS --submit--> SUBMITTED --review--> REVIEWED
                          |                  ^   |
                          |                  +---+ save (idempotent)
                          +-------------- submit --------------^

Past days start PENDING exactly like today's day; there is no separate
"missed" state.
"""

from __future__ import annotations

import dataclasses
from datetime import date

from program_engine.exceptions import StateError
from program_engine.models.enums import DayType, StatusEvent, WorkoutStatus
from program_engine.models.program import DayWorkout, Program, Week
from program_engine.models.workout_log import ClientWorkoutLog, TrainerReview

# (from_status, event) -> to_status. Anything not listed is rejected.
_TRANSITIONS: dict[tuple[WorkoutStatus, StatusEvent], WorkoutStatus] = {
    (WorkoutStatus.LOCKED, StatusEvent.UNLOCK): WorkoutStatus.PENDING,
    (WorkoutStatus.PENDING, StatusEvent.SAVE_PROGRESS): WorkoutStatus.IN_PROGRESS,
    (WorkoutStatus.IN_PROGRESS, StatusEvent.SAVE_PROGRESS): WorkoutStatus.IN_PROGRESS,
    (WorkoutStatus.PENDING, StatusEvent.SUBMIT): WorkoutStatus.SUBMITTED,
    (WorkoutStatus.IN_PROGRESS, StatusEvent.SUBMIT): WorkoutStatus.SUBMITTED,
    (WorkoutStatus.SUBMITTED, StatusEvent.REVIEW): WorkoutStatus.REVIEWED,
}

# Events driven by exercise logging; rest days never take them.
_LOGGING_EVENTS = frozenset({StatusEvent.SAVE_PROGRESS, StatusEvent.SUBMIT})


def initial_status(day_date: date, today: date) -> WorkoutStatus:
    """Status for a freshly generated day: PENDING up to today, LOCKED after."""
    if day_date <= today:
        return WorkoutStatus.PENDING
    return WorkoutStatus.LOCKED


def can_transition(status: WorkoutStatus, event: StatusEvent) -> bool:
    """True if *event* is permitted from *status*."""
    return (status, event) in _TRANSITIONS


def transition(status: WorkoutStatus, event: StatusEvent) -> WorkoutStatus:
    """Apply *event* to *status*.

    Raises:
        StateError: If the transition table has no entry for the pair.
    """
    try:
        return _TRANSITIONS[(status, event)]
    except KeyError:
        raise StateError(
            f"Cannot apply {event.name} to a day in status {status.name}",
            status=status,
        ) from None


# ---------------------------------------------------------------------------
# Day-level transitions
# ---------------------------------------------------------------------------


def apply_event(day: DayWorkout, event: StatusEvent) -> DayWorkout:
    """Return *day* with its status advanced by *event*."""
    if day.day_type == DayType.REST and event in _LOGGING_EVENTS:
        raise StateError(
            f"Rest day {day.date.isoformat()} cannot be logged", status=day.status
        )
    return dataclasses.replace(day, status=transition(day.status, event))


def record_progress(day: DayWorkout, log: ClientWorkoutLog) -> DayWorkout:
    """Attach a partial client log and move the day to IN_PROGRESS."""
    return dataclasses.replace(apply_event(day, StatusEvent.SAVE_PROGRESS), client_log=log)


def record_submission(day: DayWorkout, log: ClientWorkoutLog) -> DayWorkout:
    """Attach the final client log and move the day to SUBMITTED."""
    return dataclasses.replace(apply_event(day, StatusEvent.SUBMIT), client_log=log)


def record_review(day: DayWorkout, review: TrainerReview) -> DayWorkout:
    """Attach the trainer's review and move the day to REVIEWED."""
    return dataclasses.replace(apply_event(day, StatusEvent.REVIEW), trainer_review=review)


def change_day_type(day: DayWorkout, day_type: DayType) -> DayWorkout:
    """Change the type of *day*.

    Switching to REST drops every exercise on the day. This cannot be
    undone, so callers should confirm with the trainer first.
    """
    if day_type == DayType.REST:
        return dataclasses.replace(day, day_type=day_type, exercises=())
    return dataclasses.replace(day, day_type=day_type)


# ---------------------------------------------------------------------------
# Unlock sweep
# ---------------------------------------------------------------------------


def unlock_day(day: DayWorkout, today: date, include_overdue: bool = False) -> DayWorkout:
    """Unlock *day* if it is LOCKED and dated today.

    With *include_overdue*, LOCKED days dated before today are unlocked
    too (catch-up after missed sweeps). Returns *day* itself when
    nothing changes.
    """
    if day.status != WorkoutStatus.LOCKED:
        return day
    due = day.date <= today if include_overdue else day.date == today
    if not due:
        return day
    return apply_event(day, StatusEvent.UNLOCK)


def unlock_program(
    program: Program, today: date, include_overdue: bool = False
) -> tuple[Program, int]:
    """Run the unlock rule over every day of *program*.

    Returns:
        (program, unlocked_count). The original *program* object is
        returned untouched when no day was unlocked, which makes repeated
        sweeps on the same day no-ops.
    """
    unlocked = 0
    new_weeks: list[Week] = []
    for week in program.weeks:
        new_days: list[DayWorkout] = []
        for day in week.days:
            new_day = unlock_day(day, today, include_overdue)
            if new_day is not day:
                unlocked += 1
            new_days.append(new_day)
        new_weeks.append(dataclasses.replace(week, days=tuple(new_days)))

    if unlocked == 0:
        return program, 0
    return dataclasses.replace(program, weeks=tuple(new_weeks)), unlocked
