"""Program-level aggregates: completion, current week, pending reviews.

Only REVIEWED days count as complete. REST days are excluded from both
the numerator and the denominator.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import date

from program_engine.models.enums import DayType, WorkoutStatus
from program_engine.models.program import (
    DayWorkout,
    PendingReview,
    Program,
    Week,
    WeekProgress,
)


def percent(part: int, whole: int) -> int:
    """``100 * part / whole`` rounded half-up; 0 when *whole* is 0."""
    if whole <= 0:
        return 0
    return int(math.floor(100 * part / whole + 0.5))


def _is_scheduled(day: DayWorkout) -> bool:
    return day.day_type != DayType.REST


def completion_percentage(program: Program) -> int:
    """Percentage of non-rest days that have been reviewed."""
    total = 0
    completed = 0
    for _, day in program.iter_days():
        if _is_scheduled(day):
            total += 1
            if day.status == WorkoutStatus.REVIEWED:
                completed += 1
    return percent(completed, total)


def current_week(program: Program, today: date) -> Week | None:
    """The week whose date range contains *today*.

    Before the program starts this is week 1; after it ends, the last
    week. None only when the program has no weeks.
    """
    if not program.weeks:
        return None
    for week in program.weeks:
        if week.contains(today):
            return week
    if today < program.start_date:
        return program.weeks[0]
    return program.weeks[-1]


def todays_workout(program: Program, today: date) -> DayWorkout | None:
    """The day dated *today*, or None outside the program's calendar."""
    for _, day in program.iter_days():
        if day.date == today:
            return day
    return None


def week_progress(week: Week) -> WeekProgress:
    """Reviewed vs. scheduled days within a single week."""
    scheduled = [d for d in week.days if _is_scheduled(d)]
    completed = sum(1 for d in scheduled if d.status == WorkoutStatus.REVIEWED)
    return WeekProgress(
        completed=completed,
        total=len(scheduled),
        percentage=percent(completed, len(scheduled)),
    )


def pending_reviews(programs: Iterable[Program], trainer_id: str) -> list[PendingReview]:
    """Every SUBMITTED day across *trainer_id*'s programs.

    Order follows program, week and day iteration order; no sorting is
    applied.
    """
    result: list[PendingReview] = []
    for program in programs:
        if program.trainer_id != trainer_id:
            continue
        for week, day in program.iter_days():
            if day.status == WorkoutStatus.SUBMITTED:
                result.append(PendingReview(program=program, week=week, day=day))
    return result
