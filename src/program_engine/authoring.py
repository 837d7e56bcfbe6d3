"""Trainer authoring operations over immutable programs.

Every function takes a Program and returns a new one. Only the week and
day on the write path are rebuilt; untouched weeks and days are reused
as-is, which is safe because all models are frozen.
"""

from __future__ import annotations

import dataclasses
from datetime import timedelta

from program_engine.exceptions import NotFoundError, StateError, ValidationError
from program_engine.ids import IdFactory, new_id
from program_engine.models.enums import DAYS_PER_WEEK, MIN_SETS, DayOfWeek, DayType
from program_engine.models.exercise import Exercise
from program_engine.models.program import DayWorkout, Program, Week
from program_engine.scheduling.calendar import week_end
from program_engine.scheduling.status import change_day_type

_EXERCISE_FIELDS = frozenset(f.name for f in dataclasses.fields(Exercise))
_IMMUTABLE_EXERCISE_FIELDS = frozenset({"id", "order_index"})


# ---------------------------------------------------------------------------
# Lookup and replace
# ---------------------------------------------------------------------------


def locate_day(
    program: Program, week_number: int, day_of_week: DayOfWeek
) -> tuple[Week, DayWorkout]:
    """Return the (week, day) pair for a slot.

    Raises:
        NotFoundError: If the week or the day slot does not exist.
    """
    week = program.week(week_number)
    if week is None:
        raise NotFoundError("week", week_number)
    day = week.day(day_of_week)
    if day is None:
        raise NotFoundError("day", f"week {week_number} {day_of_week.name}")
    return week, day


def replace_week(program: Program, week: Week) -> Program:
    """Swap in *week* for the existing week with the same number."""
    if program.week(week.week_number) is None:
        raise NotFoundError("week", week.week_number)
    weeks = tuple(week if w.week_number == week.week_number else w for w in program.weeks)
    return dataclasses.replace(program, weeks=weeks)


def replace_day(program: Program, week_number: int, day: DayWorkout) -> Program:
    """Swap in *day* for the day in the same slot of week *week_number*."""
    week, _ = locate_day(program, week_number, day.day_of_week)
    days = tuple(day if d.day_of_week == day.day_of_week else d for d in week.days)
    return replace_week(program, dataclasses.replace(week, days=days))


def _update_day(program, week_number, day_of_week, fn) -> Program:
    _, day = locate_day(program, week_number, day_of_week)
    return replace_day(program, week_number, fn(day))


def _renumber(exercises) -> tuple[Exercise, ...]:
    return tuple(
        ex if ex.order_index == i else dataclasses.replace(ex, order_index=i)
        for i, ex in enumerate(exercises)
    )


def _check_exercise_fields(name: str, sets: int) -> None:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Exercise name is required", field="name")
    if isinstance(sets, bool) or not isinstance(sets, int) or sets < MIN_SETS:
        raise ValidationError(f"Exercise sets must be >= {MIN_SETS}, got {sets!r}", field="sets")


# ---------------------------------------------------------------------------
# Exercise editing
# ---------------------------------------------------------------------------


def add_exercise(
    program: Program,
    week_number: int,
    day_of_week: DayOfWeek,
    name: str,
    sets: int,
    reps: str,
    id_factory: IdFactory = new_id,
    **details,
) -> Program:
    """Append a new exercise to a day.

    *details* may carry any optional Exercise field (weight, tempo, ...).
    """
    _check_exercise_fields(name, sets)
    unknown = set(details) - (_EXERCISE_FIELDS - _IMMUTABLE_EXERCISE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown exercise fields: {sorted(unknown)}")

    def add(day: DayWorkout) -> DayWorkout:
        if day.is_rest:
            raise StateError(
                f"Cannot add exercises to rest day {day.date.isoformat()}",
                status=day.status,
            )
        exercise = Exercise(
            id=id_factory(),
            name=name.strip(),
            sets=sets,
            reps=str(reps),
            order_index=len(day.exercises),
            **details,
        )
        return dataclasses.replace(day, exercises=day.exercises + (exercise,))

    return _update_day(program, week_number, day_of_week, add)


def remove_exercise(
    program: Program, week_number: int, day_of_week: DayOfWeek, exercise_id: str
) -> Program:
    """Remove an exercise and close the gap in ``order_index``."""

    def remove(day: DayWorkout) -> DayWorkout:
        if day.exercise(exercise_id) is None:
            raise NotFoundError("exercise", exercise_id)
        remaining = [ex for ex in day.exercises if ex.id != exercise_id]
        return dataclasses.replace(day, exercises=_renumber(remaining))

    return _update_day(program, week_number, day_of_week, remove)


def update_exercise(
    program: Program,
    week_number: int,
    day_of_week: DayOfWeek,
    exercise_id: str,
    **changes,
) -> Program:
    """Merge *changes* into an exercise. ``id`` and ``order_index`` are fixed."""
    locked = _IMMUTABLE_EXERCISE_FIELDS & set(changes)
    if locked:
        raise ValidationError(f"Cannot change {sorted(locked)} via update", field=sorted(locked)[0])
    unknown = set(changes) - _EXERCISE_FIELDS
    if unknown:
        raise ValidationError(f"Unknown exercise fields: {sorted(unknown)}")

    def update(day: DayWorkout) -> DayWorkout:
        current = day.exercise(exercise_id)
        if current is None:
            raise NotFoundError("exercise", exercise_id)
        updated = dataclasses.replace(current, **changes)
        _check_exercise_fields(updated.name, updated.sets)
        exercises = tuple(updated if ex.id == exercise_id else ex for ex in day.exercises)
        return dataclasses.replace(day, exercises=exercises)

    return _update_day(program, week_number, day_of_week, update)


def reorder_exercise(
    program: Program,
    week_number: int,
    day_of_week: DayOfWeek,
    exercise_id: str,
    direction: str,
) -> Program:
    """Move an exercise one place "up" or "down".

    Moving the first exercise up or the last one down returns *program*
    unchanged.
    """
    if direction not in ("up", "down"):
        raise ValidationError(f"Direction must be 'up' or 'down', got {direction!r}", field="direction")

    _, day = locate_day(program, week_number, day_of_week)
    index = next((i for i, ex in enumerate(day.exercises) if ex.id == exercise_id), None)
    if index is None:
        raise NotFoundError("exercise", exercise_id)
    target = index - 1 if direction == "up" else index + 1
    if target < 0 or target >= len(day.exercises):
        return program

    exercises = list(day.exercises)
    exercises[index], exercises[target] = exercises[target], exercises[index]
    return replace_day(
        program, week_number, dataclasses.replace(day, exercises=_renumber(exercises))
    )


# ---------------------------------------------------------------------------
# Day / week metadata
# ---------------------------------------------------------------------------


def set_day_type(
    program: Program, week_number: int, day_of_week: DayOfWeek, day_type: DayType
) -> Program:
    """Change a day's type. Switching to REST permanently clears its exercises."""
    return _update_day(
        program, week_number, day_of_week, lambda day: change_day_type(day, day_type)
    )


def set_day_notes(
    program: Program, week_number: int, day_of_week: DayOfWeek, notes: str | None
) -> Program:
    return _update_day(
        program, week_number, day_of_week, lambda day: dataclasses.replace(day, notes=notes)
    )


def set_week_notes(program: Program, week_number: int, notes: str | None) -> Program:
    week = program.week(week_number)
    if week is None:
        raise NotFoundError("week", week_number)
    return replace_week(program, dataclasses.replace(week, notes=notes))


# ---------------------------------------------------------------------------
# Shape validation
# ---------------------------------------------------------------------------


def validate_day(day: DayWorkout) -> None:
    """Check rest-day and exercise-ordering invariants of a single day."""
    if day.is_rest and day.exercises:
        raise ValidationError(
            f"Rest day {day.date.isoformat()} cannot carry exercises", field="exercises"
        )
    for i, ex in enumerate(day.exercises):
        if ex.order_index != i:
            raise ValidationError(
                f"Exercise {ex.id} has order_index {ex.order_index}, expected {i}",
                field="order_index",
            )
        _check_exercise_fields(ex.name, ex.sets)


def validate_week(week: Week) -> None:
    """Check date span, day count and weekday order of a week."""
    if week.end_date != week_end(week.start_date):
        raise ValidationError(
            f"Week {week.week_number} must end six days after it starts", field="end_date"
        )
    if len(week.days) != DAYS_PER_WEEK:
        raise ValidationError(
            f"Week {week.week_number} must have {DAYS_PER_WEEK} days, got {len(week.days)}",
            field="days",
        )
    for slot, day in zip(DayOfWeek, week.days):
        expected = week.start_date + timedelta(days=slot.value)
        if day.day_of_week != slot or day.date != expected:
            raise ValidationError(
                f"Week {week.week_number} day {slot.name} must be dated {expected.isoformat()}",
                field="days",
            )
        validate_day(day)


def validate_program_shape(program: Program) -> None:
    """Enforce the structural invariants of a program.

    Raises:
        ValidationError: Naming the first violated invariant.
    """
    if len(program.weeks) != program.duration_weeks:
        raise ValidationError(
            f"Program has {len(program.weeks)} weeks but duration is {program.duration_weeks}",
            field="weeks",
        )
    previous_end = None
    for expected_number, week in enumerate(program.weeks, start=1):
        if week.week_number != expected_number:
            raise ValidationError(
                f"Week numbers must run 1..{program.duration_weeks} without gaps, "
                f"found {week.week_number} at position {expected_number}",
                field="weeks",
            )
        if previous_end is None and week.start_date != program.start_date:
            raise ValidationError(
                "Week 1 must start on the program start date", field="start_date"
            )
        if previous_end is not None and week.start_date != previous_end + timedelta(days=1):
            raise ValidationError(
                f"Week {week.week_number} does not start the day after week {expected_number - 1}",
                field="weeks",
            )
        validate_week(week)
        previous_end = week.end_date
