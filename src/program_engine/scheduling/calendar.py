"""Calendar generation: the week/day skeleton of a program.

Week *k* (1-indexed) starts ``(k - 1) * 7`` days after the program start
and ends six days later. Day *i* of a week (Monday slot = 0) falls
``i`` days after the week start. The output is a pure function of
(start date, duration, today).
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

from program_engine.exceptions import ValidationError
from program_engine.models.enums import (
    DAYS_PER_WEEK,
    MIN_DURATION_WEEKS,
    WEEK_SPAN_DAYS,
    DayOfWeek,
    DayType,
)
from program_engine.models.program import DayWorkout, Week
from program_engine.scheduling.status import initial_status


def parse_date(value: date | str, field: str = "date") -> date:
    """Coerce *value* to a calendar date.

    Accepts ``date`` objects (a ``datetime`` is truncated to its date)
    and ISO ``YYYY-MM-DD`` strings.

    Raises:
        ValidationError: If *value* is empty or malformed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError(f"Malformed {field}: {value!r}", field=field) from None
    raise ValidationError(f"Missing {field}", field=field)


def validate_duration(duration_weeks: int) -> int:
    """Return *duration_weeks* if it is an integer >= 1."""
    if (
        isinstance(duration_weeks, bool)
        or not isinstance(duration_weeks, int)
        or duration_weeks < MIN_DURATION_WEEKS
    ):
        raise ValidationError(
            f"Duration must be a whole number of weeks >= {MIN_DURATION_WEEKS}, "
            f"got {duration_weeks!r}",
            field="duration_weeks",
        )
    return duration_weeks


def week_start(program_start: date, week_number: int) -> date:
    """Start date of week *week_number* (1-indexed)."""
    return program_start + timedelta(days=(week_number - 1) * DAYS_PER_WEEK)


def week_end(start: date) -> date:
    return start + timedelta(days=WEEK_SPAN_DAYS)


def day_dates(start: date) -> list[tuple[DayOfWeek, date]]:
    """The seven (slot, date) pairs of a week starting on *start*."""
    return [(slot, start + timedelta(days=slot.value)) for slot in DayOfWeek]


def generate_week(week_number: int, start: date, today: date) -> Week:
    """Build one empty week: seven WORKOUT days with initial statuses."""
    days = tuple(
        DayWorkout(
            day_of_week=slot,
            date=day_date,
            day_type=DayType.WORKOUT,
            status=initial_status(day_date, today),
        )
        for slot, day_date in day_dates(start)
    )
    return Week(
        week_number=week_number,
        start_date=start,
        end_date=week_end(start),
        days=days,
    )


def generate_weeks(
    start_date: date | str, duration_weeks: int, today: date
) -> tuple[Week, ...]:
    """Generate the full calendar for a program.

    Args:
        start_date: First day of week 1.
        duration_weeks: Number of weeks (>= 1).
        today: Reference date for the initial LOCKED/PENDING statuses.

    Returns:
        ``duration_weeks`` Week objects numbered 1..N.

    Raises:
        ValidationError: On a malformed start date or duration < 1.
    """
    start = parse_date(start_date, field="start_date")
    validate_duration(duration_weeks)
    return tuple(
        generate_week(k, week_start(start, k), today)
        for k in range(1, duration_weeks + 1)
    )
