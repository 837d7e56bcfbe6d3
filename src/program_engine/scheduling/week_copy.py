"""Week copy: clone one week's structure into another week's dates."""

from __future__ import annotations

import dataclasses
from datetime import date

from program_engine.ids import IdFactory, new_id
from program_engine.models.program import DayWorkout, Week
from program_engine.scheduling.calendar import day_dates, parse_date, week_end
from program_engine.scheduling.status import initial_status


def copy_week(
    source: Week,
    target_week_number: int,
    target_start_date: date | str,
    today: date,
    id_factory: IdFactory = new_id,
) -> Week:
    """Clone *source* into a new week starting on *target_start_date*.

    Day types, day notes and exercises are copied; every exercise gets a
    fresh id while keeping its ``order_index``. Statuses are recomputed
    from the new dates, and client logs and reviews are left behind, so
    the copy is always unstarted. Week-level notes are not copied.
    """
    start = parse_date(target_start_date, field="target_start_date")
    source_by_slot = {d.day_of_week: d for d in source.days}

    days: list[DayWorkout] = []
    for slot, day_date in day_dates(start):
        src = source_by_slot.get(slot)
        if src is None:
            days.append(
                DayWorkout(
                    day_of_week=slot,
                    date=day_date,
                    status=initial_status(day_date, today),
                )
            )
            continue
        exercises = tuple(
            dataclasses.replace(ex, id=id_factory()) for ex in src.exercises
        )
        days.append(
            DayWorkout(
                day_of_week=slot,
                date=day_date,
                day_type=src.day_type,
                status=initial_status(day_date, today),
                exercises=exercises,
                notes=src.notes,
            )
        )

    return Week(
        week_number=target_week_number,
        start_date=start,
        end_date=week_end(start),
        days=tuple(days),
        copied_from_week=source.week_number,
    )
