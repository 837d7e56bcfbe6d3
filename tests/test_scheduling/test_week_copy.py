"""Tests for copying a week's structure into another week."""

from __future__ import annotations

import dataclasses
import itertools
from datetime import date, datetime

from conftest import make_exercise, make_program, with_day
from program_engine.models.enums import DayOfWeek, DayType, WorkoutStatus
from program_engine.models.workout_log import ClientWorkoutLog, TrainerReview
from program_engine.scheduling.week_copy import copy_week


def _ids():
    counter = itertools.count(1)
    return lambda: f"copy-{next(counter)}"


def _source_program():
    program = make_program(today=date(2024, 1, 10))
    week1 = program.week(1)
    monday = dataclasses.replace(
        week1.day(DayOfWeek.MONDAY),
        status=WorkoutStatus.REVIEWED,
        exercises=(
            make_exercise("sq", name="Back Squat", sets=3, reps="5"),
            make_exercise("bp", order_index=1, name="Bench Press", sets=2, reps="8"),
        ),
        notes="Heavy day",
        client_log=ClientWorkoutLog(logged_at=datetime(2024, 1, 1, 18, 0)),
        trainer_review=TrainerReview(
            reviewed_at=datetime(2024, 1, 2, 8, 0), rating=5, feedback="Great"
        ),
    )
    sunday = dataclasses.replace(week1.day(DayOfWeek.SUNDAY), day_type=DayType.REST)
    program = with_day(program, 1, monday)
    program = with_day(program, 1, sunday)
    week1 = dataclasses.replace(program.week(1), notes="Intro week")
    return dataclasses.replace(program, weeks=(week1,) + program.weeks[1:])


class TestCopyWeek:
    def test_structure_copied_to_target_dates(self) -> None:
        program = _source_program()
        copied = copy_week(program.week(1), 3, date(2024, 1, 15), date(2024, 1, 10), _ids())

        assert copied.week_number == 3
        assert copied.start_date == date(2024, 1, 15)
        assert copied.end_date == date(2024, 1, 21)
        assert copied.copied_from_week == 1
        assert [d.date for d in copied.days][0] == date(2024, 1, 15)

        monday = copied.day(DayOfWeek.MONDAY)
        assert [ex.name for ex in monday.exercises] == ["Back Squat", "Bench Press"]
        assert [ex.order_index for ex in monday.exercises] == [0, 1]
        assert [ex.sets for ex in monday.exercises] == [3, 2]
        assert monday.notes == "Heavy day"
        assert copied.day(DayOfWeek.SUNDAY).day_type == DayType.REST

    def test_fresh_exercise_ids(self) -> None:
        program = _source_program()
        copied = copy_week(program.week(1), 3, date(2024, 1, 15), date(2024, 1, 10), _ids())
        ids = [ex.id for ex in copied.day(DayOfWeek.MONDAY).exercises]
        assert ids == ["copy-1", "copy-2"]
        source_ids = {ex.id for _, d in program.iter_days() for ex in d.exercises}
        assert not source_ids & set(ids)

    def test_copy_is_unstarted(self) -> None:
        program = _source_program()
        copied = copy_week(program.week(1), 3, date(2024, 1, 15), date(2024, 1, 10), _ids())
        for day in copied.days:
            assert day.status == WorkoutStatus.LOCKED
            assert day.client_log is None
            assert day.trainer_review is None
        assert copied.notes is None

    def test_status_recomputed_from_today(self) -> None:
        program = _source_program()
        copied = copy_week(program.week(1), 2, date(2024, 1, 8), date(2024, 1, 10), _ids())
        statuses = [d.status for d in copied.days]
        assert statuses[:3] == [WorkoutStatus.PENDING] * 3
        assert statuses[3:] == [WorkoutStatus.LOCKED] * 4

    def test_source_unchanged(self) -> None:
        program = _source_program()
        before = program.week(1)
        copy_week(before, 3, date(2024, 1, 15), date(2024, 1, 10), _ids())
        assert program.week(1) == before
        assert before.day(DayOfWeek.MONDAY).exercises[0].id == "sq"

    def test_accepts_iso_start(self) -> None:
        program = _source_program()
        copied = copy_week(program.week(1), 4, "2024-01-22", date(2024, 1, 10), _ids())
        assert copied.start_date == date(2024, 1, 22)
