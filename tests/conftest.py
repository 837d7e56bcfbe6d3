"""Shared test fixtures: fixed clock, deterministic ids, stores, sample programs."""

from __future__ import annotations

import dataclasses
import itertools
from datetime import date, datetime
from typing import Callable

import pytest

from program_engine.authoring import replace_day
from program_engine.clock import FixedClock
from program_engine.models.enums import DayOfWeek, DayType, ProgramStatus, WorkoutStatus
from program_engine.models.exercise import Exercise
from program_engine.models.program import DayWorkout, Program, ProgramDraft
from program_engine.scheduling.calendar import generate_weeks
from program_engine.service import ProgramService
from program_store.memory import InMemoryStore

# 2024-01-01 is a Monday; "today" in most tests is Wednesday 2024-01-03.
PROGRAM_START = date(2024, 1, 1)
TODAY = date(2024, 1, 3)


@pytest.fixture
def clock() -> FixedClock:
    """Wednesday 2024-01-03, 09:00."""
    return FixedClock(datetime(2024, 1, 3, 9, 0))


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Sequential ids: id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def service(store, clock, id_factory) -> ProgramService:
    return ProgramService(store, clock=clock, id_factory=id_factory)


def make_exercise(ex_id: str, order_index: int = 0, sets: int = 3, **overrides) -> Exercise:
    defaults = {
        "id": ex_id,
        "name": f"Exercise {ex_id}",
        "sets": sets,
        "reps": "8-10",
        "order_index": order_index,
        "weight": "60kg",
        "rest_seconds": 90,
    }
    defaults.update(overrides)
    return Exercise(**defaults)


def make_program(
    start: date = PROGRAM_START,
    weeks: int = 4,
    today: date = TODAY,
    status: ProgramStatus = ProgramStatus.ACTIVE,
    **overrides,
) -> Program:
    """A program with a generated, empty calendar (no store involved)."""
    defaults = {
        "id": "prog-1",
        "trainer_id": "trainer-1",
        "client_id": "client-1",
        "title": "Strength Block",
        "start_date": start,
        "duration_weeks": weeks,
        "status": status,
        "weeks": generate_weeks(start, weeks, today),
        "created_at": datetime(2023, 12, 28, 10, 0),
        "updated_at": datetime(2023, 12, 28, 10, 0),
    }
    defaults.update(overrides)
    return Program(**defaults)


@pytest.fixture
def program() -> Program:
    """4-week ACTIVE program starting Monday 2024-01-01, generated on 2024-01-03."""
    return make_program()


@pytest.fixture
def draft() -> ProgramDraft:
    return ProgramDraft(
        trainer_id="trainer-1",
        client_id="client-1",
        title="Strength Block",
        description="Four weeks of full-body strength",
        start_date="2024-01-01",
        duration_weeks=4,
        status=ProgramStatus.ACTIVE,
    )


@pytest.fixture
def stored_program(service, draft) -> Program:
    """Stored 4-week program with exercises on week 1 Monday (2) and Wednesday (1)."""
    program = service.create_program(draft)
    service.add_exercise(program.id, 1, DayOfWeek.MONDAY, "Back Squat", 3, "5", weight="100kg")
    service.add_exercise(program.id, 1, DayOfWeek.MONDAY, "Bench Press", 2, "8")
    return service.add_exercise(program.id, 1, DayOfWeek.WEDNESDAY, "Deadlift", 3, "3")


def with_day(program: Program, week_number: int, day: DayWorkout) -> Program:
    """Replace one day without validation."""
    return replace_day(program, week_number, day)


def set_status(
    program: Program,
    week_number: int,
    slot: DayOfWeek,
    status: WorkoutStatus,
    day_type: DayType | None = None,
) -> Program:
    """Force a day into *status* (and optionally *day_type*) for test setup."""
    day = program.week(week_number).day(slot)
    changes = {"status": status}
    if day_type is not None:
        changes["day_type"] = day_type
    return with_day(program, week_number, dataclasses.replace(day, **changes))
