"""Tests for the set-by-set workout logging session."""

from __future__ import annotations

from datetime import date

import pytest

from program_engine import authoring
from program_engine.exceptions import StateError, ValidationError
from program_engine.logging_session import build_exercise_logs
from program_engine.models.enums import DayOfWeek, DayType, WorkoutStatus
from program_engine.models.program import DayWorkout

SQUAT, BENCH = "id-2", "id-3"


@pytest.fixture
def session(service, stored_program):
    session = service.start_workout_session(stored_program.id, 1, DayOfWeek.MONDAY)
    session.initialize()
    return session


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------


class TestInitialize:
    def test_one_log_per_exercise_in_order(self, session) -> None:
        logs = session.exercise_logs
        assert [log.exercise_id for log in logs] == [SQUAT, BENCH]
        assert [len(log.actual_sets) for log in logs] == [3, 2]
        assert [s.set_number for s in logs[0].actual_sets] == [1, 2, 3]

    def test_sets_prefilled_from_plan(self, session) -> None:
        squat, bench = session.exercise_logs
        assert {s.actual_weight for s in squat.actual_sets} == {"100kg"}
        assert {s.actual_weight for s in bench.actual_sets} == {""}
        for log in session.exercise_logs:
            for s in log.actual_sets:
                assert (s.actual_reps, s.rpe, s.completed) == (0, 0, False)
            assert not log.completed

    def test_day_without_exercises_is_noop(self, service, stored_program) -> None:
        session = service.start_workout_session(stored_program.id, 1, DayOfWeek.TUESDAY)
        session.initialize()
        assert session.exercise_logs == ()
        assert session.completion_percentage() == 0

    def test_build_logs_sorts_by_order_index(self, stored_program) -> None:
        day = stored_program.week(1).day(DayOfWeek.MONDAY)
        shuffled = DayWorkout(
            day_of_week=day.day_of_week,
            date=day.date,
            exercises=tuple(reversed(day.exercises)),
        )
        assert [log.exercise_id for log in build_exercise_logs(shuffled)] == [SQUAT, BENCH]


# ---------------------------------------------------------------------------
# Editing sets
# ---------------------------------------------------------------------------


class TestSetEditing:
    def test_update_set(self, session) -> None:
        assert session.update_set(SQUAT, 2, actual_reps=5, rpe=8, actual_weight="102.5kg")
        s = session.exercise_logs[0].actual_sets[1]
        assert (s.actual_reps, s.rpe, s.actual_weight, s.completed) == (5, 8, "102.5kg", False)

    def test_unknown_targets_return_false(self, session) -> None:
        before = session.exercise_logs
        assert session.update_set("missing", 1, actual_reps=5) is False
        assert session.update_set(SQUAT, 9, actual_reps=5) is False
        assert session.toggle_set_completed(BENCH, 3) is False
        assert session.exercise_logs == before

    @pytest.mark.parametrize(
        "updates",
        [{"rpe": 11}, {"rpe": -1}, {"actual_reps": -3}, {"tempo": "x"}, {"completed": None}],
    )
    def test_invalid_updates(self, session, updates) -> None:
        with pytest.raises(ValidationError):
            session.update_set(SQUAT, 1, **updates)

    def test_none_clears_set_fields(self, session) -> None:
        session.update_set(SQUAT, 1, actual_reps=5, rpe=8)
        assert session.update_set(SQUAT, 1, actual_reps=None, actual_weight=None, rpe=None)
        s = session.exercise_logs[0].actual_sets[0]
        assert (s.actual_reps, s.actual_weight, s.rpe) == (0, "", 0)

    def test_toggle_twice_restores(self, session) -> None:
        session.toggle_set_completed(SQUAT, 1)
        assert session.exercise_logs[0].actual_sets[0].completed
        session.toggle_set_completed(SQUAT, 1)
        assert not session.exercise_logs[0].actual_sets[0].completed

    def test_exercise_completed_derived_from_sets(self, session) -> None:
        for n in (1, 2):
            session.toggle_set_completed(BENCH, n)
        assert session.exercise_logs[1].completed
        session.update_set(BENCH, 2, completed=False)
        assert not session.exercise_logs[1].completed

    def test_completion_percentage(self, session) -> None:
        session.toggle_set_completed(SQUAT, 1)
        session.toggle_set_completed(SQUAT, 2)
        assert session.completion_percentage() == 40  # 2 of 5

    def test_exercise_notes(self, session) -> None:
        assert session.update_exercise_notes(BENCH, "Elbows flared")
        assert session.exercise_logs[1].notes == "Elbows flared"
        assert session.update_exercise_notes("missing", "x") is False

    def test_rating(self, session) -> None:
        session.set_rating(4)
        assert session.rating == 4
        session.set_rating(0)
        assert session.rating is None
        with pytest.raises(ValidationError):
            session.set_rating(6)


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


class TestSaveAndSubmit:
    def test_save_progress(self, service, session, clock) -> None:
        session.toggle_set_completed(SQUAT, 1)
        clock.advance(minutes=20)
        day = session.save_progress()

        assert day.status == WorkoutStatus.IN_PROGRESS
        assert day.client_log.completed_sets == 1
        assert day.client_log.duration_min == 20
        stored = service.get_program(session.program_id).week(1).day(DayOfWeek.MONDAY)
        assert stored == day

    def test_saved_log_with_cleared_rpe_reloads(self, service, session) -> None:
        session.update_set(SQUAT, 1, rpe=None, completed=True)
        day = session.save_progress()

        stored = service.get_program(session.program_id).week(1).day(DayOfWeek.MONDAY)
        assert stored == day
        assert stored.client_log.exercise_logs[0].actual_sets[0].rpe == 0

    def test_save_twice_stays_in_progress(self, session) -> None:
        session.save_progress()
        session.toggle_set_completed(SQUAT, 2)
        day = session.save_progress()
        assert day.status == WorkoutStatus.IN_PROGRESS
        assert day.client_log.completed_sets == 1

    def test_submit_full_workout(self, service, session, clock) -> None:
        for ex_id, sets in ((SQUAT, 3), (BENCH, 2)):
            for n in range(1, sets + 1):
                session.update_set(ex_id, n, actual_reps=5, completed=True)
        session.overall_notes = "Felt strong"
        session.set_rating(5)
        clock.advance(minutes=44, seconds=40)

        day = session.submit()

        assert day.status == WorkoutStatus.SUBMITTED
        log = day.client_log
        assert log.duration_min == 45
        assert log.overall_notes == "Felt strong"
        assert log.rating == 5
        assert all(ex.completed for ex in log.exercise_logs)
        assert log.logged_at == clock.now()
        assert service.pending_reviews("trainer-1")[0].day.day_of_week == DayOfWeek.MONDAY

    def test_submit_partial_workout(self, session) -> None:
        session.toggle_set_completed(BENCH, 1)
        day = session.submit()
        assert day.status == WorkoutStatus.SUBMITTED
        assert day.client_log.completed_sets == 1
        assert day.client_log.total_sets == 5

    def test_submit_without_logs(self, service, stored_program) -> None:
        session = service.start_workout_session(stored_program.id, 1, DayOfWeek.TUESDAY)
        session.initialize()
        with pytest.raises(StateError, match="Nothing to submit"):
            session.submit()

    def test_submit_twice_rejected(self, session) -> None:
        session.submit()
        with pytest.raises(StateError):
            session.submit()

    def test_locked_day_cannot_be_saved(self, service, stored_program) -> None:
        program = service.add_exercise(stored_program.id, 2, DayOfWeek.MONDAY, "Squat", 3, "5")
        session = service.start_workout_session(program.id, 2, DayOfWeek.MONDAY)
        session.initialize()
        with pytest.raises(StateError):
            session.save_progress()
        assert service.get_program(program.id) == program

    def test_submit_after_day_became_rest(self, service, stored_program) -> None:
        session = service.start_workout_session(stored_program.id, 1, DayOfWeek.WEDNESDAY)
        session.initialize()
        service.edit_program(
            stored_program.id, authoring.set_day_type, 1, DayOfWeek.WEDNESDAY, DayType.REST
        )
        with pytest.raises(StateError, match="Rest day"):
            session.submit()

    def test_submit_after_program_deleted(self, service, session) -> None:
        service.delete_program(session.program_id)
        with pytest.raises(ValidationError) as excinfo:
            session.submit()
        assert excinfo.value.field == "day_of_week"

    def test_started_at_fixed_once(self, service, stored_program, clock) -> None:
        session = service.start_workout_session(stored_program.id, 1, DayOfWeek.WEDNESDAY)
        clock.advance(minutes=10)
        session.initialize()
        clock.advance(minutes=5)
        assert session.duration() == 15
        assert session.day.date == date(2024, 1, 3)
