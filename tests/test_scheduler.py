"""Tests for scheduler.nightly, the daily unlock sweep entry point."""

from __future__ import annotations

from datetime import date, datetime
from unittest.mock import MagicMock, patch

import pytest

from program_engine.clock import FixedClock
from program_engine.exceptions import ValidationError
from program_engine.models.enums import DayOfWeek, WorkoutStatus
from program_engine.service import ProgramService
from program_store import JsonFileStore, StoreIOError
from scheduler import nightly


@pytest.fixture
def json_service(tmp_path, draft):
    """Service over a JSON store holding one program created on 2024-01-03."""
    store = JsonFileStore(tmp_path / "store")
    creator = ProgramService(store, clock=FixedClock(datetime(2024, 1, 3, 9, 0)))
    program = creator.create_program(draft)
    return store, program.id


class TestNightlyJob:
    def test_returns_unlocked_count(self, json_service) -> None:
        store, program_id = json_service
        service = ProgramService(store, clock=FixedClock(date(2024, 1, 4)))

        assert nightly.nightly_job(service) == 1
        program = service.get_program(program_id)
        assert program.week(1).day(DayOfWeek.THURSDAY).status == WorkoutStatus.PENDING

    def test_store_failure_returns_none(self) -> None:
        service = MagicMock()
        service.unlock_todays_workouts.side_effect = StoreIOError("disk full", key="program:x")
        assert nightly.nightly_job(service) is None

    def test_engine_failure_returns_none(self) -> None:
        service = MagicMock()
        service.unlock_todays_workouts.side_effect = ValidationError("Malformed program record")
        assert nightly.nightly_job(service) is None

    def test_unreadable_program_does_not_stop_sweep(self, json_service) -> None:
        store, program_id = json_service
        store.put("program:broken", {"id": "broken", "weeks": "x"})
        service = ProgramService(store, clock=FixedClock(date(2024, 1, 4)))

        assert nightly.nightly_job(service) == 1
        program = service.get_program(program_id)
        assert program.week(1).day(DayOfWeek.THURSDAY).status == WorkoutStatus.PENDING

    def test_passes_include_overdue(self) -> None:
        service = MagicMock()
        service.unlock_todays_workouts.return_value = 0
        nightly.nightly_job(service, include_overdue=True)
        service.unlock_todays_workouts.assert_called_once_with(include_overdue=True)


class TestMain:
    @patch("scheduler.nightly.build_service")
    def test_once(self, mock_build) -> None:
        mock_build.return_value.unlock_todays_workouts.return_value = 2
        assert nightly.main(["--once"]) == 0
        mock_build.assert_called_once_with(None)

    @patch("scheduler.nightly.build_service")
    def test_once_with_date(self, mock_build) -> None:
        mock_build.return_value.unlock_todays_workouts.return_value = 0
        assert nightly.main(["--once", "--date", "2024-01-04", "--include-overdue"]) == 0

        (clock,), _ = mock_build.call_args
        assert clock.today() == date(2024, 1, 4)
        mock_build.return_value.unlock_todays_workouts.assert_called_once_with(
            include_overdue=True
        )

    @patch("scheduler.nightly.build_service")
    def test_once_failure_exit_code(self, mock_build) -> None:
        mock_build.return_value.unlock_todays_workouts.side_effect = StoreIOError("boom")
        assert nightly.main(["--once"]) == 1

    @patch("scheduler.nightly.build_service")
    def test_once_engine_failure_exit_code(self, mock_build) -> None:
        mock_build.return_value.unlock_todays_workouts.side_effect = ValidationError("bad")
        assert nightly.main(["--once"]) == 1

    @patch("apscheduler.schedulers.blocking.BlockingScheduler")
    def test_daemon_registers_cron_job(self, MockScheduler) -> None:
        scheduler = MagicMock()
        MockScheduler.return_value = scheduler

        assert nightly.main(["--daemon"]) == 0

        scheduler.add_job.assert_called_once_with(
            nightly.nightly_job,
            "cron",
            hour=nightly.SWEEP_HOUR,
            minute=nightly.SWEEP_MINUTE,
            kwargs={"include_overdue": nightly.INCLUDE_OVERDUE},
            id="unlock_sweep",
        )
        scheduler.start.assert_called_once()

    @patch("apscheduler.schedulers.blocking.BlockingScheduler")
    def test_daemon_stops_on_interrupt(self, MockScheduler) -> None:
        MockScheduler.return_value.start.side_effect = KeyboardInterrupt
        assert nightly.main(["--daemon"]) == 0

    def test_date_requires_once(self) -> None:
        with pytest.raises(SystemExit):
            nightly.main(["--daemon", "--date", "2024-01-04"])

    def test_mode_required(self) -> None:
        with pytest.raises(SystemExit):
            nightly.main([])

    def test_bad_date(self) -> None:
        with pytest.raises(SystemExit):
            nightly.main(["--once", "--date", "tomorrow"])
