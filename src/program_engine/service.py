"""ProgramService: the operations exposed to UI and CLI callers.

Every mutation is one load-mutate-store round trip: the whole program
is loaded, a new immutable program is computed, and it is stored back
with a single put. Any error is raised before the put, so a failed
call leaves the stored program unchanged.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable

from program_engine import authoring
from program_engine.access import ensure_allowed
from program_engine.analytics.aggregator import (
    completion_percentage,
    current_week,
    pending_reviews,
    todays_workout,
    week_progress,
)
from program_engine.clock import Clock, SystemClock
from program_engine.exceptions import NotFoundError, StateError, ValidationError
from program_engine.ids import IdFactory, new_id
from program_engine.logging_session import WorkoutSession
from program_engine.models.enums import MAX_RATING, MIN_RATING, DayOfWeek, ProgramStatus
from program_engine.models.program import (
    DayWorkout,
    PendingReview,
    Program,
    ProgramDraft,
    Week,
    WeekProgress,
)
from program_engine.models.user import User
from program_engine.models.workout_log import ClientWorkoutLog, TrainerReview
from program_engine.repository import ProgramRepository
from program_engine.scheduling.calendar import generate_weeks, parse_date, validate_duration
from program_engine.scheduling.status import (
    record_progress,
    record_review,
    record_submission,
    unlock_program,
)
from program_engine.scheduling.week_copy import copy_week
from program_store.base import RecordStore
from program_store.exceptions import CorruptRecordError
from program_store.memory import InMemoryStore

logger = logging.getLogger(__name__)


class ProgramService:
    """Program authoring, client logging and trainer review over a record store.

    Usage:
        service = ProgramService(JsonFileStore("~/.program_scheduler/store"))
        program = service.create_program(ProgramDraft(...))
        service.unlock_todays_workouts()
    """

    def __init__(
        self,
        store: RecordStore | None = None,
        clock: Clock | None = None,
        id_factory: IdFactory | None = None,
    ) -> None:
        self.repository = ProgramRepository(store or InMemoryStore())
        self.clock = clock or SystemClock()
        self.id_factory = id_factory or new_id

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def get_program(self, program_id: str) -> Program | None:
        return self.repository.get(program_id)

    def list_programs_by_trainer(self, trainer_id: str) -> list[Program]:
        return self.repository.list_by_trainer(trainer_id)

    def list_programs_by_client(self, client_id: str) -> list[Program]:
        return self.repository.list_by_client(client_id)

    def list_active_programs(self) -> list[Program]:
        return self.repository.list_by_status(ProgramStatus.ACTIVE)

    def active_program_for_client(self, client_id: str) -> Program | None:
        """The client's first ACTIVE program, or None."""
        for program in self.repository.list_by_client(client_id):
            if program.is_active:
                return program
        return None

    def compute_completion(self, program: Program) -> int:
        return completion_percentage(program)

    def compute_current_week(self, program: Program) -> Week | None:
        return current_week(program, self.clock.today())

    def pending_reviews(self, trainer_id: str) -> list[PendingReview]:
        return pending_reviews(self.repository.list_by_trainer(trainer_id), trainer_id)

    def todays_workout(self, program_id: str) -> DayWorkout | None:
        program = self.repository.get(program_id)
        if program is None:
            return None
        return todays_workout(program, self.clock.today())

    def week_progress(self, program_id: str, week_number: int) -> WeekProgress | None:
        program = self.repository.get(program_id)
        week = program.week(week_number) if program else None
        if week is None:
            return None
        return week_progress(week)

    # ------------------------------------------------------------------
    # Program lifecycle
    # ------------------------------------------------------------------

    def create_program(self, draft: ProgramDraft) -> Program:
        """Validate *draft*, build its calendar if needed, and store it.

        Raises:
            ValidationError: On a missing trainer, client or title, a
                malformed start date, a duration below one week, or
                supplied weeks that break the calendar invariants.
        """
        for field_name in ("trainer_id", "client_id", "title"):
            value = getattr(draft, field_name)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(f"Missing required field: {field_name}", field=field_name)
        start = parse_date(draft.start_date, field="start_date")
        validate_duration(draft.duration_weeks)

        weeks = draft.weeks
        if weeks is None:
            weeks = generate_weeks(start, draft.duration_weeks, self.clock.today())

        now = self.clock.now()
        program = Program(
            id=self.id_factory(),
            trainer_id=draft.trainer_id,
            client_id=draft.client_id,
            title=draft.title.strip(),
            description=draft.description,
            start_date=start,
            duration_weeks=draft.duration_weeks,
            status=draft.status,
            weeks=tuple(weeks),
            created_at=now,
            updated_at=now,
        )
        authoring.validate_program_shape(program)
        self.repository.save(program)
        logger.info(
            "Created program %s (%d weeks from %s) for client %s",
            program.id,
            program.duration_weeks,
            start.isoformat(),
            program.client_id,
        )
        return program

    def update_program(self, program: Program, actor: User | None = None) -> Program:
        """Replace a stored program with *program*, stamping ``updated_at``."""
        ensure_allowed(actor, "author", self._load(program.id))
        authoring.validate_program_shape(program)
        return self._commit(program)

    def update_program_status(
        self, program_id: str, status: ProgramStatus, actor: User | None = None
    ) -> Program:
        program = self._load(program_id)
        ensure_allowed(actor, "author", program)
        logger.info("Program %s: %s -> %s", program_id, program.status.name, status.name)
        return self._commit(dataclasses.replace(program, status=status))

    def delete_program(self, program_id: str) -> bool:
        deleted = self.repository.delete(program_id)
        if deleted:
            logger.info("Deleted program %s", program_id)
        return deleted

    # ------------------------------------------------------------------
    # Authoring
    # ------------------------------------------------------------------

    def edit_program(
        self,
        program_id: str,
        operation: Callable[..., Program],
        *args,
        actor: User | None = None,
        **kwargs,
    ) -> Program:
        """Apply an ``authoring`` operation to a stored program and store the result.

        The result must still satisfy the program shape invariants, so a
        failing operation leaves the stored program unchanged.

        Example:
            service.edit_program(pid, authoring.set_day_type, 1, DayOfWeek.SUNDAY, DayType.REST)
        """
        program = self._load(program_id)
        ensure_allowed(actor, "author", program)
        updated = operation(program, *args, **kwargs)
        authoring.validate_program_shape(updated)
        return self._commit(updated)

    def add_exercise(
        self,
        program_id: str,
        week_number: int,
        day_of_week: DayOfWeek,
        name: str,
        sets: int,
        reps: str,
        actor: User | None = None,
        **details,
    ) -> Program:
        return self.edit_program(
            program_id,
            authoring.add_exercise,
            week_number,
            day_of_week,
            name,
            sets,
            reps,
            actor=actor,
            id_factory=self.id_factory,
            **details,
        )

    def update_day_workout(
        self,
        program_id: str,
        week_number: int,
        day_of_week: DayOfWeek,
        day: DayWorkout,
        actor: User | None = None,
    ) -> Program:
        """Replace the planned content of one day.

        Status, client log and trainer review only change through logging,
        review and the unlock sweep, so *day* must carry the stored ones.

        Raises:
            NotFoundError: If the program, week or day slot does not exist.
            ValidationError: If *day* belongs to another slot or date, or
                breaks the rest-day / exercise-order invariants.
            StateError: If *day* changes the status, log or review.
        """
        program = self._load(program_id)
        ensure_allowed(actor, "author", program)
        _, current = authoring.locate_day(program, week_number, day_of_week)
        for field_name in ("status", "client_log", "trainer_review"):
            if getattr(day, field_name) != getattr(current, field_name):
                raise StateError(
                    f"{field_name} of {day_of_week.name} cannot be changed by an edit",
                    status=current.status,
                )
        if day.day_of_week != day_of_week or day.date != current.date:
            raise ValidationError(
                f"Day must stay in slot {day_of_week.name} dated {current.date.isoformat()}",
                field="day_of_week",
            )
        authoring.validate_day(day)
        return self._commit(authoring.replace_day(program, week_number, day))

    def copy_week(
        self,
        program_id: str,
        source_week_number: int,
        target_week_number: int,
        actor: User | None = None,
    ) -> Program:
        """Overwrite the target week with a fresh copy of the source week.

        The copy keeps the target week's dates. Any logs or reviews in
        the target week are discarded.
        """
        if source_week_number == target_week_number:
            raise ValidationError("Source and target week must differ", field="target_week_number")
        program = self._load(program_id)
        ensure_allowed(actor, "author", program)
        source = program.week(source_week_number)
        if source is None:
            raise NotFoundError("week", source_week_number)
        target = program.week(target_week_number)
        if target is None:
            raise NotFoundError("week", target_week_number)

        copied = copy_week(
            source,
            target_week_number,
            target.start_date,
            self.clock.today(),
            id_factory=self.id_factory,
        )
        logger.info(
            "Program %s: copied week %d into week %d",
            program_id,
            source_week_number,
            target_week_number,
        )
        return self._commit(authoring.replace_week(program, copied))

    # ------------------------------------------------------------------
    # Daily sweep
    # ------------------------------------------------------------------

    def unlock_todays_workouts(self, include_overdue: bool = False) -> int:
        """Unlock today's LOCKED days across all ACTIVE programs.

        Programs are loaded and written one at a time. A record that cannot
        be decoded is logged and skipped. Only programs that changed are
        written back, so a second run on the same day writes nothing.

        Returns:
            Number of days unlocked.
        """
        today = self.clock.today()
        total = 0
        for program_id in self.repository.program_ids():
            try:
                program = self.repository.get(program_id)
            except (ValidationError, CorruptRecordError) as exc:
                logger.error("Skipping unreadable program %s: %s", program_id, exc)
                continue
            if program is None or not program.is_active:
                continue
            updated, count = unlock_program(program, today, include_overdue)
            if count:
                self._commit(updated)
                total += count
                logger.info("Program %s: unlocked %d day(s)", program.id, count)
        logger.info("Unlock sweep for %s: %d day(s) unlocked", today.isoformat(), total)
        return total

    # ------------------------------------------------------------------
    # Client logging
    # ------------------------------------------------------------------

    def start_workout_session(
        self,
        program_id: str,
        week_number: int,
        day_of_week: DayOfWeek,
        actor: User | None = None,
    ) -> WorkoutSession:
        """Open a logging session for one day. Call ``initialize()`` on it next."""
        program = self._load(program_id)
        ensure_allowed(actor, "log", program)
        _, day = authoring.locate_day(program, week_number, day_of_week)
        return WorkoutSession(
            self, program, week_number, day_of_week, day, self.clock, actor=actor
        )

    def record_progress(
        self,
        program_id: str,
        week_number: int,
        day_of_week: DayOfWeek,
        log: ClientWorkoutLog,
        actor: User | None = None,
    ) -> Program:
        """Store a partial log; the day moves to IN_PROGRESS."""
        return self._apply_to_day(
            program_id,
            week_number,
            day_of_week,
            "log",
            actor,
            lambda day: record_progress(day, log),
        )

    def record_submission(
        self,
        program_id: str,
        week_number: int,
        day_of_week: DayOfWeek,
        log: ClientWorkoutLog,
        actor: User | None = None,
    ) -> Program:
        """Store the final log; the day moves to SUBMITTED."""
        program = self._apply_to_day(
            program_id,
            week_number,
            day_of_week,
            "log",
            actor,
            lambda day: record_submission(day, log),
        )
        logger.info(
            "Program %s: week %d %s submitted (%d/%d sets, %d min)",
            program_id,
            week_number,
            day_of_week.name,
            log.completed_sets,
            log.total_sets,
            log.duration_min,
        )
        return program

    # ------------------------------------------------------------------
    # Trainer review
    # ------------------------------------------------------------------

    def attach_review(
        self,
        program_id: str,
        week_number: int,
        day_of_week: DayOfWeek,
        rating: int,
        feedback: str,
        encouragement: str | None = None,
        adjustments_needed: str | None = None,
        next_steps: str | None = None,
        reviewer: User | None = None,
    ) -> Program:
        """Review a SUBMITTED day; it moves to REVIEWED.

        Raises:
            ValidationError: If *rating* is outside 1-5 or *feedback* is empty.
            StateError: If the day is not SUBMITTED.
        """
        if isinstance(rating, bool) or not isinstance(rating, int) or not (
            MIN_RATING <= rating <= MAX_RATING
        ):
            raise ValidationError(
                f"Rating must be {MIN_RATING}-{MAX_RATING}, got {rating!r}", field="rating"
            )
        if not feedback or not feedback.strip():
            raise ValidationError("Review feedback is required", field="feedback")

        review = TrainerReview(
            reviewed_at=self.clock.now(),
            rating=rating,
            feedback=feedback,
            encouragement=encouragement,
            adjustments_needed=adjustments_needed,
            next_steps=next_steps,
        )
        program = self._apply_to_day(
            program_id,
            week_number,
            day_of_week,
            "review",
            reviewer,
            lambda day: record_review(day, review),
        )
        logger.info(
            "Program %s: week %d %s reviewed (rating %d)",
            program_id,
            week_number,
            day_of_week.name,
            rating,
        )
        return program

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _load(self, program_id: str) -> Program:
        program = self.repository.get(program_id)
        if program is None:
            raise NotFoundError("program", program_id)
        return program

    def _commit(self, program: Program) -> Program:
        stamped = dataclasses.replace(program, updated_at=self.clock.now())
        self.repository.save(stamped)
        return stamped

    def _apply_to_day(
        self,
        program_id: str,
        week_number: int,
        day_of_week: DayOfWeek,
        action: str,
        actor: User | None,
        fn: Callable[[DayWorkout], DayWorkout],
    ) -> Program:
        program = self._load(program_id)
        ensure_allowed(actor, action, program)
        _, day = authoring.locate_day(program, week_number, day_of_week)
        return self._commit(authoring.replace_day(program, week_number, fn(day)))
