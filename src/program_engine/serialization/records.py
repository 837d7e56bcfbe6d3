"""Program <-> JSON-compatible record conversion.

Records are plain dicts of str/int/None/list values: dates and
datetimes as ISO strings, enums by member name. ``from_record`` inverts
``to_record`` exactly. ``ExerciseLog.completed`` is written for readers
of the raw record but recomputed from the sets on load.

All functions are pure (no I/O).
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from program_engine.exceptions import ValidationError
from program_engine.models.enums import (
    RPE_NOT_RECORDED,
    DayOfWeek,
    DayType,
    ProgramStatus,
    WorkoutStatus,
)
from program_engine.models.exercise import Exercise
from program_engine.models.program import DayWorkout, Program, Week
from program_engine.models.workout_log import (
    ClientWorkoutLog,
    ExerciseLog,
    SetLog,
    TrainerReview,
)

RECORD_VERSION = 1


def program_to_record(program: Program) -> dict[str, Any]:
    """Convert a Program to a JSON-compatible dict."""
    return {
        "version": RECORD_VERSION,
        "id": program.id,
        "trainer_id": program.trainer_id,
        "client_id": program.client_id,
        "title": program.title,
        "description": program.description,
        "start_date": program.start_date.isoformat(),
        "duration_weeks": program.duration_weeks,
        "status": program.status.name,
        "weeks": [_week_to_record(w) for w in program.weeks],
        "created_at": program.created_at.isoformat(),
        "updated_at": program.updated_at.isoformat(),
    }


def program_from_record(record: dict[str, Any]) -> Program:
    """Rebuild a Program from a dict produced by :func:`program_to_record`.

    Raises:
        ValidationError: If a required key is missing or a value is malformed.
    """
    try:
        return Program(
            id=record["id"],
            trainer_id=record["trainer_id"],
            client_id=record["client_id"],
            title=record["title"],
            description=record.get("description", ""),
            start_date=date.fromisoformat(record["start_date"]),
            duration_weeks=int(record["duration_weeks"]),
            status=_member(ProgramStatus, record["status"]),
            weeks=tuple(_week_from_record(w) for w in record["weeks"]),
            created_at=datetime.fromisoformat(record["created_at"]),
            updated_at=datetime.fromisoformat(record["updated_at"]),
        )
    except KeyError as exc:
        raise ValidationError(
            f"Malformed program record: missing {exc}", field=str(exc.args[0])
        ) from exc
    except (AttributeError, TypeError, ValueError) as exc:
        raise ValidationError(f"Malformed program record: {exc}") from exc


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _member(enum_cls, name: str):
    """Look up an enum member by name; unknown names are malformed, not missing."""
    try:
        return enum_cls[name]
    except KeyError:
        raise ValueError(f"unknown {enum_cls.__name__} {name!r}") from None


def _week_to_record(week: Week) -> dict[str, Any]:
    return {
        "week_number": week.week_number,
        "start_date": week.start_date.isoformat(),
        "end_date": week.end_date.isoformat(),
        "days": [_day_to_record(d) for d in week.days],
        "notes": week.notes,
        "copied_from_week": week.copied_from_week,
    }


def _week_from_record(data: dict[str, Any]) -> Week:
    return Week(
        week_number=int(data["week_number"]),
        start_date=date.fromisoformat(data["start_date"]),
        end_date=date.fromisoformat(data["end_date"]),
        days=tuple(_day_from_record(d) for d in data["days"]),
        notes=data.get("notes"),
        copied_from_week=data.get("copied_from_week"),
    )


def _day_to_record(day: DayWorkout) -> dict[str, Any]:
    return {
        "day_of_week": day.day_of_week.name,
        "date": day.date.isoformat(),
        "day_type": day.day_type.name,
        "status": day.status.name,
        "exercises": [_exercise_to_record(ex) for ex in day.exercises],
        "notes": day.notes,
        "client_log": _log_to_record(day.client_log) if day.client_log else None,
        "trainer_review": (
            _review_to_record(day.trainer_review) if day.trainer_review else None
        ),
    }


def _day_from_record(data: dict[str, Any]) -> DayWorkout:
    log = data.get("client_log")
    review = data.get("trainer_review")
    return DayWorkout(
        day_of_week=_member(DayOfWeek, data["day_of_week"]),
        date=date.fromisoformat(data["date"]),
        day_type=_member(DayType, data["day_type"]),
        status=_member(WorkoutStatus, data["status"]),
        exercises=tuple(_exercise_from_record(ex) for ex in data.get("exercises", [])),
        notes=data.get("notes"),
        client_log=_log_from_record(log) if log else None,
        trainer_review=_review_from_record(review) if review else None,
    )


def _exercise_to_record(ex: Exercise) -> dict[str, Any]:
    return {
        "id": ex.id,
        "name": ex.name,
        "sets": ex.sets,
        "reps": ex.reps,
        "order_index": ex.order_index,
        "weight": ex.weight,
        "rest_seconds": ex.rest_seconds,
        "tempo": ex.tempo,
        "description": ex.description,
        "notes": ex.notes,
    }


def _exercise_from_record(data: dict[str, Any]) -> Exercise:
    return Exercise(
        id=data["id"],
        name=data["name"],
        sets=int(data["sets"]),
        reps=str(data["reps"]),
        order_index=int(data["order_index"]),
        weight=data.get("weight"),
        rest_seconds=data.get("rest_seconds"),
        tempo=data.get("tempo"),
        description=data.get("description"),
        notes=data.get("notes"),
    )


def _log_to_record(log: ClientWorkoutLog) -> dict[str, Any]:
    return {
        "logged_at": log.logged_at.isoformat(),
        "exercise_logs": [
            {
                "exercise_id": ex_log.exercise_id,
                "completed": ex_log.completed,
                "actual_sets": [
                    {
                        "set_number": s.set_number,
                        "actual_reps": s.actual_reps,
                        "actual_weight": s.actual_weight,
                        "rpe": s.rpe,
                        "completed": s.completed,
                    }
                    for s in ex_log.actual_sets
                ],
                "notes": ex_log.notes,
            }
            for ex_log in log.exercise_logs
        ],
        "duration_min": log.duration_min,
        "overall_notes": log.overall_notes,
        "rating": log.rating,
    }


def _log_from_record(data: dict[str, Any]) -> ClientWorkoutLog:
    return ClientWorkoutLog(
        logged_at=datetime.fromisoformat(data["logged_at"]),
        exercise_logs=tuple(
            ExerciseLog(
                exercise_id=ex_log["exercise_id"],
                actual_sets=tuple(
                    SetLog(
                        set_number=int(s["set_number"]),
                        actual_reps=int(s.get("actual_reps") or 0),
                        actual_weight=s.get("actual_weight") or "",
                        rpe=int(s.get("rpe") or RPE_NOT_RECORDED),
                        completed=bool(s.get("completed", False)),
                    )
                    for s in ex_log.get("actual_sets", [])
                ),
                notes=ex_log.get("notes", ""),
            )
            for ex_log in data.get("exercise_logs", [])
        ),
        duration_min=int(data.get("duration_min", 0)),
        overall_notes=data.get("overall_notes", ""),
        rating=data.get("rating"),
    )


def _review_to_record(review: TrainerReview) -> dict[str, Any]:
    return {
        "reviewed_at": review.reviewed_at.isoformat(),
        "rating": review.rating,
        "feedback": review.feedback,
        "encouragement": review.encouragement,
        "adjustments_needed": review.adjustments_needed,
        "next_steps": review.next_steps,
    }


def _review_from_record(data: dict[str, Any]) -> TrainerReview:
    return TrainerReview(
        reviewed_at=datetime.fromisoformat(data["reviewed_at"]),
        rating=int(data["rating"]),
        feedback=data["feedback"],
        encouragement=data.get("encouragement"),
        adjustments_needed=data.get("adjustments_needed"),
        next_steps=data.get("next_steps"),
    )
