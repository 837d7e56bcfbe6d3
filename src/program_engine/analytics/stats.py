"""Tabular progress statistics for dashboards and exports.

Builds pandas frames from a Program so callers can slice progress by
week, status or day type without walking the nested structure.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from program_engine.analytics.aggregator import percent
from program_engine.models.enums import RPE_NOT_RECORDED, DayType, WorkoutStatus
from program_engine.models.program import Program

DAY_FRAME_COLUMNS = [
    "week_number",
    "date",
    "day_of_week",
    "day_type",
    "status",
    "exercise_count",
    "planned_sets",
    "completed_sets",
    "duration_min",
    "client_rating",
    "trainer_rating",
]

_SUBMITTED_OR_LATER = (WorkoutStatus.SUBMITTED.name, WorkoutStatus.REVIEWED.name)


def day_frame(program: Program) -> pd.DataFrame:
    """One row per program day, enum columns rendered by name.

    Log-derived columns are NaN for days without a client log, and
    ``trainer_rating`` is NaN for days without a review.
    """
    rows = []
    for week, day in program.iter_days():
        log = day.client_log
        review = day.trainer_review
        rows.append(
            {
                "week_number": week.week_number,
                "date": pd.Timestamp(day.date),
                "day_of_week": day.day_of_week.name,
                "day_type": day.day_type.name,
                "status": day.status.name,
                "exercise_count": len(day.exercises),
                "planned_sets": sum(ex.sets for ex in day.exercises),
                "completed_sets": log.completed_sets if log else np.nan,
                "duration_min": log.duration_min if log else np.nan,
                "client_rating": log.rating if log and log.rating else np.nan,
                "trainer_rating": review.rating if review else np.nan,
            }
        )
    return pd.DataFrame(rows, columns=DAY_FRAME_COLUMNS)


def weekly_summary(program: Program) -> pd.DataFrame:
    """Per-week counts of scheduled, submitted and reviewed days.

    ``submitted`` counts days that reached SUBMITTED or REVIEWED.
    """
    frame = day_frame(program)
    columns = ["scheduled", "submitted", "reviewed", "completion_pct"]
    if frame.empty:
        return pd.DataFrame(columns=columns, index=pd.Index([], name="week_number"))

    scheduled = frame[frame["day_type"] != DayType.REST.name]
    week_numbers = sorted(frame["week_number"].unique())
    grouped = scheduled.groupby("week_number")

    summary = pd.DataFrame(index=pd.Index(week_numbers, name="week_number"))
    summary["scheduled"] = grouped.size().reindex(week_numbers, fill_value=0)
    summary["submitted"] = (
        grouped["status"].agg(lambda s: s.isin(_SUBMITTED_OR_LATER).sum())
        .reindex(week_numbers, fill_value=0)
    )
    summary["reviewed"] = (
        grouped["status"].agg(lambda s: (s == WorkoutStatus.REVIEWED.name).sum())
        .reindex(week_numbers, fill_value=0)
    )
    summary = summary.astype(int)
    summary["completion_pct"] = [
        percent(r, s) for r, s in zip(summary["reviewed"], summary["scheduled"])
    ]
    return summary[columns]


def average_ratings(program: Program) -> dict[str, float | None]:
    """Mean client rating, trainer rating and recorded RPE.

    Each value is None when nothing has been recorded. RPE of 0 means
    "not recorded" and is ignored.
    """
    client: list[float] = []
    trainer: list[float] = []
    rpe: list[float] = []
    for _, day in program.iter_days():
        if day.client_log is not None:
            if day.client_log.rating:
                client.append(float(day.client_log.rating))
            for ex_log in day.client_log.exercise_logs:
                rpe.extend(
                    float(s.rpe) for s in ex_log.actual_sets if s.rpe != RPE_NOT_RECORDED
                )
        if day.trainer_review is not None:
            trainer.append(float(day.trainer_review.rating))

    return {
        "client_rating": _mean_or_none(client),
        "trainer_rating": _mean_or_none(trainer),
        "rpe": _mean_or_none(rpe),
    }


def _mean_or_none(values: list[float]) -> float | None:
    if not values:
        return None
    return float(np.mean(np.array(values, dtype=np.float64)))
