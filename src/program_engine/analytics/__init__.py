"""Completion aggregates and progress statistics."""

from program_engine.analytics.aggregator import (
    completion_percentage,
    current_week,
    pending_reviews,
    todays_workout,
    week_progress,
)
from program_engine.analytics.stats import average_ratings, day_frame, weekly_summary

__all__ = [
    "average_ratings",
    "completion_percentage",
    "current_week",
    "day_frame",
    "pending_reviews",
    "todays_workout",
    "week_progress",
    "weekly_summary",
]
