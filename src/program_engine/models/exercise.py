"""Planned exercise prescription."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Exercise:
    """A single movement prescribed for a day.

    ``reps`` is free-form so trainers can write "8-12", "AMRAP" or "30s".
    ``weight`` is free-form as well ("60kg", "bodyweight").
    """

    id: str
    name: str
    sets: int
    reps: str
    order_index: int
    weight: str | None = None
    rest_seconds: int | None = None
    tempo: str | None = None
    description: str | None = None
    notes: str | None = None
