"""Clock capability injected into every date-sensitive operation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta


class Clock(ABC):
    """Source of "now" and "today".

    ``today()`` is a calendar date with no time-of-day component and is
    what every status and calendar comparison uses.
    """

    @abstractmethod
    def now(self) -> datetime:
        ...

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    """Wall-clock time in the local timezone."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """Manually driven clock for tests and replays.

    Usage:
        clock = FixedClock(datetime(2024, 1, 3, 9, 0))
        clock.advance(minutes=45)
    """

    def __init__(self, moment: datetime | date) -> None:
        self._moment = _as_datetime(moment)

    def now(self) -> datetime:
        return self._moment

    def set(self, moment: datetime | date) -> None:
        self._moment = _as_datetime(moment)

    def advance(self, **kwargs: float) -> None:
        """Move the clock forward by ``timedelta(**kwargs)``."""
        self._moment = self._moment + timedelta(**kwargs)


def _as_datetime(moment: datetime | date) -> datetime:
    if isinstance(moment, datetime):
        return moment
    return datetime(moment.year, moment.month, moment.day)
