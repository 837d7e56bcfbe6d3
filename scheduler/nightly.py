"""Daily unlock sweep: opens today's workouts in every active program.

Usage:
    python -m scheduler.nightly --once                     # single run (for cron)
    python -m scheduler.nightly --once --date 2024-01-03   # replay a specific day
    python -m scheduler.nightly --daemon                   # APScheduler loop
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from program_engine.clock import Clock, FixedClock, SystemClock
from program_engine.exceptions import ProgramEngineError
from program_engine.service import ProgramService
from program_store import JsonFileStore, StoreError

from scheduler.config import (
    INCLUDE_OVERDUE,
    LOG_LEVEL,
    STORE_DIR,
    SWEEP_HOUR,
    SWEEP_MINUTE,
)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def build_service(clock: Clock | None = None) -> ProgramService:
    """ProgramService over the configured JSON store."""
    return ProgramService(JsonFileStore(STORE_DIR), clock=clock or SystemClock())


def nightly_job(
    service: ProgramService | None = None, include_overdue: bool = INCLUDE_OVERDUE
) -> int | None:
    """Execute one sweep. Returns the number of unlocked days, or None on failure."""
    logger.info("Starting unlock sweep")
    try:
        service = service or build_service()
        unlocked = service.unlock_todays_workouts(include_overdue=include_overdue)
    except (StoreError, ProgramEngineError) as exc:
        logger.error("Unlock sweep failed: %s", exc)
        return None
    logger.info("Unlock sweep complete")
    return unlocked


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Program scheduler daily unlock sweep")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--once", action="store_true", help="Run once and exit")
    group.add_argument("--daemon", action="store_true", help="Run as APScheduler daemon")
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        help="Treat this ISO date as today (only with --once)",
    )
    parser.add_argument(
        "--include-overdue",
        action="store_true",
        default=INCLUDE_OVERDUE,
        help="Also unlock LOCKED days dated before today",
    )
    args = parser.parse_args(argv)

    if args.once:
        clock = FixedClock(args.date) if args.date else None
        unlocked = nightly_job(build_service(clock), include_overdue=args.include_overdue)
        return 0 if unlocked is not None else 1

    if args.date:
        parser.error("--date can only be used with --once")

    from apscheduler.schedulers.blocking import BlockingScheduler

    scheduler = BlockingScheduler()
    scheduler.add_job(
        nightly_job,
        "cron",
        hour=SWEEP_HOUR,
        minute=SWEEP_MINUTE,
        kwargs={"include_overdue": args.include_overdue},
        id="unlock_sweep",
    )
    logger.info(
        "Scheduler started, unlock sweep daily at %02d:%02d",
        SWEEP_HOUR,
        SWEEP_MINUTE,
    )
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Scheduler stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
