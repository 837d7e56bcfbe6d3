"""Environment-variable-based configuration for the daily unlock sweep."""

from __future__ import annotations

import os
from pathlib import Path

STORE_DIR: Path = Path(
    os.environ.get("PROGRAM_STORE_DIR", "~/.program_scheduler/store")
).expanduser()
SWEEP_HOUR: int = int(os.environ.get("SCHEDULER_HOUR", "0"))
SWEEP_MINUTE: int = int(os.environ.get("SCHEDULER_MINUTE", "5"))
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
INCLUDE_OVERDUE: bool = os.environ.get("UNLOCK_INCLUDE_OVERDUE", "").lower() in ("1", "true", "yes")
