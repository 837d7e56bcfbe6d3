"""Identifier generation.

Any zero-argument callable returning a unique string can be injected
wherever an ``IdFactory`` is accepted; uniqueness is the only contract.
"""

from __future__ import annotations

import uuid
from typing import Callable

IdFactory = Callable[[], str]


def new_id() -> str:
    """Return a random UUID4 string."""
    return str(uuid.uuid4())
