"""Abstract key-value record store."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

Record = dict[str, Any]


class RecordStore(ABC):
    """Whole-record key-value store.

    ``put`` replaces the full record under a key; there are no partial
    updates and no transactions spanning several keys. Returned records
    are independent copies: mutating them never changes stored state.
    """

    @abstractmethod
    def get(self, key: str) -> Record | None:
        """Return the record stored under *key*, or None."""
        ...

    @abstractmethod
    def put(self, key: str, record: Record) -> None:
        """Store *record* under *key*, replacing any previous record."""
        ...

    @abstractmethod
    def list(self, prefix: str = "") -> list[Record]:
        """Return every record whose key starts with *prefix*, ordered by key."""
        ...

    @abstractmethod
    def keys(self, prefix: str = "") -> list[str]:
        """Return every key starting with *prefix*, in sorted order."""
        ...

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove *key*. Returns False if nothing was stored under it."""
        ...
