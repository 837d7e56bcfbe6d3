"""In-process record store."""

from __future__ import annotations

import copy

from program_store.base import Record, RecordStore


class InMemoryStore(RecordStore):
    """Dict-backed store. Records are deep-copied on the way in and out."""

    def __init__(self) -> None:
        self._records: dict[str, Record] = {}

    def get(self, key: str) -> Record | None:
        record = self._records.get(key)
        return copy.deepcopy(record) if record is not None else None

    def put(self, key: str, record: Record) -> None:
        self._records[key] = copy.deepcopy(record)

    def list(self, prefix: str = "") -> list[Record]:
        return [copy.deepcopy(self._records[k]) for k in self.keys(prefix)]

    def keys(self, prefix: str = "") -> list[str]:
        return [k for k in sorted(self._records) if k.startswith(prefix)]

    def delete(self, key: str) -> bool:
        return self._records.pop(key, None) is not None

    def __len__(self) -> int:
        return len(self._records)
