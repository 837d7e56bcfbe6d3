"""Program repository over a key-value record store.

Programs are stored whole under ``program:<id>``. Every save replaces
the full record; there is no optimistic locking, so two writers on the
same program overwrite each other (last write wins).
"""

from __future__ import annotations

import logging

from program_engine.models.enums import ProgramStatus
from program_engine.models.program import Program
from program_engine.serialization.records import program_from_record, program_to_record
from program_store.base import RecordStore

logger = logging.getLogger(__name__)

KEY_PREFIX = "program:"


def program_key(program_id: str) -> str:
    return f"{KEY_PREFIX}{program_id}"


class ProgramRepository:
    """CRUD over Program records."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def get(self, program_id: str) -> Program | None:
        """Load a program, or None if no record exists."""
        record = self._store.get(program_key(program_id))
        if record is None:
            return None
        return program_from_record(record)

    def save(self, program: Program) -> None:
        """Store *program*, replacing any existing record."""
        self._store.put(program_key(program.id), program_to_record(program))
        logger.debug("Saved program %s", program.id)

    def delete(self, program_id: str) -> bool:
        return self._store.delete(program_key(program_id))

    def program_ids(self) -> list[str]:
        """Ids of every stored program, without reading the records."""
        return [key[len(KEY_PREFIX) :] for key in self._store.keys(KEY_PREFIX)]

    def list_all(self) -> list[Program]:
        return [program_from_record(r) for r in self._store.list(KEY_PREFIX)]

    def list_by_trainer(self, trainer_id: str) -> list[Program]:
        return [p for p in self.list_all() if p.trainer_id == trainer_id]

    def list_by_client(self, client_id: str) -> list[Program]:
        return [p for p in self.list_all() if p.client_id == client_id]

    def list_by_status(self, status: ProgramStatus) -> list[Program]:
        return [p for p in self.list_all() if p.status == status]
