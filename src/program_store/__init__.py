"""Key-value record stores. All persistence I/O lives here."""

from program_store.base import Record, RecordStore
from program_store.exceptions import CorruptRecordError, StoreError, StoreIOError
from program_store.json_file import JsonFileStore
from program_store.memory import InMemoryStore

__all__ = [
    "CorruptRecordError",
    "InMemoryStore",
    "JsonFileStore",
    "Record",
    "RecordStore",
    "StoreError",
    "StoreIOError",
]
