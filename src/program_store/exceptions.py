"""Custom exception hierarchy for the record stores."""

from __future__ import annotations


class StoreError(Exception):
    """Base exception for all program_store errors."""


class StoreIOError(StoreError):
    """Reading or writing the backing medium failed."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class CorruptRecordError(StoreError):
    """A stored record could not be decoded."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key
