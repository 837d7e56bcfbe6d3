"""Directory-of-JSON-files record store.

Each key is one file, named by the percent-encoded key. Writes go to a
temporary file that is then renamed over the target, so a reader never
sees a half-written record.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from urllib.parse import quote, unquote

from program_store.base import Record, RecordStore
from program_store.exceptions import CorruptRecordError, StoreIOError

logger = logging.getLogger(__name__)

_SUFFIX = ".json"


class JsonFileStore(RecordStore):
    """Record store persisting one JSON document per key under *root*."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def get(self, key: str) -> Record | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return self._read(path, key)

    def put(self, key: str, record: Record) -> None:
        path = self._path_for(key)
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self._root, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(record, f, indent=2, sort_keys=True)
            os.replace(tmp_name, path)
        except OSError as exc:
            raise StoreIOError(f"Failed to write {key}: {exc}", key=key) from exc
        except TypeError as exc:
            os.unlink(tmp_name)
            raise StoreIOError(f"Record for {key} is not JSON-serializable: {exc}", key=key) from exc
        logger.debug("Wrote %s to %s", key, path)

    def list(self, prefix: str = "") -> list[Record]:
        return [self._read(path, key) for key, path in self._keyed_paths(prefix)]

    def keys(self, prefix: str = "") -> list[str]:
        return [key for key, _ in self._keyed_paths(prefix)]

    def delete(self, key: str) -> bool:
        path = self._path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StoreIOError(f"Failed to delete {key}: {exc}", key=key) from exc
        logger.debug("Deleted %s", key)
        return True

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _path_for(self, key: str) -> Path:
        return self._root / f"{quote(key, safe='')}{_SUFFIX}"

    def _keyed_paths(self, prefix: str) -> list[tuple[str, Path]]:
        keyed = (
            (unquote(path.name[: -len(_SUFFIX)]), path)
            for path in self._root.glob(f"*{_SUFFIX}")
        )
        return sorted((key, path) for key, path in keyed if key.startswith(prefix))

    def _read(self, path: Path, key: str) -> Record:
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as exc:
            raise CorruptRecordError(f"Record {key} is not valid JSON: {exc}", key=key) from exc
        except OSError as exc:
            raise StoreIOError(f"Failed to read {key}: {exc}", key=key) from exc
