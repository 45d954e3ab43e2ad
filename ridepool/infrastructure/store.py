"""
Ridepool persistent store. Named collections of flat records.

load_all never raises: a missing or corrupt collection reads as [].
commit writes several collections in one call; JsonFileStore does it with a
single atomic file replace, so readers never see one collection updated
without the other.
"""

import copy
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the underlying storage cannot be written."""


class Store(Protocol):
    """Protocolo de almacenamiento: colecciones de registros (list[dict])."""

    def load_all(self, collection: str) -> list[dict]:
        ...

    def save_all(self, collection: str, records: list[dict]) -> None:
        ...

    def commit(self, changes: dict[str, list[dict]]) -> None:
        """Write every collection in changes, all or nothing."""
        ...


class InMemoryStore:
    """
    Volatile store; resets when the process restarts.
    Records are copied in and out so callers never share state with the store.
    """

    def __init__(self, initial: dict[str, list[dict]] | None = None):
        self._collections: dict[str, list[dict]] = copy.deepcopy(initial or {})

    def load_all(self, collection: str) -> list[dict]:
        return copy.deepcopy(self._collections.get(collection, []))

    def save_all(self, collection: str, records: list[dict]) -> None:
        self.commit({collection: records})

    def commit(self, changes: dict[str, list[dict]]) -> None:
        staged = {name: copy.deepcopy(list(records)) for name, records in changes.items()}
        self._collections.update(staged)


class JsonFileStore:
    """One JSON document: {collection_name: [record, ...], ...}."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        # commit lee, fusiona y reescribe el documento completo.
        self._lock = threading.Lock()

    def _read_document(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                doc = json.load(f)
        except (OSError, ValueError):
            logger.warning("Store file %s unreadable; treating as empty", self.path)
            return {}
        if not isinstance(doc, dict):
            logger.warning("Store file %s has unexpected shape; treating as empty", self.path)
            return {}
        return doc

    def load_all(self, collection: str) -> list[dict]:
        records = self._read_document().get(collection)
        if not isinstance(records, list):
            if records is not None:
                logger.warning("Collection %r in %s is not a list; treating as empty", collection, self.path)
            return []
        return [r for r in records if isinstance(r, dict)]

    def save_all(self, collection: str, records: list[dict]) -> None:
        self.commit({collection: records})

    def commit(self, changes: dict[str, list[dict]]) -> None:
        with self._lock:
            self._write(changes)

    def _write(self, changes: dict[str, list[dict]]) -> None:
        doc = self._read_document()
        doc.update({name: list(records) for name, records in changes.items()})
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise StoreError(f"Could not write {self.path}: {e}") from e
