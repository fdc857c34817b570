"""Record stores: whole-collection load and save of encoded records.

This is the persistence gateway every repository is built on.  A
collection is an ordered list of single-line records; ``save_all``
replaces the whole collection.  Swapping the flat files for another
store only needs a new RecordStore, not new repositories.
"""

from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from backoffice.domain.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class RecordStore(ABC):

    @abstractmethod
    def load_all(self, collection: str) -> list[str]:
        """Return every record of a collection; a missing one is empty."""

    @abstractmethod
    def save_all(self, collection: str, records: list[str]) -> None:
        """Replace a collection with ``records``."""


class FileRecordStore(RecordStore):
    """One ``<collection>.txt`` file per collection, one record per line."""

    def __init__(self, data_dir: Path, suffix: str = ".txt") -> None:
        self._data_dir = Path(data_dir)
        self._suffix = suffix

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, collection: str) -> Path:
        return self._data_dir / f"{collection}{self._suffix}"

    def load_all(self, collection: str) -> list[str]:
        path = self.path_for(collection)
        if not path.exists():
            return []
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"Cannot read {path}: {exc}") from exc
        records = [line for line in text.split("\n") if line]
        logger.debug("Loaded %d record(s) from %s", len(records), path)
        return records

    def save_all(self, collection: str, records: list[str]) -> None:
        for record in records:
            if "\n" in record:
                raise PersistenceError(f"Record for {collection} contains a line break")

        path = self.path_for(collection)
        content = "".join(f"{record}\n" for record in records)

        # Write to temp file then rename (atomic on POSIX)
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=self._data_dir, prefix=f".{collection}_", suffix=".tmp"
            )
        except OSError as exc:
            raise PersistenceError(f"Cannot write {path}: {exc}") from exc

        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
            os.replace(temp_path, path)
        except OSError as exc:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise PersistenceError(f"Cannot write {path}: {exc}") from exc
        logger.debug("Saved %d record(s) to %s", len(records), path)


class InMemoryRecordStore(RecordStore):
    """Dict-backed store for tests and embedding."""

    def __init__(self, collections: dict[str, list[str]] | None = None) -> None:
        self._collections: dict[str, list[str]] = {
            name: list(records) for name, records in (collections or {}).items()
        }

    def load_all(self, collection: str) -> list[str]:
        return list(self._collections.get(collection, []))

    def save_all(self, collection: str, records: list[str]) -> None:
        self._collections[collection] = list(records)
