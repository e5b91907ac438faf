"""Shared file handling for the JSON-backed repositories.

Each collection is one JSON array on disk. Every call re-reads the file
and writes it back whole, so concurrent writers race last-write-wins.
"""

from __future__ import annotations

import json
import time
from pathlib import Path

from wms.domain.exceptions import StorageError


class JsonCollection:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def load(self) -> list[dict]:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageError(f"Cannot read {self._file_path.name}: {exc}") from exc
        if not isinstance(records, list):
            raise StorageError(f"{self._file_path.name} does not hold a JSON array")
        return records

    def persist(self, records: list[dict]) -> None:
        # Write to a sibling file first so a failed write never truncates
        # the collection.
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        try:
            tmp_path.write_text(
                json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
            )
            tmp_path.replace(self._file_path)
        except OSError as exc:
            raise StorageError(f"Cannot write {self._file_path.name}: {exc}") from exc

    def upsert(self, record: dict, key: str = "id") -> None:
        records = self.load()
        for i, raw in enumerate(records):
            if raw[key] == record[key]:
                records[i] = record
                break
        else:
            records.append(record)
        self.persist(records)

    def remove(self, value: str, key: str = "id") -> bool:
        records = self.load()
        kept = [raw for raw in records if raw[key] != value]
        if len(kept) == len(records):
            return False
        self.persist(kept)
        return True

    def _ensure_file(self) -> None:
        if self._file_path.exists():
            return
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot create {self._file_path}: {exc}") from exc


def timestamp_id(prefix: str, taken: set[str]) -> str:
    """``<prefix>-<epoch millis>``, bumped past any id already in use."""
    stamp = int(time.time() * 1000)
    while f"{prefix}-{stamp}" in taken:
        stamp += 1
    return f"{prefix}-{stamp}"
