"""Schema and submission stores."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Protocol, cast

from pydantic import BaseModel, TypeAdapter, ValidationError

from schemaforms import logger
from schemaforms.exceptions import StoreError

if TYPE_CHECKING:
    from pathlib import Path


class _Identified(Protocol):
    @property
    def id(self) -> str: ...


def _record_id(record: BaseModel) -> str:
    return cast("_Identified", record).id


class InMemoryRepository[T: BaseModel]:
    """Process-local store preserving insertion order."""

    def __init__(self) -> None:
        self._records: dict[str, T] = {}

    def get(self, record_id: str) -> T | None:
        """Return one record, or None when unknown."""
        return self._records.get(record_id)

    def list(self) -> list[T]:
        """Return all records in insertion order."""
        return [*self._records.values()]

    def put(self, record: T) -> None:
        """Insert or replace a record."""
        self._records[_record_id(record)] = record

    def delete(self, record_id: str) -> bool:
        """Remove a record, returning whether it existed."""
        return self._records.pop(record_id, None) is not None

    def __len__(self) -> int:
        return len(self._records)


class JsonFileRepository[T: BaseModel](InMemoryRepository[T]):
    """Store mirrored to a JSON array file after every mutation.

    Saving is best effort: a failed write is logged and the in-memory state stays
    authoritative for the running process.
    """

    def __init__(self, path: Path, model: type[T]) -> None:
        super().__init__()
        self.path = path
        self._adapter: TypeAdapter[list[T]] = TypeAdapter(list[model])
        self._load()

    def put(self, record: T) -> None:
        """Insert or replace a record, then persist the store."""
        super().put(record)
        self._save()

    def delete(self, record_id: str) -> bool:
        """Remove a record, then persist the store when it existed."""
        removed = super().delete(record_id)
        if removed:
            self._save()
        return removed

    def _load(self) -> None:
        """Load records from disk.

        Raises:
            StoreError: If the file exists but cannot be read or parsed.
        """
        if not self.path.is_file():
            logger.info("No existing store file found, starting fresh", extra={"path": str(self.path)})
            return
        try:
            records = self._adapter.validate_json(self.path.read_bytes())
        except (OSError, ValidationError) as exc:
            raise StoreError(message=f"Cannot load store file {self.path}: {exc}") from exc

        for record in records:
            self._records[_record_id(record)] = record
        logger.info("Loaded store", extra={"path": str(self.path), "count": len(records)})

    def _save(self) -> None:
        payload = [record.model_dump(mode="json", by_alias=True) for record in self._records.values()]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError:
            logger.exception("Failed to save store", extra={"path": str(self.path)})
