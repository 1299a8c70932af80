from __future__ import annotations

import json

import pytest

from schemaforms.exceptions import StoreError
from schemaforms.stores import InMemoryRepository, JsonFileRepository
from schemaforms.typing.models import StoredSchema, Submission


def _schema(schema_id: str, name: str = "Demo") -> StoredSchema:
    return StoredSchema(id=schema_id, name=name, json_schema={"type": "object"})


def test_in_memory_repository_preserves_insertion_order() -> None:
    store: InMemoryRepository[StoredSchema] = InMemoryRepository()
    store.put(_schema("b"))
    store.put(_schema("a"))
    store.put(_schema("b", name="Renamed"))

    assert [record.id for record in store.list()] == ["b", "a"]
    assert store.get("b").name == "Renamed"
    assert store.get("missing") is None
    assert len(store) == 2


def test_in_memory_repository_delete_reports_existence() -> None:
    store: InMemoryRepository[StoredSchema] = InMemoryRepository()
    store.put(_schema("a"))

    assert store.delete("a") is True
    assert store.delete("a") is False
    assert store.list() == []


def test_json_file_repository_starts_fresh_without_file(tmp_path) -> None:
    store = JsonFileRepository(tmp_path / "missing" / "schemas.json", StoredSchema)
    assert store.list() == []
    assert not store.path.exists()


def test_json_file_repository_persists_with_wire_names(tmp_path) -> None:
    path = tmp_path / "data" / "submissions.json"
    store = JsonFileRepository(path, Submission)
    store.put(Submission(id="s1", schema_id="schema-1", data={"age": 30}))

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload[0]["schemaId"] == "schema-1"
    assert payload[0]["data"] == {"age": 30}
    assert "submittedAt" in payload[0]

    reloaded = JsonFileRepository(path, Submission)
    assert reloaded.list() == store.list()


def test_json_file_repository_delete_persists(tmp_path) -> None:
    path = tmp_path / "schemas.json"
    store = JsonFileRepository(path, StoredSchema)
    store.put(_schema("a"))
    store.put(_schema("b"))

    assert store.delete("a") is True

    assert [record.id for record in JsonFileRepository(path, StoredSchema).list()] == ["b"]


def test_json_file_repository_rejects_corrupt_file(tmp_path) -> None:
    path = tmp_path / "schemas.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreError, match="Cannot load store file"):
        JsonFileRepository(path, StoredSchema)


def test_json_file_repository_keeps_memory_state_when_save_fails(tmp_path, mocker) -> None:
    store = JsonFileRepository(tmp_path / "schemas.json", StoredSchema)
    mocker.patch("pathlib.Path.write_text", side_effect=OSError("disk full"))

    store.put(_schema("a"))

    assert store.get("a") is not None
