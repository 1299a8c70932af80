from __future__ import annotations

import pytest
from pydantic import ValidationError

from schemaforms.exceptions import SchemaCompileError
from schemaforms.typing.models import (
    ExportBundle,
    FieldDescriptor,
    PropertySpec,
    SchemaView,
    StoredSchema,
    Submission,
)


def test_property_spec_reads_camel_case_constraints() -> None:
    spec = PropertySpec.from_value("code", {"type": "string", "minLength": 2, "maxLength": 4, "x-extra": 1})

    assert spec.min_length == 2
    assert spec.max_length == 4
    assert spec.declares_enum is False


def test_property_spec_non_object_value_is_empty() -> None:
    assert PropertySpec.from_value("flag", True) == PropertySpec()


def test_property_spec_rejects_mistyped_members() -> None:
    with pytest.raises(SchemaCompileError, match="Invalid definition for property 'age'"):
        PropertySpec.from_value("age", {"minimum": "18"})


def test_schema_view_required_names_and_raw_property() -> None:
    view = SchemaView.from_document({"properties": {"a": {"type": "string"}}, "required": ["a", "ghost"]})

    assert view.required_names == frozenset({"a", "ghost"})
    assert view.raw_property("a") == {"type": "string"}
    assert [name for name, _ in view.property_specs()] == ["a"]


def test_schema_view_rejects_non_object() -> None:
    with pytest.raises(SchemaCompileError):
        SchemaView.from_document("schema")


def test_field_descriptor_is_frozen() -> None:
    field = FieldDescriptor(name="a", kind="text", label="A")
    with pytest.raises(ValidationError):
        field.label = "B"


def test_records_use_wire_aliases() -> None:
    stored = StoredSchema.model_validate({"id": "s1", "name": "Demo", "schema": {"type": "object"}})
    submission = Submission(id="x", schema_id="s1", data={"a": 1})

    assert stored.json_schema == {"type": "object"}
    assert set(stored.model_dump(by_alias=True)) == {"id", "name", "schema", "createdAt"}
    assert set(submission.model_dump(by_alias=True)) == {"id", "schemaId", "data", "submittedAt"}


def test_export_bundle_payload_omits_absent_members() -> None:
    payload = ExportBundle(json_schema={"type": "object"}, form_data={"a": 1}).to_payload()

    assert set(payload) == {"schema", "formData", "exportedAt"}
