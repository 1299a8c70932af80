"""Export/import bundles and JSON document loading."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from schemaforms import logger
from schemaforms.exceptions import FieldValidationError, MalformedDocumentError, MalformedImportError
from schemaforms.field_mapper import map_schema_to_fields
from schemaforms.field_validator import validate_field
from schemaforms.typing.models import ExportBundle

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from schemaforms.form_session import FormSession
    from schemaforms.service import FormService
    from schemaforms.typing.models import StoredSchema, Submission

DEFAULT_IMPORT_NAME = "Imported Form"
REQUIRED_IMPORT_KEYS = ("schema", "formData")


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """Build a JSON object, refusing repeated keys.

    Args:
        pairs (list[tuple[str, Any]]): Decoded key/value pairs.

    Raises:
        MalformedDocumentError: If a key appears twice.

    Returns:
        dict[str, Any]: Decoded object.
    """
    document: dict[str, Any] = {}
    for key, value in pairs:
        if key in document:
            raise MalformedDocumentError(message=f"Duplicate key {key!r} in JSON object")
        document[key] = value
    return document


def loads_json(content: str | bytes) -> Any:
    """Parse a JSON document, rejecting objects with duplicate keys.

    Args:
        content (str | bytes): Raw JSON text.

    Raises:
        MalformedDocumentError: If the text is not valid JSON.

    Returns:
        Any: Decoded document.
    """
    try:
        return json.loads(content, object_pairs_hook=_reject_duplicate_keys)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise MalformedDocumentError(message="Invalid JSON document", exc=exc) from exc


def read_json_file(path: Path) -> Any:
    """Read and parse a JSON file.

    Args:
        path (Path): File path.

    Raises:
        MalformedDocumentError: If the file cannot be read or parsed.

    Returns:
        Any: Decoded document.
    """
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise MalformedDocumentError(message=f"Cannot read {path}", exc=exc) from exc
    return loads_json(content)


def build_form_export(
    schema: Mapping[str, Any],
    form_data: Mapping[str, Any],
    *,
    schema_id: str | None = None,
) -> ExportBundle:
    """Bundle a schema with in-progress form values."""
    return ExportBundle(json_schema=dict(schema), schema_id=schema_id, form_data=dict(form_data))


def build_submissions_export(stored: StoredSchema, submissions: Iterable[Submission]) -> ExportBundle:
    """Bundle a stored schema with its accepted submissions."""
    return ExportBundle(
        json_schema=stored.json_schema,
        schema_name=stored.name,
        submissions=list(submissions),
    )


def parse_import_bundle(payload: object) -> ExportBundle:
    """Validate an import payload.

    Args:
        payload (object): Decoded export file.

    Raises:
        MalformedImportError: If the payload is not an object, misses `schema` or
            `formData`, or has members of the wrong shape.

    Returns:
        ExportBundle: Parsed bundle.
    """
    if not isinstance(payload, Mapping):
        raise MalformedImportError()

    missing = tuple(key for key in REQUIRED_IMPORT_KEYS if payload.get(key) is None)
    if missing:
        raise MalformedImportError(missing_keys=missing)

    try:
        return ExportBundle.model_validate(dict(payload))
    except ValidationError as exc:
        message = f"Invalid export file format: {exc.error_count()} invalid member(s)"
        raise MalformedImportError(message=message) from exc


def _check_form_data(bundle: ExportBundle) -> None:
    """Raise for the first restored value its field validator rejects."""
    fields = {field.name: field for field in map_schema_to_fields(bundle.json_schema)}
    for key, value in (bundle.form_data or {}).items():
        field = fields.get(key)
        message = validate_field(value, field, bundle.json_schema) if field is not None else None
        if message:
            raise FieldValidationError(field=key, message=message)


def import_bundle(
    service: FormService,
    payload: object,
    *,
    name: str | None = None,
    strict: bool = False,
) -> FormSession:
    """Register a bundle's schema and restore its form values into a new session.

    Values for names the schema does not declare are ignored.

    Args:
        service (FormService): Service owning the stores.
        payload (object): Decoded export file.
        name (str | None): Schema name, defaults to the bundle's `schemaName`.
        strict (bool): Refuse the import when a restored value fails its field check.

    Raises:
        FieldValidationError: In strict mode, for the first rejected value. Nothing
            is registered in that case.

    Returns:
        FormSession: Session pre-filled with the bundle's form data.
    """
    bundle = parse_import_bundle(payload)
    if strict:
        _check_form_data(bundle)
    stored = service.create_schema(name or bundle.schema_name or DEFAULT_IMPORT_NAME, bundle.json_schema)
    session = service.open_session(stored.id)

    known = {field.name for field in session.fields}
    for key, value in (bundle.form_data or {}).items():
        if key in known:
            session.on_field_change(key, value)
        else:
            logger.debug("Ignoring imported value for unknown field", extra={"field": key})
    return session
