"""Authoritative validation of full documents against the original JSON Schema."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from jsonschema import (
    Draft4Validator,
    Draft6Validator,
    Draft7Validator,
    Draft201909Validator,
    Draft202012Validator,
)
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for
from referencing.exceptions import Unresolvable

from schemaforms import logger
from schemaforms.exceptions import DocumentValidationError, SchemaCompileError
from schemaforms.settings import get_settings
from schemaforms.typing.models import ValidationIssue

if TYPE_CHECKING:
    from collections.abc import Iterable

    from jsonschema.exceptions import ValidationError
    from jsonschema.protocols import Validator

DRAFT_VALIDATORS: dict[str, type[Validator]] = {
    "draft4": Draft4Validator,
    "draft6": Draft6Validator,
    "draft7": Draft7Validator,
    "draft2019-09": Draft201909Validator,
    "draft2020-12": Draft202012Validator,
}


def _escape_pointer_token(token: object) -> str:
    return str(token).replace("~", "~0").replace("/", "~1")


def json_pointer(parts: Iterable[object]) -> str:
    """Render path segments as a JSON pointer (`""` for the root)."""
    return "".join(f"/{_escape_pointer_token(part)}" for part in parts)


def _required_property(error: ValidationError) -> str | None:
    """Return the property a `required` error is about."""
    candidates = error.validator_value if isinstance(error.validator_value, list) else []
    for candidate in candidates:
        if error.message.startswith(f"{candidate!r} "):
            return str(candidate)
    return None


def _top_level_property(error: ValidationError) -> str | None:
    if error.absolute_path:
        return str(error.absolute_path[0])
    if error.validator == "required":
        return _required_property(error)
    return None


def to_issue(error: ValidationError) -> ValidationIssue:
    """Convert a `jsonschema` error into a validation issue.

    Args:
        error (ValidationError): Error yielded by the evaluator.

    Returns:
        ValidationIssue: Issue with instance and schema pointers.
    """
    return ValidationIssue(
        path=json_pointer(error.absolute_path),
        keyword=str(error.validator),
        message=error.message,
        schema_path="#" + json_pointer(error.absolute_schema_path),
        property=_top_level_property(error),
    )


class DocumentValidator:
    """Compiled validator bound to one literal JSON Schema."""

    def __init__(self, schema: dict[str, Any], validator: Validator) -> None:
        self._schema = schema
        self._validator = validator

    @property
    def schema(self) -> dict[str, Any]:
        """Return the literal schema this validator was compiled from."""
        return self._schema

    def validate(self, data: object) -> list[ValidationIssue]:
        """Evaluate `data` and collect every error.

        Args:
            data (object): Submitted document.

        Raises:
            SchemaCompileError: If a reference in the schema cannot be resolved.

        Returns:
            list[ValidationIssue]: Errors in evaluation order, empty when valid.
        """
        try:
            return [to_issue(error) for error in self._validator.iter_errors(data)]
        except Unresolvable as exc:
            raise SchemaCompileError(message="Unresolvable reference in JSON Schema", exc=exc) from exc

    def is_valid(self, data: object) -> bool:
        """Return whether `data` satisfies the schema."""
        return not self.validate(data)

    def check(self, data: object) -> None:
        """Validate `data` and raise on rejection.

        Args:
            data (object): Submitted document.

        Raises:
            DocumentValidationError: If the document violates the schema.
        """
        issues = self.validate(data)
        if issues:
            logger.info("Document rejected", extra={"issues": len(issues)})
            raise DocumentValidationError(issues=issues)


def compile_schema(schema: object, *, default_draft: str | None = None) -> DocumentValidator:
    """Compile a JSON Schema document.

    The draft comes from `$schema`, falling back to `default_draft` or the
    `DEFAULT_SCHEMA_DRAFT` setting. Format assertions are always enabled.

    Args:
        schema (object): Raw JSON Schema document.
        default_draft (str | None): Draft used when `$schema` is absent.

    Raises:
        SchemaCompileError: If the document is not a valid JSON Schema.

    Returns:
        DocumentValidator: Validator bound to a private copy of the schema.
    """
    if not isinstance(schema, Mapping):
        raise SchemaCompileError(message=f"JSON Schema must be an object, got {type(schema).__name__}")

    draft = default_draft or get_settings().default_schema_draft
    if draft not in DRAFT_VALIDATORS:
        raise SchemaCompileError(message=f"Unsupported schema draft '{draft}'")

    literal = copy.deepcopy(dict(schema))
    validator_cls = validator_for(literal, default=DRAFT_VALIDATORS[draft])
    try:
        validator_cls.check_schema(literal)
    except SchemaError as exc:
        logger.info("Schema compilation failed", extra={"reason": exc.message})
        raise SchemaCompileError(exc=exc) from exc

    validator = validator_cls(literal, format_checker=validator_cls.FORMAT_CHECKER)
    return DocumentValidator(literal, validator)


def validate_document(schema: object, data: object) -> list[ValidationIssue]:
    """Compile `schema` and validate `data` against it.

    Args:
        schema (object): Raw JSON Schema document.
        data (object): Submitted document.

    Returns:
        list[ValidationIssue]: Errors in evaluation order, empty when valid.
    """
    return compile_schema(schema).validate(data)
