"""Form session state machine."""

from __future__ import annotations

import copy
import time
from typing import TYPE_CHECKING, Any

from schemaforms import logger
from schemaforms.bundle import build_form_export
from schemaforms.exceptions import DocumentValidationError, SubmissionInProgressError
from schemaforms.field_mapper import map_schema_to_fields
from schemaforms.field_validator import validate_field, validate_fields
from schemaforms.processing import normalize_field_value
from schemaforms.settings import Settings, get_settings
from schemaforms.typing.enums import FormState
from schemaforms.typing.models import ExportBundle, FieldDescriptor, FieldError, Submission, ValidationIssue

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from schemaforms.typing.protocol import SubmissionGate

_MISSING = object()


class FormSession:
    """Holds the values and errors of one form bound to one schema.

    Field changes are validated one at a time with the lenient field validator.
    A submit validates every field, then hands a snapshot of the values to the
    gate, whose verdict is authoritative.
    """

    def __init__(
        self,
        schema_id: str,
        schema: Mapping[str, Any],
        gate: SubmissionGate,
        *,
        settings: Settings | None = None,
        clock: Callable[[], float] = time.monotonic,
        coerce_inputs: bool = False,
    ) -> None:
        self._gate = gate
        self._clock = clock
        self._coerce_inputs = coerce_inputs
        self._display_window = (settings or get_settings()).submitted_display_seconds
        self._pending = False
        self.schema_id = schema_id
        self.load_schema(schema)

    def load_schema(self, schema: Mapping[str, Any], *, schema_id: str | None = None) -> None:
        """Switch to another schema, replacing fields and discarding all values.

        Args:
            schema (Mapping[str, Any]): New JSON Schema document.
            schema_id (str | None): New schema id, when it changes too.

        Raises:
            SubmissionInProgressError: If a submission is still awaiting its verdict.
        """
        if self._pending:
            raise SubmissionInProgressError(schema_id=self.schema_id)
        fields = map_schema_to_fields(schema)
        if schema_id is not None:
            self.schema_id = schema_id
        self._schema = schema
        self._fields = tuple(fields)
        self._fields_by_name = {field.name: field for field in fields}
        self._values: dict[str, Any] = {}
        self._errors: dict[str, str] = {}
        self._document_errors: list[ValidationIssue] = []
        self._submitted_at: float | None = None
        self._state = FormState.EMPTY

    @property
    def schema(self) -> Mapping[str, Any]:
        """Return the original schema."""
        return self._schema

    @property
    def fields(self) -> list[FieldDescriptor]:
        """Return field descriptors in display order."""
        return list(self._fields)

    @property
    def values(self) -> dict[str, Any]:
        """Return a copy of the current values."""
        return dict(self._values)

    @property
    def errors(self) -> dict[str, str]:
        """Return a copy of the current field errors."""
        return dict(self._errors)

    @property
    def document_errors(self) -> list[ValidationIssue]:
        """Return the issues of the last rejected submission."""
        return list(self._document_errors)

    @property
    def is_submitting(self) -> bool:
        """Return whether a submission is awaiting its verdict."""
        return self._pending

    @property
    def state(self) -> FormState:
        """Return the current state, reverting an expired `SUBMITTED` to `EDITING`."""
        if (
            self._state is FormState.SUBMITTED
            and self._submitted_at is not None
            and self._clock() - self._submitted_at >= self._display_window
        ):
            self._state = FormState.EDITING
            self._submitted_at = None
        return self._state

    def field_errors(self) -> list[FieldError]:
        """Return current field errors in display order."""
        names = [field.name for field in self._fields if field.name in self._errors]
        names += [name for name in self._errors if name not in self._fields_by_name]
        return [FieldError(field=name, message=self._errors[name]) for name in names]

    def on_field_change(self, name: str, value: Any) -> str | None:
        """Store a new value and re-validate that field only.

        Args:
            name (str): Field name.
            value (Any): New raw value.

        Returns:
            str | None: The field's new error message, if any.
        """
        field = self._fields_by_name.get(name)
        if field is not None and self._coerce_inputs:
            value = normalize_field_value(value, field)

        self._values[name] = value
        self._errors.pop(name, None)
        self._document_errors = [issue for issue in self._document_errors if issue.property != name]
        if not self._pending:
            self._state = FormState.EDITING
            self._submitted_at = None

        if field is None:
            return None
        message = validate_field(value, field, self._schema)
        if message:
            self._errors[name] = message
        return message

    def validate_all(self) -> dict[str, str]:
        """Validate every field and replace the stored errors.

        Returns:
            dict[str, str]: Messages keyed by field name.
        """
        self._errors = validate_fields(self._values, self._fields, self._schema)
        return dict(self._errors)

    async def on_submit(self) -> Submission | None:
        """Validate all fields and, when they pass, submit a snapshot to the gate.

        Raises:
            SubmissionInProgressError: If a previous submission is still pending.

        Returns:
            Submission | None: The accepted submission, or None when rejected.
        """
        if self._pending:
            raise SubmissionInProgressError(schema_id=self.schema_id)

        self._document_errors = []
        if self.validate_all():
            self._state = FormState.EDITING
            logger.info(
                "Form submission blocked by field errors",
                extra={"schema_id": self.schema_id, "fields": sorted(self._errors)},
            )
            return None

        snapshot = copy.deepcopy(self._values)
        self._pending = True
        self._state = FormState.VALIDATING
        try:
            submission = await self._gate.submit(self.schema_id, snapshot)
        except DocumentValidationError as exc:
            self._apply_document_errors(exc.issues, snapshot)
            self._state = FormState.EDITING
            return None
        except Exception:
            self._state = FormState.EDITING
            raise
        finally:
            self._pending = False

        self._state = FormState.SUBMITTED
        self._submitted_at = self._clock()
        return submission

    def export_bundle(self) -> ExportBundle:
        """Return an export bundle holding the schema and current values."""
        return build_form_export(self._schema, self._values, schema_id=self.schema_id)

    def _apply_document_errors(self, issues: list[ValidationIssue], snapshot: dict[str, Any]) -> None:
        # Fields edited while the verdict was pending are judged on their new value.
        edited = {
            name
            for name in {*snapshot, *self._values}
            if snapshot.get(name, _MISSING) != self._values.get(name, _MISSING)
        }
        self._document_errors = [issue for issue in issues if issue.property not in edited]
        for issue in self._document_errors:
            if issue.property is not None and issue.property not in self._errors:
                self._errors[issue.property] = issue.message
        logger.info(
            "Form submission rejected",
            extra={"schema_id": self.schema_id, "issues": len(issues)},
        )
