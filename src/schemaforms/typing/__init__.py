"""Typing-centric domain modules."""

from schemaforms.typing.enums import FieldKind, FormState
from schemaforms.typing.models import (
    ExportBundle,
    FieldDescriptor,
    FieldError,
    PropertySpec,
    SchemaView,
    StoredSchema,
    Submission,
    ValidationIssue,
)
from schemaforms.typing.protocol import Repository, SubmissionGate

__all__ = [
    "ExportBundle",
    "FieldDescriptor",
    "FieldError",
    "FieldKind",
    "FormState",
    "PropertySpec",
    "Repository",
    "SchemaView",
    "StoredSchema",
    "Submission",
    "SubmissionGate",
    "ValidationIssue",
]
