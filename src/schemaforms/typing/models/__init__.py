"""Core domain model exports."""

from schemaforms.typing.models.bundle import ExportBundle
from schemaforms.typing.models.fields import FieldDescriptor, FieldError
from schemaforms.typing.models.records import StoredSchema, Submission, utc_now
from schemaforms.typing.models.schema import PropertySpec, SchemaView
from schemaforms.typing.models.validation import ValidationIssue

__all__ = [
    "ExportBundle",
    "FieldDescriptor",
    "FieldError",
    "PropertySpec",
    "SchemaView",
    "StoredSchema",
    "Submission",
    "ValidationIssue",
    "utc_now",
]
