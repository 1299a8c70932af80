"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from schemaforms.typing.models import ValidationIssue


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class AsyncExecutionError(PackageError):
    """Raised when an async operation fails in compatibility runner."""

    result: BaseException
    message: str = "Async operation failed"

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.result}"


@dataclass(frozen=True)
class DependencyError(PackageError):
    """Raised when runtime dependencies are missing."""

    missing_package: list[str]
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Missing runtime dependencies for '{self.message}': {', '.join(self.missing_package)}"


@dataclass(frozen=True)
class SchemaCompileError(PackageError):
    """Raised when a JSON Schema document cannot be compiled."""

    message: str = "Invalid JSON Schema format"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class FieldValidationError(PackageError):
    """Advisory error for one form field."""

    field: str
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class DocumentValidationError(PackageError):
    """Raised when submitted data is rejected by the authoritative validator."""

    issues: list[ValidationIssue]
    message: str = "Validation failed"

    def __str__(self) -> str:
        """Return error message payload."""
        if not self.issues:
            return self.message
        details = "; ".join(f"{issue.path or '/'}: {issue.message}" for issue in self.issues)
        return f"{self.message}: {details}"


@dataclass(frozen=True)
class NotFoundError(PackageError):
    """Raised when a referenced schema or submission does not exist."""

    kind: str
    identifier: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.kind.capitalize()} not found: {self.identifier}"


@dataclass(frozen=True)
class MalformedImportError(PackageError):
    """Raised when an import bundle misses required keys."""

    message: str = "Invalid export file format"
    missing_keys: tuple[str, ...] = ()

    def __str__(self) -> str:
        """Return error message payload."""
        if self.missing_keys:
            return f"{self.message}: missing {', '.join(self.missing_keys)}"
        return self.message


@dataclass(frozen=True)
class MalformedDocumentError(PackageError):
    """Raised when a JSON document cannot be parsed."""

    message: str
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class DuplicateFieldError(PackageError):
    """Raised when two fields derived from one schema share a name."""

    name: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Duplicate field name: {self.name!r}"


@dataclass(frozen=True)
class SubmissionInProgressError(PackageError):
    """Raised when a form is submitted while a previous submission is pending."""

    schema_id: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"A submission is already pending for schema {self.schema_id}"


@dataclass
class StoreError(PackageError):
    """Raised when a persisted store cannot be read."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message
