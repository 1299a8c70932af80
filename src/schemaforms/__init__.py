"""SchemaForms package."""

from schemaforms.async_runner import run_async
from schemaforms.dependencies import ensure_package_dependencies
from schemaforms.exceptions import (
    AsyncExecutionError,
    DependencyError,
    DocumentValidationError,
    FieldValidationError,
    MalformedImportError,
    NotFoundError,
    PackageError,
    SchemaCompileError,
    SettingsError,
)
from schemaforms.logging import configure_logging, get_logger
from schemaforms.settings import Settings, get_settings

ensure_package_dependencies()

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("schemaforms")

__all__ = [
    "AsyncExecutionError",
    "DependencyError",
    "DocumentValidationError",
    "FieldValidationError",
    "MalformedImportError",
    "NotFoundError",
    "PackageError",
    "SchemaCompileError",
    "Settings",
    "SettingsError",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
    "run_async",
]
