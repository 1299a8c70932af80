"""Schema and submission service."""

from __future__ import annotations

import copy
import time
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from schemaforms import logger
from schemaforms.dependencies import ensure_format_dependencies
from schemaforms.document_validator import DocumentValidator, compile_schema
from schemaforms.exceptions import NotFoundError
from schemaforms.form_session import FormSession
from schemaforms.settings import Settings, get_settings
from schemaforms.stores import InMemoryRepository, JsonFileRepository
from schemaforms.typing.models import StoredSchema, Submission

if TYPE_CHECKING:
    from collections.abc import Callable

    from schemaforms.typing.protocol import Repository


def _new_id() -> str:
    return str(uuid4())


class FormService:
    """Registers schemas and accepts submissions after authoritative validation."""

    def __init__(
        self,
        schemas: Repository[StoredSchema],
        submissions: Repository[Submission],
        *,
        settings: Settings | None = None,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        ensure_format_dependencies()
        self._schemas = schemas
        self._submissions = submissions
        self._settings = settings or get_settings()
        self._id_factory = id_factory
        self._validators: dict[str, DocumentValidator] = {}

    @classmethod
    def in_memory(cls, *, settings: Settings | None = None) -> FormService:
        """Return a service backed by process-local stores."""
        return cls(InMemoryRepository(), InMemoryRepository(), settings=settings)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> FormService:
        """Return a service backed by the JSON files under `DATA_DIR`."""
        config = settings or get_settings()
        return cls(
            JsonFileRepository(config.schemas_path, StoredSchema),
            JsonFileRepository(config.submissions_path, Submission),
            settings=config,
        )

    @property
    def settings(self) -> Settings:
        """Return the service settings."""
        return self._settings

    def create_schema(self, name: str, schema: object) -> StoredSchema:
        """Register a JSON Schema.

        Args:
            name (str): Display name.
            schema (object): JSON Schema document.

        Raises:
            ValueError: If the name or the schema is missing.

        Returns:
            StoredSchema: The registered schema.
        """
        if not name or not name.strip() or schema is None:
            raise ValueError("Name and schema are required")  # noqa: TRY003

        validator = compile_schema(schema, default_draft=self._settings.default_schema_draft)
        stored = StoredSchema(id=self._id_factory(), name=name, json_schema=copy.deepcopy(validator.schema))
        self._schemas.put(stored)
        self._validators[stored.id] = validator
        logger.info("Schema created", extra={"schema_id": stored.id, "schema_name": name})
        return stored

    def get_schemas(self) -> list[StoredSchema]:
        """Return all schemas in creation order."""
        return self._schemas.list()

    def get_schema(self, schema_id: str) -> StoredSchema:
        """Return one schema.

        Args:
            schema_id (str): Schema id.

        Raises:
            NotFoundError: If the schema does not exist.

        Returns:
            StoredSchema: The schema.
        """
        stored = self._schemas.get(schema_id)
        if stored is None:
            raise NotFoundError(kind="schema", identifier=schema_id)
        return stored

    def delete_schema(self, schema_id: str) -> None:
        """Delete a schema together with all of its submissions.

        Args:
            schema_id (str): Schema id.
        """
        self.get_schema(schema_id)
        self._schemas.delete(schema_id)
        self._validators.pop(schema_id, None)

        orphaned = [submission.id for submission in self._submissions.list() if submission.schema_id == schema_id]
        for submission_id in orphaned:
            self._submissions.delete(submission_id)
        logger.info("Schema deleted", extra={"schema_id": schema_id, "submissions_removed": len(orphaned)})

    def submit(self, schema_id: str, data: Any) -> Submission:
        """Validate data against the stored schema and persist it.

        Args:
            schema_id (str): Target schema id.
            data (Any): Submitted document.

        Raises:
            NotFoundError: If the schema does not exist.
            DocumentValidationError: If the data violates the schema.

        Returns:
            Submission: The accepted submission.
        """
        stored = self.get_schema(schema_id)
        self._validator_for(stored).check(data)

        submission = Submission(id=self._id_factory(), schema_id=schema_id, data=copy.deepcopy(data))
        self._submissions.put(submission)
        logger.info("Form submitted", extra={"schema_id": schema_id, "submission_id": submission.id})
        return submission

    def get_submissions(self, schema_id: str) -> list[Submission]:
        """Return the submissions of one schema in creation order."""
        return [submission for submission in self._submissions.list() if submission.schema_id == schema_id]

    def get_all_submissions(self) -> list[Submission]:
        """Return every submission in creation order."""
        return self._submissions.list()

    def open_session(
        self,
        schema_id: str,
        *,
        coerce_inputs: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ) -> FormSession:
        """Open a form session whose submissions go through this service.

        Args:
            schema_id (str): Schema id.
            coerce_inputs (bool): Normalize raw string inputs on change.
            clock (Callable[[], float]): Monotonic clock for the submitted display window.

        Returns:
            FormSession: New session.
        """
        stored = self.get_schema(schema_id)
        return FormSession(
            stored.id,
            stored.json_schema,
            ServiceGate(self),
            settings=self._settings,
            clock=clock,
            coerce_inputs=coerce_inputs,
        )

    def _validator_for(self, stored: StoredSchema) -> DocumentValidator:
        validator = self._validators.get(stored.id)
        if validator is None:
            validator = compile_schema(stored.json_schema, default_draft=self._settings.default_schema_draft)
            self._validators[stored.id] = validator
        return validator


class ServiceGate:
    """Submission gate running the service's validation in-process."""

    def __init__(self, service: FormService) -> None:
        self._service = service

    async def submit(self, schema_id: str, data: dict[str, Any]) -> Submission:
        """Submit `data` through the service."""
        return self._service.submit(schema_id, data)
