"""Storage and submission interfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from schemaforms.typing.models import Submission


class Repository[T](Protocol):
    """Record store keyed by opaque id, iterated in insertion order."""

    def get(self, record_id: str) -> T | None:
        """Return one record.

        Args:
            record_id: Record identifier.

        Returns:
            T | None: The record, or None when unknown.
        """

    def list(self) -> list[T]:
        """Return all records in insertion order.

        Returns:
            list[T]: Stored records.
        """

    def put(self, record: T) -> None:
        """Insert or replace a record.

        Args:
            record: Record to store, keyed by its `id`.
        """

    def delete(self, record_id: str) -> bool:
        """Remove one record.

        Args:
            record_id: Record identifier.

        Returns:
            bool: True when a record was removed.
        """


class SubmissionGate(Protocol):
    """Authoritative collaborator a form session hands its data to."""

    async def submit(self, schema_id: str, data: dict[str, Any]) -> Submission:
        """Validate and persist submitted data.

        Args:
            schema_id: Target schema id.
            data: Snapshot of the form values.

        Returns:
            Submission: The accepted submission.
        """
