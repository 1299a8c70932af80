"""Persisted schema and submission records."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Return the current UTC timestamp."""
    return datetime.now(UTC)


class StoredSchema(BaseModel):
    """A JSON Schema registered under an opaque id."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str
    name: str
    json_schema: dict[str, Any] = Field(alias="schema")
    created_at: datetime = Field(default_factory=utc_now, alias="createdAt")


class Submission(BaseModel):
    """One accepted form submission."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: str
    schema_id: str = Field(alias="schemaId")
    data: Any
    submitted_at: datetime = Field(default_factory=utc_now, alias="submittedAt")
