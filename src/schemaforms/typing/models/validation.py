"""Document validation models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ValidationIssue(BaseModel):
    """One error reported by the authoritative document validator."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    path: str = Field(description="JSON pointer to the offending instance, '' for the root.")
    keyword: str = Field(description="JSON Schema keyword that failed, e.g. 'required'.")
    message: str
    schema_path: str = Field(default="", alias="schemaPath")
    property: str | None = Field(default=None, description="Top-level property concerned, when known.")
