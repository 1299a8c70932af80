"""Export/import bundle model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from schemaforms.typing.models.records import Submission, utc_now


class ExportBundle(BaseModel):
    """Portable snapshot of a schema with either form data or submissions."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    json_schema: dict[str, Any] = Field(alias="schema")
    schema_id: str | None = Field(default=None, alias="schemaId")
    schema_name: str | None = Field(default=None, alias="schemaName")
    form_data: dict[str, Any] | None = Field(default=None, alias="formData")
    submissions: list[Submission] | None = None
    exported_at: datetime = Field(default_factory=utc_now, alias="exportedAt")

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON payload written to export files."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
