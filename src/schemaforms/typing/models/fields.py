"""Form field models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from schemaforms.typing.enums import FieldKind


class FieldDescriptor(BaseModel):
    """UI-agnostic description of the input control for one schema property."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    name: str
    kind: FieldKind
    label: str
    required: bool = False
    description: str | None = None
    options: list[Any] | None = None
    format: str | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    min_length: int | None = Field(default=None, alias="minLength")
    max_length: int | None = Field(default=None, alias="maxLength")
    pattern: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the camelCase payload, omitting absent constraints."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class FieldError(BaseModel):
    """Advisory error attached to one form field."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    field: str
    message: str
