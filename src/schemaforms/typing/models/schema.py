"""Typed views over user supplied JSON Schema documents."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from schemaforms.exceptions import SchemaCompileError


def _integral_float_to_int(value: Any) -> Any:
    """Accept `2.0` wherever JSON Schema expects a non-negative integer."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


LengthBound = Annotated[int | None, BeforeValidator(_integral_float_to_int)]


class PropertySpec(BaseModel):
    """Typed view of one entry of a schema's `properties`."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True, strict=True)

    type: str | list[str] | None = None
    format: str | None = None
    enum: list[Any] | None = None
    minimum: int | float | None = None
    maximum: int | float | None = None
    min_length: LengthBound = Field(default=None, alias="minLength")
    max_length: LengthBound = Field(default=None, alias="maxLength")
    pattern: str | None = None
    title: str | None = None
    description: str | None = None

    @classmethod
    def from_value(cls, name: str, value: object) -> PropertySpec:
        """Build a property view from a raw JSON value.

        Boolean schemas (`true`/`false`) carry no attributes and yield an empty view.

        Args:
            name (str): Property name, used in error messages.
            value (object): Raw property schema.

        Raises:
            SchemaCompileError: If an attribute has the wrong JSON type.

        Returns:
            PropertySpec: Typed property view.
        """
        if not isinstance(value, Mapping):
            return cls()
        try:
            return cls.model_validate(dict(value))
        except ValidationError as exc:
            raise SchemaCompileError(message=f"Invalid definition for property '{name}'", exc=exc) from exc

    @property
    def declares_enum(self) -> bool:
        """Return whether the property declares an `enum`, even an empty one."""
        return self.enum is not None


class SchemaView(BaseModel):
    """Typed view of the top level of a JSON Schema document."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True, strict=True)

    type: str | list[str] | None = None
    title: str | None = None
    description: str | None = None
    properties: dict[str, Any] | None = None
    required: list[str] | None = None

    @classmethod
    def from_document(cls, schema: object) -> SchemaView:
        """Build a schema view from an arbitrary JSON value.

        Args:
            schema (object): Raw JSON Schema document.

        Raises:
            SchemaCompileError: If the document is not an object or its members are mistyped.

        Returns:
            SchemaView: Typed schema view.
        """
        if isinstance(schema, SchemaView):
            return schema
        if not isinstance(schema, Mapping):
            raise SchemaCompileError(message=f"JSON Schema must be an object, got {type(schema).__name__}")
        try:
            return cls.model_validate(dict(schema))
        except ValidationError as exc:
            raise SchemaCompileError(message="Invalid JSON Schema members", exc=exc) from exc

    @property
    def required_names(self) -> frozenset[str]:
        """Return the set of required property names."""
        return frozenset(self.required or ())

    def property_specs(self) -> list[tuple[str, PropertySpec]]:
        """Return `(name, spec)` pairs in declaration order."""
        return [(name, PropertySpec.from_value(name, value)) for name, value in (self.properties or {}).items()]

    def raw_property(self, name: str) -> Any:
        """Return the untouched JSON value of one property, or None."""
        return (self.properties or {}).get(name)
