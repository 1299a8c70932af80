"""Derive form field descriptors from a JSON Schema document."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemaforms import logger
from schemaforms.exceptions import DuplicateFieldError
from schemaforms.typing.enums import FieldKind
from schemaforms.typing.models import FieldDescriptor, PropertySpec, SchemaView

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

FORMAT_KINDS: dict[str, FieldKind] = {
    "email": FieldKind.EMAIL,
    "date": FieldKind.DATE,
    "date-time": FieldKind.DATETIME,
    "time": FieldKind.TIME,
    "uri": FieldKind.URL,
    "password": FieldKind.PASSWORD,
}

TYPE_KINDS: dict[str, FieldKind] = {
    "string": FieldKind.TEXT,
    "number": FieldKind.NUMBER,
    "integer": FieldKind.NUMBER,
    "boolean": FieldKind.CHECKBOX,
}

_STRUCTURED_TYPES = frozenset({"array", "object"})


def resolve_kind(spec: PropertySpec) -> FieldKind:
    """Resolve the input kind of one property.

    A recognised `format` wins over `type`, and a declared `enum` wins over both.

    Args:
        spec (PropertySpec): Property view.

    Returns:
        FieldKind: Resolved kind.
    """
    if spec.declares_enum:
        return FieldKind.SELECT
    if spec.format and spec.format in FORMAT_KINDS:
        return FORMAT_KINDS[spec.format]
    if isinstance(spec.type, str):
        return TYPE_KINDS.get(spec.type, FieldKind.TEXT)
    return FieldKind.TEXT


def default_label(name: str) -> str:
    """Return `name` with its first character upper-cased."""
    return name[:1].upper() + name[1:]


def build_field(name: str, spec: PropertySpec, *, required: bool) -> FieldDescriptor:
    """Build the descriptor for one property.

    Args:
        name (str): Property name.
        spec (PropertySpec): Property view.
        required (bool): Whether the property is listed in `required`.

    Returns:
        FieldDescriptor: Field descriptor.
    """
    if isinstance(spec.type, str) and spec.type in _STRUCTURED_TYPES and not spec.declares_enum:
        logger.warning(
            "Structured property rendered as text field",
            extra={"field": name, "type": spec.type},
        )

    return FieldDescriptor(
        name=name,
        kind=resolve_kind(spec),
        label=spec.title or default_label(name),
        required=required,
        description=spec.description,
        options=list(spec.enum) if spec.enum is not None else None,
        format=spec.format,
        minimum=spec.minimum,
        maximum=spec.maximum,
        min_length=spec.min_length,
        max_length=spec.max_length,
        pattern=spec.pattern,
    )


def map_property_pairs(
    pairs: Iterable[tuple[str, PropertySpec]],
    required: Collection[str] = (),
) -> list[FieldDescriptor]:
    """Map explicit `(name, spec)` pairs to descriptors.

    Args:
        pairs (Iterable[tuple[str, PropertySpec]]): Properties in display order.
        required (Collection[str]): Required property names.

    Raises:
        DuplicateFieldError: If two pairs share a name.

    Returns:
        list[FieldDescriptor]: Descriptors in the order of `pairs`.
    """
    fields: list[FieldDescriptor] = []
    seen: set[str] = set()
    for name, spec in pairs:
        if name in seen:
            raise DuplicateFieldError(name=name)
        seen.add(name)
        fields.append(build_field(name, spec, required=name in required))
    return fields


def map_schema_to_fields(schema: object) -> list[FieldDescriptor]:
    """Convert a schema's top-level `properties` into ordered field descriptors.

    A schema without `properties` yields no fields.

    Args:
        schema (object): JSON Schema document or `SchemaView`.

    Returns:
        list[FieldDescriptor]: One descriptor per property, in declaration order.
    """
    view = SchemaView.from_document(schema)
    if not view.properties:
        return []
    return map_property_pairs(view.property_specs(), view.required_names)
