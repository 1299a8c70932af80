"""Raw input value normalization."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from schemaforms.field_validator import parse_number
from schemaforms.typing.enums import FieldKind

if TYPE_CHECKING:
    from schemaforms.typing.models import FieldDescriptor

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


def normalize_field_value(value: Any, field: FieldDescriptor) -> Any:
    """Coerce a raw input value to the JSON type its control produces.

    Number controls yield numbers (integer literals as `int`) and checkboxes
    yield booleans. Unparseable input is returned untouched so the field
    validator can report it.

    Args:
        value (Any): Raw value, typically a string from a text input.
        field (FieldDescriptor): Target field descriptor.

    Returns:
        Any: Normalized value.
    """
    if field.kind == FieldKind.NUMBER:
        return _normalize_number(value)
    if field.kind == FieldKind.CHECKBOX:
        return _normalize_checkbox(value)
    return value


def _normalize_number(value: Any) -> Any:
    if not isinstance(value, str) or not value.strip():
        return value
    number = parse_number(value)
    return value if number is None else number


def _normalize_checkbox(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    lowered = value.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    return value
