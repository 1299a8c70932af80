"""Lenient per-field validation used for incremental form feedback."""

from __future__ import annotations

import math
import re
from functools import lru_cache
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from schemaforms import logger
from schemaforms.typing.enums import FieldKind

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from schemaforms.typing.models import FieldDescriptor

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

INVALID_EMAIL = "Please enter a valid email address"
INVALID_NUMBER = "Please enter a valid number"
INVALID_FORMAT = "Please enter a valid format"
INVALID_URL = "Please enter a valid URL"


def is_empty(value: object) -> bool:
    """Return whether a form value counts as not provided."""
    return value is None or value == ""


def format_bound(bound: float) -> str:
    """Render a numeric bound the way it was written in the schema (`18.0` -> `18`)."""
    if isinstance(bound, float) and bound.is_integer():
        return str(int(bound))
    return str(bound)


def parse_number(value: object) -> int | float | None:
    """Parse a form value as a finite number.

    Integers keep arbitrary precision so values beyond the float range still
    compare exactly against bounds.

    Args:
        value (object): Raw form value.

    Returns:
        int | float | None: Parsed number, or None when the value is not a finite number.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text or "_" in text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


@lru_cache(maxsize=256)
def _compile_pattern(pattern: str) -> re.Pattern[str] | None:
    try:
        return re.compile(pattern)
    except re.error:
        logger.warning("Field pattern does not compile", extra={"pattern": pattern})
        return None


def _validate_email(value: Any) -> str | None:
    if not EMAIL_PATTERN.fullmatch(str(value)):
        return INVALID_EMAIL
    return None


def _validate_number(value: Any, field: FieldDescriptor) -> str | None:
    number = parse_number(value)
    if number is None:
        return INVALID_NUMBER
    if field.minimum is not None and number < field.minimum:
        return f"Value must be at least {format_bound(field.minimum)}"
    if field.maximum is not None and number > field.maximum:
        return f"Value must be at most {format_bound(field.maximum)}"
    return None


def _validate_text(value: Any, field: FieldDescriptor) -> str | None:
    text = str(value)
    if field.min_length is not None and len(text) < field.min_length:
        return f"Must be at least {field.min_length} characters"
    if field.max_length is not None and len(text) > field.max_length:
        return f"Must be at most {field.max_length} characters"
    if field.pattern:
        regex = _compile_pattern(field.pattern)
        if regex is None or regex.search(text) is None:
            return INVALID_FORMAT
    return None


def _validate_url(value: Any) -> str | None:
    try:
        parts = urlsplit(str(value).strip())
    except ValueError:
        return INVALID_URL
    if not parts.scheme or not parts.netloc:
        return INVALID_URL
    return None


def validate_field(value: Any, field: FieldDescriptor, schema: object = None) -> str | None:  # noqa: ARG001
    """Validate one candidate value for a field.

    Empty optional values always pass, even where the schema would reject them.
    Only the authoritative document validator decides what gets persisted.

    Args:
        value (Any): Candidate value for this field only.
        field (FieldDescriptor): Field descriptor.
        schema (object): Original schema, accepted for call-site symmetry.

    Returns:
        str | None: Human readable message, or None when the value passes.
    """
    if is_empty(value):
        return f"{field.label} is required" if field.required else None

    match field.kind:
        case FieldKind.EMAIL:
            return _validate_email(value)
        case FieldKind.NUMBER:
            return _validate_number(value, field)
        case FieldKind.TEXT:
            return _validate_text(value, field)
        case FieldKind.URL:
            return _validate_url(value)
        case _:
            return None


def validate_fields(
    values: Mapping[str, Any],
    fields: Iterable[FieldDescriptor],
    schema: object = None,
) -> dict[str, str]:
    """Validate every field against its own value.

    Args:
        values (Mapping[str, Any]): Current form values.
        fields (Iterable[FieldDescriptor]): Field descriptors.
        schema (object): Original schema.

    Returns:
        dict[str, str]: Messages keyed by field name, for failing fields only.
    """
    errors: dict[str, str] = {}
    for field in fields:
        message = validate_field(values.get(field.name), field, schema)
        if message:
            errors[field.name] = message
    return errors
