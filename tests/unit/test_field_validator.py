from __future__ import annotations

import math

import pytest

from schemaforms.field_mapper import map_schema_to_fields
from schemaforms.field_validator import format_bound, parse_number, validate_field, validate_fields
from schemaforms.typing.enums import FieldKind
from schemaforms.typing.models import FieldDescriptor

AGE_SCHEMA = {
    "properties": {"age": {"type": "integer", "minimum": 18, "maximum": 120}},
    "required": ["age"],
}


def _field(**kwargs) -> FieldDescriptor:
    payload = {"name": "value", "label": "Value", "kind": FieldKind.TEXT} | kwargs
    return FieldDescriptor(**payload)


def test_age_example() -> None:
    (age,) = map_schema_to_fields(AGE_SCHEMA)

    assert age.kind == FieldKind.NUMBER
    assert age.required is True
    assert age.minimum == 18
    assert age.maximum == 120
    assert validate_field(17, age, AGE_SCHEMA) == "Value must be at least 18"
    assert validate_field(25, age, AGE_SCHEMA) is None
    assert validate_field("", age, AGE_SCHEMA) == "Age is required"
    assert validate_field(121, age, AGE_SCHEMA) == "Value must be at most 120"


@pytest.mark.parametrize("empty", [None, ""])
@pytest.mark.parametrize("kind", list(FieldKind))
def test_empty_optional_values_always_pass(kind, empty) -> None:
    field = _field(kind=kind, min_length=3, minimum=5, pattern="^x$")
    assert validate_field(empty, field) is None


@pytest.mark.parametrize("kind", list(FieldKind))
def test_required_empty_value_mentions_label(kind) -> None:
    field = _field(kind=kind, label="Favourite colour", required=True)
    assert validate_field("", field) == "Favourite colour is required"
    assert validate_field(None, field) == "Favourite colour is required"


def test_required_check_supersedes_other_checks() -> None:
    field = _field(kind=FieldKind.EMAIL, label="Email", required=True)
    assert validate_field("", field) == "Email is required"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("jane@example.com", None),
        ("jane.doe+tag@mail.example.org", None),
        ("jane@example", "Please enter a valid email address"),
        ("jane example@x.com", "Please enter a valid email address"),
        ("jane@@example.com", "Please enter a valid email address"),
        ("@example.com", "Please enter a valid email address"),
    ],
)
def test_email_validation(value, expected) -> None:
    assert validate_field(value, _field(kind=FieldKind.EMAIL)) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("12", None),
        (" 12.5 ", None),
        (7, None),
        ("abc", "Please enter a valid number"),
        ("inf", "Please enter a valid number"),
        (math.nan, "Please enter a valid number"),
        (True, "Please enter a valid number"),
        ("4", "Value must be at least 5"),
        ("11", "Value must be at most 10"),
    ],
)
def test_number_validation(value, expected) -> None:
    field = _field(kind=FieldKind.NUMBER, minimum=5, maximum=10)
    assert validate_field(value, field) == expected


def test_number_bounds_render_without_trailing_zero() -> None:
    field = _field(kind=FieldKind.NUMBER, minimum=1.0, maximum=2.5)
    assert validate_field(0, field) == "Value must be at least 1"
    assert validate_field(3, field) == "Value must be at most 2.5"


def test_zero_bound_is_enforced() -> None:
    field = _field(kind=FieldKind.NUMBER, minimum=0)
    assert validate_field(-1, field) == "Value must be at least 0"


def test_text_length_checks_minimum_first() -> None:
    field = _field(min_length=3, max_length=1)
    assert validate_field("ab", field) == "Must be at least 3 characters"
    field = _field(min_length=1, max_length=3)
    assert validate_field("abcd", field) == "Must be at most 3 characters"
    assert validate_field("abc", field) is None


def test_text_pattern_is_unanchored_search() -> None:
    field = _field(pattern="[0-9]{3}")
    assert validate_field("abc123def", field) is None
    assert validate_field("abc", field) == "Please enter a valid format"


def test_text_invalid_pattern_reports_format_error() -> None:
    field = _field(pattern="(")
    assert validate_field("anything", field) == "Please enter a valid format"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("https://example.com/path?q=1", None),
        ("ftp://files.example.org", None),
        ("example.com", "Please enter a valid URL"),
        ("mailto:jane@example.com", "Please enter a valid URL"),
        ("http://[::1", "Please enter a valid URL"),
    ],
)
def test_url_validation(value, expected) -> None:
    assert validate_field(value, _field(kind=FieldKind.URL)) == expected


@pytest.mark.parametrize(
    "kind",
    [FieldKind.CHECKBOX, FieldKind.SELECT, FieldKind.DATE, FieldKind.DATETIME, FieldKind.TIME, FieldKind.PASSWORD],
)
def test_other_kinds_only_check_presence(kind) -> None:
    assert validate_field("not-a-date", _field(kind=kind, pattern="^x$", min_length=99)) is None


def test_validate_fields_reports_failing_fields_only(person_schema) -> None:
    fields = map_schema_to_fields(person_schema)
    errors = validate_fields({"name": "Jo", "email": "nope", "website": "https://example.com"}, fields, person_schema)

    assert errors == {"email": "Please enter a valid email address", "age": "Age is required"}


def test_parse_number_and_format_bound() -> None:
    assert parse_number("1e3") == 1000.0
    assert parse_number("1_000") is None
    assert format_bound(18) == "18"
    assert format_bound(18.0) == "18"
    assert format_bound(0.5) == "0.5"


def test_integers_beyond_float_range_compare_exactly() -> None:
    huge = 10**400
    assert parse_number(huge) == huge
    assert parse_number(str(huge)) == huge

    field = _field(kind=FieldKind.NUMBER, minimum=5, maximum=10)
    assert validate_field(huge, field) == "Value must be at most 10"
    assert validate_field(-huge, field) == "Value must be at least 5"
    assert validate_field(huge, _field(kind=FieldKind.NUMBER)) is None


def test_float_overflow_string_is_not_a_number() -> None:
    assert validate_field("1e400", _field(kind=FieldKind.NUMBER)) == "Please enter a valid number"
