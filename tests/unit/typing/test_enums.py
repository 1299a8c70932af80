from __future__ import annotations

import pytest

from schemaforms.typing.enums import FieldKind, FormState


def test_field_kind_from_str() -> None:
    assert FieldKind.from_str("datetime") == FieldKind.DATETIME
    assert FieldKind.URL.to_str() == "url"


def test_field_kind_from_str_raises_on_invalid_value() -> None:
    with pytest.raises(ValueError, match="Unsupported FieldKind value"):
        FieldKind.from_str("textarea")


def test_form_state_values() -> None:
    assert [state.value for state in FormState] == ["empty", "editing", "validating", "submitted"]
