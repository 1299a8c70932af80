"""Pytest marker auto-assignment by folder and shared fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from schemaforms import logger
from schemaforms.settings import Settings


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = Path(config.rootpath) / "tests" / marker
    target_dir = target_dir.resolve()

    for item in items:
        try:
            path = Path(str(item.fspath)).resolve()
        except Exception:
            logger.warning(
                f"Could not resolve path for test item {item.name!s}; skipping {marker!s} marker assignment",
            )
            continue

        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")
    _mark_tests_by_directory(config, items, "end2end")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings isolated from the developer environment."""
    return Settings(
        app_env="test",
        log_json=False,
        data_dir=str(tmp_path / "data"),
        submitted_display_seconds=3.0,
        default_schema_draft="draft7",
    )


@pytest.fixture
def person_schema() -> dict[str, Any]:
    """Schema covering every field kind."""
    return {
        "type": "object",
        "title": "Person",
        "properties": {
            "name": {"type": "string", "minLength": 2, "maxLength": 20},
            "email": {"type": "string", "format": "email", "title": "E-mail"},
            "age": {"type": "integer", "minimum": 18, "maximum": 120},
            "subscribed": {"type": "boolean"},
            "plan": {"type": "string", "enum": ["free", "pro", "team"]},
            "birthday": {"type": "string", "format": "date"},
            "website": {"type": "string", "format": "uri"},
        },
        "required": ["name", "email", "age"],
    }
