"""Runtime dependency checks."""

from __future__ import annotations

import importlib.util

from schemaforms.exceptions import DependencyError


def _is_module_available(module_name: str) -> bool:
    """Check whether a module can be imported.

    Args:
        module_name (str): Python module name.

    Returns:
        bool: True if import spec exists.
    """
    return importlib.util.find_spec(module_name) is not None


def _collect_missing_dependencies(modules_by_package: dict[str, str]) -> list[str]:
    """Collect missing packages for a module mapping.

    Args:
        modules_by_package (Mapping[str, str]): Mapping of package name -> import module.

    Returns:
        list[str]: Missing package names.
    """
    return [package for package, module in modules_by_package.items() if not _is_module_available(module)]


def ensure_package_dependencies() -> None:
    """Validate required dependencies.

    Raises:
        DependencyError: If required runtime dependencies are missing.
    """
    missing = _collect_missing_dependencies(
        {
            "jsonschema": "jsonschema",
            "pydantic": "pydantic",
            "structlog": "structlog",
        },
    )
    if missing:
        raise DependencyError(missing_package=missing, message="package import")


def ensure_format_dependencies() -> None:
    """Validate the format checker backends used by document validation.

    Without them `jsonschema` silently skips `date-time`, `time` and `uri` checks.

    Raises:
        DependencyError: If one or more format checker modules are missing.
    """
    missing = _collect_missing_dependencies(
        {
            "rfc3339-validator": "rfc3339_validator",
            "rfc3986-validator": "rfc3986_validator",
        },
    )
    if missing:
        raise DependencyError(missing_package=missing, message="format checking")
