"""CLI entry point for SchemaForms."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from schemaforms import __version__, logger
from schemaforms.async_runner import run_async
from schemaforms.bundle import read_json_file
from schemaforms.dependencies import ensure_format_dependencies
from schemaforms.document_validator import compile_schema
from schemaforms.exceptions import MalformedDocumentError, PackageError, SchemaCompileError
from schemaforms.field_mapper import map_schema_to_fields
from schemaforms.logging import configure_logging
from schemaforms.service import FormService
from schemaforms.settings import Settings, get_settings

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_INVALID_SCHEMA = 2


def _assignment_from_cli(value: str) -> tuple[str, str]:
    """Parse a `--set name=value` argument.

    Args:
        value (str): CLI value.

    Raises:
        argparse.ArgumentTypeError: If the value has no `=`.

    Returns:
        tuple[str, str]: Field name and raw value.
    """
    name, separator, raw = value.partition("=")
    if not separator or not name:
        raise argparse.ArgumentTypeError("--set expects name=value")  # noqa: TRY003
    return name, raw


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="schemaforms")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    fields_parser = subparsers.add_parser("fields", help="Print the form fields derived from a JSON Schema")
    fields_parser.add_argument("--schema", required=True, type=Path, dest="schema_path")

    validate_parser = subparsers.add_parser("validate", help="Validate a JSON document against a JSON Schema")
    validate_parser.add_argument("--schema", required=True, type=Path, dest="schema_path")
    validate_parser.add_argument("--data", required=True, type=Path, dest="data_path")

    fill_parser = subparsers.add_parser("fill", help="Fill and submit a form from name=value pairs")
    fill_parser.add_argument("--schema", required=True, type=Path, dest="schema_path")
    fill_parser.add_argument(
        "--set",
        action="append",
        default=[],
        type=_assignment_from_cli,
        dest="assignments",
        metavar="NAME=VALUE",
    )

    return parser


def _emit(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, default=str) + "\n")


def _run_fields(args: argparse.Namespace) -> int:
    schema = read_json_file(args.schema_path)
    _emit([field.to_payload() for field in map_schema_to_fields(schema)])
    return EXIT_OK


def _run_validate(args: argparse.Namespace, settings: Settings) -> int:
    validator = compile_schema(read_json_file(args.schema_path), default_draft=settings.default_schema_draft)
    issues = validator.validate(read_json_file(args.data_path))
    _emit({"valid": not issues, "errors": [issue.model_dump(by_alias=True) for issue in issues]})
    return EXIT_REJECTED if issues else EXIT_OK


def _run_fill(args: argparse.Namespace, settings: Settings) -> int:
    service = FormService.in_memory(settings=settings)
    stored = service.create_schema(args.schema_path.stem, read_json_file(args.schema_path))
    session = service.open_session(stored.id, coerce_inputs=True)
    for name, raw in args.assignments:
        session.on_field_change(name, raw)

    submission = run_async(session.on_submit())
    if submission is None:
        _emit(
            {
                "accepted": False,
                "errors": [error.model_dump() for error in session.field_errors()],
                "documentErrors": [issue.model_dump(by_alias=True) for issue in session.document_errors],
            },
        )
        return EXIT_REJECTED
    _emit({"accepted": True, "submission": submission.model_dump(mode="json", by_alias=True)})
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments, defaults to `sys.argv[1:]`.

    Returns:
        int: Exit code (0 on success, 1 on rejected data, 2 on an unusable schema).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    ensure_format_dependencies()
    try:
        if args.command == "fields":
            return _run_fields(args)
        if args.command == "validate":
            return _run_validate(args, settings)
        return _run_fill(args, settings)
    except (SchemaCompileError, MalformedDocumentError):
        logger.exception("Unusable input document")
        return EXIT_INVALID_SCHEMA
    except PackageError:
        logger.exception("Command failed", extra={"command": args.command})
        return EXIT_REJECTED


if __name__ == "__main__":
    raise SystemExit(main())
