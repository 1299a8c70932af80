from __future__ import annotations

from schemaforms import logger as package_logger
from schemaforms.logging import _flatten_extra, _rename_event_key, configure_logging, get_logger
from schemaforms.settings import Settings


def test_stdlib_logger_is_configured(capsys) -> None:
    configure_logging(settings=Settings(log_json=False, log_level="INFO"), force=True)
    logger = get_logger("tests")
    logger.info("hello")

    captured = capsys.readouterr()
    assert "hello" in captured.err.lower()


def test_event_key_is_renamed_to_message() -> None:
    event_dict = _rename_event_key(None, "info", {"event": "saved", "schema_id": "a"})
    assert event_dict == {"message": "saved", "schema_id": "a"}


def test_package_logger_created_on_import() -> None:
    assert callable(getattr(package_logger, "info", None))


def test_extra_context_is_lifted_to_top_level() -> None:
    event_dict = {"event": "saved", "schema_id": "a", "extra": {"schema_id": "b", "count": 2}}
    event_dict = _flatten_extra(None, "info", event_dict)
    assert event_dict == {"event": "saved", "schema_id": "a", "count": 2}


def test_log_file_directory_is_created(tmp_path) -> None:
    log_file = tmp_path / "logs" / "schemaforms.log"
    configure_logging(settings=Settings(log_json=True, log_file=str(log_file)), force=True)
    get_logger("tests").warning("written", extra={"schema_id": "s1"})

    assert '"schema_id": "s1"' in log_file.read_text(encoding="utf-8")
    configure_logging(settings=Settings(log_json=False), force=True)
