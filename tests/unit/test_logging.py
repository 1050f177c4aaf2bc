from __future__ import annotations

import json
import logging

from gradebook.utils.logging import JsonFormatter, _json_formatter, configure_logging

EXPECTED_ROWS = 10
EXPECTED_ID = 3


def _record(msg: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def test_json_formatter_promotes_standard_extra_fields() -> None:
    record = _record()
    record.rows = EXPECTED_ROWS
    record.path = "/tmp/grades.db"

    payload = json.loads(_json_formatter(record))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "test.logger"
    assert payload["message"] == "hello"
    assert payload["rows"] == EXPECTED_ROWS
    assert payload["path"] == "/tmp/grades.db"
    assert "lineno" not in payload


def test_json_formatter_supports_legacy_nested_extra_field() -> None:
    record = _record()
    record.extra = {"id": EXPECTED_ID}

    payload = json.loads(_json_formatter(record))

    assert payload["id"] == EXPECTED_ID
    assert "extra" not in payload


def test_configure_logging_installs_json_handler() -> None:
    root = logging.getLogger()
    try:
        configure_logging(level="debug", json_logs=True)
        assert root.level == logging.DEBUG
        assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)
    finally:
        configure_logging(level="WARNING")
