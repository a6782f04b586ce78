import json
import logging

from catalog.app.logging_config import (
    StructuredFormatter,
    clear_request_id,
    log_warning,
    set_request_id,
)
from catalog.app.rendering import SafeRenderer


def _fail(_text):
    raise ValueError("bad input")


def test_structured_formatter_redacts_secrets_and_truncates():
    formatter = StructuredFormatter()
    logger = logging.getLogger("test.logging.format")
    record = logger.makeRecord(logger.name, logging.INFO, "", 0, "ok", (), None)
    record.extra_data = {"token": "abc", "description": "x" * 1200}

    payload = json.loads(formatter.format(record))
    assert payload["data"]["token"] == "[REDACTED]"
    assert payload["data"]["description"].endswith("[TRUNCATED]")
    assert payload["message"] == "ok"


def test_structured_formatter_includes_request_id():
    set_request_id("req-1")
    try:
        logger = logging.getLogger("test.logging.request")
        record = logger.makeRecord(logger.name, logging.WARNING, "", 0, "hi", (), None)
        payload = json.loads(StructuredFormatter().format(record))
    finally:
        clear_request_id()
    assert payload["request_id"] == "req-1"
    assert payload["level"] == "WARNING"


def test_log_warning_attaches_context(caplog):
    logger = logging.getLogger("test.logging.context")
    log_warning(logger, "something off", stage="convert")
    assert caplog.records[-1].extra_data == {"stage": "convert"}


def test_render_failure_record_formats_as_json(caplog):
    SafeRenderer(converter=_fail).render("text")

    payload = json.loads(StructuredFormatter().format(caplog.records[-1]))
    assert payload["message"] == "Markdown render failed: bad input"
    assert payload["data"] == {"stage": "convert", "error": "bad input"}
    assert payload["logger"] == "catalog.app.rendering"
