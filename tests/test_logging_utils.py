import io
import json
import logging
import sys
from datetime import date

import pytest

from israstat.adapters.config import config
from israstat.adapters.logging_utils import JsonLogFormatter, get_logger, log_context, route_logs_to


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="israstat.services.opportunities",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="mortgage calculated for %s",
        args=("FIRST_HOME",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_payload_shape():
    line = JsonLogFormatter().format(_record())
    payload = json.loads(line)

    assert set(payload) == {"ts", "env", "level", "logger", "message"}
    assert isinstance(payload["ts"], float)
    assert payload["env"] == config.ENV
    assert payload["level"] == "INFO"
    assert payload["logger"] == "israstat.services.opportunities"
    assert payload["message"] == "mortgage calculated for FIRST_HOME"


def test_formatter_merges_context():
    ctx = {"max_property_price": 1_587_560, "binding_constraint": "income", "dsr": 0.3}
    payload = json.loads(JsonLogFormatter().format(_record(context=ctx)))

    assert payload["max_property_price"] == 1_587_560
    assert payload["binding_constraint"] == "income"
    assert payload["dsr"] == 0.3
    assert payload["logger"] == "israstat.services.opportunities"


def test_formatter_ignores_non_dict_context_and_stringifies_odd_values():
    payload = json.loads(JsonLogFormatter().format(_record(context="not a dict")))
    assert "context" not in payload

    payload = json.loads(JsonLogFormatter().format(_record(context={"anchor": date(2026, 2, 1)})))
    assert payload["anchor"] == "2026-02-01"


def test_formatter_includes_exception_text():
    try:
        raise ValueError("boom")
    except ValueError:
        record = _record(exc_info=sys.exc_info())
    payload = json.loads(JsonLogFormatter().format(record))
    assert "ValueError: boom" in payload["exc"]


@pytest.fixture
def buffer_logger():
    buf = io.StringIO()
    logger = get_logger("israstat.tests.buffer", stream=buf)
    logger.setLevel(logging.DEBUG)
    yield logger, buf
    logger.handlers.clear()


def test_log_context_writes_one_json_line(buffer_logger):
    logger, buf = buffer_logger
    log_context(logger, logging.INFO, "deals generated", neighborhood="Florentin", count=40)

    lines = buf.getvalue().splitlines()
    assert len(lines) == 1
    payload = json.loads(lines[0])
    assert payload["message"] == "deals generated"
    assert payload["neighborhood"] == "Florentin"
    assert payload["count"] == 40


def test_log_context_respects_level(buffer_logger):
    logger, buf = buffer_logger
    logger.setLevel(logging.WARNING)
    log_context(logger, logging.INFO, "quiet", x=1)
    assert buf.getvalue() == ""


def test_route_logs_to_moves_existing_handlers(buffer_logger):
    logger, first = buffer_logger
    second = io.StringIO()
    try:
        route_logs_to(second)
        logger.info("after routing")
    finally:
        route_logs_to(sys.stdout)

    assert first.getvalue() == ""
    assert json.loads(second.getvalue())["message"] == "after routing"
