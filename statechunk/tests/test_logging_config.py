"""
Tests for logging configuration.
"""

import json
import logging

import pytest

from statechunk.logging_config import TraceIDFilter, get_logger, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_reads_environment(monkeypatch, restore_root_logger):
    monkeypatch.setenv("STATECHUNK_LOG_LEVEL", "debug")
    monkeypatch.setenv("STATECHUNK_LOG_FORMAT", "text")
    setup_logging()

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1


def test_unknown_level_falls_back_to_info(restore_root_logger):
    setup_logging(level="chatty", log_format="text")
    assert restore_root_logger.level == logging.INFO


def test_json_format_emits_trace_id(capsys, restore_root_logger):
    setup_logging(level="INFO", log_format="json")
    get_logger("statechunk.test", trace_id="example.nested1").info("Compiled")

    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["message"] == "Compiled"
    assert record["trace_id"] == "example.nested1"
    assert record["level"] == "INFO"


def test_text_format_defaults_trace_id(capsys, restore_root_logger):
    setup_logging(level="INFO", log_format="text")
    logging.getLogger("statechunk.test").warning("no adapter")

    err = capsys.readouterr().err
    assert "no adapter" in err
    assert "[trace_id=N/A]" in err


def test_trace_id_filter_keeps_existing_value():
    record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
    record.trace_id = "kept"
    assert TraceIDFilter().filter(record) is True
    assert record.trace_id == "kept"


def test_get_logger_without_trace_id():
    adapter = get_logger("statechunk.test")
    assert adapter.extra == {"trace_id": "N/A"}
