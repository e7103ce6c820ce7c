from __future__ import annotations

import logging
from io import StringIO

import throughput_records.logging.init as log_init
from throughput_records.logging.init import (
    APP_LOGGER_NAME,
    LabeledFormatter,
    get_logger,
    log_summary,
    set_debug,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    """Test that setup_logging creates a logger with labeled format."""
    logger = setup_logging()

    assert logger.name == APP_LOGGER_NAME
    assert logger.level == logging.INFO
    assert logger.propagate is False
    assert len(logger.handlers) == 1

    handler = logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert isinstance(handler.formatter, LabeledFormatter)


def test_logging_labeled_prefixes():
    """Test that logging outputs have correct labeled prefixes (INFO|WARN|ERROR|SUMMARY)."""
    captured_output = StringIO()

    logger = logging.getLogger("test_throughput_records")
    logger.setLevel(logging.INFO)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(25, "SUMMARY")

    handler = logging.StreamHandler(captured_output)
    handler.setLevel(logging.INFO)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(25, "Test summary message")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_module_loggers_share_app_handler(capsys):
    """Package module loggers are children of the application logger."""
    setup_logging()
    logging.getLogger("throughput_records.services.editor").info("Record added successfully!")
    assert capsys.readouterr().out == "INFO Record added successfully!\n"


def test_get_logger_returns_configured_logger():
    setup_logger = setup_logging()
    assert get_logger() is setup_logger


def test_setup_logging_idempotent():
    """Test that calling setup_logging multiple times is safe."""
    logger1 = setup_logging()
    logger2 = setup_logging()
    assert logger1 is logger2
    assert len(logger1.handlers) == 1


def test_summary_level_name():
    setup_logging()
    assert logging.getLevelName(25) == "SUMMARY"


def test_log_summary_convenience_function(capsys):
    setup_logging()
    log_summary("records=3 created=0 updated=0 deleted=0 reloads=0 saves=0 errors=0")
    out = capsys.readouterr().out
    assert out == "SUMMARY records=3 created=0 updated=0 deleted=0 reloads=0 saves=0 errors=0\n"


def test_set_debug_toggles_levels(capsys):
    logger = setup_logging()
    logger.debug("hidden")
    set_debug()
    assert logger.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in logger.handlers)
    logger.debug("shown")
    set_debug(False)
    assert logger.level == logging.INFO
    assert capsys.readouterr().out == "DEBUG shown\n"


def test_reset_logging_clears_state():
    setup_logging()
    log_init.reset_logging()
    assert log_init._logger is None
    assert logging.getLogger(APP_LOGGER_NAME).handlers == []
