"""Tests for logging utilities."""

import logging
from io import StringIO

from hmmrec.logging import configure_logging, get_logger, set_log_level


def test_get_logger_returns_logger():
    """Test that get_logger returns a logger under the package namespace."""
    logger = get_logger("test_module")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "hmmrec.test_module"


def test_get_logger_keeps_package_names():
    assert get_logger("hmmrec.batch.runner").name == "hmmrec.batch.runner"
    assert get_logger().name == "hmmrec"


def test_get_logger_caching():
    """Test that get_logger caches loggers."""
    assert get_logger("test_module") is get_logger("test_module")


def test_get_logger_different_modules():
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2
    assert logger1.name != logger2.name


def test_set_log_level_string():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("test_module")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG
        set_log_level("ERROR")
        assert logger.level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)


def test_configure_logging_routes_output():
    """Test configure_logging swaps the stream and format of cached loggers."""
    logger = get_logger("test_module")
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream, format_string="%(levelname)s|%(message)s")
        logger.debug("decoding %d sequences", 3)
        assert stream.getvalue() == "DEBUG|decoding 3 sequences\n"
        assert len(logger.handlers) == 1
    finally:
        configure_logging(level=logging.WARNING)


def test_default_level_hides_info():
    logger = get_logger("test_quiet")
    stream = StringIO()
    try:
        configure_logging(level="WARNING", stream=stream)
        logger.info("not shown")
        logger.warning("shown")
        assert stream.getvalue() == "[WARNING] hmmrec.test_quiet: shown\n"
    finally:
        configure_logging(level=logging.WARNING)


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    assert get_logger("test_module").propagate is False


def test_later_loggers_inherit_level():
    """A logger first requested after set_log_level starts at that level."""
    try:
        set_log_level("INFO")
        logger = get_logger("created_after_level_change")
        assert logger.level == logging.INFO
        assert logger.handlers[0].level == logging.INFO
    finally:
        set_log_level(logging.WARNING)
