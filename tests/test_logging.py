"""Tests for logging utilities."""

import logging
from io import StringIO

import pytest

from rltiles.diagnostics import debug_context
from rltiles.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)
from rltiles.tilecoding import TileCoder


@pytest.fixture
def captured():
    """Route every rltiles logger to an in-memory stream for one test."""
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)
    try:
        yield stream
    finally:
        configure_logging(level=logging.WARNING)


def test_get_logger_prefixes_foreign_names():
    """Test that loggers outside the package are placed under rltiles."""
    logger = get_logger("experiment")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "rltiles.experiment"


def test_get_logger_keeps_package_names():
    """Test that module names inside the package are used as-is."""
    assert get_logger("rltiles.tilecoding.core").name == "rltiles.tilecoding.core"
    assert get_logger().name == "rltiles"


def test_get_logger_caching():
    """Test that repeated lookups return the same configured logger."""
    logger1 = get_logger("cache_check")
    logger2 = get_logger("cache_check")
    assert logger1 is logger2
    assert len(logger1.handlers) == 1


def test_logger_does_not_propagate():
    """Test that loggers don't propagate to root logger."""
    assert get_logger("no_propagation").propagate is False


def test_configure_logging_redirects_output():
    """Test that configure_logging sends records of existing loggers to the stream."""
    logger = get_logger("redirect")
    stream = StringIO()
    try:
        configure_logging(level=logging.DEBUG, stream=stream)
        logger.debug("Encoding observation")
        output = stream.getvalue()
        assert "Encoding observation" in output
        assert "[DEBUG] rltiles.redirect" in output
    finally:
        configure_logging(level=logging.WARNING)


def test_configure_logging_custom_format():
    """Test that a custom format string is applied."""
    stream = StringIO()
    logger = get_logger("formatted")
    try:
        configure_logging(level="INFO", format_string="%(levelname)s|%(message)s", stream=stream)
        logger.info("hello")
        assert stream.getvalue().strip() == "INFO|hello"
    finally:
        configure_logging(level=logging.WARNING)


def test_set_log_level_accepts_strings():
    """Test that set_log_level accepts string levels."""
    logger = get_logger("levels")
    try:
        set_log_level("DEBUG")
        assert logger.level == logging.DEBUG

        set_log_level("error")
        assert logger.level == logging.ERROR
        assert all(h.level == logging.ERROR for h in logger.handlers)
    finally:
        set_log_level(logging.WARNING)


def test_unknown_level_string_falls_back_to_warning():
    """Test that an unknown level name maps to WARNING."""
    logger = get_logger("levels")
    try:
        set_log_level("CHATTY")
        assert logger.level == logging.WARNING
    finally:
        set_log_level(logging.WARNING)


def test_tile_coder_construction_is_logged(captured):
    """Test that building a coder emits a debug record."""
    TileCoder([0.0], [1.0], [[4]])
    assert "Constructed TileCoder(num_tilings=1" in captured.getvalue()


def test_out_of_bounds_warning_only_in_debug_mode(captured):
    """Test that clamped inputs are reported only while debug mode is on."""
    coder = TileCoder([0.0, 0.0], [1.0, 1.0], [[2, 2]])

    coder.encode([5.0, 0.5])
    assert "outside tiling bounds" not in captured.getvalue()

    with debug_context(True):
        coder.encode([5.0, 0.5])
    assert "outside tiling bounds along dimensions [0]" in captured.getvalue()
