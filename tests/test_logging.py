"""
Tests for logging configuration module.
"""

import logging
import sys
from pathlib import Path

import pytest

from retable.logging_config import (
    setup_logging,
    get_logger,
    ColoredFormatter,
)


def make_record(level=logging.INFO, msg="Test message"):
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestSetupLogging:
    """Test logging setup and configuration."""

    def test_setup_logging_default(self):
        """Test default logging setup."""
        logger = setup_logging()
        assert logger is not None
        assert logger.name == "retable"
        assert logger.level == logging.INFO

    def test_setup_logging_verbose(self):
        """Test verbose logging enables DEBUG level."""
        logger = setup_logging(verbose=True)
        assert logger.level == logging.DEBUG

    def test_file_records_debug_at_info_level(self, tmp_path, capsys):
        """Test that the log file receives debug output the console filters out."""
        log_file = tmp_path / "debug.log"
        logger = setup_logging(log_file=str(log_file))
        logger.debug("widths computed")
        assert "widths computed" in log_file.read_text()
        assert "widths computed" not in capsys.readouterr().err

    def test_console_handler_uses_stderr(self):
        """Test that diagnostics never go to stdout."""
        logger = setup_logging()
        streams = [h.stream for h in logger.handlers if isinstance(h, logging.StreamHandler)]
        assert streams == [sys.stderr]

    def test_setup_logging_with_file(self, tmp_path):
        """Test logging to file."""
        log_file = tmp_path / "test.log"
        logger = setup_logging(log_file=str(log_file))

        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) > 0

        logger.info("Test message")

        assert log_file.exists()
        assert "Test message" in log_file.read_text()

    def test_setup_logging_creates_log_directory(self, tmp_path):
        """Test that log directory is created if it doesn't exist."""
        log_file = tmp_path / "subdir" / "test.log"
        logger = setup_logging(log_file=str(log_file))

        logger.info("Test")
        assert log_file.exists()

    def test_setup_logging_custom_level(self):
        logger = setup_logging(level="warning")
        assert logger.level == logging.WARNING

    def test_repeated_setup_replaces_handlers(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_console_output_format(self, capsys):
        logger = setup_logging()
        logger.error("something broke")
        assert capsys.readouterr().err == "retable: error: something broke\n"


class TestGetLogger:
    """Test logger retrieval."""

    def test_get_logger_returns_instance(self):
        assert isinstance(get_logger(), logging.Logger)

    def test_get_logger_singleton(self):
        """Test get_logger returns same instance."""
        assert get_logger() is get_logger()


class TestColoredFormatter:
    """Test colored log formatter."""

    def test_colored_formatter_with_colors(self):
        formatter = ColoredFormatter("%(levelname_colored)s %(message)s", use_colors=True)
        formatted = formatter.format(make_record())
        assert "Test message" in formatted
        assert "\033[32minfo\033[0m" in formatted

    def test_colored_formatter_without_colors(self):
        formatter = ColoredFormatter("%(levelname_colored)s %(message)s", use_colors=False)
        formatted = formatter.format(make_record())
        assert formatted == "info Test message"

    @pytest.mark.parametrize(
        "level", [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL]
    )
    def test_colored_formatter_all_levels(self, level):
        formatter = ColoredFormatter("%(levelname_colored)s", use_colors=True)
        formatted = formatter.format(make_record(level=level))
        assert logging.getLevelName(level).lower() in formatted


class TestVlog:
    """Test the vlog helper."""

    def test_vlog_when_verbose(self, caplog):
        from retable.common import vlog

        setup_logging(level="INFO", propagate=True)
        with caplog.at_level(logging.INFO, logger="retable"):
            vlog("Test vlog message", verbose=True)
        assert "Test vlog message" in caplog.text

    def test_vlog_silent_by_default(self, caplog, monkeypatch):
        from retable.common import vlog

        monkeypatch.delenv("RETABLE_DEBUG", raising=False)
        setup_logging(level="INFO", propagate=True)
        with caplog.at_level(logging.INFO, logger="retable"):
            vlog("Should not appear", verbose=False)
        assert "Should not appear" not in caplog.text

    def test_vlog_debug_environment(self, caplog, monkeypatch):
        from retable.common import vlog

        monkeypatch.setenv("RETABLE_DEBUG", "1")
        setup_logging(level="INFO", propagate=True)
        with caplog.at_level(logging.INFO, logger="retable"):
            vlog("From environment")
        assert "From environment" in caplog.text


class TestDecodeEscapes:
    """Test command-line escape decoding."""

    @pytest.mark.parametrize("raw,expected", [
        ("\\t", "\t"),
        ("$'\\t'", "\t"),
        (",", ","),
        ("\t", "\t"),
        ("\\u00b7", "·"),
        ("·", "·"),
        ("\\", "\\"),
        ("\\x", "\\x"),
        ("$'\\'", "\\"),
    ])
    def test_decode(self, raw, expected):
        from retable.common import decode_escapes

        assert decode_escapes(raw) == expected
