"""
Tests for logging configuration module.
"""

import logging
import sys

from cli_inventory.common import vlog
from cli_inventory.logging_config import (
    LOGGER_NAME,
    ColoredFormatter,
    get_logger,
    setup_logging,
)


def _console_handlers(logger):
    return [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]


class TestSetupLogging:
    """Test logging setup and configuration."""

    def test_setup_logging_default(self):
        logger = setup_logging()
        assert logger.name == LOGGER_NAME == "cli_inventory"
        assert logger.level == logging.WARNING

    def test_console_goes_to_stderr(self):
        """Test that log lines never mix with results on stdout."""
        logger = setup_logging()
        handlers = _console_handlers(logger)
        assert len(handlers) == 1
        assert handlers[0].stream is sys.stderr

    def test_setup_logging_verbose(self):
        assert setup_logging(verbose=True).level == logging.DEBUG

    def test_setup_logging_quiet(self):
        logger = setup_logging(quiet=True)
        assert logger.level == logging.WARNING
        assert _console_handlers(logger) == []

    def test_setup_logging_with_file(self, tmp_path):
        log_file = tmp_path / "nested" / "run.log"
        logger = setup_logging(log_file=str(log_file), quiet=True)

        logger.debug("written to file")
        for h in logger.handlers:
            h.flush()

        assert logger.level == logging.DEBUG
        assert "written to file" in log_file.read_text()
        for h in list(logger.handlers):
            h.close()
        logger.handlers.clear()

    def test_repeated_setup_replaces_handlers(self):
        setup_logging()
        logger = setup_logging()
        assert len(_console_handlers(logger)) == 1


class TestGetLogger:
    """Tests for get_logger()."""

    def test_root_package_logger(self):
        setup_logging()
        assert get_logger().name == "cli_inventory"

    def test_child_logger(self):
        setup_logging()
        assert get_logger("executables").name == "cli_inventory.executables"

    def test_qualified_child_name(self):
        setup_logging()
        assert get_logger("cli_inventory.scanner").name == "cli_inventory.scanner"


class TestColoredFormatter:
    """Tests for ColoredFormatter."""

    def _record(self, level):
        return logging.LogRecord("cli_inventory", level, __file__, 1, "hello", None, None)

    def test_colors(self):
        formatter = ColoredFormatter("%(levelname_colored)s %(message)s", use_colors=True)
        output = formatter.format(self._record(logging.ERROR))
        assert ColoredFormatter.COLORS["ERROR"] in output
        assert output.endswith("hello")

    def test_no_colors(self):
        formatter = ColoredFormatter("%(levelname_colored)s %(message)s", use_colors=False)
        assert formatter.format(self._record(logging.WARNING)) == "WARNING hello"


class TestVlog:
    """Tests for verbose trace logging."""

    def test_verbose_logs_info(self, caplog):
        setup_logging(level="INFO", propagate=True)
        with caplog.at_level(logging.INFO, logger="cli_inventory"):
            vlog("tracing", verbose=True)
        assert "tracing" in caplog.text

    def test_quiet_logs_debug_only(self, caplog, monkeypatch):
        monkeypatch.delenv("CLI_INVENTORY_DEBUG", raising=False)
        setup_logging(level="INFO", propagate=True)
        with caplog.at_level(logging.INFO, logger="cli_inventory"):
            vlog("hidden", verbose=False)
        assert "hidden" not in caplog.text
