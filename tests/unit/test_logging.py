"""
Unit tests for the logger and its container wiring.
"""

import logging

from gogo.core.bootstrap import bootstrap, is_initialized
from gogo.core.container import get_container
from gogo.core.di import get_logger
from gogo.core.interfaces.logger import ILogger
from gogo.core.interfaces.presenter import IPresenter
from gogo.core.settings import load_settings
from gogo.services.logging import GogoLogger, NullLogger, parse_level


class TestGetLogger:
    """Tests for logger resolution."""

    def test_null_logger_before_bootstrap(self):
        assert isinstance(get_logger(), NullLogger)

    def test_bootstrap_registers_services(self, tmp_path):
        bootstrap(load_settings(start_dir=str(tmp_path)))
        assert is_initialized()
        assert isinstance(get_logger(), GogoLogger)
        assert get_container().try_resolve(IPresenter) is not None

    def test_verbose_enables_debug(self, tmp_path):
        bootstrap(load_settings(start_dir=str(tmp_path)), verbose=True)
        logger = get_container().resolve(ILogger)
        assert logger._console_handler is not None
        assert logger._console_handler.level == logging.DEBUG


class TestGogoLogger:
    """Tests for GogoLogger file output."""

    def test_writes_to_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "gogo.log"
        logger = GogoLogger(name="gogo-test-file", level="info", file_enabled=True, log_file=log_file)

        logger.info("spawned %s", "api")
        logger.debug("hidden")
        for handler in logger._logger.handlers:
            handler.flush()

        text = log_file.read_text()
        assert "spawned api" in text
        assert "hidden" not in text

    def test_no_handlers_by_default(self):
        logger = GogoLogger(name="gogo-test-quiet")
        assert logger._logger.handlers == []

    def test_level_names(self):
        assert parse_level("DEBUG") == logging.DEBUG
        assert parse_level("error") == logging.ERROR
        assert parse_level("chatty") == logging.WARNING
