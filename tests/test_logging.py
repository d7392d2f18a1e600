"""
Tests for logging setup — level resolution and handlers.
"""

import logging

from lattice.core.observability.logging_config import (
    _parse_level,
    level_from_flags,
    setup_logging,
)


class TestLevelFromFlags:
    def test_flag_precedence(self):
        env = {"LATTICE_LOG_LEVEL": "INFO"}
        assert level_from_flags(debug=True, verbose=True, quiet=True, environ=env) == "DEBUG"
        assert level_from_flags(verbose=True, quiet=True, environ=env) == "INFO"
        assert level_from_flags(quiet=True, environ=env) == "ERROR"

    def test_env_level(self):
        assert level_from_flags(environ={"LATTICE_LOG_LEVEL": "debug"}) == "debug"

    def test_default(self):
        assert level_from_flags(environ={}) == "WARNING"

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("LATTICE_LOG_LEVEL", "ERROR")
        assert level_from_flags() == "ERROR"


class TestSetupLogging:
    def test_console_level(self):
        setup_logging(level="INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].level == logging.INFO

    def test_repeated_setup_replaces_handlers(self):
        setup_logging(level="INFO")
        setup_logging(level="ERROR")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.ERROR

    def test_console_format_by_level(self):
        setup_logging(level="DEBUG")
        assert "%(lineno)d" in logging.getLogger().handlers[0].formatter._fmt
        setup_logging(level="WARNING")
        assert logging.getLogger().handlers[0].formatter._fmt == "%(message)s"

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "lattice.log"
        setup_logging(level="WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        logging.getLogger("lattice.core.engine.graph").debug("to file only")
        for handler in root.handlers:
            handler.flush()
        assert "to file only" in log_file.read_text()
        for handler in root.handlers:
            handler.close()

    def test_file_level_defaults_to_console(self, tmp_path):
        setup_logging(level="ERROR", log_file=str(tmp_path / "lattice.log"))
        root = logging.getLogger()
        assert [h.level for h in root.handlers] == [logging.ERROR, logging.ERROR]
        for handler in root.handlers:
            handler.close()


class TestParseLevel:
    def test_names(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("ERROR") == logging.ERROR

    def test_fallback(self):
        assert _parse_level(None) == logging.WARNING
        assert _parse_level("") == logging.WARNING
        assert _parse_level("loud") == logging.WARNING
