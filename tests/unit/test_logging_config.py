"""
Unit tests for datacheck.utils.logging

Covers JSON and console formatting, context logging, setup_logging handler
wiring and environment-based configuration.
"""

import json
import logging
import logging.handlers
import os
import sys
from unittest.mock import patch

import pytest

from datacheck.utils.logging import (
    ConsoleFormatter,
    ContextLogger,
    JSONFormatter,
    configure_from_env,
    setup_logging,
)


def make_record(msg="Test message", level=logging.INFO, exc_info=None, **extra):
    record = logging.LogRecord(
        name="datacheck.test",
        level=level,
        pathname="/path/to/checks.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test JSONFormatter class"""

    def test_init_with_defaults(self):
        """Test initialization with default parameters"""
        formatter = JSONFormatter()

        assert formatter.include_timestamp is True
        assert formatter.include_hostname is True
        assert formatter.app_name == "datacheck"
        assert formatter.hostname is not None

    def test_init_without_hostname(self):
        formatter = JSONFormatter(include_hostname=False, app_name="qc")

        assert formatter.hostname is None
        assert formatter.app_name == "qc"

    def test_format_basic_log_record(self):
        """Test formatting a basic log record"""
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "datacheck.test"
        assert data["message"] == "Test message"
        assert data["app"] == "datacheck"
        assert "timestamp" in data
        assert "hostname" in data
        assert data["source"]["file"] == "/path/to/checks.py"
        assert data["source"]["line"] == 42
        assert "context" not in data

    def test_format_without_timestamp(self):
        data = json.loads(JSONFormatter(include_timestamp=False).format(make_record()))
        assert "timestamp" not in data

    def test_format_with_exception_info(self):
        """Test formatting with exception information"""
        try:
            raise ValueError("bad tolerance")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(JSONFormatter().format(make_record(level=logging.ERROR, exc_info=exc_info)))

        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "bad tolerance"
        assert isinstance(data["exception"]["traceback"], list)

    def test_format_with_extra_context(self):
        """Extra fields land under context, internal fields do not"""
        record = make_record(rows=15, sql="SELECT 1")

        data = json.loads(JSONFormatter().format(record))

        assert data["context"] == {"rows": 15, "sql": "SELECT 1"}

    def test_check_fields_promoted_to_top_level(self):
        """Suite and check identifiers are top-level keys for log filtering"""
        record = make_record(suite="core", check="gene_fk", position=3, rows=15)

        data = json.loads(JSONFormatter().format(record))

        assert data["suite"] == "core"
        assert data["check"] == "gene_fk"
        assert data["position"] == 3
        assert data["context"] == {"rows": 15}


class TestConsoleFormatter:
    """Test ConsoleFormatter class"""

    def test_format_without_colors(self):
        result = ConsoleFormatter(use_colors=False).format(make_record())

        assert "Test message" in result
        assert "datacheck.test" in result
        assert "[INFO]" in result

    @patch("sys.stderr.isatty", return_value=True)
    def test_colors_do_not_leak_into_record(self, mock_isatty):
        """The record's levelname is restored after coloring"""
        record = make_record(level=logging.WARNING)
        record.levelname = "WARNING"

        result = ConsoleFormatter(use_colors=True).format(record)

        assert "\033[33m" in result
        assert record.levelname == "WARNING"

    def test_format_with_extra_context(self):
        result = ConsoleFormatter(use_colors=False).format(make_record(suite="core", check_kind="fk"))

        assert "suite=core" in result
        assert "check_kind=fk" in result


class TestSetupLogging:
    """Test setup_logging function"""

    def teardown_method(self):
        """Clean up logging handlers after each test"""
        root_logger = logging.getLogger()
        for handler in root_logger.handlers:
            handler.close()
        root_logger.handlers.clear()
        root_logger.setLevel(logging.WARNING)

    def test_setup_logging_with_defaults(self):
        setup_logging()

        root_logger = logging.getLogger()
        assert root_logger.level == logging.INFO
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0].formatter, ConsoleFormatter)

    def test_invalid_level_defaults_to_info(self):
        setup_logging(level="LOUD")
        assert logging.getLogger().level == logging.INFO

    def test_file_handler_rotates(self, tmp_path):
        log_file = tmp_path / "logs" / "datacheck.log"

        setup_logging(log_file=str(log_file), console_output=False, max_bytes=1024, backup_count=3)

        [handler] = logging.getLogger().handlers
        assert isinstance(handler, logging.handlers.RotatingFileHandler)
        assert handler.maxBytes == 1024
        assert handler.backupCount == 3
        assert log_file.parent.is_dir()

    def test_json_format_applies_to_every_handler(self, tmp_path):
        setup_logging(log_file=str(tmp_path / "dc.log"), json_format=True)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 2
        assert all(isinstance(h.formatter, JSONFormatter) for h in handlers)

    def test_clears_existing_handlers(self):
        root_logger = logging.getLogger()
        root_logger.addHandler(logging.StreamHandler())
        root_logger.addHandler(logging.StreamHandler())

        setup_logging(console_output=True)

        assert len(root_logger.handlers) == 1


class TestContextLogger:
    """Test ContextLogger class"""

    @patch("logging.Logger.log")
    def test_context_added_to_every_call(self, mock_log):
        logger = ContextLogger("datacheck.test", suite="core")

        logger.info("Running check", check="gene_fk")

        mock_log.assert_called_once()
        args, kwargs = mock_log.call_args
        assert args[:2] == (logging.INFO, "Running check")
        assert kwargs["extra"] == {"suite": "core", "check": "gene_fk"}

    @patch("logging.Logger.log")
    def test_error_with_exc_info(self, mock_log):
        ContextLogger("datacheck.test").error("Check failed", exc_info=True)

        assert mock_log.call_args[0][0] == logging.ERROR
        assert mock_log.call_args[1]["exc_info"] is True

    def test_bind_returns_new_logger(self):
        parent = ContextLogger("datacheck.test", suite="core")

        child = parent.bind(check="gene_fk", suite="variation")

        assert child.get_context() == {"suite": "variation", "check": "gene_fk"}
        assert parent.get_context() == {"suite": "core"}
        assert child.logger is parent.logger

    @pytest.mark.parametrize("key", ["name", "message", "module"])
    def test_record_attribute_keys_rejected(self, key):
        with pytest.raises(ValueError, match=key):
            ContextLogger("datacheck.test", **{key: "x"})

        with pytest.raises(ValueError, match=key):
            ContextLogger("datacheck.test").bind(**{key: "x"})

        with pytest.raises(ValueError, match=key):
            ContextLogger("datacheck.test").info("Running check", **{key: "x"})

    def test_get_context_returns_copy(self):
        logger = ContextLogger("datacheck.test", suite="core")

        context = logger.get_context()
        context["check"] = "x"

        assert "check" not in logger.context


class TestConfigureFromEnv:
    """Test configure_from_env function"""

    @patch.dict(os.environ, {
        "LOG_LEVEL": "DEBUG",
        "LOG_FILE": "/tmp/datacheck.log",
        "LOG_JSON": "true",
        "LOG_CONSOLE": "false",
    })
    @patch("datacheck.utils.logging.config.setup_logging")
    def test_all_vars_set(self, mock_setup):
        configure_from_env()

        mock_setup.assert_called_once_with(
            level="DEBUG",
            log_file="/tmp/datacheck.log",
            console_output=False,
            json_format=True,
        )

    @patch.dict(os.environ, {}, clear=True)
    @patch("datacheck.utils.logging.config.setup_logging")
    def test_defaults(self, mock_setup):
        configure_from_env()

        mock_setup.assert_called_once_with(
            level="INFO",
            log_file=None,
            console_output=True,
            json_format=False,
        )
