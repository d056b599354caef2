"""Tests for settings and structured logging."""

import json
import logging

import pytest

from numkernel.core.config import Settings
from numkernel.core.logging import (
    LoggerAdapter,
    StructuredFormatter,
    TextFormatter,
    get_context_logger,
    setup_logging,
)
from numkernel.math import FloatKind, Int, create_float, create_int
from numkernel.math.representation import I64_MAX


class TestSettings:
    """Test configuration loading."""

    def test_defaults(self):
        """Test default values."""
        config = Settings()
        assert config.MAX_RECURRING_PERIOD == 10000
        assert config.MAX_RESULT_DIGITS == 100000
        assert config.SCIENTIFIC_THRESHOLD == 50
        assert config.LOG_FORMAT == "text"

    def test_environment_override(self, monkeypatch):
        """Test NUMKERNEL_ prefixed environment variables."""
        monkeypatch.setenv("NUMKERNEL_MAX_RECURRING_PERIOD", "12")
        monkeypatch.setenv("NUMKERNEL_LOG_LEVEL", "DEBUG")
        config = Settings()
        assert config.MAX_RECURRING_PERIOD == 12
        assert config.LOG_LEVEL == "DEBUG"

    def test_threshold_affects_display(self, override_settings):
        """Test the scientific threshold drives output."""
        override_settings(SCIENTIFIC_THRESHOLD=3)
        assert str(create_float("12345")) == "1.2345e4"

    def test_digit_limit_affects_powers(self, override_settings):
        """Test the digit ceiling guards integer powers."""
        from numkernel.core.errors import NumberTooLargeError

        override_settings(MAX_RESULT_DIGITS=10)
        with pytest.raises(NumberTooLargeError):
            Int(10) ** Int(20)


class TestFormatters:
    """Test log formatters."""

    def _record(self, **extra):
        record = logging.LogRecord(
            name="numkernel.test",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="Recurring cycle too long",
            args=(),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_structured_formatter(self):
        """Test JSON output carries extra data."""
        output = StructuredFormatter().format(self._record(extra_data={"limit": 5}))
        data = json.loads(output)
        assert data["level"] == "WARNING"
        assert data["message"] == "Recurring cycle too long"
        assert data["limit"] == 5

    def test_text_formatter(self):
        """Test the human-readable format."""
        output = TextFormatter().format(self._record())
        assert output.endswith("numkernel.test - WARNING - Recurring cycle too long")

    def test_text_formatter_context(self):
        """Test context is appended as key=value pairs."""
        output = TextFormatter().format(self._record(extra_data={"component": "numeric", "limit": 5}))
        assert output.endswith("[component=numeric limit=5]")


class TestContextLogger:
    """Test the context logger adapter."""

    def test_context_merged(self):
        """Test permanent context and per-call data are merged."""
        adapter = get_context_logger("numkernel.test", component="numeric")
        assert isinstance(adapter, LoggerAdapter)
        msg, kwargs = adapter.process("hello", {"extra_data": {"operation": "add"}})
        assert msg == "hello"
        assert kwargs["extra"]["extra_data"] == {"component": "numeric", "operation": "add"}

    def test_promotion_logged(self, caplog):
        """Test Small overflow emits a debug record."""
        with caplog.at_level(logging.DEBUG, logger="numkernel.math.integer"):
            result = Int(I64_MAX) + Int(1)
        assert not result.is_small()
        assert any("promoting to big" in r.getMessage() for r in caplog.records)
        record = next(r for r in caplog.records if "promoting" in r.getMessage())
        assert record.extra_data["operation"] == "add"
        assert record.extra_data["component"] == "integer"

    def test_long_cycle_warning(self, caplog, override_settings):
        """Test the irrational fallback warns."""
        override_settings(MAX_RECURRING_PERIOD=2)
        with caplog.at_level(logging.WARNING, logger="numkernel.math.numeric"):
            value = create_int("1") / create_int("7")
        assert value.kind is FloatKind.IRRATIONAL
        assert any("truncating to irrational" in r.getMessage() for r in caplog.records)

    def test_setup_logging(self, tmp_path):
        """Test handlers are installed from settings."""
        log_file = tmp_path / "logs" / "numkernel.log"
        logger = setup_logging(Settings(LOG_LEVEL="DEBUG", LOG_FORMAT="json", LOG_FILE=str(log_file)))
        try:
            assert logger.name == "numkernel"
            get_context_logger("numkernel.test", component="tests").info("configured")
            for handler in logger.handlers:
                handler.flush()
            line = log_file.read_text().strip().splitlines()[-1]
            data = json.loads(line)
            assert data["message"] == "configured"
            assert data["component"] == "tests"
        finally:
            for handler in list(logger.handlers):
                if not isinstance(handler, logging.NullHandler):
                    logger.removeHandler(handler)
                    handler.close()
            logger.setLevel(logging.NOTSET)

    def test_setup_logging_leaves_root_alone(self):
        """Test the root logger gets no handlers."""
        root_handlers = list(logging.getLogger().handlers)
        logger = setup_logging(Settings(LOG_LEVEL="INFO"))
        try:
            assert logging.getLogger().handlers == root_handlers
        finally:
            for handler in list(logger.handlers):
                if not isinstance(handler, logging.NullHandler):
                    logger.removeHandler(handler)
                    handler.close()
            logger.setLevel(logging.NOTSET)

    def test_sqrt_logged(self, caplog):
        """Test irrational roots emit a debug record."""
        with caplog.at_level(logging.DEBUG, logger="numkernel.math.numeric"):
            create_int("2").sqrt()
        assert any(r.getMessage() == "Irrational square root" for r in caplog.records)
        assert create_float("4").sqrt() == create_int("2")
