"""
Unit tests for LoggingService.

Tests logging configuration, logger creation, error logging,
performance logging, and sensitive data sanitization.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import json
from io import StringIO

import pytest

from semantica_core.exceptions import ProcessingError
from semantica_core.logging_service import LoggingConfig, LoggingService

# ============================================================
# FIXTURES
# ============================================================


@pytest.fixture(autouse=True)
def unconfigured_logging():
    """Start every test from an unconfigured LoggingService."""
    LoggingService.reset()
    yield
    LoggingService.reset()


@pytest.fixture
def stream():
    """Configure JSON logging at DEBUG into an in-memory stream."""
    buffer = StringIO()
    LoggingService.configure_logging(
        config=LoggingConfig(level="DEBUG", format="json", output_stream=buffer)
    )
    return buffer


def _records(buffer: StringIO) -> list[dict]:
    return [json.loads(line) for line in buffer.getvalue().splitlines() if line.strip()]


# ============================================================
# CONFIGURATION TESTS
# ============================================================


class TestConfigureLogging:
    """Tests for LoggingService.configure_logging."""

    def test_configure_logging_success(self):
        """Test normal logging configuration."""
        LoggingService.configure_logging(level="INFO", format="json")

        assert LoggingService.is_configured() is True
        assert LoggingService._log_level == "INFO"
        assert LoggingService._config is not None

    def test_level_is_case_insensitive(self):
        """Test lowercase level names are accepted and normalized."""
        LoggingService.configure_logging(level="debug", format="CONSOLE")

        assert LoggingService._log_level == "DEBUG"
        assert LoggingService._config.format == "console"

    def test_invalid_level_raises(self):
        """Test unknown log level is rejected."""
        with pytest.raises(ValueError, match="Invalid log level"):
            LoggingService.configure_logging(level="VERBOSE")

        assert LoggingService.is_configured() is False

    def test_invalid_format_raises(self):
        """Test unknown output format is rejected."""
        with pytest.raises(ValueError, match="Invalid format"):
            LoggingService.configure_logging(format="xml")

    def test_double_configuration_raises(self):
        """Test configuring twice without reset fails."""
        LoggingService.configure_logging()

        with pytest.raises(RuntimeError, match="already configured"):
            LoggingService.configure_logging()

    def test_reset_allows_reconfiguration(self):
        """Test reset() clears state so configure can run again."""
        LoggingService.configure_logging(level="INFO")
        LoggingService.reset()

        assert LoggingService.is_configured() is False
        LoggingService.configure_logging(level="ERROR")
        assert LoggingService._log_level == "ERROR"

    def test_default_sensitive_keys_cover_source_text(self):
        """Test default config redacts raw file content keys."""
        config = LoggingConfig()

        assert "content" in config.sensitive_keys
        assert "source" in config.sensitive_keys
        assert "password" in config.sensitive_keys

    def test_explicit_sensitive_keys_are_kept(self):
        """Test a caller-supplied sensitive key set is not replaced."""
        config = LoggingConfig(sensitive_keys={"filename"})

        assert config.sensitive_keys == {"filename"}


# ============================================================
# LOGGER TESTS
# ============================================================


class TestGetLogger:
    """Tests for LoggingService.get_logger."""

    def test_requires_configuration(self):
        """Test get_logger before configure_logging raises."""
        with pytest.raises(RuntimeError, match="not configured"):
            LoggingService.get_logger("semantica.test")

    def test_logger_is_cached(self, stream):
        """Test the same name returns the same logger object."""
        first = LoggingService.get_logger("semantica.test")
        second = LoggingService.get_logger("semantica.test")

        assert first is second

    def test_empty_name_raises(self, stream):
        """Test empty logger name is rejected."""
        with pytest.raises(ValueError, match="cannot be empty"):
            LoggingService.get_logger("")

    def test_long_name_raises(self, stream):
        """Test logger names over 200 characters are rejected."""
        with pytest.raises(ValueError, match="maximum length"):
            LoggingService.get_logger("x" * 201)

    def test_json_output(self, stream):
        """Test events are rendered as one JSON object per line."""
        LoggingService.get_logger("semantica.test").info("analysis_complete", language="go")

        records = _records(stream)
        assert records[-1]["event"] == "analysis_complete"
        assert records[-1]["language"] == "go"
        assert records[-1]["level"] == "info"


# ============================================================
# ERROR LOGGING TESTS
# ============================================================


class TestLogError:
    """Tests for LoggingService.log_error."""

    def test_log_error_includes_error_code(self, stream):
        """Test SemanticaError subclasses contribute their error code."""
        error = ProcessingError("boom")

        LoggingService.log_error(error, correlation_id=error.correlation_id)

        record = _records(stream)[-1]
        assert record["event"] == "error_occurred"
        assert record["error_type"] == "ProcessingError"
        assert record["error_message"] == "boom"
        assert record["error_code"] == "PROC_001"
        assert record["correlation_id"] == error.correlation_id

    def test_log_error_redacts_sensitive_context(self, stream):
        """Test source text in context is replaced by a marker."""
        LoggingService.log_error(
            ValueError("bad"),
            correlation_id="abc",
            context={"language": "go", "content": "package main", "nested": {"token": "t"}},
            include_stack_trace=False,
        )

        record = _records(stream)[-1]
        assert record["language"] == "go"
        assert record["content"] == "[REDACTED]"
        assert record["nested"] == {"token": "[REDACTED]"}
        assert "stack_trace" not in record

    def test_log_error_empty_correlation_id_raises(self, stream):
        """Test an empty correlation id is rejected."""
        with pytest.raises(ValueError, match="correlation_id"):
            LoggingService.log_error(ValueError("bad"), correlation_id="")


# ============================================================
# PERFORMANCE LOGGING TESTS
# ============================================================


class TestLogPerformance:
    """Tests for LoggingService.log_performance."""

    def test_log_performance(self, stream):
        """Test a performance metric record carries operation and duration."""
        LoggingService.log_performance("analyze", 12.5, metadata={"language": "python"})

        record = _records(stream)[-1]
        assert record["event"] == "performance_metric"
        assert record["operation"] == "analyze"
        assert record["duration_ms"] == 12.5
        assert record["language"] == "python"

    def test_negative_duration_raises(self, stream):
        """Test negative durations are rejected."""
        with pytest.raises(ValueError, match="negative"):
            LoggingService.log_performance("analyze", -1.0)

    def test_empty_operation_raises(self, stream):
        """Test an empty operation name is rejected."""
        with pytest.raises(ValueError, match="operation"):
            LoggingService.log_performance("", 1.0)

    def test_debug_records_filtered_above_debug(self):
        """Test performance records are dropped at WARNING level."""
        buffer = StringIO()
        LoggingService.configure_logging(
            config=LoggingConfig(level="WARNING", format="json", output_stream=buffer)
        )

        LoggingService.log_performance("analyze", 1.0)

        assert buffer.getvalue() == ""


# ============================================================
# SANITIZATION TESTS
# ============================================================


class TestSanitizeMetadata:
    """Tests for LoggingService._sanitize_metadata."""

    def test_keys_matched_case_insensitively(self, stream):
        """Test key matching ignores case."""
        result = LoggingService._sanitize_metadata({"Source": "x = 1", "lines": 1})

        assert result == {"Source": "[REDACTED]", "lines": 1}

    def test_lists_of_dicts_sanitized(self, stream):
        """Test dictionaries nested in lists are sanitized."""
        result = LoggingService._sanitize_metadata({"files": [{"content": "a"}, "plain"]})

        assert result == {"files": [{"content": "[REDACTED]"}, "plain"]}
