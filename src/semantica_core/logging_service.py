"""
LoggingService - Centralized structured logging for Semantica.

Provides consistent, context-enriched, machine-readable logging
across all modules using structlog. Log records always go to stderr:
stdout is reserved for the analysis response.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

import logging
import sys
import traceback
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import structlog
from structlog.types import Processor

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_FORMATS = ("json", "console")


@dataclass
class LoggingConfig:
    """
    Configuration for LoggingService.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format ("json" or "console" for dev)
        output_stream: Output destination (default: sys.stderr)
        sensitive_keys: Set of keys whose values are redacted

    Example:
        config = LoggingConfig(level="INFO", format="console")
    """

    level: str = "WARNING"
    format: str = "json"
    output_stream: Any = sys.stderr
    sensitive_keys: set[str] = field(default_factory=set)

    def __post_init__(self) -> None:
        if not self.sensitive_keys:
            self.sensitive_keys = {
                "password",
                "token",
                "secret",
                "api_key",
                "authorization",
                # Raw file content must never reach the log stream.
                "content",
                "source",
            }


class LoggingService:
    """
    Centralized structured logging service using structlog.

    Features:
        - JSON or console rendering on stderr
        - Module-specific cached loggers
        - Sensitive data sanitization for error context
        - Performance metric logging

    Example:
        LoggingService.configure_logging(level="INFO", format="json")
        logger = LoggingService.get_logger("semantica.cli")
        logger.info("analysis_complete", language="go", duration_ms=3.2)
    """

    _configured: bool = False
    _log_level: str = "WARNING"
    _config: Optional[LoggingConfig] = None
    _loggers: dict[str, structlog.BoundLogger] = {}
    _sensitive_keys: set[str] = set()

    @classmethod
    def configure_logging(
        cls, level: str = "WARNING", format: str = "json", config: Optional[LoggingConfig] = None
    ) -> None:
        """
        Configure global structured logging.

        Should be called once at process startup, before any logging.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            format: Output format ("json" or "console")
            config: Optional LoggingConfig for advanced configuration

        Raises:
            ValueError: If level or format is invalid
            RuntimeError: If called after logging already configured
        """
        if cls._configured:
            raise RuntimeError("Logging already configured")

        if config is not None:
            cfg = config
        else:
            level_upper = level.upper()
            if level_upper not in VALID_LEVELS:
                raise ValueError(
                    f"Invalid log level: {level}. Must be one of: {', '.join(VALID_LEVELS)}"
                )

            format_lower = format.lower()
            if format_lower not in VALID_FORMATS:
                raise ValueError(f"Invalid format: {format}. Must be 'json' or 'console'")

            cfg = LoggingConfig(level=level_upper, format=format_lower)

        cls._config = cfg
        cls._log_level = cfg.level
        cls._sensitive_keys = cfg.sensitive_keys

        structlog.configure(
            processors=cls._setup_processors(),
            wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, cfg.level)),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=cfg.output_stream),
            cache_logger_on_first_use=True,
        )

        cls._configured = True

    @classmethod
    def is_configured(cls) -> bool:
        """Return True once configure_logging() has run."""
        return cls._configured

    @classmethod
    def reset(cls) -> None:
        """
        Reset class-level state so logging can be configured again.

        Intended for tests and for the CLI, which may reconfigure after
        reading command-line overrides.
        """
        cls._configured = False
        cls._log_level = "WARNING"
        cls._config = None
        cls._loggers = {}
        cls._sensitive_keys = set()
        structlog.reset_defaults()

    @classmethod
    def get_logger(cls, name: str) -> structlog.BoundLogger:
        """
        Get a module/component-specific logger.

        Args:
            name: Logger name (typically module path)

        Returns:
            BoundLogger instance

        Raises:
            RuntimeError: If logging not configured yet
            ValueError: If name is empty or too long
        """
        if not cls._configured:
            raise RuntimeError("Logging not configured. Call configure_logging() first.")

        if not name:
            raise ValueError("Logger name cannot be empty")

        if len(name) > 200:
            raise ValueError("Logger name exceeds maximum length (200)")

        if name in cls._loggers:
            return cls._loggers[name]

        logger = structlog.get_logger(name)
        cls._loggers[name] = logger
        return logger

    @classmethod
    def log_error(
        cls,
        error: Exception,
        correlation_id: str,
        context: Optional[dict[str, Any]] = None,
        logger_name: str = "semantica",
        include_stack_trace: bool = True,
    ) -> None:
        """
        Log an error with full context and optional stack trace.

        Extracts error type, message and error code (for SemanticaError
        subclasses).

        Args:
            error: Exception instance
            correlation_id: UUID for tracing
            context: Additional context about where the error occurred
            logger_name: Which logger to use (default: "semantica")
            include_stack_trace: Whether to include the current traceback

        Raises:
            ValueError: If correlation_id is empty

        Example:
            try:
                result = extractor.analyze(source)
            except ProcessingError as e:
                LoggingService.log_error(e, correlation_id=e.correlation_id)
        """
        if not correlation_id:
            raise ValueError("correlation_id cannot be empty")

        logger = cls.get_logger(logger_name)

        log_context: Dict[str, Any] = {
            "error_type": type(error).__name__,
            "error_message": str(error),
            "correlation_id": correlation_id,
        }

        error_code = getattr(error, "error_code", None)
        if error_code:
            log_context["error_code"] = error_code

        if context:
            log_context.update(cls._sanitize_metadata(context))

        if include_stack_trace:
            log_context["stack_trace"] = traceback.format_exc()

        logger.error("error_occurred", **log_context)

    @classmethod
    def log_performance(
        cls,
        operation: str,
        duration_ms: float,
        metadata: Optional[dict[str, Any]] = None,
        logger_name: str = "semantica",
    ) -> None:
        """
        Log the duration of an operation.

        Args:
            operation: Operation name (e.g., "analyze")
            duration_ms: Duration in milliseconds
            metadata: Additional metrics (language, counts)
            logger_name: Which logger to use

        Raises:
            ValueError: If operation is empty or duration_ms < 0
        """
        if not operation:
            raise ValueError("operation cannot be empty")

        if duration_ms < 0:
            raise ValueError("duration_ms cannot be negative")

        logger = cls.get_logger(logger_name)

        context: Dict[str, Any] = {"operation": operation, "duration_ms": duration_ms}
        if metadata:
            context.update(cls._sanitize_metadata(metadata))

        logger.debug("performance_metric", **context)

    @classmethod
    def _sanitize_metadata(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Replace values of sensitive keys with "[REDACTED]".

        Recursively processes nested dictionaries and lists.

        Args:
            data: Metadata dictionary to sanitize

        Returns:
            Sanitized copy of metadata
        """
        if not isinstance(data, dict):
            return data

        sanitized: Dict[str, Any] = {}

        for key, value in data.items():
            if key.lower() in cls._sensitive_keys:
                sanitized[key] = "[REDACTED]"
            elif isinstance(value, dict):
                sanitized[key] = cls._sanitize_metadata(value)
            elif isinstance(value, list):
                sanitized[key] = [
                    cls._sanitize_metadata(item) if isinstance(item, dict) else item
                    for item in value
                ]
            else:
                sanitized[key] = value

        return sanitized

    @classmethod
    def _setup_processors(cls) -> list[Processor]:
        """
        Build the structlog processor chain for the configured format.

        Returns:
            List of structlog processors, renderer last
        """
        processors: list[Processor] = [
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]

        if cls._config and cls._config.format == "console":
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        else:
            processors.append(structlog.processors.JSONRenderer())

        return processors


__all__ = ["LoggingConfig", "LoggingService"]
