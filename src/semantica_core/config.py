"""
Configuration Management for Semantica.

Provides type-safe runtime configuration loading using Pydantic Settings.
Supports SEMANTICA_* environment variables, a .env file, and defaults that
work without any configuration.

Static language tables (extension map, display names, keyword denylists)
are not settings: they live in semantica_core.analysis.config.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Any, Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class SemanticaSettings(BaseSettings):
    """
    Runtime settings for the analyzer process.

    Configuration is loaded with the following priority (highest to lowest):
    1. System environment variables (SEMANTICA_LOG_LEVEL, ...)
    2. .env file in the working directory
    3. Hardcoded default values

    Example:
        ```python
        from semantica_core.config import SemanticaSettings

        settings = SemanticaSettings()
        print(settings.log_level)  # 'WARNING'
        ```
    """

    # ========================================
    # LOGGING CONFIGURATION
    # ========================================

    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    log_format: str = Field(
        default="json",
        description="Log output format on stderr ('json' or 'console')",
    )

    # ========================================
    # ANALYSIS LIMITS
    # ========================================

    max_content_bytes: int = Field(
        default=5 * 1024 * 1024,
        ge=1024,
        le=512 * 1024 * 1024,
        description="Maximum accepted source size in bytes (UTF-8 encoded)",
    )

    # ========================================
    # OUTPUT
    # ========================================

    pretty_output: bool = Field(
        default=False,
        description="Indent the JSON response written to stdout",
    )

    # ========================================
    # VALIDATORS
    # ========================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate log level is one of allowed values.

        Args:
            v: Log level string (case-insensitive)

        Returns:
            Uppercase log level string

        Raises:
            ValueError: If log level not in allowed values
        """
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}, got '{v}'")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """
        Validate log format is one of allowed values.

        Args:
            v: Log format string (case-insensitive)

        Returns:
            Lowercase log format string

        Raises:
            ValueError: If log format not in allowed values
        """
        allowed = ["json", "console"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got '{v}'")
        return v_lower

    # ========================================
    # PYDANTIC CONFIGURATION
    # ========================================

    model_config = {
        "env_prefix": "SEMANTICA_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "validate_assignment": True,
        "extra": "ignore",
    }


def get_config_summary(settings: SemanticaSettings) -> Dict[str, Any]:
    """
    Get configuration summary for debug logging.

    Args:
        settings: SemanticaSettings instance

    Returns:
        Configuration summary grouped by category
    """
    return {
        "logging": {
            "level": settings.log_level,
            "format": settings.log_format,
        },
        "analysis": {
            "max_content_bytes": settings.max_content_bytes,
        },
        "output": {
            "pretty": settings.pretty_output,
        },
    }


__all__ = ["SemanticaSettings", "get_config_summary"]
