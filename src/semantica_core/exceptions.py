"""
Exception hierarchy for Semantica.

Defines the base exception types with error codes, transient flags, and
correlation IDs. Analysis-specific errors live in
semantica_core.analysis.exceptions and build on ProcessingError.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import uuid
from typing import Any, Dict, Optional


class SemanticaError(Exception):
    """
    Base exception for all Semantica errors.

    All Semantica exceptions inherit from this class. Provides standard
    error attributes: message, error_code, details, correlation_id.

    Attributes:
        message: Human-readable error message
        error_code: Programmatic error code (e.g., "ERR_001")
        details: Additional context (dict)
        correlation_id: UUID for tracing across layers
        original_exception: Wrapped exception (if any)
        is_transient: Whether error is transient (retryable)

    Example:
        raise SemanticaError(
            message="Operation failed",
            error_code="ERR_UNKNOWN",
            details={"extension": "xyz"},
        )
    """

    def __init__(
        self,
        message: str,
        error_code: str = "ERR_UNKNOWN",
        details: Optional[Dict[str, Any]] = None,
        correlation_id: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        """
        Initialize SemanticaError.

        Args:
            message: Error message
            error_code: Error code for programmatic handling
            details: Additional context dict
            correlation_id: UUID for request tracing
            original_exception: Original wrapped exception
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.correlation_id = correlation_id or str(uuid.uuid4())
        self.original_exception = original_exception
        self.is_transient = False

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for logging/serialization.

        Returns:
            Dictionary with all error information
        """
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
            "correlation_id": self.correlation_id,
            "original_error": str(self.original_exception) if self.original_exception else None,
        }


# === Core Layer Exceptions ===


class ValidationError(SemanticaError):
    """
    Raised when an analysis request fails validation.

    Error Codes:
        VAL_001: Malformed request payload
        VAL_002: Input file could not be read

    Not transient (caller input errors should not be retried).
    """

    def __init__(self, message: str, error_code: str = "VAL_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
        self.is_transient = False


class ProcessingError(SemanticaError):
    """
    Raised when source analysis fails.

    Error Codes:
        PROC_001: Analysis failed

    Not transient by default (processing logic errors).
    """

    def __init__(self, message: str, error_code: str = "PROC_001", **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)
        self.is_transient = False


__all__ = [
    "SemanticaError",
    "ValidationError",
    "ProcessingError",
]
