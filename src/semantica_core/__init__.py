"""
Semantica Core.

Contains:
- Exception hierarchy
- Configuration management
- Logging service
- Semantic analysis (analysis package)

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from .config import SemanticaSettings, get_config_summary
from .exceptions import ProcessingError, SemanticaError, ValidationError
from .logging_service import LoggingConfig, LoggingService

__version__ = "0.1.0"

__all__ = [
    # Config
    "SemanticaSettings",
    "get_config_summary",
    # Exceptions
    "SemanticaError",
    "ValidationError",
    "ProcessingError",
    # Logging
    "LoggingConfig",
    "LoggingService",
    "__version__",
]
