"""
SemanticAnalyzer - dispatch one source file to its language extractor.

The analyzer is the boundary between callers and extractors: it resolves
the extension to a canonical language, looks the extractor up in the
registry and turns every failure into an AnalysisResult. Nothing raised
below it reaches the caller.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import time
import uuid
from typing import Any, Dict, Optional

import structlog

from semantica_core.config import SemanticaSettings
from semantica_core.logging_service import LoggingService

from .config import get_language_by_extension
from .exceptions import ExtractorNotFoundError, UnsupportedExtensionError
from .extractors import register_default_extractors
from .extractors.base import BaseExtractor
from .models import AnalysisRequest, AnalysisResult
from .parser.registry import LanguageParserRegistry

logger = structlog.get_logger(__name__)

UNKNOWN_LANGUAGE = "unknown"


class SemanticAnalyzer:
    """
    Extension-driven dispatcher over the extractor registry.

    Outcomes of analyze():
        - unknown extension: language "unknown" and one error
          "unsupported file extension: <ext>"
        - known language without an extractor: one error
          "language not yet implemented: <language>"
        - content above settings.max_content_bytes: one error
          "content exceeds maximum size"
        - otherwise the extractor's result, unchanged

    An exception escaping an extractor is logged and reported as
    "analysis failed: <message>" with the language kept.

    Example:
        >>> analyzer = SemanticAnalyzer()
        >>> result = analyzer.analyze("package main\\nfunc Foo(a int) {}", "main.go", "go")
        >>> result.functions[0].name
        'Foo'
    """

    def __init__(
        self,
        registry: Optional[LanguageParserRegistry] = None,
        settings: Optional[SemanticaSettings] = None,
    ) -> None:
        self.registry = registry or LanguageParserRegistry()
        self.settings = settings or SemanticaSettings()
        if not self.registry.list_registered_extractors():
            register_default_extractors(self.registry)

    def analyze(self, content: str, filename: str = "", extension: str = "") -> AnalysisResult:
        """
        Analyze one source file.

        Args:
            content: Source text
            filename: Advisory file name, used only for logging
            extension: File extension with or without a leading dot

        Returns:
            AnalysisResult; never raises
        """
        started = time.perf_counter()

        try:
            language = self._resolve_language(extension)
        except UnsupportedExtensionError as e:
            logger.info("unsupported_extension", extension=extension, filename=filename)
            return AnalysisResult.failure(UNKNOWN_LANGUAGE, e.message)

        try:
            extractor = self._get_extractor(language)
        except ExtractorNotFoundError as e:
            logger.info("extractor_missing", language=language, error_code=e.error_code)
            return AnalysisResult.failure(language, e.message)

        source = content.encode("utf-8", errors="surrogatepass")
        if len(source) > self.settings.max_content_bytes:
            logger.warning(
                "content_too_large",
                language=language,
                source_length=len(source),
                limit=self.settings.max_content_bytes,
            )
            return AnalysisResult.failure(language, "content exceeds maximum size")

        try:
            result = extractor.analyze(source)
        except Exception as e:
            self._log_failure(e, language, filename, len(source))
            return AnalysisResult.failure(language, f"analysis failed: {e}")

        duration_ms = round((time.perf_counter() - started) * 1000, 3)
        self._log_performance(
            duration_ms,
            {
                "language": language,
                "filename": filename,
                "source_length": len(source),
                "functions": len(result.functions),
                "classes": len(result.classes),
                "errors": len(result.errors),
            },
        )
        return result

    def analyze_request(self, request: AnalysisRequest) -> AnalysisResult:
        """Analyze a validated request."""
        return self.analyze(request.content, request.filename, request.extension)

    @staticmethod
    def _resolve_language(extension: str) -> str:
        language = get_language_by_extension(extension)
        if language is None:
            raise UnsupportedExtensionError(extension)
        return language

    def _get_extractor(self, language: str) -> BaseExtractor:
        extractor = self.registry.get_extractor(language)
        if extractor is None:
            raise ExtractorNotFoundError(language)
        return extractor

    # =========================================================================
    # Logging
    # =========================================================================

    @staticmethod
    def _log_failure(error: Exception, language: str, filename: str, source_length: int) -> None:
        context = {"language": language, "filename": filename, "source_length": source_length}
        if LoggingService.is_configured():
            LoggingService.log_error(
                error,
                correlation_id=getattr(error, "correlation_id", None) or str(uuid.uuid4()),
                context=context,
                logger_name=__name__,
            )
        else:
            logger.error("analysis_failed", error=str(error), **context)

    @staticmethod
    def _log_performance(duration_ms: float, metadata: Dict[str, Any]) -> None:
        if LoggingService.is_configured():
            LoggingService.log_performance(
                "analyze", duration_ms, metadata=metadata, logger_name=__name__
            )
        else:
            logger.debug("analysis_complete", duration_ms=duration_ms, **metadata)


_default_analyzer: Optional[SemanticAnalyzer] = None


def get_analyzer() -> SemanticAnalyzer:
    """Process-wide analyzer over the singleton registry."""
    global _default_analyzer
    if _default_analyzer is None:
        _default_analyzer = SemanticAnalyzer()
    return _default_analyzer


def reset_analyzer() -> None:
    """Drop the process-wide analyzer (tests reset the registry alongside)."""
    global _default_analyzer
    _default_analyzer = None


def analyze(content: str, filename: str = "", extension: str = "") -> AnalysisResult:
    """Analyze one source file with the process-wide analyzer."""
    return get_analyzer().analyze(content, filename, extension)


__all__ = [
    "SemanticAnalyzer",
    "UNKNOWN_LANGUAGE",
    "analyze",
    "get_analyzer",
    "reset_analyzer",
]
