"""
Central registry for language parsers and extractors.

A process-wide singleton keyed by canonical language identifier. It is
filled lazily: parsers by ParserFactory, extractors by the analyzer's
bootstrap. Nothing per-request is stored here.

Usage:
    from semantica_core.analysis.parser.registry import LanguageParserRegistry

    registry = LanguageParserRegistry()
    registry.register_extractor("go", GoExtractor())
    extractor = registry.get_extractor("go")
"""

from typing import TYPE_CHECKING, Dict, List, Optional

import structlog

if TYPE_CHECKING:
    from ..extractors.base import BaseExtractor
    from .base import BaseLanguageParser


class LanguageParserRegistry:
    """
    Singleton registry for language parsers and extractors.

    Unlike a fallback-based lookup, get_extractor() returns None for an
    unregistered language; the analyzer reports that as a
    "language not yet implemented" result.

    Example:
        >>> registry = LanguageParserRegistry()
        >>> registry.register_parser("python", parser)
        >>> registry.get_parser("python") is parser
        True
    """

    _instance: Optional["LanguageParserRegistry"] = None

    def __new__(cls) -> "LanguageParserRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        if self._initialized:
            return

        self._parsers: Dict[str, "BaseLanguageParser"] = {}
        self._extractors: Dict[str, "BaseExtractor"] = {}
        self._initialized = True
        self.logger = structlog.get_logger(__name__)

    def register_parser(self, language: str, parser: "BaseLanguageParser") -> None:
        """Register a parser under a canonical language."""
        self._parsers[language] = parser
        self.logger.debug("parser_registered", language=language)

    def register_extractor(self, language: str, extractor: "BaseExtractor") -> None:
        """Register an extractor under a canonical language."""
        self._extractors[language] = extractor
        self.logger.debug("extractor_registered", language=language)

    def get_parser(self, language: str) -> Optional["BaseLanguageParser"]:
        return self._parsers.get(language)

    def get_extractor(self, language: str) -> Optional["BaseExtractor"]:
        """
        Get the extractor registered for a language.

        Returns:
            The extractor, or None if none is registered.
        """
        extractor = self._extractors.get(language)
        if extractor is None:
            self.logger.debug("extractor_not_found", language=language)
        return extractor

    def list_registered_languages(self) -> List[str]:
        """Sorted languages with a registered parser."""
        return sorted(self._parsers.keys())

    def list_registered_extractors(self) -> List[str]:
        """Sorted languages with a registered extractor."""
        return sorted(self._extractors.keys())

    def clear(self) -> None:
        """Remove all parsers and extractors."""
        self._parsers.clear()
        self._extractors.clear()
        self.logger.debug("registry_cleared")

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton so the next instantiation starts empty."""
        cls._instance = None
