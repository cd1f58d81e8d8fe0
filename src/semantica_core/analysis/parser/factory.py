"""
Parser factory module for tree-sitter integration.

Provides UniversalLanguageParser, which loads any grammar bundled with
tree-sitter-language-pack, and ParserFactory, which creates parsers lazily
and caches them in the LanguageParserRegistry.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import structlog
from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from ..config import GRAMMAR_BY_LANGUAGE, LANGUAGE_EXTENSIONS, get_grammar_name
from ..exceptions import LanguageNotSupportedError
from .base import BaseLanguageParser
from .registry import LanguageParserRegistry

logger = structlog.get_logger(__name__)


class UniversalLanguageParser(BaseLanguageParser):
    """
    Parser for any canonical language that has a bundled grammar.

    The canonical language and the grammar name can differ: "jsx" parses
    with the "javascript" grammar, "tsx" with "tsx".

    Example:
        >>> parser = UniversalLanguageParser("jsx")
        >>> parser.grammar_name
        'javascript'
        >>> tree = parser.parse(b"const a = <div/>;")
    """

    def __init__(self, language_name: str):
        """
        Args:
            language_name: Canonical language identifier (e.g., "go", "tsx").

        Raises:
            ValueError: If language_name is empty.
            LanguageNotSupportedError: If the language has no grammar mapping.
        """
        if not language_name:
            raise ValueError("language_name cannot be empty")

        super().__init__()
        grammar = get_grammar_name(language_name)
        if grammar is None:
            raise LanguageNotSupportedError(language=language_name)

        self._language_name = language_name
        self._grammar_name = grammar
        self._file_extensions = LANGUAGE_EXTENSIONS.get(language_name, ())
        self._log = logger.bind(parser=self.__class__.__name__, language=language_name)

    @property
    def language_name(self) -> str:
        return self._language_name

    @property
    def grammar_name(self) -> str:
        return self._grammar_name

    @property
    def file_extensions(self) -> tuple[str, ...]:
        return self._file_extensions

    def get_parser(self) -> Parser:
        """
        Get the tree-sitter parser, creating it on first call.

        Raises:
            LanguageNotSupportedError: If tree-sitter-language-pack cannot
                load the grammar.
        """
        if self._parser is None:
            try:
                self._parser = get_parser(self._grammar_name)  # type: ignore[arg-type]
            except Exception as e:
                self._log.error("grammar_load_failed", grammar=self._grammar_name, error=str(e))
                raise LanguageNotSupportedError(
                    language=self._language_name,
                    details={"grammar": self._grammar_name, "error": str(e)},
                ) from e
            self._log.debug("parser_created", grammar=self._grammar_name)
        return self._parser


class ParserFactory:
    """
    Factory for creating and caching language parsers.

    Parsers are registered under their canonical language on initialize();
    the underlying grammar is only loaded when a parser is first used.

    Example:
        >>> ParserFactory.initialize()
        >>> parser = ParserFactory.get_parser("python")
    """

    _initialized: bool = False
    _logger = structlog.get_logger(__name__)

    @classmethod
    def initialize(cls) -> None:
        """
        Register a UniversalLanguageParser for every tree-backed language.

        Idempotent: later calls return immediately.
        """
        if cls._initialized:
            return

        registry = LanguageParserRegistry()
        for language in GRAMMAR_BY_LANGUAGE:
            registry.register_parser(language, UniversalLanguageParser(language))

        cls._initialized = True
        cls._logger.debug("parser_factory_initialized", registered=len(GRAMMAR_BY_LANGUAGE))

    @classmethod
    def get_parser(cls, language: str) -> BaseLanguageParser:
        """
        Get the parser for a canonical language.

        Raises:
            LanguageNotSupportedError: If the language has no grammar.
        """
        if not cls._initialized:
            cls.initialize()

        registry = LanguageParserRegistry()
        existing = registry.get_parser(language)
        if existing is not None:
            return existing

        parser = UniversalLanguageParser(language)
        registry.register_parser(language, parser)
        return parser

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._initialized

    @classmethod
    def reset(cls) -> None:
        """Reset factory and registry state. Intended for tests."""
        cls._initialized = False
        LanguageParserRegistry.reset_instance()
        cls._logger.debug("parser_factory_reset")


__all__ = [
    "UniversalLanguageParser",
    "ParserFactory",
]
