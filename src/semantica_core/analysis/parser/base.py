"""
Base class for tree-sitter language parsers.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from abc import ABC, abstractmethod
from typing import Optional

import structlog
from tree_sitter import Parser, Tree

from semantica_core.analysis.exceptions import ParseError

logger = structlog.get_logger(__name__)


class BaseLanguageParser(ABC):
    """
    Abstract base class for language-specific tree-sitter parsers.

    Subclasses name the canonical language, the grammar to load from
    tree-sitter-language-pack, and build the underlying Parser.

    Example:
        parser = UniversalLanguageParser("go")
        tree = parser.parse(b"package main")
    """

    def __init__(self) -> None:
        self._parser: Optional[Parser] = None
        self._log = logger.bind(parser=self.__class__.__name__)

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Canonical language identifier (e.g., "tsx", "csharp")."""
        ...

    @property
    @abstractmethod
    def grammar_name(self) -> str:
        """Grammar name as used by tree-sitter-language-pack."""
        ...

    @property
    @abstractmethod
    def file_extensions(self) -> tuple[str, ...]:
        """File extensions (no dot) owned by this language."""
        ...

    @abstractmethod
    def get_parser(self) -> Parser:
        """Return the configured tree-sitter Parser, creating it on first use."""
        ...

    def parse(self, source_code: bytes) -> Tree:
        """
        Parse source bytes into a syntax tree.

        Args:
            source_code: Source code as UTF-8 bytes.

        Returns:
            Parsed Tree. Trees with syntax defects are still returned.

        Raises:
            ParseError: If the parser raises or produces no tree.
        """
        try:
            tree = self.get_parser().parse(source_code)
        except Exception as e:
            self._log.error(
                "parse_failed",
                language=self.language_name,
                source_length=len(source_code),
                error=str(e),
            )
            raise ParseError(language=self.language_name, parse_details=str(e)) from e

        if tree is None:
            self._log.error(
                "parse_returned_no_tree",
                language=self.language_name,
                source_length=len(source_code),
            )
            raise ParseError(language=self.language_name, parse_details="no tree produced")

        self._log.debug(
            "parse_success",
            language=self.language_name,
            source_length=len(source_code),
            has_errors=tree.root_node.has_error,
        )
        return tree

    def supports_extension(self, extension: str) -> bool:
        """Check whether an extension (with or without dot) belongs to this parser."""
        return extension.lstrip(".") in self.file_extensions

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(language='{self.language_name}')"


__all__ = ["BaseLanguageParser"]
