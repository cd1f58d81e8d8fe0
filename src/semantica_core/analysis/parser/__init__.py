"""
Tree-sitter parser module.

Exports:
    BaseLanguageParser: Abstract base class for language parsers.
    LanguageParserRegistry: Central registry for parsers and extractors.
    ParserFactory: Factory for creating and caching language parsers.
    ParseSession: Context manager owning one parsed tree.
    UniversalLanguageParser: Parser for any bundled grammar.
"""

from semantica_core.analysis.parser.base import BaseLanguageParser
from semantica_core.analysis.parser.factory import ParserFactory, UniversalLanguageParser
from semantica_core.analysis.parser.registry import LanguageParserRegistry
from semantica_core.analysis.parser.session import ParseSession

__all__ = [
    "BaseLanguageParser",
    "LanguageParserRegistry",
    "ParserFactory",
    "ParseSession",
    "UniversalLanguageParser",
]
