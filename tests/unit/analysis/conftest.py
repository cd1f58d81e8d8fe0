"""Pytest fixtures for analysis tests."""

from typing import Callable

import pytest
from tree_sitter import Tree
from tree_sitter_language_pack import get_parser

from semantica_core.analysis.analyzer import reset_analyzer
from semantica_core.analysis.extractors.base import BaseExtractor
from semantica_core.analysis.models import AnalysisResult
from semantica_core.analysis.parser.factory import ParserFactory
from semantica_core.analysis.parser.registry import LanguageParserRegistry


@pytest.fixture(autouse=True)
def reset_registry():
    """Reset the registry, parser factory and default analyzer around each test."""
    LanguageParserRegistry.reset_instance()
    ParserFactory.reset()
    reset_analyzer()
    yield
    LanguageParserRegistry.reset_instance()
    ParserFactory.reset()
    reset_analyzer()


@pytest.fixture
def run() -> Callable[[BaseExtractor, str], AnalysisResult]:
    """Analyze a source string with an extractor."""

    def _run(extractor: BaseExtractor, source: str) -> AnalysisResult:
        return extractor.analyze(source.encode("utf-8"))

    return _run


@pytest.fixture
def parse_source() -> Callable[[str, str], tuple[Tree, bytes]]:
    """Factory fixture to parse source with a bundled grammar."""

    def _parse(grammar: str, source: str) -> tuple[Tree, bytes]:
        source_bytes = source.encode("utf-8")
        return get_parser(grammar).parse(source_bytes), source_bytes

    return _parse
