"""Base classes for semantic extractors.

Every language backend answers one question: given source bytes, what
does this file declare, import, export and call? Three families share the
BaseExtractor.analyze contract:

- BaseTreeExtractor walks a tree-sitter syntax tree;
- BaseRegexExtractor scans raw text with patterns (regex_base module);
- composite extractors split a document and delegate its sections.

Extractors hold no per-call state; one instance serves every request.
"""

import time
from abc import ABC, abstractmethod
from typing import List, Optional

import structlog
from tree_sitter import Node

from ..config import get_display_name
from ..exceptions import LanguageNotSupportedError, ParseError
from ..models import AnalysisResult, CallInfo, FunctionInfo, ParameterInfo, SyntaxErrorInfo
from ..parser.factory import ParserFactory
from ..parser.session import ParseSession
from .nodes import end_line, find_ancestor, node_text, start_line, walk_tree

logger = structlog.get_logger(__name__)

SYNTAX_ERROR_MESSAGE = "Syntax error detected"


class BaseExtractor(ABC):
    """Abstract base for all language extractors.

    Subclasses name their canonical language and implement analyze().

    Example:
        >>> extractor = GoExtractor()
        >>> result = extractor.analyze(b"package main\\nfunc Foo(a int) {}")
        >>> result.functions[0].name
        'Foo'
    """

    def __init__(self) -> None:
        self._log = logger.bind(extractor=self.__class__.__name__)

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Canonical language identifier reported in results."""
        ...

    @abstractmethod
    def analyze(self, source: bytes) -> AnalysisResult:
        """Produce the semantic inventory of one source buffer."""
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(language='{self.language_name}')"


class BaseTreeExtractor(BaseExtractor):
    """Base for extractors backed by a tree-sitter grammar.

    analyze() owns the uniform part of the algorithm: parse inside a
    ParseSession, collect syntax defects with a pre-order walk, then hand
    the root to extract(). Parser construction or parse failures become a
    result carrying only "failed to parse <Language>".

    Subclasses implement extract() and may list function_boundaries, the
    node types that count as an enclosing function for call attribution.
    """

    function_boundaries: tuple[str, ...] = ()

    @property
    def parser_language(self) -> str:
        """Canonical language whose registered parser this extractor uses."""
        return self.language_name

    def analyze(self, source: bytes) -> AnalysisResult:
        started = time.perf_counter()
        result = AnalysisResult(language=self.language_name)

        try:
            parser = ParserFactory.get_parser(self.parser_language)
            with ParseSession(parser, source) as session:
                root = session.root
                result.errors.extend(self.collect_syntax_errors(root))
                self.extract(root, source, result)
        except (LanguageNotSupportedError, ParseError) as e:
            self._log.warning(
                "parse_failed",
                language=self.language_name,
                error_code=e.error_code,
                source_length=len(source),
            )
            return AnalysisResult.failure(
                self.language_name, f"failed to parse {get_display_name(self.language_name)}"
            )

        self._log.debug(
            "extraction_complete",
            language=self.language_name,
            functions=len(result.functions),
            classes=len(result.classes),
            calls=len(result.calls),
            errors=len(result.errors),
            duration_ms=round((time.perf_counter() - started) * 1000, 3),
        )
        return result

    @abstractmethod
    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        """Fill result with the entities found under root."""
        ...

    # =========================================================================
    # Shared helpers
    # =========================================================================

    @staticmethod
    def collect_syntax_errors(root: Node) -> List[SyntaxErrorInfo]:
        """One error per ERROR or missing node, in pre-order."""
        return [
            SyntaxErrorInfo(
                line=node.start_point[0] + 1,
                column=node.start_point[1] + 1,
                message=SYNTAX_ERROR_MESSAGE,
            )
            for node in walk_tree(root)
            if node.type == "ERROR" or node.is_missing
        ]

    def _get_node_text(self, node: Optional[Node], source: bytes) -> str:
        return node_text(node, source)

    def _function(
        self,
        node: Node,
        name: str,
        parameters: Optional[List[ParameterInfo]] = None,
        **fields,
    ) -> FunctionInfo:
        """Build a FunctionInfo spanning node."""
        return FunctionInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            parameters=parameters or [],
            **fields,
        )

    def _call(
        self,
        node: Node,
        source: bytes,
        callee: str,
        arguments_count: int = 0,
        is_method_call: bool = False,
        receiver: Optional[str] = None,
    ) -> CallInfo:
        """Build a CallInfo for node, attributing it to its enclosing function."""
        return CallInfo(
            caller_function=self.enclosing_function_name(node, source),
            callee=callee,
            line=start_line(node),
            arguments_count=arguments_count,
            is_method_call=is_method_call,
            receiver=receiver,
        )

    # =========================================================================
    # Caller attribution
    # =========================================================================

    def enclosing_function_name(self, node: Node, source: bytes) -> Optional[str]:
        """Name of the nearest named function-like ancestor, if any.

        Anonymous boundaries (closures, lambdas) are looked through.
        """
        if not self.function_boundaries:
            return None
        boundary = find_ancestor(node, lambda n: n.type in self.function_boundaries)
        while boundary is not None:
            name = self.boundary_name(boundary, source)
            if name:
                return name
            boundary = find_ancestor(boundary, lambda n: n.type in self.function_boundaries)
        return None

    def boundary_name(self, node: Node, source: bytes) -> str:
        """Name of a function boundary node. Override for unusual shapes."""
        return node_text(node.child_by_field_name("name"), source)


__all__ = [
    "BaseExtractor",
    "BaseTreeExtractor",
    "SYNTAX_ERROR_MESSAGE",
]
