"""Shared machinery for pattern-based extractors.

Languages without a wired-in grammar are approximated straight from the
source text. These extractors are heuristic: patterns may fire inside
comments or string literals and may miss unconventional formatting. They
never report syntax errors.
"""

import bisect
import re
from abc import abstractmethod
from typing import Iterable, List, Optional, Set

from ..models import AnalysisResult, ClassInfo, FunctionInfo, ImportInfo, SymbolInfo
from .base import BaseExtractor

OPENING_BRACKETS = frozenset("<([{")
CLOSING_BRACKETS = frozenset(">)]}")


class LineIndex:
    """Maps character offsets in a text to 1-based line numbers."""

    def __init__(self, text: str) -> None:
        self._newlines = [i for i, ch in enumerate(text) if ch == "\n"]

    def line_of(self, offset: int) -> int:
        """Number of newlines strictly before offset, plus one."""
        return bisect.bisect_left(self._newlines, offset) + 1


def split_parameters(text: str) -> List[str]:
    """Split a parameter list on commas that are not nested in brackets.

    Empty pieces are dropped and each piece is stripped.

    Example:
        >>> split_parameters("a: Map<K, V>, b: Int")
        ['a: Map<K, V>', 'b: Int']
    """
    pieces: List[str] = []
    depth = 0
    current: List[str] = []
    for ch in text:
        if ch in OPENING_BRACKETS:
            depth += 1
        elif ch in CLOSING_BRACKETS:
            # "->" closes nothing
            depth = max(0, depth - 1)
        if ch == "," and depth == 0:
            pieces.append("".join(current))
            current = []
        else:
            current.append(ch)
    pieces.append("".join(current))
    return [piece.strip() for piece in pieces if piece.strip()]


class BaseRegexExtractor(BaseExtractor):
    """Base for heuristic, pattern-based extractors.

    Subclasses implement extract_text(). Declarations found by a pattern
    have no reliable end, so line_end equals line_start.
    """

    def analyze(self, source: bytes) -> AnalysisResult:
        text = source.decode("utf-8", errors="replace")
        result = AnalysisResult(language=self.language_name)
        self.extract_text(text, result)
        self._log.debug(
            "extraction_complete",
            language=self.language_name,
            functions=len(result.functions),
            classes=len(result.classes),
            imports=len(result.imports),
            symbols=len(result.symbols),
        )
        return result

    @abstractmethod
    def extract_text(self, text: str, result: AnalysisResult) -> None:
        """Fill result from raw text."""
        ...

    # =========================================================================
    # Match helpers
    # =========================================================================

    @staticmethod
    def group(match: "re.Match[str]", index: int) -> str:
        """Text of a group, "" when the group did not participate."""
        value = match.group(index)
        return value if value is not None else ""

    @staticmethod
    def line(lines: LineIndex, match: "re.Match[str]", index: int = 0) -> int:
        """Line of a group's start; falls back to the whole match."""
        position = match.start(index)
        if position < 0:
            position = match.start()
        return lines.line_of(position)

    # =========================================================================
    # Entity builders
    # =========================================================================

    @staticmethod
    def make_function(name: str, line: int, **fields) -> FunctionInfo:
        return FunctionInfo(name=name, line_start=line, line_end=line, **fields)

    @staticmethod
    def make_class(name: str, line: int, **fields) -> ClassInfo:
        return ClassInfo(name=name, line_start=line, line_end=line, **fields)

    @staticmethod
    def make_import(module: str, line: int, symbols: Optional[List[str]] = None) -> ImportInfo:
        return ImportInfo(module=module, line=line, symbols=symbols or [])

    @staticmethod
    def make_symbol(name: str, kind: str, line: int) -> SymbolInfo:
        return SymbolInfo(name=name, kind=kind, line=line)

    @staticmethod
    def seen_names(entities: Iterable) -> Set[str]:
        """Names already collected, for first-match-wins de-duplication."""
        return {entity.name for entity in entities}


__all__ = ["LineIndex", "split_parameters", "BaseRegexExtractor"]
