"""Clojure pattern-based extractor.

Heuristic: forms are matched textually without reading the s-expressions,
so definitions inside comments, strings or quoted data are reported too.
"""

import re
from typing import List

from ..models import AnalysisResult, ParameterInfo
from .regex_base import BaseRegexExtractor, LineIndex

NAME = r"([\w\-?!*+<>=']+)"
DOCSTRING = r'(?:"[^"]*"\s*)?'

# (pattern, has parameter vector)
FUNCTION_PATTERNS = (
    re.compile(r"\(\s*defn-?\s+" + NAME + r"\s*" + DOCSTRING + r"\[([^\]]*)\]"),
    # only named fn forms; anonymous ones have no identity to report
    re.compile(r"\(\s*fn\s+" + NAME + r"\s*\[([^\]]*)\]"),
    re.compile(r"\(\s*defmacro\s+" + NAME + r"\s*" + DOCSTRING + r"\[([^\]]*)\]"),
)

TYPE_PATTERNS = (
    re.compile(r"\(\s*defrecord\s+" + NAME + r"\s*\["),
    re.compile(r"\(\s*deftype\s+" + NAME + r"\s*\["),
    re.compile(r"\(\s*defprotocol\s+" + NAME),
    re.compile(r"\(\s*definterface\s+" + NAME),
)

IMPORT_PATTERNS = (
    re.compile(r":require\s*\[\s*\[?([\w.\-]+)"),
    re.compile(r"\(\s*require\s+'\[?([\w.\-]+)"),
    re.compile(r"\(\s*use\s+'\[?([\w.\-]+)"),
    re.compile(r":import\s*\[\s*\[?([\w.\-]+)"),
)

SYMBOL_PATTERNS = (
    (re.compile(r"\(\s*ns\s+([\w.\-]+)"), "namespace"),
    (re.compile(r"\(\s*def\s+" + NAME), "variable"),
    (re.compile(r"\(\s*defonce\s+" + NAME), "constant"),
)


def parse_clojure_parameters(text: str) -> List[ParameterInfo]:
    """[a b & more] -> a, b, more; keyword destructuring hints are dropped."""
    return [
        ParameterInfo(name=word)
        for word in text.split()
        if word != "&" and not word.startswith(":")
    ]


class ClojureExtractor(BaseRegexExtractor):
    """Heuristic Clojure extractor."""

    @property
    def language_name(self) -> str:
        return "clojure"

    def extract_text(self, text: str, result: AnalysisResult) -> None:
        lines = LineIndex(text)

        for pattern in FUNCTION_PATTERNS:
            for match in pattern.finditer(text):
                result.functions.append(
                    self.make_function(
                        match.group(1),
                        self.line(lines, match, 1),
                        parameters=parse_clojure_parameters(match.group(2)),
                    )
                )

        for pattern in TYPE_PATTERNS:
            for match in pattern.finditer(text):
                result.classes.append(self.make_class(match.group(1), self.line(lines, match, 1)))

        for pattern in IMPORT_PATTERNS:
            for match in pattern.finditer(text):
                result.imports.append(self.make_import(match.group(1), self.line(lines, match, 1)))

        for pattern, kind in SYMBOL_PATTERNS:
            for match in pattern.finditer(text):
                result.symbols.append(self.make_symbol(match.group(1), kind, self.line(lines, match, 1)))


__all__ = ["ClojureExtractor", "parse_clojure_parameters"]
