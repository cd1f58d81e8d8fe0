"""F# pattern-based extractor.

Heuristic: let bindings with arguments are treated as functions and
let bindings without them as values; indentation is not interpreted.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import re
from typing import List

from ..models import AnalysisResult, ParameterInfo
from .regex_base import BaseRegexExtractor, LineIndex, split_parameters

LET_FUNCTION_PATTERN = re.compile(
    r"^[ \t]*let[ \t]+(?:rec[ \t]+)?(\w+)(?:[ \t]+\w+)+[ \t]*=", re.MULTILINE
)

MEMBER_PATTERN = re.compile(
    r"^[ \t]*(?:(static)[ \t]+)?member[ \t]+(?:\w+\.)?(\w+)[ \t]*\(([^)]*)\)", re.MULTILINE
)

TYPE_PATTERNS = (
    # type Shape<'T> =
    re.compile(r"^[ \t]*type[ \t]+(\w+)(?:[ \t]*<[^>]+>)?(?:[ \t]*\([^)]*\))?[ \t]*=", re.MULTILINE),
    # type Account(owner: string) as self =
    re.compile(r"^[ \t]*type[ \t]+(\w+)[ \t]*\([^)]*\)[ \t]*(?:as[ \t]+\w+)?[ \t]*=", re.MULTILINE),
    re.compile(r"^[ \t]*type[ \t]+(\w+)[ \t]*=[ \t]*interface", re.MULTILINE),
)

OPEN_PATTERN = re.compile(r"^[ \t]*open[ \t]+([\w.]+)", re.MULTILINE)

SYMBOL_PATTERNS = (
    (re.compile(r"^[ \t]*module[ \t]+([\w.]+)", re.MULTILINE), "module"),
    (re.compile(r"^[ \t]*namespace[ \t]+([\w.]+)", re.MULTILINE), "namespace"),
    (re.compile(r"^[ \t]*let[ \t]+(\w+)[ \t]*=[ \t]*(?!fun\b)\S", re.MULTILINE), "value"),
)


def parse_fsharp_parameters(text: str) -> List[ParameterInfo]:
    """(x: int, name: string) -> [x: int, name: string]"""
    parameters = []
    for piece in split_parameters(text):
        name, _, type_text = piece.partition(":")
        name = name.strip()
        if name:
            parameters.append(ParameterInfo(name=name, type_annotation=type_text.strip()))
    return parameters


class FSharpExtractor(BaseRegexExtractor):
    @property
    def language_name(self) -> str:
        return "fsharp"

    def extract_text(self, text: str, result: AnalysisResult) -> None:
        lines = LineIndex(text)

        for match in LET_FUNCTION_PATTERN.finditer(text):
            result.functions.append(self.make_function(match.group(1), self.line(lines, match, 1)))

        for match in MEMBER_PATTERN.finditer(text):
            result.functions.append(
                self.make_function(
                    match.group(2),
                    self.line(lines, match, 2),
                    parameters=parse_fsharp_parameters(self.group(match, 3)),
                    is_static=bool(match.group(1)),
                )
            )

        seen = set()
        for pattern in TYPE_PATTERNS:
            for match in pattern.finditer(text):
                name = match.group(1)
                if name in seen:
                    continue
                seen.add(name)
                result.classes.append(self.make_class(name, self.line(lines, match, 1)))

        for match in OPEN_PATTERN.finditer(text):
            result.imports.append(self.make_import(match.group(1), self.line(lines, match, 1)))

        for pattern, kind in SYMBOL_PATTERNS:
            for match in pattern.finditer(text):
                result.symbols.append(self.make_symbol(match.group(1), kind, self.line(lines, match, 1)))


__all__ = ["FSharpExtractor", "parse_fsharp_parameters"]
