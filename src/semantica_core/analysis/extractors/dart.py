"""Dart pattern-based extractor.

Heuristic: a function is any "[static] [Type] name(params)" that opens a
body ({), an arrow (=>) or an async body. Control-flow statements share
that shape and are filtered by keyword.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import re
from typing import List, Optional

from ..config import DART_KEYWORDS
from ..models import AnalysisResult, ParameterInfo
from .regex_base import BaseRegexExtractor, LineIndex, split_parameters

FUNCTION_PATTERN = re.compile(
    r"^[ \t]*(?:(static)[ \t]+)?(?:([\w$]+(?:<[^>\n]+>)?\??)[ \t]+)?([\w$]+)[ \t]*"
    r"\(([^()]*)\)[ \t]*(?:(async)\*?[ \t]*)?(?:\{|=>)",
    re.MULTILINE,
)

CLASS_PATTERN = re.compile(
    r"^[ \t]*(?:(abstract)[ \t]+)?class[ \t]+(\w+)(?:<[^>\n]+>)?"
    r"(?:[ \t]+extends[ \t]+(\w+)(?:<[^>\n]+>)?)?([^{\n]*)",
    re.MULTILINE,
)

CLAUSE_KEYWORD_PATTERN = re.compile(r"\b(?:implements|with)\b")

IMPORT_PATTERN = re.compile(r"""^import[ \t]+['"]([^'"]+)['"]""", re.MULTILINE)

PARAMETER_PREFIXES = ("required ", "this.", "super.")


def parse_dart_parameter(text: str) -> Optional[ParameterInfo]:
    """required int count = 0 -> ParameterInfo(name="count", type="int")"""
    text = text.split("=", 1)[0].strip()
    for prefix in PARAMETER_PREFIXES:
        if text.startswith(prefix):
            text = text[len(prefix):].strip()
    words = text.split()
    if not words:
        return None
    return ParameterInfo(name=words[-1], type_annotation=" ".join(words[:-1]))


def parse_dart_parameters(text: str) -> List[ParameterInfo]:
    # {named} and [optional] groups are flattened into the positional list
    flat = text.replace("{", ",").replace("}", ",").replace("[", ",").replace("]", ",")
    parameters = [parse_dart_parameter(piece) for piece in split_parameters(flat)]
    return [p for p in parameters if p is not None]


class DartExtractor(BaseRegexExtractor):
    """Heuristic Dart extractor: functions and methods, classes, imports."""

    @property
    def language_name(self) -> str:
        return "dart"

    def extract_text(self, text: str, result: AnalysisResult) -> None:
        lines = LineIndex(text)

        for match in FUNCTION_PATTERN.finditer(text):
            name = match.group(3)
            return_type = self.group(match, 2)
            if name in DART_KEYWORDS or return_type in DART_KEYWORDS:
                continue
            result.functions.append(
                self.make_function(
                    name,
                    self.line(lines, match, 3),
                    parameters=parse_dart_parameters(match.group(4)),
                    return_type=return_type,
                    is_static=bool(match.group(1)),
                    is_async=bool(match.group(5)),
                )
            )

        for match in CLASS_PATTERN.finditer(text):
            result.classes.append(
                self.make_class(
                    match.group(2),
                    self.line(lines, match, 2),
                    extends=self.group(match, 3) or None,
                    implements=self._mixins_and_interfaces(self.group(match, 4)),
                )
            )

        for match in IMPORT_PATTERN.finditer(text):
            result.imports.append(self.make_import(match.group(1), self.line(lines, match, 1)))

    @staticmethod
    def _mixins_and_interfaces(tail: str) -> List[str]:
        """with A, B implements C -> [A, B, C]"""
        names: List[str] = []
        for clause in CLAUSE_KEYWORD_PATTERN.split(tail)[1:]:
            for entry in split_parameters(clause):
                name = entry.split("<", 1)[0].strip()
                if name:
                    names.append(name)
        return names


__all__ = ["DartExtractor", "parse_dart_parameter", "parse_dart_parameters"]
