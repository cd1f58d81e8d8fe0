"""Julia pattern-based extractor.

Heuristic: both the block form (function f(x) ... end) and the
assignment form (f(x) = ...) are recognised from raw text.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import re
from typing import List, Optional

from ..models import AnalysisResult, ParameterInfo
from .regex_base import BaseRegexExtractor, LineIndex, split_parameters

FUNCTION_PATTERN = re.compile(r"\bfunction[ \t]+([\w!]+)(?:\{[^}]*\})?[ \t]*\(([^()]*)\)")

# area(r) = pi * r^2, but not r == 1
SHORT_FUNCTION_PATTERN = re.compile(r"^[ \t]*([\w!]+)[ \t]*\(([^)\n]*)\)[ \t]*=(?!=)", re.MULTILINE)

STRUCT_PATTERN = re.compile(
    r"^[ \t]*(?:(mutable)[ \t]+)?struct[ \t]+(\w+)(?:\{[^}]*\})?(?:[ \t]*<:[ \t]*(\w+))?",
    re.MULTILINE,
)

ABSTRACT_PATTERN = re.compile(
    r"^[ \t]*abstract[ \t]+type[ \t]+(\w+)(?:\{[^}]*\})?(?:[ \t]*<:[ \t]*(\w+))?", re.MULTILINE
)

MODULE_LIST_PATTERN = re.compile(
    r"^[ \t]*(?:using|import)[ \t]+([\w.]+(?:[ \t]*,[ \t]*[\w.]+)*)", re.MULTILINE
)

INCLUDE_PATTERN = re.compile(r"""^[ \t]*include[ \t]*\(\s*["']([^"']+)["']\s*\)""", re.MULTILINE)


def parse_julia_parameter(text: str) -> Optional[ParameterInfo]:
    """x::Int = 1 -> ParameterInfo(name="x", type="Int"); None without a name."""
    name, _, rest = text.split("=", 1)[0].partition("::")
    name = name.strip()
    if not name:
        return None
    return ParameterInfo(name=name, type_annotation=rest.strip())


class JuliaExtractor(BaseRegexExtractor):
    @property
    def language_name(self) -> str:
        return "julia"

    def extract_text(self, text: str, result: AnalysisResult) -> None:
        lines = LineIndex(text)

        for pattern in (FUNCTION_PATTERN, SHORT_FUNCTION_PATTERN):
            for match in pattern.finditer(text):
                result.functions.append(
                    self.make_function(
                        match.group(1),
                        self.line(lines, match, 1),
                        parameters=self._parse_parameters(match.group(2)),
                    )
                )

        for match in STRUCT_PATTERN.finditer(text):
            result.classes.append(
                self.make_class(
                    match.group(2),
                    self.line(lines, match, 2),
                    extends=self.group(match, 3) or None,
                )
            )

        for match in ABSTRACT_PATTERN.finditer(text):
            result.classes.append(
                self.make_class(
                    match.group(1),
                    self.line(lines, match, 1),
                    extends=self.group(match, 2) or None,
                )
            )

        for match in MODULE_LIST_PATTERN.finditer(text):
            line = self.line(lines, match, 1)
            for module in match.group(1).split(","):
                if module.strip():
                    result.imports.append(self.make_import(module.strip(), line))

        for match in INCLUDE_PATTERN.finditer(text):
            result.imports.append(self.make_import(match.group(1), self.line(lines, match, 1)))

    @staticmethod
    def _parse_parameters(text: str) -> List[ParameterInfo]:
        # f(x; verbose=false): keyword arguments follow the semicolon
        parameters = [parse_julia_parameter(piece) for piece in split_parameters(text.replace(";", ","))]
        return [p for p in parameters if p is not None]


__all__ = ["JuliaExtractor", "parse_julia_parameter"]
