"""R pattern-based extractor.

Heuristic: functions are recognised only when a function literal is
assigned to a name; any other top-of-line assignment becomes a variable.
"""

import re
from typing import List

from ..models import AnalysisResult, ParameterInfo
from .regex_base import BaseRegexExtractor, LineIndex, split_parameters

FUNCTION_PATTERN = re.compile(
    r"^[ \t]*([\w.]+)[ \t]*(?:<-|=)[ \t]*function[ \t]*\(([^)]*)\)", re.MULTILINE
)

IMPORT_PATTERNS = (
    re.compile(r"""\blibrary\s*\(\s*["']?([\w.]+)["']?\s*\)"""),
    re.compile(r"""\brequire\s*\(\s*["']?([\w.]+)["']?\s*\)"""),
    re.compile(r"""\bsource\s*\(\s*["']([^"']+)["']\s*\)"""),
)

VARIABLE_PATTERN = re.compile(
    r"^[ \t]*([\w.]+)[ \t]*(?:<-|=(?!=))[ \t]*(?!function\b)\S", re.MULTILINE
)


def parse_r_parameters(text: str) -> List[ParameterInfo]:
    """x, n = 10, ... -> x, n, ..."""
    parameters = []
    for piece in split_parameters(text):
        name = piece.split("=", 1)[0].strip()
        if name:
            parameters.append(ParameterInfo(name=name))
    return parameters


class RExtractor(BaseRegexExtractor):
    @property
    def language_name(self) -> str:
        return "r"

    def extract_text(self, text: str, result: AnalysisResult) -> None:
        lines = LineIndex(text)

        for match in FUNCTION_PATTERN.finditer(text):
            result.functions.append(
                self.make_function(
                    match.group(1),
                    self.line(lines, match, 1),
                    parameters=parse_r_parameters(match.group(2)),
                )
            )

        imports = []
        for pattern in IMPORT_PATTERNS:
            imports.extend(
                (match.start(1), self.make_import(match.group(1), self.line(lines, match, 1)))
                for match in pattern.finditer(text)
            )
        # keep source order across the three call forms
        imports.sort(key=lambda item: item[0])
        result.imports.extend(imported for _, imported in imports)

        for match in VARIABLE_PATTERN.finditer(text):
            line = self.line(lines, match, 1)
            result.symbols.append(self.make_symbol(match.group(1), "variable", line))


__all__ = ["RExtractor", "parse_r_parameters"]
