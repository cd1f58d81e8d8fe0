"""Groovy pattern-based extractor.

Heuristic: declarations are recognised from raw text, so patterns can
fire inside comments or strings and local variables are indistinguishable
from fields.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import re
from typing import List, Optional

from ..config import GROOVY_KEYWORDS, GROOVY_STATEMENT_KEYWORDS, GROOVY_TYPE_KEYWORDS
from ..models import AnalysisResult, ParameterInfo
from .regex_base import BaseRegexExtractor, LineIndex, split_parameters

METHOD_PATTERN = re.compile(
    r"^[\t ]*((?:(?:public|private|protected|static|final|synchronized|abstract)\s+)*)"
    r"(def|void|[\w<>,\[\]]+)\s+(\w+)\s*\(([^()]*)\)",
    re.MULTILINE,
)

CLOSURE_PATTERN = re.compile(r"^[\t ]*(?:def|final)\s+(\w+)\s*=\s*\{", re.MULTILINE)

CLASS_PATTERN = re.compile(
    r"^[\t ]*(?:(?:public|private|protected|abstract|final|static)\s+)*"
    r"(?:class|interface|trait|enum)\s+(\w+)"
    r"(?:\s+extends\s+([\w.]+))?(?:\s+implements\s+([^{\n]+))?",
    re.MULTILINE,
)

IMPORT_PATTERN = re.compile(r"^[\t ]*import\s+(?:static\s+)?([\w.]+?)(?:\.\*)?(?=\s|;|$)", re.MULTILINE)

FIELD_PATTERN = re.compile(
    r"^[\t ]*(?:(?:public|private|protected|static|final)\s+)*(def|[\w<>,\[\]]+)\s+(\w+)\s*=(?!=)",
    re.MULTILINE,
)

CONSTANT_PATTERN = re.compile(
    r"^[\t ]*(?:(?:public|private|protected)\s+)?static\s+final\s+[\w<>,\[\]]+\s+(\w+)\s*=",
    re.MULTILINE,
)


def parse_groovy_parameter(text: str) -> Optional[ParameterInfo]:
    """String name = "x" -> name with type String; a lone word is an untyped name."""
    words = text.split("=", 1)[0].split()
    if not words:
        return None
    if len(words) >= 2:
        return ParameterInfo(name=words[-1], type_annotation=words[0])
    return ParameterInfo(name=words[0])


class GroovyExtractor(BaseRegexExtractor):
    """Heuristic Groovy extractor.

    Reports methods, closures assigned with def/final, classes (including
    traits and enums), imports, and field/constant symbols.
    """

    @property
    def language_name(self) -> str:
        return "groovy"

    def extract_text(self, text: str, result: AnalysisResult) -> None:
        lines = LineIndex(text)

        for match in METHOD_PATTERN.finditer(text):
            return_type = self.group(match, 2)
            name = self.group(match, 3)
            if name in GROOVY_KEYWORDS or return_type in GROOVY_STATEMENT_KEYWORDS:
                continue
            modifiers = self.group(match, 1).split()
            if "private" in modifiers:
                visibility = "private"
            elif "protected" in modifiers:
                visibility = "protected"
            else:
                visibility = "public"
            result.functions.append(
                self.make_function(
                    name,
                    self.line(lines, match, 3),
                    parameters=self._parse_parameters(self.group(match, 4)),
                    return_type=return_type,
                    visibility=visibility,
                    is_static="static" in modifiers,
                )
            )

        for match in CLOSURE_PATTERN.finditer(text):
            result.functions.append(self.make_function(match.group(1), self.line(lines, match, 1)))

        for match in CLASS_PATTERN.finditer(text):
            implements = [
                entry.strip() for entry in self.group(match, 3).split(",") if entry.strip()
            ]
            result.classes.append(
                self.make_class(
                    match.group(1),
                    self.line(lines, match, 1),
                    extends=self.group(match, 2),
                    implements=implements,
                )
            )

        for match in IMPORT_PATTERN.finditer(text):
            result.imports.append(self.make_import(match.group(1), self.line(lines, match, 1)))

        for match in FIELD_PATTERN.finditer(text):
            name = match.group(2)
            if name in GROOVY_TYPE_KEYWORDS or match.group(1) in GROOVY_STATEMENT_KEYWORDS:
                continue
            result.symbols.append(self.make_symbol(name, "field", self.line(lines, match, 2)))

        for match in CONSTANT_PATTERN.finditer(text):
            line = self.line(lines, match, 1)
            result.symbols.append(self.make_symbol(match.group(1), "constant", line))

    @staticmethod
    def _parse_parameters(text: str) -> List[ParameterInfo]:
        parameters = [parse_groovy_parameter(piece) for piece in split_parameters(text)]
        return [parameter for parameter in parameters if parameter is not None]


__all__ = ["GroovyExtractor", "parse_groovy_parameter"]
