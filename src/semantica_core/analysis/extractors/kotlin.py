"""Kotlin pattern-based extractor.

Heuristic: declarations are recognised line by line from raw text, so
patterns can fire inside comments or strings and unconventional
formatting can be missed.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import re
from typing import List

from ..models import AnalysisResult, ParameterInfo
from .regex_base import BaseRegexExtractor, LineIndex, split_parameters

FUNCTION_PATTERN = re.compile(
    r"^\s*(?:(private|public|protected|internal)\s+)?(?:(suspend)\s+)?"
    r"fun\s+(?:<[^>]+>\s*)?(\w+)\s*(?:<[^>]+>)?\s*\(([^)]*)\)"
    r"(?:\s*:\s*(\w+(?:<[^>]+>)?\??))?",
    re.MULTILINE,
)

CLASS_PATTERN = re.compile(
    r"^\s*(?:(private|public|protected|internal)\s+)?(?:(data|sealed|abstract|open)\s+)?"
    r"(class|interface|object)\s+(\w+)(?:\s*<[^>]*>)?(?:\s*\([^)]*\))?(?:\s*:\s*([^{\n]+))?",
    re.MULTILINE,
)

IMPORT_PATTERN = re.compile(r"^import\s+(\S+)", re.MULTILINE)


def parse_kotlin_parameter(text: str) -> ParameterInfo:
    """vararg items: Int = 0 -> ParameterInfo(name="items", type="Int")"""
    text = text.strip()
    if text.startswith("vararg "):
        text = text[len("vararg "):]
    name, _, type_text = text.partition(":")
    type_text = type_text.split("=", 1)[0].strip()
    return ParameterInfo(name=name.strip(), type_annotation=type_text)


def _supertype_name(entry: str) -> str:
    """Base(x) and List<T> reduce to Base and List."""
    for delimiter in ("<", "("):
        entry = entry.split(delimiter, 1)[0]
    return entry.strip()


class KotlinExtractor(BaseRegexExtractor):
    """Heuristic Kotlin extractor: fun declarations, classes/objects, imports."""

    @property
    def language_name(self) -> str:
        return "kotlin"

    def extract_text(self, text: str, result: AnalysisResult) -> None:
        lines = LineIndex(text)

        for match in FUNCTION_PATTERN.finditer(text):
            name = self.group(match, 3)
            if not name:
                continue
            result.functions.append(
                self.make_function(
                    name,
                    self.line(lines, match, 3),
                    parameters=self._parse_parameters(self.group(match, 4)),
                    return_type=self.group(match, 5),
                    visibility=self.group(match, 1),
                    is_async=self.group(match, 2) == "suspend",
                )
            )

        for match in CLASS_PATTERN.finditer(text):
            supertypes = [
                _supertype_name(entry) for entry in split_parameters(self.group(match, 5))
            ]
            supertypes = [entry for entry in supertypes if entry]
            result.classes.append(
                self.make_class(
                    self.group(match, 4),
                    self.line(lines, match, 4),
                    extends=supertypes[0] if supertypes else None,
                    implements=supertypes[1:],
                )
            )

        for match in IMPORT_PATTERN.finditer(text):
            result.imports.append(self.make_import(match.group(1), self.line(lines, match, 1)))

    @staticmethod
    def _parse_parameters(text: str) -> List[ParameterInfo]:
        pieces = split_parameters(text)
        return [parse_kotlin_parameter(piece) for piece in pieces if piece.partition(":")[0].strip()]


__all__ = ["KotlinExtractor", "parse_kotlin_parameter"]
