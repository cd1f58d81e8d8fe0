"""Zig pattern-based extractor.

Heuristic: container types are recognised only in the
"const Name = struct {" form; anonymous or returned types are not.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import re
from typing import List

from ..models import AnalysisResult, ParameterInfo
from .regex_base import BaseRegexExtractor, LineIndex, split_parameters

FUNCTION_PATTERN = re.compile(
    r"^[ \t]*(?:(pub)[ \t]+)?(?:(?:export|extern|inline)[ \t]+)?fn[ \t]+(\w+)[ \t]*"
    r"\(([^)]*)\)[ \t]*([^{;\n]*)",
    re.MULTILINE,
)

CONTAINER_PATTERN = re.compile(
    r"^[ \t]*(?:pub[ \t]+)?const[ \t]+(\w+)[ \t]*=[ \t]*(?:(?:extern|packed)[ \t]+)?"
    r"(?:struct|enum|union)[ \t]*(?:\([^)]*\))?[ \t]*\{",
    re.MULTILINE,
)

CONST_PATTERN = re.compile(
    r"^[ \t]*(?:pub[ \t]+)?const[ \t]+(\w+)[ \t]*(?::[^=\n]+)?=[ \t]*([^\n]*)", re.MULTILINE
)

TYPE_VALUE_PATTERN = re.compile(r"^(?:(?:extern|packed)[ \t]+)?(?:struct|enum|union|opaque)\b")

VAR_PATTERN = re.compile(r"^[ \t]*(?:pub[ \t]+)?var[ \t]+(\w+)", re.MULTILINE)

IMPORT_PATTERN = re.compile(r"""@import[ \t]*\(\s*"([^"]+)"\s*\)""")

C_IMPORT_PATTERN = re.compile(r"@cImport[ \t]*\(")

C_IMPORT_MODULE = "<c-import>"

PARAMETER_QUALIFIERS = ("comptime ", "noalias ")


def parse_zig_parameters(text: str) -> List[ParameterInfo]:
    """comptime T: type, items: []const T -> T: type, items: []const T"""
    parameters = []
    for piece in split_parameters(text):
        for qualifier in PARAMETER_QUALIFIERS:
            if piece.startswith(qualifier):
                piece = piece[len(qualifier):]
        name, _, type_text = piece.partition(":")
        name = name.strip()
        if name:
            parameters.append(ParameterInfo(name=name, type_annotation=type_text.strip()))
    return parameters


class ZigExtractor(BaseRegexExtractor):
    """Heuristic Zig extractor.

    Functions without "pub" are private to their file.
    """

    @property
    def language_name(self) -> str:
        return "zig"

    def extract_text(self, text: str, result: AnalysisResult) -> None:
        lines = LineIndex(text)

        for match in FUNCTION_PATTERN.finditer(text):
            result.functions.append(
                self.make_function(
                    match.group(2),
                    self.line(lines, match, 2),
                    parameters=parse_zig_parameters(match.group(3)),
                    return_type=match.group(4).strip(),
                    visibility="public" if match.group(1) else "private",
                )
            )

        for match in CONTAINER_PATTERN.finditer(text):
            result.classes.append(self.make_class(match.group(1), self.line(lines, match, 1)))

        imports = [
            (match.start(), self.make_import(match.group(1), self.line(lines, match, 1)))
            for match in IMPORT_PATTERN.finditer(text)
        ]
        imports.extend(
            (match.start(), self.make_import(C_IMPORT_MODULE, self.line(lines, match)))
            for match in C_IMPORT_PATTERN.finditer(text)
        )
        imports.sort(key=lambda item: item[0])
        result.imports.extend(imported for _, imported in imports)

        for match in CONST_PATTERN.finditer(text):
            if TYPE_VALUE_PATTERN.match(match.group(2)):
                continue
            line = self.line(lines, match, 1)
            result.symbols.append(self.make_symbol(match.group(1), "constant", line))

        for match in VAR_PATTERN.finditer(text):
            line = self.line(lines, match, 1)
            result.symbols.append(self.make_symbol(match.group(1), "variable", line))


__all__ = ["ZigExtractor", "parse_zig_parameters"]
