"""Perl pattern-based extractor.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import re

from ..models import AnalysisResult
from .regex_base import BaseRegexExtractor, LineIndex

SUB_PATTERN = re.compile(r"^[ \t]*sub[ \t]+(\w+)\s*(?:\([^)]*\))?\s*\{", re.MULTILINE)

PACKAGE_PATTERN = re.compile(r"^[ \t]*package[ \t]+([\w:]+)", re.MULTILINE)

USE_PATTERN = re.compile(r"^[ \t]*use[ \t]+([\w:]+)", re.MULTILINE)

# require Foo::Bar; require "lib/helpers.pl";
REQUIRE_PATTERN = re.compile(r"""^[ \t]*require[ \t]+['"]?([^'"\s;]+)['"]?""", re.MULTILINE)


class PerlExtractor(BaseRegexExtractor):
    """Heuristic Perl extractor: subs, packages as classes, use/require imports."""

    @property
    def language_name(self) -> str:
        return "perl"

    def extract_text(self, text: str, result: AnalysisResult) -> None:
        lines = LineIndex(text)

        for match in SUB_PATTERN.finditer(text):
            result.functions.append(self.make_function(match.group(1), self.line(lines, match, 1)))

        for match in PACKAGE_PATTERN.finditer(text):
            result.classes.append(self.make_class(match.group(1), self.line(lines, match, 1)))

        for pattern in (USE_PATTERN, REQUIRE_PATTERN):
            for match in pattern.finditer(text):
                result.imports.append(self.make_import(match.group(1), self.line(lines, match, 1)))


__all__ = ["PerlExtractor"]
