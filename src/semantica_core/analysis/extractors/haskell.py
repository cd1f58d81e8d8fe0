"""Haskell pattern-based extractor.

Heuristic: only top-level (column 0) declarations are considered, and
layout or comments are not interpreted.
"""

import re

from ..config import HASKELL_KEYWORDS, HASKELL_SIGNATURE_KEYWORDS
from ..models import AnalysisResult
from .regex_base import BaseRegexExtractor, LineIndex

SIGNATURE_PATTERN = re.compile(r"^([a-z_][\w']*)[ \t]*::[ \t]*(.+)$", re.MULTILINE)

# f x y = ..., f (x:xs) | guard = ...
EQUATION_PATTERN = re.compile(r"^([a-z_][\w']*)\b[^=\n]*?(?<![=<>/:|])=(?![=>])", re.MULTILINE)

TYPE_PATTERNS = (
    re.compile(r"^data[ \t]+([A-Z][\w']*)", re.MULTILINE),
    re.compile(r"^newtype[ \t]+([A-Z][\w']*)", re.MULTILINE),
    re.compile(r"^type[ \t]+(?:family[ \t]+)?([A-Z][\w']*)[^=\n]*=", re.MULTILINE),
    # class (Eq a) => Ord a where
    re.compile(r"^class[ \t]+(?:[^=\n]*=>[ \t]*)?([A-Z][\w']*)", re.MULTILINE),
)

IMPORT_PATTERN = re.compile(r"^import[ \t]+(?:qualified[ \t]+)?([A-Z][\w.]*)", re.MULTILINE)

MODULE_PATTERN = re.compile(r"^module[ \t]+([A-Z][\w.]*)", re.MULTILINE)


def signature_return_type(signature: str) -> str:
    """Last "->" segment of a type signature: Int -> String -> Bool gives Bool."""
    return signature.split("->")[-1].strip()


class HaskellExtractor(BaseRegexExtractor):
    """Heuristic Haskell extractor.

    Type signatures are the most specific source of functions. Equations
    only add names that no signature declared.
    """

    @property
    def language_name(self) -> str:
        return "haskell"

    def extract_text(self, text: str, result: AnalysisResult) -> None:
        lines = LineIndex(text)

        for match in SIGNATURE_PATTERN.finditer(text):
            name = match.group(1)
            if name in HASKELL_SIGNATURE_KEYWORDS:
                continue
            result.functions.append(
                self.make_function(
                    name,
                    self.line(lines, match, 1),
                    return_type=signature_return_type(match.group(2)),
                )
            )

        seen = self.seen_names(result.functions)
        for match in EQUATION_PATTERN.finditer(text):
            name = match.group(1)
            if name in HASKELL_KEYWORDS or name in seen:
                continue
            seen.add(name)
            result.functions.append(self.make_function(name, self.line(lines, match, 1)))

        for pattern in TYPE_PATTERNS:
            for match in pattern.finditer(text):
                result.classes.append(self.make_class(match.group(1), self.line(lines, match, 1)))

        for match in IMPORT_PATTERN.finditer(text):
            result.imports.append(self.make_import(match.group(1), self.line(lines, match, 1)))

        for match in MODULE_PATTERN.finditer(text):
            result.symbols.append(self.make_symbol(match.group(1), "module", self.line(lines, match, 1)))


__all__ = ["HaskellExtractor", "signature_return_type"]
