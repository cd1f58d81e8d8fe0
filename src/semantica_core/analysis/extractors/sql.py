"""SQL pattern-based extractor.

Schema objects created by DDL statements become symbols. Data
manipulation statements become calls: SELECT on its own, INSERT, UPDATE
and DELETE with the target table as receiver. Keywords are matched
case-insensitively; dialect differences are not modelled.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import re
from typing import List, Tuple

from ..config import SQL_UPDATE_CONTEXT_KEYWORDS
from ..models import AnalysisResult, CallInfo, SymbolInfo
from .regex_base import BaseRegexExtractor, LineIndex

# "users", `users`, [users] and public.users
_OBJECT_NAME = r"""["`\[]?([\w.]+)["`\]]?"""

_IF_NOT_EXISTS = r"(?:IF\s+NOT\s+EXISTS\s+)?"

_OR_REPLACE = r"(?:OR\s+REPLACE\s+)?"

DDL_PATTERNS: Tuple[Tuple["re.Pattern[str]", str], ...] = tuple(
    (re.compile(r"\bCREATE\s+" + prefix + _OBJECT_NAME, re.IGNORECASE), kind)
    for prefix, kind in (
        (r"(?:TEMP(?:ORARY)?\s+)?TABLE\s+" + _IF_NOT_EXISTS, "table"),
        (r"(?:UNIQUE\s+)?INDEX\s+" + _IF_NOT_EXISTS, "index"),
        (_OR_REPLACE + r"VIEW\s+", "view"),
        (_OR_REPLACE + r"(?:FUNCTION|PROCEDURE)\s+", "function"),
        (_OR_REPLACE + r"TRIGGER\s+", "trigger"),
    )
)

SELECT_PATTERN = re.compile(r"\bSELECT\b", re.IGNORECASE)

DML_PATTERNS: Tuple[Tuple["re.Pattern[str]", str], ...] = (
    (re.compile(r"\bINSERT\s+INTO\s+" + _OBJECT_NAME, re.IGNORECASE), "INSERT"),
    (re.compile(r"\bUPDATE\s+" + _OBJECT_NAME, re.IGNORECASE), "UPDATE"),
    (re.compile(r"\bDELETE\s+FROM\s+" + _OBJECT_NAME, re.IGNORECASE), "DELETE"),
)


class SQLExtractor(BaseRegexExtractor):
    @property
    def language_name(self) -> str:
        return "sql"

    def extract_text(self, text: str, result: AnalysisResult) -> None:
        lines = LineIndex(text)

        symbols: List[Tuple[int, SymbolInfo]] = []
        for pattern, kind in DDL_PATTERNS:
            for match in pattern.finditer(text):
                symbol = self.make_symbol(match.group(1), kind, self.line(lines, match, 1))
                symbols.append((match.start(1), symbol))
        symbols.sort(key=lambda item: item[0])
        result.symbols.extend(symbol for _, symbol in symbols)

        calls: List[Tuple[int, CallInfo]] = [
            (match.start(), CallInfo(callee="SELECT", line=self.line(lines, match)))
            for match in SELECT_PATTERN.finditer(text)
        ]
        for pattern, statement in DML_PATTERNS:
            for match in pattern.finditer(text):
                if statement == "UPDATE" and self._is_update_clause(text, match.start()):
                    continue
                call = CallInfo(callee=statement, line=self.line(lines, match), receiver=match.group(1))
                calls.append((match.start(), call))
        calls.sort(key=lambda item: item[0])
        result.calls.extend(call for _, call in calls)

    @staticmethod
    def _is_update_clause(text: str, position: int) -> bool:
        """ON UPDATE CASCADE, BEFORE UPDATE ON t and similar are not statements."""
        words = text[max(0, position - 32):position].split()
        return bool(words) and words[-1].upper() in SQL_UPDATE_CONTEXT_KEYWORDS


__all__ = ["SQLExtractor"]
