"""Objective-C pattern-based extractor.

Heuristic: method declarations and definitions are both reported, so a
method declared in an @interface and defined in its @implementation
appears twice. Categories report the class name they extend.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

import re
from typing import List

from ..models import AnalysisResult, ParameterInfo
from .regex_base import BaseRegexExtractor, LineIndex

# - (NSString *)greet:(NSString *)name times:(int)count
METHOD_PATTERN = re.compile(r"^[ \t]*([+-])[ \t]*\(([^)]+)\)[ \t]*(\w+)([^;{\n]*)", re.MULTILINE)

SELECTOR_PART_PATTERN = re.compile(r"(\w*)[ \t]*:[ \t]*\(([^)]+)\)[ \t]*(\w+)")

INTERFACE_PATTERN = re.compile(
    r"^[ \t]*@interface[ \t]+(\w+)(?:[ \t]*:[ \t]*(\w+))?(?:[ \t]*<([^>\n]+)>)?", re.MULTILINE
)

IMPLEMENTATION_PATTERN = re.compile(r"^[ \t]*@implementation[ \t]+(\w+)", re.MULTILINE)

# @protocol Drawable <NSObject>, but not the forward declaration @protocol Drawable;
PROTOCOL_PATTERN = re.compile(r"^[ \t]*@protocol[ \t]+(\w+)\b(?![ \t]*[;,])", re.MULTILINE)

IMPORT_PATTERNS = (
    re.compile(r"""^[ \t]*#[ \t]*(?:import|include)[ \t]*[<"]([^>"\n]+)[>"]""", re.MULTILINE),
    re.compile(r"^[ \t]*@import[ \t]+([\w.]+)", re.MULTILINE),
)


def parse_selector_parameters(text: str) -> List[ParameterInfo]:
    """greet:(NSString *)name times:(int)count -> name: NSString *, count: int"""
    return [
        ParameterInfo(name=match.group(3), type_annotation=match.group(2).strip())
        for match in SELECTOR_PART_PATTERN.finditer(text)
    ]


class ObjCExtractor(BaseRegexExtractor):
    """Heuristic Objective-C extractor.

    "+" methods are class methods and are reported as static.
    """

    @property
    def language_name(self) -> str:
        return "objc"

    def extract_text(self, text: str, result: AnalysisResult) -> None:
        lines = LineIndex(text)

        for match in METHOD_PATTERN.finditer(text):
            result.functions.append(
                self.make_function(
                    match.group(3),
                    self.line(lines, match, 3),
                    parameters=parse_selector_parameters(match.group(4)),
                    return_type=match.group(2).strip(),
                    is_static=match.group(1) == "+",
                )
            )

        for match in INTERFACE_PATTERN.finditer(text):
            protocols = [p.strip() for p in self.group(match, 3).split(",") if p.strip()]
            result.classes.append(
                self.make_class(
                    match.group(1),
                    self.line(lines, match, 1),
                    extends=self.group(match, 2) or None,
                    implements=protocols,
                )
            )

        seen = self.seen_names(result.classes)
        for match in IMPLEMENTATION_PATTERN.finditer(text):
            name = match.group(1)
            if name in seen:
                continue
            seen.add(name)
            result.classes.append(self.make_class(name, self.line(lines, match, 1)))

        for match in PROTOCOL_PATTERN.finditer(text):
            result.classes.append(self.make_class(match.group(1), self.line(lines, match, 1)))

        imports = [
            (match.start(1), self.make_import(match.group(1), self.line(lines, match, 1)))
            for pattern in IMPORT_PATTERNS
            for match in pattern.finditer(text)
        ]
        imports.sort(key=lambda item: item[0])
        result.imports.extend(imported for _, imported in imports)


__all__ = ["ObjCExtractor", "parse_selector_parameters"]
