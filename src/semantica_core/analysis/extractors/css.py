"""CSS and SCSS semantic extractor.

Stylesheets expose selectors, custom properties and keyframes as symbols,
and @import targets as imports. The SCSS flavour adds module loading
(@use, @forward) and preprocessor declarations: $variables, mixins and
functions.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import List, Optional

import structlog
from tree_sitter import Node

from ..models import AnalysisResult, ImportInfo, SymbolInfo
from .base import BaseTreeExtractor
from .nodes import find_child_by_type, find_nodes, first_child_of_types, name_text, start_line

logger = structlog.get_logger(__name__)

IMPORT_NODE_TYPES = ("import_statement",)
SCSS_IMPORT_NODE_TYPES = ("import_statement", "use_statement", "forward_statement")
SCSS_AT_RULE_IMPORTS = frozenset({"@use", "@forward", "@import"})

SCSS_DECLARATIONS = {"mixin_statement": "mixin", "function_statement": "function"}


def classify_selector(selector: str) -> str:
    """Kind of a selector from its leading character."""
    if selector.startswith("#"):
        return "id"
    if selector.startswith("."):
        return "class"
    if selector.startswith("@"):
        return "at-rule"
    return "selector"


def clean_import_target(text: str) -> str:
    """url("a.css") and "a.css" both become a.css."""
    value = text.strip()
    if value.startswith("url(") and value.endswith(")"):
        value = value[4:-1].strip()
    return value.strip("\"'")


class CSSExtractor(BaseTreeExtractor):
    """Extractor for CSS ("css") and SCSS ("scss") stylesheets."""

    def __init__(self, language: str = "css") -> None:
        super().__init__()
        self._language = language
        self._log = logger.bind(extractor="CSSExtractor", language=language)

    @property
    def language_name(self) -> str:
        return self._language

    @property
    def is_scss(self) -> bool:
        return self._language == "scss"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        result.symbols.extend(self._selector_symbols(root, source))
        result.symbols.extend(self._declaration_symbols(root, source))

        for node in find_nodes(root, ("keyframes_statement",)):
            name = name_text(find_child_by_type(node, "keyframes_name"), source)
            if name:
                result.symbols.append(
                    SymbolInfo(
                        name=name,
                        kind="keyframes",
                        line=start_line(node),
                    )
                )

        if self.is_scss:
            result.symbols.extend(self._scss_symbols(root, source))

        import_types = SCSS_IMPORT_NODE_TYPES if self.is_scss else IMPORT_NODE_TYPES
        for node in find_nodes(root, import_types):
            imported = self._extract_import(node, source)
            if imported is not None:
                result.imports.append(imported)

        if self.is_scss:
            # Grammars without dedicated @use/@forward nodes fall back to at_rule.
            for node in find_nodes(root, ("at_rule",)):
                keyword = self._get_node_text(find_child_by_type(node, "at_keyword"), source)
                if keyword in SCSS_AT_RULE_IMPORTS:
                    imported = self._extract_import(node, source)
                    if imported is not None:
                        result.imports.append(imported)

    # =========================================================================
    # Symbols
    # =========================================================================

    def _selector_symbols(self, root: Node, source: bytes) -> List[SymbolInfo]:
        symbols = []
        for rule_set in find_nodes(root, ("rule_set",)):
            selectors = find_child_by_type(rule_set, "selectors")
            if selectors is None:
                continue
            for selector in selectors.children:
                if selector.type == ",":
                    continue
                text = self._get_node_text(selector, source).strip()
                if text:
                    symbols.append(
                        SymbolInfo(name=text, kind=classify_selector(text), line=start_line(selector))
                    )
        return symbols

    def _declaration_symbols(self, root: Node, source: bytes) -> List[SymbolInfo]:
        """Custom properties (--x), plus $variables for SCSS."""
        symbols = []
        for declaration in find_nodes(root, ("declaration",)):
            name_node = first_child_of_types(declaration, ("property_name", "variable_name", "variable"))
            if name_node is None and declaration.children:
                name_node = declaration.children[0]
            name = self._get_node_text(name_node, source).strip()
            if name.startswith("--") or (self.is_scss and name.startswith("$")):
                symbols.append(SymbolInfo(name=name, kind="variable", line=start_line(declaration)))
        return symbols

    def _scss_symbols(self, root: Node, source: bytes) -> List[SymbolInfo]:
        symbols = []
        for node in find_nodes(root, tuple(SCSS_DECLARATIONS)):
            name_node = node.child_by_field_name("name") or first_child_of_types(
                node, ("identifier", "name")
            )
            name = self._get_node_text(name_node, source)
            if name:
                kind = SCSS_DECLARATIONS[node.type]
                symbols.append(SymbolInfo(name=name, kind=kind, line=start_line(node)))
        return symbols

    # =========================================================================
    # Imports
    # =========================================================================

    def _extract_import(self, node: Node, source: bytes) -> Optional[ImportInfo]:
        target = first_child_of_types(node, ("string_value", "call_expression", "plain_value"))
        if target is None:
            return None
        module = clean_import_target(self._get_node_text(target, source))
        if not module:
            return None
        return ImportInfo(module=module, line=start_line(node))


__all__ = ["CSSExtractor", "classify_selector", "clean_import_target"]
