"""HTML semantic extractor.

Markup declares no functions; what matters downstream is which ids and
class names a document defines and which scripts and stylesheets it pulls
in. The tag helpers here are shared with the single-file-component
template pass.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Iterator, List, Optional, Tuple

from tree_sitter import Node

from ..models import AnalysisResult, ImportInfo, SymbolInfo
from .base import BaseTreeExtractor
from .nodes import find_child_by_type, find_children_by_type, find_nodes, node_text, start_line

TAG_NODE_TYPES = ("start_tag", "self_closing_tag")


def tag_name(tag: Node, source: bytes) -> str:
    """Name of a start or self-closing tag, "" if missing."""
    return node_text(find_child_by_type(tag, "tag_name"), source)


def iter_attributes(tag: Node, source: bytes) -> Iterator[Tuple[Node, str, str]]:
    """Yield (attribute node, name, unquoted value) for each attribute of a tag.

    Boolean attributes yield an empty value.
    """
    for attribute in find_children_by_type(tag, "attribute"):
        name = node_text(find_child_by_type(attribute, "attribute_name"), source)
        if not name:
            continue
        yield attribute, name, _attribute_value(attribute, source)


def _attribute_value(attribute: Node, source: bytes) -> str:
    value = find_child_by_type(attribute, "attribute_value")
    if value is not None:
        return node_text(value, source)
    quoted = find_child_by_type(attribute, "quoted_attribute_value")
    if quoted is None:
        return ""
    inner = find_child_by_type(quoted, "attribute_value")
    if inner is not None:
        return node_text(inner, source)
    return node_text(quoted, source)[1:-1]


class HTMLExtractor(BaseTreeExtractor):
    """Extractor for HTML documents: id/class symbols, script and stylesheet imports."""

    @property
    def language_name(self) -> str:
        return "html"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for tag in find_nodes(root, TAG_NODE_TYPES):
            name = tag_name(tag, source).lower()
            for attribute, attr_name, value in iter_attributes(tag, source):
                line = start_line(attribute)
                if attr_name == "id" and value:
                    result.symbols.append(SymbolInfo(name=value, kind="id", line=line))
                elif attr_name == "class":
                    result.symbols.extend(
                        SymbolInfo(name=token, kind="class", line=line) for token in value.split()
                    )

            imported = self._extract_import(tag, name, source)
            if imported is not None:
                result.imports.append(imported)

    def _extract_import(self, tag: Node, name: str, source: bytes) -> Optional[ImportInfo]:
        attributes = {
            attr_name.lower(): (node, value) for node, attr_name, value in iter_attributes(tag, source)
        }

        if name == "script" and "src" in attributes:
            node, value = attributes["src"]
            if value:
                return ImportInfo(module=value, line=start_line(node))
            return None

        if name == "link" and "href" in attributes:
            rel = attributes.get("rel", (None, ""))[1].lower().split()
            node, value = attributes["href"]
            if "stylesheet" in rel and value:
                return ImportInfo(module=value, line=start_line(node))
        return None


def template_symbols(root: Node, source: bytes) -> List[SymbolInfo]:
    """Component and directive symbols of a component template.

    A tag is a component when it is PascalCase (uppercase first character
    and at least one lowercase character) or contains "-" without starting
    with "v-". Attributes starting with "v-", "@" or ":" are directives.
    """
    symbols: List[SymbolInfo] = []
    for tag in find_nodes(root, TAG_NODE_TYPES):
        name = tag_name(tag, source)
        if _is_component_name(name):
            symbols.append(SymbolInfo(name=name, kind="component", line=start_line(tag)))
        for attribute, attr_name, _ in iter_attributes(tag, source):
            if attr_name.startswith(("v-", "@", ":")):
                symbols.append(SymbolInfo(name=attr_name, kind="directive", line=start_line(attribute)))
    return symbols


def _is_component_name(name: str) -> bool:
    if not name:
        return False
    if name[0].isupper() and any(ch.islower() for ch in name):
        return True
    return "-" in name and not name.startswith("v-")


__all__ = ["HTMLExtractor", "iter_attributes", "tag_name", "template_symbols"]
