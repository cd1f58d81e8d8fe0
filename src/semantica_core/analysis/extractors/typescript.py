"""TypeScript and TSX semantic extractor.

Everything the JavaScript extractor reports, plus:
- parameter and return types (type annotations with the ":" stripped)
- method visibility from accessibility modifiers
- implements clauses and abstract classes
- interface declarations as classes with property signatures
- exported type names

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import List, Optional, Tuple

import structlog
from tree_sitter import Node

from ..models import AnalysisResult, ClassInfo, FunctionInfo, ParameterInfo, PropertyInfo
from .javascript import JavaScriptExtractor
from .nodes import end_line, find_child_by_type, find_nodes, name_text, start_line

logger = structlog.get_logger(__name__)


class TypeScriptExtractor(JavaScriptExtractor):
    """Extractor for TypeScript and TSX, bound to "typescript" or "tsx"."""

    class_node_types = ("class_declaration", "abstract_class_declaration")
    exported_identifier_types = ("identifier", "type_identifier")

    def __init__(self, language: str = "typescript") -> None:
        super().__init__(language)

    def _extract_extra_types(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for node in find_nodes(root, ("interface_declaration",)):
            interface = self._extract_interface(node, source)
            if interface is not None:
                result.classes.append(interface)

    # =========================================================================
    # Type annotations
    # =========================================================================

    def _annotation_text(self, node: Optional[Node], source: bytes) -> str:
        """Text of a type_annotation without its leading colon."""
        text = self._get_node_text(node, source).strip()
        if text.startswith(":"):
            text = text[1:]
        return text.strip()

    def _extract_parameter(self, node: Node, source: bytes) -> Optional[ParameterInfo]:
        if node.type in ("required_parameter", "optional_parameter"):
            pattern = node.child_by_field_name("pattern")
            name = name_text(pattern, source)
            # "this" parameters only describe the receiver.
            if not name or pattern.type == "this":
                return None
            return ParameterInfo(
                name=name,
                type_annotation=self._annotation_text(node.child_by_field_name("type"), source),
            )
        return super()._extract_parameter(node, source)

    def _return_type(self, node: Node, source: bytes) -> Optional[str]:
        return self._annotation_text(node.child_by_field_name("return_type"), source) or None

    def _method_visibility(self, node: Node, source: bytes) -> Optional[str]:
        modifier = find_child_by_type(node, "accessibility_modifier")
        if modifier is not None:
            return self._get_node_text(modifier, source)
        return super()._method_visibility(node, source)

    # =========================================================================
    # Classes and interfaces
    # =========================================================================

    def _class_heritage(self, node: Node, source: bytes) -> Tuple[Optional[str], List[str]]:
        heritage = find_child_by_type(node, "class_heritage")
        if heritage is None:
            return None, []

        extends: Optional[str] = None
        implements: List[str] = []

        extends_clause = find_child_by_type(heritage, "extends_clause")
        if extends_clause is not None:
            value = extends_clause.child_by_field_name("value")
            if value is not None:
                extends = self._get_node_text(value, source)

        implements_clause = find_child_by_type(heritage, "implements_clause")
        if implements_clause is not None:
            implements = [
                self._get_node_text(child, source)
                for child in implements_clause.children
                if child.type not in ("implements", ",")
            ]
        return extends, implements

    def _extract_class_property(self, node: Node, source: bytes) -> Optional[PropertyInfo]:
        if node.type != "public_field_definition":
            return None
        name = name_text(node.child_by_field_name("name"), source)
        if not name:
            return None
        modifier = find_child_by_type(node, "accessibility_modifier")
        return PropertyInfo(
            name=name,
            type_annotation=self._annotation_text(node.child_by_field_name("type"), source),
            visibility=self._get_node_text(modifier, source) if modifier is not None else None,
        )

    def _extract_interface(self, node: Node, source: bytes) -> Optional[ClassInfo]:
        name = name_text(node.child_by_field_name("name"), source)
        if not name:
            return None

        extends: Optional[str] = None
        extends_clause = find_child_by_type(node, "extends_type_clause")
        if extends_clause is not None:
            for child in extends_clause.children:
                if child.type not in ("extends", ","):
                    extends = self._get_node_text(child, source)
                    break

        methods: List[FunctionInfo] = []
        properties: List[PropertyInfo] = []
        body = node.child_by_field_name("body")
        if body is not None:
            for member in body.children:
                if member.type == "property_signature":
                    prop_name = name_text(member.child_by_field_name("name"), source)
                    if prop_name:
                        properties.append(
                            PropertyInfo(
                                name=prop_name,
                                type_annotation=self._annotation_text(
                                    member.child_by_field_name("type"), source
                                ),
                            )
                        )
                elif member.type == "method_signature":
                    method_name = name_text(member.child_by_field_name("name"), source)
                    if method_name:
                        methods.append(
                            FunctionInfo(
                                name=method_name,
                                line_start=start_line(member),
                                line_end=end_line(member),
                                parameters=self._extract_parameters(member, source),
                                return_type=self._return_type(member, source),
                            )
                        )

        return ClassInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            extends=extends,
            methods=methods,
            properties=properties,
        )


__all__ = ["TypeScriptExtractor"]
