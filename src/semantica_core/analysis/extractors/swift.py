"""Swift semantic extractor.

class_declaration covers classes, structs, enums, actors and extensions
in the Swift grammar; the declaration_kind field tells them apart.
Protocols have their own node.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import List, Optional

from tree_sitter import Node

from ..models import (
    AnalysisResult,
    ClassInfo,
    FunctionInfo,
    ImportInfo,
    ParameterInfo,
    PropertyInfo,
)
from .base import BaseTreeExtractor
from .nodes import (
    end_line,
    find_child_by_type,
    find_children_by_type,
    find_nodes,
    name_text,
    start_line,
    walk_tree,
)

TYPE_BODY_TYPES = frozenset({"class_body", "enum_class_body", "protocol_body"})

VISIBILITY_KEYWORDS = frozenset({"public", "private", "internal", "fileprivate", "open"})


class SwiftExtractor(BaseTreeExtractor):
    """Extractor for Swift."""

    function_boundaries = ("function_declaration", "init_declaration", "lambda_literal")

    @property
    def language_name(self) -> str:
        return "swift"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for node in find_nodes(root, ("function_declaration",)):
            if node.parent is not None and node.parent.type in TYPE_BODY_TYPES:
                continue
            function = self._extract_function(node, source)
            if function is not None:
                result.functions.append(function)

        for node in find_nodes(root, ("class_declaration", "protocol_declaration")):
            cls = self._extract_type(node, source)
            if cls is not None:
                result.classes.append(cls)

        for node in find_nodes(root, ("import_declaration",)):
            module = find_child_by_type(node, "identifier")
            if module is not None:
                result.imports.append(
                    ImportInfo(module=self._get_node_text(module, source), line=start_line(node))
                )

        for node in find_nodes(root, ("call_expression",)):
            self._extract_call(node, source, result)

    # =========================================================================
    # Functions
    # =========================================================================

    def _extract_function(self, node: Node, source: bytes) -> Optional[FunctionInfo]:
        name_node = node.child_by_field_name("name")
        name = name_text(name_node, source)
        if not name:
            return None

        modifiers = self._modifier_words(node, source)
        return self._function(
            node,
            name,
            self._extract_parameters(node, source),
            return_type=self._return_type(node, source),
            visibility=next((word for word in modifiers if word in VISIBILITY_KEYWORDS), None),
            is_async="async" in modifiers or self._has_async_keyword(node, source),
            is_static="static" in modifiers or "class" in modifiers,
        )

    def _extract_parameters(self, node: Node, source: bytes) -> List[ParameterInfo]:
        parameters = []
        for child in find_children_by_type(node, "parameter"):
            name_node = child.child_by_field_name("name")
            name = name_text(name_node, source)
            if not name:
                continue
            parameters.append(
                ParameterInfo(
                    name=name,
                    type_annotation=self._get_node_text(child.child_by_field_name("type"), source),
                )
            )
        return parameters

    def _return_type(self, node: Node, source: bytes) -> str:
        return_node = node.child_by_field_name("return_type")
        if return_node is not None:
            return self._get_node_text(return_node, source)
        children = node.children
        for index, child in enumerate(children[:-1]):
            if child.type == "->":
                return self._get_node_text(children[index + 1], source)
        return ""

    def _modifier_words(self, node: Node, source: bytes) -> List[str]:
        modifiers = find_child_by_type(node, "modifiers")
        if modifiers is None:
            return []
        return self._get_node_text(modifiers, source).split()

    def _has_async_keyword(self, node: Node, source: bytes) -> bool:
        # func load() async throws -> Data
        for child in node.children:
            if child.type == "function_body":
                return False
            if self._get_node_text(child, source) == "async":
                return True
        return False

    # =========================================================================
    # Types
    # =========================================================================

    def _extract_type(self, node: Node, source: bytes) -> Optional[ClassInfo]:
        name_node = node.child_by_field_name("name")
        name = name_text(name_node, source)
        if not name:
            return None

        inherited = [
            self._get_node_text(spec.child_by_field_name("inherits_from") or spec, source)
            for spec in find_children_by_type(node, "inheritance_specifier")
        ]
        # A class's first inherited name may be its superclass; everything
        # else (and everything a struct, enum or protocol lists) is a conformance.
        kind = self._get_node_text(node.child_by_field_name("declaration_kind"), source)
        if kind == "class" and inherited:
            extends, implements = inherited[0], inherited[1:]
        else:
            extends, implements = None, inherited

        methods: List[FunctionInfo] = []
        properties: List[PropertyInfo] = []
        body = node.child_by_field_name("body")
        if body is not None:
            for member in body.children:
                if member.type in ("function_declaration", "protocol_function_declaration"):
                    method = self._extract_function(member, source)
                    if method is not None:
                        methods.append(method)
                elif member.type in ("property_declaration", "protocol_property_declaration"):
                    prop = self._extract_property(member, source)
                    if prop is not None:
                        properties.append(prop)

        return ClassInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            extends=extends,
            implements=implements,
            methods=methods,
            properties=properties,
        )

    def _extract_property(self, node: Node, source: bytes) -> Optional[PropertyInfo]:
        pattern = node.child_by_field_name("name") or find_child_by_type(node, "pattern")
        if pattern is None:
            return None
        name_node = next((n for n in walk_tree(pattern) if n.type == "simple_identifier"), None)
        name = name_text(name_node, source)
        if not name:
            return None

        type_text = ""
        annotation = find_child_by_type(node, "type_annotation")
        if annotation is not None:
            type_text = self._get_node_text(annotation, source).lstrip(":").strip()

        modifiers = self._modifier_words(node, source)
        return PropertyInfo(
            name=name,
            type_annotation=type_text,
            visibility=next((word for word in modifiers if word in VISIBILITY_KEYWORDS), None),
        )

    # =========================================================================
    # Calls
    # =========================================================================

    def _extract_call(self, node: Node, source: bytes, result: AnalysisResult) -> None:
        if not node.children:
            return
        expression = node.children[0]
        arg_count = self._count_arguments(node)

        if expression.type == "navigation_expression":
            suffix = expression.child_by_field_name("suffix") or find_child_by_type(
                expression, "navigation_suffix"
            )
            callee_node = None
            if suffix is not None:
                callee_node = suffix.child_by_field_name("suffix") or find_child_by_type(
                    suffix, "simple_identifier"
                )
            callee = self._get_node_text(callee_node, source)
            target = expression.child_by_field_name("target") or expression.children[0]
            if callee:
                receiver = self._get_node_text(target, source)
                result.calls.append(self._call(node, source, callee, arg_count, True, receiver))
            return

        if expression.type == "simple_identifier":
            callee = self._get_node_text(expression, source)
            result.calls.append(self._call(node, source, callee, arg_count))

    @staticmethod
    def _count_arguments(node: Node) -> int:
        suffix = find_child_by_type(node, "call_suffix")
        if suffix is None:
            return 0
        arguments = find_child_by_type(suffix, "value_arguments")
        count = len(find_children_by_type(arguments, "value_argument")) if arguments is not None else 0
        # trailing closure: items.map { $0 * 2 }
        if find_child_by_type(suffix, "lambda_literal") is not None:
            count += 1
        return count


__all__ = ["SwiftExtractor"]
