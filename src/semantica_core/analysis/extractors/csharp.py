"""C# semantic extractor.

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
    count_arguments,
    end_line,
    find_child_by_type,
    find_children_by_type,
    find_nodes,
    first_child_of_types,
    name_text,
    start_line,
)

TYPE_NODE_TYPES = (
    "class_declaration",
    "struct_declaration",
    "record_declaration",
    "interface_declaration",
)

FUNCTION_NODE_TYPES = ("method_declaration", "local_function_statement")

VISIBILITY_KEYWORDS = ("public", "private", "protected", "internal")

NAME_NODE_TYPES = ("qualified_name", "identifier", "alias_qualified_name")


class CSharpExtractor(BaseTreeExtractor):
    """Extractor for C#: types, members, using directives and invocations."""

    function_boundaries = FUNCTION_NODE_TYPES + (
        "constructor_declaration",
        "lambda_expression",
        "anonymous_method_expression",
    )

    @property
    def language_name(self) -> str:
        return "csharp"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for node in find_nodes(root, FUNCTION_NODE_TYPES):
            if node.type == "method_declaration" and self._is_member(node):
                continue
            function = self._extract_function(node, source)
            if function is not None:
                result.functions.append(function)

        for node in find_nodes(root, TYPE_NODE_TYPES):
            cls = self._extract_type(node, source)
            if cls is not None:
                result.classes.append(cls)

        for node in find_nodes(root, ("using_directive",)):
            module = name_text(first_child_of_types(node, NAME_NODE_TYPES), source)
            if module:
                result.imports.append(ImportInfo(module=module, line=start_line(node)))

        for node in find_nodes(root, ("invocation_expression",)):
            self._extract_call(node, source, result)

    @staticmethod
    def _is_member(node: Node) -> bool:
        parent = node.parent
        return parent is not None and parent.type == "declaration_list"

    # =========================================================================
    # Functions
    # =========================================================================

    def _extract_function(
        self,
        node: Node,
        source: bytes,
        default_visibility: Optional[str] = None,
    ) -> Optional[FunctionInfo]:
        name = name_text(node.child_by_field_name("name"), source)
        if not name:
            return None

        modifiers = self._modifiers(node, source)
        return_node = node.child_by_field_name("returns") or node.child_by_field_name("type")
        return self._function(
            node,
            name,
            self._extract_parameters(node, source),
            return_type=self._get_node_text(return_node, source),
            visibility=self._visibility(modifiers) or default_visibility,
            is_async="async" in modifiers,
            is_static="static" in modifiers,
        )

    def _extract_parameters(self, node: Node, source: bytes) -> List[ParameterInfo]:
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return []

        parameters = []
        for child in find_children_by_type(params_node, "parameter"):
            name = name_text(child.child_by_field_name("name"), source)
            if not name:
                continue
            parameters.append(
                ParameterInfo(
                    name=name,
                    type_annotation=self._get_node_text(child.child_by_field_name("type"), source),
                )
            )
        return parameters

    def _modifiers(self, node: Node, source: bytes) -> List[str]:
        return [self._get_node_text(child, source) for child in find_children_by_type(node, "modifier")]

    @staticmethod
    def _visibility(modifiers: List[str]) -> Optional[str]:
        for keyword in VISIBILITY_KEYWORDS:
            if keyword in modifiers:
                return keyword
        return None

    # =========================================================================
    # Types
    # =========================================================================

    def _extract_type(self, node: Node, source: bytes) -> Optional[ClassInfo]:
        name = name_text(node.child_by_field_name("name"), source)
        if not name:
            return None

        bases: List[str] = []
        base_list = find_child_by_type(node, "base_list")
        if base_list is not None:
            bases = [
                self._get_node_text(child, source)
                for child in base_list.children
                if child.type not in (":", ",", "argument_list")
            ]

        # Interfaces only inherit other interfaces; there is no base class.
        if node.type == "interface_declaration":
            extends, implements = None, bases
        else:
            extends, implements = (bases[0] if bases else None), bases[1:]

        default_visibility = "public" if node.type == "interface_declaration" else None
        methods: List[FunctionInfo] = []
        properties: List[PropertyInfo] = []
        body = node.child_by_field_name("body") or find_child_by_type(node, "declaration_list")
        if body is not None:
            for member in body.children:
                if member.type == "method_declaration":
                    method = self._extract_function(member, source, default_visibility)
                    if method is not None:
                        methods.append(method)
                elif member.type == "property_declaration":
                    prop = self._extract_property(member, source)
                    if prop is not None:
                        properties.append(prop)
                elif member.type == "field_declaration":
                    properties.extend(self._extract_fields(member, source))

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
        name = name_text(node.child_by_field_name("name"), source)
        if not name:
            return None
        return PropertyInfo(
            name=name,
            type_annotation=self._get_node_text(node.child_by_field_name("type"), source),
            visibility=self._visibility(self._modifiers(node, source)),
        )

    def _extract_fields(self, node: Node, source: bytes) -> List[PropertyInfo]:
        declaration = find_child_by_type(node, "variable_declaration")
        if declaration is None:
            return []

        visibility = self._visibility(self._modifiers(node, source))
        type_text = self._get_node_text(declaration.child_by_field_name("type"), source)

        properties = []
        for declarator in find_children_by_type(declaration, "variable_declarator"):
            name = name_text(
                declarator.child_by_field_name("name") or find_child_by_type(declarator, "identifier"),
                source,
            )
            if not name:
                continue
            properties.append(
                PropertyInfo(
                    name=name,
                    type_annotation=type_text,
                    visibility=visibility,
                )
            )
        return properties

    # =========================================================================
    # Calls
    # =========================================================================

    def _extract_call(self, node: Node, source: bytes, result: AnalysisResult) -> None:
        function_node = node.child_by_field_name("function") or (
            node.children[0] if node.children else None
        )
        if function_node is None:
            return
        arg_count = count_arguments(node.child_by_field_name("arguments"))

        if function_node.type == "member_access_expression":
            callee = self._get_node_text(function_node.child_by_field_name("name"), source)
            receiver = self._get_node_text(function_node.child_by_field_name("expression"), source)
            if callee:
                result.calls.append(self._call(node, source, callee, arg_count, True, receiver))
            return

        callee = self._get_node_text(function_node, source)
        if callee:
            result.calls.append(self._call(node, source, callee, arg_count))


__all__ = ["CSharpExtractor"]
