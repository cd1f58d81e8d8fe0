"""PHP semantic extractor.

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

CLASS_NODE_TYPES = ("class_declaration", "interface_declaration", "trait_declaration")

PARAMETER_NODE_TYPES = frozenset(
    {"simple_parameter", "property_promotion_parameter", "variadic_parameter"}
)

# call node type -> field holding the receiver
METHOD_CALL_RECEIVERS = {
    "member_call_expression": "object",
    "nullsafe_member_call_expression": "object",
    "scoped_call_expression": "scope",
}

NAME_NODE_TYPES = ("qualified_name", "namespace_name", "name")


class PHPExtractor(BaseTreeExtractor):
    """Extractor for PHP: functions, classes/interfaces/traits, use clauses, calls."""

    function_boundaries = ("function_definition", "method_declaration")

    @property
    def language_name(self) -> str:
        return "php"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for node in find_nodes(root, ("function_definition",)):
            function = self._extract_callable(node, source)
            if function is not None:
                result.functions.append(function)

        for node in find_nodes(root, CLASS_NODE_TYPES):
            cls = self._extract_class(node, source)
            if cls is not None:
                result.classes.append(cls)

        for node in find_nodes(root, ("namespace_use_declaration",)):
            result.imports.extend(self._extract_use_declaration(node, source))

        call_types = ("function_call_expression",) + tuple(METHOD_CALL_RECEIVERS)
        for node in find_nodes(root, call_types):
            self._extract_call(node, source, result)

    # =========================================================================
    # Functions and methods
    # =========================================================================

    def _extract_callable(self, node: Node, source: bytes) -> Optional[FunctionInfo]:
        name_node = node.child_by_field_name("name")
        name = name_text(name_node, source)
        if not name:
            return None

        return FunctionInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            parameters=self._extract_parameters(node, source),
            return_type=self._get_node_text(node.child_by_field_name("return_type"), source),
            visibility=self._visibility(node, source),
            is_static=find_child_by_type(node, "static_modifier") is not None,
        )

    def _extract_parameters(self, node: Node, source: bytes) -> List[ParameterInfo]:
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return []

        parameters = []
        for child in params_node.children:
            if child.type not in PARAMETER_NODE_TYPES:
                continue
            name_node = child.child_by_field_name("name") or find_child_by_type(child, "variable_name")
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

    def _visibility(self, node: Node, source: bytes) -> Optional[str]:
        modifier = find_child_by_type(node, "visibility_modifier")
        if modifier is None:
            return None
        return self._get_node_text(modifier, source).lower()

    # =========================================================================
    # Classes, interfaces, traits
    # =========================================================================

    def _extract_class(self, node: Node, source: bytes) -> Optional[ClassInfo]:
        name_node = node.child_by_field_name("name")
        name = name_text(name_node, source)
        if not name:
            return None

        extends: Optional[str] = None
        base_clause = find_child_by_type(node, "base_clause")
        if base_clause is not None:
            base = first_child_of_types(base_clause, NAME_NODE_TYPES)
            if base is not None:
                extends = self._get_node_text(base, source)

        implements: List[str] = []
        interface_clause = find_child_by_type(node, "class_interface_clause")
        if interface_clause is not None:
            implements = [
                self._get_node_text(child, source)
                for child in interface_clause.children
                if child.type in NAME_NODE_TYPES
            ]

        methods: List[FunctionInfo] = []
        properties: List[PropertyInfo] = []
        body = node.child_by_field_name("body")
        if body is not None:
            for member in body.children:
                if member.type == "method_declaration":
                    method = self._extract_callable(member, source)
                    if method is not None:
                        methods.append(method)
                elif member.type == "property_declaration":
                    properties.extend(self._extract_properties(member, source))

        return ClassInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            extends=extends,
            implements=implements,
            methods=methods,
            properties=properties,
        )

    def _extract_properties(self, node: Node, source: bytes) -> List[PropertyInfo]:
        visibility = self._visibility(node, source)
        type_text = self._get_node_text(node.child_by_field_name("type"), source)

        properties = []
        for element in find_children_by_type(node, "property_element"):
            name_node = element.child_by_field_name("name") or find_child_by_type(
                element, "variable_name"
            )
            name = name_text(name_node, source)
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
    # Imports
    # =========================================================================

    def _extract_use_declaration(self, node: Node, source: bytes) -> List[ImportInfo]:
        """
        One import per use clause, leading backslash removed.

        Grouped uses ("use App\\{Foo, Bar}") expand to "App\\Foo", "App\\Bar".
        """
        line = start_line(node)
        imports: List[ImportInfo] = []

        for clause in find_children_by_type(node, "namespace_use_clause"):
            module = self._clause_name(clause, source)
            if module:
                imports.append(ImportInfo(module=module, line=line))

        group = find_child_by_type(node, "namespace_use_group")
        if group is not None:
            prefix_node = first_child_of_types(node, ("namespace_name", "qualified_name"))
            prefix = self._get_node_text(prefix_node, source).strip("\\")
            for clause in find_nodes(group, ("namespace_use_clause", "namespace_use_group_clause")):
                member = self._clause_name(clause, source)
                if member:
                    module = f"{prefix}\\{member}" if prefix else member
                    imports.append(ImportInfo(module=module, line=line))

        return imports

    def _clause_name(self, clause: Node, source: bytes) -> str:
        name_node = first_child_of_types(clause, NAME_NODE_TYPES)
        text = self._get_node_text(name_node if name_node is not None else clause, source)
        return text.lstrip("\\")

    # =========================================================================
    # Calls
    # =========================================================================

    def _extract_call(self, node: Node, source: bytes, result: AnalysisResult) -> None:
        arg_count = count_arguments(node.child_by_field_name("arguments"))

        receiver_field = METHOD_CALL_RECEIVERS.get(node.type)
        if receiver_field is None:
            callee = self._get_node_text(node.child_by_field_name("function"), source)
            if callee:
                result.calls.append(self._call(node, source, callee, arg_count))
            return

        callee = self._get_node_text(node.child_by_field_name("name"), source)
        receiver = self._get_node_text(node.child_by_field_name(receiver_field), source)
        if callee:
            result.calls.append(self._call(node, source, callee, arg_count, True, receiver))


__all__ = ["PHPExtractor"]
