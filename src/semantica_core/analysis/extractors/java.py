"""Java semantic extractor.

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
    name_text,
    start_line,
)

TYPE_NODE_TYPES = (
    "class_declaration",
    "interface_declaration",
    "enum_declaration",
    "record_declaration",
)

TYPE_BODY_TYPES = frozenset(
    {"class_body", "interface_body", "enum_body", "enum_body_declarations", "record_body"}
)

METHOD_NODE_TYPES = ("method_declaration", "constructor_declaration", "compact_constructor_declaration")

SPREAD_PARAMETER_SKIP = frozenset({"modifiers", "...", "variable_declarator"})

VISIBILITY_KEYWORDS = ("public", "private", "protected")


class JavaExtractor(BaseTreeExtractor):
    """Extractor for Java.

    Methods belong to their declaring type. Only method declarations found
    outside any type body (rare; snippets and error recovery) are reported
    as free functions.
    """

    function_boundaries = METHOD_NODE_TYPES + ("lambda_expression",)

    @property
    def language_name(self) -> str:
        return "java"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for node in find_nodes(root, ("method_declaration",)):
            if node.parent is not None and node.parent.type in TYPE_BODY_TYPES:
                continue
            method = self._extract_method(node, source)
            if method is not None:
                result.functions.append(method)

        for node in find_nodes(root, TYPE_NODE_TYPES):
            cls = self._extract_type(node, source)
            if cls is not None:
                result.classes.append(cls)

        for node in find_nodes(root, ("import_declaration",)):
            module = self._import_path(node, source)
            if module:
                result.imports.append(ImportInfo(module=module, line=start_line(node)))

        for node in find_nodes(root, ("method_invocation", "object_creation_expression")):
            self._extract_call(node, source, result)

    # =========================================================================
    # Methods
    # =========================================================================

    def _extract_method(
        self,
        node: Node,
        source: bytes,
        default_visibility: Optional[str] = None,
    ) -> Optional[FunctionInfo]:
        name = name_text(node.child_by_field_name("name"), source)
        if not name:
            return None

        modifiers = self._modifier_words(node, source)
        return self._function(
            node,
            name,
            self._extract_parameters(node, source),
            return_type=self._get_node_text(node.child_by_field_name("type"), source),
            visibility=self._visibility(modifiers) or default_visibility,
            is_static="static" in modifiers,
        )

    def _extract_parameters(self, node: Node, source: bytes) -> List[ParameterInfo]:
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return []

        parameters = []
        for child in params_node.children:
            if child.type == "formal_parameter":
                name_node = child.child_by_field_name("name")
                type_text = self._get_node_text(child.child_by_field_name("type"), source)
            elif child.type == "spread_parameter":
                # String... args
                declarator = find_child_by_type(child, "variable_declarator")
                name_node = (
                    declarator.child_by_field_name("name") if declarator is not None else None
                )
                type_node = next(
                    (c for c in child.children if c.type not in SPREAD_PARAMETER_SKIP),
                    None,
                )
                type_text = self._get_node_text(type_node, source)
                if type_text:
                    type_text += "..."
            else:
                continue
            name = name_text(name_node, source)
            if not name:
                continue
            parameters.append(ParameterInfo(name=name, type_annotation=type_text))
        return parameters

    def _modifier_words(self, node: Node, source: bytes) -> List[str]:
        modifiers = find_child_by_type(node, "modifiers")
        if modifiers is None:
            return []
        return [
            self._get_node_text(child, source)
            for child in modifiers.children
            if child.type not in ("marker_annotation", "annotation")
        ]

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

        extends: Optional[str] = None
        superclass = node.child_by_field_name("superclass") or find_child_by_type(node, "superclass")
        if superclass is not None:
            base = next((c for c in superclass.children if c.type != "extends"), None)
            extends = self._get_node_text(base, source) or None

        implements: List[str] = []
        for clause_type in ("super_interfaces", "extends_interfaces"):
            clause = find_child_by_type(node, clause_type)
            if clause is None:
                continue
            type_list = find_child_by_type(clause, "type_list")
            container = type_list if type_list is not None else clause
            implements.extend(
                self._get_node_text(child, source)
                for child in container.children
                if child.type not in ("implements", "extends", ",")
            )

        # interface members are implicitly public
        default_visibility = "public" if node.type == "interface_declaration" else None
        methods: List[FunctionInfo] = []
        properties: List[PropertyInfo] = []
        for member in self._body_members(node):
            if member.type in METHOD_NODE_TYPES:
                method = self._extract_method(member, source, default_visibility)
                if method is not None:
                    methods.append(method)
            elif member.type in ("field_declaration", "constant_declaration"):
                properties.extend(self._extract_fields(member, source))

        if node.type == "record_declaration":
            properties = self._record_components(node, source) + properties

        return ClassInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            extends=extends,
            implements=implements,
            methods=methods,
            properties=properties,
        )

    @staticmethod
    def _body_members(node: Node) -> List[Node]:
        body = node.child_by_field_name("body")
        if body is None:
            return []
        members = []
        for child in body.children:
            if child.type == "enum_body_declarations":
                members.extend(child.children)
            else:
                members.append(child)
        return members

    def _extract_fields(self, node: Node, source: bytes) -> List[PropertyInfo]:
        visibility = self._visibility(self._modifier_words(node, source))
        type_text = self._get_node_text(node.child_by_field_name("type"), source)

        properties = []
        for declarator in find_children_by_type(node, "variable_declarator"):
            name = name_text(declarator.child_by_field_name("name"), source)
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

    def _record_components(self, node: Node, source: bytes) -> List[PropertyInfo]:
        """record Point(int x, int y) exposes x and y."""
        return [
            PropertyInfo(name=param.name, type_annotation=param.type_annotation)
            for param in self._extract_parameters(node, source)
        ]

    # =========================================================================
    # Imports and calls
    # =========================================================================

    def _import_path(self, node: Node, source: bytes) -> str:
        """import static java.util.Map.*; -> java.util.Map.*"""
        text = self._get_node_text(node, source).strip()
        if text.endswith(";"):
            text = text[:-1]
        words = text.split()
        for keyword in ("import", "static"):
            if words and words[0] == keyword:
                words = words[1:]
        return "".join(words)

    def _extract_call(self, node: Node, source: bytes, result: AnalysisResult) -> None:
        arg_count = count_arguments(node.child_by_field_name("arguments"))

        if node.type == "object_creation_expression":
            callee = self._get_node_text(node.child_by_field_name("type"), source)
            if callee:
                result.calls.append(self._call(node, source, callee, arg_count))
            return

        callee = self._get_node_text(node.child_by_field_name("name"), source)
        if not callee:
            return
        receiver_node = node.child_by_field_name("object")
        if receiver_node is not None:
            receiver = self._get_node_text(receiver_node, source)
            result.calls.append(self._call(node, source, callee, arg_count, True, receiver))
        else:
            result.calls.append(self._call(node, source, callee, arg_count))


__all__ = ["JavaExtractor"]
