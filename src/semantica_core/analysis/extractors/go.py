"""Go semantic extractor.

Extracts:
- Functions and methods (with receiver-bound methods also attached to
  their struct), parameters with types, result types and doc comments
- Struct types (fields as properties) and interface types (method specs
  as methods)
- Import specs
- Call expressions, selector calls reported as method calls

Visibility follows Go's export rule: an uppercase first letter is public.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Dict, List, Optional

import structlog
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
    strip_quotes,
)

logger = structlog.get_logger(__name__)

INTERFACE_METHOD_TYPES = ("method_elem", "method_spec")


class GoExtractor(BaseTreeExtractor):
    """Extractor for Go source code.

    Example:
        >>> result = GoExtractor().analyze(b"package main\\nfunc Foo(a int) {}\\n")
        >>> result.functions[0].parameters[0].name
        'a'
    """

    function_boundaries = ("function_declaration", "method_declaration")

    @property
    def language_name(self) -> str:
        return "go"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        receiver_methods: Dict[str, List[FunctionInfo]] = {}

        for node in find_nodes(root, ("function_declaration", "method_declaration")):
            function = self._extract_function(node, source)
            if function is None:
                continue
            result.functions.append(function)
            if node.type == "method_declaration":
                receiver = self._extract_receiver_type(node, source)
                if receiver:
                    receiver_methods.setdefault(receiver, []).append(function)

        for node in find_nodes(root, ("type_spec",)):
            cls = self._extract_type_spec(node, source, receiver_methods)
            if cls is not None:
                result.classes.append(cls)

        for node in find_nodes(root, ("import_spec",)):
            path = node.child_by_field_name("path")
            if path is None:
                continue
            result.imports.append(
                ImportInfo(module=strip_quotes(self._get_node_text(path, source)), line=start_line(node))
            )

        for node in find_nodes(root, ("call_expression",)):
            self._extract_call(node, source, result)

    # =========================================================================
    # Functions
    # =========================================================================

    def _extract_function(self, node: Node, source: bytes) -> Optional[FunctionInfo]:
        name = name_text(node.child_by_field_name("name"), source)
        if not name:
            return None

        return FunctionInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            parameters=self._extract_parameters(node.child_by_field_name("parameters"), source),
            return_type=self._get_node_text(node.child_by_field_name("result"), source),
            visibility=self._go_visibility(name),
            docstring=self._extract_go_doc(node, source),
        )

    def _extract_parameters(self, params_node: Optional[Node], source: bytes) -> List[ParameterInfo]:
        """
        One entry per declared name.

        "a, b int" yields two parameters typed int; an unnamed parameter
        ("func(int)") yields nothing.
        """
        if params_node is None:
            return []

        parameters: List[ParameterInfo] = []
        for child in params_node.children:
            if child.type not in ("parameter_declaration", "variadic_parameter_declaration"):
                continue
            type_text = self._get_node_text(child.child_by_field_name("type"), source)
            if child.type == "variadic_parameter_declaration" and type_text:
                type_text = "..." + type_text
            for name_node in find_children_by_type(child, "identifier"):
                name = name_text(name_node, source)
                if name:
                    parameters.append(ParameterInfo(name=name, type_annotation=type_text))
        return parameters

    def _extract_receiver_type(self, node: Node, source: bytes) -> str:
        """Bare receiver type name: "(s *Server)" gives "Server"."""
        receiver = node.child_by_field_name("receiver")
        if receiver is None:
            return ""
        declaration = find_child_by_type(receiver, "parameter_declaration")
        if declaration is None:
            return ""
        type_text = self._get_node_text(declaration.child_by_field_name("type"), source)
        type_text = type_text.lstrip("*")
        # Generic receivers: "List[T]"
        return type_text.split("[", 1)[0].strip()

    def _extract_go_doc(self, node: Node, source: bytes) -> Optional[str]:
        """Adjacent // comments directly above the declaration."""
        lines: List[str] = []
        expected_row = node.start_point[0] - 1
        prev = node.prev_sibling
        while prev is not None and prev.type == "comment" and prev.end_point[0] == expected_row:
            text = self._get_node_text(prev, source)
            if not text.startswith("//"):
                break
            lines.insert(0, text[2:].strip())
            expected_row = prev.start_point[0] - 1
            prev = prev.prev_sibling
        return "\n".join(lines).strip() or None

    @staticmethod
    def _go_visibility(name: str) -> Optional[str]:
        if not name:
            return None
        return "public" if name[0].isupper() else "private"

    # =========================================================================
    # Types
    # =========================================================================

    def _extract_type_spec(
        self,
        node: Node,
        source: bytes,
        receiver_methods: Dict[str, List[FunctionInfo]],
    ) -> Optional[ClassInfo]:
        name = name_text(node.child_by_field_name("name"), source)
        type_node = node.child_by_field_name("type")
        if not name or type_node is None:
            return None

        if type_node.type == "struct_type":
            return ClassInfo(
                name=name,
                line_start=start_line(node),
                line_end=end_line(node),
                methods=receiver_methods.get(name, []),
                properties=self._extract_struct_fields(type_node, source),
            )

        if type_node.type == "interface_type":
            methods = []
            for spec in type_node.children:
                if spec.type not in INTERFACE_METHOD_TYPES:
                    continue
                method_name = name_text(spec.child_by_field_name("name"), source)
                if not method_name:
                    continue
                methods.append(
                    FunctionInfo(
                        name=method_name,
                        line_start=start_line(spec),
                        line_end=end_line(spec),
                        parameters=self._extract_parameters(
                            spec.child_by_field_name("parameters"), source
                        ),
                        return_type=self._get_node_text(spec.child_by_field_name("result"), source),
                        visibility=self._go_visibility(method_name),
                    )
                )
            return ClassInfo(
                name=name,
                line_start=start_line(node),
                line_end=end_line(node),
                methods=methods,
            )

        return None

    def _extract_struct_fields(self, struct_node: Node, source: bytes) -> List[PropertyInfo]:
        field_list = find_child_by_type(struct_node, "field_declaration_list")
        if field_list is None:
            return []

        properties: List[PropertyInfo] = []
        for declaration in find_children_by_type(field_list, "field_declaration"):
            type_text = self._get_node_text(declaration.child_by_field_name("type"), source)
            names = find_children_by_type(declaration, "field_identifier")
            if not names:
                # Embedded field: the type name doubles as the field name.
                type_text = self._embedded_type(declaration, source)
                embedded = type_text.lstrip("*").split("[", 1)[0].split(".")[-1]
                if embedded:
                    properties.append(PropertyInfo(name=embedded, type_annotation=type_text))
                continue
            for name_node in names:
                field_name = name_text(name_node, source)
                if not field_name:
                    continue
                properties.append(
                    PropertyInfo(
                        name=field_name,
                        type_annotation=type_text,
                        visibility=self._go_visibility(field_name),
                    )
                )
        return properties

    @staticmethod
    def _embedded_type(declaration: Node, source: bytes) -> str:
        """Declaration text before the tag; a pointer "*" sits outside the type field."""
        tag = declaration.child_by_field_name("tag")
        end = tag.start_byte if tag is not None else declaration.end_byte
        text = source[declaration.start_byte : end].decode("utf-8", errors="replace")
        return "".join(text.split())

    # =========================================================================
    # Calls
    # =========================================================================

    def _extract_call(self, node: Node, source: bytes, result: AnalysisResult) -> None:
        function_node = node.child_by_field_name("function")
        if function_node is None:
            return

        arg_count = count_arguments(node.child_by_field_name("arguments"))
        if function_node.type == "selector_expression":
            callee = self._get_node_text(function_node.child_by_field_name("field"), source)
            receiver = self._get_node_text(function_node.child_by_field_name("operand"), source)
            if callee:
                result.calls.append(self._call(node, source, callee, arg_count, True, receiver))
            return

        callee = self._get_node_text(function_node, source)
        if callee:
            result.calls.append(self._call(node, source, callee, arg_count))


__all__ = ["GoExtractor"]
