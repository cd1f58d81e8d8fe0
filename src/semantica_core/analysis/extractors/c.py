"""C and C++ semantic extractor.

One class serves both grammars. The C++ flavour adds classes with base
classes, member functions with access-specifier visibility, qualified
function names (Foo::bar) and scoped calls.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import List, Optional, Tuple

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
    find_nodes,
    name_text,
    start_line,
)

logger = structlog.get_logger(__name__)

# Declarators wrapping the one that carries the name.
WRAPPING_DECLARATORS = frozenset(
    {
        "pointer_declarator",
        "reference_declarator",
        "array_declarator",
        "parenthesized_declarator",
        "init_declarator",
        "attributed_declarator",
    }
)

DECLARATOR_PREFIXES = {"pointer_declarator": "*", "reference_declarator": "&"}

PARAMETER_NODE_TYPES = frozenset({"parameter_declaration", "optional_parameter_declaration"})

TEMPLATED_MEMBER_TYPES = frozenset({"function_definition", "field_declaration", "declaration"})

BASE_CLAUSE_SKIP = frozenset({":", ",", "access_specifier", "virtual", "public", "private", "protected"})


class CExtractor(BaseTreeExtractor):
    """Extractor for C ("c") and C++ ("cpp")."""

    def __init__(self, language: str = "c") -> None:
        super().__init__()
        self._language = language
        self._log = logger.bind(extractor="CExtractor", language=language)

    @property
    def language_name(self) -> str:
        return self._language

    @property
    def is_cpp(self) -> bool:
        return self._language == "cpp"

    @property
    def function_boundaries(self) -> Tuple[str, ...]:  # type: ignore[override]
        if self.is_cpp:
            return ("function_definition", "lambda_expression")
        return ("function_definition",)

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for node in find_nodes(root, ("function_definition",)):
            if self.is_cpp and self._in_type_body(node):
                continue
            function = self._extract_function(node, source)
            if function is not None:
                result.functions.append(function)

        type_types = ("class_specifier", "struct_specifier") if self.is_cpp else ("struct_specifier",)
        for node in find_nodes(root, type_types):
            cls = self._extract_type(node, source)
            if cls is not None:
                result.classes.append(cls)

        for node in find_nodes(root, ("preproc_include",)):
            path = self._get_node_text(node.child_by_field_name("path"), source)
            if len(path) >= 2:
                result.imports.append(ImportInfo(module=path[1:-1], line=start_line(node)))

        for node in find_nodes(root, ("call_expression",)):
            self._extract_call(node, source, result)

    @staticmethod
    def _in_type_body(node: Node) -> bool:
        parent = node.parent
        if parent is not None and parent.type == "template_declaration":
            parent = parent.parent
        return parent is not None and parent.type == "field_declaration_list"

    # =========================================================================
    # Declarators
    # =========================================================================

    @staticmethod
    def _function_declarator(node: Node) -> Optional[Node]:
        """Descend the declarator chain to the function_declarator, if any."""
        current = node.child_by_field_name("declarator")
        while current is not None:
            if current.type == "function_declarator":
                return current
            if current.type not in WRAPPING_DECLARATORS:
                return None
            current = current.child_by_field_name("declarator")
        return None

    @staticmethod
    def _unwrap_declarator(node: Optional[Node]) -> Tuple[Optional[Node], str]:
        """Innermost named declarator plus the pointer/reference prefix."""
        prefix = ""
        current = node
        while current is not None and current.type in WRAPPING_DECLARATORS:
            prefix += DECLARATOR_PREFIXES.get(current.type, "")
            current = current.child_by_field_name("declarator")
        return current, prefix

    def boundary_name(self, node: Node, source: bytes) -> str:
        declarator = self._function_declarator(node)
        if declarator is None:
            return ""
        return self._get_node_text(declarator.child_by_field_name("declarator"), source)

    # =========================================================================
    # Functions
    # =========================================================================

    def _extract_function(
        self,
        node: Node,
        source: bytes,
        visibility: Optional[str] = None,
    ) -> Optional[FunctionInfo]:
        declarator = self._function_declarator(node)
        if declarator is None:
            return None
        name_node = declarator.child_by_field_name("declarator")
        name = name_text(name_node, source)
        if not name:
            return None

        storage = find_child_by_type(node, "storage_class_specifier")
        return self._function(
            node,
            name,
            self._extract_parameters(declarator, source),
            return_type=self._get_node_text(node.child_by_field_name("type"), source),
            visibility=visibility,
            is_static=storage is not None and self._get_node_text(storage, source) == "static",
        )

    def _extract_parameters(self, declarator: Node, source: bytes) -> List[ParameterInfo]:
        params_node = declarator.child_by_field_name("parameters")
        if params_node is None:
            return []

        parameters = []
        for child in params_node.children:
            if child.type not in PARAMETER_NODE_TYPES:
                continue
            name_node, prefix = self._unwrap_declarator(child.child_by_field_name("declarator"))
            # void f(void) and unnamed prototypes carry no parameter name
            name = name_text(name_node, source)
            if not name:
                continue
            type_text = self._get_node_text(child.child_by_field_name("type"), source)
            parameters.append(
                ParameterInfo(
                    name=name,
                    type_annotation=f"{type_text}{prefix}",
                )
            )
        return parameters

    # =========================================================================
    # Types
    # =========================================================================

    def _extract_type(self, node: Node, source: bytes) -> Optional[ClassInfo]:
        name_node = node.child_by_field_name("name")
        name = name_text(name_node, source)
        if not name:
            return None

        bases: List[str] = []
        base_clause = find_child_by_type(node, "base_class_clause")
        if base_clause is not None:
            bases = [
                self._get_node_text(child, source)
                for child in base_clause.children
                if child.type not in BASE_CLAUSE_SKIP
            ]

        methods, properties = self._extract_members(node, source)
        return ClassInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            extends=bases[0] if bases else None,
            implements=bases[1:],
            methods=methods,
            properties=properties,
        )

    def _extract_members(
        self, node: Node, source: bytes
    ) -> Tuple[List[FunctionInfo], List[PropertyInfo]]:
        body = node.child_by_field_name("body")
        if body is None:
            return [], []

        methods: List[FunctionInfo] = []
        properties: List[PropertyInfo] = []
        visibility: Optional[str] = None
        if self.is_cpp:
            visibility = "private" if node.type == "class_specifier" else "public"

        for member in body.children:
            if member.type == "access_specifier":
                visibility = self._get_node_text(member, source).rstrip(":").strip()
                continue
            if member.type == "template_declaration":
                member = next(
                    (c for c in member.children if c.type in TEMPLATED_MEMBER_TYPES),
                    member,
                )

            if member.type == "function_definition":
                if self.is_cpp:
                    method = self._extract_function(member, source, visibility)
                    if method is not None:
                        methods.append(method)
                continue

            if member.type not in ("field_declaration", "declaration"):
                continue
            if self._function_declarator(member) is not None:
                # method prototype: void draw() const;
                if self.is_cpp:
                    method = self._extract_function(member, source, visibility)
                    if method is not None:
                        methods.append(method)
                continue
            properties.extend(self._extract_fields(member, source, visibility))

        return methods, properties

    def _extract_fields(
        self,
        node: Node,
        source: bytes,
        visibility: Optional[str],
    ) -> List[PropertyInfo]:
        type_text = self._get_node_text(node.child_by_field_name("type"), source)
        properties = []
        for declarator in node.children_by_field_name("declarator"):
            name_node, prefix = self._unwrap_declarator(declarator)
            if name_node is None or name_node.type not in ("field_identifier", "identifier"):
                continue
            name = name_text(name_node, source)
            if not name:
                continue
            properties.append(
                PropertyInfo(
                    name=name,
                    type_annotation=f"{type_text}{prefix}",
                    visibility=visibility,
                )
            )
        return properties

    # =========================================================================
    # Calls
    # =========================================================================

    def _extract_call(self, node: Node, source: bytes, result: AnalysisResult) -> None:
        function_node = node.child_by_field_name("function")
        if function_node is None:
            return
        arg_count = count_arguments(node.child_by_field_name("arguments"))

        if function_node.type == "template_function":
            function_node = function_node.child_by_field_name("name") or function_node

        if function_node.type == "field_expression":
            callee = self._get_node_text(function_node.child_by_field_name("field"), source)
            receiver = self._get_node_text(function_node.child_by_field_name("argument"), source)
        elif function_node.type == "qualified_identifier":
            callee = self._get_node_text(function_node.child_by_field_name("name"), source)
            receiver = self._get_node_text(function_node.child_by_field_name("scope"), source)
        else:
            callee = self._get_node_text(function_node, source)
            if callee:
                result.calls.append(self._call(node, source, callee, arg_count))
            return

        if callee:
            result.calls.append(self._call(node, source, callee, arg_count, True, receiver))


__all__ = ["CExtractor"]
