"""Rust semantic extractor.

Extracts:
- function items (free functions and impl/trait methods) with async,
  visibility (pub, pub(crate), ...), typed parameters and return types
- struct items (fields as properties), enum items and trait items
- impl blocks: their methods are attached to the struct of the same name
- use declarations
- call expressions and macro invocations ("println!" is reported as
  "println")

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
    has_child_token,
    name_text,
    start_line,
)

logger = structlog.get_logger(__name__)

TYPE_ITEM_TYPES = ("struct_item", "enum_item", "trait_item")


class RustExtractor(BaseTreeExtractor):
    """Extractor for Rust source code.

    Example:
        >>> src = b"struct P { x: i32 }\\nimpl P { pub fn new() -> Self { P { x: 0 } } }"
        >>> result = RustExtractor().analyze(src)
        >>> result.classes[0].methods[0].name
        'new'
    """

    function_boundaries = ("function_item",)

    def __init__(self) -> None:
        super().__init__()
        self._log = logger.bind(extractor="RustExtractor")

    @property
    def language_name(self) -> str:
        return "rust"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for node in find_nodes(root, ("function_item",)):
            function = self._extract_function(node, source)
            if function is not None:
                result.functions.append(function)

        impl_methods = self._collect_impl_methods(root, source)
        for node in find_nodes(root, TYPE_ITEM_TYPES):
            cls = self._extract_type_item(node, source, impl_methods)
            if cls is not None:
                result.classes.append(cls)

        for node in find_nodes(root, ("use_declaration",)):
            argument = node.child_by_field_name("argument")
            if argument is not None:
                result.imports.append(
                    ImportInfo(module=self._get_node_text(argument, source), line=start_line(node))
                )

        for node in find_nodes(root, ("call_expression", "macro_invocation")):
            if node.type == "macro_invocation":
                self._extract_macro(node, source, result)
            else:
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
            parameters=self._extract_parameters(node, source),
            return_type=self._get_node_text(node.child_by_field_name("return_type"), source),
            visibility=self._extract_visibility(node, source),
            is_async=self._is_async(node, source),
        )

    def _extract_parameters(self, node: Node, source: bytes) -> List[ParameterInfo]:
        """Typed parameters; the self receiver is not reported."""
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return []

        parameters = []
        for child in find_children_by_type(params_node, "parameter"):
            name = name_text(child.child_by_field_name("pattern"), source)
            if not name:
                continue
            parameters.append(
                ParameterInfo(
                    name=name,
                    type_annotation=self._get_node_text(child.child_by_field_name("type"), source),
                )
            )
        return parameters

    def _extract_visibility(self, node: Node, source: bytes) -> Optional[str]:
        modifier = find_child_by_type(node, "visibility_modifier")
        if modifier is None:
            return None
        return self._get_node_text(modifier, source)

    def _is_async(self, node: Node, source: bytes) -> bool:
        modifiers = find_child_by_type(node, "function_modifiers")
        if modifiers is not None and has_child_token(modifiers, source, "async"):
            return True
        return has_child_token(node, source, "async")

    # =========================================================================
    # Types
    # =========================================================================

    def _collect_impl_methods(self, root: Node, source: bytes) -> Dict[str, List[FunctionInfo]]:
        """Methods of every impl block, keyed by the bare implementing type."""
        methods: Dict[str, List[FunctionInfo]] = {}
        for impl in find_nodes(root, ("impl_item",)):
            type_node = impl.child_by_field_name("type")
            body = impl.child_by_field_name("body")
            if type_node is None or body is None:
                continue
            type_name = self._get_node_text(type_node, source).split("<", 1)[0].strip()
            for item in find_children_by_type(body, "function_item"):
                method = self._extract_function(item, source)
                if method is not None:
                    methods.setdefault(type_name, []).append(method)
        return methods

    def _extract_type_item(
        self,
        node: Node,
        source: bytes,
        impl_methods: Dict[str, List[FunctionInfo]],
    ) -> Optional[ClassInfo]:
        name = name_text(node.child_by_field_name("name"), source)
        if not name:
            return None

        methods: List[FunctionInfo] = []
        properties: List[PropertyInfo] = []
        implements: List[str] = []

        if node.type == "struct_item":
            methods = list(impl_methods.get(name, []))
            properties = self._extract_struct_fields(node, source)
        elif node.type == "trait_item":
            body = node.child_by_field_name("body")
            if body is not None:
                for item in body.children:
                    if item.type in ("function_item", "function_signature_item"):
                        method = self._extract_function(item, source)
                        if method is not None:
                            methods.append(method)
            bounds = node.child_by_field_name("bounds")
            if bounds is not None:
                implements = [
                    self._get_node_text(child, source)
                    for child in bounds.children
                    if child.type not in (":", "+")
                ]
        else:
            methods = list(impl_methods.get(name, []))

        return ClassInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            implements=implements,
            methods=methods,
            properties=properties,
        )

    def _extract_struct_fields(self, node: Node, source: bytes) -> List[PropertyInfo]:
        body = node.child_by_field_name("body")
        if body is None or body.type != "field_declaration_list":
            return []

        properties = []
        for field in find_children_by_type(body, "field_declaration"):
            name = name_text(field.child_by_field_name("name"), source)
            if not name:
                continue
            properties.append(
                PropertyInfo(
                    name=name,
                    type_annotation=self._get_node_text(field.child_by_field_name("type"), source),
                    visibility=self._extract_visibility(field, source),
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

        if function_node.type == "field_expression":
            callee = self._get_node_text(function_node.child_by_field_name("field"), source)
            receiver = self._get_node_text(function_node.child_by_field_name("value"), source)
            if callee:
                result.calls.append(self._call(node, source, callee, arg_count, True, receiver))
            return

        if function_node.type == "scoped_identifier":
            # Type::new(), module::func()
            callee = self._get_node_text(function_node.child_by_field_name("name"), source)
            receiver = self._get_node_text(function_node.child_by_field_name("path"), source)
            if callee:
                result.calls.append(self._call(node, source, callee, arg_count, True, receiver))
            return

        if function_node.type == "generic_function":
            function_node = function_node.child_by_field_name("function") or function_node

        callee = self._get_node_text(function_node, source)
        if callee:
            result.calls.append(self._call(node, source, callee, arg_count))

    def _extract_macro(self, node: Node, source: bytes, result: AnalysisResult) -> None:
        macro = node.child_by_field_name("macro")
        callee = self._get_node_text(macro, source).rstrip("!")
        if not callee:
            return
        tokens = find_child_by_type(node, "token_tree")
        result.calls.append(self._call(node, source, callee, self._count_macro_arguments(tokens)))

    @staticmethod
    def _count_macro_arguments(tokens: Optional[Node]) -> int:
        """Top-level comma-separated groups inside the macro's token tree."""
        if tokens is None:
            return 0
        inner = [child for child in tokens.children if child.type not in ("(", ")", "[", "]", "{", "}")]
        if not inner:
            return 0
        return sum(1 for child in inner if child.type == ",") + 1


__all__ = ["RustExtractor"]
