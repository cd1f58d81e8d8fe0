"""Ruby semantic extractor.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import List, Optional

from tree_sitter import Node

from ..models import AnalysisResult, ClassInfo, FunctionInfo, ImportInfo, ParameterInfo
from .base import BaseTreeExtractor
from .nodes import (
    count_arguments,
    end_line,
    find_ancestor,
    find_child_by_type,
    find_nodes,
    name_text,
    start_line,
    strip_quotes,
)

METHOD_NODE_TYPES = ("method", "singleton_method")

SCOPE_NODE_TYPES = frozenset({"class", "module", "singleton_class"})

IMPORT_METHODS = frozenset({"require", "require_relative", "load"})

VISIBILITY_KEYWORDS = frozenset({"public", "private", "protected"})

PARAMETER_NODE_TYPES = frozenset(
    {
        "optional_parameter",
        "keyword_parameter",
        "splat_parameter",
        "hash_splat_parameter",
        "block_parameter",
    }
)


class RubyExtractor(BaseTreeExtractor):
    """Extractor for Ruby.

    Methods defined in a class or module body belong to that type. A bare
    private/protected/public line changes the visibility of the methods
    that follow it.
    """

    function_boundaries = METHOD_NODE_TYPES

    @property
    def language_name(self) -> str:
        return "ruby"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for node in find_nodes(root, METHOD_NODE_TYPES):
            if find_ancestor(node, lambda n: n.type in SCOPE_NODE_TYPES) is not None:
                continue
            function = self._extract_method(node, source, "public")
            if function is not None:
                result.functions.append(function)

        for node in find_nodes(root, ("class", "module")):
            cls = self._extract_class(node, source)
            if cls is not None:
                result.classes.append(cls)

        for node in find_nodes(root, ("call",)):
            method = self._get_node_text(node.child_by_field_name("method"), source)
            receiver = node.child_by_field_name("receiver")
            if receiver is None and method in IMPORT_METHODS:
                imported = self._extract_import(node, source)
                if imported is not None:
                    result.imports.append(imported)
                continue
            if not method:
                continue
            arg_count = count_arguments(node.child_by_field_name("arguments"))
            if receiver is not None:
                receiver_text = self._get_node_text(receiver, source)
                result.calls.append(self._call(node, source, method, arg_count, True, receiver_text))
            else:
                result.calls.append(self._call(node, source, method, arg_count))

    # =========================================================================
    # Methods
    # =========================================================================

    def _extract_method(
        self,
        node: Node,
        source: bytes,
        visibility: Optional[str],
    ) -> Optional[FunctionInfo]:
        name_node = node.child_by_field_name("name")
        name = name_text(name_node, source)
        if not name:
            return None

        return self._function(
            node,
            name,
            self._extract_parameters(node, source),
            visibility=visibility,
            # def self.build
            is_static=node.type == "singleton_method",
        )

    def _extract_parameters(self, node: Node, source: bytes) -> List[ParameterInfo]:
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return []

        parameters = []
        for child in params_node.children:
            if child.type == "identifier":
                name_node: Optional[Node] = child
            elif child.type in PARAMETER_NODE_TYPES:
                name_node = child.child_by_field_name("name")
            else:
                continue
            name = name_text(name_node, source)
            if name:
                parameters.append(ParameterInfo(name=name))
        return parameters

    # =========================================================================
    # Classes and modules
    # =========================================================================

    def _extract_class(self, node: Node, source: bytes) -> Optional[ClassInfo]:
        name_node = node.child_by_field_name("name")
        name = name_text(name_node, source)
        if not name:
            return None

        extends: Optional[str] = None
        superclass = node.child_by_field_name("superclass")
        if superclass is not None:
            base = next((c for c in superclass.children if c.type != "<"), None)
            extends = self._get_node_text(base, source) or None

        methods: List[FunctionInfo] = []
        visibility = "public"
        body = node.child_by_field_name("body") or find_child_by_type(node, "body_statement")
        if body is not None:
            for member in body.children:
                if member.type == "identifier":
                    word = self._get_node_text(member, source)
                    if word in VISIBILITY_KEYWORDS:
                        visibility = word
                elif member.type in METHOD_NODE_TYPES:
                    method = self._extract_method(member, source, visibility)
                    if method is not None:
                        methods.append(method)

        return ClassInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            extends=extends,
            methods=methods,
        )

    # =========================================================================
    # Imports
    # =========================================================================

    def _extract_import(self, node: Node, source: bytes) -> Optional[ImportInfo]:
        arguments = node.child_by_field_name("arguments")
        if arguments is None:
            return None
        path = find_child_by_type(arguments, "string")
        if path is None:
            return None
        content = find_child_by_type(path, "string_content")
        module = self._get_node_text(content, source) if content is not None else strip_quotes(
            self._get_node_text(path, source)
        )
        return ImportInfo(module=module, line=start_line(node))


__all__ = ["RubyExtractor"]
