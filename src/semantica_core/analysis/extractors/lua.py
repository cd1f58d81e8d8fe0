"""Lua semantic extractor.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import List, Optional

from tree_sitter import Node

from ..models import AnalysisResult, FunctionInfo, ImportInfo, ParameterInfo, SymbolInfo
from .base import BaseTreeExtractor
from .nodes import (
    count_arguments,
    find_child_by_type,
    find_nodes,
    has_child_token,
    name_text,
    start_line,
    strip_quotes,
)

# index expression type -> (receiver field, callee field)
INDEX_CALLEES = {
    "dot_index_expression": ("table", "field"),
    "method_index_expression": ("table", "method"),
}


class LuaExtractor(BaseTreeExtractor):
    """Extractor for Lua.

    "local function f" is reported with visibility "local". Names bound by
    local declarations are "local" symbols; plain assignments are
    "variable" symbols. require(...) calls are imports, not calls.
    """

    function_boundaries = ("function_declaration", "function_definition")

    @property
    def language_name(self) -> str:
        return "lua"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for node in find_nodes(root, ("function_declaration",)):
            function = self._extract_function(node, source)
            if function is not None:
                result.functions.append(function)

        for node in find_nodes(root, ("variable_declaration", "assignment_statement")):
            if node.type == "assignment_statement" and self._is_local_assignment(node):
                continue
            kind = "local" if node.type == "variable_declaration" else "variable"
            line = start_line(node)
            result.symbols.extend(
                SymbolInfo(name=name, kind=kind, line=line) for name in self._assigned_names(node, source)
            )

        for node in find_nodes(root, ("function_call",)):
            name_node = node.child_by_field_name("name")
            if name_node is None:
                continue
            if name_node.type == "identifier" and self._get_node_text(name_node, source) == "require":
                imported = self._extract_require(node, source)
                if imported is not None:
                    result.imports.append(imported)
                continue
            self._extract_call(node, name_node, source, result)

    @staticmethod
    def _is_local_assignment(node: Node) -> bool:
        return node.parent is not None and node.parent.type == "variable_declaration"

    # =========================================================================
    # Functions
    # =========================================================================

    def _extract_function(self, node: Node, source: bytes) -> Optional[FunctionInfo]:
        name = self._get_node_text(node.child_by_field_name("name"), source)
        if not name:
            return None
        visibility = "local" if has_child_token(node, source, "local") else None
        return self._function(node, name, self._extract_parameters(node, source), visibility=visibility)

    def _extract_parameters(self, node: Node, source: bytes) -> List[ParameterInfo]:
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return []
        names = (
            name_text(child, source)
            for child in params_node.children
            if child.type in ("identifier", "vararg_expression")
        )
        return [ParameterInfo(name=name) for name in names if name]

    def _assigned_names(self, node: Node, source: bytes) -> List[str]:
        variables = find_child_by_type(node, "variable_list")
        if variables is None:
            assignment = find_child_by_type(node, "assignment_statement")
            if assignment is not None:
                variables = find_child_by_type(assignment, "variable_list")
        if variables is None:
            return []
        names = (
            name_text(child.child_by_field_name("name") or child, source)
            for child in variables.children
            if child.type in ("identifier", "attribute_name")
        )
        return [name for name in names if name]

    # =========================================================================
    # Imports and calls
    # =========================================================================

    def _extract_require(self, node: Node, source: bytes) -> Optional[ImportInfo]:
        arguments = node.child_by_field_name("arguments")
        if arguments is None:
            return None
        # require "mod" passes the string directly
        string_node = arguments if arguments.type == "string" else find_child_by_type(arguments, "string")
        if string_node is None:
            return None
        content = string_node.child_by_field_name("content")
        module = (
            self._get_node_text(content, source)
            if content is not None
            else strip_quotes(self._get_node_text(string_node, source))
        )
        return ImportInfo(module=module, line=start_line(node))

    @staticmethod
    def _count_call_arguments(arguments: Optional[Node]) -> int:
        if arguments is None:
            return 0
        # f"x" and f{...} pass a single string or table
        if arguments.type != "arguments":
            return 1
        return count_arguments(arguments)

    def _extract_call(self, node: Node, name_node: Node, source: bytes, result: AnalysisResult) -> None:
        arg_count = self._count_call_arguments(node.child_by_field_name("arguments"))

        fields = INDEX_CALLEES.get(name_node.type)
        if fields is not None:
            receiver_field, callee_field = fields
            callee = self._get_node_text(name_node.child_by_field_name(callee_field), source)
            receiver = self._get_node_text(name_node.child_by_field_name(receiver_field), source)
            if callee:
                result.calls.append(self._call(node, source, callee, arg_count, True, receiver))
            return

        callee = self._get_node_text(name_node, source)
        if callee:
            result.calls.append(self._call(node, source, callee, arg_count))


__all__ = ["LuaExtractor"]
