"""Elixir semantic extractor.

Elixir has no declaration syntax of its own: def, defmodule and import
are ordinary macro calls in the syntax tree, told apart by their target
identifier.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import List, Optional

from tree_sitter import Node

from ..models import AnalysisResult, ClassInfo, FunctionInfo, ImportInfo, ParameterInfo
from .base import BaseTreeExtractor
from .nodes import end_line, find_child_by_type, find_nodes, name_text, start_line

DEF_VISIBILITY = {"def": "public", "defp": "private"}

IMPORT_TARGETS = frozenset({"import", "alias", "use", "require"})


class ElixirExtractor(BaseTreeExtractor):
    """Extractor for Elixir: def/defp functions, defmodule modules, imports."""

    @property
    def language_name(self) -> str:
        return "elixir"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for node in find_nodes(root, ("call",)):
            target = self._target(node, source)
            if target in DEF_VISIBILITY:
                function = self._extract_def(node, target, source)
                if function is not None:
                    result.functions.append(function)
            elif target == "defmodule":
                module = self._extract_module(node, source)
                if module is not None:
                    result.classes.append(module)
            elif target in IMPORT_TARGETS:
                first = self._first_argument(node)
                if first is not None:
                    result.imports.append(
                        ImportInfo(module=self._get_node_text(first, source), line=start_line(node))
                    )

    def _target(self, node: Node, source: bytes) -> str:
        target = node.child_by_field_name("target")
        if target is None or target.type != "identifier":
            return ""
        return self._get_node_text(target, source)

    @staticmethod
    def _first_argument(node: Node) -> Optional[Node]:
        arguments = find_child_by_type(node, "arguments")
        if arguments is None:
            return None
        return next((child for child in arguments.children if child.type not in ("(", ")", ",")), None)

    # =========================================================================
    # Definitions
    # =========================================================================

    def _extract_def(self, node: Node, target: str, source: bytes) -> Optional[FunctionInfo]:
        head = self._first_argument(node)
        # def fetch(id) when is_integer(id) do ... end
        if head is not None and head.type == "binary_operator":
            head = head.child_by_field_name("left")
        if head is None:
            return None

        if head.type == "call":
            name = self._get_node_text(head.child_by_field_name("target"), source)
            parameters = self._extract_parameters(head, source)
        elif head.type == "identifier":
            name = self._get_node_text(head, source)
            parameters = []
        else:
            return None
        if not name:
            return None

        return self._function(node, name, parameters, visibility=DEF_VISIBILITY[target])

    def _extract_parameters(self, head: Node, source: bytes) -> List[ParameterInfo]:
        arguments = find_child_by_type(head, "arguments")
        if arguments is None:
            return []
        names = (
            name_text(child, source) for child in arguments.children if child.type not in ("(", ")", ",")
        )
        return [ParameterInfo(name=name) for name in names if name]

    def _extract_module(self, node: Node, source: bytes) -> Optional[ClassInfo]:
        name_node = self._first_argument(node)
        name = name_text(name_node, source)
        if not name:
            return None

        methods: List[FunctionInfo] = []
        do_block = find_child_by_type(node, "do_block")
        if do_block is not None:
            for call in find_nodes(do_block, ("call",)):
                target = self._target(call, source)
                if target in DEF_VISIBILITY:
                    method = self._extract_def(call, target, source)
                    if method is not None:
                        methods.append(method)

        return ClassInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            methods=methods,
        )


__all__ = ["ElixirExtractor"]
