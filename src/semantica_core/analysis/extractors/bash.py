"""Bash semantic extractor.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from tree_sitter import Node

from ..models import AnalysisResult, SymbolInfo
from .base import BaseTreeExtractor
from .nodes import find_nodes, start_line


class BashExtractor(BaseTreeExtractor):
    """Extractor for shell scripts.

    Functions are function definitions; every command invocation is a
    call whose callee is the command name. Assignments are "variable"
    symbols, and names declared through export are also "export" symbols.
    """

    function_boundaries = ("function_definition",)

    @property
    def language_name(self) -> str:
        return "bash"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for node in find_nodes(root, ("function_definition",)):
            name = self._get_node_text(node.child_by_field_name("name"), source)
            if name:
                result.functions.append(self._function(node, name))

        for node in find_nodes(root, ("variable_assignment",)):
            name = self._get_node_text(node.child_by_field_name("name"), source)
            if name:
                result.symbols.append(SymbolInfo(name=name, kind="variable", line=start_line(node)))

        for node in find_nodes(root, ("declaration_command",)):
            if not node.children or self._get_node_text(node.children[0], source) != "export":
                continue
            for child in node.children[1:]:
                if child.type == "variable_assignment":
                    name = self._get_node_text(child.child_by_field_name("name"), source)
                elif child.type == "variable_name":
                    # export PATH
                    name = self._get_node_text(child, source)
                else:
                    continue
                if name:
                    result.symbols.append(SymbolInfo(name=name, kind="export", line=start_line(node)))

        for node in find_nodes(root, ("command",)):
            self._extract_command(node, source, result)

    def _extract_command(self, node: Node, source: bytes, result: AnalysisResult) -> None:
        callee = self._get_node_text(node.child_by_field_name("name"), source).strip()
        if not callee:
            return
        arg_count = len(node.children_by_field_name("argument"))
        result.calls.append(self._call(node, source, callee, arg_count))


__all__ = ["BashExtractor"]
