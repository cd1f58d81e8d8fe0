"""OCaml semantic extractor.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import List, Optional

from tree_sitter import Node

from ..models import AnalysisResult, ClassInfo, FunctionInfo, ImportInfo, ParameterInfo, SymbolInfo
from .base import BaseTreeExtractor
from .nodes import (
    end_line,
    find_child_by_type,
    find_children_by_type,
    find_nodes,
    name_text,
    start_line,
)

FUNCTION_BODY_TYPES = frozenset({"fun_expression", "function_expression"})


class OCamlExtractor(BaseTreeExtractor):
    """Extractor for OCaml implementation files.

    A let binding is a function when it takes parameters or is bound
    directly to a fun/function expression. Module bindings are reported
    as classes, type bindings as "type" symbols.
    """

    @property
    def language_name(self) -> str:
        return "ocaml"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for node in find_nodes(root, ("let_binding",)):
            function = self._extract_function(node, source)
            if function is not None:
                result.functions.append(function)

        for node in find_nodes(root, ("module_binding",)):
            name = name_text(
                node.child_by_field_name("name") or find_child_by_type(node, "module_name"), source
            )
            if name:
                result.classes.append(
                    ClassInfo(
                        name=name,
                        line_start=start_line(node),
                        line_end=end_line(node),
                    )
                )

        for node in find_nodes(root, ("open_module",)):
            path = node.child_by_field_name("module") or find_child_by_type(node, "module_path")
            module = name_text(path, source)
            if module:
                result.imports.append(ImportInfo(module=module, line=start_line(node)))

        for node in find_nodes(root, ("type_binding",)):
            name = name_text(
                node.child_by_field_name("name") or find_child_by_type(node, "type_constructor"), source
            )
            if name:
                result.symbols.append(
                    SymbolInfo(
                        name=name,
                        kind="type",
                        line=start_line(node),
                    )
                )

    def _extract_function(self, node: Node, source: bytes) -> Optional[FunctionInfo]:
        pattern = node.child_by_field_name("pattern")
        if pattern is None or pattern.type != "value_name":
            return None
        name = name_text(pattern, source)
        if not name:
            return None

        parameters = self._extract_parameters(node, source)
        body = node.child_by_field_name("body")
        if not parameters and (body is None or body.type not in FUNCTION_BODY_TYPES):
            return None

        return self._function(node, name, parameters)

    def _extract_parameters(self, node: Node, source: bytes) -> List[ParameterInfo]:
        parameters = []
        for parameter in find_children_by_type(node, "parameter"):
            name_node = parameter.child_by_field_name("pattern") or find_child_by_type(
                parameter, "label_name"
            )
            text = self._get_node_text(name_node if name_node is not None else parameter, source)
            # ~label and ?optional parameters keep their bare name
            name = text.lstrip("~?").strip()
            if name:
                parameters.append(ParameterInfo(name=name))
        return parameters


__all__ = ["OCamlExtractor"]
