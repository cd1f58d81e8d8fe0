"""Scala semantic extractor.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import List, Optional, Tuple

from tree_sitter import Node

from ..models import AnalysisResult, ClassInfo, FunctionInfo, ImportInfo, ParameterInfo
from .base import BaseTreeExtractor
from .nodes import end_line, find_child_by_type, find_nodes, name_text, start_line

FUNCTION_NODE_TYPES = ("function_definition", "function_declaration")

TYPE_NODE_TYPES = ("class_definition", "object_definition", "trait_definition")

EXTENDS_CLAUSE_SKIP = frozenset({"extends", "with", "arguments", ","})


class ScalaExtractor(BaseTreeExtractor):
    """Extractor for Scala.

    Every def is reported as a function, members included; template
    members are also listed as methods of their class, object or trait.
    """

    function_boundaries = ("function_definition",)

    @property
    def language_name(self) -> str:
        return "scala"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for node in find_nodes(root, FUNCTION_NODE_TYPES):
            function = self._extract_function(node, source)
            if function is not None:
                result.functions.append(function)

        for node in find_nodes(root, TYPE_NODE_TYPES):
            cls = self._extract_type(node, source)
            if cls is not None:
                result.classes.append(cls)

        for node in find_nodes(root, ("import_declaration",)):
            module = self._get_node_text(node, source).strip()
            if module.startswith("import"):
                module = module[len("import"):].strip()
            if module:
                result.imports.append(ImportInfo(module=module, line=start_line(node)))

        for node in find_nodes(root, ("call_expression",)):
            self._extract_call(node, source, result)

    def _extract_function(self, node: Node, source: bytes) -> Optional[FunctionInfo]:
        name_node = node.child_by_field_name("name")
        name = name_text(name_node, source)
        if not name:
            return None
        return self._function(
            node,
            name,
            self._extract_parameters(node, source),
            return_type=self._get_node_text(node.child_by_field_name("return_type"), source),
        )

    def _extract_parameters(self, node: Node, source: bytes) -> List[ParameterInfo]:
        parameters = []
        # Curried definitions have several parameter lists.
        for params_node in node.children_by_field_name("parameters"):
            for child in params_node.children:
                if child.type != "parameter":
                    continue
                name_node = child.child_by_field_name("name")
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

    def _extract_type(self, node: Node, source: bytes) -> Optional[ClassInfo]:
        name_node = node.child_by_field_name("name")
        name = name_text(name_node, source)
        if not name:
            return None

        extends, implements = self._heritage(node, source)

        methods: List[FunctionInfo] = []
        body = node.child_by_field_name("body") or find_child_by_type(node, "template_body")
        if body is not None:
            for member in body.children:
                if member.type in FUNCTION_NODE_TYPES:
                    method = self._extract_function(member, source)
                    if method is not None:
                        methods.append(method)

        return ClassInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            extends=extends,
            implements=implements,
            methods=methods,
        )

    def _heritage(self, node: Node, source: bytes) -> Tuple[Optional[str], List[str]]:
        """extends A with B with C -> ("A", ["B", "C"])"""
        clause = node.child_by_field_name("extend") or find_child_by_type(node, "extends_clause")
        if clause is None:
            return None, []
        names = [
            self._get_node_text(child, source)
            for child in clause.children
            if child.type not in EXTENDS_CLAUSE_SKIP
        ]
        if not names:
            return None, []
        return names[0], names[1:]

    def _extract_call(self, node: Node, source: bytes, result: AnalysisResult) -> None:
        function_node = node.child_by_field_name("function")
        if function_node is None:
            return
        arguments = node.child_by_field_name("arguments")
        arg_count = 0
        if arguments is not None:
            arg_count = sum(1 for child in arguments.children if child.type not in ("(", ")", ","))

        if function_node.type == "field_expression":
            callee = self._get_node_text(function_node.child_by_field_name("field"), source)
            receiver = self._get_node_text(function_node.child_by_field_name("value"), source)
            if callee:
                result.calls.append(self._call(node, source, callee, arg_count, True, receiver))
            return

        callee = self._get_node_text(function_node, source)
        if callee:
            result.calls.append(self._call(node, source, callee, arg_count))


__all__ = ["ScalaExtractor"]
