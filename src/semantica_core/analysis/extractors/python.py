"""Python semantic extractor.

Extracts free functions, classes with their first base class and their
methods (methods are not repeated as free functions), import statements
and call sites from tree-sitter-python trees.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import List, Optional

import structlog
from tree_sitter import Node

from ..models import AnalysisResult, ClassInfo, FunctionInfo, ImportInfo, ParameterInfo
from .base import BaseTreeExtractor
from .nodes import count_arguments, end_line, find_nodes, has_child_token, name_text, start_line

logger = structlog.get_logger(__name__)

# Implicit receivers that are not reported as parameters.
IMPLICIT_PARAMETERS = frozenset({"self", "cls"})

PARAMETER_PUNCTUATION = frozenset({"(", ")", ",", "/", "*"})


class PythonExtractor(BaseTreeExtractor):
    """Extractor for Python source code.

    Example:
        >>> result = PythonExtractor().analyze(b"def add(x, y):\\n    return x + y\\n")
        >>> [p.name for p in result.functions[0].parameters]
        ['x', 'y']
    """

    function_boundaries = ("function_definition",)

    def __init__(self) -> None:
        super().__init__()
        self._log = logger.bind(extractor="PythonExtractor")

    @property
    def language_name(self) -> str:
        return "python"

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for node in find_nodes(root, ("function_definition",)):
            if self._is_method(node):
                continue
            function = self._extract_function(node, source)
            if function is not None:
                result.functions.append(function)

        for node in find_nodes(root, ("class_definition",)):
            cls = self._extract_class(node, source)
            if cls is not None:
                result.classes.append(cls)

        for node in find_nodes(root, ("import_statement", "import_from_statement")):
            result.imports.extend(self._extract_imports(node, source))

        for node in find_nodes(root, ("call",)):
            self._extract_call(node, source, result)

    # =========================================================================
    # Functions
    # =========================================================================

    @staticmethod
    def _is_method(node: Node) -> bool:
        """A def whose enclosing block is a class body, decorated or not."""
        parent = node.parent
        if parent is not None and parent.type == "decorated_definition":
            parent = parent.parent
        return (
            parent is not None
            and parent.type == "block"
            and parent.parent is not None
            and parent.parent.type == "class_definition"
        )

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
            is_async=has_child_token(node, source, "async"),
            docstring=self._extract_docstring(node, source),
        )

    def _extract_parameters(self, node: Node, source: bytes) -> List[ParameterInfo]:
        """
        Read identifiers, typed and default parameters, and splats.

        self and cls are skipped wherever they appear.
        """
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return []

        parameters: List[ParameterInfo] = []
        for child in params_node.children:
            if child.type in PARAMETER_PUNCTUATION:
                continue

            name = ""
            type_text = ""
            if child.type == "identifier":
                name = self._get_node_text(child, source)
            elif child.type == "typed_parameter":
                for sub in child.children:
                    if sub.type in ("identifier", "list_splat_pattern", "dictionary_splat_pattern"):
                        name = self._get_node_text(sub, source)
                    elif sub.type == "type":
                        type_text = self._get_node_text(sub, source)
            elif child.type in ("default_parameter", "typed_default_parameter"):
                name = self._get_node_text(child.child_by_field_name("name"), source)
                type_text = self._get_node_text(child.child_by_field_name("type"), source)
            elif child.type in ("list_splat_pattern", "dictionary_splat_pattern"):
                name = self._get_node_text(child, source)

            if name and name not in IMPLICIT_PARAMETERS:
                parameters.append(ParameterInfo(name=name, type_annotation=type_text))

        return parameters

    def _extract_docstring(self, node: Node, source: bytes) -> Optional[str]:
        """Leading string literal of the body, unquoted and stripped."""
        body = node.child_by_field_name("body")
        if body is None:
            return None

        for child in body.children:
            if child.type == "comment":
                continue
            if child.type == "string":
                return self._clean_docstring(self._get_node_text(child, source))
            if child.type == "expression_statement" and child.child_count == 1:
                only = child.children[0]
                if only.type == "string":
                    return self._clean_docstring(self._get_node_text(only, source))
            break
        return None

    @staticmethod
    def _clean_docstring(raw: str) -> str:
        # String prefixes (r, b, u, f) come before the quotes.
        text = raw.lstrip("rRbBuUfF")
        for quote in ('"""', "'''", '"', "'"):
            if text.startswith(quote) and text.endswith(quote) and len(text) >= 2 * len(quote):
                return text[len(quote) : -len(quote)].strip()
        return text.strip()

    # =========================================================================
    # Classes
    # =========================================================================

    def _extract_class(self, node: Node, source: bytes) -> Optional[ClassInfo]:
        name = name_text(node.child_by_field_name("name"), source)
        if not name:
            return None

        return ClassInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            extends=self._extract_first_base(node, source),
            methods=self._extract_methods(node, source),
        )

    def _extract_first_base(self, node: Node, source: bytes) -> Optional[str]:
        superclasses = node.child_by_field_name("superclasses")
        if superclasses is None:
            return None
        for child in superclasses.children:
            if child.type not in ("(", ")", ","):
                return self._get_node_text(child, source)
        return None

    def _extract_methods(self, node: Node, source: bytes) -> List[FunctionInfo]:
        """Direct function definitions of the class body, decorated or not."""
        body = node.child_by_field_name("body")
        if body is None:
            return []

        methods: List[FunctionInfo] = []
        for child in body.children:
            definition = child
            if child.type == "decorated_definition":
                definition = child.child_by_field_name("definition")
            if definition is None or definition.type != "function_definition":
                continue
            method = self._extract_function(definition, source)
            if method is not None:
                methods.append(method)
        return methods

    # =========================================================================
    # Imports
    # =========================================================================

    def _extract_imports(self, node: Node, source: bytes) -> List[ImportInfo]:
        line = start_line(node)

        if node.type == "import_statement":
            imports = []
            for child in node.children:
                target = child
                if child.type == "aliased_import":
                    target = child.child_by_field_name("name")
                if target is not None and target.type == "dotted_name":
                    imports.append(ImportInfo(module=self._get_node_text(target, source), line=line))
            return imports

        module = self._get_node_text(node.child_by_field_name("module_name"), source)
        symbols: List[str] = []
        after_keyword = False
        for child in node.children:
            if child.type == "import":
                after_keyword = True
                continue
            if not after_keyword:
                continue
            if child.type == "dotted_name":
                symbols.append(self._get_node_text(child, source))
            elif child.type == "aliased_import":
                symbols.append(self._get_node_text(child.child_by_field_name("name"), source))
            elif child.type == "wildcard_import":
                symbols.append("*")
        return [ImportInfo(module=module, symbols=[s for s in symbols if s], line=line)]

    # =========================================================================
    # Calls
    # =========================================================================

    def _extract_call(self, node: Node, source: bytes, result: AnalysisResult) -> None:
        function_node = node.child_by_field_name("function")
        if function_node is None:
            return

        arguments = node.child_by_field_name("arguments")
        if arguments is not None and arguments.type == "generator_expression":
            arg_count = 1
        else:
            arg_count = count_arguments(arguments)

        if function_node.type == "attribute":
            callee = self._get_node_text(function_node.child_by_field_name("attribute"), source)
            receiver = self._get_node_text(function_node.child_by_field_name("object"), source)
            is_method = True
        else:
            callee = self._get_node_text(function_node, source)
            receiver = ""
            is_method = False

        if callee:
            result.calls.append(
                self._call(node, source, callee, arg_count, is_method, receiver)
            )


__all__ = ["PythonExtractor"]
