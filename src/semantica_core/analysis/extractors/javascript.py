"""JavaScript and JSX semantic extractor.

Handles ES modules and CommonJS-era code alike:
- function declarations, function expressions and arrow functions (arrow
  functions borrow the name of the variable they are assigned to)
- classes with extends and their method definitions
- import statements (default, named and namespace imports)
- export statements ("default" marks an unnamed default export)
- call expressions, member calls reported as method calls

TypeScriptExtractor builds on this class.

Author: Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import List, Optional, Tuple

import structlog
from tree_sitter import Node

from ..models import (
    AnalysisResult,
    ClassInfo,
    ExportInfo,
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
    has_child_token,
    name_text,
    start_line,
    strip_quotes,
)

logger = structlog.get_logger(__name__)

FUNCTION_NODE_TYPES = (
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "arrow_function",
)

# Expressions that only get a name from the variable they initialize.
ASSIGNABLE_FUNCTION_TYPES = frozenset({"arrow_function", "function_expression", "function"})

DECLARATION_NAME_TYPES = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "class_declaration",
        "abstract_class_declaration",
        "interface_declaration",
        "type_alias_declaration",
        "enum_declaration",
    }
)


class JavaScriptExtractor(BaseTreeExtractor):
    """Extractor for JavaScript and JSX.

    One class serves both canonical languages; the instance is bound to
    "javascript" or "jsx" and reports that identifier.
    """

    function_boundaries = FUNCTION_NODE_TYPES + ("method_definition",)

    class_node_types: Tuple[str, ...] = ("class_declaration",)
    exported_identifier_types: Tuple[str, ...] = ("identifier",)

    def __init__(self, language: str = "javascript") -> None:
        super().__init__()
        self._language = language
        self._log = logger.bind(extractor=self.__class__.__name__, language=language)

    @property
    def language_name(self) -> str:
        return self._language

    def extract(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        for node in find_nodes(root, FUNCTION_NODE_TYPES):
            function = self._extract_function(node, source)
            if function is not None:
                result.functions.append(function)

        for node in find_nodes(root, self.class_node_types):
            cls = self._extract_class(node, source)
            if cls is not None:
                result.classes.append(cls)

        self._extract_extra_types(root, source, result)

        for node in find_nodes(root, ("import_statement",)):
            imported = self._extract_import(node, source)
            if imported is not None:
                result.imports.append(imported)

        for node in find_nodes(root, ("export_statement",)):
            result.exports.extend(self._extract_exports(node, source))

        for node in find_nodes(root, ("call_expression",)):
            self._extract_call(node, source, result)

    def _extract_extra_types(self, root: Node, source: bytes, result: AnalysisResult) -> None:
        """Hook for dialect-specific type declarations."""

    # =========================================================================
    # Functions
    # =========================================================================

    def _extract_function(self, node: Node, source: bytes) -> Optional[FunctionInfo]:
        name = self._get_node_text(node.child_by_field_name("name"), source)
        if not name and node.type in ASSIGNABLE_FUNCTION_TYPES:
            name = self._declarator_name(node, source)

        # Anonymous function expressions carry no useful identity; anonymous
        # arrow functions are still reported.
        if not name and node.type != "arrow_function":
            return None

        return FunctionInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            parameters=self._extract_parameters(node, source),
            return_type=self._return_type(node, source),
            is_async=has_child_token(node, source, "async"),
        )

    def _declarator_name(self, node: Node, source: bytes) -> str:
        parent = node.parent
        if parent is not None and parent.type == "variable_declarator":
            name_node = parent.child_by_field_name("name")
            if name_node is not None and name_node.type == "identifier":
                return self._get_node_text(name_node, source)
        return ""

    def _extract_parameters(self, node: Node, source: bytes) -> List[ParameterInfo]:
        single = node.child_by_field_name("parameter")
        if single is not None:
            # x => x * 2
            name = name_text(single, source)
            return [ParameterInfo(name=name)] if name else []

        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return []

        parameters: List[ParameterInfo] = []
        for child in params_node.children:
            parameter = self._extract_parameter(child, source)
            if parameter is not None:
                parameters.append(parameter)
        return parameters

    def _extract_parameter(self, node: Node, source: bytes) -> Optional[ParameterInfo]:
        name = ""
        if node.type in ("identifier", "rest_pattern", "object_pattern", "array_pattern"):
            name = name_text(node, source)
        elif node.type == "assignment_pattern":
            name = name_text(node.child_by_field_name("left"), source)
        return ParameterInfo(name=name) if name else None

    def _return_type(self, node: Node, source: bytes) -> Optional[str]:
        return None

    def boundary_name(self, node: Node, source: bytes) -> str:
        name = self._get_node_text(node.child_by_field_name("name"), source)
        if not name and node.type in ASSIGNABLE_FUNCTION_TYPES:
            name = self._declarator_name(node, source)
        return name

    # =========================================================================
    # Classes
    # =========================================================================

    def _extract_class(self, node: Node, source: bytes) -> Optional[ClassInfo]:
        name = name_text(node.child_by_field_name("name"), source)
        if not name:
            return None

        extends, implements = self._class_heritage(node, source)
        methods: List[FunctionInfo] = []
        properties: List[PropertyInfo] = []

        body = node.child_by_field_name("body")
        if body is not None:
            for member in body.children:
                if member.type == "method_definition":
                    method = self._extract_method(member, source)
                    if method is not None:
                        methods.append(method)
                else:
                    prop = self._extract_class_property(member, source)
                    if prop is not None:
                        properties.append(prop)

        return ClassInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            extends=extends,
            implements=implements,
            methods=methods,
            properties=properties,
        )

    def _class_heritage(self, node: Node, source: bytes) -> Tuple[Optional[str], List[str]]:
        heritage = find_child_by_type(node, "class_heritage")
        if heritage is None:
            return None, []
        for child in heritage.children:
            if child.type != "extends":
                return self._get_node_text(child, source), []
        return None, []

    def _extract_method(self, node: Node, source: bytes) -> Optional[FunctionInfo]:
        name = name_text(node.child_by_field_name("name"), source)
        if not name:
            return None

        return FunctionInfo(
            name=name,
            line_start=start_line(node),
            line_end=end_line(node),
            parameters=self._extract_parameters(node, source),
            return_type=self._return_type(node, source),
            visibility=self._method_visibility(node, source),
            is_async=has_child_token(node, source, "async"),
            is_static=has_child_token(node, source, "static"),
        )

    def _method_visibility(self, node: Node, source: bytes) -> Optional[str]:
        name_node = node.child_by_field_name("name")
        if name_node is not None and name_node.type == "private_property_identifier":
            return "private"
        return None

    def _extract_class_property(self, node: Node, source: bytes) -> Optional[PropertyInfo]:
        if node.type != "field_definition":
            return None
        prop = node.child_by_field_name("property")
        name = name_text(prop, source)
        if not name:
            return None
        visibility = "private" if prop.type == "private_property_identifier" else None
        return PropertyInfo(name=name, visibility=visibility)

    # =========================================================================
    # Imports / exports
    # =========================================================================

    def _extract_import(self, node: Node, source: bytes) -> Optional[ImportInfo]:
        source_node = node.child_by_field_name("source")
        if source_node is None:
            source_node = find_child_by_type(node, "string")
        if source_node is None:
            return None

        symbols: List[str] = []
        is_default = False
        clause = find_child_by_type(node, "import_clause")
        if clause is not None:
            for child in clause.children:
                if child.type == "identifier":
                    is_default = True
                    symbols.append(self._get_node_text(child, source))
                elif child.type == "named_imports":
                    for spec in child.children:
                        if spec.type != "import_specifier":
                            continue
                        spec_name = spec.child_by_field_name("name")
                        if spec_name is not None:
                            symbols.append(self._get_node_text(spec_name, source))
                elif child.type == "namespace_import":
                    alias = find_child_by_type(child, "identifier")
                    if alias is not None:
                        symbols.append(self._get_node_text(alias, source))

        return ImportInfo(
            module=strip_quotes(self._get_node_text(source_node, source)),
            symbols=symbols,
            line=start_line(node),
            is_default=is_default,
        )

    def _extract_exports(self, node: Node, source: bytes) -> List[ExportInfo]:
        line = start_line(node)
        if any(child.type == "default" for child in node.children):
            return [ExportInfo(name="default", line=line)]

        names: List[str] = []
        declaration = node.child_by_field_name("declaration")
        if declaration is not None:
            names.extend(self._declared_names(declaration, source))

        for child in node.children:
            if child.type in self.exported_identifier_types:
                names.append(self._get_node_text(child, source))
            elif child.type == "export_clause":
                for spec in child.children:
                    if spec.type != "export_specifier":
                        continue
                    exported = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
                    if exported is not None:
                        names.append(self._get_node_text(exported, source))

        return [ExportInfo(name=name, line=line) for name in names if name]

    def _declared_names(self, declaration: Node, source: bytes) -> List[str]:
        if declaration.type in DECLARATION_NAME_TYPES:
            return [self._get_node_text(declaration.child_by_field_name("name"), source)]
        if declaration.type in ("lexical_declaration", "variable_declaration"):
            names = []
            for declarator in declaration.children:
                if declarator.type != "variable_declarator":
                    continue
                name_node = declarator.child_by_field_name("name")
                if name_node is not None and name_node.type == "identifier":
                    names.append(self._get_node_text(name_node, source))
            return names
        return []

    # =========================================================================
    # Calls
    # =========================================================================

    def _extract_call(self, node: Node, source: bytes, result: AnalysisResult) -> None:
        function_node = node.child_by_field_name("function")
        if function_node is None:
            return

        arg_count = count_arguments(node.child_by_field_name("arguments"))
        if function_node.type == "member_expression":
            callee = self._get_node_text(function_node.child_by_field_name("property"), source)
            receiver = self._get_node_text(function_node.child_by_field_name("object"), source)
            if callee:
                result.calls.append(self._call(node, source, callee, arg_count, True, receiver))
            return

        callee = self._get_node_text(function_node, source)
        if callee:
            result.calls.append(self._call(node, source, callee, arg_count))


__all__ = ["JavaScriptExtractor", "FUNCTION_NODE_TYPES"]
