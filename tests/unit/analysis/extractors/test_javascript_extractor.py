"""Unit tests for the JavaScript extractor."""

import pytest

from semantica_core.analysis.extractors.javascript import JavaScriptExtractor


@pytest.fixture
def extractor():
    return JavaScriptExtractor()


class TestFunctions:
    """Declarations, expressions and arrow functions."""

    def test_declaration(self, extractor, run):
        """Test a declaration with default and rest parameters."""
        source = "async function load(url, retries = 3, ...opts) {\n  return url;\n}\n"

        function = run(extractor, source).functions[0]

        assert function.name == "load"
        assert [p.name for p in function.parameters] == ["url", "retries", "...opts"]
        assert function.is_async is True
        assert (function.line_start, function.line_end) == (1, 3)

    def test_arrow_takes_variable_name(self, extractor, run):
        """Test an arrow function assigned to a const is named after it."""
        result = run(extractor, "const double = x => x * 2;\n")

        assert [(f.name, [p.name for p in f.parameters]) for f in result.functions] == [
            ("double", ["x"])
        ]

    def test_named_function_expression(self, extractor, run):
        """Test a function expression takes its variable's name."""
        result = run(extractor, "const handler = function (event) { return event; };\n")

        assert [f.name for f in result.functions] == ["handler"]

    def test_anonymous_arrow_kept(self, extractor, run):
        """Test an unnamed arrow callback is still reported."""
        result = run(extractor, "items.map((a, b) => a + b);\n")

        assert [(f.name, len(f.parameters)) for f in result.functions] == [("", 2)]

    def test_anonymous_function_expression_skipped(self, extractor, run):
        """Test an unnamed function expression is not reported."""
        result = run(extractor, "setTimeout(function () { tick(); }, 10);\n")

        assert result.functions == []

    def test_methods_not_top_level(self, extractor, run):
        """Test class methods only appear under their class."""
        source = "class A {\n  run() {}\n}\n"

        result = run(extractor, source)

        assert result.functions == []
        assert [m.name for m in result.classes[0].methods] == ["run"]

    def test_jsx_language_tag(self, run):
        """Test the instance reports the language it was bound to."""
        result = run(JavaScriptExtractor("jsx"), "function App() { return <div />; }\n")

        assert result.language == "jsx"
        assert result.functions[0].name == "App"
        assert result.errors == []


class TestClasses:
    """Class declarations."""

    def test_class_members(self, extractor, run):
        """Test extends, static, async and private members."""
        source = (
            "class Store extends Base {\n"
            "  count = 0;\n"
            "  #secret = 1;\n"
            "  static create() {}\n"
            "  async load() {}\n"
            "  #hide() {}\n"
            "}\n"
        )

        cls = run(extractor, source).classes[0]

        assert cls.name == "Store"
        assert cls.extends == "Base"
        assert [(p.name, p.visibility) for p in cls.properties] == [
            ("count", None),
            ("#secret", "private"),
        ]
        methods = {m.name: m for m in cls.methods}
        assert methods["create"].is_static is True
        assert methods["load"].is_async is True
        assert methods["#hide"].visibility == "private"


class TestModules:
    """Imports and exports."""

    def test_imports(self, extractor, run):
        """Test default, named, namespace and side-effect imports."""
        source = (
            "import React, { useState, useEffect as effect } from 'react';\n"
            "import * as path from \"path\";\n"
            "import './styles.css';\n"
        )

        imports = run(extractor, source).imports

        assert [(i.module, i.symbols, i.is_default, i.line) for i in imports] == [
            ("react", ["React", "useState", "useEffect"], True, 1),
            ("path", ["path"], False, 2),
            ("./styles.css", [], False, 3),
        ]

    def test_exports(self, extractor, run):
        """Test default, declared and listed exports."""
        source = (
            "export default function () {}\n"
            "export const a = 1, b = 2;\n"
            "export function helper() {}\n"
            "export { x as y, z };\n"
        )

        exports = run(extractor, source).exports

        assert [(e.name, e.line) for e in exports] == [
            ("default", 1),
            ("a", 2),
            ("b", 2),
            ("helper", 3),
            ("y", 4),
            ("z", 4),
        ]


class TestCalls:
    """Call expressions."""

    def test_member_and_plain_calls(self, extractor, run):
        """Test member calls carry their receiver."""
        source = "function main() {\n  console.log('a', 1);\n  run();\n}\n"

        calls = run(extractor, source).calls

        assert [(c.callee, c.receiver, c.is_method_call, c.caller_function) for c in calls] == [
            ("log", "console", True, "main"),
            ("run", None, False, "main"),
        ]
        assert calls[0].arguments_count == 2

    def test_call_in_arrow_attributed_to_variable(self, extractor, run):
        """Test calls in a named arrow function name the variable."""
        calls = run(extractor, "const go = () => {\n  fetch(url);\n};\n").calls

        assert calls[0].caller_function == "go"
        assert calls[0].line == 2

    def test_call_in_anonymous_callback_looks_through(self, extractor, run):
        """Test anonymous callbacks attribute to the enclosing named function."""
        source = "function outer() {\n  list.forEach(item => save(item));\n}\n"

        calls = run(extractor, source).calls

        assert {c.callee: c.caller_function for c in calls} == {"forEach": "outer", "save": "outer"}
