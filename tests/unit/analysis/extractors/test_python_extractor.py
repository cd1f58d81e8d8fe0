"""Unit tests for the Python extractor."""

import pytest

from semantica_core.analysis.extractors.python import PythonExtractor


@pytest.fixture
def extractor():
    return PythonExtractor()


class TestFunctions:
    """Function and method extraction."""

    def test_parameters_and_types(self, extractor, run):
        """Test typed, default and splat parameters."""
        source = "def f(a, b: int, c=1, d: str = 'x', *args, **kwargs) -> bool:\n    pass\n"

        function = run(extractor, source).functions[0]

        assert [(p.name, p.type_annotation) for p in function.parameters] == [
            ("a", None),
            ("b", "int"),
            ("c", None),
            ("d", "str"),
            ("*args", None),
            ("**kwargs", None),
        ]
        assert function.return_type == "bool"

    def test_self_and_cls_skipped(self, extractor, run):
        """Test implicit receivers are not parameters."""
        source = (
            "class A:\n"
            "    def m(self, x):\n"
            "        pass\n"
            "    @classmethod\n"
            "    def make(cls, y):\n"
            "        pass\n"
        )

        methods = run(extractor, source).classes[0].methods

        assert {f.name: [p.name for p in f.parameters] for f in methods} == {
            "m": ["x"],
            "make": ["y"],
        }

    def test_async_and_docstring(self, extractor, run):
        """Test async detection and the leading string literal."""
        source = 'async def fetch(url):\n    """Fetch a page."""\n    return url\n'

        function = run(extractor, source).functions[0]

        assert function.is_async is True
        assert function.docstring == "Fetch a page."
        assert (function.line_start, function.line_end) == (1, 3)

    def test_no_docstring(self, extractor, run):
        """Test a body without a leading string has no docstring."""
        function = run(extractor, "def f():\n    x = 'no'\n").functions[0]

        assert function.docstring is None
        assert function.is_async is False

    def test_methods_only_under_class(self, extractor, run):
        """Test methods are not repeated as free functions."""
        source = "class A(Base, Mixin):\n    def run(self):\n        pass\n\ndef main():\n    pass\n"

        result = run(extractor, source)

        assert [f.name for f in result.functions] == ["main"]
        assert result.classes[0].name == "A"
        assert result.classes[0].extends == "Base"
        assert [m.name for m in result.classes[0].methods] == ["run"]

    def test_decorated_method_in_class(self, extractor, run):
        """Test decorated methods are attached to the class."""
        source = "class A:\n    @property\n    def size(self):\n        return 1\n"

        cls = run(extractor, source).classes[0]

        assert [m.name for m in cls.methods] == ["size"]
        assert cls.extends is None
        assert run(extractor, source).functions == []

    def test_function_nested_in_method_is_free(self, extractor, run):
        """Test a def inside a method body is still reported."""
        source = "class A:\n    def run(self):\n        def helper():\n            pass\n"

        result = run(extractor, source)

        assert [f.name for f in result.functions] == ["helper"]
        assert [m.name for m in result.classes[0].methods] == ["run"]


class TestImports:
    """Import statements."""

    def test_plain_import(self, extractor, run):
        """Test one import per dotted module, aliases resolved to the module."""
        result = run(extractor, "import os.path, numpy as np\n")

        assert [(i.module, i.symbols) for i in result.imports] == [("os.path", []), ("numpy", [])]

    def test_from_import(self, extractor, run):
        """Test symbols follow the import keyword."""
        source = "from collections import OrderedDict, defaultdict as dd\nfrom x import *\n"

        result = run(extractor, source)

        assert [(i.module, i.symbols, i.line) for i in result.imports] == [
            ("collections", ["OrderedDict", "defaultdict"], 1),
            ("x", ["*"], 2),
        ]

    def test_relative_import(self, extractor, run):
        """Test relative modules keep their dots."""
        result = run(extractor, "from .models import User\n")

        assert result.imports[0].module == ".models"
        assert result.imports[0].symbols == ["User"]


class TestCalls:
    """Call sites."""

    def test_plain_and_method_calls(self, extractor, run):
        """Test attribute calls carry a receiver."""
        source = "def main():\n    print(1, 2)\n    self.client.get(url)\n"

        calls = run(extractor, source).calls

        assert [(c.callee, c.caller_function, c.arguments_count) for c in calls] == [
            ("print", "main", 2),
            ("get", "main", 1),
        ]
        assert calls[0].is_method_call is False
        assert calls[0].receiver is None
        assert calls[1].is_method_call is True
        assert calls[1].receiver == "self.client"

    def test_module_level_call_has_no_caller(self, extractor, run):
        """Test calls outside any function are unattributed."""
        call = run(extractor, "setup()\n").calls[0]

        assert call.caller_function is None
        assert call.line == 1

    def test_generator_argument_counts_once(self, extractor, run):
        """Test a bare generator argument counts as one."""
        call = run(extractor, "sum(x for x in xs)\n").calls[0]

        assert call.arguments_count == 1

    def test_nested_function_attribution(self, extractor, run):
        """Test calls inside a nested function name the inner function."""
        source = "def outer():\n    def inner():\n        work()\n    inner()\n"

        calls = run(extractor, source).calls

        assert [(c.callee, c.caller_function) for c in calls] == [
            ("work", "inner"),
            ("inner", "outer"),
        ]


class TestSyntaxErrors:
    """Broken input."""

    def test_error_reported_with_position(self, extractor, run):
        """Test defects carry 1-based positions and valid code survives."""
        result = run(extractor, "def ok():\n    pass\n\ndef broken(:\n    pass\n")

        assert "ok" in [f.name for f in result.functions]
        assert result.errors
        assert all(e.line >= 1 and e.column >= 1 for e in result.errors)
