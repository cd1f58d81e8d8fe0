"""Unit tests for the Java extractor."""

import pytest

from semantica_core.analysis.extractors.java import JavaExtractor

SERVICE = """\
package com.example;

import java.util.List;
import static org.junit.Assert.*;

public class UserService extends BaseService implements Runnable, Closeable {
    private final List<String> names;
    public static final int LIMIT = 10, MAX = 20;

    public UserService(List<String> names) {
        this.names = names;
    }

    @Override
    public void run() {
        System.out.println(names.size());
        User user = new User("a");
        validate(user);
    }

    static String join(String sep, String... parts) {
        return String.join(sep, parts);
    }
}
"""


@pytest.fixture
def result(run):
    return run(JavaExtractor(), SERVICE)


class TestClasses:
    """Types and members."""

    def test_methods_only_under_class(self, result):
        """Test methods are not reported as free functions."""
        assert result.functions == []
        assert [m.name for m in result.classes[0].methods] == ["UserService", "run", "join"]

    def test_heritage(self, result):
        """Test superclass and interfaces."""
        cls = result.classes[0]

        assert cls.extends == "BaseService"
        assert cls.implements == ["Runnable", "Closeable"]

    def test_method_details(self, result):
        """Test visibility, static, return type and varargs."""
        methods = {m.name: m for m in result.classes[0].methods}

        assert methods["run"].visibility == "public"
        assert methods["run"].return_type == "void"
        assert methods["join"].visibility is None
        assert methods["join"].is_static is True
        assert [(p.name, p.type_annotation) for p in methods["join"].parameters] == [
            ("sep", "String"),
            ("parts", "String..."),
        ]

    def test_fields(self, result):
        """Test one property per declarator."""
        props = result.classes[0].properties

        assert [(p.name, p.type_annotation, p.visibility) for p in props] == [
            ("names", "List<String>", "private"),
            ("LIMIT", "int", "public"),
            ("MAX", "int", "public"),
        ]

    def test_interface_members_public(self, run):
        """Test interface methods default to public and extends become implements."""
        source = "interface Shape extends Named, Sized {\n    double area();\n}\n"

        shape = run(JavaExtractor(), source).classes[0]

        assert shape.implements == ["Named", "Sized"]
        assert [(m.name, m.visibility) for m in shape.methods] == [("area", "public")]

    def test_record_components(self, run):
        """Test record components become properties."""
        point = run(JavaExtractor(), "record Point(int x, int y) {}\n").classes[0]

        assert [(p.name, p.type_annotation) for p in point.properties] == [("x", "int"), ("y", "int")]

    def test_enum(self, run):
        """Test enum methods after the constants."""
        source = "enum Color {\n    RED, GREEN;\n    String label() { return name(); }\n}\n"

        color = run(JavaExtractor(), source).classes[0]

        assert color.name == "Color"
        assert [m.name for m in color.methods] == ["label"]


class TestImportsAndCalls:
    """Imports, invocations and object creation."""

    def test_imports(self, result):
        """Test static imports drop the keyword."""
        assert [(i.module, i.line) for i in result.imports] == [
            ("java.util.List", 3),
            ("org.junit.Assert.*", 4),
        ]

    def test_calls(self, result):
        """Test method invocations and constructor calls."""
        calls = [(c.callee, c.receiver, c.is_method_call, c.caller_function) for c in result.calls]

        assert ("println", "System.out", True, "run") in calls
        assert ("size", "names", True, "run") in calls
        assert ("User", None, False, "run") in calls
        assert ("validate", None, False, "run") in calls
        assert ("join", "String", True, "join") in calls
