"""Unit tests for the C and C++ extractor."""

import pytest

from semantica_core.analysis.extractors.c import CExtractor

C_SOURCE = """\
#include <stdio.h>
#include "util.h"

struct point {
    int x;
    int y, *z;
};

static int add(int a, int *b) {
    return a + *b;
}

char *name(void) {
    printf("%d", 1);
    return p->label(2);
}
"""

CPP_SOURCE = """\
#include <vector>

class Shape : public Base, public Drawable {
    int id;
public:
    void draw() const;
    virtual double area() { return 0; }
};

struct Pt {
    int x;
};

void Shape::draw() const {
    std::sort(v.begin(), v.end());
    helper();
}
"""


@pytest.fixture
def c_result(run):
    return run(CExtractor("c"), C_SOURCE)


@pytest.fixture
def cpp_result(run):
    return run(CExtractor("cpp"), CPP_SOURCE)


class TestC:
    """Plain C."""

    def test_includes(self, c_result):
        """Test angle brackets and quotes are stripped."""
        assert [(i.module, i.line) for i in c_result.imports] == [("stdio.h", 1), ("util.h", 2)]

    def test_functions(self, c_result):
        """Test pointer parameters and static storage."""
        add, name = c_result.functions

        assert add.name == "add"
        assert add.is_static is True
        assert add.return_type == "int"
        assert [(p.name, p.type_annotation) for p in add.parameters] == [("a", "int"), ("b", "int*")]
        assert name.name == "name"
        assert name.parameters == []

    def test_struct_fields(self, c_result):
        """Test one property per declarator with pointer prefixes."""
        point = c_result.classes[0]

        assert point.name == "point"
        assert [(p.name, p.type_annotation, p.visibility) for p in point.properties] == [
            ("x", "int", None),
            ("y", "int", None),
            ("z", "int*", None),
        ]

    def test_calls(self, c_result):
        """Test plain and field calls."""
        calls = [(c.callee, c.receiver, c.caller_function) for c in c_result.calls]

        assert calls == [("printf", None, "name"), ("label", "p", "name")]

    def test_language_tag(self, c_result):
        """Test the result names the C language."""
        assert c_result.language == "c"


class TestCpp:
    """C++ additions."""

    def test_members_not_top_level(self, cpp_result):
        """Test in-class definitions stay with their class."""
        assert [f.name for f in cpp_result.functions] == ["Shape::draw"]

    def test_class_bases(self, cpp_result):
        """Test access specifiers are dropped from bases."""
        shape = next(c for c in cpp_result.classes if c.name == "Shape")

        assert shape.extends == "Base"
        assert shape.implements == ["Drawable"]

    def test_default_member_visibility(self, cpp_result):
        """Test class members default to private, struct members to public."""
        shape = next(c for c in cpp_result.classes if c.name == "Shape")
        pt = next(c for c in cpp_result.classes if c.name == "Pt")

        assert [(p.name, p.visibility) for p in shape.properties] == [("id", "private")]
        assert [(m.name, m.visibility) for m in shape.methods] == [
            ("draw", "public"),
            ("area", "public"),
        ]
        assert [(p.name, p.visibility) for p in pt.properties] == [("x", "public")]

    def test_scoped_and_member_calls(self, cpp_result):
        """Test qualified calls carry their scope as receiver."""
        calls = [(c.callee, c.receiver, c.is_method_call) for c in cpp_result.calls]

        assert calls == [
            ("sort", "std", True),
            ("begin", "v", True),
            ("end", "v", True),
            ("helper", None, False),
        ]
        assert all(c.caller_function == "Shape::draw" for c in cpp_result.calls)
