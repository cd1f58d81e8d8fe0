"""Unit tests for the Go extractor."""

import pytest

from semantica_core.analysis.extractors.go import GoExtractor

SERVER = """\
package main

import (
\t"fmt"
\tlog "github.com/sirupsen/logrus"
)

// Server handles requests.
// It is safe for concurrent use.
type Server struct {
\tAddr string
\tport int
\t*Logger
}

type Handler interface {
\tServe(w Writer, r *Request) error
}

func NewServer(addr string, port int) *Server {
\treturn &Server{Addr: addr, port: port}
}

func (s *Server) Start(a, b int, rest ...string) error {
\tfmt.Println(s.Addr)
\tlisten(a)
\treturn nil
}
"""


@pytest.fixture
def result(run):
    return run(GoExtractor(), SERVER)


class TestFunctions:
    """Functions and methods."""

    def test_functions_and_methods(self, result):
        """Test both declarations and receiver methods are listed."""
        assert [f.name for f in result.functions] == ["NewServer", "Start"]

    def test_grouped_and_variadic_parameters(self, result):
        """Test one parameter per name; variadics keep the ellipsis."""
        start = result.functions[1]

        assert [(p.name, p.type_annotation) for p in start.parameters] == [
            ("a", "int"),
            ("b", "int"),
            ("rest", "...string"),
        ]
        assert start.return_type == "error"

    def test_visibility_from_capitalization(self, run):
        """Test exported names are public, others private."""
        result = run(GoExtractor(), "package p\nfunc Exported() {}\nfunc internal() {}\n")

        assert [(f.name, f.visibility) for f in result.functions] == [
            ("Exported", "public"),
            ("internal", "private"),
        ]

    def test_doc_comment(self, run):
        """Test adjacent line comments form the docstring."""
        source = "package p\n\n// Add sums.\n// Twice.\nfunc Add() {}\n"

        assert run(GoExtractor(), source).functions[0].docstring == "Add sums.\nTwice."


class TestTypes:
    """Structs and interfaces."""

    def test_struct_fields_and_methods(self, result):
        """Test receiver methods attach to the struct."""
        server = next(c for c in result.classes if c.name == "Server")

        assert [m.name for m in server.methods] == ["Start"]
        assert [(p.name, p.type_annotation, p.visibility) for p in server.properties] == [
            ("Addr", "string", "public"),
            ("port", "int", "private"),
            ("Logger", "*Logger", None),
        ]

    def test_interface_methods(self, result):
        """Test interface method specs become methods."""
        handler = next(c for c in result.classes if c.name == "Handler")

        serve = handler.methods[0]
        assert serve.name == "Serve"
        assert [p.name for p in serve.parameters] == ["w", "r"]
        assert serve.return_type == "error"


class TestImportsAndCalls:
    """Import specs and call expressions."""

    def test_imports(self, result):
        """Test each spec is one import, quotes stripped."""
        assert [(i.module, i.line) for i in result.imports] == [
            ("fmt", 4),
            ("github.com/sirupsen/logrus", 5),
        ]

    def test_calls(self, result):
        """Test selector calls carry the operand as receiver."""
        calls = [(c.callee, c.receiver, c.is_method_call, c.caller_function) for c in result.calls]

        assert calls == [
            ("Println", "fmt", True, "Start"),
            ("listen", None, False, "Start"),
        ]
