"""Unit tests for the OCaml extractor."""

import pytest

from semantica_core.analysis.extractors.ocaml import OCamlExtractor

SOURCE = """\
open Printf

module Util = struct
  let double x = x * 2
end

type color = Red | Green

let add x y = x + y
let inc = fun x -> x + 1
let answer = 42
"""


@pytest.fixture
def result(run):
    return run(OCamlExtractor(), SOURCE)


class TestOCamlExtractor:
    """Let bindings, modules, opens and types."""

    def test_functions(self, result):
        """Test bindings with parameters or a fun body are functions."""
        assert [f.name for f in result.functions] == ["double", "add", "inc"]
        add = next(f for f in result.functions if f.name == "add")
        assert [p.name for p in add.parameters] == ["x", "y"]

    def test_value_binding_is_not_a_function(self, result):
        """Test a plain value is skipped."""
        assert "answer" not in [f.name for f in result.functions]

    def test_module(self, result):
        """Test module bindings are classes."""
        assert [(c.name, c.line_start, c.line_end) for c in result.classes] == [("Util", 3, 5)]

    def test_open_and_type(self, result):
        """Test open is an import and type bindings are symbols."""
        assert [(i.module, i.line) for i in result.imports] == [("Printf", 1)]
        assert [(s.name, s.kind, s.line) for s in result.symbols] == [("color", "type", 7)]
