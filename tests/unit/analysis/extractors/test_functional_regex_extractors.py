"""Unit tests for the Clojure, Haskell and F# extractors."""

import pytest

from semantica_core.analysis.extractors.clojure import ClojureExtractor, parse_clojure_parameters
from semantica_core.analysis.extractors.fsharp import FSharpExtractor, parse_fsharp_parameters
from semantica_core.analysis.extractors.haskell import HaskellExtractor, signature_return_type

CLOJURE = """\
(ns app.core
  (:require [clojure.string :as str]
            [app.db :refer [query]]))

(def timeout 30)
(defonce state (atom {}))

(defn greet
  "Says hi."
  [name & opts]
  (str "hi " name))

(defn- helper [x] (inc x))

(defmacro unless [test & body] `(if ~test nil (do ~@body)))

(defrecord User [name age])
(defprotocol Greeter (hello [this]))
"""

HASKELL = """\
module Data.Shapes where

import qualified Data.Map as Map
import Data.List (sort)

data Shape = Circle Double | Square Double
newtype Wrapper = Wrapper Int
type Name = String
class (Eq a) => Container a where

area :: Shape -> Double
area (Circle r) = pi * r * r
area (Square s) = s * s

helper x = x + 1
"""

FSHARP = """\
namespace App.Core

open System
open System.Collections.Generic

module Math =
    let add x y = x + y
    let rec fact n = if n <= 1 then 1 else n * fact (n - 1)
    let pi = 3.14
    let square = fun x -> x * x

type Shape =
    | Circle of float

type Account(owner: string) =
    member this.Deposit(amount: decimal, note: string) = ()
    static member Create(owner: string) = Account(owner)

type IGreeter = interface
    abstract Greet: string -> string
end
"""


class TestClojureExtractor:
    """defn, defmacro, types, requires and defs."""

    @pytest.fixture
    def result(self, run):
        return run(ClojureExtractor(), CLOJURE)

    def test_functions(self, result):
        """Test docstrings are skipped and variadic markers dropped."""
        assert [(f.name, f.line_start, [p.name for p in f.parameters]) for f in result.functions] == [
            ("greet", 8, ["name", "opts"]),
            ("helper", 13, ["x"]),
            ("unless", 15, ["test", "body"]),
        ]

    def test_types(self, result):
        """Test records and protocols."""
        assert [(c.name, c.line_start) for c in result.classes] == [("User", 17), ("Greeter", 18)]

    def test_require(self, result):
        """Test the first required namespace is imported."""
        assert [(i.module, i.line) for i in result.imports] == [("clojure.string", 2)]

    def test_symbols(self, result):
        """Test ns, def and defonce."""
        assert [(s.name, s.kind, s.line) for s in result.symbols] == [
            ("app.core", "namespace", 1),
            ("timeout", "variable", 5),
            ("state", "constant", 6),
        ]

    def test_parse_parameters(self):
        """Test keyword hints are ignored."""
        assert [p.name for p in parse_clojure_parameters("a :as all & more")] == ["a", "all", "more"]


class TestHaskellExtractor:
    """Signatures, equations, types, imports and module."""

    @pytest.fixture
    def result(self, run):
        return run(HaskellExtractor(), HASKELL)

    def test_functions(self, result):
        """Test signatures win and equations add unsigned names once."""
        assert [(f.name, f.line_start, f.return_type) for f in result.functions] == [
            ("area", 11, "Double"),
            ("helper", 15, None),
        ]

    def test_types(self, result):
        """Test data, newtype, type and class declarations."""
        assert [(c.name, c.line_start) for c in result.classes] == [
            ("Shape", 6),
            ("Wrapper", 7),
            ("Name", 8),
            ("Container", 9),
        ]

    def test_imports_and_module(self, result):
        """Test qualified imports and the module symbol."""
        assert [(i.module, i.line) for i in result.imports] == [("Data.Map", 3), ("Data.List", 4)]
        assert [(s.name, s.kind) for s in result.symbols] == [("Data.Shapes", "module")]

    def test_signature_return_type(self):
        """Test the last arrow segment is the result."""
        assert signature_return_type("Int -> String -> Bool") == "Bool"
        assert signature_return_type("IO ()") == "IO ()"


class TestFSharpExtractor:
    """let functions, members, types, opens and symbols."""

    @pytest.fixture
    def result(self, run):
        return run(FSharpExtractor(), FSHARP)

    def test_functions(self, result):
        """Test let functions then members."""
        assert [(f.name, f.line_start, f.is_static) for f in result.functions] == [
            ("add", 7, False),
            ("fact", 8, False),
            ("Deposit", 16, False),
            ("Create", 17, True),
        ]

    def test_member_parameters(self, result):
        """Test tupled member parameters with types."""
        deposit = next(f for f in result.functions if f.name == "Deposit")

        assert [(p.name, p.type_annotation) for p in deposit.parameters] == [
            ("amount", "decimal"),
            ("note", "string"),
        ]

    def test_types_deduplicated(self, result):
        """Test a type matched by several patterns is reported once."""
        assert [(c.name, c.line_start) for c in result.classes] == [
            ("Shape", 12),
            ("Account", 15),
            ("IGreeter", 19),
        ]

    def test_opens(self, result):
        """Test open declarations are imports."""
        assert [(i.module, i.line) for i in result.imports] == [
            ("System", 3),
            ("System.Collections.Generic", 4),
        ]

    def test_symbols(self, result):
        """Test modules, namespaces and plain values."""
        assert [(s.name, s.kind, s.line) for s in result.symbols] == [
            ("Math", "module", 6),
            ("App.Core", "namespace", 1),
            ("pi", "value", 9),
        ]

    def test_parse_parameters(self):
        """Test untyped names are kept."""
        params = parse_fsharp_parameters("x, y: int")

        assert [(p.name, p.type_annotation) for p in params] == [("x", None), ("y", "int")]
