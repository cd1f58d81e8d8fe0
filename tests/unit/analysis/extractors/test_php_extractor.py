"""Unit tests for the PHP extractor."""

import pytest

from semantica_core.analysis.extractors.php import PHPExtractor

USERS = """\
<?php
namespace App\\Http;

use App\\Models\\User;
use Illuminate\\Support\\Str as S;

class UserController extends Controller implements Auditable, Countable
{
    private string $table;
    protected $hidden = [];

    public static function make(array $attrs): self
    {
        return new static();
    }

    public function show(int $id, ...$rest): ?User
    {
        $user = User::find($id);
        $name = $user?->name();
        return $this->repo->load(strlen($id));
    }
}

function helper($value) {
    return trim($value);
}
"""


@pytest.fixture
def result(run):
    return run(PHPExtractor(), USERS)


class TestFunctions:
    """Top-level functions and methods."""

    def test_top_level_function(self, result):
        """Test only free functions are top-level."""
        assert [f.name for f in result.functions] == ["helper"]
        assert [p.name for p in result.functions[0].parameters] == ["$value"]

    def test_methods(self, result):
        """Test visibility, static, typed and variadic parameters."""
        methods = {m.name: m for m in result.classes[0].methods}

        assert methods["make"].is_static is True
        assert methods["make"].visibility == "public"
        assert methods["make"].return_type == "self"
        assert [(p.name, p.type_annotation) for p in methods["show"].parameters] == [
            ("$id", "int"),
            ("$rest", None),
        ]
        assert methods["show"].return_type == "?User"


class TestClasses:
    """Classes and their members."""

    def test_heritage(self, result):
        """Test extends and implements."""
        cls = result.classes[0]

        assert cls.name == "UserController"
        assert cls.extends == "Controller"
        assert cls.implements == ["Auditable", "Countable"]

    def test_properties(self, result):
        """Test property declarations with visibility and type."""
        props = result.classes[0].properties

        assert [(p.name, p.type_annotation, p.visibility) for p in props] == [
            ("$table", "string", "private"),
            ("$hidden", None, "protected"),
        ]

    def test_interface_and_trait(self, run):
        """Test interfaces and traits are classes."""
        source = "<?php\ninterface Shape {}\ntrait Greets {}\n"

        assert [c.name for c in run(PHPExtractor(), source).classes] == ["Shape", "Greets"]


class TestImportsAndCalls:
    """Use clauses and calls."""

    def test_use_clauses(self, result):
        """Test use clauses become imports without the alias."""
        assert [(i.module, i.line) for i in result.imports] == [
            ("App\\Models\\User", 4),
            ("Illuminate\\Support\\Str", 5),
        ]

    def test_calls(self, result):
        """Test scoped, nullsafe, member and plain calls."""
        calls = [(c.callee, c.receiver, c.is_method_call) for c in result.calls]

        assert ("find", "User", True) in calls
        assert ("name", "$user", True) in calls
        assert ("load", "$this->repo", True) in calls
        assert ("strlen", None, False) in calls
        assert ("trim", None, False) in calls

    def test_call_attribution(self, result):
        """Test calls name their enclosing method or function."""
        callers = {c.callee: c.caller_function for c in result.calls}

        assert callers["find"] == "show"
        assert callers["trim"] == "helper"
