"""Unit tests for the Objective-C, Zig and SQL extractors."""

import pytest

from semantica_core.analysis.extractors.objc import ObjCExtractor, parse_selector_parameters
from semantica_core.analysis.extractors.sql import SQLExtractor
from semantica_core.analysis.extractors.zig import ZigExtractor, parse_zig_parameters

OBJC = """\
#import <Foundation/Foundation.h>
#import "Greeter.h"
@import UIKit;

@protocol Drawable;
@protocol Shape <NSObject>
- (double)area;
@end

@interface Greeter : NSObject <Shape, NSCopying>
- (NSString *)greet:(NSString *)name times:(int)count;
+ (instancetype)shared;
@end

@implementation Greeter
- (NSString *)greet:(NSString *)name times:(int)count {
    return name;
}
@end

@implementation Helper
@end
"""

ZIG = """\
const std = @import("std");
const c = @cImport({
    @cInclude("stdio.h");
});

pub const Point = struct {
    x: i32,
};

const Color = enum { red, green };

pub const max_size: usize = 1024;
var counter: u32 = 0;

pub fn add(a: i32, b: i32) i32 {
    return a + b;
}

fn swap(comptime T: type, noalias x: *T) void {}

export fn init() void {}
"""

SQL = """\
CREATE TABLE IF NOT EXISTS users (
    id INT PRIMARY KEY,
    org_id INT REFERENCES orgs(id) ON UPDATE CASCADE
);
CREATE UNIQUE INDEX idx_users_email ON users(email);
CREATE OR REPLACE VIEW active_users AS SELECT * FROM users;
CREATE PROCEDURE cleanup() BEGIN DELETE FROM sessions; END;
CREATE TRIGGER audit BEFORE UPDATE ON users FOR EACH ROW INSERT INTO audit_log VALUES (1);

INSERT INTO "users" (id) VALUES (1);
UPDATE users SET id = 2;
"""


class TestObjCExtractor:
    """Methods, interfaces, implementations, protocols and imports."""

    @pytest.fixture
    def result(self, run):
        return run(ObjCExtractor(), OBJC)

    def test_methods(self, result):
        """Test declarations and definitions are both reported."""
        assert [(f.name, f.line_start, f.return_type, f.is_static) for f in result.functions] == [
            ("area", 7, "double", False),
            ("greet", 11, "NSString *", False),
            ("shared", 12, "instancetype", True),
            ("greet", 16, "NSString *", False),
        ]

    def test_selector_parameters(self, result):
        """Test each selector part contributes a typed parameter."""
        greet = result.functions[1]

        assert [(p.name, p.type_annotation) for p in greet.parameters] == [
            ("name", "NSString *"),
            ("count", "int"),
        ]

    def test_classes(self, result):
        """Test implementations of declared interfaces are not repeated."""
        assert [(c.name, c.line_start, c.extends, c.implements) for c in result.classes] == [
            ("Greeter", 10, "NSObject", ["Shape", "NSCopying"]),
            ("Helper", 21, None, []),
            ("Shape", 6, None, []),
        ]

    def test_forward_protocol_declaration_skipped(self, result):
        """Test @protocol Name; is not a definition."""
        names = [c.name for c in result.classes]

        assert "Drawable" not in names
        assert "Drawabl" not in names

    def test_imports(self, result):
        """Test #import and @import in source order."""
        assert [(i.module, i.line) for i in result.imports] == [
            ("Foundation/Foundation.h", 1),
            ("Greeter.h", 2),
            ("UIKit", 3),
        ]

    def test_parse_selector_without_parameters(self):
        """Test a unary selector has no parameters."""
        assert parse_selector_parameters("") == []


class TestZigExtractor:
    """Functions, containers, imports and declarations."""

    @pytest.fixture
    def result(self, run):
        return run(ZigExtractor(), ZIG)

    def test_functions(self, result):
        """Test pub controls visibility and export is accepted."""
        assert [(f.name, f.line_start, f.visibility, f.return_type) for f in result.functions] == [
            ("add", 15, "public", "i32"),
            ("swap", 19, "private", "void"),
            ("init", 21, "private", "void"),
        ]

    def test_parameter_qualifiers_stripped(self, result):
        """Test comptime and noalias are not part of the name."""
        swap = result.functions[1]

        assert [(p.name, p.type_annotation) for p in swap.parameters] == [("T", "type"), ("x", "*T")]

    def test_containers(self, result):
        """Test struct and enum constants are classes."""
        assert [(c.name, c.line_start) for c in result.classes] == [("Point", 6), ("Color", 10)]

    def test_imports(self, result):
        """Test @import and @cImport in source order."""
        assert [(i.module, i.line) for i in result.imports] == [("std", 1), ("<c-import>", 2)]

    def test_symbols(self, result):
        """Test type constants are not repeated as symbols."""
        assert [(s.name, s.kind, s.line) for s in result.symbols] == [
            ("std", "constant", 1),
            ("c", "constant", 2),
            ("max_size", "constant", 12),
            ("counter", "variable", 13),
        ]

    def test_parse_parameters(self):
        """Test a parameter without a type."""
        assert [p.name for p in parse_zig_parameters("a: i32, _")] == ["a", "_"]


class TestSQLExtractor:
    """DDL symbols and DML calls."""

    @pytest.fixture
    def result(self, run):
        return run(SQLExtractor(), SQL)

    def test_ddl_symbols_in_source_order(self, result):
        """Test each CREATE form and its kind."""
        assert [(s.name, s.kind, s.line) for s in result.symbols] == [
            ("users", "table", 1),
            ("idx_users_email", "index", 5),
            ("active_users", "view", 6),
            ("cleanup", "function", 7),
            ("audit", "trigger", 8),
        ]

    def test_dml_calls(self, result):
        """Test clause-level UPDATE keywords are not statements."""
        assert [(c.callee, c.line, c.receiver) for c in result.calls] == [
            ("SELECT", 6, None),
            ("DELETE", 7, "sessions"),
            ("INSERT", 8, "audit_log"),
            ("INSERT", 10, "users"),
            ("UPDATE", 11, "users"),
        ]

    def test_case_insensitive(self, run):
        """Test lowercase keywords."""
        result = run(SQLExtractor(), "create view v as select 1;\n")

        assert [(s.name, s.kind) for s in result.symbols] == [("v", "view")]
        assert [c.callee for c in result.calls] == ["SELECT"]

    def test_no_functions_or_classes(self, result):
        """Test SQL reports only symbols and calls."""
        assert result.functions == []
        assert result.classes == []
