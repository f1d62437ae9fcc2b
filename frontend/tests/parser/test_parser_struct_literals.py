#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Struct literals versus statement bodies: inside a `while`/`if` condition an
identifier followed by `{` is a plain variable and the brace opens the body,
unless the literal sits inside parentheses, brackets or call arguments.
"""

import pytest

from adead_ast import (
    Block, WhileStmt, IfStmt, PrintStmt, LetStmt, AssignStmt, ExprStmt, IntLiteral, VarRef, UnaryOp, BinaryOp,
    CallExpr, IndexExpr, FieldAccessExpr, ParenExpr, ArrayLiteral, FieldInit, StructLiteral)
from adead_parser import ParseError
from conftest import only_stmt


def point(x: int, y: int) -> StructLiteral:
    return StructLiteral("Point", [FieldInit("x", IntLiteral(x)), FieldInit("y", IntLiteral(y))])


def test_struct_literal_in_let(parse_src):
    stmt = only_stmt(parse_src("let p = Point { x: 1, y: 2 }"))

    assert stmt == LetStmt("p", False, point(1, 2))


def test_empty_struct_literal(parse_src):
    stmt = only_stmt(parse_src("print Unit {}"))

    assert stmt == PrintStmt(StructLiteral("Unit", []))


def test_struct_literal_as_expression_statement(parse_src):
    stmt = only_stmt(parse_src("Point { x: 1 }"))

    assert stmt == ExprStmt(StructLiteral("Point", [FieldInit("x", IntLiteral(1))]))


def test_nested_struct_literals(parse_src):
    stmt = only_stmt(parse_src("let l = Line { a: Point { x: 1, y: 2 }, b: Point { x: 3, y: 4 } }"))

    assert stmt.value == StructLiteral("Line", [FieldInit("a", point(1, 2)), FieldInit("b", point(3, 4))])


def test_duplicate_fields_are_kept(parse_src):
    stmt = only_stmt(parse_src("let p = P { x: 1, x: 2 }"))

    assert [f.name for f in stmt.value.fields] == ["x", "x"]


def test_while_identifier_condition_then_body(parse_src):
    stmt = only_stmt(parse_src("while x { print 1 }"))

    assert stmt == WhileStmt(VarRef("x"), Block([PrintStmt(IntLiteral(1))]))


def test_while_comparison_condition_then_body(parse_src):
    stmt = only_stmt(parse_src("while i <= max { i = i + 1 }"))

    assert stmt == WhileStmt(
        BinaryOp("<=", VarRef("i"), VarRef("max")),
        Block([AssignStmt("i", BinaryOp("+", VarRef("i"), IntLiteral(1)))]),
    )


def test_while_negated_condition(parse_src):
    stmt = only_stmt(parse_src("while !done {}"))

    assert stmt == WhileStmt(UnaryOp("!", VarRef("done")), Block([]))


def test_if_equality_with_identifier_then_body(parse_src):
    stmt = only_stmt(parse_src("if p == Origin {}"))

    assert stmt == IfStmt(BinaryOp("==", VarRef("p"), VarRef("Origin")), Block([]), None)


def test_struct_literal_allowed_in_call_args_inside_condition(parse_src):
    stmt = only_stmt(parse_src("if f(Point { x: 1, y: 2 }) { print 1 }"))

    assert isinstance(stmt, IfStmt)
    assert stmt.cond == CallExpr(VarRef("f"), [point(1, 2)])
    assert stmt.then_block == Block([PrintStmt(IntLiteral(1))])


def test_struct_literal_allowed_in_parens_inside_condition(parse_src):
    stmt = only_stmt(parse_src("if (Point { x: 1, y: 2 }).x == 1 { print 1 }"))

    assert stmt.cond == BinaryOp("==", FieldAccessExpr(ParenExpr(point(1, 2)), "x"), IntLiteral(1))


def test_struct_literal_allowed_in_index_and_array_inside_condition(parse_src):
    stmt = only_stmt(parse_src("while xs[Point { x: 1, y: 2 }.x] { }"))
    assert stmt.cond == IndexExpr(VarRef("xs"), FieldAccessExpr(point(1, 2), "x"))

    stmt = only_stmt(parse_src("if [Point { x: 1, y: 2 }] {}"))
    assert stmt.cond == ArrayLiteral([point(1, 2)])


def test_struct_literal_allowed_in_field_value_inside_call_inside_condition(parse_src):
    stmt = only_stmt(parse_src("if ok(Wrap { inner: Point { x: 1, y: 2 } }) {}"))

    assert stmt.cond == CallExpr(VarRef("ok"), [StructLiteral("Wrap", [FieldInit("inner", point(1, 2))])])


def test_bare_struct_literal_in_condition_is_rejected(parse_src):
    with pytest.raises(ParseError) as excinfo:
        parse_src("while Point { x: 1 } {}")

    # `Point` is the condition; the body then fails at ':'
    assert excinfo.value.code == "PAR-0020"
    assert (excinfo.value.line, excinfo.value.column) == (1, 16)
