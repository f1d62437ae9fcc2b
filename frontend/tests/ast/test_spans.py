#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from adead_ast import Span, FuncDef, PrintStmt, ReturnStmt, StringLiteral
from adead_parser import Parser


SRC = """fn add(a, b) {
    return a + b
}
print add(1, 2)
"""


def parse_program(src: str):
    return Parser.from_source(src).parse_program()


def test_function_definition_spans():
    program = parse_program(SRC)
    fn = program.stmts[0]

    assert isinstance(fn, FuncDef)
    assert fn.span == Span(1, 1, 3, 2)
    assert fn.body.span == Span(1, 14, 3, 2)
    assert [p.span for p in fn.params] == [Span(1, 8, 1, 9), Span(1, 11, 1, 12)]

    ret = fn.body.stmts[0]
    assert isinstance(ret, ReturnStmt)
    assert ret.span == Span(2, 5, 2, 17)
    assert ret.value.span == Span(2, 12, 2, 17)


def test_statement_and_call_spans():
    program = parse_program(SRC)
    stmt = program.stmts[1]

    assert isinstance(stmt, PrintStmt)
    assert stmt.span == Span(4, 1, 4, 16)
    assert stmt.value.span == Span(4, 7, 4, 16)
    assert stmt.value.args[1].span == Span(4, 14, 4, 15)


def test_spans_carry_byte_offsets():
    program = parse_program(SRC)
    stmt = program.stmts[1]

    assert stmt.span.start_offset == 34
    assert stmt.span.end_offset == 49


def test_program_span_covers_all_statements():
    program = parse_program(SRC)

    assert program.span == Span(1, 1, 4, 16)


def test_multiline_string_span():
    program = parse_program('print "a\nb"')
    stmt = program.stmts[0]

    assert isinstance(stmt.value, StringLiteral)
    assert stmt.value.value == "a\nb"
    assert stmt.value.span == Span(1, 7, 2, 3)
    assert stmt.span == Span(1, 1, 2, 3)


def test_span_equality_ignores_offsets():
    assert Span(1, 1, 1, 5, 0, 4) == Span(1, 1, 1, 5, 10, 14)
    assert Span(1, 1, 1, 5) != Span(1, 1, 1, 6)


def test_node_equality_ignores_spans():
    first = parse_program("print 1")
    second = parse_program("\n\n   print    1")

    assert first == second
    assert first.stmts[0].span != second.stmts[0].span
