#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from adead_ast_printer import AstDumper, format_program, format_node
from adead_ast import IntLiteral
from adead_parser import Parser


def dump(src: str, **kwargs) -> str:
    return format_program(Parser.from_source(src).parse_program(), **kwargs)


def test_program_dump_with_spans():
    assert dump("let x = 1 + 2") == "\n".join([
        "Program @1:1-1:14",
        "  stmts[0]: LetStmt(name='x', is_mutable=False) @1:1-1:14",
        "    value: BinaryOp(op='+') @1:9-1:14",
        "      left: IntLiteral(value=1) @1:9-1:10",
        "      right: IntLiteral(value=2) @1:13-1:14",
    ])


def test_dump_without_spans():
    assert dump("print [1]", show_spans=False) == "\n".join([
        "Program",
        "  stmts[0]: PrintStmt",
        "    value: ArrayLiteral",
        "      elements[0]: IntLiteral(value=1)",
    ])


def test_dump_shows_empty_lists_and_missing_children():
    text = dump("fn f() { return }")

    assert "  stmts[0]: FuncDef(name='f', is_public=False) @1:1-1:18" in text
    assert "    params: []" in text
    assert "      stmts[0]: ReturnStmt @1:10-1:16" in text
    assert "        value: None" in text


def test_dump_of_if_without_else():
    text = dump("if a {}", show_spans=False)

    assert text.splitlines()[-1] == "    else_branch: None"


def test_dump_of_struct_literal_lists_fields():
    text = dump("print P { x: 1 }")

    assert "StructLiteral(type_name='P') @1:7-1:17" in text
    assert "fields[0]: FieldInit(name='x') @1:11-1:15" in text


def test_node_without_span():
    assert format_node(IntLiteral(3), indent=1) == ["  IntLiteral(value=3)"]


def test_custom_indent():
    lines = AstDumper(indent="....", show_spans=False).dump(Parser.from_source("print 1").parse_program())

    assert lines == ["Program", "....stmts[0]: PrintStmt", "........value: IntLiteral(value=1)"]
