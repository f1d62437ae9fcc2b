#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

"""
Source formatter: turns a parsed Program back into Adead source text.

The output re-parses to a structurally equal Program. Parentheses are
emitted exactly where the tree has a ParenExpr, so operator grouping is
never re-derived here.
"""

import math
from typing import List, Optional

from adead_ast import (
    Node, Program, Stmt, Block, WhileStmt, IfStmt, PrintStmt, LetStmt, AssignStmt, FuncDef, ReturnStmt, ExprStmt,
    Expr, IntLiteral, FloatLiteral, StringLiteral, BoolLiteral, VarRef, UnaryOp, BinaryOp, CallExpr, IndexExpr,
    FieldAccessExpr, ParenExpr, ArrayLiteral, StructLiteral)
from adead_internal_error import InternalFrontendError
from adead_string_escape import encode_string_body


def format_float(value: float) -> str:
    """Render a float so the lexer reads it back as a FLOAT token of the same value."""
    if not math.isfinite(value):
        raise InternalFrontendError(f"[ICE-0020] float literal {value!r} has no source form")
    text = repr(value)
    if "e" in text:
        mantissa, exponent = text.split("e")
        if "." not in mantissa:
            mantissa += ".0"
        return f"{mantissa}e{exponent}"
    return text


class SourceFormatter:
    def __init__(self, indent: str = "    ", filename: Optional[str] = None):
        self.indent = indent
        self.filename = filename

    def _ice(self, node: Node) -> InternalFrontendError:
        return InternalFrontendError.at_node(
            f"[ICE-0010] cannot format node of type {type(node).__name__}", node, self.filename)

    # --- statements ---

    def format_program(self, program: Program) -> str:
        if self.filename is None:
            self.filename = program.filename
        lines: List[str] = []
        for stmt in program.stmts:
            lines.extend(self.format_stmt(stmt, 0))
        return "\n".join(lines) + "\n" if lines else ""

    def format_stmt(self, stmt: Stmt, depth: int) -> List[str]:
        ind = self.indent * depth

        if isinstance(stmt, WhileStmt):
            return self._with_block(f"{ind}while {self.format_expr(stmt.cond)} ", stmt.body, depth)

        if isinstance(stmt, IfStmt):
            return self._format_if(stmt, f"{ind}if ", depth)

        if isinstance(stmt, PrintStmt):
            return [f"{ind}print {self.format_expr(stmt.value)}"]

        if isinstance(stmt, LetStmt):
            mut = "mut " if stmt.is_mutable else ""
            return [f"{ind}let {mut}{stmt.name} = {self.format_expr(stmt.value)}"]

        if isinstance(stmt, AssignStmt):
            return [f"{ind}{stmt.target} = {self.format_expr(stmt.value)}"]

        if isinstance(stmt, FuncDef):
            pub = "pub " if stmt.is_public else ""
            params = ", ".join(p.name for p in stmt.params)
            return self._with_block(f"{ind}{pub}fn {stmt.name}({params}) ", stmt.body, depth)

        if isinstance(stmt, ReturnStmt):
            if stmt.value is None:
                return [f"{ind}return"]
            return [f"{ind}return {self.format_expr(stmt.value)}"]

        if isinstance(stmt, ExprStmt):
            return [f"{ind}{self.format_expr(stmt.expr)}"]

        raise self._ice(stmt)

    def _format_if(self, stmt: IfStmt, head: str, depth: int) -> List[str]:
        lines = self._with_block(f"{head}{self.format_expr(stmt.cond)} ", stmt.then_block, depth)
        branch = stmt.else_branch
        if branch is None:
            return lines
        closing = lines.pop()
        if isinstance(branch, Block):
            lines.extend(self._with_block(f"{closing} else ", branch, depth))
        elif isinstance(branch, IfStmt):
            lines.extend(self._format_if(branch, f"{closing} else if ", depth))
        else:
            raise self._ice(branch)
        return lines

    def _with_block(self, head: str, block: Block, depth: int) -> List[str]:
        """Lines for `head {`, the indented statements and the closing `}`."""
        ind = self.indent * depth
        if not block.stmts:
            return [f"{head}{{}}"]
        lines = [f"{head}{{"]
        for stmt in block.stmts:
            lines.extend(self.format_stmt(stmt, depth + 1))
        lines.append(f"{ind}}}")
        return lines

    # --- expressions ---

    def format_expr(self, expr: Expr) -> str:
        if isinstance(expr, IntLiteral):
            return str(expr.value)
        if isinstance(expr, FloatLiteral):
            return format_float(expr.value)
        if isinstance(expr, StringLiteral):
            return f'"{encode_string_body(expr.value)}"'
        if isinstance(expr, BoolLiteral):
            return "true" if expr.value else "false"
        if isinstance(expr, VarRef):
            return expr.name
        if isinstance(expr, UnaryOp):
            return f"{expr.op}{self.format_expr(expr.operand)}"
        if isinstance(expr, BinaryOp):
            return f"{self.format_expr(expr.left)} {expr.op} {self.format_expr(expr.right)}"
        if isinstance(expr, CallExpr):
            args = ", ".join(self.format_expr(a) for a in expr.args)
            return f"{self.format_expr(expr.callee)}({args})"
        if isinstance(expr, IndexExpr):
            return f"{self.format_expr(expr.base)}[{self.format_expr(expr.index)}]"
        if isinstance(expr, FieldAccessExpr):
            base = self.format_expr(expr.base)
            # `1.x` would lex as a malformed number
            if isinstance(expr.base, (IntLiteral, FloatLiteral)):
                base += " "
            return f"{base}.{expr.field}"
        if isinstance(expr, ParenExpr):
            return f"({self.format_expr(expr.inner)})"
        if isinstance(expr, ArrayLiteral):
            return "[" + ", ".join(self.format_expr(e) for e in expr.elements) + "]"
        if isinstance(expr, StructLiteral):
            if not expr.fields:
                return f"{expr.type_name} {{}}"
            inits = ", ".join(f"{f.name}: {self.format_expr(f.value)}" for f in expr.fields)
            return f"{expr.type_name} {{ {inits} }}"
        raise self._ice(expr)


def format_program(program: Program, indent: str = "    ") -> str:
    """
    Convenience: format a whole Program as source text.
    """
    return SourceFormatter(indent).format_program(program)
