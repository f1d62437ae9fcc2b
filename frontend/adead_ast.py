#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass, field
from typing import Optional, List, Union


# ==========================
# AST definitions
# ==========================


@dataclass
class Span:
    start_line: int
    start_column: int
    end_line: int
    end_column: int  # exclusive
    start_offset: int = field(default=0, compare=False)  # UTF-8 byte offsets
    end_offset: int = field(default=0, compare=False)


@dataclass
class Node:
    span: Optional[Span] = field(default=None, repr=False, compare=False, kw_only=True)


# --- statements ---

@dataclass
class Stmt(Node):
    pass


@dataclass
class Block(Node):
    stmts: List[Stmt]


@dataclass
class Program(Node):
    stmts: List[Stmt]
    filename: Optional[str] = field(default=None, repr=False, compare=False, kw_only=True)


@dataclass
class WhileStmt(Stmt):
    cond: "Expr"
    body: Block


@dataclass
class IfStmt(Stmt):
    cond: "Expr"
    then_block: Block
    else_branch: Optional[Union[Block, "IfStmt"]]  # `else { ... }` or `else if ...`


@dataclass
class PrintStmt(Stmt):
    value: "Expr"


@dataclass
class LetStmt(Stmt):
    name: str
    is_mutable: bool
    value: "Expr"


@dataclass
class AssignStmt(Stmt):
    target: str
    value: "Expr"


@dataclass
class Param(Node):
    name: str


@dataclass
class FuncDef(Stmt):
    name: str
    params: List[Param]  # declaration order, duplicates kept
    body: Block
    is_public: bool = False


@dataclass
class ReturnStmt(Stmt):
    value: Optional["Expr"]


@dataclass
class ExprStmt(Stmt):
    expr: "Expr"


# --- expressions ---

class Expr(Node):
    pass


@dataclass
class IntLiteral(Expr):
    value: int


@dataclass
class FloatLiteral(Expr):
    value: float


@dataclass
class StringLiteral(Expr):
    value: str  # escapes resolved


@dataclass
class BoolLiteral(Expr):
    value: bool


@dataclass
class VarRef(Expr):
    name: str


@dataclass
class UnaryOp(Expr):
    op: str
    operand: Expr


@dataclass
class BinaryOp(Expr):
    op: str
    left: Expr
    right: Expr


@dataclass
class CallExpr(Expr):
    callee: Expr
    args: List[Expr]


@dataclass
class IndexExpr(Expr):
    base: Expr
    index: Expr


@dataclass
class FieldAccessExpr(Expr):
    base: Expr
    field: str


@dataclass
class ParenExpr(Expr):
    inner: Expr


@dataclass
class ArrayLiteral(Expr):
    elements: List[Expr]


@dataclass
class FieldInit(Node):
    name: str
    value: Expr


@dataclass
class StructLiteral(Expr):
    type_name: str
    fields: List[FieldInit]  # source order, duplicates kept
