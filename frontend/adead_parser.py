#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import re
from dataclasses import dataclass
from typing import List, Optional, Union

from adead_ast import (
    Span, Program, Stmt, Block, WhileStmt, IfStmt, PrintStmt, LetStmt, AssignStmt, Param, FuncDef, ReturnStmt,
    ExprStmt, Expr, IntLiteral, FloatLiteral, StringLiteral, BoolLiteral, VarRef, UnaryOp, BinaryOp, CallExpr,
    IndexExpr, FieldAccessExpr, ParenExpr, ArrayLiteral, FieldInit, StructLiteral)
from adead_lexer import TokenKind, Token, Lexer
from adead_string_escape import decode_string_token


# ==========================
# Parser
# ==========================

# Binary operators, lowest to highest binding; all left-associative.
BINARY_PRECEDENCE = {
    TokenKind.OROR: 1,
    TokenKind.ANDAND: 2,
    TokenKind.EQEQ: 3,
    TokenKind.NE: 3,
    TokenKind.LT: 3,
    TokenKind.LE: 3,
    TokenKind.GT: 3,
    TokenKind.GE: 3,
    TokenKind.PLUS: 4,
    TokenKind.MINUS: 4,
    TokenKind.STAR: 5,
    TokenKind.SLASH: 5,
    TokenKind.MODULO: 5,
}

# Higher levels are encoded by the call structure, tightest last:
#   6 prefix ! -           (_parse_unary_expr)
#   7 postfix a[i] a.f     (_parse_postfix_expr)
#   8 call f(...)          (_parse_postfix_expr)
#   9 struct literal       (_parse_primary_expr, only when allow_struct)
#  10 while/if body '{'    (conditions are parsed with allow_struct=False)

EXPR_START_KINDS = frozenset({
    TokenKind.IDENT,
    TokenKind.INT,
    TokenKind.FLOAT,
    TokenKind.STRING,
    TokenKind.TRUE,
    TokenKind.FALSE,
    TokenKind.LPAREN,
    TokenKind.LBRACKET,
    TokenKind.BANG,
    TokenKind.MINUS,
})

_CODE_RE = re.compile(r"^\[([A-Z]+-\d{4})\]")


@dataclass
class ParseError(Exception):
    message: str
    token: Optional[Token] = None
    filename: Optional[str] = None

    @property
    def code(self) -> Optional[str]:
        """The stable diagnostic code (e.g. 'PAR-0091'), if the message carries one."""
        m = _CODE_RE.match(self.message)
        return m.group(1) if m else None

    @property
    def line(self) -> Optional[int]:
        return self.token.line if self.token is not None else None

    @property
    def column(self) -> Optional[int]:
        return self.token.column if self.token is not None else None

    @property
    def offset(self) -> Optional[int]:
        return self.token.offset if self.token is not None else None

    @property
    def at_end(self) -> bool:
        """True when the parse failed because the input ended too early."""
        return self.token is not None and self.token.kind is TokenKind.EOF

    def __str__(self) -> str:
        if self.token is None:
            return self.message
        return f"{self.token.line}:{self.token.column}: {self.message}"


class Parser:
    def __init__(self, tokens: List[Token], filename: Optional[str] = None) -> None:
        self.tokens = tokens
        self.index = 0
        self.filename = filename

    @classmethod
    def from_source(cls, source: str, filename: Optional[str] = None) -> "Parser":
        lexer = Lexer.from_source(source, filename or "<input>")
        tokens = lexer.tokenize()
        return cls(tokens, filename)

    # --- token utilities ---

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _peek_at(self, distance: int) -> Token:
        idx = min(self.index + distance, len(self.tokens) - 1)
        return self.tokens[idx]

    def _last(self) -> Token:
        return self.tokens[self.index - 1 if self.index > 0 else 0]

    def _at_end(self) -> bool:
        return self._peek().kind is TokenKind.EOF

    def _advance(self) -> Token:
        tok = self._peek()
        if not self._at_end():
            self.index += 1
        return tok

    def _check(self, kind: TokenKind) -> bool:
        return self._peek().kind is kind

    def _match(self, *kinds: TokenKind) -> bool:
        if self._peek().kind in kinds:
            self._advance()
            return True
        return False

    def _expect(self, kind: TokenKind, msg: str) -> Token:
        if not self._check(kind):
            raise ParseError(f"{msg}, got {self._peek()} instead", self._peek(), self.filename)
        return self._advance()

    def _can_start_expr(self) -> bool:
        return self._peek().kind in EXPR_START_KINDS

    def _span_start(self) -> Span:
        here = self._peek()
        return Span(here.line, here.column, here.line, here.column, here.offset, here.offset)

    def _extend_span(self, start: Span) -> Span:
        end_line, end_column, end_offset = self._last().end()
        return Span(
            start.start_line,
            start.start_column,
            end_line,
            end_column,
            start.start_offset,
            end_offset,
        )

    # --- entry point ---

    def parse_program(self, filename: Optional[str] = None) -> Program:
        if filename is not None:
            self.filename = filename

        start = self._span_start()
        stmts: List[Stmt] = []
        while not self._at_end():
            stmts.append(self._parse_stmt())
        return Program(stmts, span=self._extend_span(start), filename=self.filename)

    # --- blocks and statements ---

    def _parse_block(self) -> Block:
        start = self._span_start()
        self._expect(TokenKind.LBRACE, "[PAR-0090] expected '{' to start block")
        stmts: List[Stmt] = []
        while not self._check(TokenKind.RBRACE) and not self._at_end():
            stmts.append(self._parse_stmt())
        self._expect(TokenKind.RBRACE, "[PAR-0091] expected '}' after block")
        return Block(stmts, span=self._extend_span(start))

    def _parse_stmt(self) -> Stmt:
        if self._check(TokenKind.WHILE):
            return self._parse_while_stmt()
        elif self._check(TokenKind.IF):
            return self._parse_if_stmt()
        elif self._check(TokenKind.PRINT):
            return self._parse_print_stmt()
        elif self._check(TokenKind.LET):
            return self._parse_let_stmt()
        elif self._check(TokenKind.FN) or self._check(TokenKind.PUB):
            return self._parse_func_def()
        elif self._check(TokenKind.RETURN):
            return self._parse_return_stmt()

        # `name = value`, but not `name == value`
        if self._check(TokenKind.IDENT) and self._peek_at(1).kind is TokenKind.EQ:
            return self._parse_assign_stmt()

        if not self._can_start_expr():
            raise ParseError(f"[PAR-0020] unexpected token at start of statement: {self._peek()}",
                             self._peek(), self.filename)

        start = self._span_start()
        expr = self._parse_expr()
        return ExprStmt(expr, span=self._extend_span(start))

    def _parse_while_stmt(self) -> WhileStmt:
        start = self._span_start()
        self._expect(TokenKind.WHILE, "[PAR-0130] expected 'while'")
        cond = self._parse_expr(allow_struct=False)
        body = self._parse_block()
        return WhileStmt(cond, body, span=self._extend_span(start))

    def _parse_if_stmt(self) -> IfStmt:
        start = self._span_start()
        self._expect(TokenKind.IF, "[PAR-0120] expected 'if'")
        cond = self._parse_expr(allow_struct=False)
        then_block = self._parse_block()
        else_branch: Optional[Union[Block, IfStmt]] = None
        if self._match(TokenKind.ELSE):
            if self._check(TokenKind.LBRACE):
                else_branch = self._parse_block()
            elif self._check(TokenKind.IF):
                else_branch = self._parse_if_stmt()
            else:
                raise ParseError(f"[PAR-0124] expected '{{' or 'if' after 'else', got {self._peek()} instead",
                                 self._peek(), self.filename)
        return IfStmt(cond, then_block, else_branch, span=self._extend_span(start))

    def _parse_print_stmt(self) -> PrintStmt:
        start = self._span_start()
        self._expect(TokenKind.PRINT, "[PAR-0140] expected 'print'")
        value = self._parse_expr()
        return PrintStmt(value, span=self._extend_span(start))

    def _parse_let_stmt(self) -> LetStmt:
        start = self._span_start()
        self._expect(TokenKind.LET, "[PAR-0110] expected 'let'")
        is_mutable = self._match(TokenKind.MUT)
        name_tok = self._expect(TokenKind.IDENT, "[PAR-0111] expected variable name")
        self._expect(TokenKind.EQ, "[PAR-0112] expected '=' in let binding")
        value = self._parse_expr()
        return LetStmt(name_tok.text, is_mutable, value, span=self._extend_span(start))

    def _parse_assign_stmt(self) -> AssignStmt:
        start = self._span_start()
        target_tok = self._expect(TokenKind.IDENT, "[PAR-0100] expected assignment target")
        self._expect(TokenKind.EQ, "[PAR-0101] expected '=' in assignment")
        value = self._parse_expr()
        return AssignStmt(target_tok.text, value, span=self._extend_span(start))

    def _parse_func_def(self) -> FuncDef:
        start = self._span_start()
        is_public = self._match(TokenKind.PUB)
        self._expect(TokenKind.FN, "[PAR-0040] expected 'fn'")
        name_tok = self._expect(TokenKind.IDENT, "[PAR-0041] expected function name")
        self._expect(TokenKind.LPAREN, "[PAR-0042] expected '(' after function name")
        params: List[Param] = []
        if not self._check(TokenKind.RPAREN):
            while True:
                param_start = self._span_start()
                param_tok = self._expect(TokenKind.IDENT, "[PAR-0043] expected parameter name")
                params.append(Param(param_tok.text, span=self._extend_span(param_start)))
                if not self._match(TokenKind.COMMA):
                    break
        self._expect(TokenKind.RPAREN, "[PAR-0045] expected ')' after parameters")
        body = self._parse_block()
        return FuncDef(name_tok.text, params, body, is_public=is_public, span=self._extend_span(start))

    def _parse_return_stmt(self) -> ReturnStmt:
        start = self._span_start()
        self._expect(TokenKind.RETURN, "[PAR-0150] expected 'return'")
        # no separators: a value follows only if the next token can begin an expression
        if not self._can_start_expr():
            return ReturnStmt(None, span=self._extend_span(start))
        value = self._parse_expr()
        return ReturnStmt(value, span=self._extend_span(start))

    # --- expressions (precedence climbing) ---

    def _parse_expr(self, min_prec: int = 1, allow_struct: bool = True) -> Expr:
        """
        Parse a binary expression whose operators all bind at least `min_prec`.

        `allow_struct` is False only while parsing a `while`/`if` condition: there
        the `{` after an identifier opens the statement body, not a struct literal.
        It is passed on to operands and reset to True inside brackets.
        """
        start = self._span_start()
        expr = self._parse_unary_expr(allow_struct)
        while True:
            op_tok = self._peek()
            prec = BINARY_PRECEDENCE.get(op_tok.kind)
            if prec is None or prec < min_prec:
                break
            self._advance()
            right = self._parse_expr(prec + 1, allow_struct)
            expr = BinaryOp(op_tok.text, expr, right, span=self._extend_span(start))
        return expr

    def _parse_unary_expr(self, allow_struct: bool) -> Expr:
        start = self._span_start()
        # prefix unary operators: !, -
        if self._match(TokenKind.BANG, TokenKind.MINUS):
            op_tok = self._last()
            operand = self._parse_unary_expr(allow_struct)
            return UnaryOp(op_tok.text, operand, span=self._extend_span(start))
        return self._parse_postfix_expr(allow_struct)

    def _parse_postfix_expr(self, allow_struct: bool) -> Expr:
        start = self._span_start()
        expr = self._parse_primary_expr(allow_struct)
        while True:
            if self._match(TokenKind.LPAREN):
                # call
                args: List[Expr] = []
                if not self._check(TokenKind.RPAREN):
                    while True:
                        args.append(self._parse_expr())
                        if not self._match(TokenKind.COMMA):
                            break
                self._expect(TokenKind.RPAREN, "[PAR-0210] expected ')' after arguments")
                expr = CallExpr(expr, args, span=self._extend_span(start))
                continue
            if self._match(TokenKind.LBRACKET):
                index = self._parse_expr()
                self._expect(TokenKind.RBRACKET, "[PAR-0211] expected ']' after index")
                expr = IndexExpr(expr, index, span=self._extend_span(start))
                continue
            if self._match(TokenKind.DOT):
                field_tok = self._expect(TokenKind.IDENT, "[PAR-0212] expected field name after '.'")
                expr = FieldAccessExpr(expr, field_tok.text, span=self._extend_span(start))
                continue
            break
        return expr

    def _parse_primary_expr(self, allow_struct: bool) -> Expr:
        start = self._span_start()
        tok = self._peek()

        # Literals
        if self._match(TokenKind.INT):
            return IntLiteral(int(tok.text), span=self._extend_span(start))
        if self._match(TokenKind.FLOAT):
            return FloatLiteral(float(tok.text), span=self._extend_span(start))
        if self._match(TokenKind.STRING):
            return StringLiteral(decode_string_token(tok.text[1:-1]), span=self._extend_span(start))
        if self._match(TokenKind.TRUE):
            return BoolLiteral(True, span=self._extend_span(start))
        if self._match(TokenKind.FALSE):
            return BoolLiteral(False, span=self._extend_span(start))

        # Identifier, or a struct literal where one is allowed
        if self._match(TokenKind.IDENT):
            if allow_struct and self._check(TokenKind.LBRACE):
                return self._parse_struct_literal(tok, start)
            return VarRef(tok.text, span=self._extend_span(start))

        # Parenthesized expression
        if self._match(TokenKind.LPAREN):
            inner = self._parse_expr()
            self._expect(TokenKind.RPAREN, "[PAR-0224] expected ')' after expression")
            return ParenExpr(inner, span=self._extend_span(start))

        # Array literal
        if self._match(TokenKind.LBRACKET):
            elements: List[Expr] = []
            if not self._check(TokenKind.RBRACKET):
                while True:
                    elements.append(self._parse_expr())
                    if not self._match(TokenKind.COMMA):
                        break
            self._expect(TokenKind.RBRACKET, "[PAR-0220] expected ']' after array elements")
            return ArrayLiteral(elements, span=self._extend_span(start))

        raise ParseError(f"[PAR-0225] unexpected token in expression: {tok}", tok, self.filename)

    def _parse_struct_literal(self, name_tok: Token, start: Span) -> StructLiteral:
        self._expect(TokenKind.LBRACE, "[PAR-0230] expected '{' after struct name")
        fields: List[FieldInit] = []
        if not self._check(TokenKind.RBRACE):
            while True:
                field_start = self._span_start()
                field_tok = self._expect(TokenKind.IDENT, "[PAR-0221] expected field name in struct literal")
                self._expect(TokenKind.COLON, "[PAR-0222] expected ':' after field name")
                value = self._parse_expr()
                fields.append(FieldInit(field_tok.text, value, span=self._extend_span(field_start)))
                if not self._match(TokenKind.COMMA):
                    break
        self._expect(TokenKind.RBRACE, "[PAR-0223] expected '}' after struct literal fields")
        return StructLiteral(name_tok.text, fields, span=self._extend_span(start))
