#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple

from adead_string_escape import HEX_CHARS, SIMPLE_ESCAPES


# ==========================
# Tokens and lexer
# ==========================

class TokenKind(Enum):
    # Special
    EOF = auto()

    IDENT = auto()  # identifier, e.g. i, name, Point
    INT = auto()  # integer literal, e.g. 42
    FLOAT = auto()  # float literal, e.g. 1.5, 2., .5, 1.0e-3
    STRING = auto()  # string literal, e.g. "hello\n"

    # Keywords
    WHILE = auto()
    IF = auto()
    ELSE = auto()
    LET = auto()
    MUT = auto()
    FN = auto()
    RETURN = auto()
    PRINT = auto()
    PUB = auto()
    TRUE = auto()
    FALSE = auto()

    # Punctuation / operators
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    LPAREN = auto()  # (
    RPAREN = auto()  # )
    LBRACKET = auto()  # [
    RBRACKET = auto()  # ]
    COMMA = auto()  # ,
    COLON = auto()  # :
    DOT = auto()  # .
    EQ = auto()  # =
    PLUS = auto()  # +
    MINUS = auto()  # -
    STAR = auto()  # *
    SLASH = auto()  # /
    MODULO = auto()  # %
    LT = auto()  # <
    GT = auto()  # >
    LE = auto()  # <=
    GE = auto()  # >=
    EQEQ = auto()  # ==
    NE = auto()  # !=
    ANDAND = auto()  # &&
    OROR = auto()  # ||
    BANG = auto()  # !


KEYWORDS = {
    "while": TokenKind.WHILE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "let": TokenKind.LET,
    "mut": TokenKind.MUT,
    "fn": TokenKind.FN,
    "return": TokenKind.RETURN,
    "print": TokenKind.PRINT,
    "pub": TokenKind.PUB,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
}

_SINGLE_CHAR_TOKENS = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "%": TokenKind.MODULO,
}

INT_MAX = 2 ** 63 - 1

_CODE_RE = re.compile(r"^\[([A-Z]+-\d{4})\]")


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str  # exact source lexeme
    line: int
    column: int
    offset: int = 0  # UTF-8 byte offset of the first character

    def end(self) -> Tuple[int, int, int]:
        """Position just past this token as (line, column, offset)."""
        newlines = self.text.count("\n")
        if newlines:
            line = self.line + newlines
            column = len(self.text) - self.text.rfind("\n")
        else:
            line = self.line
            column = self.column + len(self.text)
        return line, column, self.offset + len(self.text.encode("utf-8"))

    def __repr__(self) -> str:
        return f"{self.text!r}" if self.kind != TokenKind.EOF else "end-of-input"


@dataclass
class LexerError(Exception):
    message: str
    filename: Optional[str]
    line: int
    column: int
    offset: int = 0

    @property
    def code(self) -> Optional[str]:
        """The stable diagnostic code (e.g. 'LEX-0010'), if the message carries one."""
        m = _CODE_RE.match(self.message)
        return m.group(1) if m else None

    def __str__(self) -> str:
        return f"{self.line}:{self.column}: {self.message}"


def _is_ident_start(c: str) -> bool:
    return c.isascii() and (c.isalpha() or c == "_")


def _is_ident_char(c: str) -> bool:
    return c.isascii() and (c.isalnum() or c == "_")


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_surrogate(c: str) -> bool:
    return "\ud800" <= c <= "\udfff"


class Lexer:
    def __init__(self, source: str, filename: str = "<input>") -> None:
        self.source = source
        self.filename = filename
        self.length = len(source)
        self.index = 0
        self.offset = 0
        self.line = 1
        self.column = 1

    @classmethod
    def from_source(cls, source: str, filename: str = "<input>") -> "Lexer":
        return cls(source, filename)

    # --- low-level char utilities ---

    def _at_end(self) -> bool:
        return self.index >= self.length

    def _peek(self) -> str:
        if self._at_end():
            return "\0"
        return self.source[self.index]

    def _peek_next(self) -> str:
        if self.index + 1 >= self.length:
            return "\0"
        return self.source[self.index + 1]

    def _advance(self) -> str:
        c = self._peek()
        if not self._at_end():
            self.index += 1
            # surrogatepass keeps lone surrogates countable; they are rejected as tokens
            self.offset += len(c.encode("utf-8", "surrogatepass"))
            if c == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        return c

    def _error(self, message: str, line: int, column: int, offset: int) -> LexerError:
        return LexerError(message, self.filename, line, column, offset)

    def _error_here(self, message: str) -> LexerError:
        return LexerError(message, self.filename, self.line, self.column, self.offset)

    # --- main API ---

    def tokenize(self) -> List[Token]:
        tokens: List[Token] = []
        while True:
            tok = self._next_token()
            tokens.append(tok)
            if tok.kind is TokenKind.EOF:
                break
        return tokens

    def _next_token(self) -> Token:
        self._skip_ws_and_comments()
        start_index = self.index
        start_line, start_col, start_offset = self.line, self.column, self.offset

        def make(kind: TokenKind) -> Token:
            return Token(kind, self.source[start_index:self.index], start_line, start_col, start_offset)

        if self._at_end():
            return Token(TokenKind.EOF, "", start_line, start_col, start_offset)

        c = self._advance()

        # identifiers / keywords
        if _is_ident_start(c):
            while _is_ident_char(self._peek()):
                self._advance()
            tok = make(TokenKind.IDENT)
            kind = KEYWORDS.get(tok.text)
            return tok if kind is None else make(kind)

        # numbers: 12, 1.5, 1.5e-3, 2.
        if _is_digit(c):
            return self._read_number(make, start_line, start_col, start_offset)

        # leading-dot floats (.5) or the field-access dot
        if c == ".":
            if _is_digit(self._peek()):
                while _is_digit(self._peek()):
                    self._advance()
                self._check_number_end(is_float=True)
                return self._finish_float(make, start_line, start_col, start_offset)
            return make(TokenKind.DOT)

        # strings
        if c == '"':
            self._read_string_literal(start_line, start_col, start_offset)
            return make(TokenKind.STRING)

        # punctuation / operators with lookahead; two-character forms first

        if c == "=":
            if self._peek() == "=":
                self._advance()
                return make(TokenKind.EQEQ)
            return make(TokenKind.EQ)

        if c == "!":
            if self._peek() == "=":
                self._advance()
                return make(TokenKind.NE)
            return make(TokenKind.BANG)

        if c == "<":
            if self._peek() == "=":
                self._advance()
                return make(TokenKind.LE)
            return make(TokenKind.LT)

        if c == ">":
            if self._peek() == "=":
                self._advance()
                return make(TokenKind.GE)
            return make(TokenKind.GT)

        if c == "&" and self._peek() == "&":
            self._advance()
            return make(TokenKind.ANDAND)

        if c == "|" and self._peek() == "|":
            self._advance()
            return make(TokenKind.OROR)

        kind = _SINGLE_CHAR_TOKENS.get(c)
        if kind is not None:
            return make(kind)

        raise self._error(f"[LEX-0040] unexpected character {c!r} at {start_line}:{start_col}",
                          start_line, start_col, start_offset)

    def _read_number(self, make, start_line: int, start_col: int, start_offset: int) -> Token:
        while _is_digit(self._peek()):
            self._advance()

        if self._peek() != ".":
            self._check_number_end(is_float=False)
            tok = make(TokenKind.INT)
            if int(tok.text) > INT_MAX:
                raise self._error(f"[LEX-0060] integer literal '{tok.text}' exceeds 64-bit signed range",
                                  start_line, start_col, start_offset)
            return tok

        self._advance()  # consume '.'
        if _is_digit(self._peek()):
            while _is_digit(self._peek()):
                self._advance()
            if self._peek() == "e":
                self._advance()
                if self._peek() in ("+", "-"):
                    self._advance()
                if not _is_digit(self._peek()):
                    raise self._error_here("[LEX-0062] malformed float literal: expected digits in exponent")
                while _is_digit(self._peek()):
                    self._advance()
        self._check_number_end(is_float=True)
        return self._finish_float(make, start_line, start_col, start_offset)

    def _finish_float(self, make, start_line: int, start_col: int, start_offset: int) -> Token:
        tok = make(TokenKind.FLOAT)
        if float(tok.text) == float("inf"):
            raise self._error(f"[LEX-0064] float literal '{tok.text}' is out of range",
                              start_line, start_col, start_offset)
        return tok

    def _check_number_end(self, is_float: bool) -> None:
        nxt = self._peek()
        if _is_ident_char(nxt) and not _is_digit(nxt):
            kind = "float" if is_float else "integer"
            raise self._error_here(f"[LEX-0061] invalid character '{nxt}' after {kind} literal")
        if is_float and nxt == ".":
            raise self._error_here("[LEX-0063] malformed float literal: unexpected second '.'")

    def _read_string_literal(self, start_line: int, start_col: int, start_offset: int) -> None:
        # the opening quote has already been consumed
        while True:
            if self._at_end():
                raise self._error("[LEX-0010] unterminated string literal", start_line, start_col, start_offset)
            ch = self._peek()
            if ch == "\\":
                self._read_valid_escape(start_line, start_col, start_offset)
                continue
            if _is_surrogate(ch):
                raise self._error_here(f"[LEX-0040] unexpected character {ch!r} in string literal")
            self._advance()
            if ch == '"':
                return

    def _read_valid_escape(self, start_line: int, start_col: int, start_offset: int) -> None:
        esc_line, esc_col, esc_offset = self.line, self.column, self.offset
        self._advance()  # backslash
        if self._at_end():
            raise self._error("[LEX-0010] unterminated string literal", start_line, start_col, start_offset)

        esc = self._peek()
        if _is_surrogate(esc):
            raise self._error_here(f"[LEX-0040] unexpected character {esc!r} in string literal")
        if esc in SIMPLE_ESCAPES:
            self._advance()
            return

        if esc == "u":  # unicode escape of the form \uXXXX
            self._advance()
            for _ in range(4):  # expect exactly four hex digits
                if self._peek() not in HEX_CHARS:
                    raise self._error("[LEX-0051] invalid unicode escape sequence (expected \\uXXXX)",
                                      esc_line, esc_col, esc_offset)
                self._advance()
            return

        raise self._error(f"[LEX-0059] unknown escape sequence \\{esc}", esc_line, esc_col, esc_offset)

    def _skip_ws_and_comments(self) -> None:
        while True:
            c = self._peek()
            if c.isspace() and not self._at_end():
                self._advance()
                continue
            if c == "/" and self._peek_next() == "/":
                # line comment
                self._advance()  # '/'
                self._advance()  # second '/'
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue
            break
