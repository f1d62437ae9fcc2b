#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from typing import List, Optional, Tuple

from adead_ast import Node
from adead_lexer import LexerError, Token
from adead_parser import ParseError


DIAGNOSTIC_CODE_FAMILIES = {
    "LEX": [
        "LEX-0010",  # unterminated string literal
        "LEX-0040",  # unexpected character
        "LEX-0051",  # malformed \uXXXX escape
        "LEX-0059",  # unknown escape sequence
        "LEX-0060",  # integer literal out of 64-bit range
        "LEX-0061",  # letter or '_' directly after a number
        "LEX-0062",  # exponent without digits
        "LEX-0063",  # second '.' after a float
        "LEX-0064",  # float literal overflows
    ],
    "PAR": [
        "PAR-0020",
        "PAR-0040",
        "PAR-0041",
        "PAR-0042",
        "PAR-0043",
        "PAR-0045",
        "PAR-0090",
        "PAR-0091",
        "PAR-0100",
        "PAR-0101",
        "PAR-0110",
        "PAR-0111",
        "PAR-0112",
        "PAR-0120",
        "PAR-0124",
        "PAR-0130",
        "PAR-0140",
        "PAR-0150",
        "PAR-0210",
        "PAR-0211",
        "PAR-0212",
        "PAR-0220",
        "PAR-0221",
        "PAR-0222",
        "PAR-0223",
        "PAR-0224",
        "PAR-0225",
        "PAR-0230",
    ],
    # Duplicate-name scan; these are warnings, never errors.
    "DUP": [
        "DUP-0010",  # duplicate parameter name in a function definition
        "DUP-0020",  # duplicate field name in a struct literal
    ],
}


@dataclass
class Diagnostic:
    """
    A positioned error or warning, ready for display.

    `line`/`column` mark the start (1-based) and `offset` the UTF-8 byte
    offset; `end_line`/`end_column`, when known, mark the exclusive end.
    """
    kind: str  # "error" or "warning"
    message: str
    filename: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    offset: Optional[int] = None
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    def location(self) -> str:
        """`file:line:col`, dropping whatever part is unknown."""
        parts = [self.filename or ""]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts) if any(parts) else ""

    def format(self) -> str:
        loc = self.location()
        prefix = f"{loc}: " if loc else ""
        return f"{prefix}{self.kind}: {self.message}"


Position = Tuple[int, int, int]  # (line, column, offset)


def _diag_between(
        kind: str,
        message: str,
        filename: Optional[str],
        start: Optional[Position],
        end: Optional[Position] = None,
) -> Diagnostic:
    diag = Diagnostic(kind=kind, message=message, filename=filename)
    if start is not None:
        diag.line, diag.column, diag.offset = start
    if end is not None:
        diag.end_line, diag.end_column, _ = end
    return diag


def diag_from_node(kind: str, message: str, *, filename: Optional[str], node: Optional[Node]) -> Diagnostic:
    if node is None or node.span is None:
        return _diag_between(kind, message, filename, None)
    s = node.span
    return _diag_between(
        kind,
        message,
        filename,
        (s.start_line, s.start_column, s.start_offset),
        (s.end_line, s.end_column, s.end_offset),
    )


def diag_from_token(kind: str, message: str, *, filename: Optional[str], token: Optional[Token]) -> Diagnostic:
    if token is None:
        return _diag_between(kind, message, filename, None)
    # EOF has no extent
    end = token.end() if token.text else None
    return _diag_between(kind, message, filename, (token.line, token.column, token.offset), end)


def diag_from_lexer_error(e: LexerError) -> Diagnostic:
    return _diag_between("error", f"syntax: {e.message}", e.filename, (e.line, e.column, e.offset))


def diag_from_parse_error(e: ParseError) -> Diagnostic:
    return diag_from_token("error", f"syntax: {e.message}", filename=e.filename, token=e.token)


def _caret_columns(diag: Diagnostic, src_line: str) -> Tuple[int, int]:
    """First column and width of the caret run under `src_line`."""
    first = max(1, diag.column)
    if diag.end_line is None or diag.end_column is None:
        return first, 1
    # a span running past this line is underlined to its end
    last = diag.end_column if diag.end_line == diag.line else len(src_line) + 1
    return first, max(1, last - first)


def render_snippet(diag: Diagnostic, source: str) -> str:
    """
    Render the diagnostic header followed by the offending source line and a caret marker:

        <input>:2:9: error: syntax: [PAR-0225] unexpected token in expression: '}'
            2 | let x = }
              |         ^
    """
    header = diag.format()
    src_lines = source.splitlines()
    if diag.line is None or not 1 <= diag.line <= len(src_lines):
        return header

    src_line = src_lines[diag.line - 1]
    gutter = max(5, len(str(diag.line)))
    out: List[str] = [header, f"{diag.line:>{gutter}} | {src_line}"]
    if diag.column is not None:
        first, width = _caret_columns(diag, src_line)
        out.append(f"{'':>{gutter}} | {' ' * (first - 1)}{'^' * width}")
    return "\n".join(out)
