#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass, field
from typing import List, Optional

from adead_ast import Program
from adead_context import FrontendContext
from adead_diagnostics import Diagnostic, diag_from_lexer_error, diag_from_parse_error
from adead_duplicates import DuplicateNameChecker
from adead_lexer import Lexer, LexerError, Token
from adead_logger import log_debug, log_diagnostic, log_stage
from adead_parser import Parser, ParseError


@dataclass
class FrontendResult:
    """
    Result of `analyze`: the program (None when lexing or parsing failed)
    plus every diagnostic produced on the way.
    """
    program: Optional[Program] = None
    context: FrontendContext = field(default_factory=FrontendContext.default)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.diagnostics)

    def has_warnings(self) -> bool:
        return any(d.kind == "warning" for d in self.diagnostics)


def tokenize(source: str, filename: Optional[str] = None, context: Optional[FrontendContext] = None) -> List[Token]:
    """
    Split `source` into tokens, ending with an EOF token.

    Raises LexerError on the first malformed token.
    """
    context = context or FrontendContext.default()
    log_stage(context, "Lexing", filename)
    tokens = Lexer(source, filename or "<input>").tokenize()
    log_debug(context, f"Lexer produced {len(tokens)} token(s)")
    return tokens


def parse(source: str, filename: Optional[str] = None, context: Optional[FrontendContext] = None) -> Program:
    """
    Parse `source` into a Program.

    Fail-fast: raises LexerError or ParseError for the first problem found;
    no partial tree is returned.
    """
    context = context or FrontendContext.default()
    tokens = tokenize(source, filename, context)
    log_stage(context, "Parsing", filename)
    program = Parser(tokens, filename or "<input>").parse_program()
    log_debug(context, f"Parsed {len(program.stmts)} top-level statement(s)")
    return program


def analyze(source: str, filename: Optional[str] = None, context: Optional[FrontendContext] = None) -> FrontendResult:
    """
    Parse `source` and collect diagnostics instead of raising:

      1. Lex and parse; a failure becomes a single error diagnostic and
         `program` stays None.
      2. If enabled in the context, report duplicate parameter and
         struct-literal field names as warnings.
    """
    context = context or FrontendContext.default()
    result = FrontendResult(context=context)

    try:
        result.program = parse(source, filename, context)
    except LexerError as e:
        result.diagnostics.append(diag_from_lexer_error(e))
    except ParseError as e:
        result.diagnostics.append(diag_from_parse_error(e))

    if result.program is not None and context.warn_duplicate_names:
        log_stage(context, "Checking duplicate names", filename)
        result.diagnostics.extend(DuplicateNameChecker(result.program, filename).check())

    for diag in result.diagnostics:
        log_diagnostic(context, diag)

    return result
