#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from adead_ast import Node, Span

_ICE_CODE_RE = re.compile(r"^\[(ICE-\d{4})\]")


@dataclass(frozen=True)
class ICELocation:
    filename: Optional[str]
    span: Optional[Span]

    def describe(self) -> str:
        """`file:line:col`, just `file`, or an empty string."""
        if not self.filename:
            return ""
        if self.span is None:
            return self.filename
        return f"{self.filename}:{self.span.start_line}:{self.span.start_column}"


class InternalFrontendError(RuntimeError):
    """
    Raised when the front end meets a tree it could not have built itself,
    e.g. a node type the formatter has no rule for.
    User mistakes are LexerError / ParseError instead.
    """

    FALLBACK_CODE = "ICE-9999"

    def __init__(self, message: str, loc: ICELocation | None = None):
        super().__init__(message)
        self.message = message
        self.loc = loc

    @classmethod
    def at_node(cls, message: str, node: Node, filename: Optional[str] = None) -> InternalFrontendError:
        return cls(message, ICELocation(filename, node.span))

    @property
    def code(self) -> str:
        m = _ICE_CODE_RE.match(self.message)
        return m.group(1) if m else self.FALLBACK_CODE

    def format(self) -> str:
        message = self.message
        if _ICE_CODE_RE.match(message) is None:
            message = f"[{self.FALLBACK_CODE}] {message}"
        where = self.loc.describe() if self.loc else ""
        if where:
            return f"{where}: internal error: {message}"
        return f"internal error: {message}"
