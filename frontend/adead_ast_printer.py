#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

"""
Debug dump of an Adead AST, one node per line:

    Program @1:1-1:14
      stmts[0]: LetStmt(name='x', is_mutable=False) @1:1-1:14
        value: BinaryOp(op='+') @1:9-1:14
          left: IntLiteral(value=1) @1:9-1:10
          right: IntLiteral(value=2) @1:13-1:14

Scalar fields go inside the parentheses; child nodes follow on deeper lines,
labelled with the field they hang from (list elements with their index).
Fields excluded from node equality (span, filename) are not shown as fields.
"""

from dataclasses import fields, is_dataclass
from typing import Any, List, Optional, Tuple

from adead_ast import Span, Node, Program


def _format_span(span: Optional[Span]) -> str:
    if span is None:
        return ""
    return f" @{span.start_line}:{span.start_column}-{span.end_line}:{span.end_column}"


# Node-valued fields that may be None
_OPTIONAL_CHILDREN = frozenset({"else_branch", "value"})


def _split_fields(node: Node) -> Tuple[List[Tuple[str, Any]], List[Tuple[str, Any]]]:
    scalars: List[Tuple[str, Any]] = []
    children: List[Tuple[str, Any]] = []
    for f in fields(node):
        if not f.compare:
            continue
        value = getattr(node, f.name)
        if isinstance(value, (Node, list)) or (value is None and f.name in _OPTIONAL_CHILDREN):
            children.append((f.name, value))
        else:
            scalars.append((f.name, value))
    return scalars, children


class AstDumper:
    def __init__(self, indent: str = "  ", show_spans: bool = True):
        self.indent = indent
        self.show_spans = show_spans

    def header(self, node: Node) -> str:
        scalars, _ = _split_fields(node)
        text = type(node).__name__
        if scalars:
            text += "(" + ", ".join(f"{name}={value!r}" for name, value in scalars) + ")"
        if self.show_spans:
            text += _format_span(node.span)
        return text

    def dump(self, node: Any, depth: int = 0, label: Optional[str] = None) -> List[str]:
        lead = self.indent * depth + (f"{label}: " if label else "")

        if not (isinstance(node, Node) and is_dataclass(node)):
            return [lead + repr(node)]

        lines = [lead + self.header(node)]
        _, children = _split_fields(node)
        for name, value in children:
            if isinstance(value, list):
                if not value:
                    lines.append(self.indent * (depth + 1) + f"{name}: []")
                for i, elem in enumerate(value):
                    lines.extend(self.dump(elem, depth + 1, f"{name}[{i}]"))
            else:
                lines.extend(self.dump(value, depth + 1, name))
        return lines


def format_node(node: Any, indent: int = 0, show_spans: bool = True) -> List[str]:
    return AstDumper(show_spans=show_spans).dump(node, indent)


def format_program(program: Program, show_spans: bool = True) -> str:
    """
    Convenience: dump a whole Program as a string.
    """
    return "\n".join(format_node(program, show_spans=show_spans))
