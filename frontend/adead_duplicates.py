#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import fields, is_dataclass
from typing import Dict, Iterator, List, Optional

from adead_ast import Node, Program, FuncDef, StructLiteral
from adead_diagnostics import Diagnostic, diag_from_node


def iter_child_nodes(node: Node) -> Iterator[Node]:
    """Yield the direct child nodes of `node`, in field order."""
    if not is_dataclass(node):
        return
    for f in fields(node):
        if f.name == "span":
            continue
        value = getattr(node, f.name)
        if isinstance(value, Node):
            yield value
        elif isinstance(value, list):
            for elem in value:
                if isinstance(elem, Node):
                    yield elem


class DuplicateNameChecker:
    """
    Syntactic scan for repeated names the grammar accepts:

      - a parameter name repeated in one function definition
      - a field name repeated in one struct literal

    Both parse fine and stay in the AST as written; whether they are an error,
    or which one wins, is left to later stages. This pass only reports them
    as warnings.
    """

    def __init__(self, program: Program, filename: Optional[str] = None):
        self.program = program
        self.filename = filename if filename is not None else program.filename
        self.diagnostics: List[Diagnostic] = []

    def check(self) -> List[Diagnostic]:
        self._visit(self.program)
        return self.diagnostics

    def _visit(self, node: Node) -> None:
        # pre-order, source order
        stack = [node]
        while stack:
            current = stack.pop()
            if isinstance(current, FuncDef):
                self._check_params(current)
            elif isinstance(current, StructLiteral):
                self._check_fields(current)
            stack.extend(reversed(list(iter_child_nodes(current))))

    def _check_params(self, func: FuncDef) -> None:
        seen: Dict[str, int] = {}
        for index, param in enumerate(func.params):
            if param.name in seen:
                self.diagnostics.append(
                    diag_from_node(
                        "warning",
                        f"[DUP-0010] parameter '{param.name}' of function '{func.name}' repeats "
                        f"parameter #{seen[param.name] + 1}",
                        filename=self.filename,
                        node=param,
                    )
                )
            else:
                seen[param.name] = index

    def _check_fields(self, lit: StructLiteral) -> None:
        seen: Dict[str, int] = {}
        for index, init in enumerate(lit.fields):
            if init.name in seen:
                self.diagnostics.append(
                    diag_from_node(
                        "warning",
                        f"[DUP-0020] field '{init.name}' is given more than once in '{lit.type_name}' literal",
                        filename=self.filename,
                        node=init,
                    )
                )
            else:
                seen[init.name] = index
