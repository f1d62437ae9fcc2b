#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import sys
from pathlib import Path
from textwrap import dedent

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from adead_context import FrontendContext, LogLevel
from adead_frontend import analyze, parse


@pytest.fixture
def parse_src():
    """Parse a (dedented) Adead source string into a Program.

    Usage:
        def test_something(parse_src):
            program = parse_src('''
                let x = 1
                print x
            ''')
            assert len(program.stmts) == 2
    """

    def _parse(src: str):
        return parse(dedent(src))

    return _parse


@pytest.fixture
def analyze_src():
    """Analyze a (dedented) Adead source string, returning a FrontendResult with diagnostics."""

    def _analyze(src: str, context: FrontendContext | None = None):
        return analyze(dedent(src), context=context)

    return _analyze


@pytest.fixture
def quiet_context() -> FrontendContext:
    return FrontendContext(log_level=LogLevel.SILENT)


def only_stmt(program):
    """Return the single top-level statement of `program`."""
    assert len(program.stmts) == 1, f"expected one statement, got {program.stmts!r}"
    return program.stmts[0]


def has_error_code(diagnostics, code: str) -> bool:
    """Check if any diagnostic contains the given code.

    Args:
        diagnostics: List of Diagnostic objects
        code: Code string like "PAR-0091" or "[PAR-0091]"

    Returns:
        True if any diagnostic message contains the code
    """
    if not code.startswith("["):
        code = f"[{code}]"
    return any(code in d.message for d in diagnostics)
