"""
Logging utilities for the Adead front end.

Messages go to stderr and are filtered by the FrontendContext log level.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

import sys
import time
from typing import Optional

from adead_context import FrontendContext, LogLevel
from adead_diagnostics import Diagnostic


def _rich_prefix(log_level: LogLevel) -> str:
    timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
    return f"{timestamp} [{log_level.name}] "


def log(context: Optional[FrontendContext], log_level: LogLevel, message: str) -> None:
    """
    Print `message` to stderr if the context's level admits `log_level`.

    Args:
        context:    The front-end context; None means FrontendContext.default().
        log_level:  The level of the message (never SILENT).
        message:    The message to log.
    """
    if context is None:
        context = FrontendContext.default()
    if context.log_level < log_level:
        return
    prefix = _rich_prefix(log_level) if context.log_rich_format else ""
    print(f"{prefix}{message}", file=sys.stderr)


def log_error(context: Optional[FrontendContext], message: str) -> None:
    log(context, LogLevel.ERROR, message)


def log_warning(context: Optional[FrontendContext], message: str) -> None:
    log(context, LogLevel.WARNING, message)


def log_info(context: Optional[FrontendContext], message: str) -> None:
    log(context, LogLevel.INFO, message)


def log_debug(context: Optional[FrontendContext], message: str) -> None:
    log(context, LogLevel.DEBUG, message)


def log_stage(context: Optional[FrontendContext], stage: str, filename: Optional[str] = None) -> None:
    """
    Log the start of a front-end stage at INFO level.

    Args:
        context:  The front-end context.
        stage:    The stage name (e.g., "Lexing", "Parsing").
        filename: Optional name of the input being processed.
    """
    if filename:
        log_info(context, f"{stage} '{filename}'")
    else:
        log_info(context, f"{stage}...")


def log_diagnostic(context: Optional[FrontendContext], diag: Diagnostic) -> None:
    """Log a diagnostic's one-line header; errors at ERROR level, anything else at WARNING."""
    level = LogLevel.ERROR if diag.kind == "error" else LogLevel.WARNING
    log(context, level, diag.format())
