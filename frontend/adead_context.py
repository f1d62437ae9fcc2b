"""
Front-end context for cross-cutting options.

This module defines the FrontendContext dataclass which holds options that
affect more than one front-end stage (logging, optional checks).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2025-2026 gwz

from dataclasses import dataclass
from enum import IntEnum


class LogLevel(IntEnum):
    """Hierarchical logging levels for the Adead front end."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages (default)
    INFO = 10       # Stage progress messages
    DEBUG = 30      # Token and statement counts


@dataclass
class FrontendContext:
    """
    Holds cross-cutting options for lexing, parsing and the post-parse checks.

    Attributes:
        log_rich_format:        If True, prefix log lines with a timestamp and the level.
        log_level:              Current logging level.
        warn_duplicate_names:   If True, `analyze` reports duplicate parameter and
                                struct-literal field names as warnings.
    """
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.WARNING
    warn_duplicate_names: bool = True

    @staticmethod
    def default() -> 'FrontendContext':
        """Create a FrontendContext with default settings."""
        return FrontendContext(log_level=LogLevel.WARNING)
