"""Shared utilities for bracket tree parsing.

This module provides configuration objects, error types, result types and
logging helpers used across the tokenization, tree and API layers.
"""

from .config import (
    DEFAULT_VOCABULARY,
    FormatConfig,
    LexicalCategory,
    ParserConfig,
)
from .errors import (
    BracketTreeError,
    ConfigError,
    ConfigValidationError,
    ParseError,
    ParseErrorKind,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)

__all__ = [
    "DEFAULT_VOCABULARY",
    "FormatConfig",
    "LexicalCategory",
    "ParserConfig",
    "BracketTreeError",
    "ConfigError",
    "ConfigValidationError",
    "ParseError",
    "ParseErrorKind",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
]
