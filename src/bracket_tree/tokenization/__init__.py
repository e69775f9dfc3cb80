"""Tokenization layer for bracket notation.

Key Components:
    Scanner: Cursor that reads whitespace runs and bare tokens
    Token: Bare value with the exact whitespace surrounding it
    TokenType: Category or label
    TokenPosition: Line, column and offset for diagnostics
"""

from .scanner import (
    CLOSE_BRACKET,
    OPEN_BRACKET,
    WHITESPACE,
    Scanner,
    Token,
    TokenPosition,
    TokenType,
    is_bare,
    is_whitespace,
)

__all__ = [
    "CLOSE_BRACKET",
    "OPEN_BRACKET",
    "WHITESPACE",
    "Scanner",
    "Token",
    "TokenPosition",
    "TokenType",
    "is_bare",
    "is_whitespace",
]
