"""Whitespace-preserving scanner for bracket notation.

The scanner turns raw text into :class:`Token` values that remember the exact
whitespace they were read with, so that re-emitting every token reproduces
the source byte-for-byte. It knows about brackets only as delimiters and has
no notion of tree shape.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, Optional

OPEN_BRACKET = "["
CLOSE_BRACKET = "]"
DELIMITERS = frozenset((OPEN_BRACKET, CLOSE_BRACKET))
# Only ASCII layout characters separate tokens; other Unicode spaces are bare
WHITESPACE = frozenset(" \t\r\n")


class TokenType(Enum):
    """Kinds of bare tokens found in bracket notation."""

    CATEGORY = auto()   # Tag at the front of a bracket
    LABEL = auto()      # Terminal word of a leaf


@dataclass(frozen=True)
class TokenPosition:
    """Position information for tokens and errors."""

    line: int
    column: int
    offset: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "column": self.column, "offset": self.offset}


@dataclass(frozen=True)
class Token:
    """A bare value together with the whitespace it was lexed with.

    ``prefix + value + suffix`` is exactly the substring the token was read
    from. The position points at the first character of ``value`` and does not
    take part in equality.
    """

    type: TokenType
    value: str
    prefix: str = ""
    suffix: str = ""
    position: Optional[TokenPosition] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Validate token contents."""
        if not self.value:
            raise ValueError("Token value cannot be empty")
        if not is_bare(self.value):
            raise ValueError(f"Token value {self.value!r} contains delimiters")
        if not (is_whitespace(self.prefix) and is_whitespace(self.suffix)):
            raise ValueError("Token prefix and suffix must be whitespace")

    @property
    def source(self) -> str:
        """Get the original text this token was read from."""
        return f"{self.prefix}{self.value}{self.suffix}"

    def __str__(self) -> str:
        return self.value


def is_whitespace(text: str) -> bool:
    """Check that ``text`` is empty or consists only of whitespace."""
    return all(ch in WHITESPACE for ch in text)


def is_bare(text: str) -> bool:
    """Check that ``text`` contains neither whitespace nor brackets."""
    return not any(ch in WHITESPACE or ch in DELIMITERS for ch in text)


class Scanner:
    """Cursor over bracket notation text.

    All reads advance the cursor; nothing is ever pushed back, which keeps the
    parser fail-fast.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.offset = 0

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.text)

    @property
    def remaining(self) -> str:
        return self.text[self.offset:]

    def peek(self) -> Optional[str]:
        """Return the next character without consuming it."""
        if self.at_end:
            return None
        return self.text[self.offset]

    def advance(self) -> str:
        """Consume and return a single character."""
        if self.at_end:
            raise IndexError("Cannot advance past end of input")
        char = self.text[self.offset]
        self.offset += 1
        return char

    def take_whitespace(self) -> str:
        """Consume and return the run of whitespace at the cursor."""
        start = self.offset
        while not self.at_end and self.text[self.offset] in WHITESPACE:
            self.offset += 1
        return self.text[start:self.offset]

    def take_bare(self) -> str:
        """Consume and return the run of non-whitespace, non-bracket characters."""
        start = self.offset
        while not self.at_end:
            char = self.text[self.offset]
            if char in WHITESPACE or char in DELIMITERS:
                break
            self.offset += 1
        return self.text[start:self.offset]

    def read_token(self, token_type: TokenType) -> Optional[Token]:
        """Read whitespace, a bare run and trailing whitespace as one token.

        Returns None without consuming anything when no bare run follows the
        leading whitespace.
        """
        start = self.offset
        prefix = self.take_whitespace()
        value_offset = self.offset
        value = self.take_bare()
        if not value:
            self.offset = start
            return None
        suffix = self.take_whitespace()
        return Token(
            type=token_type,
            value=value,
            prefix=prefix,
            suffix=suffix,
            position=self.position_at(value_offset),
        )

    def position_at(self, offset: Optional[int] = None) -> TokenPosition:
        """Translate an offset (default: the cursor) to line and column."""
        if offset is None:
            offset = self.offset
        line = self.text.count("\n", 0, offset) + 1
        line_start = self.text.rfind("\n", 0, offset) + 1
        return TokenPosition(line=line, column=offset - line_start + 1, offset=offset)
