"""Exception types raised by the bracket tree parser.

The parser is fail-fast: the first problem found anywhere in the recursive
descent is raised as a :class:`ParseError` and no partial tree is returned.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from bracket_tree.tokenization.scanner import TokenPosition


class ParseErrorKind(Enum):
    """Specific reasons a parse can fail."""

    UNEXPECTED_END_OF_INPUT = "unexpected_end_of_input"
    EXPECTED_OPEN_BRACKET = "expected_open_bracket"
    EXPECTED_CLOSE_BRACKET = "expected_close_bracket"
    EMPTY_TOKEN = "empty_token"
    INVALID_CATEGORY = "invalid_category"
    UNCONSUMED_TRAILING_CONTENT = "unconsumed_trailing_content"
    NESTING_TOO_DEEP = "nesting_too_deep"


class BracketTreeError(Exception):
    """Base exception for all bracket tree errors."""


class ParseError(BracketTreeError):
    """Raised when bracket notation text cannot be parsed.

    Attributes:
        kind: Which grammar rule failed
        position: Where in the input the failure was detected
        message: Human readable description without position information
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        position: "TokenPosition",
    ) -> None:
        super().__init__(
            f"{message} at line {position.line}, column {position.column}"
        )
        self.kind = kind
        self.message = message
        self.position = position

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a JSON-friendly dictionary."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "line": self.position.line,
            "column": self.position.column,
            "offset": self.position.offset,
        }


class ConfigError(BracketTreeError):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        suggestions: Optional[List[str]] = None,
    ) -> None:
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []
