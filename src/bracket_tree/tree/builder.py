"""Recursive-descent reader for bracket notation.

Grammar::

    Node     := WS* '[' WS* Category WS* (Label | Node Node?) WS* ']' WS*
    Category := bare run (no whitespace, '[' or ']')
    Label    := bare run

The builder is fail-fast: the first error raises :class:`ParseError` and
nothing that was built so far escapes. Every whitespace run is kept, either on
the token it follows or on the node whose bracket it surrounds, so the output
can be re-emitted byte-for-byte.
"""

from typing import Optional, Tuple

from bracket_tree.shared import ParseError, ParseErrorKind, ParserConfig, get_logger
from bracket_tree.tokenization import (
    CLOSE_BRACKET,
    OPEN_BRACKET,
    Scanner,
    Token,
    TokenType,
)

from .model import Leaf, Node, NodeKind, Subtree


class TreeBuilder:
    """Builds unpositioned node trees from bracket notation text.

    A builder holds only configuration and may be reused; each call to
    :meth:`build` uses its own scanner.
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig()
        self.logger = get_logger(__name__, self.config.correlation_id, "tree_builder")

    def build(self, text: str) -> Tuple[str, Node]:
        """Read one root node from the start of ``text``.

        Returns:
            The unconsumed remainder of ``text`` and the root node
        """
        scanner = Scanner(text)
        leading = scanner.take_whitespace()
        root = self._parse_node(scanner, leading, depth=0)
        self.logger.debug(
            "Built node tree",
            extra={"consumed": scanner.offset, "remaining": len(text) - scanner.offset},
        )
        return scanner.remaining, root

    def _parse_node(self, scanner: Scanner, leading: str, depth: int) -> Node:
        if depth > self.config.max_depth:
            raise self._error(
                scanner,
                ParseErrorKind.NESTING_TOO_DEEP,
                f"nesting exceeds maximum depth of {self.config.max_depth}",
            )

        self._expect_open(scanner)
        category = self._read_category(scanner)

        next_char = scanner.peek()
        if next_char is None:
            raise self._error(
                scanner,
                ParseErrorKind.UNEXPECTED_END_OF_INPUT,
                f"expected a label or child node after category {category.value!r}",
            )

        kind: NodeKind
        if next_char not in (OPEN_BRACKET, CLOSE_BRACKET):
            label = scanner.read_token(TokenType.LABEL)
            if label is None:
                raise self._error(scanner, ParseErrorKind.EMPTY_TOKEN, "empty label")
            kind = Leaf(label=label)
        else:
            left = self._parse_node(scanner, "", depth + 1)
            right = None
            if scanner.peek() == OPEN_BRACKET:
                right = self._parse_node(scanner, "", depth + 1)
            kind = Subtree(left=left, right=right)

        self._expect_close(scanner, category)
        trailing = scanner.take_whitespace()
        return Node(category=category, kind=kind, whitespace=(leading, trailing))

    def _expect_open(self, scanner: Scanner) -> None:
        next_char = scanner.peek()
        if next_char is None:
            raise self._error(
                scanner, ParseErrorKind.UNEXPECTED_END_OF_INPUT, "expected '['"
            )
        if next_char != OPEN_BRACKET:
            raise self._error(
                scanner,
                ParseErrorKind.EXPECTED_OPEN_BRACKET,
                f"expected '[' but found {next_char!r}",
            )
        scanner.advance()

    def _expect_close(self, scanner: Scanner, category: Token) -> None:
        next_char = scanner.peek()
        if next_char is None:
            raise self._error(
                scanner,
                ParseErrorKind.EXPECTED_CLOSE_BRACKET,
                f"unexpected end of input, expected ']' to close {category.value!r}",
            )
        if next_char != CLOSE_BRACKET:
            raise self._error(
                scanner,
                ParseErrorKind.UNCONSUMED_TRAILING_CONTENT,
                f"unexpected {next_char!r} before ']' closing {category.value!r}",
            )
        scanner.advance()

    def _read_category(self, scanner: Scanner) -> Token:
        category = scanner.read_token(TokenType.CATEGORY)
        if category is None:
            scanner.take_whitespace()
            if scanner.at_end:
                raise self._error(
                    scanner,
                    ParseErrorKind.UNEXPECTED_END_OF_INPUT,
                    "expected a category after '['",
                )
            raise self._error(scanner, ParseErrorKind.EMPTY_TOKEN, "empty category")

        if not self.config.accepts_category(category.value):
            raise ParseError(
                ParseErrorKind.INVALID_CATEGORY,
                f"unrecognized category {category.value!r}",
                category.position or scanner.position_at(),
            )
        return category

    def _error(
        self, scanner: Scanner, kind: ParseErrorKind, message: str
    ) -> ParseError:
        return ParseError(kind, message, scanner.position_at())
