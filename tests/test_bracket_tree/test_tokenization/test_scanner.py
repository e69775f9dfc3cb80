"""Tests for the whitespace-preserving scanner."""

import pytest

from bracket_tree.tokenization import (
    Scanner,
    Token,
    TokenPosition,
    TokenType,
    is_bare,
    is_whitespace,
)


class TestTokenPosition:
    """Test position validation."""

    def test_valid_position(self):
        """Test creating a position."""
        position = TokenPosition(line=2, column=3, offset=10)

        assert position.to_dict() == {"line": 2, "column": 3, "offset": 10}

    @pytest.mark.parametrize(
        "line,column,offset,message",
        [
            (0, 1, 0, "Line number must be >= 1"),
            (1, 0, 0, "Column number must be >= 1"),
            (1, 1, -1, "Offset must be >= 0"),
        ],
    )
    def test_invalid_position(self, line, column, offset, message):
        """Test position validation errors."""
        with pytest.raises(ValueError, match=message):
            TokenPosition(line=line, column=column, offset=offset)


class TestToken:
    """Test Token behaviour."""

    def test_source_reproduces_original_text(self):
        """Test that prefix, value and suffix rebuild the lexed substring."""
        token = Token(TokenType.CATEGORY, "NP", prefix=" \t", suffix="\n  ")

        assert token.source == " \tNP\n  "
        assert str(token) == "NP"

    def test_equality_ignores_position(self):
        """Test that tokens at different positions compare equal."""
        first = Token(TokenType.LABEL, "Ash", position=TokenPosition(1, 5, 4))
        second = Token(TokenType.LABEL, "Ash", position=TokenPosition(3, 1, 40))

        assert first == second
        assert hash(first) == hash(second)

    def test_equality_includes_whitespace(self):
        """Test that whitespace differences make tokens unequal."""
        assert Token(TokenType.LABEL, "Ash") != Token(TokenType.LABEL, "Ash", suffix=" ")

    def test_empty_value_rejected(self):
        """Test that empty values are rejected."""
        with pytest.raises(ValueError, match="Token value cannot be empty"):
            Token(TokenType.CATEGORY, "")

    @pytest.mark.parametrize("value", ["a b", "[NP", "NP]"])
    def test_value_with_delimiters_rejected(self, value):
        """Test that values containing whitespace or brackets are rejected."""
        with pytest.raises(ValueError, match="contains delimiters"):
            Token(TokenType.LABEL, value)

    def test_non_whitespace_affixes_rejected(self):
        """Test that prefix and suffix must be whitespace."""
        with pytest.raises(ValueError, match="must be whitespace"):
            Token(TokenType.LABEL, "Ash", prefix="x")


class TestHelpers:
    """Test character class helpers."""

    def test_is_whitespace(self):
        assert is_whitespace("")
        assert is_whitespace(" \t\r\n")
        assert not is_whitespace(" a ")
        assert not is_whitespace("\u00a0")
        assert not is_whitespace("\v\f")

    def test_is_bare(self):
        assert is_bare("Pokémon")
        assert not is_bare("a]")
        assert not is_bare("a b")
        assert is_bare("a\u00a0b")
        assert not is_bare("a\tb")


class TestScanner:
    """Test Scanner reads."""

    def test_take_whitespace_and_bare(self):
        """Test alternating whitespace and bare runs."""
        scanner = Scanner("  NP\tAsh]")

        assert scanner.take_whitespace() == "  "
        assert scanner.take_bare() == "NP"
        assert scanner.take_whitespace() == "\t"
        assert scanner.take_bare() == "Ash"
        assert scanner.peek() == "]"
        assert scanner.remaining == "]"

    def test_take_returns_empty_runs(self):
        """Test that reads at a delimiter consume nothing."""
        scanner = Scanner("[x")

        assert scanner.take_whitespace() == ""
        assert scanner.take_bare() == ""
        assert scanner.offset == 0

    def test_advance_and_end(self):
        """Test single character consumption and end detection."""
        scanner = Scanner("[")

        assert scanner.advance() == "["
        assert scanner.at_end
        assert scanner.peek() is None
        with pytest.raises(IndexError):
            scanner.advance()

    def test_read_token_captures_whitespace(self):
        """Test reading a token with surrounding whitespace."""
        scanner = Scanner(" \nNP  [")
        token = scanner.read_token(TokenType.CATEGORY)

        assert token is not None
        assert token.type is TokenType.CATEGORY
        assert (token.prefix, token.value, token.suffix) == (" \n", "NP", "  ")
        assert token.position == TokenPosition(line=2, column=1, offset=2)
        assert scanner.peek() == "["

    def test_read_token_without_bare_run_consumes_nothing(self):
        """Test that a failed token read leaves the cursor unchanged."""
        scanner = Scanner("   ]")

        assert scanner.read_token(TokenType.LABEL) is None
        assert scanner.offset == 0

    def test_position_at(self):
        """Test offset to line and column translation."""
        scanner = Scanner("[S\n  [NP a]]")

        assert scanner.position_at(0) == TokenPosition(1, 1, 0)
        assert scanner.position_at(5) == TokenPosition(2, 3, 5)

    def test_position_at_defaults_to_cursor(self):
        """Test that position_at uses the cursor without an argument."""
        scanner = Scanner("ab\ncd")
        scanner.take_bare()
        scanner.advance()

        assert scanner.position_at() == TokenPosition(2, 1, 3)
