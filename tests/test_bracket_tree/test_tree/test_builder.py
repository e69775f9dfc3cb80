"""Tests for the recursive-descent tree builder."""

import pytest

from bracket_tree.shared import ParseError, ParseErrorKind, ParserConfig
from bracket_tree.tokenization import TokenPosition
from bracket_tree.tree import Leaf, Subtree, TreeBuilder


@pytest.fixture
def builder() -> TreeBuilder:
    return TreeBuilder()


class TestSuccessfulBuilds:
    """Test building trees from valid bracket notation."""

    def test_leaf_root(self, builder):
        """Test a root that is itself a leaf."""
        remaining, root = builder.build("[N Ash]")

        assert remaining == ""
        assert isinstance(root.kind, Leaf)
        assert root.category.value == "N"
        assert root.label.value == "Ash"

    def test_binary_subtree(self, builder):
        """Test a subtree with two children."""
        _, root = builder.build("[S [NP Ash][VP caught]]")

        assert isinstance(root.kind, Subtree)
        assert root.left.category.value == "NP"
        assert root.left.label.value == "Ash"
        assert root.right.category.value == "VP"
        assert root.right.label.value == "caught"

    def test_unary_subtree(self, builder):
        """Test a subtree with a single child."""
        _, root = builder.build("[NP [N Pokeball] ]")

        assert root.left.label.value == "Pokeball"
        assert root.right is None

    def test_nodes_are_unpositioned(self, builder):
        """Test that the builder does not run layout."""
        _, root = builder.build("[S [NP Ash][VP caught]]")

        assert [(node.x, node.y) for node in root] == [(0.0, 0)] * 3

    def test_returns_unconsumed_remainder(self, builder):
        """Test that content after the root is returned untouched."""
        remaining, root = builder.build("[N Ash]  [N Mew]")

        assert remaining == "[N Mew]"
        assert root.whitespace == ("", "  ")

    def test_whitespace_attribution(self, builder):
        """Test where each whitespace run is stored."""
        _, root = builder.build("\n [ S\t[NP  Ash ]  \n[VP caught]\r\n] ")

        assert root.whitespace == ("\n ", " ")
        assert (root.category.prefix, root.category.suffix) == (" ", "\t")

        left, right = root.children
        assert left.whitespace == ("", "  \n")
        assert (left.category.prefix, left.category.suffix) == ("", "  ")
        assert (left.label.prefix, left.label.suffix) == ("", " ")
        assert right.whitespace == ("", "\r\n")

    def test_token_positions(self, builder):
        """Test that tokens record where their value starts."""
        _, root = builder.build("[S\n  [NP Ash]]")

        assert root.category.position == TokenPosition(1, 2, 1)
        assert root.left.category.position == TokenPosition(2, 4, 6)
        assert root.left.label.position == TokenPosition(2, 7, 9)

    def test_unicode_tokens(self, builder):
        """Test that any non-delimiter characters form tokens."""
        _, root = builder.build("[S [NP Pokémon][VP 捕まえた]]")

        assert root.left.label.value == "Pokémon"
        assert root.right.label.value == "捕まえた"

    def test_unicode_spaces_belong_to_tokens(self, builder):
        """Test that only space, tab, CR and LF separate tokens."""
        _, root = builder.build("[N a\u00a0b]")

        assert root.label.value == "a\u00a0b"

    @pytest.mark.parametrize("separator", ["\v", "\f", "\u2003"])
    def test_other_separators_are_not_whitespace(self, builder, separator):
        """Test that form feed, vertical tab and em space are token characters."""
        _, root = builder.build(f"[S{separator}[N a]]")

        assert root.category.value == f"S{separator}"


class TestFailures:
    """Test fail-fast error reporting."""

    @pytest.mark.parametrize(
        "text,kind,offset",
        [
            ("", ParseErrorKind.UNEXPECTED_END_OF_INPUT, 0),
            ("   ", ParseErrorKind.UNEXPECTED_END_OF_INPUT, 3),
            ("[", ParseErrorKind.UNEXPECTED_END_OF_INPUT, 1),
            ("[S", ParseErrorKind.UNEXPECTED_END_OF_INPUT, 2),
            ("[S [NP", ParseErrorKind.UNEXPECTED_END_OF_INPUT, 6),
            ("S", ParseErrorKind.EXPECTED_OPEN_BRACKET, 0),
            ("[S ]", ParseErrorKind.EXPECTED_OPEN_BRACKET, 3),
            ("[S [NP Ash]", ParseErrorKind.EXPECTED_CLOSE_BRACKET, 11),
            ("[N Ash", ParseErrorKind.EXPECTED_CLOSE_BRACKET, 6),
            ("[]", ParseErrorKind.EMPTY_TOKEN, 1),
            ("[  ]", ParseErrorKind.EMPTY_TOKEN, 3),
            ("[[NP a]]", ParseErrorKind.EMPTY_TOKEN, 1),
            ("[N a b]", ParseErrorKind.UNCONSUMED_TRAILING_CONTENT, 5),
            ("[N a [X b]]", ParseErrorKind.UNCONSUMED_TRAILING_CONTENT, 5),
            ("[S [A a][B b][C c]]", ParseErrorKind.UNCONSUMED_TRAILING_CONTENT, 13),
            ("[S [A a] stray]", ParseErrorKind.UNCONSUMED_TRAILING_CONTENT, 9),
        ],
    )
    def test_error_kinds(self, builder, text, kind, offset):
        """Test the reported error kind and offset for malformed input."""
        with pytest.raises(ParseError) as exc_info:
            builder.build(text)

        assert exc_info.value.kind is kind
        assert exc_info.value.position.offset == offset

    def test_error_message_includes_line_and_column(self, builder):
        """Test human readable error text."""
        with pytest.raises(ParseError, match=r"expected '\]' to close 'S' at line 2, column 11"):
            builder.build("[S\n  [NP Ash]")

    def test_strict_mode_rejects_unknown_category(self):
        """Test category validation in strict mode."""
        builder = TreeBuilder(ParserConfig.strict_categories())

        with pytest.raises(ParseError) as exc_info:
            builder.build("[S [XP word]]")

        assert exc_info.value.kind is ParseErrorKind.INVALID_CATEGORY
        assert exc_info.value.position == TokenPosition(1, 5, 4)
        assert "'XP'" in exc_info.value.message

    def test_strict_mode_accepts_vocabulary(self):
        """Test that recognized categories pass strict validation."""
        builder = TreeBuilder(ParserConfig.strict_categories())

        _, root = builder.build("[S [NP [Det the][N Mew]][VP [V ran]]]")

        assert root.category.value == "S"

    def test_free_form_accepts_unknown_category(self, builder):
        """Test that the default configuration accepts any tag."""
        _, root = builder.build("[TOP [XP word]]")

        assert root.left.category.value == "XP"


class TestNestingLimit:
    """Test the maximum nesting depth."""

    @staticmethod
    def nested(depth: int) -> str:
        return "[X " * depth + "[N leaf]" + "]" * depth

    def test_depth_at_limit_is_accepted(self):
        """Test that nesting exactly at max_depth parses."""
        builder = TreeBuilder(ParserConfig(max_depth=2))

        _, root = builder.build(self.nested(2))

        assert root.left.left.label.value == "leaf"

    def test_depth_beyond_limit_is_rejected(self):
        """Test that nesting deeper than max_depth fails."""
        builder = TreeBuilder(ParserConfig(max_depth=2))

        with pytest.raises(ParseError) as exc_info:
            builder.build(self.nested(3))

        assert exc_info.value.kind is ParseErrorKind.NESTING_TOO_DEEP
        assert exc_info.value.position.offset == 9

    def test_default_limit_protects_against_adversarial_nesting(self, builder):
        """Test that very deep input fails cleanly instead of exhausting the stack."""
        with pytest.raises(ParseError) as exc_info:
            builder.build(self.nested(10000))

        assert exc_info.value.kind is ParseErrorKind.NESTING_TOO_DEEP

    def test_default_limit_allows_deep_trees(self, builder):
        """Test a deep but permitted tree."""
        _, root = builder.build(self.nested(200))

        assert root.category.value == "X"
