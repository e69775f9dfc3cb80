"""Bracket Tree.

Parses labeled bracket notation such as ``[S [NP Ash][VP caught]]`` into a
binary-leaning syntax tree, lays the tree out on an abstract grid for
diagramming and keeps enough whitespace to reproduce the source exactly.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_file(), format_tree()
- Level 2: Configured parser - BracketTreeParser with ParserConfig
"""

__version__ = "0.1.0"
__author__ = "Bracket Tree Team"

from .api import (
    BracketTreeParser,
    OutputFormat,
    ParseResult,
    TreeFormatter,
    format_tree,
    iter_segments,
    parse,
    parse_file,
    parse_prefix,
    to_dict,
    to_json,
)
from .shared import (
    FormatConfig,
    LexicalCategory,
    ParseError,
    ParseErrorKind,
    ParserConfig,
)
from .tokenization import Token, TokenPosition, TokenType
from .tree import Leaf, Node, PreOrderIterator, Subtree, SyntaxTree

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "parse",
    "parse_file",
    "parse_prefix",
    "format_tree",
    "iter_segments",
    "to_dict",
    "to_json",

    # Level 2: Configured parser and formatter
    "BracketTreeParser",
    "ParseResult",
    "TreeFormatter",
    "OutputFormat",

    # Tree model
    "SyntaxTree",
    "Node",
    "Leaf",
    "Subtree",
    "PreOrderIterator",
    "Token",
    "TokenType",
    "TokenPosition",

    # Configuration and errors
    "ParserConfig",
    "FormatConfig",
    "LexicalCategory",
    "ParseError",
    "ParseErrorKind",
]
