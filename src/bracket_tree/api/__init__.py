"""Public API layer: parsing entry points and output formatting."""

from .formatter import (
    OutputFormat,
    Segment,
    SegmentKind,
    TreeFormatter,
    format_tree,
    iter_segments,
    render_outline,
    to_dict,
    to_json,
)
from .parser import (
    BracketTreeParser,
    ParseResult,
    parse,
    parse_file,
    parse_prefix,
)

__all__ = [
    "BracketTreeParser",
    "OutputFormat",
    "ParseResult",
    "Segment",
    "SegmentKind",
    "TreeFormatter",
    "format_tree",
    "iter_segments",
    "parse",
    "parse_file",
    "parse_prefix",
    "render_outline",
    "to_dict",
    "to_json",
]
