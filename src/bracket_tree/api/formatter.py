"""Output formatting for syntax trees.

The round-trip formatter re-emits every bracket, token and whitespace run in
structural order, reproducing the parsed text exactly. The same segment
stream doubles as input for syntax highlighting. Dictionary, JSON and
outline renderings expose the layout coordinates to presentation layers.
"""

import json
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Iterator, List, Optional, Union

from bracket_tree.shared import FormatConfig, get_logger
from bracket_tree.tokenization import CLOSE_BRACKET, OPEN_BRACKET, Token
from bracket_tree.tree import Leaf, Node, SyntaxTree


class SegmentKind(Enum):
    """Kinds of text segments making up bracket notation."""

    WHITESPACE = auto()
    OPEN_BRACKET = auto()
    CATEGORY = auto()
    LABEL = auto()
    CLOSE_BRACKET = auto()


@dataclass(frozen=True)
class Segment:
    """A contiguous piece of source text and the node it belongs to."""

    kind: SegmentKind
    text: str
    node: Optional[Node] = field(default=None, compare=False, repr=False)


class OutputFormat(Enum):
    """Supported output formats for syntax trees."""

    TEXT = "text"        # Round-trip reconstruction of the source
    OUTLINE = "outline"  # Indented node listing with coordinates
    JSON = "json"


def iter_segments(tree: SyntaxTree) -> Iterator[Segment]:
    """Yield the source segments of ``tree`` in structural order.

    Empty whitespace runs are skipped.
    """
    pending: List[Union[Node, Segment]] = [tree.root]
    while pending:
        item = pending.pop()
        if isinstance(item, Segment):
            if item.text:
                yield item
            continue

        node = item
        opening, closing = node.whitespace
        head = [Segment(SegmentKind.WHITESPACE, opening, node),
                Segment(SegmentKind.OPEN_BRACKET, OPEN_BRACKET, node)]
        head.extend(_token_segments(node.category, SegmentKind.CATEGORY, node))
        for segment in head:
            if segment.text:
                yield segment

        # Pushed in reverse: closing whitespace is emitted last
        pending.append(Segment(SegmentKind.WHITESPACE, closing, node))
        pending.append(Segment(SegmentKind.CLOSE_BRACKET, CLOSE_BRACKET, node))
        if isinstance(node.kind, Leaf):
            pending.extend(
                reversed(_token_segments(node.kind.label, SegmentKind.LABEL, node))
            )
        else:
            pending.extend(reversed(node.children))


def _token_segments(token: Token, kind: SegmentKind, node: Node) -> List[Segment]:
    return [
        Segment(SegmentKind.WHITESPACE, token.prefix, node),
        Segment(kind, token.value, node),
        Segment(SegmentKind.WHITESPACE, token.suffix, node),
    ]


def format_tree(tree: SyntaxTree) -> str:
    """Reconstruct the exact source text ``tree`` was parsed from."""
    return "".join(segment.text for segment in iter_segments(tree))


def to_dict(tree: SyntaxTree, config: Optional[FormatConfig] = None) -> Dict[str, Any]:
    """Convert ``tree`` to nested dictionaries using ``config`` options."""
    config = config or FormatConfig()
    return tree.to_dict(
        include_whitespace=config.include_whitespace,
        include_positions=config.include_positions,
    )


def to_json(tree: SyntaxTree, config: Optional[FormatConfig] = None) -> str:
    """Convert ``tree`` to a JSON document."""
    config = config or FormatConfig()
    return json.dumps(
        to_dict(tree, config),
        indent=config.json_indent,
        ensure_ascii=config.json_ensure_ascii,
    )


def render_outline(tree: SyntaxTree, indent: str = "  ") -> str:
    """Render one line per node, indented by depth, with coordinates."""
    lines = []
    for node in tree.iter():
        line = f"{indent * node.y}{node.category.value} (x={node.x:g}, y={node.y})"
        if node.label is not None:
            line += f" {node.label.value}"
        lines.append(line)
    return "\n".join(lines)


class TreeFormatter:
    """Formats syntax trees to any supported :class:`OutputFormat`."""

    def __init__(
        self,
        config: Optional[FormatConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or FormatConfig()
        self.logger = get_logger(__name__, correlation_id, "tree_formatter")

    def format(
        self, tree: SyntaxTree, output_format: OutputFormat = OutputFormat.TEXT
    ) -> str:
        """Format ``tree`` in ``output_format``."""
        self.logger.debug(
            "Formatting tree", extra={"output_format": output_format.value}
        )
        if output_format is OutputFormat.TEXT:
            return format_tree(tree)
        if output_format is OutputFormat.OUTLINE:
            return render_outline(tree)
        return to_json(tree, self.config)
