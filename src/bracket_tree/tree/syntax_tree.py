"""Positioned syntax tree container."""

from itertools import zip_longest
from typing import Any, Dict, Iterator, List, Optional

from .layout import TreeLayoutEngine, leaf_order
from .model import Leaf, Node, PreOrderIterator, walk_with_depth


class SyntaxTree:
    """A parsed tree whose nodes all carry layout coordinates.

    The constructor always runs layout, so a ``SyntaxTree`` is never seen in
    an unpositioned state. The tree is read-only after construction.
    """

    def __init__(self, root: Node, correlation_id: Optional[str] = None) -> None:
        self._root = TreeLayoutEngine(correlation_id).layout(root)

    @property
    def root(self) -> Node:
        return self._root

    def iter(self) -> PreOrderIterator:
        """Start a new pre-order traversal over all nodes."""
        return PreOrderIterator(self._root)

    def __iter__(self) -> Iterator[Node]:
        return self.iter()

    def leaves(self) -> List[Node]:
        """Get all leaves in left-to-right order."""
        return leaf_order(self._root)

    @property
    def node_count(self) -> int:
        return sum(1 for _ in self.iter())

    @property
    def leaf_count(self) -> int:
        return len(self.leaves())

    @property
    def depth(self) -> int:
        """Get the depth of the deepest node (a single leaf has depth 0)."""
        return max(node.y for node in self.iter())

    def find_all(self, category: str) -> List[Node]:
        """Find all nodes tagged with ``category`` in pre-order."""
        return [node for node in self.iter() if node.category.value == category]

    def to_dict(
        self, include_whitespace: bool = False, include_positions: bool = False
    ) -> Dict[str, Any]:
        """Convert the tree to nested dictionaries.

        Each node becomes ``{"category", "x", "y"}`` plus either ``"label"`` or
        ``"children"``. Built bottom-up from a pre-order walk, so deep trees do
        not recurse.
        """
        built: Dict[int, Dict[str, Any]] = {}

        for node, _ in reversed(list(walk_with_depth(self._root))):
            entry: Dict[str, Any] = {
                "category": node.category.value,
                "x": node.x,
                "y": node.y,
            }
            if isinstance(node.kind, Leaf):
                entry["label"] = node.kind.label.value
            else:
                entry["children"] = [built.pop(id(child)) for child in node.children]

            if include_whitespace:
                entry["whitespace"] = _whitespace_dict(node)
            if include_positions and node.category.position is not None:
                entry["position"] = node.category.position.to_dict()
            built[id(node)] = entry

        return built[id(self._root)]

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, SyntaxTree):
            return NotImplemented
        pairs = zip_longest(
            walk_with_depth(self._root), walk_with_depth(other._root),
            fillvalue=(None, 0),
        )
        for (mine, _), (theirs, _) in pairs:
            if mine is None or theirs is None or not mine.same_content(theirs):
                return False
        return True

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"SyntaxTree(root={self._root.category.value!r}, "
            f"nodes={self.node_count}, leaves={self.leaf_count})"
        )


def _whitespace_dict(node: Node) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "opening": node.whitespace[0],
        "closing": node.whitespace[1],
        "category": [node.category.prefix, node.category.suffix],
    }
    if node.label is not None:
        result["label"] = [node.label.prefix, node.label.suffix]
    return result
