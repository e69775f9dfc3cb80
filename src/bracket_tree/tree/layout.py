"""Deterministic two-pass layout for syntax trees.

Pass one numbers the leaves left to right. Pass two walks the tree bottom-up,
giving every node its depth as ``y`` and placing each parent at the midpoint
of its children. Both passes use explicit work lists, so layout never depends
on the interpreter's recursion limit.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from bracket_tree.shared import get_logger

from .model import Leaf, Node, Subtree, walk_with_depth

# Keys are id() of nodes from the tree being laid out
LeafPositions = Dict[int, float]


class TreeLayoutEngine:
    """Assigns abstract (x, y) coordinates to every node of a tree.

    Leaves get x = 0, 1, ..., n-1 from left to right. A node with two children
    sits halfway between them, a node with one child sits directly above it.
    ``y`` is the node's depth.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "layout")

    def layout(self, root: Node) -> Node:
        """Run both layout passes and return a positioned copy of ``root``."""
        positions, next_x = self.assign_leaves(root)
        positioned = self.compute_coordinates(root, positions)
        self.logger.debug(
            "Layout completed",
            extra={"leaf_count": int(next_x), "root_x": positioned.x},
        )
        return positioned

    def assign_leaves(
        self, root: Node, start_x: float = 0.0
    ) -> Tuple[LeafPositions, float]:
        """Number the leaves under ``root`` left to right starting at ``start_x``.

        Returns:
            Mapping from leaf identity to x, and the next free x
        """
        positions: LeafPositions = {}
        running_x = start_x
        for node, _ in walk_with_depth(root):
            if isinstance(node.kind, Leaf):
                positions[id(node)] = running_x
                running_x += 1.0
        return positions, running_x

    def compute_coordinates(
        self, root: Node, positions: LeafPositions, depth: int = 0
    ) -> Node:
        """Build the positioned tree from leaf positions.

        Nodes are visited in reverse pre-order so that both children of a
        subtree are finished before the subtree itself.
        """
        order = list(walk_with_depth(root))
        placed: Dict[int, Node] = {}

        for node, relative_depth in reversed(order):
            y = depth + relative_depth
            if isinstance(node.kind, Leaf):
                placed[id(node)] = replace(node, x=positions[id(node)], y=y)
                continue

            left = placed.pop(id(node.kind.left))
            right: Optional[Node] = None
            if node.kind.right is not None:
                right = placed.pop(id(node.kind.right))
                x = (left.x + right.x) / 2.0
            else:
                x = left.x
            placed[id(node)] = replace(
                node, kind=Subtree(left=left, right=right), x=x, y=y
            )

        return placed[id(root)]


def leaf_order(root: Node) -> List[Node]:
    """Get the leaves under ``root`` in left-to-right order."""
    return [node for node, _ in walk_with_depth(root) if node.is_leaf]
