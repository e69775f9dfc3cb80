"""Node data model for bracket notation syntax trees.

A node is either a :class:`Leaf` carrying a terminal label or a
:class:`Subtree` owning one or two child nodes. Nodes are immutable; layout
coordinates are filled in by producing new nodes rather than by mutation.
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple, Union

from bracket_tree.shared.config import LexicalCategory
from bracket_tree.tokenization import Token, is_whitespace


@dataclass(frozen=True)
class Leaf:
    """Terminal node content: a single label token."""

    label: Token


@dataclass(frozen=True)
class Subtree:
    """Non-terminal node content: a mandatory left child and optional right child."""

    left: "Node"
    right: Optional["Node"] = None


NodeKind = Union[Leaf, Subtree]


@dataclass(frozen=True)
class Node:
    """One bracketed unit of a syntax tree.

    ``whitespace`` holds the whitespace directly before the node's ``[`` and
    directly after its ``]`` that no token has claimed. ``x`` and ``y`` stay
    at zero until the layout engine produces a positioned copy.
    """

    category: Token
    kind: NodeKind
    whitespace: Tuple[str, str] = ("", "")
    x: float = 0.0
    y: int = 0

    def __post_init__(self) -> None:
        """Validate node contents."""
        if not isinstance(self.kind, (Leaf, Subtree)):
            raise TypeError("Node kind must be a Leaf or Subtree")
        if len(self.whitespace) != 2 or not all(
            is_whitespace(part) for part in self.whitespace
        ):
            raise ValueError("Node whitespace must be a pair of whitespace strings")

    @property
    def is_leaf(self) -> bool:
        return isinstance(self.kind, Leaf)

    @property
    def label(self) -> Optional[Token]:
        """Get the label token of a leaf, or None for a subtree."""
        if isinstance(self.kind, Leaf):
            return self.kind.label
        return None

    @property
    def left(self) -> Optional["Node"]:
        if isinstance(self.kind, Subtree):
            return self.kind.left
        return None

    @property
    def right(self) -> Optional["Node"]:
        if isinstance(self.kind, Subtree):
            return self.kind.right
        return None

    @property
    def children(self) -> Tuple["Node", ...]:
        """Get the direct children in left-to-right order."""
        if isinstance(self.kind, Leaf):
            return ()
        if self.kind.right is None:
            return (self.kind.left,)
        return (self.kind.left, self.kind.right)

    @property
    def lexical_category(self) -> Optional[LexicalCategory]:
        """Get the recognized category for this node's tag, if any."""
        return LexicalCategory.from_tag(self.category.value)

    def same_content(self, other: "Node") -> bool:
        """Compare this node with ``other`` ignoring their children."""
        return (
            self.category == other.category
            and self.label == other.label
            and self.whitespace == other.whitespace
            and self.x == other.x
            and self.y == other.y
            and len(self.children) == len(other.children)
        )

    def __iter__(self) -> Iterator["Node"]:
        return PreOrderIterator(self)

    def __repr__(self) -> str:
        if isinstance(self.kind, Leaf):
            content = self.kind.label.value
        else:
            content = f"<{len(self.children)} children>"
        return (
            f"Node({self.category.value!r}, {content}, x={self.x!r}, y={self.y!r})"
        )


class PreOrderIterator:
    """Lazy pre-order traversal: node, then left subtree, then right subtree.

    Each instance walks the tree once. Ask the tree or node for a new iterator
    to traverse again.
    """

    def __init__(self, root: Node) -> None:
        self._pending: List[Node] = [root]

    def __iter__(self) -> "PreOrderIterator":
        return self

    def __next__(self) -> Node:
        if not self._pending:
            raise StopIteration
        node = self._pending.pop()
        if isinstance(node.kind, Subtree):
            if node.kind.right is not None:
                self._pending.append(node.kind.right)
            self._pending.append(node.kind.left)
        return node


def walk_with_depth(root: Node) -> Iterator[Tuple[Node, int]]:
    """Yield ``(node, depth)`` pairs in pre-order, with the root at depth 0."""
    pending: List[Tuple[Node, int]] = [(root, 0)]
    while pending:
        node, depth = pending.pop()
        yield node, depth
        for child in reversed(node.children):
            pending.append((child, depth + 1))
