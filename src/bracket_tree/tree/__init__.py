"""Tree model, builder and layout for bracket notation.

Key Components:
    TreeBuilder: Recursive-descent reader producing unpositioned nodes
    TreeLayoutEngine: Two-pass coordinate assignment
    SyntaxTree: Positioned tree; construction always runs layout
    Node, Leaf, Subtree: Immutable tree data model
    PreOrderIterator: Lazy node, left, right traversal
"""

from .builder import TreeBuilder
from .layout import TreeLayoutEngine, leaf_order
from .model import Leaf, Node, NodeKind, PreOrderIterator, Subtree, walk_with_depth
from .syntax_tree import SyntaxTree

__all__ = [
    "Leaf",
    "Node",
    "NodeKind",
    "PreOrderIterator",
    "Subtree",
    "SyntaxTree",
    "TreeBuilder",
    "TreeLayoutEngine",
    "leaf_order",
    "walk_with_depth",
]
