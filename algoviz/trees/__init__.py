"""Step generators for binary search trees and AVL trees."""

from .avl import AVLStepGenerator
from .bst import BSTStepGenerator
from .nodes import (
    NodeIdGenerator,
    TreeNode,
    TreeResult,
    is_balanced,
    is_bst,
    layout_tree,
    tree_height,
    tree_values,
)

__all__ = [
    "AVLStepGenerator",
    "BSTStepGenerator",
    "NodeIdGenerator",
    "TreeNode",
    "TreeResult",
    "is_balanced",
    "is_bst",
    "layout_tree",
    "tree_height",
    "tree_values",
]
