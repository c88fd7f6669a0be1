"""Tree node model, id minting and canvas layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from algoviz.config import LayoutConfig
from algoviz.steps import TreeStep


@dataclass
class TreeNode:
    """Binary tree node. Children are owned exclusively by their parent."""

    id: str
    value: int
    x: float = 0
    y: float = 0
    left: Optional["TreeNode"] = None
    right: Optional["TreeNode"] = None
    height: Optional[int] = None

    def copy(self) -> "TreeNode":
        """Deep copy of the subtree; node ids are preserved."""
        return TreeNode(
            id=self.id,
            value=self.value,
            x=self.x,
            y=self.y,
            left=self.left.copy() if self.left else None,
            right=self.right.copy() if self.right else None,
            height=self.height,
        )

    def iter_inorder(self) -> Iterator["TreeNode"]:
        stack: List[TreeNode] = []
        node: Optional[TreeNode] = self
        while stack or node:
            while node:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right

    def size(self) -> int:
        return sum(1 for _ in self.iter_inorder())

    def find(self, value: int) -> Optional["TreeNode"]:
        node: Optional[TreeNode] = self
        while node:
            if value == node.value:
                return node
            node = node.left if value < node.value else node.right
        return None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "value": self.value,
            "x": self.x,
            "y": self.y,
        }
        if self.height is not None:
            payload["height"] = self.height
        if self.left:
            payload["left"] = self.left.to_dict()
        if self.right:
            payload["right"] = self.right.to_dict()
        return payload


class NodeIdGenerator:
    """Mints node ids for one tree kind. Ids are never reused by a generator."""

    def __init__(self, prefix: str = "node-", start: int = 0) -> None:
        self.prefix = prefix
        self._next = start

    def __call__(self) -> str:
        node_id = f"{self.prefix}{self._next}"
        self._next += 1
        return node_id

    def peek(self) -> str:
        return f"{self.prefix}{self._next}"


def layout_tree(
    root: Optional[TreeNode], layout: Optional[LayoutConfig] = None
) -> None:
    """Assign x/y to every node: root centered, child offsets halve per level."""
    layout = layout or LayoutConfig()
    _place(root, layout.root_x, layout.root_y, layout.horizontal_spacing, layout.level_height)


def _place(
    node: Optional[TreeNode], x: float, y: float, spacing: float, level_height: float
) -> None:
    if node is None:
        return
    node.x = x
    node.y = y
    child_y = y + level_height
    child_spacing = spacing / 2
    _place(node.left, x - child_spacing, child_y, child_spacing, level_height)
    _place(node.right, x + child_spacing, child_y, child_spacing, level_height)


def tree_height(node: Optional[TreeNode]) -> int:
    """Number of nodes on the longest root-to-leaf path (0 for an empty tree)."""
    if node is None:
        return 0
    return 1 + max(tree_height(node.left), tree_height(node.right))


def tree_values(node: Optional[TreeNode]) -> List[int]:
    if node is None:
        return []
    return [item.value for item in node.iter_inorder()]


def is_bst(node: Optional[TreeNode]) -> bool:
    """True when every left subtree holds strictly smaller and every right subtree strictly larger values."""
    values = tree_values(node)
    return all(a < b for a, b in zip(values, values[1:]))


def is_balanced(node: Optional[TreeNode]) -> bool:
    """True when no node's subtree heights differ by more than one."""
    return _balanced_height(node) >= 0


def _balanced_height(node: Optional[TreeNode]) -> int:
    if node is None:
        return 0
    left = _balanced_height(node.left)
    right = _balanced_height(node.right)
    if left < 0 or right < 0 or abs(left - right) > 1:
        return -1
    return 1 + max(left, right)


@dataclass
class TreeResult:
    """Trace of a structural operation together with the tree it produced."""

    steps: List[TreeStep]
    final_tree: Optional[TreeNode]
