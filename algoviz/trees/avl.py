"""AVL tree step generator."""

from __future__ import annotations

from typing import Iterable, List, Optional

import logging

from algoviz.config import LayoutConfig
from algoviz.metadata import AlgorithmInfo, Category, TimeComplexity
from algoviz.steps import (
    RotationKind,
    StepRecorder,
    TreeInsertStep,
    TreePosition,
    TreeRotationStep,
    TreeSearchStep,
    TreeStep,
)
from algoviz.trees.nodes import (
    NodeIdGenerator,
    TreeNode,
    TreeResult,
    is_balanced,
    layout_tree,
)

logger = logging.getLogger(__name__)


class AVLStepGenerator:
    """Height-balanced insertion with a rotation step for every rebalance."""

    def __init__(
        self,
        node_ids: Optional[NodeIdGenerator] = None,
        layout: Optional[LayoutConfig] = None,
    ) -> None:
        self.node_ids = node_ids or NodeIdGenerator(prefix="avl-node-", start=1000)
        self.layout = layout or LayoutConfig()

    def insert(
        self, values: Iterable[int], existing_root: Optional[TreeNode] = None
    ) -> TreeResult:
        recorder: StepRecorder[TreeStep] = StepRecorder()
        root = existing_root.copy() if existing_root else None
        # trees built elsewhere may carry no (or stale) heights
        _refresh_heights(root)
        if not is_balanced(root):
            logger.info("Starting tree is not height-balanced; rebuilding it before inserting")
            root = _rebuild_balanced(root)
            layout_tree(root, self.layout)
        for value in values:
            root = self._insert(recorder, root, value, None, TreePosition.ROOT)
            layout_tree(root, self.layout)
        return TreeResult(steps=recorder.steps, final_tree=root)

    def create_balanced(self, values: Iterable[int]) -> Optional[TreeNode]:
        """Build a minimum-height tree straight from the sorted values. No trace is recorded."""
        ordered = sorted(set(values))

        def build(start: int, end: int) -> Optional[TreeNode]:
            if start > end:
                return None
            mid = (start + end) // 2
            node = TreeNode(id=self.node_ids(), value=ordered[mid], height=1)
            node.left = build(start, mid - 1)
            node.right = build(mid + 1, end)
            _update_height(node)
            return node

        root = build(0, len(ordered) - 1)
        layout_tree(root, self.layout)
        return root

    def _insert(
        self,
        recorder: StepRecorder[TreeStep],
        node: Optional[TreeNode],
        value: int,
        parent: Optional[TreeNode],
        position: TreePosition,
    ) -> TreeNode:
        if node is None:
            created = TreeNode(id=self.node_ids(), value=value, height=1)
            if parent is None:
                description = f"Inserting {value} as root node"
            else:
                description = f"Inserting {value} as {position.value} child of {parent.value}"
            recorder.emit(
                TreeInsertStep,
                description,
                node_id=created.id,
                value=value,
                parent_id=parent.id if parent else None,
                position=position,
            )
            return created

        if value < node.value:
            node.left = self._insert(recorder, node.left, value, node, TreePosition.LEFT)
        elif value > node.value:
            node.right = self._insert(recorder, node.right, value, node, TreePosition.RIGHT)
        else:
            recorder.emit(
                TreeSearchStep,
                f"Value {value} already exists in the tree",
                node_id=node.id,
                found=True,
                search_value=value,
            )
            return node

        _update_height(node)
        balance = _balance(node)

        # the heavy child's own balance picks single vs double rotation
        if balance > 1 and _balance(node.left) >= 0:
            return self._rotate_right(recorder, node)

        if balance < -1 and _balance(node.right) <= 0:
            return self._rotate_left(recorder, node)

        if balance > 1:
            recorder.emit(
                TreeRotationStep,
                "Left-Right case detected: First performing left rotation on left subtree",
                rotation_type=RotationKind.LEFT_RIGHT,
                root_node_id=node.id,
                affected_node_ids=(node.left.id, node.left.right.id),
            )
            node.left = self._rotate_left(recorder, node.left)
            return self._rotate_right(recorder, node)

        if balance < -1:
            recorder.emit(
                TreeRotationStep,
                "Right-Left case detected: First performing right rotation on right subtree",
                rotation_type=RotationKind.RIGHT_LEFT,
                root_node_id=node.id,
                affected_node_ids=(node.right.id, node.right.left.id),
            )
            node.right = self._rotate_right(recorder, node.right)
            return self._rotate_left(recorder, node)

        return node

    def _rotate_right(self, recorder: StepRecorder[TreeStep], y: TreeNode) -> TreeNode:
        x = y.left
        t2 = x.right
        recorder.emit(
            TreeRotationStep,
            f"Performing right rotation: {y.value} becomes right child of {x.value}",
            rotation_type=RotationKind.RIGHT,
            root_node_id=y.id,
            affected_node_ids=_affected(x, y, t2),
        )
        logger.debug("Right rotation at %s", y.value)
        x.right = y
        y.left = t2
        # child first: x's height depends on y's
        _update_height(y)
        _update_height(x)
        return x

    def _rotate_left(self, recorder: StepRecorder[TreeStep], x: TreeNode) -> TreeNode:
        y = x.right
        t2 = y.left
        recorder.emit(
            TreeRotationStep,
            f"Performing left rotation: {x.value} becomes left child of {y.value}",
            rotation_type=RotationKind.LEFT,
            root_node_id=x.id,
            affected_node_ids=_affected(x, y, t2),
        )
        logger.debug("Left rotation at %s", x.value)
        y.left = x
        x.right = t2
        _update_height(x)
        _update_height(y)
        return y


def _affected(x: TreeNode, y: TreeNode, t2: Optional[TreeNode]) -> tuple:
    ids: List[str] = [x.id, y.id]
    if t2:
        ids.append(t2.id)
    return tuple(ids)


def _height(node: Optional[TreeNode]) -> int:
    if node is None:
        return 0
    return node.height or 0


def _update_height(node: TreeNode) -> None:
    node.height = 1 + max(_height(node.left), _height(node.right))


def _balance(node: TreeNode) -> int:
    return _height(node.left) - _height(node.right)


def _refresh_heights(node: Optional[TreeNode]) -> int:
    if node is None:
        return 0
    node.height = 1 + max(_refresh_heights(node.left), _refresh_heights(node.right))
    return node.height


def _rebuild_balanced(root: TreeNode) -> TreeNode:
    """Relink the existing nodes into a minimum-height tree. Node ids are kept."""
    nodes = list(root.iter_inorder())

    def link(start: int, end: int) -> Optional[TreeNode]:
        if start > end:
            return None
        mid = (start + end) // 2
        node = nodes[mid]
        node.left = link(start, mid - 1)
        node.right = link(mid + 1, end)
        _update_height(node)
        return node

    return link(0, len(nodes) - 1)


INFO = AlgorithmInfo(
    name="AVL Tree",
    category=Category.TREE,
    time_complexity=TimeComplexity(best="O(log n)", average="O(log n)", worst="O(log n)"),
    space_complexity="O(n)",
    description=(
        "An AVL tree is a self-balancing binary search tree where the heights of the "
        "two child subtrees of any node differ by at most one. If they differ by more "
        "than one, rebalancing is done through rotations to restore this property."
    ),
    pseudocode=[
        "Insert(value):",
        "  1. Perform normal BST insertion",
        "  2. Update height of current node",
        "  3. Get balance factor",
        "  4. If unbalanced, perform rotations:",
        "     - Left Left Case: Right Rotate",
        "     - Right Right Case: Left Rotate",
        "     - Left Right Case: Left Rotate + Right Rotate",
        "     - Right Left Case: Right Rotate + Left Rotate",
    ],
)
