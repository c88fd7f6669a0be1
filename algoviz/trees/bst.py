"""Binary search tree step generator."""

from __future__ import annotations

from typing import Iterable, List, Optional, Union

import logging

from algoviz.config import LayoutConfig
from algoviz.metadata import AlgorithmInfo, Category, TimeComplexity
from algoviz.steps import (
    StepRecorder,
    TraversalKind,
    TreeDeleteStep,
    TreeInsertStep,
    TreePosition,
    TreeSearchStep,
    TreeStep,
    TreeTraversalStep,
)
from algoviz.trees.nodes import NodeIdGenerator, TreeNode, TreeResult, layout_tree

logger = logging.getLogger(__name__)

_TRAVERSAL_ORDER = {
    TraversalKind.INORDER: "left, root, right",
    TraversalKind.PREORDER: "root, left, right",
    TraversalKind.POSTORDER: "left, right, root",
}


class BSTStepGenerator:
    """Insert/delete/search/traverse a plain BST, recording every probe.

    Structural operations work on a deep copy of the tree handed in, so the
    caller's previous tree stays valid for replay while the returned tree
    carries the accumulated state for the next call.
    """

    def __init__(
        self,
        node_ids: Optional[NodeIdGenerator] = None,
        layout: Optional[LayoutConfig] = None,
    ) -> None:
        self.node_ids = node_ids or NodeIdGenerator(prefix="node-", start=0)
        self.layout = layout or LayoutConfig()

    # ===== Insert =====

    def insert(
        self, values: Iterable[int], existing_root: Optional[TreeNode] = None
    ) -> TreeResult:
        recorder: StepRecorder[TreeStep] = StepRecorder()
        root = existing_root.copy() if existing_root else None
        for value in values:
            root = self._insert_one(recorder, root, value)
        return TreeResult(steps=recorder.steps, final_tree=root)

    def _insert_one(
        self, recorder: StepRecorder[TreeStep], root: Optional[TreeNode], value: int
    ) -> Optional[TreeNode]:
        if root is None:
            node = TreeNode(id=self.node_ids(), value=value)
            recorder.emit(
                TreeInsertStep,
                f"Inserting {value} as root node",
                node_id=node.id,
                value=value,
                position=TreePosition.ROOT,
            )
            layout_tree(node, self.layout)
            return node

        current: Optional[TreeNode] = root
        parent = root
        position = TreePosition.LEFT
        while current:
            parent = current
            recorder.emit(
                TreeSearchStep,
                f"Comparing {value} with {current.value} at node {current.id}",
                node_id=current.id,
                found=False,
                search_value=value,
            )
            if value < current.value:
                position = TreePosition.LEFT
                current = current.left
            elif value > current.value:
                position = TreePosition.RIGHT
                current = current.right
            else:
                recorder.emit(
                    TreeSearchStep,
                    f"Value {value} already exists in the tree",
                    node_id=current.id,
                    found=True,
                    search_value=value,
                )
                return root

        node = TreeNode(id=self.node_ids(), value=value)
        if position is TreePosition.LEFT:
            parent.left = node
        else:
            parent.right = node
        recorder.emit(
            TreeInsertStep,
            f"Inserting {value} as {position.value} child of {parent.value}",
            node_id=node.id,
            value=value,
            parent_id=parent.id,
            position=position,
        )
        layout_tree(root, self.layout)
        return root

    # ===== Delete =====

    def delete(self, value: int, root: Optional[TreeNode]) -> TreeResult:
        recorder: StepRecorder[TreeStep] = StepRecorder()
        root = root.copy() if root else None

        if self._locate(recorder, root, value) is None:
            recorder.emit(
                TreeSearchStep,
                f"Value {value} not found in the tree",
                node_id="",
                found=False,
                search_value=value,
            )
            return TreeResult(steps=recorder.steps, final_tree=root)

        root = self._delete_node(recorder, root, value)
        layout_tree(root, self.layout)
        return TreeResult(steps=recorder.steps, final_tree=root)

    def _locate(
        self, recorder: StepRecorder[TreeStep], node: Optional[TreeNode], value: int
    ) -> Optional[TreeNode]:
        while node:
            recorder.emit(
                TreeSearchStep,
                f"Searching for {value}, currently at node with value {node.value}",
                node_id=node.id,
                found=node.value == value,
                search_value=value,
            )
            if value == node.value:
                return node
            node = node.left if value < node.value else node.right
        return None

    def _delete_node(
        self, recorder: StepRecorder[TreeStep], node: Optional[TreeNode], value: int
    ) -> Optional[TreeNode]:
        if node is None:
            return None
        if value < node.value:
            node.left = self._delete_node(recorder, node.left, value)
            return node
        if value > node.value:
            node.right = self._delete_node(recorder, node.right, value)
            return node

        if node.left is None and node.right is None:
            recorder.emit(
                TreeDeleteStep, f"Deleting leaf node {value}", node_id=node.id
            )
            return None
        if node.left is None:
            recorder.emit(
                TreeDeleteStep,
                f"Deleting node {value} and replacing with right child",
                node_id=node.id,
                replacement_node_id=node.right.id,
            )
            return node.right
        if node.right is None:
            recorder.emit(
                TreeDeleteStep,
                f"Deleting node {value} and replacing with left child",
                node_id=node.id,
                replacement_node_id=node.left.id,
            )
            return node.left

        successor = _leftmost(node.right)
        recorder.emit(
            TreeDeleteStep,
            f"Deleting node {value} and replacing with inorder successor {successor.value}",
            node_id=node.id,
            replacement_node_id=successor.id,
        )
        logger.debug("Two-child delete of %s uses successor %s", value, successor.value)
        node.value = successor.value
        node.right = self._delete_node(recorder, node.right, successor.value)
        return node

    # ===== Search =====

    def search(self, value: int, root: Optional[TreeNode]) -> List[TreeStep]:
        recorder: StepRecorder[TreeStep] = StepRecorder()
        node = root
        while node:
            if value == node.value:
                recorder.emit(
                    TreeSearchStep,
                    f"Found {value} at node {node.id}!",
                    node_id=node.id,
                    found=True,
                    search_value=value,
                )
                return recorder.steps
            recorder.emit(
                TreeSearchStep,
                f"Searching for {value}, currently at node with value {node.value}",
                node_id=node.id,
                found=False,
                search_value=value,
            )
            node = node.left if value < node.value else node.right

        recorder.emit(
            TreeSearchStep,
            f"Reached null node - {value} not found in tree",
            node_id="",
            found=False,
            search_value=value,
        )
        return recorder.steps

    # ===== Traversal =====

    def traversal(
        self, root: Optional[TreeNode], kind: Union[TraversalKind, str]
    ) -> List[TreeStep]:
        kind = TraversalKind(kind)
        recorder: StepRecorder[TreeStep] = StepRecorder()
        order = _TRAVERSAL_ORDER[kind]

        def visit(node: TreeNode) -> None:
            recorder.emit(
                TreeTraversalStep,
                f"Visiting node {node.value} ({kind.value}: {order})",
                node_id=node.id,
                traversal_type=kind,
                visit_order=len(recorder),
            )

        def walk(node: Optional[TreeNode]) -> None:
            if node is None:
                return
            if kind is TraversalKind.PREORDER:
                visit(node)
            walk(node.left)
            if kind is TraversalKind.INORDER:
                visit(node)
            walk(node.right)
            if kind is TraversalKind.POSTORDER:
                visit(node)

        walk(root)
        return recorder.steps


def _leftmost(node: TreeNode) -> TreeNode:
    while node.left:
        node = node.left
    return node


INFO = AlgorithmInfo(
    name="Binary Search Tree",
    category=Category.TREE,
    time_complexity=TimeComplexity(best="O(log n)", average="O(log n)", worst="O(n)"),
    space_complexity="O(n)",
    description=(
        "A Binary Search Tree (BST) is a hierarchical data structure where each node "
        "has at most two children. For every node, all values in the left subtree are "
        "smaller, and all values in the right subtree are larger than the node's value."
    ),
    pseudocode=[
        "Insert(value):",
        "  if root is null:",
        "    root = new Node(value)",
        "  else:",
        "    insertRecursive(root, value)",
        "",
        "Search(value):",
        "  return searchRecursive(root, value)",
        "",
        "Delete(value):",
        "  root = deleteRecursive(root, value)",
    ],
)
