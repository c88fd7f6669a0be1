import random
import sys
from pathlib import Path
import unittest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from algoviz.steps import RotationKind, TreeInsertStep, TreeRotationStep, TreeSearchStep
from algoviz.trees import (
    AVLStepGenerator,
    BSTStepGenerator,
    is_balanced,
    is_bst,
    tree_height,
    tree_values,
)


def _rotations(steps):
    return [s.rotation_type for s in steps if isinstance(s, TreeRotationStep)]


def _heights_are_exact(node):
    if node is None:
        return True
    if node.height != tree_height(node):
        return False
    return _heights_are_exact(node.left) and _heights_are_exact(node.right)


class TestAVLInsert(unittest.TestCase):
    def setUp(self):
        self.generator = AVLStepGenerator()

    def test_ascending_input_is_rebalanced(self):
        result = self.generator.insert([10, 20, 30, 40, 50])
        self.assertIn(RotationKind.LEFT, _rotations(result.steps))
        self.assertLessEqual(tree_height(result.final_tree), 3)
        self.assertEqual(tree_values(result.final_tree), [10, 20, 30, 40, 50])

    def test_left_left_case_rotates_right(self):
        result = self.generator.insert([30, 20, 10])
        rotations = [s for s in result.steps if isinstance(s, TreeRotationStep)]
        self.assertEqual(len(rotations), 1)
        rotation = rotations[0]
        self.assertIs(rotation.rotation_type, RotationKind.RIGHT)
        self.assertEqual(rotation.root_node_id, "avl-node-1000")
        self.assertEqual(rotation.affected_node_ids, ("avl-node-1001", "avl-node-1000"))
        self.assertEqual(result.final_tree.value, 20)

    def test_left_right_case(self):
        result = self.generator.insert([30, 10, 20])
        self.assertEqual(
            _rotations(result.steps),
            [RotationKind.LEFT_RIGHT, RotationKind.LEFT, RotationKind.RIGHT],
        )
        self.assertEqual(result.final_tree.value, 20)
        self.assertEqual(result.final_tree.left.value, 10)
        self.assertEqual(result.final_tree.right.value, 30)

    def test_right_left_case(self):
        result = self.generator.insert([10, 30, 20])
        self.assertEqual(
            _rotations(result.steps),
            [RotationKind.RIGHT_LEFT, RotationKind.RIGHT, RotationKind.LEFT],
        )
        self.assertEqual(result.final_tree.value, 20)

    def test_balance_holds_after_every_insert(self):
        rng = random.Random(99)
        values = rng.sample(range(1, 500), 60)
        root = None
        for value in values:
            root = self.generator.insert([value], root).final_tree
            self.assertTrue(is_balanced(root))
            self.assertTrue(is_bst(root))
            self.assertTrue(_heights_are_exact(root))
        self.assertEqual(tree_values(root), sorted(values))

    def test_inserts_record_real_parent(self):
        result = self.generator.insert([50, 40])
        inserts = [s for s in result.steps if isinstance(s, TreeInsertStep)]
        self.assertIsNone(inserts[0].parent_id)
        self.assertEqual(inserts[1].parent_id, "avl-node-1000")
        self.assertEqual(inserts[1].position.value, "left")

    def test_duplicate_emits_found_step_only(self):
        result = self.generator.insert([10, 10])
        self.assertEqual(result.final_tree.size(), 1)
        last = result.steps[-1]
        self.assertIsInstance(last, TreeSearchStep)
        self.assertTrue(last.found)
        self.assertEqual(last.node_id, result.final_tree.id)

    def test_step_ids_are_sequential(self):
        steps = self.generator.insert([10, 5, 15, 2, 7, 12, 20, 1, 3, 6, 8, 11, 13, 17, 25]).steps
        self.assertEqual([s.id for s in steps], [f"step-{i}" for i in range(len(steps))])

    def test_existing_tree_without_heights(self):
        plain = BSTStepGenerator().insert([1, 2]).final_tree
        self.assertIsNone(plain.height)
        result = self.generator.insert([3], plain)
        self.assertEqual(_rotations(result.steps), [RotationKind.LEFT])
        self.assertEqual(result.final_tree.value, 2)
        self.assertIsNone(plain.height)

    def test_unbalanced_bst_chains_are_accepted(self):
        cases = [([50, 40, 30, 20], 60), ([1, 2, 3, 4, 5], 0), ([10, 20, 30, 40, 50, 60, 70], 45)]
        for seed, value in cases:
            with self.subTest(seed=seed, value=value):
                chain = BSTStepGenerator().insert(seed).final_tree
                result = self.generator.insert([value], chain)
                root = result.final_tree
                self.assertTrue(is_balanced(root))
                self.assertTrue(is_bst(root))
                self.assertTrue(_heights_are_exact(root))
                self.assertEqual(tree_values(root), sorted(seed + [value]))
                self.assertEqual(tree_values(chain), sorted(seed))
                self.assertEqual(root.find(seed[0]).id, chain.id)

    def test_layout_follows_rotation(self):
        root = self.generator.insert([10, 20, 30]).final_tree
        self.assertEqual((root.x, root.y), (400, 50))
        self.assertEqual(root.left.x, 300)
        self.assertEqual(root.right.x, 500)


class TestCreateBalanced(unittest.TestCase):
    def test_midpoint_root(self):
        root = AVLStepGenerator().create_balanced([7, 1, 3, 2, 6, 5, 4])
        self.assertEqual(root.value, 4)
        self.assertEqual(tree_height(root), 3)
        self.assertEqual(root.height, 3)
        self.assertTrue(is_balanced(root))

    def test_duplicates_and_empty_input(self):
        generator = AVLStepGenerator()
        self.assertEqual(tree_values(generator.create_balanced([3, 3, 1, 1])), [1, 3])
        self.assertIsNone(generator.create_balanced([]))

    def test_balanced_tree_accepts_further_inserts(self):
        generator = AVLStepGenerator()
        root = generator.create_balanced(range(1, 8))
        result = generator.insert([8, 9], root)
        self.assertTrue(is_balanced(result.final_tree))
        self.assertEqual(tree_values(root), list(range(1, 8)))


if __name__ == "__main__":
    unittest.main()
