import io
import json
import sys
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
import unittest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from algoviz.cli import main


def run_cli(*argv):
    stdout = io.StringIO()
    stderr = io.StringIO()
    with redirect_stdout(stdout), redirect_stderr(stderr):
        code = main(list(argv))
    return code, stdout.getvalue(), stderr.getvalue()


class TestCliSort(unittest.TestCase):
    def test_json_trace(self):
        code, out, _ = run_cli("sort", "bubble", "3,1,2", "--output", "json")
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["algorithm"], "bubble")
        self.assertEqual(payload["input"], [3, 1, 2])
        self.assertEqual(payload["result"], [1, 2, 3])
        self.assertEqual(payload["steps"][0]["id"], "step-0")
        self.assertEqual(payload["steps"][0]["type"], "compare")

    def test_text_trace(self):
        code, out, _ = run_cli("sort", "merge", "4 2 3")
        self.assertEqual(code, 0)
        self.assertIn("Merge Sort", out)
        self.assertIn("000. highlight:", out)
        self.assertIn("Result: [2, 3, 4]", out)

    def test_preset(self):
        code, out, _ = run_cli("sort", "heap", "--preset", "duplicates", "--output", "json")
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["result"], sorted([5, 2, 8, 2, 9, 1, 5, 5, 2, 8]))

    def test_unknown_algorithm(self):
        code, _, err = run_cli("sort", "bogo", "1,2")
        self.assertEqual(code, 1)
        self.assertIn("Unknown algorithm: bogo", err)

    def test_speed_must_be_finite(self):
        with self.assertRaises(SystemExit) as ctx:
            run_cli("sort", "bubble", "3,1", "--speed", "nan")
        self.assertEqual(ctx.exception.code, 2)

    def test_unparseable_values(self):
        code, _, err = run_cli("sort", "quick", "a,b")
        self.assertEqual(code, 1)
        self.assertIn("No integer values", err)


class TestCliTree(unittest.TestCase):
    def test_bst_insert_preset(self):
        code, out, _ = run_cli("tree", "bst", "insert", "--output", "json")
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertIsNone(payload["initialTree"])
        self.assertEqual(payload["finalTree"]["value"], 50)
        self.assertEqual(payload["finalTree"]["left"]["value"], 30)

    def test_search_missing_value(self):
        code, out, _ = run_cli("tree", "bst", "search", "65", "--output", "json")
        self.assertEqual(code, 0)
        last = json.loads(out)["steps"][-1]
        self.assertFalse(last["found"])
        self.assertEqual(last["nodeId"], "")

    def test_delete_with_build(self):
        code, out, _ = run_cli(
            "tree", "bst", "delete", "5", "--build", "5,3,8", "--output", "json"
        )
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["initialTree"]["value"], 5)
        self.assertEqual(payload["finalTree"]["value"], 8)

    def test_traversal_kind(self):
        code, out, _ = run_cli(
            "tree", "bst", "traversal", "--build", "2,1,3", "--kind", "preorder", "--output", "json"
        )
        self.assertEqual(code, 0)
        steps = json.loads(out)["steps"]
        self.assertEqual([s["traversalType"] for s in steps], ["preorder"] * 3)
        self.assertEqual([s["visitOrder"] for s in steps], [0, 1, 2])

    def test_avl_balanced(self):
        code, out, _ = run_cli("tree", "avl", "balanced", "--preset", "complex", "--output", "json")
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["steps"], [])
        self.assertEqual(payload["finalTree"]["value"], 10)
        self.assertEqual(payload["finalTree"]["height"], 4)

    def test_avl_balanced_rejects_build(self):
        code, out, err = run_cli(
            "tree", "avl", "balanced", "1,2,3", "--build", "5,6", "--output", "json"
        )
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("does not take --build", err)

    def test_avl_balanced_has_no_starting_tree(self):
        code, out, _ = run_cli("tree", "avl", "balanced", "1,2,3", "--output", "json")
        self.assertEqual(code, 0)
        self.assertIsNone(json.loads(out)["initialTree"])

    def test_avl_insert_text_shows_heights(self):
        code, out, _ = run_cli("tree", "avl", "insert", "10,20,30")
        self.assertEqual(code, 0)
        self.assertIn("tree-rotation", out)
        self.assertIn("h=2", out)

    def test_avl_has_no_delete(self):
        code, _, err = run_cli("tree", "avl", "delete", "10")
        self.assertEqual(code, 1)
        self.assertIn("does not support the delete operation", err)

    def test_delete_needs_exactly_one_value(self):
        self.assertEqual(run_cli("tree", "bst", "delete")[0], 1)
        self.assertEqual(run_cli("tree", "bst", "search", "1,2")[0], 1)

    def test_bad_traversal_kind(self):
        code, _, err = run_cli("tree", "bst", "traversal", "--kind", "level")
        self.assertEqual(code, 1)
        self.assertIn("Unknown traversal", err)


class TestCliInfo(unittest.TestCase):
    def test_list_json(self):
        code, out, _ = run_cli("list", "--output", "json")
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(len(payload["algorithms"]), 8)
        self.assertEqual(payload["algorithms"][0]["id"], "bubble")
        self.assertIn("nearly-sorted", payload["datasets"]["sorting"])

    def test_list_text(self):
        code, out, _ = run_cli("list")
        self.assertEqual(code, 0)
        self.assertIn("Algorithms", out)
        self.assertIn("Tree presets:", out)

    def test_info(self):
        code, out, _ = run_cli("info", "merge", "--output", "json")
        self.assertEqual(code, 0)
        self.assertTrue(json.loads(out)["stable"])
        code, out, _ = run_cli("info", "avl")
        self.assertEqual(code, 0)
        self.assertIn("AVL Tree", out)
        self.assertIn("Insert(value):", out)

    def test_no_command_prints_help(self):
        code, out, _ = run_cli()
        self.assertEqual(code, 1)
        self.assertIn("usage", out)


if __name__ == "__main__":
    unittest.main()
