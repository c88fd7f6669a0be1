import sys
from pathlib import Path
import unittest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from algoviz.errors import InvalidInputError
from algoviz.parsing import parse_traversal_kind, parse_values
from algoviz.steps import TraversalKind


class TestParseValues(unittest.TestCase):
    def test_comma_separated(self):
        self.assertEqual(parse_values("5, 3, 8"), [5, 3, 8])

    def test_whitespace_and_negatives(self):
        self.assertEqual(parse_values(" -4 2\t7 "), [-4, 2, 7])

    def test_invalid_tokens_are_dropped(self):
        with self.assertLogs("algoviz.parsing", level="WARNING") as logs:
            self.assertEqual(parse_values("5,x,,3.5,8"), [5, 8])
        self.assertIn("x", logs.output[0])

    def test_nothing_usable(self):
        for text in ("", "   ", "a, b", ","):
            with self.subTest(text=text):
                with self.assertRaises(InvalidInputError):
                    parse_values(text)

    def test_error_is_a_value_error(self):
        with self.assertRaises(ValueError):
            parse_values("none")


class TestParseTraversalKind(unittest.TestCase):
    def test_names(self):
        self.assertIs(parse_traversal_kind("inorder"), TraversalKind.INORDER)
        self.assertIs(parse_traversal_kind("Pre-Order"), TraversalKind.PREORDER)
        self.assertIs(parse_traversal_kind("post"), TraversalKind.POSTORDER)

    def test_unknown(self):
        with self.assertRaises(InvalidInputError):
            parse_traversal_kind("level")


if __name__ == "__main__":
    unittest.main()
