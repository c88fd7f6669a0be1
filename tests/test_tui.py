import io
import json
import sys
import tempfile
from pathlib import Path
import unittest

from rich.console import Console

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from algoviz.registry import build_tree_algorithms, get_sorting_algorithm
from algoviz.tui import PlayerSession, PlayerTUI


def _console():
    return Console(file=io.StringIO(), width=120, height=40)


def _sorting_session(values=(3, 1, 2)):
    algorithm = get_sorting_algorithm("bubble")
    values = list(values)
    return PlayerSession(
        algorithm_id=algorithm.id,
        info=algorithm.info,
        steps=algorithm.get_steps(values),
        values=values,
    )


class TestPlayerKeys(unittest.TestCase):
    def setUp(self):
        self.session = _sorting_session()
        self.player = PlayerTUI(self.session, console=_console())

    def test_arrow_keys_step(self):
        self.player._handle_key("\x1b[C")
        self.player._handle_key("\x1b[C")
        self.assertEqual(self.player.playback.current_step, 2)
        self.player._handle_key("\x1b[D")
        self.assertEqual(self.player.playback.current_step, 1)

    def test_space_toggles_and_speed_keys(self):
        self.player._handle_key(" ")
        self.assertTrue(self.player.playback.is_playing)
        self.player._handle_key("+")
        self.assertEqual(self.player.playback.speed, 1.5)
        self.player._handle_key("-")
        self.player._handle_key("-")
        self.assertEqual(self.player.playback.speed, 0.5)
        self.player._handle_key("l")
        self.assertFalse(self.player.playback.is_playing)

    def test_first_last_reset_quit(self):
        self.player._handle_key("G")
        self.assertEqual(self.player.playback.current_step, len(self.session.steps) - 1)
        self.player._handle_key("g")
        self.assertEqual(self.player.playback.current_step, 0)
        self.player._handle_key("G")
        self.player._handle_key("r")
        self.assertEqual(self.player.playback.current_step, 0)
        self.assertEqual(self.player._handle_key("q"), "quit")
        self.assertEqual(self.player._handle_key("\x03"), "quit")
        self.assertIsNone(self.player._handle_key("x"))

    def test_save_writes_trace(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            player = PlayerTUI(self.session, console=_console(), save_dir=Path(tmpdir))
            player._handle_key("s")
            saved = Path(tmpdir) / "algoviz_bubble_session.json"
            payload = json.loads(saved.read_text(encoding="utf-8"))
        self.assertEqual(payload["result"], [1, 2, 3])
        self.assertEqual(len(payload["steps"]), len(self.session.steps))
        self.assertIn("Saved", player.status_message)


class TestPlayerRendering(unittest.TestCase):
    def test_sorting_frames_render(self):
        console = _console()
        player = PlayerTUI(_sorting_session(), console=console, unicode=False)
        for _ in range(len(player.session.steps)):
            console.print(player.render())
            player._handle_key("l")
        output = console.file.getvalue()
        self.assertIn("Bubble Sort", output)
        self.assertIn("compare", output)

    def test_empty_trace_renders(self):
        console = _console()
        player = PlayerTUI(_sorting_session(values=()), console=console)
        console.print(player.render())
        self.assertIn("No steps recorded", console.file.getvalue())

    def test_delete_shows_starting_tree_until_last_step(self):
        bst = build_tree_algorithms()["bst"]
        initial = bst.operation("insert")([50, 30, 70]).final_tree
        result = bst.operation("delete")(30, initial)
        session = PlayerSession(
            algorithm_id="bst",
            info=bst.info,
            steps=result.steps,
            values=[30],
            operation="delete",
            initial_tree=initial,
            final_tree=result.final_tree,
        )
        self.assertIs(session.tree_at(0), initial)
        self.assertIs(session.tree_at(len(result.steps) - 1), result.final_tree)
        self.assertEqual(session.to_dict()["operation"], "delete")

        console = _console()
        console.print(PlayerTUI(session, console=console).render())
        self.assertIn("30", console.file.getvalue())


if __name__ == "__main__":
    unittest.main()
