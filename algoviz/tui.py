from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import json
import logging
import select
import sys
import termios
import tty

from rich.console import Console, Group
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from algoviz.metadata import AlgorithmInfo, Category
from algoviz.playback import Playback
from algoviz.render import (
    pseudocode_line_for,
    pseudocode_syntax,
    render_array,
    render_tree,
    sorting_payload,
    tree_payload,
)
from algoviz.replay import array_state_at, final_array, index_roles, tree_focus
from algoviz.steps import BaseStep
from algoviz.trees.nodes import TreeNode

logger = logging.getLogger(__name__)

SPEED_INCREMENT = 0.5


@dataclass
class PlayerSession:
    """Everything the player needs to redraw any step of one generator run."""

    algorithm_id: str
    info: AlgorithmInfo
    steps: List[BaseStep]
    values: List[int] = field(default_factory=list)
    operation: Optional[str] = None
    initial_tree: Optional[TreeNode] = None
    final_tree: Optional[TreeNode] = None

    @property
    def is_tree(self) -> bool:
        return self.info.category is Category.TREE

    def step_at(self, index: int) -> Optional[BaseStep]:
        if not self.steps:
            return None
        return self.steps[max(0, min(index, len(self.steps) - 1))]

    def tree_at(self, index: int) -> Optional[TreeNode]:
        # deleted nodes only exist in the tree the delete started from
        if self.operation == "delete" and index < len(self.steps) - 1:
            return self.initial_tree
        return self.final_tree

    def to_dict(self) -> Dict[str, Any]:
        if self.is_tree:
            return tree_payload(
                self.algorithm_id,
                self.operation or "",
                self.values,
                self.steps,
                self.initial_tree,
                self.final_tree,
            )
        return sorting_payload(
            self.algorithm_id, self.values, self.steps, final_array(self.values, self.steps)
        )


def run_player(
    session: PlayerSession, speed: float = 1.0, unicode: bool = True
) -> None:
    player = PlayerTUI(session=session, speed=speed, unicode=unicode)
    player.run()


class PlayerTUI:
    def __init__(
        self,
        session: PlayerSession,
        speed: float = 1.0,
        unicode: bool = True,
        console: Optional[Console] = None,
        save_dir: Optional[Path] = None,
    ):
        self.session = session
        self.console = console or Console()
        self.unicode = unicode
        self.save_dir = save_dir
        self.playback = Playback(len(session.steps), speed=speed)
        self.status_message = ""
        self.last_key = ""

    def run(self) -> None:
        with Live(self.render(), console=self.console, refresh_per_second=10, screen=True) as live:
            while True:
                key = self._get_key(timeout=0.05)
                if key and self._handle_key(key) == "quit":
                    break
                self.playback.tick()
                live.update(self.render())

    # ===== Rendering =====

    def render(self) -> Layout:
        layout = Layout()
        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="main", ratio=1),
            Layout(name="footer", size=3),
        )
        layout["header"].update(self._render_header())
        layout["main"].split_row(
            Layout(name="visual", ratio=3),
            Layout(name="explanation", ratio=2),
        )
        layout["main"]["visual"].update(self._render_visual())
        layout["main"]["explanation"].update(self._render_explanation())
        layout["footer"].update(self._render_footer())
        return layout

    def _render_header(self) -> Panel:
        title = Text()
        title.append("Algoviz", style="bold cyan")
        title.append("  |  ", style="dim")
        title.append(self.session.info.name, style="green")
        if self.session.operation:
            title.append(f" {self.session.operation}", style="green")
        title.append("  |  ", style="dim")
        if self.session.steps:
            counter = f"Step {self.playback.current_step + 1}/{len(self.session.steps)}"
        else:
            counter = "No steps"
        title.append(counter, style="bold yellow")
        title.append("  |  ", style="dim")
        title.append(f"{self.playback.speed:g}x", style="bold")
        title.append("  ")
        if self.playback.is_playing:
            title.append("playing", style="bold green")
        else:
            title.append("paused", style="dim")
        title.append(f"  {self.playback.progress:.0f}%", style="dim")
        max_width = max(10, self.console.size.width - 4)
        title.truncate(max_width, overflow="ellipsis")
        return Panel(title, style="bold")

    def _render_visual(self) -> Panel:
        index = self.playback.current_step
        step = self.session.step_at(index)
        if self.session.is_tree:
            body = render_tree(
                self.session.tree_at(index),
                focus=tree_focus(step) if step else (),
                show_height=self.session.algorithm_id == "avl",
                title=self.session.info.name,
            )
            return Panel(body, title="Tree", border_style="green", padding=(0, 1))

        if step is None:
            values = list(self.session.values)
            roles: Dict[int, str] = {}
        else:
            values = array_state_at(self.session.values, self.session.steps, index)
            roles = index_roles(step)
        bar_width = max(5, int(self.console.size.width * 0.6) - 20)
        body = render_array(values, roles, width=bar_width, unicode=self.unicode)
        return Panel(body, title="Array", border_style="green", padding=(0, 1))

    def _render_explanation(self) -> Panel:
        step = self.session.step_at(self.playback.current_step)
        description = Text()
        if step is None:
            description.append("No steps recorded for this input.", style="dim")
        else:
            description.append(f"{step.type.value}\n", style="bold cyan")
            description.append(step.description)
        line = pseudocode_line_for(self.session.info, step)
        return Panel(
            Group(description, Text(""), pseudocode_syntax(self.session.info, line)),
            title="Explanation",
            border_style="blue",
            padding=(0, 1),
        )

    def _render_footer(self) -> Panel:
        shortcuts = Text()
        for key, label in (
            ("[<-]", "Prev"),
            ("[->]", "Next"),
            ("[Space]", "Play/Pause"),
            ("[+/-]", "Speed"),
            ("[g/G]", "First/Last"),
            ("[r]", "Reset"),
            ("[s]", "Save"),
            ("[q]", "Quit"),
        ):
            shortcuts.append(f" {key} ", style="bold")
            shortcuts.append(label, style="dim")
        if self.status_message:
            shortcuts.append("  |  ", style="dim")
            shortcuts.append(self.status_message, style="yellow")
        max_width = max(10, self.console.size.width - 4)
        shortcuts.truncate(max_width, overflow="ellipsis")
        return Panel(shortcuts, style="dim")

    # ===== Input Handling =====

    def _handle_key(self, key: str) -> Optional[str]:
        key = self._normalize_key(key)
        self.last_key = key
        playback = self.playback

        if key in ("q", "\x03"):
            return "quit"
        if key in ("h", "LEFT"):
            playback.pause()
            playback.step_backward()
        elif key in ("l", "RIGHT"):
            playback.pause()
            playback.step_forward()
        elif key == " ":
            playback.toggle()
        elif key in ("+", "="):
            playback.set_speed(playback.speed + SPEED_INCREMENT)
        elif key in ("-", "_"):
            playback.set_speed(playback.speed - SPEED_INCREMENT)
        elif key == "g":
            playback.jump_to_step(0)
        elif key == "G":
            playback.jump_to_step(playback.last_index)
        elif key == "r":
            playback.reset()
        elif key == "s":
            self._save_session()
        return None

    def _save_session(self) -> None:
        directory = self.save_dir or Path.cwd()
        path = directory / f"algoviz_{self.session.algorithm_id}_session.json"
        try:
            path.write_text(json.dumps(self.session.to_dict(), indent=2), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not save session to %s: %s", path, exc)
            self.status_message = f"Save failed: {exc.strerror or exc}"
            return
        self.status_message = f"Saved {path.name}"

    def _get_key(self, timeout: float) -> str:
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            ready, _, _ = select.select([sys.stdin], [], [], timeout)
            if not ready:
                return ""
            ch = sys.stdin.read(1)
            if ch == "\x1b":
                seq = ch
                while True:
                    ready, _, _ = select.select([sys.stdin], [], [], 0.02)
                    if not ready:
                        break
                    nxt = sys.stdin.read(1)
                    seq += nxt
                    if nxt.isalpha() or nxt == "~":
                        break
                    if len(seq) >= 12:
                        break
                return seq
            return ch
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    def _normalize_key(self, key: str) -> str:
        if key.startswith("\x1b[") or key.startswith("\x1bO"):
            last = key[-1]
            if last == "C":
                return "RIGHT"
            if last == "D":
                return "LEFT"
            return "ESC"
        if key.startswith("\x1b"):
            return "ESC"
        return key
