"""Rich renderables and JSON payloads for traces, arrays and trees."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound
from rich.console import Group
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from algoviz.metadata import AlgorithmInfo
from algoviz.steps import BaseStep, StepType, trace_to_dicts
from algoviz.trees.nodes import TreeNode

PSEUDOCODE_LANGUAGE = "python"

ROLE_STYLES = {
    "compare": "bold yellow",
    "swap": "bold red",
    "overwrite": "bold magenta",
    "merge-target": "bold green",
    "merge-source": "cyan",
    "active": "bold blue",
    "sorted": "green",
    "pivot": "bold magenta",
    "merge": "cyan",
    "partition": "blue",
}

# first pseudocode line containing one of these words is highlighted
_PSEUDOCODE_HINTS = {
    StepType.COMPARE: ("if", "while", "<", ">"),
    StepType.SWAP: ("swap",),
    StepType.OVERWRITE: ("arr[",),
    StepType.MERGE: ("merge(",),
    StepType.TREE_INSERT: ("Insert",),
    StepType.TREE_SEARCH: ("Search", "Insert"),
    StepType.TREE_DELETE: ("Delete",),
    StepType.TREE_ROTATION: ("Rotate", "rotations"),
}


# ===== Arrays =====


def render_array(
    values: Sequence[int],
    roles: Optional[Dict[int, str]] = None,
    width: int = 40,
    unicode: bool = True,
) -> Text:
    """One horizontal bar per element, colored by the role the current step gives it."""
    roles = roles or {}
    text = Text()
    if not values:
        text.append("(empty array)", style="dim")
        return text
    peak = max(max(abs(v) for v in values), 1)
    bar_char = "█" if unicode else "#"
    index_width = len(str(len(values) - 1))
    for index, value in enumerate(values):
        if index:
            text.append("\n")
        role = roles.get(index)
        style = ROLE_STYLES.get(role, "white") if role else "white"
        length = max(1, round(abs(value) / peak * width))
        text.append(f"{index:>{index_width}} ", style="dim")
        text.append(bar_char * length, style=style)
        text.append(f" {value}", style=style if role else "")
        if role:
            text.append(f"  {role}", style="dim")
    return text


# ===== Trees =====


def render_tree(
    root: Optional[TreeNode],
    focus: Sequence[str] = (),
    show_height: bool = False,
    title: str = "tree",
) -> Tree:
    """Tree view with L/R child markers. The first focus id gets the strongest style."""
    tree = Tree(Text(title, style="bold"), guide_style="dim")
    if root is None:
        tree.add(Text("(empty)", style="dim"))
        return tree
    _add_node(tree, root, "", list(focus), show_height)
    return tree


def _add_node(
    parent: Tree, node: TreeNode, side: str, focus: List[str], show_height: bool
) -> None:
    label = Text()
    if side:
        label.append(f"{side}: ", style="dim")
    if focus and node.id == focus[0]:
        style = "bold reverse yellow"
    elif node.id in focus:
        style = "bold yellow"
    else:
        style = ""
    label.append(str(node.value), style=style)
    if show_height and node.height is not None:
        label.append(f" h={node.height}", style="dim")
    branch = parent.add(label)
    if node.left is None and node.right is None:
        return
    for child, child_side in ((node.left, "L"), (node.right, "R")):
        if child is None:
            branch.add(Text(f"{child_side}: -", style="dim"))
        else:
            _add_node(branch, child, child_side, focus, show_height)


# ===== Metadata =====


def algorithm_table(entries: Iterable[tuple]) -> Table:
    """Table of (id, AlgorithmInfo) pairs."""
    table = Table(title="Algorithms", header_style="bold cyan")
    table.add_column("id", style="bold")
    table.add_column("name")
    table.add_column("category")
    table.add_column("best / average / worst")
    table.add_column("space")
    table.add_column("stable")
    for algorithm_id, info in entries:
        complexity = info.time_complexity
        stable = "-" if info.stable is None else ("yes" if info.stable else "no")
        table.add_row(
            algorithm_id,
            info.name,
            info.category.value,
            f"{complexity.best} / {complexity.average} / {complexity.worst}",
            info.space_complexity,
            stable,
        )
    return table


def pseudocode_syntax(
    info: AlgorithmInfo, highlight_line: Optional[int] = None
) -> Syntax:
    code = "\n".join(info.pseudocode) or "(no pseudocode)"
    return Syntax(
        code,
        get_lexer(PSEUDOCODE_LANGUAGE),
        theme="ansi_dark",
        line_numbers=True,
        highlight_lines={highlight_line} if highlight_line else set(),
        word_wrap=True,
        background_color="default",
    )


def pseudocode_line_for(info: AlgorithmInfo, step: Optional[BaseStep]) -> Optional[int]:
    """1-based pseudocode line that best matches step, if any."""
    if step is None:
        return None
    for hint in _PSEUDOCODE_HINTS.get(step.type, ()):
        for number, line in enumerate(info.pseudocode, start=1):
            if hint in line:
                return number
    return None


def render_info(algorithm_id: str, info: AlgorithmInfo) -> Group:
    details = Table(show_header=False, box=None, padding=(0, 1))
    details.add_row(Text("id", style="bold cyan"), algorithm_id)
    details.add_row(Text("name", style="bold cyan"), info.name)
    details.add_row(Text("category", style="bold cyan"), info.category.value)
    complexity = info.time_complexity
    details.add_row(Text("best", style="bold cyan"), complexity.best)
    details.add_row(Text("average", style="bold cyan"), complexity.average)
    details.add_row(Text("worst", style="bold cyan"), complexity.worst)
    details.add_row(Text("space", style="bold cyan"), info.space_complexity)
    if info.stable is not None:
        details.add_row(Text("stable", style="bold cyan"), "yes" if info.stable else "no")
    return Group(details, Text(""), Text(info.description), Text(""), pseudocode_syntax(info))


def get_lexer(name: str):
    try:
        return get_lexer_by_name(name)
    except ClassNotFound:
        return TextLexer()


# ===== Text and JSON output =====


def step_line(index: int, step: BaseStep) -> str:
    return f"{index:03d}. {step.type.value}: {step.description}"


def tree_to_dict(root: Optional[TreeNode]) -> Optional[Dict[str, Any]]:
    return root.to_dict() if root else None


def sorting_payload(
    algorithm_id: str, values: Sequence[int], steps: Sequence[BaseStep], result: Sequence[int]
) -> Dict[str, Any]:
    return {
        "algorithm": algorithm_id,
        "input": list(values),
        "steps": trace_to_dicts(steps),
        "result": list(result),
    }


def tree_payload(
    algorithm_id: str,
    operation: str,
    values: Sequence[int],
    steps: Sequence[BaseStep],
    initial_tree: Optional[TreeNode],
    final_tree: Optional[TreeNode],
) -> Dict[str, Any]:
    return {
        "algorithm": algorithm_id,
        "operation": operation,
        "input": list(values),
        "initialTree": tree_to_dict(initial_tree),
        "steps": trace_to_dicts(steps),
        "finalTree": tree_to_dict(final_tree),
    }
