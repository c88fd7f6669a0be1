"""Command-line interface for generating and playing algorithm traces."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler

from algoviz.config import Settings, finite_float, load_settings
from algoviz.errors import AlgovizError, InvalidInputError
from algoviz.metadata import Category
from algoviz.parsing import parse_traversal_kind, parse_values
from algoviz.registry import (
    algorithm_ids,
    build_tree_algorithms,
    dataset_names,
    get_dataset,
    get_info,
    get_sorting_algorithm,
    get_tree_algorithm,
)
from algoviz.render import (
    algorithm_table,
    render_info,
    render_tree,
    sorting_payload,
    step_line,
    tree_payload,
)
from algoviz.replay import final_array
from algoviz.trees.avl import AVLStepGenerator
from algoviz.trees.bst import BSTStepGenerator
from algoviz.trees.nodes import TreeNode

logger = logging.getLogger(__name__)

# command-line operation name -> registry operation name
TREE_COMMANDS = {
    "insert": "insert",
    "delete": "delete",
    "search": "search",
    "traversal": "traversal",
    "balanced": "create_balanced",
}


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings()
    configure_logging("DEBUG" if args.verbose else settings.log_level)
    console = Console()

    try:
        if args.command == "list":
            return run_list(args, console)
        if args.command == "info":
            return run_info(args, console)
        if args.command == "sort":
            return run_sort(args, settings, console)
        if args.command == "tree":
            return run_tree(args, settings, console)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 1
    except AlgovizError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="algoviz", description="Step through sorting and tree algorithms"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug details to stderr",
    )
    subparsers = parser.add_subparsers(dest="command")

    listing = subparsers.add_parser("list", help="List algorithms and preset datasets")
    _add_output(listing)

    info = subparsers.add_parser("info", help="Show complexity and pseudocode")
    info.add_argument("algorithm", help="Algorithm id, e.g. merge or avl")
    _add_output(info)

    sort = subparsers.add_parser("sort", help="Trace a sorting algorithm")
    sort.add_argument("algorithm", help="bubble, selection, insertion, merge, quick or heap")
    sort.add_argument("values", nargs="?", help="Comma separated integers, e.g. '5,3,8'")
    sort.add_argument(
        "--preset",
        default=None,
        help=f"Preset dataset ({', '.join(dataset_names(Category.SORTING))})",
    )
    _add_output(sort)
    _add_play(sort)

    tree = subparsers.add_parser("tree", help="Trace a tree operation")
    tree.add_argument("algorithm", help="bst or avl")
    tree.add_argument("operation", choices=list(TREE_COMMANDS), help="Operation to trace")
    tree.add_argument(
        "values",
        nargs="?",
        help="Values to insert, or the single value to delete/search",
    )
    tree.add_argument(
        "--preset",
        default=None,
        help=f"Preset dataset ({', '.join(dataset_names(Category.TREE))})",
    )
    tree.add_argument(
        "--build",
        default=None,
        help="Values inserted before the traced operation",
    )
    tree.add_argument(
        "--kind",
        default="inorder",
        help="Traversal order: inorder, preorder or postorder",
    )
    _add_output(tree)
    _add_play(tree)
    return parser


def _add_output(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output",
        choices=["text", "json"],
        default="text",
        help="Output format",
    )


def _add_play(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--play",
        action="store_true",
        help="Open the interactive player",
    )
    parser.add_argument(
        "--speed",
        type=finite_float,
        default=None,
        help="Playback speed between 0.1 and 5 (default: ALGOVIZ_SPEED or 1)",
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# ===== Commands =====


def run_list(args, console: Console) -> int:
    ids = algorithm_ids()
    if args.output == "json":
        payload = {
            "algorithms": [{"id": algorithm_id, **get_info(algorithm_id).to_dict()} for algorithm_id in ids],
            "datasets": {
                Category.SORTING.value: dataset_names(Category.SORTING),
                Category.TREE.value: dataset_names(Category.TREE),
            },
        }
        print(json.dumps(payload, indent=2))
        return 0

    console.print(algorithm_table((algorithm_id, get_info(algorithm_id)) for algorithm_id in ids))
    console.print(f"Sorting presets: {', '.join(dataset_names(Category.SORTING))}")
    console.print(f"Tree presets: {', '.join(dataset_names(Category.TREE))}")
    return 0


def run_info(args, console: Console) -> int:
    info = get_info(args.algorithm)
    if args.output == "json":
        print(json.dumps(info.to_dict(), indent=2))
    else:
        console.print(render_info(args.algorithm.strip().lower(), info))
    return 0


def run_sort(args, settings: Settings, console: Console) -> int:
    algorithm = get_sorting_algorithm(args.algorithm)
    if args.values:
        values = parse_values(args.values)
    else:
        values = get_dataset(Category.SORTING, args.preset or "small")

    steps = algorithm.get_steps(values)
    result = final_array(values, steps)
    logger.debug("%s produced %d steps for %d values", algorithm.id, len(steps), len(values))

    if args.play:
        from algoviz.tui import PlayerSession

        session = PlayerSession(
            algorithm_id=algorithm.id, info=algorithm.info, steps=steps, values=values
        )
        _play(session, args, settings)
        return 0

    if args.output == "json":
        print(json.dumps(sorting_payload(algorithm.id, values, steps, result), indent=2))
        return 0

    console.print(f"{algorithm.name}: {values}", highlight=False, markup=False)
    for index, step in enumerate(steps):
        console.print(step_line(index, step), highlight=False, markup=False)
    console.print(f"Result: {result}", highlight=False, markup=False)
    return 0


def run_tree(args, settings: Settings, console: Console) -> int:
    algorithms = build_tree_algorithms(
        BSTStepGenerator(layout=settings.layout), AVLStepGenerator(layout=settings.layout)
    )
    algorithm = get_tree_algorithm(args.algorithm, algorithms)
    operation_name = TREE_COMMANDS[args.operation]
    operation = algorithm.operation(operation_name)
    values, initial_tree = _tree_inputs(args, algorithm.operation("insert"))

    final_tree: Optional[TreeNode] = initial_tree
    if operation_name == "insert":
        result = operation(values, initial_tree)
        steps, final_tree = result.steps, result.final_tree
    elif operation_name == "delete":
        result = operation(values[0], initial_tree)
        steps, final_tree = result.steps, result.final_tree
    elif operation_name == "search":
        steps = operation(values[0], initial_tree)
    elif operation_name == "traversal":
        steps = operation(initial_tree, parse_traversal_kind(args.kind))
    else:
        steps = []
        final_tree = operation(values)
    logger.debug("%s %s produced %d steps", algorithm.id, operation_name, len(steps))

    if args.play:
        from algoviz.tui import PlayerSession

        session = PlayerSession(
            algorithm_id=algorithm.id,
            info=algorithm.info,
            steps=steps,
            values=values,
            operation=args.operation,
            initial_tree=initial_tree,
            final_tree=final_tree,
        )
        _play(session, args, settings)
        return 0

    if args.output == "json":
        payload = tree_payload(
            algorithm.id, args.operation, values, steps, initial_tree, final_tree
        )
        print(json.dumps(payload, indent=2))
        return 0

    for index, step in enumerate(steps):
        console.print(step_line(index, step), highlight=False, markup=False)
    if not steps:
        console.print("No steps recorded.", style="dim")
    console.print(
        render_tree(final_tree, show_height=algorithm.id == "avl", title=algorithm.name)
    )
    return 0


def _tree_inputs(args, insert) -> Tuple[List[int], Optional[TreeNode]]:
    """Resolve the operation's values and the tree it starts from."""
    if args.operation == "balanced" and args.build:
        raise InvalidInputError("balanced builds a new tree and does not take --build")
    if args.operation in ("insert", "balanced"):
        if args.values:
            values = parse_values(args.values)
        else:
            values = get_dataset(Category.TREE, args.preset or "small")
        seed = parse_values(args.build) if args.build else []
        initial_tree = insert(seed).final_tree if seed else None
        return values, initial_tree

    if args.build:
        seed = parse_values(args.build)
    else:
        seed = get_dataset(Category.TREE, args.preset or "small")
    initial_tree = insert(seed).final_tree

    if args.operation == "traversal":
        return [], initial_tree
    if not args.values:
        raise InvalidInputError(f"{args.operation} needs a value, e.g. 'algoviz tree bst {args.operation} 40'")
    values = parse_values(args.values)
    if len(values) != 1:
        raise InvalidInputError(f"{args.operation} takes exactly one value, got {len(values)}")
    return values, initial_tree


def _play(session, args, settings: Settings) -> None:
    if not sys.stdin.isatty():
        raise AlgovizError("--play needs an interactive terminal")
    from algoviz.tui import run_player

    speed = args.speed if args.speed is not None else settings.default_speed
    run_player(session, speed=speed, unicode=settings.unicode)


if __name__ == "__main__":
    raise SystemExit(main())
