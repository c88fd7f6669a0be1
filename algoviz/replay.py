"""Reconstruct data states from a recorded trace."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from algoviz.errors import TraceError
from algoviz.steps import (
    BaseStep,
    CompareStep,
    HighlightStep,
    MergeStep,
    OverwriteStep,
    SwapStep,
    TreeDeleteStep,
    TreeInsertStep,
    TreeRotationStep,
    TreeSearchStep,
    TreeTraversalStep,
)


def apply_step(array: List[int], step: BaseStep) -> None:
    """Apply one data-changing step to array in place. Other steps leave it untouched."""
    if isinstance(step, SwapStep):
        i, j = step.indices
        array[i], array[j] = array[j], array[i]
    elif isinstance(step, OverwriteStep):
        array[step.index] = step.new_value
    elif isinstance(step, MergeStep):
        array[step.target_index] = step.values[0]


def array_state_at(values: Sequence[int], steps: Sequence[BaseStep], index: int) -> List[int]:
    """Array contents after steps[0..index]. A negative index means before any step."""
    array = list(values)
    if not steps or index < 0:
        return array
    index = min(index, len(steps) - 1)
    for step in steps[: index + 1]:
        apply_step(array, step)
    return array


def final_array(values: Sequence[int], steps: Sequence[BaseStep]) -> List[int]:
    array = list(values)
    for step in steps:
        apply_step(array, step)
    return array


def index_roles(step: BaseStep) -> Dict[int, str]:
    """Display role of every array index a sorting step touches."""
    if isinstance(step, CompareStep):
        return {index: "compare" for index in step.indices}
    if isinstance(step, SwapStep):
        return {index: "swap" for index in step.indices}
    if isinstance(step, OverwriteStep):
        return {step.index: "overwrite"}
    if isinstance(step, MergeStep):
        roles = {index: "merge-source" for index in step.source_indices}
        roles[step.target_index] = "merge-target"
        return roles
    if isinstance(step, HighlightStep):
        return {index: step.highlight_type.value for index in step.indices}
    return {}


def tree_focus(step: BaseStep) -> Tuple[str, ...]:
    """Node ids a tree step draws attention to, most important first."""
    if isinstance(step, TreeInsertStep):
        return tuple(i for i in (step.node_id, step.parent_id) if i)
    if isinstance(step, TreeDeleteStep):
        return tuple(i for i in (step.node_id, step.replacement_node_id) if i)
    if isinstance(step, TreeRotationStep):
        ids = [step.root_node_id]
        ids.extend(i for i in step.affected_node_ids if i != step.root_node_id)
        return tuple(ids)
    if isinstance(step, (TreeSearchStep, TreeTraversalStep)):
        return (step.node_id,) if step.node_id else ()
    return ()


def validate_trace(steps: Sequence[BaseStep]) -> None:
    for position, step in enumerate(steps):
        expected = f"step-{position}"
        if step.id != expected:
            raise TraceError(f"Step at position {position} has id {step.id!r}, expected {expected!r}")
