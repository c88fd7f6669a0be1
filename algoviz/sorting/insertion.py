"""Insertion sort step generator.

Shifts are recorded as overwrites rather than swaps: the key is held aside
while larger elements move one slot to the right, then written into the gap.
"""

from __future__ import annotations

from typing import List, Sequence

from algoviz.metadata import AlgorithmInfo, Category, TimeComplexity
from algoviz.steps import (
    CompareStep,
    HighlightKind,
    HighlightStep,
    OverwriteStep,
    SortingStep,
    StepRecorder,
)


def get_steps(values: Sequence[int]) -> List[SortingStep]:
    recorder: StepRecorder[SortingStep] = StepRecorder()
    arr = list(values)
    n = len(arr)

    if n > 0:
        recorder.emit(
            HighlightStep,
            "First element is considered sorted",
            indices=(0,),
            highlight_type=HighlightKind.SORTED,
        )

    for i in range(1, n):
        key = arr[i]
        j = i - 1
        recorder.emit(
            HighlightStep,
            f"Inserting element {key} from index {i} into sorted portion",
            indices=(i,),
            highlight_type=HighlightKind.ACTIVE,
        )

        while j >= 0:
            recorder.emit(
                CompareStep,
                f"Comparing {key} with {arr[j]} at index {j}",
                indices=(j, i),
                values=(arr[j], key),
            )
            if arr[j] <= key:
                break

            recorder.emit(
                OverwriteStep,
                f"Moving {arr[j]} from index {j} to index {j + 1}",
                index=j + 1,
                old_value=arr[j + 1],
                new_value=arr[j],
            )
            arr[j + 1] = arr[j]
            j -= 1

        if j + 1 != i:
            recorder.emit(
                OverwriteStep,
                f"Inserting {key} at its correct position (index {j + 1})",
                index=j + 1,
                old_value=arr[j + 1],
                new_value=key,
            )
        arr[j + 1] = key

        recorder.emit(
            HighlightStep,
            f"Elements from index 0 to {i} are now sorted",
            indices=tuple(range(i + 1)),
            highlight_type=HighlightKind.SORTED,
        )

    return recorder.steps


INFO = AlgorithmInfo(
    name="Insertion Sort",
    category=Category.SORTING,
    time_complexity=TimeComplexity(best="O(n)", average="O(n²)", worst="O(n²)"),
    space_complexity="O(1)",
    description=(
        "Insertion Sort builds the final sorted array one item at a time. It works "
        "by taking elements from the unsorted portion and inserting them into their "
        "correct position in the sorted portion."
    ),
    pseudocode=[
        "for i = 1 to n-1:",
        "  key = arr[i]",
        "  j = i - 1",
        "  while j >= 0 and arr[j] > key:",
        "    arr[j+1] = arr[j]",
        "    j = j - 1",
        "  arr[j+1] = key",
    ],
    stable=True,
)
