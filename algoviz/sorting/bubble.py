"""Bubble sort step generator."""

from __future__ import annotations

from typing import List, Sequence

from algoviz.metadata import AlgorithmInfo, Category, TimeComplexity
from algoviz.steps import (
    CompareStep,
    HighlightKind,
    HighlightStep,
    SortingStep,
    StepRecorder,
    SwapStep,
)


def get_steps(values: Sequence[int]) -> List[SortingStep]:
    recorder: StepRecorder[SortingStep] = StepRecorder()
    arr = list(values)
    n = len(arr)

    for i in range(n - 1):
        for j in range(n - i - 1):
            recorder.emit(
                CompareStep,
                f"Comparing elements at indices {j} and {j + 1}: {arr[j]} vs {arr[j + 1]}",
                indices=(j, j + 1),
                values=(arr[j], arr[j + 1]),
            )
            if arr[j] > arr[j + 1]:
                recorder.emit(
                    SwapStep,
                    f"Swapping {arr[j]} and {arr[j + 1]} at indices {j} and {j + 1}",
                    indices=(j, j + 1),
                    values=(arr[j], arr[j + 1]),
                )
                arr[j], arr[j + 1] = arr[j + 1], arr[j]

        recorder.emit(
            HighlightStep,
            f"Element at index {n - i - 1} is now in its final sorted position",
            indices=(n - i - 1,),
            highlight_type=HighlightKind.SORTED,
        )

    # index 0 is settled once every later index is
    if n > 1:
        recorder.emit(
            HighlightStep,
            "All elements are now sorted",
            indices=(0,),
            highlight_type=HighlightKind.SORTED,
        )

    return recorder.steps


INFO = AlgorithmInfo(
    name="Bubble Sort",
    category=Category.SORTING,
    time_complexity=TimeComplexity(best="O(n)", average="O(n²)", worst="O(n²)"),
    space_complexity="O(1)",
    description=(
        "Bubble Sort repeatedly steps through the list, compares adjacent elements "
        "and swaps them if they are in the wrong order. The pass through the list "
        "is repeated until the list is sorted."
    ),
    pseudocode=[
        "for i = 0 to n-2:",
        "  for j = 0 to n-2-i:",
        "    if arr[j] > arr[j+1]:",
        "      swap arr[j] and arr[j+1]",
    ],
    stable=True,
)
