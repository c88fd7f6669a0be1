"""Selection sort step generator."""

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
        min_index = i
        recorder.emit(
            HighlightStep,
            f"Finding minimum element for position {i}",
            indices=(i,),
            highlight_type=HighlightKind.ACTIVE,
        )

        for j in range(i + 1, n):
            recorder.emit(
                CompareStep,
                f"Comparing {arr[j]} at index {j} with current minimum "
                f"{arr[min_index]} at index {min_index}",
                indices=(j, min_index),
                values=(arr[j], arr[min_index]),
            )
            # strict: the leftmost minimum wins ties
            if arr[j] < arr[min_index]:
                min_index = j
                recorder.emit(
                    HighlightStep,
                    f"New minimum found: {arr[min_index]} at index {min_index}",
                    indices=(min_index,),
                    highlight_type=HighlightKind.PIVOT,
                )

        if min_index != i:
            recorder.emit(
                SwapStep,
                f"Swapping minimum element {arr[min_index]} at index {min_index} "
                f"with element {arr[i]} at index {i}",
                indices=(i, min_index),
                values=(arr[i], arr[min_index]),
            )
            arr[i], arr[min_index] = arr[min_index], arr[i]

        recorder.emit(
            HighlightStep,
            f"Element at index {i} is now in its final sorted position",
            indices=(i,),
            highlight_type=HighlightKind.SORTED,
        )

    if n > 1:
        recorder.emit(
            HighlightStep,
            "All elements are now sorted",
            indices=(n - 1,),
            highlight_type=HighlightKind.SORTED,
        )

    return recorder.steps


INFO = AlgorithmInfo(
    name="Selection Sort",
    category=Category.SORTING,
    time_complexity=TimeComplexity(best="O(n²)", average="O(n²)", worst="O(n²)"),
    space_complexity="O(1)",
    description=(
        "Selection Sort divides the input list into two parts: a sorted portion at "
        "the left end and an unsorted portion at the right end. It repeatedly "
        "selects the smallest element from the unsorted portion and moves it to "
        "the end of the sorted portion."
    ),
    pseudocode=[
        "for i = 0 to n-2:",
        "  minIndex = i",
        "  for j = i+1 to n-1:",
        "    if arr[j] < arr[minIndex]:",
        "      minIndex = j",
        "  swap arr[i] and arr[minIndex]",
    ],
    stable=False,
)
