"""Quick sort step generator (Lomuto partition, rightmost pivot)."""

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

    def quick_sort(low: int, high: int) -> None:
        if low >= high:
            return
        recorder.emit(
            HighlightStep,
            f"Sorting subarray from index {low} to {high}",
            indices=tuple(range(low, high + 1)),
            highlight_type=HighlightKind.PARTITION,
        )
        pivot_index = partition(low, high)
        quick_sort(low, pivot_index - 1)
        quick_sort(pivot_index + 1, high)

    def partition(low: int, high: int) -> int:
        pivot = arr[high]
        recorder.emit(
            HighlightStep,
            f"Selected pivot: {pivot} at index {high}",
            indices=(high,),
            highlight_type=HighlightKind.PIVOT,
        )

        i = low - 1
        for j in range(low, high):
            recorder.emit(
                CompareStep,
                f"Comparing {arr[j]} at index {j} with pivot {pivot}",
                indices=(j, high),
                values=(arr[j], pivot),
            )
            if arr[j] <= pivot:
                i += 1
                if i != j:
                    recorder.emit(
                        SwapStep,
                        f"Swapping {arr[i]} at index {i} with {arr[j]} at index {j} "
                        "(both ≤ pivot)",
                        indices=(i, j),
                        values=(arr[i], arr[j]),
                    )
                    arr[i], arr[j] = arr[j], arr[i]
                recorder.emit(
                    HighlightStep,
                    f"Element {arr[i]} is now in the left partition (≤ pivot)",
                    indices=(i,),
                    highlight_type=HighlightKind.ACTIVE,
                )

        boundary = i + 1
        if boundary != high:
            recorder.emit(
                SwapStep,
                f"Placing pivot {pivot} in its correct position by swapping with "
                f"element at index {boundary}",
                indices=(boundary, high),
                values=(arr[boundary], arr[high]),
            )
            arr[boundary], arr[high] = arr[high], arr[boundary]

        recorder.emit(
            HighlightStep,
            f"Pivot {pivot} is now in its final sorted position at index {boundary}",
            indices=(boundary,),
            highlight_type=HighlightKind.SORTED,
        )
        return boundary

    if len(arr) > 1:
        quick_sort(0, len(arr) - 1)
        recorder.emit(
            HighlightStep,
            "All elements are now sorted",
            indices=tuple(range(len(arr))),
            highlight_type=HighlightKind.SORTED,
        )

    return recorder.steps


INFO = AlgorithmInfo(
    name="Quick Sort",
    category=Category.SORTING,
    time_complexity=TimeComplexity(best="O(n log n)", average="O(n log n)", worst="O(n²)"),
    space_complexity="O(log n)",
    description=(
        "Quick Sort is a divide-and-conquer algorithm that picks a 'pivot' element "
        "and partitions the array around it, placing smaller elements before the "
        "pivot and larger elements after it. It then recursively sorts the sub-arrays."
    ),
    pseudocode=[
        "function quickSort(arr, low, high):",
        "  if low < high:",
        "    pivotIndex = partition(arr, low, high)",
        "    quickSort(arr, low, pivotIndex - 1)",
        "    quickSort(arr, pivotIndex + 1, high)",
        "",
        "function partition(arr, low, high):",
        "  pivot = arr[high]",
        "  i = low - 1",
        "  for j = low to high - 1:",
        "    if arr[j] <= pivot:",
        "      i++",
        "      swap arr[i] and arr[j]",
        "  swap arr[i + 1] and arr[high]",
        "  return i + 1",
    ],
    stable=False,
)
