"""Merge sort step generator."""

from __future__ import annotations

from typing import List, Sequence

from algoviz.metadata import AlgorithmInfo, Category, TimeComplexity
from algoviz.steps import (
    CompareStep,
    HighlightKind,
    HighlightStep,
    MergeStep,
    SortingStep,
    StepRecorder,
)


def get_steps(values: Sequence[int]) -> List[SortingStep]:
    recorder: StepRecorder[SortingStep] = StepRecorder()
    arr = list(values)

    def merge_sort(left: int, right: int) -> None:
        if left >= right:
            return
        mid = (left + right) // 2
        recorder.emit(
            HighlightStep,
            f"Dividing array from index {left} to {right} at midpoint {mid}",
            indices=_span(left, right),
            highlight_type=HighlightKind.PARTITION,
        )
        merge_sort(left, mid)
        merge_sort(mid + 1, right)
        merge(left, mid, right)

    def merge(left: int, mid: int, right: int) -> None:
        left_arr = arr[left : mid + 1]
        right_arr = arr[mid + 1 : right + 1]
        recorder.emit(
            HighlightStep,
            f"Merging left subarray {_fmt(left_arr)} with right subarray {_fmt(right_arr)}",
            indices=_span(left, right),
            highlight_type=HighlightKind.MERGE,
        )

        i = j = 0
        k = left
        while i < len(left_arr) and j < len(right_arr):
            recorder.emit(
                CompareStep,
                f"Comparing {left_arr[i]} from left array with {right_arr[j]} from right array",
                indices=(left + i, mid + 1 + j),
                values=(left_arr[i], right_arr[j]),
            )
            # <= keeps equal elements in their left-half order
            if left_arr[i] <= right_arr[j]:
                place(left + i, k, left_arr[i], f"Placing {left_arr[i]} at position {k}")
                i += 1
            else:
                place(mid + 1 + j, k, right_arr[j], f"Placing {right_arr[j]} at position {k}")
                j += 1
            k += 1

        while i < len(left_arr):
            place(
                left + i,
                k,
                left_arr[i],
                f"Placing remaining element {left_arr[i]} at position {k}",
            )
            i += 1
            k += 1

        while j < len(right_arr):
            place(
                mid + 1 + j,
                k,
                right_arr[j],
                f"Placing remaining element {right_arr[j]} at position {k}",
            )
            j += 1
            k += 1

        recorder.emit(
            HighlightStep,
            f"Subarray from {left} to {right} is now merged and sorted",
            indices=_span(left, right),
            highlight_type=HighlightKind.SORTED,
        )

    def place(source: int, target: int, value: int, description: str) -> None:
        recorder.emit(
            MergeStep,
            description,
            source_indices=(source,),
            target_index=target,
            values=(value,),
        )
        arr[target] = value

    if len(arr) > 1:
        merge_sort(0, len(arr) - 1)

    return recorder.steps


def _span(low: int, high: int) -> tuple:
    return tuple(range(low, high + 1))


def _fmt(values: List[int]) -> str:
    return "[" + ", ".join(str(value) for value in values) + "]"


INFO = AlgorithmInfo(
    name="Merge Sort",
    category=Category.SORTING,
    time_complexity=TimeComplexity(
        best="O(n log n)", average="O(n log n)", worst="O(n log n)"
    ),
    space_complexity="O(n)",
    description=(
        "Merge Sort is a divide-and-conquer algorithm that divides the input array "
        "into two halves, recursively sorts them, and then merges the two sorted "
        "halves. It guarantees O(n log n) time complexity in all cases."
    ),
    pseudocode=[
        "function mergeSort(arr, left, right):",
        "  if left < right:",
        "    mid = (left + right) / 2",
        "    mergeSort(arr, left, mid)",
        "    mergeSort(arr, mid+1, right)",
        "    merge(arr, left, mid, right)",
    ],
    stable=True,
)
