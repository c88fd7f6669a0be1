"""Heap sort step generator."""

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

    def heapify(size: int, root: int) -> None:
        largest = root
        left = 2 * root + 1
        right = 2 * root + 2

        recorder.emit(
            HighlightStep,
            f"Heapifying subtree rooted at index {root} (value: {arr[root]})",
            indices=(root,),
            highlight_type=HighlightKind.ACTIVE,
        )

        for side, child in (("Left", left), ("Right", right)):
            if child >= size:
                continue
            recorder.emit(
                CompareStep,
                f"Comparing {side.lower()} child {arr[child]} at index {child} with "
                f"current largest {arr[largest]} at index {largest}",
                indices=(child, largest),
                values=(arr[child], arr[largest]),
            )
            if arr[child] > arr[largest]:
                largest = child
                recorder.emit(
                    HighlightStep,
                    f"{side} child {arr[largest]} is now the largest",
                    indices=(largest,),
                    highlight_type=HighlightKind.PIVOT,
                )

        if largest != root:
            recorder.emit(
                SwapStep,
                f"Swapping {arr[root]} at index {root} with {arr[largest]} at index "
                f"{largest} to maintain heap property",
                indices=(root, largest),
                values=(arr[root], arr[largest]),
            )
            arr[root], arr[largest] = arr[largest], arr[root]
            heapify(size, largest)

    if n == 0:
        return recorder.steps

    recorder.emit(
        HighlightStep,
        "Building max heap from the array",
        indices=tuple(range(n)),
        highlight_type=HighlightKind.PARTITION,
    )
    for i in range(n // 2 - 1, -1, -1):
        heapify(n, i)

    recorder.emit(
        HighlightStep,
        "Max heap has been built. Root contains the maximum element.",
        indices=tuple(range(n)),
        highlight_type=HighlightKind.MERGE,
    )

    for i in range(n - 1, 0, -1):
        recorder.emit(
            SwapStep,
            f"Extracting maximum element {arr[0]} from heap root and placing it at index {i}",
            indices=(0, i),
            values=(arr[0], arr[i]),
        )
        arr[0], arr[i] = arr[i], arr[0]

        recorder.emit(
            HighlightStep,
            f"Element {arr[i]} is now in its final sorted position",
            indices=(i,),
            highlight_type=HighlightKind.SORTED,
        )
        recorder.emit(
            HighlightStep,
            f"Heapifying reduced heap of size {i}",
            indices=tuple(range(i)),
            highlight_type=HighlightKind.ACTIVE,
        )
        heapify(i, 0)

    recorder.emit(
        HighlightStep,
        "All elements are now sorted",
        indices=(0,),
        highlight_type=HighlightKind.SORTED,
    )
    return recorder.steps


INFO = AlgorithmInfo(
    name="Heap Sort",
    category=Category.SORTING,
    time_complexity=TimeComplexity(
        best="O(n log n)", average="O(n log n)", worst="O(n log n)"
    ),
    space_complexity="O(1)",
    description=(
        "Heap Sort works by building a max heap from the input data, then repeatedly "
        "extracting the maximum element from the heap and placing it at the end of "
        "the sorted portion. It uses the heap data structure to efficiently find and "
        "remove the maximum element."
    ),
    pseudocode=[
        "function heapSort(arr):",
        "  buildMaxHeap(arr)",
        "  for i = n-1 down to 1:",
        "    swap arr[0] and arr[i]",
        "    heapify(arr, i, 0)",
        "",
        "function heapify(arr, n, i):",
        "  largest = i",
        "  left = 2*i + 1",
        "  right = 2*i + 2",
        "  if left < n and arr[left] > arr[largest]:",
        "    largest = left",
        "  if right < n and arr[right] > arr[largest]:",
        "    largest = right",
        "  if largest != i:",
        "    swap arr[i] and arr[largest]",
        "    heapify(arr, n, largest)",
    ],
    stable=False,
)
