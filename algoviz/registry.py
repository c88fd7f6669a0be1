"""Lookup tables mapping algorithm ids to generators, metadata and preset inputs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

import logging
import random

from algoviz.errors import UnknownAlgorithmError, UnsupportedOperationError
from algoviz.metadata import AlgorithmInfo, Category
from algoviz.sorting import bubble, heap, insertion, merge, quick, selection
from algoviz.steps import SortingStep
from algoviz.trees import avl, bst
from algoviz.trees.avl import AVLStepGenerator
from algoviz.trees.bst import BSTStepGenerator

logger = logging.getLogger(__name__)

TREE_OPERATIONS = ("insert", "delete", "search", "traversal", "create_balanced")


@dataclass(frozen=True)
class SortingAlgorithm:
    id: str
    name: str
    get_steps: Callable[[Sequence[int]], List[SortingStep]]
    info: AlgorithmInfo


@dataclass(frozen=True)
class TreeOperations:
    """Operations one tree kind exposes. Missing operations stay None."""

    insert: Optional[Callable] = None
    delete: Optional[Callable] = None
    search: Optional[Callable] = None
    traversal: Optional[Callable] = None
    create_balanced: Optional[Callable] = None

    def supports(self, name: str) -> bool:
        return getattr(self, name, None) is not None

    def available(self) -> List[str]:
        return [name for name in TREE_OPERATIONS if self.supports(name)]


@dataclass(frozen=True)
class TreeAlgorithm:
    id: str
    name: str
    info: AlgorithmInfo
    operations: TreeOperations

    def operation(self, name: str) -> Callable:
        if name not in TREE_OPERATIONS or not self.operations.supports(name):
            raise UnsupportedOperationError(self.id, name)
        return getattr(self.operations, name)


SORTING_ALGORITHMS: Dict[str, SortingAlgorithm] = {
    module_id: SortingAlgorithm(
        id=module_id, name=module.INFO.name, get_steps=module.get_steps, info=module.INFO
    )
    for module_id, module in (
        ("bubble", bubble),
        ("selection", selection),
        ("insertion", insertion),
        ("merge", merge),
        ("quick", quick),
        ("heap", heap),
    )
}


def build_tree_algorithms(
    bst_generator: Optional[BSTStepGenerator] = None,
    avl_generator: Optional[AVLStepGenerator] = None,
) -> Dict[str, TreeAlgorithm]:
    """Bundle tree operations around generator sessions, each owning its node-id counter."""
    bst_generator = bst_generator or BSTStepGenerator()
    avl_generator = avl_generator or AVLStepGenerator()
    return {
        "bst": TreeAlgorithm(
            id="bst",
            name=bst.INFO.name,
            info=bst.INFO,
            operations=TreeOperations(
                insert=bst_generator.insert,
                delete=bst_generator.delete,
                search=bst_generator.search,
                traversal=bst_generator.traversal,
            ),
        ),
        "avl": TreeAlgorithm(
            id="avl",
            name=avl.INFO.name,
            info=avl.INFO,
            operations=TreeOperations(
                insert=avl_generator.insert,
                create_balanced=avl_generator.create_balanced,
            ),
        ),
    }


TREE_ALGORITHMS: Dict[str, TreeAlgorithm] = build_tree_algorithms()


def get_sorting_algorithm(algorithm_id: str) -> SortingAlgorithm:
    key = algorithm_id.strip().lower()
    try:
        return SORTING_ALGORITHMS[key]
    except KeyError:
        logger.debug("No sorting algorithm registered as %r", algorithm_id)
        raise UnknownAlgorithmError(algorithm_id, list(SORTING_ALGORITHMS)) from None


def get_tree_algorithm(
    algorithm_id: str, algorithms: Optional[Dict[str, TreeAlgorithm]] = None
) -> TreeAlgorithm:
    algorithms = TREE_ALGORITHMS if algorithms is None else algorithms
    key = algorithm_id.strip().lower()
    try:
        return algorithms[key]
    except KeyError:
        logger.debug("No tree algorithm registered as %r", algorithm_id)
        raise UnknownAlgorithmError(algorithm_id, list(algorithms)) from None


def get_info(algorithm_id: str) -> AlgorithmInfo:
    key = algorithm_id.strip().lower()
    if key in SORTING_ALGORITHMS:
        return SORTING_ALGORITHMS[key].info
    if key in TREE_ALGORITHMS:
        return TREE_ALGORITHMS[key].info
    raise UnknownAlgorithmError(algorithm_id, list(SORTING_ALGORITHMS) + list(TREE_ALGORITHMS))


def list_algorithms() -> List[AlgorithmInfo]:
    return [a.info for a in SORTING_ALGORITHMS.values()] + [
        a.info for a in TREE_ALGORITHMS.values()
    ]


def algorithm_ids(category: Optional[Category] = None) -> List[str]:
    ids: List[str] = []
    if category in (None, Category.SORTING):
        ids.extend(SORTING_ALGORITHMS)
    if category in (None, Category.TREE):
        ids.extend(TREE_ALGORITHMS)
    return ids


# ===== Preset datasets =====

SORTING_DATASETS: Dict[str, List[int]] = {
    "small": [64, 34, 25, 12, 22, 11, 90],
    "medium": [64, 34, 25, 12, 22, 11, 90, 5, 77, 30, 45, 88],
    "reversed": list(range(20, 0, -1)),
    "nearly-sorted": [1, 2, 3, 4, 5, 7, 6, 8, 9, 10, 11, 12],
    "duplicates": [5, 2, 8, 2, 9, 1, 5, 5, 2, 8],
}

AVL_DATASETS: Dict[str, List[int]] = {
    "simple": [10, 20, 30, 40, 50, 25],
    "left-heavy": [50, 40, 30, 20, 10],
    "right-heavy": [10, 20, 30, 40, 50],
    "balanced": [25, 15, 35, 10, 20, 30, 40],
    "complex": [10, 5, 15, 2, 7, 12, 20, 1, 3, 6, 8, 11, 13, 17, 25],
}

TREE_DATASETS: Dict[str, List[int]] = {
    "small": [50, 30, 70, 20, 40, 60, 80],
    "medium": [50, 30, 70, 20, 40, 60, 80, 10, 25, 35, 45],
    "large": [50, 30, 70, 20, 40, 60, 80, 10, 25, 35, 45, 55, 65, 75, 85],
    "unbalanced": list(range(1, 11)),
    "bst-balanced": [50, 25, 75, 12, 37, 62, 87, 6, 18, 31, 43],
    "duplicate-test": [5, 3, 7, 3, 8, 1, 9],
    **AVL_DATASETS,
}


def random_values(
    size: int = 20, low: int = 1, high: int = 100, rng: Optional[random.Random] = None
) -> List[int]:
    rng = rng or random.Random()
    return [rng.randint(low, high) for _ in range(size)]


def get_dataset(
    category: Category, name: str, rng: Optional[random.Random] = None
) -> List[int]:
    """Return a fresh copy of a preset. The sorting 'large' preset is random."""
    key = name.strip().lower()
    if category is Category.SORTING:
        if key == "large":
            return random_values(size=20, rng=rng)
        presets = SORTING_DATASETS
    else:
        presets = TREE_DATASETS
    if key not in presets:
        known = list(presets) + (["large"] if category is Category.SORTING else [])
        raise UnknownAlgorithmError(name, known, kind="dataset")
    return list(presets[key])


def dataset_names(category: Category) -> List[str]:
    if category is Category.SORTING:
        return list(SORTING_DATASETS) + ["large"]
    return list(TREE_DATASETS)
