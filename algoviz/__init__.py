"""Step-by-step traces of classic sorting and binary tree algorithms."""

from .errors import (
    AlgovizError,
    InvalidInputError,
    TraceError,
    UnknownAlgorithmError,
    UnsupportedOperationError,
)
from .metadata import AlgorithmInfo, Category, TimeComplexity
from .registry import (
    SORTING_ALGORITHMS,
    SORTING_DATASETS,
    TREE_ALGORITHMS,
    TREE_DATASETS,
    build_tree_algorithms,
    get_dataset,
    get_sorting_algorithm,
    get_tree_algorithm,
    list_algorithms,
)
from .steps import Step, StepType, step_to_dict, trace_to_dicts
from .trees import AVLStepGenerator, BSTStepGenerator, TreeNode, TreeResult

__version__ = "0.1.0"

__all__ = [
    "AVLStepGenerator",
    "AlgorithmInfo",
    "AlgovizError",
    "BSTStepGenerator",
    "Category",
    "InvalidInputError",
    "SORTING_ALGORITHMS",
    "SORTING_DATASETS",
    "Step",
    "StepType",
    "TREE_ALGORITHMS",
    "TREE_DATASETS",
    "TimeComplexity",
    "TraceError",
    "TreeNode",
    "TreeResult",
    "UnknownAlgorithmError",
    "UnsupportedOperationError",
    "build_tree_algorithms",
    "get_dataset",
    "get_sorting_algorithm",
    "get_tree_algorithm",
    "list_algorithms",
    "step_to_dict",
    "trace_to_dicts",
]
