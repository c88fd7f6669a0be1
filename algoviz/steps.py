"""Step types recorded by the sorting and tree generators."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar, Union


class StepType(Enum):
    COMPARE = "compare"
    SWAP = "swap"
    OVERWRITE = "overwrite"
    HIGHLIGHT = "highlight"
    MERGE = "merge"
    TREE_INSERT = "tree-insert"
    TREE_DELETE = "tree-delete"
    TREE_ROTATION = "tree-rotation"
    TREE_TRAVERSAL = "tree-traversal"
    TREE_SEARCH = "tree-search"


class HighlightKind(Enum):
    ACTIVE = "active"
    SORTED = "sorted"
    PIVOT = "pivot"
    MERGE = "merge"
    PARTITION = "partition"


class TreePosition(Enum):
    LEFT = "left"
    RIGHT = "right"
    ROOT = "root"


class RotationKind(Enum):
    LEFT = "left"
    RIGHT = "right"
    LEFT_RIGHT = "left-right"
    RIGHT_LEFT = "right-left"


class TraversalKind(Enum):
    INORDER = "inorder"
    PREORDER = "preorder"
    POSTORDER = "postorder"


@dataclass(frozen=True)
class BaseStep:
    """Base class for all step types."""

    id: str
    description: str
    type: StepType = field(init=False)


@dataclass(frozen=True)
class CompareStep(BaseStep):
    """Elements at two indices were compared."""

    type: StepType = field(init=False, default=StepType.COMPARE)
    indices: Tuple[int, int] = (0, 0)
    values: Tuple[int, int] = (0, 0)


@dataclass(frozen=True)
class SwapStep(BaseStep):
    """Elements at two indices exchanged places. Values are pre-swap."""

    type: StepType = field(init=False, default=StepType.SWAP)
    indices: Tuple[int, int] = (0, 0)
    values: Tuple[int, int] = (0, 0)


@dataclass(frozen=True)
class OverwriteStep(BaseStep):
    """In-place write of new_value over old_value."""

    type: StepType = field(init=False, default=StepType.OVERWRITE)
    index: int = 0
    old_value: int = 0
    new_value: int = 0


@dataclass(frozen=True)
class HighlightStep(BaseStep):
    """Marks indices with a display role without changing data."""

    type: StepType = field(init=False, default=StepType.HIGHLIGHT)
    indices: Tuple[int, ...] = ()
    highlight_type: HighlightKind = HighlightKind.ACTIVE


@dataclass(frozen=True)
class MergeStep(BaseStep):
    """Values copied from source positions into target_index during a merge."""

    type: StepType = field(init=False, default=StepType.MERGE)
    source_indices: Tuple[int, ...] = ()
    target_index: int = 0
    values: Tuple[int, ...] = ()


@dataclass(frozen=True)
class TreeInsertStep(BaseStep):
    type: StepType = field(init=False, default=StepType.TREE_INSERT)
    node_id: str = ""
    value: int = 0
    parent_id: Optional[str] = None
    position: TreePosition = TreePosition.ROOT


@dataclass(frozen=True)
class TreeDeleteStep(BaseStep):
    type: StepType = field(init=False, default=StepType.TREE_DELETE)
    node_id: str = ""
    replacement_node_id: Optional[str] = None


@dataclass(frozen=True)
class TreeRotationStep(BaseStep):
    type: StepType = field(init=False, default=StepType.TREE_ROTATION)
    rotation_type: RotationKind = RotationKind.LEFT
    root_node_id: str = ""
    affected_node_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TreeTraversalStep(BaseStep):
    type: StepType = field(init=False, default=StepType.TREE_TRAVERSAL)
    node_id: str = ""
    traversal_type: TraversalKind = TraversalKind.INORDER
    visit_order: int = 0


@dataclass(frozen=True)
class TreeSearchStep(BaseStep):
    """A node was probed while searching. node_id is empty when no node was reached."""

    type: StepType = field(init=False, default=StepType.TREE_SEARCH)
    node_id: str = ""
    found: bool = False
    search_value: int = 0


SortingStep = Union[CompareStep, SwapStep, OverwriteStep, HighlightStep, MergeStep]
TreeStep = Union[TreeInsertStep, TreeDeleteStep, TreeRotationStep, TreeTraversalStep, TreeSearchStep]
Step = Union[SortingStep, TreeStep]

S = TypeVar("S", bound=BaseStep)


class StepRecorder(Generic[S]):
    """Mints sequential step ids for one generator run and collects the steps."""

    def __init__(self) -> None:
        self.steps: List[S] = []

    @property
    def next_id(self) -> str:
        return f"step-{len(self.steps)}"

    def emit(self, step_cls: Type[S], description: str, **payload: Any) -> S:
        step = step_cls(id=self.next_id, description=description, **payload)
        self.steps.append(step)
        return step

    def __len__(self) -> int:
        return len(self.steps)


_WIRE_NAMES = {
    "old_value": "oldValue",
    "new_value": "newValue",
    "highlight_type": "highlightType",
    "source_indices": "sourceIndices",
    "target_index": "targetIndex",
    "node_id": "nodeId",
    "parent_id": "parentId",
    "replacement_node_id": "replacementNodeId",
    "rotation_type": "rotationType",
    "root_node_id": "rootNodeId",
    "affected_node_ids": "affectedNodeIds",
    "traversal_type": "traversalType",
    "visit_order": "visitOrder",
    "search_value": "searchValue",
}

_OPTIONAL_FIELDS = {"parent_id", "replacement_node_id"}


def step_to_dict(step: BaseStep) -> Dict[str, Any]:
    payload: Dict[str, Any] = {}
    for item in fields(step):
        value = getattr(step, item.name)
        if item.name in _OPTIONAL_FIELDS and value is None:
            continue
        payload[_WIRE_NAMES.get(item.name, item.name)] = _plain(value)
    return payload


def trace_to_dicts(steps: Sequence[BaseStep]) -> List[Dict[str, Any]]:
    return [step_to_dict(step) for step in steps]


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return [_plain(item) for item in value]
    return value
