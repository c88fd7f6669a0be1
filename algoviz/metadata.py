"""Descriptive metadata attached to every algorithm."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Category(Enum):
    SORTING = "sorting"
    TREE = "tree"


@dataclass(frozen=True)
class TimeComplexity:
    best: str
    average: str
    worst: str


@dataclass(frozen=True)
class AlgorithmInfo:
    """Complexity, stability and pseudocode shown next to an animation."""

    name: str
    category: Category
    time_complexity: TimeComplexity
    space_complexity: str
    description: str
    pseudocode: List[str] = field(default_factory=list)
    stable: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "name": self.name,
            "category": self.category.value,
            "timeComplexity": {
                "best": self.time_complexity.best,
                "average": self.time_complexity.average,
                "worst": self.time_complexity.worst,
            },
            "spaceComplexity": self.space_complexity,
            "description": self.description,
            "pseudocode": list(self.pseudocode),
        }
        if self.stable is not None:
            payload["stable"] = self.stable
        return payload
