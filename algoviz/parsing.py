"""Turn user supplied text into generator input."""

from __future__ import annotations

from typing import List

import logging
import re

from algoviz.errors import InvalidInputError
from algoviz.steps import TraversalKind

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[,\s]+")


def parse_values(text: str) -> List[int]:
    """Parse '5, 3, 8' or '5 3 8' into integers. Tokens that are not integers are dropped."""
    values: List[int] = []
    rejected: List[str] = []
    for token in _SEPARATORS.split(text.strip()):
        if not token:
            continue
        try:
            values.append(int(token))
        except ValueError:
            rejected.append(token)
    if rejected:
        logger.warning("Ignoring non-integer values: %s", ", ".join(rejected))
    if not values:
        raise InvalidInputError(f"No integer values found in {text!r}")
    return values


def parse_traversal_kind(text: str) -> TraversalKind:
    key = text.strip().lower().replace("-", "").replace("_", "")
    for kind in TraversalKind:
        if kind.value == key or kind.value == key + "order":
            return kind
    choices = ", ".join(kind.value for kind in TraversalKind)
    raise InvalidInputError(f"Unknown traversal {text!r} (choose from: {choices})")
