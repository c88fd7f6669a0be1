"""Exception types raised at the edges of the step engine."""

from __future__ import annotations


class AlgovizError(Exception):
    """Base class for every error raised by algoviz."""


class UnknownAlgorithmError(AlgovizError, LookupError):
    def __init__(
        self, algorithm_id: str, known: list[str] | None = None, kind: str = "algorithm"
    ):
        self.algorithm_id = algorithm_id
        self.known = sorted(known or [])
        message = f"Unknown {kind}: {algorithm_id}"
        if self.known:
            message += f" (choose from: {', '.join(self.known)})"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class UnsupportedOperationError(AlgovizError):
    def __init__(self, algorithm_id: str, operation: str):
        self.algorithm_id = algorithm_id
        self.operation = operation
        super().__init__(f"{algorithm_id} does not support the {operation} operation")


class InvalidInputError(AlgovizError, ValueError):
    """User supplied text could not be turned into algorithm input."""


class TraceError(AlgovizError):
    """A step trace violates its sequencing rules."""
