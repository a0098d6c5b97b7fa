from __future__ import annotations


class EmptyTreeError(ValueError):
    """Raised when a query is issued against a tree holding no points."""

    def __init__(self, operation: str = "find_nearest") -> None:
        super().__init__(f"Cannot run {operation} on an empty tree.")
        self.operation = operation


class CoverTreeInvariantError(AssertionError):
    """Raised when the tree structure contradicts the covering invariant.

    This signals a defect in the insertion logic (or a metric that is not a
    metric), never bad user input, and is not caught anywhere in the package.
    """


__all__ = ["EmptyTreeError", "CoverTreeInvariantError"]
