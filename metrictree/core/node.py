from __future__ import annotations

from typing import Any, Iterator, List

SPAN_FACTOR = 1.3


def cover_distance(level: int) -> float:
    """Maximum distance from a node at ``level`` to any of its direct children."""

    return SPAN_FACTOR ** level


def covering_level(distance: float, *, minimum: int) -> int:
    """Smallest level ``>= minimum`` whose cover distance reaches ``distance``."""

    level = minimum
    while cover_distance(level) < distance:
        level += 1
    return level


class CoverTreeNode:
    """One vertex of a cover tree.

    ``children`` is owned exclusively by this node; nodes are never shared
    between parents. ``max_distance`` is an upper bound on the distance from
    ``data`` to any descendant, kept current by every insertion path.
    """

    __slots__ = ("data", "level", "children", "max_distance")

    def __init__(
        self,
        data: Any,
        level: int,
        children: List["CoverTreeNode"] | None = None,
        max_distance: float = 0.0,
    ) -> None:
        self.data = data
        self.level = int(level)
        self.children: List[CoverTreeNode] = [] if children is None else children
        self.max_distance = float(max_distance)

    @property
    def cover_distance(self) -> float:
        return cover_distance(self.level)

    def is_leaf(self) -> bool:
        return not self.children

    def add_child(self, child: "CoverTreeNode") -> None:
        self.children.append(child)

    def iter_preorder(self) -> Iterator["CoverTreeNode"]:
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __repr__(self) -> str:
        return f"CoverTreeNode(data={self.data!r}, level={self.level}, children={len(self.children)})"

    def __str__(self) -> str:
        return str(self.data)


__all__ = ["SPAN_FACTOR", "CoverTreeNode", "cover_distance", "covering_level"]
