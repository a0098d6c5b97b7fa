"""Plain-text rendering of tree-shaped structures for debugging."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

N = TypeVar("N")


def _indent(depth: int) -> str:
    if depth <= 0:
        return ""
    return "    " + "|   " * (depth - 1)


@dataclass
class TreePrinter(Generic[N]):
    """Render any tree given accessors for a node's label and children.

    ``max_depth`` limits how deep the rendering goes; a truncated subtree is
    shown as a single ``...`` line. ``None`` means unlimited.
    """

    label: Callable[[N], str]
    children: Callable[[N], Sequence[N]]
    max_depth: Optional[int] = None

    def render(self, node: N | None) -> str:
        if node is None:
            return ""
        lines: List[str] = []
        stack = [(node, 0)]
        while stack:
            current, depth = stack.pop()
            lines.append(_indent(depth) + self.label(current))
            kids = list(self.children(current))
            if not kids:
                continue
            if self.max_depth is not None and depth + 1 >= self.max_depth:
                lines.append(_indent(depth + 1) + "...")
                continue
            stack.extend((child, depth + 1) for child in reversed(kids))
        return "\n".join(lines)


__all__ = ["TreePrinter"]
