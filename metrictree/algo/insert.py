from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from metrictree.core.metrics import Metric
from metrictree.core.node import CoverTreeNode, covering_level
from metrictree.errors import CoverTreeInvariantError
from metrictree.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass
class InsertResult:
    """Outcome of placing one point below an existing root."""

    root: CoverTreeNode
    raises: int = 0
    depth: int = 0
    wrapped: bool = False


def raise_node(node: CoverTreeNode, metric: Metric) -> CoverTreeNode:
    """Lift ``node`` one step and return the node now standing in its place.

    A childless node simply gains a level. Otherwise its first child is
    detached and promoted, and ``node`` is re-attached as the promoted node's
    last child. The promoted level never drops below ``node.level`` so the
    re-attached node stays covered.
    """

    if node.is_leaf():
        node.level += 1
        return node
    promoted = node.children.pop(0)
    separation = metric(promoted.data, node.data)
    promoted.add_child(node)
    promoted.level = max(promoted.level + 1, node.level)
    promoted.max_distance = max(promoted.max_distance, separation + node.max_distance)
    return promoted


def _insert_covered(
    node: CoverTreeNode,
    point: Any,
    distance: float,
    metric: Metric,
) -> int:
    """Place ``point`` somewhere below ``node``; return the depth it landed at.

    ``distance`` is ``metric(node.data, point)`` and must already be within the
    node's cover distance.
    """

    depth = 1
    while True:
        if distance > node.cover_distance:
            raise CoverTreeInvariantError(
                f"Insertion violates covering invariant at level {node.level}: "
                f"distance {distance!r} exceeds cover distance {node.cover_distance!r}."
            )
        node.max_distance = max(node.max_distance, distance)
        for child in node.children:
            child_distance = metric(child.data, point)
            if child_distance <= child.cover_distance:
                node, distance = child, child_distance
                depth += 1
                break
        else:
            node.add_child(CoverTreeNode(point, node.level - 1))
            return depth


def insert_point(
    root: CoverTreeNode,
    point: Any,
    metric: Metric,
    *,
    root_distance: float,
    max_raise_steps: int = 0,
) -> InsertResult:
    """Insert ``point`` below ``root`` and return the (possibly new) root.

    ``root_distance`` is ``metric(root.data, point)``, already computed by the
    caller for its running distance bound. ``max_raise_steps == 0`` leaves the
    raise loop uncapped.
    """

    node = root
    distance = root_distance
    if distance <= node.cover_distance:
        depth = _insert_covered(node, point, distance, metric)
        return InsertResult(root=node, depth=depth)

    steps = 0
    while distance > 2 * node.cover_distance:
        if max_raise_steps and steps >= max_raise_steps:
            raise CoverTreeInvariantError(
                f"Raise loop did not converge after {steps} steps "
                f"(distance {distance!r}, level {node.level})."
            )
        raised = raise_node(node, metric)
        steps += 1
        if raised is not node:
            distance = metric(point, raised.data)
        node = raised
    if steps:
        LOGGER.debug("raised root %d times to level %d", steps, node.level)

    wrapper = CoverTreeNode(
        point,
        covering_level(distance, minimum=node.level + 1),
        children=[node],
        max_distance=distance + node.max_distance,
    )
    return InsertResult(root=wrapper, raises=steps, depth=0, wrapped=True)


__all__ = ["InsertResult", "insert_point", "raise_node"]
