from __future__ import annotations

import logging
from dataclasses import dataclass
from operator import itemgetter
from typing import Any, Iterator, List, Tuple

from metrictree.core.metrics import Metric
from metrictree.core.node import CoverTreeNode
from metrictree.diagnostics import log_operation
from metrictree.errors import EmptyTreeError
from metrictree.logging import get_logger

LOGGER = get_logger(__name__)

_by_distance = itemgetter(0)


@dataclass(frozen=True)
class NearestResult:
    point: Any
    distance: float
    visited: int
    pruned: int


def _ordered_children(
    node: CoverTreeNode, query: Any, metric: Metric
) -> Iterator[Tuple[float, CoverTreeNode]]:
    """Children nearest-first, as a transient copy; ``node.children`` is untouched."""

    scored: List[Tuple[float, CoverTreeNode]] = [
        (metric(child.data, query), child) for child in node.children
    ]
    scored.sort(key=_by_distance)
    return iter(scored)


def nearest(
    root: CoverTreeNode | None,
    query: Any,
    metric: Metric,
    *,
    pruning: str,
    global_bound: float = 0.0,
) -> NearestResult:
    """Depth-first branch-and-bound search for the point closest to ``query``.

    ``pruning="root"`` descends into a child only while
    ``d(best, query) > d(child, best) - global_bound``, with ``global_bound``
    the tree-wide maximum distance from the root. This bound is a heuristic:
    it can both over- and under-prune, so results are approximate.

    ``pruning="subtree"`` uses each child's own ``max_distance`` and the
    canonical test ``d(best, query) > d(child, query) - child.max_distance``,
    which is exact whenever the metric obeys the triangle inequality.

    Equidistant candidates keep the first one reached (parents before
    children, children nearest-first).
    """

    if root is None:
        raise EmptyTreeError("find_nearest")
    if pruning not in {"root", "subtree"}:
        raise ValueError(f"Unsupported pruning mode '{pruning}'.")
    with log_operation(LOGGER, "find_nearest", level=logging.DEBUG) as op_log:
        result = _nearest_impl(root, query, metric, pruning=pruning, global_bound=global_bound)
        if op_log is not None:
            op_log.add_metadata(
                visited=result.visited,
                pruned=result.pruned,
                pruning=pruning,
                distance=result.distance,
            )
        return result


def _nearest_impl(
    root: CoverTreeNode,
    query: Any,
    metric: Metric,
    *,
    pruning: str,
    global_bound: float,
) -> NearestResult:
    best = root.data
    best_distance = metric(best, query)
    visited = 1
    pruned = 0
    stack = [_ordered_children(root, query, metric)]
    while stack:
        try:
            child_distance, child = next(stack[-1])
        except StopIteration:
            stack.pop()
            continue

        if pruning == "root":
            lower = metric(child.data, best) - global_bound
        else:
            lower = child_distance - child.max_distance
        if not best_distance > lower:
            pruned += 1
            continue

        visited += 1
        if child_distance < best_distance:
            best, best_distance = child.data, child_distance
        if not child.is_leaf():
            stack.append(_ordered_children(child, query, metric))

    return NearestResult(point=best, distance=best_distance, visited=visited, pruned=pruned)


__all__ = ["NearestResult", "nearest"]
