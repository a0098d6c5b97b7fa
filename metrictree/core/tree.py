from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple

from metrictree import config as mt_config
from metrictree.algo.insert import insert_point
from metrictree.core.metrics import Metric, MetricLike, resolve_metric
from metrictree.core.node import CoverTreeNode
from metrictree.diagnostics import log_operation
from metrictree.errors import CoverTreeInvariantError
from metrictree.logging import get_logger
from metrictree.printer import TreePrinter
from metrictree.queries.nearest import NearestResult, nearest

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class TreeStats:
    num_points: int = 0
    height: int = 0
    min_level: int | None = None
    max_level: int | None = None
    max_distance: float = 0.0
    num_insertions: int = 0
    num_raises: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class CoverTree:
    """Cover tree over arbitrary points under a caller-supplied metric.

    The tree is single-threaded: ``insert`` reparents nodes while raising the
    root, so callers sharing a tree must serialise all operations.
    """

    def __init__(
        self,
        metric: MetricLike = None,
        *,
        pruning: str | None = None,
        max_raise_steps: int | None = None,
    ) -> None:
        runtime = mt_config.runtime_config()
        self._metric = resolve_metric(metric)
        self._pruning = mt_config.normalise_pruning(
            runtime.pruning if pruning is None else pruning
        )
        self._max_raise_steps = mt_config.normalise_max_raise_steps(
            runtime.max_raise_steps if max_raise_steps is None else max_raise_steps
        )
        self._root: Optional[CoverTreeNode] = None
        self._max_distance = 0.0
        self._size = 0
        self._num_insertions = 0
        self._num_raises = 0

    @classmethod
    def from_points(
        cls,
        points: Iterable[Any],
        metric: MetricLike = None,
        **kwargs: Any,
    ) -> "CoverTree":
        """Build a tree by inserting ``points`` in the order given."""

        tree = cls(metric, **kwargs)
        with log_operation(LOGGER, "build") as op_log:
            for point in points:
                tree.insert(point)
            if op_log is not None:
                op_log.add_metadata(**tree.stats().as_dict(), pruning=tree.pruning)
        return tree

    # ------------------------------------------------------------------
    # Accessors

    @property
    def root(self) -> Optional[CoverTreeNode]:
        return self._root

    @property
    def metric(self) -> Metric:
        return self._metric

    @property
    def max_distance(self) -> float:
        return self._max_distance

    @property
    def pruning(self) -> str:
        return self._pruning

    def is_empty(self) -> bool:
        return self._root is None

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        if self._root is None:
            return iter(())
        return (node.data for node in self._root.iter_preorder())

    def __repr__(self) -> str:
        return (
            f"CoverTree(metric={self._metric.name!r}, points={self._size}, "
            f"pruning={self._pruning!r})"
        )

    # ------------------------------------------------------------------
    # Mutation

    def insert(self, point: Any) -> None:
        if self._root is None:
            self._root = CoverTreeNode(point, 0)
            self._max_distance = 0.0
            self._size = 1
            self._num_insertions += 1
            return
        root_distance = self._metric(self._root.data, point)
        if root_distance > self._max_distance:
            self._max_distance = root_distance
        result = insert_point(
            self._root,
            point,
            self._metric,
            root_distance=root_distance,
            max_raise_steps=self._max_raise_steps,
        )
        self._root = result.root
        self._size += 1
        self._num_insertions += 1
        self._num_raises += result.raises
        LOGGER.debug(
            "inserted point at depth %d (wrapped=%s, raises=%d, size=%d)",
            result.depth,
            result.wrapped,
            result.raises,
            self._size,
        )

    def clear(self) -> None:
        """Drop every point; lifetime insertion and raise counters are kept."""

        self._root = None
        self._max_distance = 0.0
        self._size = 0

    # ------------------------------------------------------------------
    # Queries

    def find_nearest(self, query: Any) -> Any:
        """Return the stored point closest to ``query``.

        Raises `EmptyTreeError` when the tree holds no points.
        """

        return self._search(query).point

    def find_nearest_with_distance(self, query: Any) -> Tuple[Any, float]:
        result = self._search(query)
        return result.point, result.distance

    def _search(self, query: Any) -> NearestResult:
        return nearest(
            self._root,
            query,
            self._metric,
            pruning=self._pruning,
            global_bound=self._max_distance,
        )

    # ------------------------------------------------------------------
    # Diagnostics

    def validate(self) -> None:
        """Raise `CoverTreeInvariantError` if any child escapes its parent's cover."""

        if self._root is None:
            return
        for parent in self._root.iter_preorder():
            limit = parent.cover_distance
            for child in parent.children:
                separation = self._metric(parent.data, child.data)
                if separation > limit:
                    raise CoverTreeInvariantError(
                        f"Child {child.data!r} (level {child.level}) lies {separation!r} from "
                        f"parent {parent.data!r} (level {parent.level}); cover distance is {limit!r}."
                    )

    def stats(self) -> TreeStats:
        if self._root is None:
            return TreeStats(num_insertions=self._num_insertions, num_raises=self._num_raises)
        height = 0
        min_level = max_level = self._root.level
        stack = [(self._root, 1)]
        while stack:
            node, depth = stack.pop()
            height = max(height, depth)
            min_level = min(min_level, node.level)
            max_level = max(max_level, node.level)
            stack.extend((child, depth + 1) for child in node.children)
        return TreeStats(
            num_points=self._size,
            height=height,
            min_level=min_level,
            max_level=max_level,
            max_distance=self._max_distance,
            num_insertions=self._num_insertions,
            num_raises=self._num_raises,
        )

    def debug_string(self, max_depth: int | None = None) -> str:
        printer: TreePrinter[CoverTreeNode] = TreePrinter(
            label=str,
            children=lambda node: node.children,
            max_depth=max_depth,
        )
        return printer.render(self._root)


def build(points: Iterable[Any], metric: MetricLike = None, **kwargs: Any) -> CoverTree:
    """Construct a `CoverTree` from ``points`` inserted in order."""

    return CoverTree.from_points(points, metric, **kwargs)


__all__ = ["CoverTree", "TreeStats", "build"]
