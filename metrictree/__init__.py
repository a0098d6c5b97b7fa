"""metrictree: cover tree nearest-neighbour search under any metric.

Quick Start
-----------
>>> from metrictree import build
>>>
>>> tree = build([0.0, 1.0, 2.0, 5.0, 20.0], metric="absolute")
>>> tree.find_nearest(3.0)
2.0

Custom metrics
--------------
Any callable ``(a, b) -> float`` works as a metric, so points can be of any
type (colours, strings, records):

>>> tree = build(["kitten", "sitting"], metric=lambda a, b: float(a != b))

Classes
-------
CoverTree : Insert points one at a time and query the nearest stored point.
Metric : Named distance function; see ``available_metrics()``.
TreePrinter : Indented text rendering used by ``CoverTree.debug_string``.
"""

from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("metrictree")
except Exception:  # pragma: no cover - best effort during local development
    __version__ = "0.1.0"

from .core import (
    SPAN_FACTOR,
    CoverTree,
    CoverTreeNode,
    Metric,
    MetricRegistry,
    TreeStats,
    available_metrics,
    build,
    cover_distance,
    get_metric,
    register_metric,
    resolve_metric,
)
from .errors import CoverTreeInvariantError, EmptyTreeError
from .printer import TreePrinter

__all__ = [
    "__version__",
    "SPAN_FACTOR",
    "CoverTree",
    "CoverTreeNode",
    "TreeStats",
    "build",
    "cover_distance",
    "Metric",
    "MetricRegistry",
    "available_metrics",
    "get_metric",
    "register_metric",
    "resolve_metric",
    "CoverTreeInvariantError",
    "EmptyTreeError",
    "TreePrinter",
]
