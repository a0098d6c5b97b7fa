"""Core data structures for the cover tree."""

from .metrics import (
    Metric,
    MetricRegistry,
    available_metrics,
    get_metric,
    register_metric,
    resolve_metric,
)
from .node import SPAN_FACTOR, CoverTreeNode, cover_distance
from .tree import CoverTree, TreeStats, build

__all__ = [
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
]
