from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple, Union

import numpy as np

from metrictree import config as mt_config

DistanceFn = Callable[[Any, Any], float]


@dataclass(frozen=True)
class Metric:
    """Named distance capability consumed by the tree algorithms.

    The tree never inspects points; it only calls ``distance(a, b)``, which is
    expected to be non-negative and symmetric. The triangle inequality is
    assumed by nearest-neighbour pruning but never checked, and NaN or
    infinite outputs are not validated.
    """

    name: str
    distance: DistanceFn

    def __call__(self, lhs: Any, rhs: Any) -> float:
        return self.distance(lhs, rhs)


class MetricRegistry:
    """Minimal registry for runtime-selectable metrics."""

    def __init__(self) -> None:
        self._metrics: Dict[str, Metric] = {}

    def register(self, metric: Metric, *, overwrite: bool = False) -> None:
        name = metric.name.lower()
        if not overwrite and name in self._metrics:
            raise ValueError(f"Metric '{metric.name}' already registered.")
        self._metrics[name] = metric

    def get(self, name: str) -> Metric:
        key = name.lower()
        if key not in self._metrics:
            raise KeyError(f"Metric '{name}' not registered.")
        return self._metrics[key]

    def names(self) -> Tuple[str, ...]:
        return tuple(sorted(self._metrics.keys()))


def _as_vectors(lhs: Any, rhs: Any) -> Tuple[np.ndarray, np.ndarray]:
    lhs_arr = np.asarray(lhs, dtype=np.float64)
    rhs_arr = np.asarray(rhs, dtype=np.float64)
    if lhs_arr.shape != rhs_arr.shape:
        raise ValueError(
            f"Metric operands must have identical shapes, got {lhs_arr.shape} and {rhs_arr.shape}."
        )
    return lhs_arr, rhs_arr


def _euclidean(lhs: Any, rhs: Any) -> float:
    lhs_arr, rhs_arr = _as_vectors(lhs, rhs)
    diff = lhs_arr - rhs_arr
    return float(np.sqrt(np.sum(diff * diff)))


def _manhattan(lhs: Any, rhs: Any) -> float:
    lhs_arr, rhs_arr = _as_vectors(lhs, rhs)
    return float(np.sum(np.abs(lhs_arr - rhs_arr)))


def _chebyshev(lhs: Any, rhs: Any) -> float:
    lhs_arr, rhs_arr = _as_vectors(lhs, rhs)
    if lhs_arr.size == 0:
        return 0.0
    return float(np.max(np.abs(lhs_arr - rhs_arr)))


def _absolute(lhs: Any, rhs: Any) -> float:
    return abs(float(lhs) - float(rhs))


def _load_registry() -> MetricRegistry:
    registry = MetricRegistry()
    registry.register(Metric(name="euclidean", distance=_euclidean))
    registry.register(Metric(name="manhattan", distance=_manhattan))
    registry.register(Metric(name="chebyshev", distance=_chebyshev))
    registry.register(Metric(name="absolute", distance=_absolute))
    return registry


_REGISTRY = _load_registry()

MetricLike = Union[None, str, Metric, DistanceFn]


def get_metric(name: str | None = None) -> Metric:
    """Return a registered metric, defaulting to the runtime-selected metric."""

    if name is None:
        name = mt_config.runtime_config().metric
    return _REGISTRY.get(name)


def register_metric(metric: Metric, *, overwrite: bool = False) -> None:
    _REGISTRY.register(metric, overwrite=overwrite)


def available_metrics() -> Tuple[str, ...]:
    return _REGISTRY.names()


def resolve_metric(metric: MetricLike) -> Metric:
    """Coerce a name, `Metric`, plain callable or ``None`` into a `Metric`."""

    if metric is None or isinstance(metric, str):
        return get_metric(metric)
    if isinstance(metric, Metric):
        return metric
    if callable(metric):
        return Metric(name="custom", distance=metric)
    raise TypeError(f"Expected a metric name or callable, got {type(metric).__name__}.")


__all__ = [
    "DistanceFn",
    "Metric",
    "MetricLike",
    "MetricRegistry",
    "available_metrics",
    "get_metric",
    "register_metric",
    "resolve_metric",
]
