"""Operation-level timing and resource logging.

Usage mirrors the call sites in `metrictree.core.tree` and
`metrictree.queries.nearest`::

    with log_operation(LOGGER, "build") as op_log:
        ...
        op_log.add_metadata(points=n)

A single record of the form ``op=<name> wall_ms=... cpu_user_ms=...
rss_delta=... key=value`` is emitted when the block exits normally.
"""

from __future__ import annotations

import logging
import resource
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator

import psutil

from metrictree import config as mt_config


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float):
        return f"{value:.3f}"
    return str(value)


def _rss_bytes() -> int:
    return int(psutil.Process().memory_info().rss)


def _cpu_user_seconds() -> float:
    return float(resource.getrusage(resource.RUSAGE_SELF).ru_utime)


@dataclass
class OperationLog:
    """Collects metadata for one logged operation."""

    op: str
    measure_resources: bool
    metadata: Dict[str, Any] = field(default_factory=dict)
    _wall_start: float = 0.0
    _cpu_start: float | None = None
    _rss_start: int | None = None

    def start(self) -> None:
        self._wall_start = time.perf_counter()
        if self.measure_resources:
            self._cpu_start = _cpu_user_seconds()
            self._rss_start = _rss_bytes()

    def add_metadata(self, **values: Any) -> None:
        self.metadata.update(values)

    def render(self) -> str:
        wall_ms = (time.perf_counter() - self._wall_start) * 1e3
        parts = [f"op={self.op}", f"wall_ms={wall_ms:.3f}"]
        if self._cpu_start is not None and self._rss_start is not None:
            cpu_ms = (_cpu_user_seconds() - self._cpu_start) * 1e3
            rss_delta = _rss_bytes() - self._rss_start
            parts.append(f"cpu_user_ms={cpu_ms:.3f}")
            parts.append(f"rss_delta={rss_delta}")
        else:
            parts.append("cpu_user_ms=NA")
            parts.append("rss_delta=NA")
        for key, value in self.metadata.items():
            parts.append(f"{key}={_format_value(value)}")
        return " ".join(parts)


@contextmanager
def log_operation(
    logger: logging.Logger,
    op: str,
    *,
    level: int = logging.INFO,
) -> Iterator[OperationLog | None]:
    """Time the enclosed block and log a one-line summary.

    Yields ``None`` when ``logger`` is not enabled for ``level`` so callers can
    skip collecting metadata entirely.
    """

    if not logger.isEnabledFor(level):
        yield None
        return
    runtime = mt_config.runtime_config()
    op_log = OperationLog(op=op, measure_resources=runtime.enable_diagnostics)
    op_log.start()
    yield op_log
    logger.log(level, op_log.render())


__all__ = ["OperationLog", "log_operation"]
